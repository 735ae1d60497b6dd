"""Loan commands."""

import click

from balancebook.cli.error_handling import build_service, handle_domain_error
from balancebook.cli.parsing import amount_or_exit, date_or_exit
from balancebook.cli.person_resolution import resolve_person_or_exit
from balancebook.domain.errors import DomainError
from balancebook.domain.loan import LoanService
from balancebook.domain.person import PersonService
from balancebook.utils.amount_parser import format_cents


@click.group()
def loan_group():
    """Manage money lent and borrowed."""
    pass


@loan_group.command("create")
@click.option("--description", required=True, help="Loan description")
@click.option("--amount", required=True, help="Principal (e.g., 1000.00)")
@click.option(
    "--type",
    "loan_type",
    type=click.Choice(["lent", "borrowed"]),
    required=True,
    help="lent: they owe you; borrowed: you owe them",
)
@click.option("--person", required=True, help="Counterparty name, document or ID")
@click.option("--start-date", default="today", show_default=True, help="Date of the loan")
@click.option("--due-date", help="Final due date")
@click.option("--interest-rate", type=float, help="Interest rate (informational)")
@click.option("--notes", help="Notes")
@click.pass_context
def create_loan(ctx, description, amount, loan_type, person, start_date, due_date, interest_rate, notes):
    """Create a loan.

    Examples:
        balancebook loan create --description "Car repair" --amount 2000 --type lent --person "Joao"
    """
    service = build_service(ctx, LoanService)
    cents = amount_or_exit(ctx, amount)
    start = date_or_exit(ctx, start_date)
    due = date_or_exit(ctx, due_date)
    person_id = resolve_person_or_exit(ctx, build_service(ctx, PersonService), person)

    try:
        loan_id = service.create_loan(
            description=description,
            total_amount=cents,
            type=loan_type,
            person_id=person_id,
            start_date=start,
            due_date=due,
            interest_rate=interest_rate,
            notes=notes,
        )
        click.echo(f"Created {loan_type} loan '{description}' (ID: {loan_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@loan_group.command("list")
@click.option("--type", "loan_type", type=click.Choice(["lent", "borrowed"]), help="Filter by type")
@click.option("--status", type=click.Choice(["active", "paid", "overdue"]), help="Filter by status")
@click.option("--person", help="Filter by person name, document or ID")
@click.pass_context
def list_loans(ctx, loan_type, status, person):
    """List loans ordered by start date."""
    service = build_service(ctx, LoanService)
    person_id = None
    if person is not None:
        person_id = resolve_person_or_exit(ctx, build_service(ctx, PersonService), person)

    loans = service.list_loans(type=loan_type, status=status, person_id=person_id)
    if not loans:
        click.echo("No loans found.")
        return

    click.echo("\nLoans:")
    click.echo("-" * 90)
    for loan in loans:
        click.echo(
            f"ID: {loan.id:3d} | {loan.start_date} | {loan.type.value:8s} | "
            f"Remaining: {format_cents(loan.remaining_amount):>12s} of "
            f"{format_cents(loan.total_amount):>12s} | {loan.status.value:7s} | {loan.description}"
        )


@loan_group.command("show")
@click.argument("loan_id", type=int)
@click.pass_context
def show_loan(ctx, loan_id):
    """Show a loan and its payments."""
    service = build_service(ctx, LoanService)
    try:
        loan = service.get_loan(loan_id)
        payments = service.list_payments(loan_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"{loan.description} (ID: {loan.id}, {loan.type.value}, {loan.status.value})")
    click.echo(f"  Total: {format_cents(loan.total_amount)}")
    click.echo(f"  Paid: {format_cents(loan.paid_amount)}")
    click.echo(f"  Remaining: {format_cents(loan.remaining_amount)}")
    click.echo(f"  Start date: {loan.start_date}")
    if loan.due_date:
        click.echo(f"  Due date: {loan.due_date}")
    if loan.interest_rate is not None:
        click.echo(f"  Interest rate: {loan.interest_rate}%")
    if loan.notes:
        click.echo(f"  Notes: {loan.notes}")

    if not payments:
        click.echo("\nNo payments recorded.")
        return
    click.echo("\nPayments:")
    for payment in payments:
        notes = f" | {payment.notes}" if payment.notes else ""
        click.echo(f"  {payment.id:3d} | {payment.payment_date} | {format_cents(payment.amount):>12s}{notes}")


@loan_group.command("update")
@click.argument("loan_id", type=int)
@click.option("--description", help="Description")
@click.option("--amount", help="New total amount")
@click.option("--type", "loan_type", type=click.Choice(["lent", "borrowed"]), help="Loan type")
@click.option("--person", help="Counterparty name, document or ID")
@click.option("--start-date", help="Start date")
@click.option("--due-date", help="Due date, or empty string to clear")
@click.option("--interest-rate", type=float, help="Interest rate (informational)")
@click.option("--notes", help="Notes")
@click.pass_context
def update_loan(ctx, loan_id, description, amount, loan_type, person, start_date, due_date, interest_rate, notes):
    """Update a loan.

    Changing the amount keeps the payments already recorded; the amount
    cannot drop below what was repaid.
    """
    service = build_service(ctx, LoanService)
    cents = amount_or_exit(ctx, amount)
    start = date_or_exit(ctx, start_date)

    clear_due_date = due_date == ""
    due = None if clear_due_date else date_or_exit(ctx, due_date)

    person_id = None
    if person is not None:
        person_id = resolve_person_or_exit(ctx, build_service(ctx, PersonService), person)

    try:
        service.update_loan(
            loan_id,
            description=description,
            total_amount=cents,
            type=loan_type,
            person_id=person_id,
            start_date=start,
            due_date=due,
            interest_rate=interest_rate,
            notes=notes,
            clear_due_date=clear_due_date,
        )
        click.echo(f"Updated loan {loan_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@loan_group.command("pay")
@click.argument("loan_id", type=int)
@click.option("--amount", required=True, help="Payment amount (e.g., 250.00)")
@click.option("--date", "payment_date", default="today", show_default=True, help="Payment date")
@click.option("--notes", help="Notes")
@click.option("--key", "idempotency_key", help="De-duplication key; repeating it records nothing new")
@click.pass_context
def pay_loan(ctx, loan_id, amount, payment_date, notes, idempotency_key):
    """Record a loan payment.

    Examples:
        balancebook loan pay 1 --amount 250.00
        balancebook loan pay 1 --amount 250.00 --key march-transfer
    """
    service = build_service(ctx, LoanService)
    cents = amount_or_exit(ctx, amount)
    paid_on = date_or_exit(ctx, payment_date)
    try:
        payment_id = service.add_payment(
            loan_id,
            amount=cents,
            payment_date=paid_on,
            notes=notes,
            idempotency_key=idempotency_key,
        )
        loan = service.get_loan(loan_id)
        click.echo(
            f"Recorded payment {payment_id} on loan {loan_id}. "
            f"Remaining: {format_cents(loan.remaining_amount)} ({loan.status.value})"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@loan_group.command("delete")
@click.argument("loan_id", type=int)
@click.pass_context
def delete_loan(ctx, loan_id):
    """Delete a loan together with its payments."""
    service = build_service(ctx, LoanService)
    try:
        service.delete_loan(loan_id)
        click.echo(f"Deleted loan {loan_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register loan commands with main CLI."""
    cli.add_command(loan_group, name="loan")
