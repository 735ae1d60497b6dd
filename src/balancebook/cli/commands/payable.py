"""Accounts payable commands."""

import click

from balancebook.cli.error_handling import build_service, handle_domain_error
from balancebook.cli.parsing import amount_or_exit, date_or_exit
from balancebook.cli.person_resolution import resolve_person_or_exit
from balancebook.domain.errors import DomainError
from balancebook.domain.obligations import PayableService
from balancebook.domain.person import PersonService
from balancebook.utils.amount_parser import format_cents

STATUSES = ["pending", "paid", "overdue"]


@click.group()
def payable_group():
    """Manage accounts payable (what you owe)."""
    pass


@payable_group.command("create")
@click.option("--description", required=True, help="What is owed")
@click.option("--amount", required=True, help="Amount (e.g., 123.45)")
@click.option("--due-date", required=True, help="Due date (YYYY-MM-DD or relative like 'tomorrow')")
@click.option("--category", required=True, help="Category (free text)")
@click.option("--person", help="Creditor name, document or ID")
@click.option("--notes", help="Notes")
@click.pass_context
def create_payable(ctx, description, amount, due_date, category, person, notes):
    """Create a payable.

    Examples:
        balancebook payable create --description "Rent" --amount 1500.00 --due-date 2024-03-05 --category Housing
    """
    service = build_service(ctx, PayableService)
    cents = amount_or_exit(ctx, amount)
    due = date_or_exit(ctx, due_date)
    person_id = None
    if person is not None:
        person_id = resolve_person_or_exit(ctx, build_service(ctx, PersonService), person)

    try:
        payable_id = service.create_payable(
            description=description,
            amount=cents,
            due_date=due,
            category=category,
            person_id=person_id,
            notes=notes,
        )
        payable = service.get_payable(payable_id)
        click.echo(f"Created payable '{description}' (ID: {payable_id}, status: {payable.status.value})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@payable_group.command("list")
@click.option("--status", type=click.Choice(STATUSES), help="Filter by status")
@click.option("--person", help="Filter by person name, document or ID")
@click.pass_context
def list_payables(ctx, status, person):
    """List payables ordered by due date."""
    service = build_service(ctx, PayableService)
    person_id = None
    if person is not None:
        person_id = resolve_person_or_exit(ctx, build_service(ctx, PersonService), person)

    payables = service.list_payables(status=status, person_id=person_id)
    if not payables:
        click.echo("No payables found.")
        return

    click.echo("\nPayables:")
    click.echo("-" * 80)
    for p in payables:
        click.echo(
            f"ID: {p.id:3d} | {p.due_date} | {format_cents(p.amount):>12s} | "
            f"{p.status.value:8s} | {p.category:12s} | {p.description}"
        )
    click.echo("-" * 80)
    click.echo(f"Total: {format_cents(sum(p.amount for p in payables))}")


@payable_group.command("update")
@click.argument("payable_id", type=int)
@click.option("--description", help="Description")
@click.option("--amount", help="Amount (e.g., 123.45)")
@click.option("--due-date", help="Due date (YYYY-MM-DD or relative)")
@click.option("--category", help="Category")
@click.option("--person", help="Person name, document or ID, or empty string to clear")
@click.option("--notes", help="Notes")
@click.pass_context
def update_payable(ctx, payable_id, description, amount, due_date, category, person, notes) -> None:
    """Update a payable.

    Updates only the fields that are provided. Use --person "" to detach it
    from its person.
    """
    service = build_service(ctx, PayableService)
    cents = amount_or_exit(ctx, amount)
    due = date_or_exit(ctx, due_date)

    person_id = None
    clear_person = False
    if person is not None:
        if person == "":
            clear_person = True
        else:
            person_id = resolve_person_or_exit(ctx, build_service(ctx, PersonService), person)

    try:
        service.update_payable(
            payable_id,
            description=description,
            amount=cents,
            due_date=due,
            category=category,
            person_id=person_id,
            notes=notes,
            clear_person=clear_person,
        )
        click.echo(f"Updated payable {payable_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@payable_group.command("pay")
@click.argument("payable_id", type=int)
@click.option("--date", "paid_date", help="Payment date (defaults to today)")
@click.pass_context
def pay_payable(ctx, payable_id, paid_date) -> None:
    """Mark a payable as paid."""
    service = build_service(ctx, PayableService)
    paid_on = date_or_exit(ctx, paid_date)
    try:
        service.mark_as_paid(payable_id, paid_date=paid_on)
        payable = service.get_payable(payable_id)
        click.echo(f"Payable {payable_id} paid on {payable.paid_date}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@payable_group.command("delete")
@click.argument("payable_id", type=int)
@click.pass_context
def delete_payable(ctx, payable_id) -> None:
    """Delete a payable."""
    service = build_service(ctx, PayableService)
    try:
        service.delete_payable(payable_id)
        click.echo(f"Deleted payable {payable_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register payable commands with main CLI."""
    cli.add_command(payable_group, name="payable")
