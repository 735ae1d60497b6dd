"""Credit card purchase commands."""

import click

from balancebook.cli.error_handling import build_service, handle_domain_error
from balancebook.cli.parsing import amount_or_exit, date_or_exit
from balancebook.cli.person_resolution import resolve_person_or_exit
from balancebook.domain.credit_card import CreditCardService
from balancebook.domain.dashboard import DashboardService
from balancebook.domain.errors import DomainError
from balancebook.domain.person import PersonService
from balancebook.utils.amount_parser import format_cents


@click.group()
def card_group():
    """Manage credit card purchases made for other people."""
    pass


@card_group.command("create")
@click.option("--description", required=True, help="Purchase description")
@click.option("--amount", required=True, help="Total amount (e.g., 600.00)")
@click.option("--installments", type=int, default=1, show_default=True, help="Number of installments (1-60)")
@click.option("--person", required=True, help="Person name, document or ID")
@click.option("--purchase-date", default="today", show_default=True, help="Purchase date")
@click.option("--first-due-date", required=True, help="Due date of the first installment")
@click.option("--notes", help="Notes")
@click.pass_context
def create_purchase(ctx, description, amount, installments, person, purchase_date, first_due_date, notes):
    """Create a purchase and its installment schedule.

    Examples:
        balancebook card create --description "TV" --amount 3000 --installments 10 --person 1 --first-due-date 2024-03-10
    """
    service = build_service(ctx, CreditCardService)
    cents = amount_or_exit(ctx, amount)
    bought_on = date_or_exit(ctx, purchase_date)
    first_due = date_or_exit(ctx, first_due_date)
    person_id = resolve_person_or_exit(ctx, build_service(ctx, PersonService), person)

    try:
        purchase_id = service.create_purchase(
            description=description,
            total_amount=cents,
            installments=installments,
            person_id=person_id,
            purchase_date=bought_on,
            first_due_date=first_due,
            notes=notes,
        )
        purchase = service.get_purchase(purchase_id)
        click.echo(
            f"Created purchase '{description}' (ID: {purchase_id}): "
            f"{purchase.installments} x {format_cents(purchase.installment_amount)}"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@card_group.command("list")
@click.option("--status", type=click.Choice(["active", "completed"]), help="Filter by status")
@click.option("--person", help="Filter by person name, document or ID")
@click.pass_context
def list_purchases(ctx, status, person):
    """List purchases ordered by purchase date."""
    service = build_service(ctx, CreditCardService)
    person_id = None
    if person is not None:
        person_id = resolve_person_or_exit(ctx, build_service(ctx, PersonService), person)

    purchases = service.list_purchases(status=status, person_id=person_id)
    if not purchases:
        click.echo("No purchases found.")
        return

    click.echo("\nPurchases:")
    click.echo("-" * 80)
    for p in purchases:
        click.echo(
            f"ID: {p.id:3d} | {p.purchase_date} | {format_cents(p.total_amount):>12s} | "
            f"{p.paid_installments}/{p.installments} paid | {p.status.value:9s} | {p.description}"
        )


@card_group.command("installments")
@click.argument("purchase_id", type=int)
@click.pass_context
def list_installments(ctx, purchase_id):
    """List the installments of a purchase."""
    service = build_service(ctx, CreditCardService)
    try:
        installments = service.list_installments(purchase_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    for i in installments:
        paid = f" on {i.paid_date}" if i.paid_date else ""
        click.echo(
            f"ID: {i.id:3d} | #{i.installment_number:2d} | {i.due_date} | "
            f"{format_cents(i.amount):>10s} | {i.status.value}{paid}"
        )


@card_group.command("pay")
@click.argument("installment_id", type=int)
@click.option("--date", "paid_date", help="Payment date (defaults to today)")
@click.pass_context
def pay_installment(ctx, installment_id, paid_date):
    """Mark an installment as paid."""
    service = build_service(ctx, CreditCardService)
    paid_on = date_or_exit(ctx, paid_date)
    try:
        service.pay_installment(installment_id, paid_date=paid_on)
        installment = service.get_installment(installment_id)
        purchase = service.get_purchase(installment.purchase_id)
        click.echo(
            f"Paid installment #{installment.installment_number} of purchase {purchase.id} "
            f"({purchase.paid_installments}/{purchase.installments} paid, {purchase.status.value})"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@card_group.command("update")
@click.argument("purchase_id", type=int)
@click.option("--description", help="Description")
@click.option("--person", help="Person name, document or ID")
@click.option("--notes", help="Notes")
@click.pass_context
def update_purchase(ctx, purchase_id, description, person, notes):
    """Update the description, person or notes of a purchase."""
    service = build_service(ctx, CreditCardService)
    person_id = None
    if person is not None:
        person_id = resolve_person_or_exit(ctx, build_service(ctx, PersonService), person)
    try:
        service.update_purchase(purchase_id, description=description, notes=notes, person_id=person_id)
        click.echo(f"Updated purchase {purchase_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@card_group.command("delete")
@click.argument("purchase_id", type=int)
@click.pass_context
def delete_purchase(ctx, purchase_id):
    """Delete a purchase together with its installments."""
    service = build_service(ctx, CreditCardService)
    try:
        service.delete_purchase(purchase_id)
        click.echo(f"Deleted purchase {purchase_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@card_group.command("upcoming")
@click.option("--days", type=click.IntRange(min=0), default=30, show_default=True, help="Days ahead")
@click.pass_context
def upcoming_installments(ctx, days):
    """List pending installments due soon."""
    service = build_service(ctx, DashboardService)
    upcoming = service.list_upcoming_installments(days=days)
    if not upcoming:
        click.echo(f"No installments due in the next {days} days.")
        return

    for item in upcoming:
        person = item.person.name if item.person else "-"
        click.echo(
            f"{item.installment.due_date} | {format_cents(item.installment.amount):>10s} | "
            f"#{item.installment.installment_number}/{item.purchase.installments} | "
            f"{item.purchase.description} | {person}"
        )


@card_group.command("receipt")
@click.argument("purchase_id", type=int)
@click.pass_context
def receipt(ctx, purchase_id):
    """Print a receipt with the full installment schedule of a purchase."""
    service = build_service(ctx, DashboardService)
    try:
        data = service.generate_receipt(purchase_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    purchase = data.purchase
    click.echo(f"Receipt - {purchase.description}")
    click.echo("=" * 50)
    if data.person is not None:
        click.echo(f"Person: {data.person.name}")
        if data.person.document:
            click.echo(f"Document: {data.person.document}")
    click.echo(f"Purchase date: {purchase.purchase_date}")
    click.echo(f"Total: {format_cents(purchase.total_amount)}")
    click.echo(
        f"Installments: {purchase.installments} x {format_cents(purchase.installment_amount)}"
    )
    click.echo("-" * 50)
    for i in data.installments:
        click.echo(
            f"#{i.installment_number:2d} | {i.due_date} | {format_cents(i.amount):>10s} | {i.status.value}"
        )


def register_commands(cli):
    """Register credit card commands with main CLI."""
    cli.add_command(card_group, name="card")
