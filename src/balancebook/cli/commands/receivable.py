"""Accounts receivable commands."""

import click

from balancebook.cli.error_handling import build_service, handle_domain_error
from balancebook.cli.parsing import amount_or_exit, date_or_exit
from balancebook.cli.person_resolution import resolve_person_or_exit
from balancebook.domain.errors import DomainError
from balancebook.domain.obligations import ReceivableService
from balancebook.domain.person import PersonService
from balancebook.utils.amount_parser import format_cents

STATUSES = ["pending", "received", "overdue"]


@click.group()
def receivable_group():
    """Manage accounts receivable (what you are owed)."""
    pass


@receivable_group.command("create")
@click.option("--description", required=True, help="What is owed to you")
@click.option("--amount", required=True, help="Amount (e.g., 123.45)")
@click.option("--due-date", required=True, help="Due date (YYYY-MM-DD or relative like 'tomorrow')")
@click.option("--category", required=True, help="Category (free text)")
@click.option("--person", help="Debtor name, document or ID")
@click.option("--notes", help="Notes")
@click.pass_context
def create_receivable(ctx, description, amount, due_date, category, person, notes):
    """Create a receivable.

    Examples:
        balancebook receivable create --description "Consulting" --amount 800 --due-date 2024-03-10 --category Work --person 1
    """
    service = build_service(ctx, ReceivableService)
    cents = amount_or_exit(ctx, amount)
    due = date_or_exit(ctx, due_date)
    person_id = None
    if person is not None:
        person_id = resolve_person_or_exit(ctx, build_service(ctx, PersonService), person)

    try:
        receivable_id = service.create_receivable(
            description=description,
            amount=cents,
            due_date=due,
            category=category,
            person_id=person_id,
            notes=notes,
        )
        receivable = service.get_receivable(receivable_id)
        click.echo(
            f"Created receivable '{description}' (ID: {receivable_id}, status: {receivable.status.value})"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@receivable_group.command("list")
@click.option("--status", type=click.Choice(STATUSES), help="Filter by status")
@click.option("--person", help="Filter by person name, document or ID")
@click.pass_context
def list_receivables(ctx, status, person):
    """List receivables ordered by due date."""
    service = build_service(ctx, ReceivableService)
    person_id = None
    if person is not None:
        person_id = resolve_person_or_exit(ctx, build_service(ctx, PersonService), person)

    receivables = service.list_receivables(status=status, person_id=person_id)
    if not receivables:
        click.echo("No receivables found.")
        return

    click.echo("\nReceivables:")
    click.echo("-" * 80)
    for r in receivables:
        click.echo(
            f"ID: {r.id:3d} | {r.due_date} | {format_cents(r.amount):>12s} | "
            f"{r.status.value:8s} | {r.category:12s} | {r.description}"
        )
    click.echo("-" * 80)
    click.echo(f"Total: {format_cents(sum(r.amount for r in receivables))}")


@receivable_group.command("update")
@click.argument("receivable_id", type=int)
@click.option("--description", help="Description")
@click.option("--amount", help="Amount (e.g., 123.45)")
@click.option("--due-date", help="Due date (YYYY-MM-DD or relative)")
@click.option("--category", help="Category")
@click.option("--person", help="Person name, document or ID, or empty string to clear")
@click.option("--notes", help="Notes")
@click.pass_context
def update_receivable(ctx, receivable_id, description, amount, due_date, category, person, notes) -> None:
    """Update a receivable.

    Updates only the fields that are provided. Use --person "" to detach it
    from its person.
    """
    service = build_service(ctx, ReceivableService)
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
        service.update_receivable(
            receivable_id,
            description=description,
            amount=cents,
            due_date=due,
            category=category,
            person_id=person_id,
            notes=notes,
            clear_person=clear_person,
        )
        click.echo(f"Updated receivable {receivable_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@receivable_group.command("receive")
@click.argument("receivable_id", type=int)
@click.option("--date", "received_date", help="Date received (defaults to today)")
@click.pass_context
def receive_receivable(ctx, receivable_id, received_date) -> None:
    """Mark a receivable as received."""
    service = build_service(ctx, ReceivableService)
    received_on = date_or_exit(ctx, received_date)
    try:
        service.mark_as_received(receivable_id, received_date=received_on)
        receivable = service.get_receivable(receivable_id)
        click.echo(f"Receivable {receivable_id} received on {receivable.received_date}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@receivable_group.command("delete")
@click.argument("receivable_id", type=int)
@click.pass_context
def delete_receivable(ctx, receivable_id) -> None:
    """Delete a receivable."""
    service = build_service(ctx, ReceivableService)
    try:
        service.delete_receivable(receivable_id)
        click.echo(f"Deleted receivable {receivable_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register receivable commands with main CLI."""
    cli.add_command(receivable_group, name="receivable")
