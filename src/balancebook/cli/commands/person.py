"""Person management commands."""

import click

from balancebook.cli.error_handling import build_service, handle_domain_error
from balancebook.cli.person_resolution import resolve_person_or_exit
from balancebook.domain.errors import DomainError
from balancebook.domain.person import PersonService
from balancebook.utils.amount_parser import format_cents


@click.group()
def person_group():
    """Manage people and companies."""
    pass


@person_group.command("create")
@click.argument("name", metavar="NAME")
@click.option(
    "--type",
    "person_type",
    type=click.Choice(["person", "company"]),
    default="person",
    show_default=True,
    help="Individual or company",
)
@click.option("--email", help="Email address")
@click.option("--phone", help="Phone number")
@click.option("--document", help="CPF/CNPJ (punctuation is ignored)")
@click.option("--address", help="Address")
@click.option("--notes", help="Notes")
@click.pass_context
def create_person(
    ctx,
    name: str,
    person_type: str,
    email: str | None,
    phone: str | None,
    document: str | None,
    address: str | None,
    notes: str | None,
):
    """Create a new person.

    Examples:
        balancebook person create "Maria Silva" --document 123.456.789-09
        balancebook person create "ACME Ltda" --type company
    """
    service = build_service(ctx, PersonService)
    try:
        person_id = service.create_person(
            name=name,
            type=person_type,
            email=email,
            phone=phone,
            document=document,
            address=address,
            notes=notes,
        )
        click.echo(f"Created person '{name}' (ID: {person_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@person_group.command("list")
@click.pass_context
def list_people(ctx):
    """List all people with their balances."""
    service = build_service(ctx, PersonService)

    people = service.list_people()
    if not people:
        click.echo("No people found.")
        return

    click.echo("\nPeople:")
    click.echo("-" * 70)
    for p in people:
        click.echo(
            f"ID: {p.id:3d} | {p.name:25s} | {p.type.value:7s} | "
            f"Balance: {format_cents(p.total_balance):>12s}"
        )


@person_group.command("show")
@click.argument("person", metavar="PERSON")
@click.pass_context
def show_person(ctx, person: str):
    """Show a person and their financial history.

    PERSON can be an ID, a document or an exact name.
    """
    service = build_service(ctx, PersonService)
    person_id = resolve_person_or_exit(ctx, service, person)
    history = service.get_person_history(person_id)
    p = history.person

    click.echo(f"{p.name} (ID: {p.id}, {p.type.value})")
    for label, value in (
        ("Email", p.email),
        ("Phone", p.phone),
        ("Document", p.document),
        ("Address", p.address),
        ("Notes", p.notes),
    ):
        if value:
            click.echo(f"  {label}: {value}")
    click.echo(f"  Balance: {format_cents(p.total_balance)}")

    if history.is_empty:
        click.echo("\nNo financial records.")
        return

    for title, records in (("Payables", history.payables), ("Receivables", history.receivables)):
        if records:
            click.echo(f"\n{title}:")
            for r in records:
                click.echo(
                    f"  {r.id:3d} | {r.due_date} | {format_cents(r.amount):>12s} | "
                    f"{r.status.value:8s} | {r.description}"
                )
    if history.loans:
        click.echo("\nLoans:")
        for loan in history.loans:
            click.echo(
                f"  {loan.id:3d} | {loan.type.value:8s} | {format_cents(loan.remaining_amount):>12s} "
                f"of {format_cents(loan.total_amount)} | {loan.status.value:7s} | {loan.description}"
            )
    if history.purchases:
        click.echo("\nCredit card purchases:")
        for purchase in history.purchases:
            click.echo(
                f"  {purchase.id:3d} | {purchase.purchase_date} | "
                f"{format_cents(purchase.total_amount):>12s} | "
                f"{purchase.paid_installments}/{purchase.installments} paid | {purchase.description}"
            )


@person_group.command("update")
@click.argument("person", metavar="PERSON")
@click.option("--name", help="New name")
@click.option("--type", "person_type", type=click.Choice(["person", "company"]), help="New type")
@click.option("--email", help="Email address")
@click.option("--phone", help="Phone number")
@click.option("--document", help="CPF/CNPJ, or empty string to clear")
@click.option("--address", help="Address")
@click.option("--notes", help="Notes")
@click.pass_context
def update_person(ctx, person: str, name, person_type, email, phone, document, address, notes) -> None:
    """Update a person.

    Updates only the fields that are provided.

    Examples:
        balancebook person update 1 --email maria@example.com
        balancebook person update "Maria Silva" --document ""
    """
    service = build_service(ctx, PersonService)
    person_id = resolve_person_or_exit(ctx, service, person)

    changes = {
        "name": name,
        "type": person_type,
        "email": email,
        "phone": phone,
        "document": document,
        "address": address,
        "notes": notes,
    }
    changes = {key: value for key, value in changes.items() if value is not None}
    if not changes:
        click.echo("Nothing to update.")
        return

    try:
        service.update_person(person_id, **changes)
        click.echo(f"Updated person {person_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@person_group.command("delete")
@click.argument("person", metavar="PERSON")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_person(ctx, person: str, yes: bool) -> None:
    """Delete a person.

    The person can only be deleted if no payable, receivable, loan or credit
    card purchase refers to them.
    """
    service = build_service(ctx, PersonService)
    person_id = resolve_person_or_exit(ctx, service, person)
    person_obj = service.get_person(person_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete '{person_obj.name}' (ID: {person_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_person(person_id)
        click.echo(f"Deleted person '{person_obj.name}' (ID: {person_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register person commands with CLI."""
    cli.add_command(person_group, name="person")
