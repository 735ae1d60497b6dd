"""Dashboard command."""

import click

from balancebook.cli.error_handling import build_service
from balancebook.domain.dashboard import DashboardService
from balancebook.utils.amount_parser import format_cents


@click.command("dashboard")
@click.pass_context
def dashboard(ctx):
    """Show totals and what is due in the next seven days."""
    service = build_service(ctx, DashboardService)
    data = service.get_dashboard_data()

    click.echo("\nDashboard")
    click.echo("=" * 50)
    rows = [
        ("To pay", data.total_payable),
        ("  overdue", data.overdue_payable),
        ("To receive", data.total_receivable),
        ("  overdue", data.overdue_receivable),
        ("Borrowed (active)", data.active_loans_borrowed),
        ("Lent (active)", data.active_loans_lent),
    ]
    for label, cents in rows:
        click.echo(f"{label:20s} {format_cents(cents):>15s}")
    click.echo("-" * 50)
    click.echo(f"{'Net position':20s} {format_cents(data.net_position):>15s}")

    if data.upcoming_payments:
        click.echo("\nUpcoming payments:")
        for p in data.upcoming_payments:
            click.echo(f"  {p.due_date} | {format_cents(p.amount):>12s} | {p.description}")
    if data.upcoming_receipts:
        click.echo("\nUpcoming receipts:")
        for r in data.upcoming_receipts:
            click.echo(f"  {r.due_date} | {format_cents(r.amount):>12s} | {r.description}")


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
