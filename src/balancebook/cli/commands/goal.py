"""Financial goal commands."""

import click

from balancebook.cli.error_handling import build_service, handle_domain_error
from balancebook.cli.parsing import amount_or_exit, date_or_exit
from balancebook.domain.errors import DomainError
from balancebook.domain.goal import GoalService
from balancebook.utils.amount_parser import format_cents

STATUSES = ["active", "completed", "paused"]


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("create")
@click.argument("title", metavar="TITLE")
@click.option("--target", required=True, help="Target amount (e.g., 5000.00)")
@click.option("--target-date", required=True, help="Date to reach the goal by")
@click.option("--category", required=True, help="Category (free text)")
@click.option("--description", help="Description")
@click.pass_context
def create_goal(ctx, title, target, target_date, category, description):
    """Create a goal.

    Examples:
        balancebook goal create "Emergency fund" --target 10000 --target-date 2024-12-31 --category Savings
    """
    service = build_service(ctx, GoalService)
    cents = amount_or_exit(ctx, target)
    target_on = date_or_exit(ctx, target_date)
    try:
        goal_id = service.create_goal(
            title=title,
            target_amount=cents,
            target_date=target_on,
            category=category,
            description=description,
        )
        click.echo(f"Created goal '{title}' (ID: {goal_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@goal_group.command("list")
@click.option("--status", type=click.Choice(STATUSES), help="Filter by status")
@click.pass_context
def list_goals(ctx, status):
    """List goals ordered by target date."""
    service = build_service(ctx, GoalService)
    goals = service.list_goals(status=status)
    if not goals:
        click.echo("No goals found.")
        return

    click.echo("\nGoals:")
    click.echo("-" * 80)
    for g in goals:
        click.echo(
            f"ID: {g.id:3d} | {g.target_date} | {format_cents(g.current_amount):>12s} / "
            f"{format_cents(g.target_amount):>12s} | {g.status.value:9s} | {g.title}"
        )


@goal_group.command("show")
@click.argument("goal_id", type=int)
@click.pass_context
def show_goal(ctx, goal_id):
    """Show a goal and its progress."""
    service = build_service(ctx, GoalService)
    try:
        progress = service.get_progress(goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    goal = progress.goal
    click.echo(f"{goal.title} (ID: {goal.id}, {goal.status.value})")
    if goal.description:
        click.echo(f"  {goal.description}")
    click.echo(f"  Saved: {format_cents(goal.current_amount)} of {format_cents(goal.target_amount)}")
    click.echo(f"  Progress: {progress.progress_percentage}%")
    click.echo(f"  Remaining: {format_cents(progress.remaining_amount)}")
    click.echo(f"  Days left: {progress.remaining_days}")


@goal_group.command("update")
@click.argument("goal_id", type=int)
@click.option("--title", help="Title")
@click.option("--target", help="Target amount")
@click.option("--target-date", help="Target date")
@click.option("--category", help="Category")
@click.option("--description", help="Description")
@click.pass_context
def update_goal(ctx, goal_id, title, target, target_date, category, description):
    """Update goal details."""
    service = build_service(ctx, GoalService)
    cents = amount_or_exit(ctx, target)
    target_on = date_or_exit(ctx, target_date)
    try:
        service.update_goal(
            goal_id,
            title=title,
            target_amount=cents,
            target_date=target_on,
            category=category,
            description=description,
        )
        click.echo(f"Updated goal {goal_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@goal_group.command("progress")
@click.argument("goal_id", type=int)
@click.argument("amount", metavar="AMOUNT")
@click.pass_context
def update_progress(ctx, goal_id, amount):
    """Set the amount saved so far for a goal."""
    service = build_service(ctx, GoalService)
    cents = amount_or_exit(ctx, amount)
    try:
        service.update_progress(goal_id, cents)
        progress = service.get_progress(goal_id)
        click.echo(
            f"Goal {goal_id}: {progress.progress_percentage}% "
            f"({progress.goal.status.value})"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@goal_group.command("status")
@click.argument("goal_id", type=int)
@click.argument("status", type=click.Choice(STATUSES))
@click.pass_context
def change_status(ctx, goal_id, status):
    """Change the status of a goal (e.g. pause it)."""
    service = build_service(ctx, GoalService)
    try:
        service.change_status(goal_id, status)
        click.echo(f"Goal {goal_id} is now {status}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@goal_group.command("delete")
@click.argument("goal_id", type=int)
@click.pass_context
def delete_goal(ctx, goal_id):
    """Delete a goal."""
    service = build_service(ctx, GoalService)
    try:
        service.delete_goal(goal_id)
        click.echo(f"Deleted goal {goal_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
