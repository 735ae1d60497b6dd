"""Notification commands."""

import click

from balancebook.cli.error_handling import build_service, handle_domain_error
from balancebook.domain.errors import DomainError
from balancebook.domain.notification import NotificationService


@click.group()
def notification_group():
    """Read and acknowledge notifications."""
    pass


@notification_group.command("list")
@click.option("--unread", is_flag=True, help="Only unread notifications")
@click.option("--read", "read_only", is_flag=True, help="Only read notifications")
@click.option("--limit", type=click.IntRange(min=1), help="Maximum number to show")
@click.pass_context
def list_notifications(ctx, unread, read_only, limit):
    """List notifications, newest first."""
    if unread and read_only:
        click.echo("Error: --unread and --read are mutually exclusive", err=True)
        ctx.exit(1)
    filter_read = False if unread else (True if read_only else None)
    service = build_service(ctx, NotificationService)
    notifications = service.list_notifications(is_read=filter_read, limit=limit)
    if not notifications:
        click.echo("No notifications.")
        return

    for n in notifications:
        marker = " " if n.is_read else "*"
        click.echo(f"{marker} ID: {n.id:3d} | {n.type.value:8s} | {n.title} - {n.message}")


@notification_group.command("count")
@click.pass_context
def unread_count(ctx):
    """Show the number of unread notifications."""
    service = build_service(ctx, NotificationService)
    click.echo(f"Unread notifications: {service.get_unread_count()}")


@notification_group.command("read")
@click.argument("notification_id", type=int, required=False)
@click.option("--all", "mark_all", is_flag=True, help="Mark every notification as read")
@click.pass_context
def mark_read(ctx, notification_id, mark_all):
    """Mark a notification, or all of them, as read."""
    service = build_service(ctx, NotificationService)
    if mark_all:
        count = service.mark_all_as_read()
        click.echo(f"Marked {count} notification{'s' if count != 1 else ''} as read")
        return
    if notification_id is None:
        click.echo("Error: Provide a NOTIFICATION_ID or --all", err=True)
        ctx.exit(1)

    try:
        service.mark_as_read(notification_id)
        click.echo(f"Marked notification {notification_id} as read")
    except DomainError as e:
        handle_domain_error(ctx, e)


@notification_group.command("delete")
@click.argument("notification_id", type=int)
@click.pass_context
def delete_notification(ctx, notification_id):
    """Delete a notification."""
    service = build_service(ctx, NotificationService)
    try:
        service.delete_notification(notification_id)
        click.echo(f"Deleted notification {notification_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register notification commands with main CLI."""
    cli.add_command(notification_group, name="notification")
