"""Main CLI entry point."""

import logging

import click

from balancebook.database.factories import create_sqlite_database
from balancebook.utils.date_parser import to_date
from balancebook.utils.logging_setup import setup_logging

# Import and register all commands at module level
from balancebook.cli.commands import (
    card,
    dashboard,
    goal,
    loan,
    notification,
    payable,
    person,
    receivable,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _fixed_today(ctx, param, value):
    if value is None:
        return None
    try:
        return to_date(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BALANCEBOOK_DB_PATH environment variable)",
    envvar="BALANCEBOOK_DB_PATH",
)
@click.option(
    "--owner",
    help="Owner whose records are managed (overrides BALANCEBOOK_OWNER environment variable)",
    envvar="BALANCEBOOK_OWNER",
)
@click.option(
    "--today",
    callback=_fixed_today,
    help="Reference date (YYYY-MM-DD) used instead of the current date",
    envvar="BALANCEBOOK_TODAY",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="BALANCEBOOK_LOG_LEVEL",
    help="Logging level",
)
@click.option("--log-json", is_flag=True, help="Write logs as JSON lines")
@click.pass_context
def cli(ctx, db_path: str | None, owner: str | None, today, log_level: str, log_json: bool):
    """Balancebook - Personal finance ledger.

    Track what you owe and what you are owed: payables, receivables, loans,
    credit card installments and savings goals, per person.
    """
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        setup_logging(log_level, json_format=log_json)
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["owner"] = owner
        ctx.obj["today"] = (lambda: today) if today is not None else None
        logger.debug("Using database %s for owner %s", db.database_url, owner)


# Register all commands
person.register_commands(cli)
payable.register_commands(cli)
receivable.register_commands(cli)
loan.register_commands(cli)
card.register_commands(cli)
goal.register_commands(cli)
notification.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
