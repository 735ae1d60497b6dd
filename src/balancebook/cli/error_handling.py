"""CLI error handling helpers."""

from typing import Type, TypeVar

import click

from balancebook.domain.errors import DomainError

S = TypeVar("S")


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def build_service(ctx: click.Context, service_class: Type[S]) -> S:
    """Create an owner-scoped service from the CLI context, or exit.

    Fails when no owner was given through --owner or BALANCEBOOK_OWNER.
    """
    try:
        return service_class(ctx.obj["db"], ctx.obj["owner"], today=ctx.obj["today"])
    except DomainError as e:
        handle_domain_error(ctx, e)
