"""CLI helpers for person resolution."""

from __future__ import annotations

import click

from balancebook.domain.errors import DomainError, NotFoundError
from balancebook.domain.person import PersonService


def resolve_person(person_service: PersonService, person: str | int) -> int:
    """Resolve a person ID, document or name to a person ID.

    Args:
        person_service: PersonService instance
        person: Person ID (int or string representation of int), document or name

    Returns:
        Person ID

    Raises:
        ValueError: If no person matches, or the name is ambiguous
    """
    if isinstance(person, int):
        return person_service.get_person(person).id

    # Try to parse as integer (handles string IDs like "1")
    try:
        return person_service.get_person(int(person)).id
    except NotFoundError:
        # Digits-only input may also be a document
        pass
    except (ValueError, TypeError):
        pass

    by_document = person_service.find_by_document(person)
    if by_document is not None:
        return by_document.id

    matches = [p for p in person_service.list_people() if p.name == person]
    if len(matches) > 1:
        ids = ", ".join(str(p.id) for p in matches)
        raise ValueError(f"Person name '{person}' is ambiguous (IDs: {ids}); use an ID instead")
    if matches:
        return matches[0].id

    raise ValueError(f"Person '{person}' not found")


def resolve_person_or_exit(ctx: click.Context, person_service: PersonService, person: str | int) -> int:
    """Resolve a person, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_person(person_service, person)
    except (DomainError, ValueError) as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
