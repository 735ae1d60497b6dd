"""Owner scoping shared by every domain service."""

import logging
from datetime import date
from typing import Callable, Optional, TypeVar

from balancebook.database.base import Database
from balancebook.domain.entities import Person
from balancebook.domain.errors import (
    NotFoundError,
    UnauthenticatedError,
    UnauthorizedError,
    not_authenticated,
    person_not_found,
    record_not_found,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OwnedService:
    """Base class for services acting on behalf of one owner."""

    def __init__(
        self,
        db: Database,
        owner_id: Optional[str],
        today: Optional[Callable[[], date]] = None,
    ):
        """Initialize an owner-scoped service.

        Args:
            db: Database instance
            owner_id: Identity of the authenticated owner
            today: Optional callable returning the reference date

        Raises:
            UnauthenticatedError: If no owner identity is given
        """
        if not owner_id:
            raise UnauthenticatedError(not_authenticated())
        self.db = db
        self.owner_id = owner_id
        self._today = today or date.today

    def today(self) -> date:
        """Return the reference date for status derivation."""
        return self._today()

    def _owned(self, kind: str, record_id: int, record: Optional[T]) -> T:
        """Return ``record`` if it belongs to the owner.

        Missing and foreign records raise the same message; only the log
        line tells them apart.
        """
        message = record_not_found(kind, record_id)
        if record is None:
            raise NotFoundError(message)
        if record.owner_id != self.owner_id:
            logger.warning(
                "Owner %s attempted to access %s %s of another owner",
                self.owner_id,
                kind.lower(),
                record_id,
            )
            raise UnauthorizedError(message)
        return record

    def require_person(self, person_id: int) -> Person:
        """Return the owner's person or raise NotFoundError."""
        person = self.db.get_person(person_id)
        if person is None:
            raise NotFoundError(person_not_found(person_id))
        return self._owned("Person", person_id, person)
