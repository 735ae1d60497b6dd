"""Person domain service."""

import logging
from typing import Any, Optional

from balancebook.domain.entities import Person, PersonHistory, PersonType
from balancebook.domain.errors import (
    DuplicateDocumentError,
    HasReferencesError,
    ValidationError,
    duplicate_document,
    person_delete_blocked,
)
from balancebook.domain.ownership import OwnedService
from balancebook.utils.document import normalize_document

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "type", "email", "phone", "document", "address", "notes")


class PersonService(OwnedService):
    """Service for managing people."""

    def create_person(
        self,
        name: str,
        type: PersonType | str = PersonType.PERSON,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        document: Optional[str] = None,
        address: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a person.

        Args:
            name: Display name
            type: "person" or "company"
            email: Optional email
            phone: Optional phone number
            document: Optional CPF/CNPJ, stored as digits only
            address: Optional address
            notes: Optional notes

        Returns:
            Person ID

        Raises:
            ValidationError: If name or type is invalid
            DuplicateDocumentError: If the owner already has a person with this document
        """
        name = self._validate_name(name)
        person_type = self._validate_type(type)
        document = normalize_document(document)
        with self.db.transaction():
            self._check_document_available(document)
            person_id = self.db.create_person(
                owner_id=self.owner_id,
                name=name,
                type=person_type,
                email=email,
                phone=phone,
                document=document,
                address=address,
                notes=notes,
            )
        logger.info("Created person %s for owner %s", person_id, self.owner_id)
        return person_id

    def get_person(self, person_id: int) -> Person:
        """Get one of the owner's people.

        Raises:
            NotFoundError: If the person is missing or belongs to another owner
        """
        return self.require_person(person_id)

    def list_people(self) -> list[Person]:
        """List the owner's people ordered by name."""
        return self.db.list_people(self.owner_id)

    def find_by_document(self, document: str) -> Optional[Person]:
        """Find the owner's person by document, in any formatting."""
        normalized = normalize_document(document)
        if normalized is None:
            return None
        return self.db.find_person_by_document(self.owner_id, normalized)

    def update_person(self, person_id: int, **changes: Any) -> None:
        """Update profile fields of a person.

        Args:
            person_id: Person ID
            **changes: Any of name, type, email, phone, document, address, notes

        Raises:
            NotFoundError: If the person is missing or belongs to another owner
            ValidationError: If a field is unknown, derived or invalid
            DuplicateDocumentError: If the new document is used by another person
        """
        if "total_balance" in changes:
            raise ValidationError("total_balance is derived from financial records and cannot be set")
        unknown = set(changes) - set(PROFILE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown person fields: {', '.join(sorted(unknown))}")

        if "name" in changes:
            changes["name"] = self._validate_name(changes["name"])
        if "type" in changes:
            changes["type"] = self._validate_type(changes["type"])
        if "document" in changes:
            changes["document"] = normalize_document(changes["document"])

        with self.db.transaction():
            self.require_person(person_id)
            if "document" in changes:
                self._check_document_available(changes["document"], exclude_id=person_id)
            if changes:
                self.db.update_person(person_id, **changes)

    def delete_person(self, person_id: int) -> int:
        """Delete a person with no financial records.

        Returns:
            Deleted person ID

        Raises:
            NotFoundError: If the person is missing or belongs to another owner
            HasReferencesError: If any payable, receivable, loan or purchase references the person
        """
        with self.db.transaction():
            self.require_person(person_id)
            counts = self.db.count_person_references(self.owner_id, person_id)
            if any(counts.values()):
                raise HasReferencesError(person_delete_blocked(person_id, counts), counts)
            self.db.delete_person(person_id)

        logger.info("Deleted person %s", person_id)
        return person_id

    def get_person_history(self, person_id: int) -> PersonHistory:
        """Return every payable, receivable, loan and purchase of a person."""
        person = self.require_person(person_id)
        return PersonHistory(
            person=person,
            payables=tuple(self.db.list_payables(self.owner_id, person_id=person_id)),
            receivables=tuple(self.db.list_receivables(self.owner_id, person_id=person_id)),
            loans=tuple(self.db.list_loans(self.owner_id, person_id=person_id)),
            purchases=tuple(self.db.list_purchases(self.owner_id, person_id=person_id)),
        )

    def _check_document_available(self, document: Optional[str], exclude_id: Optional[int] = None) -> None:
        if document is None:
            return
        existing = self.db.find_person_by_document(self.owner_id, document)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateDocumentError(duplicate_document(document))

    @staticmethod
    def _validate_name(name: Optional[str]) -> str:
        if name is None or not name.strip():
            raise ValidationError("Person name cannot be empty")
        return name.strip()

    @staticmethod
    def _validate_type(value: PersonType | str) -> PersonType:
        try:
            return PersonType(value)
        except ValueError:
            raise ValidationError(f"Invalid person type '{value}' (expected person or company)")
