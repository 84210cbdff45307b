"""Collaborator interfaces consumed by the form engine."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from webforms.typing.models import FormSchema


class SchemaLoader(Protocol):
    """Source of form schema documents by identifier."""

    def load(self, form_id: str) -> FormSchema | None:
        """Load a schema.

        Args:
            form_id: Form identifier.

        Returns:
            FormSchema | None: Parsed schema, or None when the source has no such form.
        """


class SchemaRepository(Protocol):
    """Persistent store of form schemas."""

    def save(self, schema: FormSchema) -> None:
        """Create or replace a schema.

        Args:
            schema: Schema to persist.
        """

    def find_by_id(self, form_id: str) -> FormSchema | None:
        """Find a schema by identifier.

        Args:
            form_id: Form identifier.

        Returns:
            FormSchema | None: Stored schema, or None.
        """

    def find_all(self) -> list[FormSchema]:
        """Return every stored schema."""

    def delete_by_id(self, form_id: str) -> None:
        """Delete a schema by identifier.

        Args:
            form_id: Form identifier.
        """

    def exists_by_id(self, form_id: str) -> bool:
        """Return whether a schema is stored under the identifier.

        Args:
            form_id: Form identifier.
        """


class SubmissionRepository(Protocol):
    """Persistent store of validated submissions."""

    def save(self, form_id: str, data: Mapping[str, Any]) -> None:
        """Persist one validated submission.

        Args:
            form_id: Form identifier.
            data: Flat submitted key/value pairs.
        """
