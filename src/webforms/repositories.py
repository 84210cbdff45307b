"""In-process repository implementations."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from webforms import logger

if TYPE_CHECKING:
    from webforms.typing.models import FormSchema


class InMemorySchemaRepository:
    """Schema repository held in a dict, lost on restart.

    Schemas are deep-copied on the way in and out so stored trees are never
    shared with callers.
    """

    def __init__(self) -> None:
        """Initialize an empty repository."""
        self._store: dict[str, FormSchema] = {}
        self._lock = threading.Lock()

    def save(self, schema: FormSchema) -> None:
        """Create or replace a schema."""
        with self._lock:
            self._store[schema.form_id] = schema.model_copy(deep=True)
        logger.debug("Saved schema in memory", extra={"form_id": schema.form_id})

    def find_by_id(self, form_id: str) -> FormSchema | None:
        """Return a copy of the stored schema, or None."""
        with self._lock:
            stored = self._store.get(form_id)
        return stored.model_copy(deep=True) if stored is not None else None

    def find_all(self) -> list[FormSchema]:
        """Return copies of every stored schema in insertion order."""
        with self._lock:
            stored = list(self._store.values())
        return [schema.model_copy(deep=True) for schema in stored]

    def delete_by_id(self, form_id: str) -> None:
        """Delete a schema; no-op when absent."""
        with self._lock:
            self._store.pop(form_id, None)
        logger.debug("Deleted schema from memory", extra={"form_id": form_id})

    def exists_by_id(self, form_id: str) -> bool:
        """Return whether a schema is stored under the identifier."""
        with self._lock:
            return form_id in self._store


class NoOpSubmissionRepository:
    """Submission repository that only logs what it receives."""

    def save(self, form_id: str, data: Mapping[str, Any]) -> None:
        """Log the submission without persisting it."""
        logger.info("Received form submission", extra={"form_id": form_id, "data": dict(data)})
        logger.warning(
            "No submission repository configured; data was NOT persisted",
            extra={"form_id": form_id},
        )


class InMemorySubmissionRepository:
    """Submission repository keeping `(form_id, data)` records in memory."""

    def __init__(self) -> None:
        """Initialize an empty repository."""
        self._records: list[tuple[str, dict[str, Any]]] = []
        self._lock = threading.Lock()

    def save(self, form_id: str, data: Mapping[str, Any]) -> None:
        """Append one submission."""
        with self._lock:
            self._records.append((form_id, dict(data)))

    def find_by_form(self, form_id: str) -> list[dict[str, Any]]:
        """Return the submissions recorded for a form, oldest first."""
        with self._lock:
            return [dict(data) for record_form_id, data in self._records if record_form_id == form_id]

    def __len__(self) -> int:
        """Return the number of recorded submissions."""
        with self._lock:
            return len(self._records)
