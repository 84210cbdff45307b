"""In-process cache of parsed form schemas."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from webforms import logger
from webforms.exceptions import MalformedSchemaError, SchemaStoreError

if TYPE_CHECKING:
    from webforms.typing.models import FormSchema
    from webforms.typing.protocol import SchemaLoader


class SchemaRegistry:
    """Cache of schemas keyed by `form_id`, filled from a loader on first access.

    The registry is built once and handed to every consumer. Reads and writes
    are guarded by a lock; the loader itself runs outside of it, so two
    concurrent misses for the same identifier may both load and the last
    write wins.
    """

    def __init__(self, loader: SchemaLoader) -> None:
        """Initialize the registry.

        Args:
            loader (SchemaLoader): Source consulted on cache misses.
        """
        self._loader = loader
        self._cache: dict[str, FormSchema] = {}
        self._lock = threading.Lock()

    def get(self, form_id: str) -> FormSchema | None:
        """Return a cached schema, loading and caching it on a miss.

        Loader I/O, parse and schema-file failures are logged and reported as
        not found.

        Args:
            form_id (str): Form identifier.

        Returns:
            FormSchema | None: Schema, or None when the loader cannot resolve it.
        """
        with self._lock:
            cached = self._cache.get(form_id)
        if cached is not None:
            return cached

        try:
            loaded = self._loader.load(form_id)
        except (OSError, MalformedSchemaError, SchemaStoreError):
            logger.exception("Failed to load form schema", extra={"form_id": form_id})
            return None

        if loaded is None:
            logger.info("Form schema not found", extra={"form_id": form_id})
            return None

        with self._lock:
            self._cache[form_id] = loaded
        logger.info("Cached form schema", extra={"form_id": form_id, "version": loaded.version})
        return loaded

    def evict(self, form_id: str) -> None:
        """Drop one cached schema; no-op when absent.

        Args:
            form_id (str): Form identifier.
        """
        with self._lock:
            self._cache.pop(form_id, None)
        logger.info("Evicted form schema from cache", extra={"form_id": form_id})

    def clear(self) -> None:
        """Drop every cached schema."""
        with self._lock:
            self._cache.clear()
        logger.info("Cleared all cached form schemas")

    def __contains__(self, form_id: object) -> bool:
        """Return whether a schema is currently cached."""
        with self._lock:
            return form_id in self._cache

    def __len__(self) -> int:
        """Return the number of cached schemas."""
        with self._lock:
            return len(self._cache)
