"""Filesystem-backed schema repository."""

from __future__ import annotations

import hashlib
import json
import re
from pathlib import Path
from typing import cast

from pydantic import BaseModel, ConfigDict, Field

from webforms import logger
from webforms.exceptions import MalformedSchemaError, SchemaStoreError
from webforms.schema_document import dump_schema, parse_schema
from webforms.typing.models import FormSchema

_SCHEMA_FILE_VERSION = 1
_SCHEMA_SUFFIX = ".schema.json"


class SchemaStore(BaseModel):
    """Schema repository writing one versioned JSON envelope per form."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    root: Path = Field(description="Store directory root.")

    def model_post_init(self, __context: object, /) -> None:
        """Ensure the store directory exists after model initialization.

        Args:
            __context (object): Pydantic model context.
        """
        self.root.mkdir(parents=True, exist_ok=True)

    def schema_path(self, form_id: str) -> Path:
        """Build the file path of a form.

        The readable prefix is sanitized; a digest of the raw identifier keeps
        distinct identifiers in distinct files.

        Args:
            form_id (str): Form identifier.

        Returns:
            Path: Schema file path.
        """
        safe_name = re.sub(r"[^a-z0-9._-]+", "-", form_id.lower()).strip("-.")
        if not safe_name:
            safe_name = "schema"
        digest = hashlib.sha256(form_id.encode("utf-8")).hexdigest()[:12]
        return self.root / f"{safe_name}-{digest}{_SCHEMA_SUFFIX}"

    @staticmethod
    def load(path: Path) -> FormSchema:
        """Load a schema file.

        Args:
            path (Path): Schema file path.

        Raises:
            MalformedSchemaError: If the file is not UTF-8 JSON holding a valid schema document.
            SchemaStoreError: If the path is not an existing `.schema.json` file.

        Returns:
            FormSchema: Loaded schema.
        """
        _validate_schema_file_path(path)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedSchemaError(message=f"Schema file is not valid JSON: {path}", exc=exc) from exc
        return parse_schema(_unwrap_schema_payload(payload))

    def save(self, schema: FormSchema) -> None:
        """Create or replace a schema file.

        Args:
            schema (FormSchema): Schema payload.
        """
        path = self.schema_path(schema.form_id)
        envelope = {
            "schema_file_version": _SCHEMA_FILE_VERSION,
            "schema": dump_schema(schema),
        }
        path.write_text(json.dumps(envelope, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Schema stored", extra={"form_id": schema.form_id, "schema_path": str(path)})

    def find_by_id(self, form_id: str) -> FormSchema | None:
        """Return the stored schema, or None."""
        path = self.schema_path(form_id)
        if not path.is_file():
            return None
        return self.load(path)

    def find_all(self) -> list[FormSchema]:
        """Return every readable stored schema ordered by file name.

        Unreadable or malformed files are logged and skipped.
        """
        schemas: list[FormSchema] = []
        for path in self.list_schema_files():
            try:
                schemas.append(self.load(path))
            except (OSError, MalformedSchemaError):
                logger.exception("Skipping unreadable schema file", extra={"schema_path": str(path)})
        return schemas

    def delete_by_id(self, form_id: str) -> None:
        """Delete a schema file; no-op when absent."""
        self.schema_path(form_id).unlink(missing_ok=True)
        logger.info("Schema file deleted", extra={"form_id": form_id})

    def exists_by_id(self, form_id: str) -> bool:
        """Return whether a schema file exists for the identifier."""
        return self.schema_path(form_id).is_file()

    def list_schema_files(self) -> list[Path]:
        """List stored schema files.

        Returns:
            list[Path]: Schema files.
        """
        return sorted(self.root.glob(f"*{_SCHEMA_SUFFIX}"))


def _unwrap_schema_payload(payload: object) -> dict[str, object]:
    """Return the schema object of an envelope, or a bare legacy payload as-is.

    Args:
        payload (object): Raw JSON payload.

    Raises:
        MalformedSchemaError: If payload is not a JSON object.

    Returns:
        dict[str, object]: Schema document.
    """
    if not isinstance(payload, dict):
        raise MalformedSchemaError(message="Schema payload must be a JSON object")

    payload_obj = cast("dict[str, object]", payload)
    embedded_schema = payload_obj.get("schema")
    if "schema_file_version" in payload_obj and isinstance(embedded_schema, dict):
        return cast("dict[str, object]", embedded_schema)
    return payload_obj


def _validate_schema_file_path(path: Path) -> None:
    """Validate schema file path before loading.

    Args:
        path (Path): Schema file path.

    Raises:
        SchemaStoreError: If path is not a `pathlib.Path` or not a readable schema JSON file.
    """
    if not isinstance(path, Path):
        raise SchemaStoreError(message=f"Schema path must be a pathlib.Path instance, got: {type(path)!r}")
    if not path.is_file():
        raise SchemaStoreError(message=f"Schema path is not a file: {path}")
    if not path.name.endswith(_SCHEMA_SUFFIX):
        raise SchemaStoreError(message=f"Schema path must end with '{_SCHEMA_SUFFIX}': {path}")
