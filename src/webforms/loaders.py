"""Schema loaders: package resources, filesystem directory, repository."""

from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING

from webforms import logger
from webforms.exceptions import MalformedSchemaError
from webforms.schema_document import parse_schema
from webforms.schema_store import SchemaStore
from webforms.typing.enums import SchemaSource

if TYPE_CHECKING:
    from webforms.settings import Settings
    from webforms.typing.models import FormSchema
    from webforms.typing.protocol import SchemaLoader, SchemaRepository

_SCHEMA_FILE_SUFFIX = ".json"


def _is_safe_form_id(form_id: str) -> bool:
    """Return whether an identifier can name a single file."""
    return bool(form_id) and form_id not in {".", ".."} and not any(sep in form_id for sep in ("/", "\\", "\0"))


class FilesystemSchemaLoader:
    """Load `<base_path>/<form_id>.json` documents."""

    def __init__(self, base_path: str | Path) -> None:
        """Initialize the loader.

        Args:
            base_path (str | Path): Directory holding schema files.
        """
        self.base_path = Path(base_path)
        logger.info("Filesystem schema loader initialised", extra={"base_path": str(self.base_path.absolute())})

    def load(self, form_id: str) -> FormSchema | None:
        """Load a schema file, returning None when it is missing or unreadable.

        Args:
            form_id (str): Form identifier, also the file stem.

        Returns:
            FormSchema | None: Parsed schema, or None.
        """
        if not _is_safe_form_id(form_id):
            logger.warning("Rejected unsafe form identifier", extra={"form_id": form_id})
            return None

        schema_file = self.base_path / f"{form_id}{_SCHEMA_FILE_SUFFIX}"
        if not schema_file.is_file():
            logger.warning("Schema file not found", extra={"schema_path": str(schema_file)})
            return None

        try:
            schema = parse_schema(schema_file.read_bytes())
        except (OSError, MalformedSchemaError):
            logger.exception("Failed to read schema file", extra={"schema_path": str(schema_file)})
            return None
        logger.info("Loaded form schema from filesystem", extra={"schema_path": str(schema_file)})
        return schema


class PackageSchemaLoader:
    """Load `<prefix>/<form_id>.json` documents bundled inside an importable package."""

    def __init__(self, package: str, prefix: str = "") -> None:
        """Initialize the loader.

        Args:
            package (str): Importable package name.
            prefix (str): Optional sub-directory inside the package.
        """
        self.package = package
        self.prefix_parts = tuple(part for part in prefix.replace("\\", "/").split("/") if part)

    def load(self, form_id: str) -> FormSchema | None:
        """Load a bundled schema, returning None when it is missing or unreadable.

        Args:
            form_id (str): Form identifier, also the resource stem.

        Returns:
            FormSchema | None: Parsed schema, or None.
        """
        if not _is_safe_form_id(form_id):
            logger.warning("Rejected unsafe form identifier", extra={"form_id": form_id})
            return None

        resource_path = "/".join((*self.prefix_parts, f"{form_id}{_SCHEMA_FILE_SUFFIX}"))
        try:
            resource = resources.files(self.package).joinpath(*self.prefix_parts, f"{form_id}{_SCHEMA_FILE_SUFFIX}")
        except ModuleNotFoundError:
            logger.exception("Schema package is not importable", extra={"package": self.package})
            return None

        if not resource.is_file():
            logger.warning("Schema not found in package", extra={"package": self.package, "resource": resource_path})
            return None

        try:
            schema = parse_schema(resource.read_bytes())
        except (OSError, MalformedSchemaError):
            logger.exception("Failed to read packaged schema", extra={"package": self.package, "resource": resource_path})
            return None
        logger.info("Loaded form schema from package", extra={"package": self.package, "resource": resource_path})
        return schema


class RepositorySchemaLoader:
    """Load schemas created through the schema manager."""

    def __init__(self, repository: SchemaRepository) -> None:
        """Initialize the loader.

        Args:
            repository (SchemaRepository): Schema persistence.
        """
        self._repository = repository

    def load(self, form_id: str) -> FormSchema | None:
        """Return the persisted schema, or None."""
        logger.debug("Loading schema from repository", extra={"form_id": form_id})
        return self._repository.find_by_id(form_id)


def build_schema_loader(settings: Settings, repository: SchemaRepository | None = None) -> SchemaLoader:
    """Select the schema loader configured by `SCHEMA_SOURCE`.

    Args:
        settings (Settings): Runtime settings.
        repository (SchemaRepository | None): Repository used by the 'repository' source,
            a file store under `SCHEMA_STORE_DIR` when omitted.

    Returns:
        SchemaLoader: Configured loader.
    """
    if settings.schema_source == SchemaSource.FILESYSTEM:
        return FilesystemSchemaLoader(settings.schema_dir or "")
    if settings.schema_source == SchemaSource.REPOSITORY:
        if repository is None:
            repository = SchemaStore(root=Path(settings.schema_store_dir))
        return RepositorySchemaLoader(repository)
    return PackageSchemaLoader(settings.schema_package, settings.schema_prefix)
