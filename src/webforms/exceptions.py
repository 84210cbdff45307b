"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class DependencyError(PackageError):
    """Raised when optional runtime dependencies are missing."""

    missing_package: list[str]
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing runtime dependencies for '{self.message}': {', '.join(self.missing_package)}"


@dataclass(frozen=True)
class MalformedSchemaError(PackageError):
    """Raised when a schema document cannot be parsed into a form schema."""

    message: str
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class InvalidSchemaError(PackageError):
    """Raised when a schema fails structural validation before persistence."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class AlreadyExistsError(PackageError):
    """Raised when creating a schema whose identifier is already persisted."""

    form_id: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Schema already exists for form_id '{self.form_id}'. Use update_schema() instead."


@dataclass(frozen=True)
class NotFoundError(PackageError):
    """Raised when updating or deleting a schema that is not persisted."""

    form_id: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Schema not found for form_id '{self.form_id}'"


@dataclass(frozen=True)
class SchemaNotFoundError(PackageError):
    """Raised when a submission targets a schema the registry cannot resolve."""

    form_id: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Form schema not found for form_id '{self.form_id}'"


@dataclass
class SchemaStoreError(PackageError):
    """Raised when schema file loading/saving constraints are violated."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message
