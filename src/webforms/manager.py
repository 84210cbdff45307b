"""Schema lifecycle management (create, update, read, delete)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from webforms import logger
from webforms.exceptions import AlreadyExistsError, InvalidSchemaError, NotFoundError
from webforms.schema_document import iter_components

if TYPE_CHECKING:
    from webforms.registry import SchemaRegistry
    from webforms.typing.models import FormSchema
    from webforms.typing.protocol import SchemaRepository

BUTTON_TYPE = "button"


def validate_schema_structure(schema: FormSchema | None) -> None:
    """Check a schema before it is persisted.

    Every node, whether reached through `components` or through a column,
    needs a non-blank type, and input nodes other than buttons need a
    non-blank key.

    Args:
        schema (FormSchema | None): Schema to check.

    Raises:
        InvalidSchemaError: On the first structural violation found.
    """
    if schema is None:
        raise InvalidSchemaError(message="Schema must not be None")
    if not schema.form_id.strip():
        raise InvalidSchemaError(message="Schema form_id must not be blank")
    if not schema.components:
        raise InvalidSchemaError(message="Schema must have at least one component")

    for component in iter_components(schema.components):
        if not (component.type or "").strip():
            raise InvalidSchemaError(message=f"Component type must not be blank (key: {component.key})")
        if (
            component.input
            and component.type.lower() != BUTTON_TYPE
            and not (component.key or "").strip()
        ):
            raise InvalidSchemaError(message=f"Input component must have a non-blank key (type: {component.type})")


class SchemaManager:
    """Create, update, read and delete schemas, keeping the registry consistent.

    The manager never populates the registry. Update and delete evict the
    identifier synchronously, before returning, so the next lookup reloads it.
    """

    def __init__(self, repository: SchemaRepository, registry: SchemaRegistry) -> None:
        """Initialize the manager.

        Args:
            repository (SchemaRepository): Schema persistence.
            registry (SchemaRegistry): Cache to evict on mutation.
        """
        self._repository = repository
        self._registry = registry

    def create_schema(self, schema: FormSchema) -> FormSchema:
        """Persist a new schema.

        Args:
            schema (FormSchema): Schema to create.

        Raises:
            AlreadyExistsError: If the identifier is already persisted.

        Returns:
            FormSchema: The schema, unchanged.
        """
        validate_schema_structure(schema)
        if self._repository.exists_by_id(schema.form_id):
            raise AlreadyExistsError(form_id=schema.form_id)

        self._repository.save(schema)
        logger.info("Created form schema", extra={"form_id": schema.form_id, "version": schema.version})
        return schema

    def update_schema(self, schema: FormSchema) -> FormSchema:
        """Replace an existing schema and evict it from the registry.

        Args:
            schema (FormSchema): New content for an existing identifier.

        Raises:
            NotFoundError: If the identifier is not persisted.

        Returns:
            FormSchema: The schema, unchanged.
        """
        validate_schema_structure(schema)
        if not self._repository.exists_by_id(schema.form_id):
            raise NotFoundError(form_id=schema.form_id)

        self._repository.save(schema)
        self._registry.evict(schema.form_id)
        logger.info(
            "Updated form schema (cache evicted)",
            extra={"form_id": schema.form_id, "version": schema.version},
        )
        return schema

    def get_schema(self, form_id: str) -> FormSchema | None:
        """Return the persisted schema, bypassing the registry."""
        return self._repository.find_by_id(form_id)

    def list_schemas(self) -> list[FormSchema]:
        """Return every persisted schema."""
        return self._repository.find_all()

    def delete_schema(self, form_id: str) -> None:
        """Delete a schema and evict it from the registry.

        Args:
            form_id (str): Form identifier.

        Raises:
            NotFoundError: If the identifier is not persisted.
        """
        if not self._repository.exists_by_id(form_id):
            raise NotFoundError(form_id=form_id)

        self._repository.delete_by_id(form_id)
        self._registry.evict(form_id)
        logger.info("Deleted form schema (cache evicted)", extra={"form_id": form_id})
