"""Parsing and serialization of form schema documents."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from webforms.exceptions import MalformedSchemaError
from webforms.typing.models import FormComponent, FormSchema

SchemaDocument = str | bytes | bytearray | Mapping[str, Any]


def parse_schema(document: SchemaDocument) -> FormSchema:
    """Parse a schema document into the component tree.

    Args:
        document (SchemaDocument): JSON text/bytes or an already decoded object.

    Raises:
        MalformedSchemaError: If the document is not a JSON object holding at
            least a string `form_id`, or a declared property has the wrong shape.

    Returns:
        FormSchema: Parsed schema with every unknown property preserved.
    """
    payload: object = document
    if isinstance(document, str | bytes | bytearray):
        try:
            payload = json.loads(document)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedSchemaError(message="Schema document is not valid JSON", exc=exc) from exc

    if not isinstance(payload, Mapping):
        raise MalformedSchemaError(message="Schema document must be a JSON object")

    try:
        return FormSchema.model_validate(dict(payload))
    except ValidationError as exc:
        raise MalformedSchemaError(message="Schema document does not match the form schema shape", exc=exc) from exc


def dump_schema(schema: FormSchema) -> dict[str, Any]:
    """Serialize a schema to a JSON-compatible object.

    Only properties present in the source document (or explicitly set) are
    emitted, under their document names.

    Args:
        schema (FormSchema): Schema to serialize.

    Returns:
        dict[str, Any]: JSON-compatible payload.
    """
    return schema.model_dump(mode="json", by_alias=True, exclude_unset=True)


def dumps_schema(schema: FormSchema, *, indent: int | None = None) -> str:
    """Serialize a schema to JSON text.

    Args:
        schema (FormSchema): Schema to serialize.
        indent (int | None): Optional JSON indentation.

    Returns:
        str: JSON document.
    """
    return json.dumps(dump_schema(schema), indent=indent, ensure_ascii=False)


def iter_components(components: Iterable[FormComponent] | None) -> Iterator[FormComponent]:
    """Yield every node of a component tree depth-first in document order.

    Children listed under `components` are visited before those under
    `columns` when a node carries both.

    Args:
        components (Iterable[FormComponent] | None): Root nodes.

    Yields:
        FormComponent: Each node, parents before children.
    """
    for component in components or ():
        yield component
        yield from iter_components(component.components)
        for column in component.columns or ():
            yield from iter_components(column.components)


def find_component(schema: FormSchema, key: str) -> FormComponent | None:
    """Return the first node bound to a submission key.

    Args:
        schema (FormSchema): Schema to search.
        key (str): Component key.

    Returns:
        FormComponent | None: Matching node, or None.
    """
    return next((component for component in iter_components(schema.components) if component.key == key), None)
