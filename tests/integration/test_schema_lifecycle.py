from __future__ import annotations

from pathlib import Path

import pytest

from webforms.engine import FormEngine
from webforms.exceptions import SchemaNotFoundError
from webforms.loaders import RepositorySchemaLoader
from webforms.manager import SchemaManager
from webforms.registry import SchemaRegistry
from webforms.repositories import InMemorySchemaRepository, InMemorySubmissionRepository
from webforms.schema_document import parse_schema
from webforms.schema_store import SchemaStore


def _contact_us(*, postal_code_pattern: str | None = None) -> dict:
    components: list[dict] = [
        {"key": "fullName", "type": "textfield", "input": True, "validate": {"required": True}},
    ]
    if postal_code_pattern is not None:
        components.append(
            {"key": "postalCode", "type": "textfield", "input": True, "validate": {"pattern": postal_code_pattern}},
        )
    return {"form_id": "contact-us", "form_name": "Contact Us", "form_version": "1.0", "components": components}


@pytest.fixture(params=["memory", "filesystem"])
def repository(request, tmp_path: Path):
    if request.param == "memory":
        return InMemorySchemaRepository()
    return SchemaStore(root=tmp_path / "schemas")


def test_schema_lifecycle_keeps_engine_consistent(repository) -> None:
    registry = SchemaRegistry(RepositorySchemaLoader(repository))
    manager = SchemaManager(repository, registry)
    submissions = InMemorySubmissionRepository()
    engine = FormEngine(registry=registry, submissions=submissions)

    with pytest.raises(SchemaNotFoundError):
        engine.process("contact-us", {"fullName": "John Doe"})

    manager.create_schema(parse_schema(_contact_us()))
    assert "contact-us" not in registry

    assert engine.process("contact-us", {"fullName": "John Doe", "postalCode": "ABC"}).valid is True
    assert "contact-us" in registry

    manager.update_schema(parse_schema(_contact_us(postal_code_pattern="^[0-9]{5}$")))
    assert "contact-us" not in registry

    result = engine.process("contact-us", {"fullName": "John Doe", "postalCode": "ABC"})
    assert result.valid is False
    assert list(result.errors) == ["postalCode"]
    assert "^[0-9]{5}$" in result.errors["postalCode"]

    manager.delete_schema("contact-us")
    assert "contact-us" not in registry

    with pytest.raises(SchemaNotFoundError):
        engine.process("contact-us", {"fullName": "John Doe"})

    assert submissions.find_by_form("contact-us") == [{"fullName": "John Doe", "postalCode": "ABC"}]


def test_sample_schema_survives_persistence(repository, sample_document: dict) -> None:
    registry = SchemaRegistry(RepositorySchemaLoader(repository))
    manager = SchemaManager(repository, registry)

    manager.create_schema(parse_schema(sample_document))

    cached = registry.get(sample_document["form_id"])
    assert cached is not None
    assert cached.model_dump(mode="json", by_alias=True, exclude_unset=True) == sample_document
