from __future__ import annotations

from webforms.repositories import (
    InMemorySchemaRepository,
    InMemorySubmissionRepository,
    NoOpSubmissionRepository,
)
from webforms.typing.models import FormComponent, FormSchema


def _schema(form_id: str, version: str = "1.0") -> FormSchema:
    return FormSchema(form_id=form_id, form_version=version, components=[FormComponent(key="name", type="textfield")])


def test_in_memory_schema_repository_crud() -> None:
    repository = InMemorySchemaRepository()

    repository.save(_schema("a"))
    repository.save(_schema("b"))
    repository.save(_schema("a", "2.0"))

    assert repository.exists_by_id("a")
    assert repository.find_by_id("a").version == "2.0"
    assert [schema.form_id for schema in repository.find_all()] == ["a", "b"]

    repository.delete_by_id("a")
    repository.delete_by_id("a")

    assert not repository.exists_by_id("a")
    assert repository.find_by_id("a") is None


def test_in_memory_schema_repository_isolates_stored_trees() -> None:
    repository = InMemorySchemaRepository()
    schema = _schema("a")
    repository.save(schema)

    schema.components[0].key = "mutated"
    loaded = repository.find_by_id("a")
    loaded.components[0].key = "mutated-again"

    assert repository.find_by_id("a").components[0].key == "name"


def test_in_memory_submission_repository_records_per_form() -> None:
    repository = InMemorySubmissionRepository()

    repository.save("contact-us", {"fullName": "A"})
    repository.save("other", {"x": 1})
    repository.save("contact-us", {"fullName": "B"})

    assert repository.find_by_form("contact-us") == [{"fullName": "A"}, {"fullName": "B"}]
    assert repository.find_by_form("missing") == []
    assert len(repository) == 3


def test_noop_submission_repository_accepts_anything() -> None:
    NoOpSubmissionRepository().save("contact-us", {"fullName": "A"})
