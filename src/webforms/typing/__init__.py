"""Typing-centric domain modules."""

from webforms.typing.enums import ComponentKind, SchemaSource
from webforms.typing.models import (
    ComponentData,
    ComponentValidation,
    FormColumn,
    FormComponent,
    FormSchema,
    SelectValue,
    SubmissionResult,
)
from webforms.typing.protocol import SchemaLoader, SchemaRepository, SubmissionRepository

__all__ = [
    "ComponentData",
    "ComponentKind",
    "ComponentValidation",
    "FormColumn",
    "FormComponent",
    "FormSchema",
    "SchemaLoader",
    "SchemaRepository",
    "SchemaSource",
    "SelectValue",
    "SubmissionRepository",
    "SubmissionResult",
]
