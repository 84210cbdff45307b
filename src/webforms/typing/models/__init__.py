"""Core domain model exports."""

from webforms.typing.models.schema import (
    ComponentData,
    ComponentValidation,
    FormColumn,
    FormComponent,
    FormSchema,
    SelectValue,
)
from webforms.typing.models.submission import SubmissionResult

__all__ = [
    "ComponentData",
    "ComponentValidation",
    "FormColumn",
    "FormComponent",
    "FormSchema",
    "SelectValue",
    "SubmissionResult",
]
