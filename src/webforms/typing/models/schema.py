"""Form schema document models.

Only the properties the validator acts on are declared as fields. Every other
property of a Form.io document lands in the model's extra storage, exposed as
`additional_properties`, and is emitted again on serialization. Fields are
read by their document key only, so a top-level `name` or a component
`validation` property stays in the extra storage.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_COMPONENT_TYPE = "textfield"


class _DocumentNode(BaseModel):
    """Base for document nodes keyed in camelCase with open extra properties."""

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
    )

    @property
    def additional_properties(self) -> dict[str, Any]:
        """Return properties not declared as model fields, in document order."""
        extra = self.model_extra
        return extra if extra is not None else {}


class SelectValue(_DocumentNode):
    """One allowed option of a select or radio component."""

    label: str | None = None
    value: str | bool | int | float | None = None


class ComponentData(_DocumentNode):
    """Data source of a choice component."""

    values: list[SelectValue] | None = None


class ComponentValidation(_DocumentNode):
    """Nested `validate` object of a component.

    `min_length` and `max_length` hold string bounds in Form.io documents but
    numbers are accepted and kept as-is. Number components reuse them as
    numeric range bounds.
    """

    required: bool = False
    pattern: str | None = None
    min_length: str | int | float | None = None
    max_length: str | int | float | None = None
    custom_message: str | None = None
    custom: str | None = None
    only_available_items: bool = False

    def has_custom_message(self) -> bool:
        """Return whether a non-empty custom message overrides default texts."""
        return bool(self.custom_message)


class FormComponent(_DocumentNode):
    """Single node of the component tree, layout or input."""

    key: str | None = None
    type: str | None = None
    label: str | None = None

    input: bool = False
    hidden: bool = False
    disabled: bool = False
    persistent: bool | str = False
    multiple: bool = False

    validation: ComponentValidation | None = Field(default=None, alias="validate")
    input_mask: str | None = None

    components: list[FormComponent] | None = None
    columns: list[FormColumn] | None = None

    data: ComponentData | None = None
    data_src: str | None = None

    @property
    def normalized_type(self) -> str:
        """Return the lowercase type tag, falling back to a plain text field."""
        return self.type.lower() if self.type is not None else DEFAULT_COMPONENT_TYPE

    @property
    def option_values(self) -> list[SelectValue]:
        """Return declared select options, empty when none are declared."""
        if self.data is None or not self.data.values:
            return []
        return self.data.values


class FormColumn(_DocumentNode):
    """Single column of a `columns` layout."""

    components: list[FormComponent] | None = None
    width: int | float | None = None
    offset: int | float | None = None


class FormSchema(BaseModel):
    """Form definition: identity, metadata and root component tree."""

    model_config = ConfigDict(extra="allow")

    form_id: str
    name: str | None = Field(default=None, alias="form_name")
    version: str | None = Field(default=None, alias="form_version")
    components: list[FormComponent] = Field(default_factory=list)

    @property
    def additional_properties(self) -> dict[str, Any]:
        """Return top-level properties not declared as model fields."""
        extra = self.model_extra
        return extra if extra is not None else {}


FormComponent.model_rebuild()
