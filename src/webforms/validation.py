"""Recursive validation of flat submission data against a component tree.

Form.io schemas nest input components inside layout components, while the
submitted data is flat: every value is keyed at the root by its component
`key`. Validation therefore walks the tree to find input components and looks
their values up directly in the flat mapping.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from functools import lru_cache
from typing import Any

from email_validator import EmailNotValidError, validate_email

from webforms import logger
from webforms.dependencies import ensure_validation_dependencies
from webforms.typing.enums import ComponentKind
from webforms.typing.models import FormColumn, FormComponent, FormSchema

STATIC_TYPES = frozenset({"content", "htmlelement", "button"})
GRID_TYPE = "columns"
LAYOUT_TYPES = frozenset({"well", "fieldset", "columns", "flexbox", "panel", "tabs", "table", "container"})

REQUIRED_MESSAGE = "Field is required"
INVALID_EMAIL_MESSAGE = "Invalid email format"
NOT_NUMERIC_MESSAGE = "Expected a numeric value"
NOT_AN_OPTION_MESSAGE = "Value is not one of the allowed options"

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdD]?)")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

Errors = dict[str, str]
_InputValidator = Callable[[FormComponent, Any, str, Errors], None]


def classify_component(component: FormComponent) -> ComponentKind:
    """Return the traversal role of a node from its type tag and input flag.

    Args:
        component (FormComponent): Node to classify.

    Returns:
        ComponentKind: Static, grid, layout, input or other.
    """
    component_type = component.normalized_type
    if component_type in STATIC_TYPES:
        return ComponentKind.STATIC
    if component_type == GRID_TYPE:
        return ComponentKind.GRID
    if component_type in LAYOUT_TYPES:
        return ComponentKind.LAYOUT
    if component.input:
        return ComponentKind.INPUT
    return ComponentKind.OTHER


def is_blank(value: object) -> bool:
    """Return whether a submitted value counts as missing.

    Args:
        value (object): Submitted value.

    Returns:
        bool: True for None, whitespace-only strings and empty sequences.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list | tuple):
        return not value
    return False


class ValidationEngine:
    """Validate flat submission data against a form schema."""

    def __init__(self) -> None:
        """Initialize the engine.

        Raises:
            DependencyError: If email validation support is not installed.
        """
        ensure_validation_dependencies()

    def validate(self, schema: FormSchema, data: Mapping[str, Any] | None) -> Errors:
        """Validate submitted data.

        Args:
            schema (FormSchema): Form definition.
            data (Mapping[str, Any] | None): Flat submitted key/value pairs.

        Returns:
            Errors: Error message per submission key, empty when valid.
        """
        errors: Errors = {}
        _traverse_components(schema.components, data or {}, errors)
        return errors


def _traverse_components(
    components: list[FormComponent] | None,
    data: Mapping[str, Any],
    errors: Errors,
) -> None:
    for component in components or ():
        kind = classify_component(component)

        if kind is ComponentKind.STATIC:
            continue
        if kind is ComponentKind.GRID:
            _traverse_columns(component.columns, data, errors)
            continue
        if kind is ComponentKind.LAYOUT:
            _traverse_components(component.components, data, errors)
            continue

        if kind is ComponentKind.INPUT:
            _validate_input(component, data, errors)

        # Unknown layout-like kinds still carry children.
        if component.components:
            _traverse_components(component.components, data, errors)


def _traverse_columns(columns: list[FormColumn] | None, data: Mapping[str, Any], errors: Errors) -> None:
    for column in columns or ():
        _traverse_components(column.components, data, errors)


def _validate_input(component: FormComponent, data: Mapping[str, Any], errors: Errors) -> None:
    """Run the required check, then the type-specific checks of one input."""
    key = component.key
    if not key:
        return

    value = data.get(key)
    rules = component.validation

    if rules is not None and rules.required and is_blank(value):
        errors[key] = rules.custom_message if rules.has_custom_message() else REQUIRED_MESSAGE
        return
    if is_blank(value):
        return

    validator = _INPUT_VALIDATORS.get(component.normalized_type, _validate_text)
    validator(component, value, key, errors)


def _validate_text(component: FormComponent, value: Any, key: str, errors: Errors) -> None:
    """Check pattern, then minimum and maximum length.

    Each check is independent and a later failure overwrites an earlier message.
    """
    rules = component.validation
    if rules is None:
        return
    text = _as_text(value)

    if rules.pattern:
        compiled = _compile_pattern(rules.pattern)
        if compiled is not None and compiled.fullmatch(text) is None:
            errors[key] = (
                rules.custom_message
                if rules.has_custom_message()
                else f"Value does not match pattern: {rules.pattern}"
            )

    min_length = _parse_int(rules.min_length)
    if min_length is not None and len(text) < min_length:
        errors[key] = f"Value must be at least {min_length} characters"

    max_length = _parse_int(rules.max_length)
    if max_length is not None and len(text) > max_length:
        errors[key] = f"Value must be at most {max_length} characters"


def _validate_email(component: FormComponent, value: Any, key: str, errors: Errors) -> None:
    """Check address syntax only, then the text rules.

    Display names are rejected. Dotless and `.test` domains are accepted;
    other reserved names such as `localhost` are still refused by email-validator.
    """
    try:
        validate_email(
            _as_text(value),
            check_deliverability=False,
            globally_deliverable=False,
            test_environment=True,
        )
    except EmailNotValidError:
        errors[key] = INVALID_EMAIL_MESSAGE
        return
    _validate_text(component, value, key, errors)


def _validate_url(component: FormComponent, value: Any, key: str, errors: Errors) -> None:
    # No URL syntax check, only the text rules.
    _validate_text(component, value, key, errors)


def _validate_number(component: FormComponent, value: Any, key: str, errors: Errors) -> None:
    """Check numeric format, then the range held in minLength/maxLength."""
    number = _parse_decimal(_as_text(value))
    if number is None:
        errors[key] = NOT_NUMERIC_MESSAGE
        return

    rules = component.validation
    if rules is None:
        return

    minimum = _parse_float(rules.min_length)
    maximum = _parse_float(rules.max_length)
    if minimum is not None and number < minimum:
        errors[key] = f"Value must be >= {minimum}"
    if maximum is not None and number > maximum:
        errors[key] = f"Value must be <= {maximum}"


def _validate_select(component: FormComponent, value: Any, key: str, errors: Errors) -> None:
    options = component.option_values
    if not options:
        return
    text = _as_text(value)
    if not any(option.value is not None and _as_text(option.value) == text for option in options):
        errors[key] = NOT_AN_OPTION_MESSAGE


def _validate_presence_only(component: FormComponent, value: Any, key: str, errors: Errors) -> None:  # noqa: ARG001
    """Accept any non-blank value; the required check already ran."""


_INPUT_VALIDATORS: dict[str, _InputValidator] = {
    "textfield": _validate_text,
    "textarea": _validate_text,
    "password": _validate_text,
    "phonenumber": _validate_text,
    "email": _validate_email,
    "url": _validate_url,
    "number": _validate_number,
    "currency": _validate_number,
    "select": _validate_select,
    "radio": _validate_select,
    "datetime": _validate_presence_only,
    "day": _validate_presence_only,
    "time": _validate_presence_only,
    "signature": _validate_presence_only,
}


def _as_text(value: object) -> str:
    """Return the string form of a submitted or declared value.

    Booleans and None render JSON-style, lists as `[a, b]` and mappings as
    `{k=v}`, so multi-value fields are checked against a stable text.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list | tuple):
        return "[" + ", ".join(_as_text(item) for item in value) + "]"
    if isinstance(value, Mapping):
        return "{" + ", ".join(f"{_as_text(k)}={_as_text(v)}" for k, v in value.items()) + "}"
    return str(value)


@lru_cache(maxsize=256)
def _compile_pattern(pattern: str) -> re.Pattern[str] | None:
    try:
        return re.compile(pattern)
    except re.error:
        logger.warning("Ignoring invalid validation pattern", extra={"pattern": pattern})
        return None


def _parse_int(raw: str | float | None) -> int | None:
    """Parse an integer bound; blank or non-numeric bounds are absent."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    stripped = raw.strip()
    if _INTEGER_PATTERN.fullmatch(stripped) is None:
        return None
    parsed = int(stripped)
    return parsed if _INT32_MIN <= parsed <= _INT32_MAX else None


def _parse_float(raw: str | float | None) -> float | None:
    """Parse a numeric bound; blank or non-numeric bounds are absent."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        return float(raw)
    return _parse_decimal(raw)


def _parse_decimal(text: str) -> float | None:
    """Parse a plain decimal literal such as `12`, `-0.5`, `1e3` or `Infinity`.

    Python-only spellings (`1_000`, `inf`, `nan`) are not numbers here.
    """
    stripped = text.strip()
    if _DECIMAL_PATTERN.fullmatch(stripped) is None:
        return None
    return float(stripped.rstrip("fFdD"))
