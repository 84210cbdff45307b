from __future__ import annotations

import pytest
from pydantic import ValidationError

from webforms.typing.models import (
    ComponentValidation,
    FormColumn,
    FormComponent,
    FormSchema,
    SubmissionResult,
)


def test_component_routes_unknown_properties_to_additional_properties() -> None:
    component = FormComponent.model_validate(
        {"key": "name", "type": "textfield", "input": True, "tooltip": "Your name", "customClass": "wide"},
    )

    assert component.key == "name"
    assert component.additional_properties == {"tooltip": "Your name", "customClass": "wide"}


def test_component_reads_validate_object_and_camel_case_fields() -> None:
    component = FormComponent.model_validate(
        {
            "key": "phone",
            "type": "phoneNumber",
            "inputMask": "9999-9999",
            "dataSrc": "values",
            "validate": {"required": True, "minLength": "4", "customMessage": "Phone please", "json": ""},
        },
    )

    assert component.input_mask == "9999-9999"
    assert component.data_src == "values"
    assert component.validation is not None
    assert component.validation.required is True
    assert component.validation.min_length == "4"
    assert component.validation.custom_message == "Phone please"
    assert component.validation.additional_properties == {"json": ""}


def test_component_constructor_takes_document_keys() -> None:
    component = FormComponent(key="a", type="textfield", validate=ComponentValidation(required=True))

    assert component.validation is not None
    assert component.validation.required is True
    assert component.additional_properties == {}


def test_python_field_names_are_unknown_document_keys() -> None:
    component = FormComponent.model_validate(
        {"key": "a", "validation": {"required": True}, "input_mask": "99", "data_src": "url"},
    )

    assert component.validation is None
    assert component.input_mask is None
    assert component.additional_properties == {
        "validation": {"required": True},
        "input_mask": "99",
        "data_src": "url",
    }


def test_form_schema_keeps_plain_name_and_version_as_extras() -> None:
    schema = FormSchema.model_validate({"form_id": "f", "name": "contactUs", "version": "7", "title": "Contact"})

    assert schema.name is None
    assert schema.version is None
    assert schema.additional_properties == {"name": "contactUs", "version": "7", "title": "Contact"}


def test_component_normalized_type_lowercases_and_defaults_to_textfield() -> None:
    assert FormComponent(type="phoneNumber").normalized_type == "phonenumber"
    assert FormComponent().normalized_type == "textfield"


def test_component_option_values_is_empty_without_data() -> None:
    assert FormComponent(type="select").option_values == []


def test_validation_rules_keep_numeric_bounds_as_given() -> None:
    rules = ComponentValidation.model_validate({"minLength": 3, "maxLength": ""})

    assert rules.min_length == 3
    assert rules.max_length == ""
    assert rules.has_custom_message() is False


def test_column_keeps_layout_extras() -> None:
    column = FormColumn.model_validate({"components": [], "width": 6, "push": 0, "size": "md"})

    assert column.width == 6
    assert column.additional_properties == {"push": 0, "size": "md"}


def test_form_schema_uses_document_names_for_metadata() -> None:
    schema = FormSchema.model_validate(
        {"form_id": "survey", "form_name": "Survey", "form_version": "v2", "components": [], "display": "form"},
    )

    assert schema.form_id == "survey"
    assert schema.name == "Survey"
    assert schema.version == "v2"
    assert schema.additional_properties == {"display": "form"}


def test_form_schema_requires_form_id() -> None:
    with pytest.raises(ValidationError):
        FormSchema.model_validate({"components": []})


def test_submission_result_factories() -> None:
    success = SubmissionResult.success()
    assert success.valid is True
    assert success.errors == {}

    failure = SubmissionResult.failure({"name": "Field is required"})
    assert failure.valid is False
    assert failure.errors == {"name": "Field is required"}
