"""Submission processing: resolve schema, validate, persist."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from webforms import logger
from webforms.exceptions import SchemaNotFoundError
from webforms.typing.models import SubmissionResult
from webforms.validation import ValidationEngine

if TYPE_CHECKING:
    from webforms.registry import SchemaRegistry
    from webforms.typing.protocol import SubmissionRepository


class FormEngine:
    """Entry point for form submissions.

    Processing flow:

    1. Resolve the schema through the registry.
    2. Validate the flat data against it.
    3. Persist the data when it is valid.
    """

    def __init__(
        self,
        *,
        registry: SchemaRegistry,
        submissions: SubmissionRepository,
        validation_engine: ValidationEngine | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            registry (SchemaRegistry): Schema cache.
            submissions (SubmissionRepository): Persistence for valid submissions.
            validation_engine (ValidationEngine | None): Validator, a default one when omitted.
        """
        self._registry = registry
        self._submissions = submissions
        self._validation_engine = validation_engine or ValidationEngine()

    def process(self, form_id: str, data: Mapping[str, Any]) -> SubmissionResult:
        """Validate a submission and persist it when valid.

        Persistence failures propagate to the caller unchanged.

        Args:
            form_id (str): Form identifier.
            data (Mapping[str, Any]): Flat submitted key/value pairs.

        Raises:
            SchemaNotFoundError: If no schema resolves for the identifier.

        Returns:
            SubmissionResult: Validity flag and field-keyed errors.
        """
        logger.debug("Processing form submission", extra={"form_id": form_id})

        schema = self._registry.get(form_id)
        if schema is None:
            raise SchemaNotFoundError(form_id=form_id)

        errors = self._validation_engine.validate(schema, data)
        if errors:
            logger.info("Form submission rejected", extra={"form_id": form_id, "errors": len(errors)})
            return SubmissionResult.failure(errors)

        self._submissions.save(form_id, data)
        logger.info("Form submission saved", extra={"form_id": form_id})
        return SubmissionResult.success()
