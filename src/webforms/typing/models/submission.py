"""Submission outcome models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SubmissionResult(BaseModel):
    """Outcome of processing one form submission."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    valid: bool
    errors: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def success(cls) -> SubmissionResult:
        """Return a result for a submission that passed every rule."""
        return cls(valid=True)

    @classmethod
    def failure(cls, errors: dict[str, str]) -> SubmissionResult:
        """Return a result carrying field-keyed validation errors.

        Args:
            errors (dict[str, str]): Error message per submission key.

        Returns:
            SubmissionResult: Invalid result.
        """
        return cls(valid=False, errors=dict(errors))
