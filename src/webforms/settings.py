"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from webforms.exceptions import SettingsError
from webforms.typing.enums import SchemaSource

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_name: str = "webforms"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )
    log_submission_values: bool = Field(
        default=False,
        validation_alias="LOG_SUBMISSION_VALUES",
        description="Log submitted field values instead of only their keys.",
    )

    schema_source: SchemaSource = Field(
        default=SchemaSource.PACKAGE,
        validation_alias="SCHEMA_SOURCE",
        description="Where form schemas are loaded from: 'package', 'filesystem' or 'repository'.",
    )
    schema_package: str = Field(
        default="forms",
        validation_alias="SCHEMA_PACKAGE",
        description="Importable package holding bundled schema JSON files.",
    )
    schema_prefix: str = Field(
        default="",
        validation_alias="SCHEMA_PREFIX",
        description="Sub-directory inside the schema package.",
    )
    schema_dir: str | None = Field(
        default=None,
        validation_alias="SCHEMA_DIR",
        description="Directory holding `<form_id>.json` files when source is 'filesystem'.",
    )
    schema_store_dir: str = Field(
        default="results/schemas",
        validation_alias="SCHEMA_STORE_DIR",
        description="Directory used by the file-backed schema repository.",
    )

    @model_validator(mode="after")
    def _validate_schema_source(self) -> Settings:
        """Ensure the selected schema source is fully configured.

        Raises:
            ValueError: If the filesystem source has no directory.

        Returns:
            Settings: Validated settings.
        """
        if self.schema_source == SchemaSource.FILESYSTEM and not (self.schema_dir or "").strip():
            raise ValueError("SCHEMA_DIR must be set when SCHEMA_SOURCE=filesystem")  # noqa: TRY003
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            ensure_env_file_exists()
            try:
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values.

    Args:
        exc (Exception): Caught settings initialization error.

    Returns:
        bool: True when the error represents missing settings values.
    """
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
