"""Webforms package."""

from webforms.exceptions import (
    AlreadyExistsError,
    DependencyError,
    InvalidSchemaError,
    MalformedSchemaError,
    NotFoundError,
    PackageError,
    SchemaNotFoundError,
    SettingsError,
)
from webforms.logging import configure_logging, get_logger
from webforms.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("webforms")

__all__ = [
    "AlreadyExistsError",
    "DependencyError",
    "InvalidSchemaError",
    "MalformedSchemaError",
    "NotFoundError",
    "PackageError",
    "SchemaNotFoundError",
    "Settings",
    "SettingsError",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
]
