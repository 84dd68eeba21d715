"""Core infrastructure: errors and logging."""

from methodcatalog.core.errors import (
    CatalogError,
    ConfigError,
    ConversionError,
    ErrorCode,
    FieldIssue,
    NavigationError,
    NullParameterError,
    RemoteIOError,
    ValidationError,
)
from methodcatalog.core.logging import configure_logging, request_scope

__all__ = [
    "CatalogError",
    "ConfigError",
    "ConversionError",
    "ErrorCode",
    "FieldIssue",
    "NavigationError",
    "NullParameterError",
    "RemoteIOError",
    "ValidationError",
    "configure_logging",
    "request_scope",
]
