"""Config module exports."""

from methodcatalog.config.loader import load_config
from methodcatalog.config.models import (
    ApiConfig,
    CatalogConfig,
    LoggingConfig,
    NavigationConfig,
)

__all__ = [
    "load_config",
    "ApiConfig",
    "CatalogConfig",
    "LoggingConfig",
    "NavigationConfig",
]
