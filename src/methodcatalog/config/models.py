"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (METHODCATALOG__SECTION__KEY)
3. Explicit or working-directory YAML (.methodcatalog/config.yaml)
4. Global YAML (~/.config/methodcatalog/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    METHODCATALOG__<SECTION>__<KEY>=<VALUE>

Examples:
    METHODCATALOG__LOGGING__LEVEL=DEBUG
    METHODCATALOG__API__BASE_URL=https://catalog.example.org/
    METHODCATALOG__NAVIGATION__DISCARD_STALE_LOADS=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from methodcatalog.config.constants import TIMEOUT_MAX_SEC

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        METHODCATALOG__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs every endpoint call and transition.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ApiConfig(BaseModel):
    """Remote catalog service configuration.

    Env vars:
        METHODCATALOG__API__BASE_URL: Service root (default: https://localhost:7056/)
        METHODCATALOG__API__API_VERSION: Route version segment (default: v1)
        METHODCATALOG__API__TIMEOUT_SEC: Per-request timeout
        METHODCATALOG__API__VERIFY_TLS: Verify server certificates
    """

    base_url: str = Field(
        default="https://localhost:7056/",
        description="Root URL of the catalog service. Resource paths are appended to it.",
    )
    api_version: str = Field(
        default="v1",
        description="Version segment in resource routes, e.g. api/v1/SpinStates.",
    )
    timeout_sec: float = Field(
        default=30.0,
        description="Per-request timeout. The navigation layer never cancels requests itself.",
    )
    verify_tls: bool = Field(
        default=True,
        description="Verify TLS certificates. Disable only for local development certificates.",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {v}")
        return v if v.endswith("/") else f"{v}/"

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if not (0 < v <= TIMEOUT_MAX_SEC):
            raise ValueError(f"timeout_sec must be in (0, {TIMEOUT_MAX_SEC}], got {v}")
        return v


class NavigationConfig(BaseModel):
    """Screen navigation behavior.

    Env vars:
        METHODCATALOG__NAVIGATION__DISCARD_STALE_LOADS: Drop screens whose load
            finishes after a newer navigation started
    """

    discard_stale_loads: bool = Field(
        default=True,
        description="When false, a late response may replace a newer screen (last writer wins).",
    )


class CatalogConfig(BaseModel):
    """Root configuration for the method catalog client.

    All settings can be configured via:
    1. Environment variables: METHODCATALOG__SECTION__KEY
    2. YAML config files (explicit path, working directory, or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    navigation: NavigationConfig = Field(default_factory=NavigationConfig)
