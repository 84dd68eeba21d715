"""Method catalog error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Validation
- 4xxx: Remote I/O
- 5xxx: Conversion
- 6xxx: Navigation
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Validation (3xxx)
    VALIDATION_FAILED = 3001

    # Remote I/O (4xxx)
    REMOTE_BAD_STATUS = 4001
    REMOTE_TRANSPORT = 4002
    REMOTE_BAD_PAYLOAD = 4003

    # Conversion (5xxx)
    CONVERSION_MISSING_RELATION = 5001
    CONVERSION_MISMATCHED_RELATION = 5002
    CONVERSION_UNKNOWN_RELATION = 5003
    CONVERSION_UNSUPPORTED_TIER = 5004

    # Navigation (6xxx)
    NAVIGATION_UNKNOWN_ACTION = 6001
    NAVIGATION_MISSING_ITEM_ID = 6002


@dataclass(frozen=True)
class CatalogError(Exception):
    """Base error with structured context for screens and the CLI."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'REMOTE_BAD_STATUS')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CatalogError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


@dataclass(frozen=True, slots=True)
class FieldIssue:
    """A single field-level validation failure."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ValidationError(CatalogError):
    """One or more field rules were violated. Raised before any remote call."""

    @classmethod
    def from_issues(cls, entity: str, issues: list[FieldIssue]) -> "ValidationError":
        summary = "; ".join(str(issue) for issue in issues)
        return cls(
            code=ErrorCode.VALIDATION_FAILED,
            message=f"Invalid {entity}: {summary}",
            details={"entity": entity, "issues": list(issues)},
        )

    @property
    def issues(self) -> list[FieldIssue]:
        return list(self.details.get("issues", []))

    def to_dict(self) -> dict[str, Any]:
        data = CatalogError.to_dict(self)
        data["details"] = {
            "entity": self.details.get("entity"),
            "issues": [{"field": i.field, "message": i.message} for i in self.issues],
        }
        return data


class RemoteIOError(CatalogError):
    """The remote endpoint call did not succeed."""

    @classmethod
    def bad_status(cls, method: str, url: str, status_code: int, reason: str) -> "RemoteIOError":
        return cls(
            code=ErrorCode.REMOTE_BAD_STATUS,
            message=f"{method} {url} failed with {status_code} {reason}".rstrip(),
            retryable=status_code >= 500,
            details={"method": method, "url": url, "status_code": status_code, "reason": reason},
        )

    @classmethod
    def transport(cls, method: str, url: str, reason: str) -> "RemoteIOError":
        return cls(
            code=ErrorCode.REMOTE_TRANSPORT,
            message=f"{method} {url} could not be completed: {reason}",
            retryable=True,
            details={"method": method, "url": url, "reason": reason},
        )

    @classmethod
    def bad_payload(cls, url: str, reason: str) -> "RemoteIOError":
        return cls(
            code=ErrorCode.REMOTE_BAD_PAYLOAD,
            message=f"Unreadable response from {url}: {reason}",
            details={"url": url, "reason": reason},
        )

    @property
    def status_code(self) -> int | None:
        return self.details.get("status_code")


class ConversionError(CatalogError):
    """A tier promotion was attempted without the data it requires.

    This is a programming defect, not a user-recoverable condition.
    """

    @classmethod
    def missing_relation(cls, entity: str, relation: str, target_tier: str) -> "ConversionError":
        return cls(
            code=ErrorCode.CONVERSION_MISSING_RELATION,
            message=f"Cannot build {entity} {target_tier}: relation '{relation}' was not supplied",
            details={"entity": entity, "relation": relation, "tier": target_tier},
        )

    @classmethod
    def mismatched_relation(
        cls, entity: str, relation: str, expected: int | None, actual: Any
    ) -> "ConversionError":
        return cls(
            code=ErrorCode.CONVERSION_MISMATCHED_RELATION,
            message=(
                f"Relation '{relation}' of {entity} expects id {expected}, "
                f"got {actual!r}"
            ),
            details={"entity": entity, "relation": relation, "expected": expected, "actual": str(actual)},
        )

    @classmethod
    def unknown_relation(cls, entity: str, names: list[str]) -> "ConversionError":
        return cls(
            code=ErrorCode.CONVERSION_UNKNOWN_RELATION,
            message=f"{entity} has no relation(s): {', '.join(sorted(names))}",
            details={"entity": entity, "relations": sorted(names)},
        )

    @classmethod
    def unsupported_tier(cls, entity: str, source: str, target: str) -> "ConversionError":
        return cls(
            code=ErrorCode.CONVERSION_UNSUPPORTED_TIER,
            message=f"Cannot convert {entity} from {source} to {target}",
            details={"entity": entity, "source": source, "target": target},
        )


class NavigationError(CatalogError):
    """Navigation event could not be interpreted."""

    @classmethod
    def unknown_action(cls, action: str) -> "NavigationError":
        return cls(
            code=ErrorCode.NAVIGATION_UNKNOWN_ACTION,
            message=f"Unknown navigation action: {action!r}",
            details={"action": action},
        )


class NullParameterError(NavigationError):
    """A navigation event required an item id but carried none."""

    @classmethod
    def missing_item_id(cls, action: str, target: str) -> "NullParameterError":
        return cls(
            code=ErrorCode.NAVIGATION_MISSING_ITEM_ID,
            message=f"Action '{action}' needs an item id to open the {target} screen",
            details={"action": action, "target": target},
        )
