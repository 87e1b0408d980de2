"""changecov error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 4xxx: Coverage
- 5xxx: Delivery
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Coverage (4xxx)
    COVERAGE_REPORT_MISSING = 4001
    COVERAGE_PARSE_ERROR = 4002

    # Delivery (5xxx)
    DELIVERY_REMOTE_UNPARSEABLE = 5001
    DELIVERY_REQUEST_FAILED = 5002
    DELIVERY_INVALID_TARGET = 5003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class ChangeCovError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'COVERAGE_REPORT_MISSING')."""
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


class ConfigError(ChangeCovError):
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


class CoverageError(ChangeCovError):
    """Coverage report errors."""

    @classmethod
    def report_missing(cls, path: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_REPORT_MISSING,
            message=f"Coverage file not found: {path}",
            details={"path": path},
        )

    @classmethod
    def parse_failed(cls, path: str, reason: str) -> "CoverageError":
        return cls(
            code=ErrorCode.COVERAGE_PARSE_ERROR,
            message=f"Failed to read coverage report {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class DeliveryError(ChangeCovError):
    """Report delivery failed. Always recoverable via the console fallback."""

    @classmethod
    def remote_unparseable(cls, url: str) -> "DeliveryError":
        return cls(
            code=ErrorCode.DELIVERY_REMOTE_UNPARSEABLE,
            message=f"Could not parse GitHub repository from remote URL: {url}",
            details={"url": url},
        )

    @classmethod
    def request_failed(cls, reason: str, status: int | None = None) -> "DeliveryError":
        return cls(
            code=ErrorCode.DELIVERY_REQUEST_FAILED,
            message=f"Failed to post report: {reason}",
            retryable=status is None or status >= 500,
            details={"reason": reason, "status": status},
        )

    @classmethod
    def invalid_target(cls, field: str, value: Any) -> "DeliveryError":
        return cls(
            code=ErrorCode.DELIVERY_INVALID_TARGET,
            message=f"Invalid delivery target {field}: {value!r}",
            details={"field": field, "value": str(value)},
        )


class InternalError(ChangeCovError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
