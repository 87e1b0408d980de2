"""Core module exports."""

from changecov.core.errors import (
    ChangeCovError,
    ConfigError,
    CoverageError,
    DeliveryError,
    ErrorCode,
    InternalError,
)
from changecov.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "ChangeCovError",
    "ConfigError",
    "CoverageError",
    "DeliveryError",
    "ErrorCode",
    "InternalError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
]
