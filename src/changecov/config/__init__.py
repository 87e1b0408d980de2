"""Config module exports."""

from changecov.config.loader import load_config
from changecov.config.models import (
    ChangeCovConfig,
    CoverageConfig,
    DiffConfig,
    GitHubConfig,
    LoggingConfig,
    LogOutputConfig,
    ReportConfig,
)

__all__ = [
    "load_config",
    "ChangeCovConfig",
    "CoverageConfig",
    "DiffConfig",
    "GitHubConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ReportConfig",
]
