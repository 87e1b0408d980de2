"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config() (CLI options)
2. Environment variables (CHANGECOV__SECTION__KEY)
3. Conventional CI variables (BASE_REF, GITHUB_TOKEN, PR_NUMBER, GITHUB_REPOSITORY)
4. Repo YAML (.changecov.yaml)
5. Built-in defaults (this file)

Examples:
    CHANGECOV__LOGGING__LEVEL=DEBUG
    CHANGECOV__COVERAGE__THRESHOLD=80
    CHANGECOV__DIFF__REMOTE=upstream
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from changecov.config.constants import (
    DEFAULT_BASE_REF,
    DEFAULT_REPORT_PATH,
    DEFAULT_THRESHOLD,
    GITHUB_API_URL,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

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
        CHANGECOV__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(default="INFO", description="Root log level.")
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class DiffConfig(BaseModel):
    """Changeset selection and source-file filtering.

    Env vars:
        BASE_REF or CHANGECOV__DIFF__BASE_REF: Branch to diff against
        CHANGECOV__DIFF__REMOTE: Remote holding the base branch
    """

    base_ref: str = Field(
        default=DEFAULT_BASE_REF,
        description="Base branch. The diff is taken from its merge base with HEAD.",
    )
    remote: str = Field(
        default="origin",
        description="Remote whose copy of base_ref is preferred over the local branch.",
    )
    source_extensions: list[str] = Field(
        default_factory=lambda: [".ts", ".tsx", ".js", ".jsx"],
        description="Only files with these extensions count as source.",
    )
    test_file_pattern: str = Field(
        default=r"\.test\.(ts|tsx|js|jsx)$",
        description="Regex matching test files, which are never measured.",
    )
    declaration_marker: str = Field(
        default=".d.ts",
        description="Paths containing this marker are type declarations and skipped.",
    )
    excluded_prefixes: list[str] = Field(
        default_factory=lambda: ["scripts/", "__mocks__/"],
        description="Tooling and mock areas excluded from measurement.",
    )

    @field_validator("source_extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in v]


class CoverageConfig(BaseModel):
    """Coverage report location and pass threshold.

    Env vars:
        CHANGECOV__COVERAGE__REPORT_PATH: LCOV file, relative to the repo root
        CHANGECOV__COVERAGE__THRESHOLD: Minimum percentage to pass
    """

    report_path: str = Field(default=DEFAULT_REPORT_PATH)
    threshold: float = Field(
        default=DEFAULT_THRESHOLD,
        description="Minimum percentage of covered changed lines (0-100).",
    )
    format: Literal["auto", "lcov"] = Field(
        default="auto",
        description="Report format; auto sniffs the file by extension and content.",
    )

    @field_validator("threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not (0.0 <= v <= 100.0):
            raise ValueError(f"Threshold must be 0-100, got {v}")
        return v


class GitHubConfig(BaseModel):
    """Pull-request comment delivery.

    Both token and pr_number must be set for remote delivery; otherwise the
    report is written to stdout.
    """

    token: str | None = None
    pr_number: str | None = None
    repository: str | None = Field(
        default=None,
        description="owner/repo. Parsed from the remote URL when unset.",
    )
    api_url: str = GITHUB_API_URL
    timeout_sec: float = 10.0

    @field_validator("pr_number", mode="before")
    @classmethod
    def coerce_pr_number(cls, v: object) -> object:
        # YAML yields ints; validation of the digits happens at delivery time
        return str(v) if isinstance(v, int) else v

    @property
    def enabled(self) -> bool:
        return bool(self.token and self.pr_number)


class ReportConfig(BaseModel):
    """Report rendering."""

    format: Literal["markdown", "json"] = "markdown"
    pretty: bool = Field(
        default=True,
        description="Render markdown with rich when stdout is an interactive terminal.",
    )


class ChangeCovConfig(BaseModel):
    """Root configuration for changecov."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    diff: DiffConfig = Field(default_factory=DiffConfig)
    coverage: CoverageConfig = Field(default_factory=CoverageConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
