"""Configuration loading with pydantic-settings.

Sources, highest precedence first:
1. Direct kwargs
2. Environment variables (CHANGECOV__SECTION__KEY)
3. Conventional CI variables (BASE_REF, GITHUB_TOKEN, PR_NUMBER, GITHUB_REPOSITORY)
4. Repo config (.changecov.yaml at the repository root)
5. Built-in defaults
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from changecov.config.constants import CONFIG_FILENAME, CONVENTIONAL_ENV_VARS, ENV_PREFIX
from changecov.config.models import (
    ChangeCovConfig,
    CoverageConfig,
    DiffConfig,
    GitHubConfig,
    LoggingConfig,
    ReportConfig,
)
from changecov.core.errors import ConfigError


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _conventional_env(environ: Mapping[str, str]) -> dict[str, Any]:
    """Map CI-provided variables onto nested config sections."""
    result: dict[str, dict[str, str]] = {}
    for name, (section, key) in CONVENTIONAL_ENV_VARS.items():
        value = environ.get(name, "").strip()
        if value:
            result.setdefault(section, {})[key] = value
    return result


class _DictSource(PydanticBaseSettingsSource):
    """Settings source that returns a pre-built nested dict."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._data


def _make_settings_class(
    yaml_config: dict[str, Any],
    ci_config: dict[str, Any],
) -> type[BaseSettings]:
    """Create a Settings class bound to this load's YAML and CI sources."""

    class ChangeCovSettings(BaseSettings):
        """Root config. Env vars: CHANGECOV__COVERAGE__THRESHOLD, CHANGECOV__DIFF__BASE_REF, etc."""

        model_config = SettingsConfigDict(
            env_prefix=ENV_PREFIX,
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        diff: DiffConfig = DiffConfig()
        coverage: CoverageConfig = CoverageConfig()
        github: GitHubConfig = GitHubConfig()
        report: ReportConfig = ReportConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # First wins
            return (
                init_settings,
                env_settings,
                _DictSource(settings_cls, ci_config),
                _DictSource(settings_cls, yaml_config),
            )

    return ChangeCovSettings


def load_config(
    repo_root: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    **kwargs: Any,
) -> ChangeCovConfig:
    """Load config: defaults < repo YAML < CI vars < CHANGECOV__ env < kwargs.

    Args:
        repo_root: Repository root holding .changecov.yaml.
                   Defaults to current working directory.
        environ: Environment for the conventional CI variables. Defaults to os.environ.
        **kwargs: Override values (highest precedence), keyed by section.

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    repo_root = repo_root or Path.cwd()
    yaml_config = _load_yaml(repo_root / CONFIG_FILENAME)
    ci_config = _conventional_env(os.environ if environ is None else environ)

    settings_cls = _make_settings_class(yaml_config, ci_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e

    return ChangeCovConfig.model_validate(settings.model_dump())
