"""Tests for configuration models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from changecov.config.models import (
    ChangeCovConfig,
    CoverageConfig,
    DiffConfig,
    GitHubConfig,
)


class TestDiffConfig:
    def test_defaults(self) -> None:
        config = DiffConfig()
        assert config.source_extensions == [".ts", ".tsx", ".js", ".jsx"]
        assert config.excluded_prefixes == ["scripts/", "__mocks__/"]
        assert config.remote == "origin"

    def test_extensions_get_leading_dot(self) -> None:
        assert DiffConfig(source_extensions=["ts", ".js"]).source_extensions == [".ts", ".js"]


class TestCoverageConfig:
    @pytest.mark.parametrize("threshold", [0, 70, 100])
    def test_valid_thresholds(self, threshold: float) -> None:
        assert CoverageConfig(threshold=threshold).threshold == threshold

    @pytest.mark.parametrize("threshold", [-1, 100.5])
    def test_invalid_thresholds(self, threshold: float) -> None:
        with pytest.raises(ValidationError):
            CoverageConfig(threshold=threshold)

    def test_format_defaults_to_auto(self) -> None:
        assert CoverageConfig().format == "auto"

    def test_only_lcov_supported(self) -> None:
        with pytest.raises(ValidationError):
            CoverageConfig(format="cobertura")  # type: ignore[arg-type]


class TestGitHubConfig:
    def test_disabled_by_default(self) -> None:
        assert not GitHubConfig().enabled

    def test_needs_token_and_pr(self) -> None:
        assert not GitHubConfig(token="t").enabled
        assert not GitHubConfig(pr_number="1").enabled
        assert GitHubConfig(token="t", pr_number="1").enabled

    def test_integer_pr_number_coerced(self) -> None:
        assert GitHubConfig(pr_number=12).pr_number == "12"  # type: ignore[arg-type]


class TestChangeCovConfig:
    def test_sections_present(self) -> None:
        config = ChangeCovConfig()
        assert config.logging.level == "INFO"
        assert config.report.pretty is True
