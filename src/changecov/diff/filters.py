"""Source-file selection for changed-line measurement.

Only application source counts toward changed-line coverage. Test files,
type declarations, tooling scripts and mocks can never be "covered" in a
meaningful way, so they are dropped before any coverage lookup.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from changecov.config.models import DiffConfig

DEFAULT_SOURCE_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx")
DEFAULT_TEST_FILE_PATTERN = r"\.test\.(ts|tsx|js|jsx)$"
DEFAULT_DECLARATION_MARKER = ".d.ts"
DEFAULT_EXCLUDED_PREFIXES: tuple[str, ...] = ("scripts/", "__mocks__/")


class SourceFilter:
    """Decides whether a diff path is measurable application source."""

    __slots__ = ("extensions", "test_pattern", "declaration_marker", "excluded_prefixes")

    def __init__(
        self,
        extensions: Iterable[str] = DEFAULT_SOURCE_EXTENSIONS,
        test_pattern: str | re.Pattern[str] | None = DEFAULT_TEST_FILE_PATTERN,
        declaration_marker: str | None = DEFAULT_DECLARATION_MARKER,
        excluded_prefixes: Iterable[str] = DEFAULT_EXCLUDED_PREFIXES,
    ) -> None:
        self.extensions = tuple(extensions)
        if isinstance(test_pattern, str):
            test_pattern = re.compile(test_pattern) if test_pattern else None
        self.test_pattern = test_pattern
        self.declaration_marker = declaration_marker or None
        self.excluded_prefixes = tuple(excluded_prefixes)

    @classmethod
    def from_config(cls, config: DiffConfig) -> SourceFilter:
        return cls(
            extensions=config.source_extensions,
            test_pattern=config.test_file_pattern,
            declaration_marker=config.declaration_marker,
            excluded_prefixes=config.excluded_prefixes,
        )

    def accepts(self, path: str) -> bool:
        if not path.endswith(self.extensions):
            return False
        if self.test_pattern is not None and self.test_pattern.search(path):
            return False
        if self.declaration_marker and self.declaration_marker in path:
            return False
        return not path.startswith(self.excluded_prefixes)

    def __repr__(self) -> str:
        return (
            f"SourceFilter(extensions={self.extensions!r}, "
            f"excluded_prefixes={self.excluded_prefixes!r})"
        )
