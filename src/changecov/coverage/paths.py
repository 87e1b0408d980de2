"""Reconcile diff paths with coverage-report paths.

Diffs name files relative to the repository root; coverage tools often write
absolute paths or paths relative to some other root. Two paths match when
they are equal after normalization or one is a path-segment suffix of the
other. This is stricter than a plain string suffix: ``src/a.ts`` matches
``/ci/build/src/a.ts`` but never ``mysrc/a.ts``.

Assumption, not guarantee: suffixes are unambiguous in practice. If two
report entries both match a diff path, the first one in report order wins.
"""

from __future__ import annotations

from typing import Protocol

from changecov.coverage.models import CoverageReport, FileCoverage


def normalize_path(path: str) -> str:
    """Strip a leading ``./`` and use forward slashes."""
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path


def paths_match(left: str, right: str) -> bool:
    """Equal after normalization, or one ends with ``/`` + the other."""
    a = normalize_path(left)
    b = normalize_path(right)
    if not a or not b:
        return False
    if a == b:
        return True
    return a.endswith("/" + b) or b.endswith("/" + a)


class PathResolver(Protocol):
    """Finds the coverage entry for a diff path."""

    def resolve(self, path: str, report: CoverageReport) -> FileCoverage | None: ...


class SuffixPathResolver:
    """Default resolver: exact key first, then first suffix match in report order."""

    def resolve(self, path: str, report: CoverageReport) -> FileCoverage | None:
        exact = report.get(path)
        if exact is not None:
            return exact
        for coverage in report:
            if paths_match(path, coverage.path):
                return coverage
        return None
