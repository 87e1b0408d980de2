"""Coverage parser protocol."""

from pathlib import Path
from typing import Protocol

from changecov.coverage.models import CoverageReport


class CoverageParser(Protocol):
    """Protocol for coverage format parsers.

    Each parser handles one coverage format and converts it to the
    unified CoverageReport model.
    """

    @property
    def format_id(self) -> str:
        """Format identifier (e.g., 'lcov')."""
        ...

    def can_parse(self, path: Path) -> bool:
        """Check if this parser can handle the given file.

        Uses extension and content sniffing for auto-detection.
        """
        ...

    def parse(self, path: Path) -> CoverageReport:
        """Parse coverage file into the unified model.

        A missing file yields an empty report; malformed content is skipped.

        Raises:
            CoverageParseError: If the file exists but cannot be read.
        """
        ...

    def parse_text(self, text: str) -> CoverageReport:
        """Parse in-memory report content."""
        ...
