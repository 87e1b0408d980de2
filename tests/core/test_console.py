"""Tests for user-facing console output."""

from __future__ import annotations

from io import StringIO

from rich.console import Console

from changecov.core.console import get_console, print_error, print_status


def _console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    return Console(file=buffer, force_terminal=False, width=120), buffer


class TestPrintStatus:
    def test_pass(self) -> None:
        console, buffer = _console()
        print_status(True, "Coverage check passed", console=console)
        assert buffer.getvalue() == "✅ Coverage check passed\n"

    def test_fail(self) -> None:
        console, buffer = _console()
        print_status(False, "Coverage check failed", console=console)
        assert buffer.getvalue() == "❌ Coverage check failed\n"


class TestPrintError:
    def test_with_hint(self) -> None:
        console, buffer = _console()
        print_error("Coverage file not found", hint="Run the tests first.", console=console)
        assert buffer.getvalue() == "❌ Coverage file not found\nRun the tests first.\n"

    def test_shared_console_writes_to_stderr(self) -> None:
        assert get_console().stderr
