"""Human-readable pass/fail rendering of validation results."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape

from automation_standard.framework.engine import ValidationResult

PASS_PREFIX = "[PASS]"
FAIL_PREFIX = "[FAIL]"
DETAIL_PREFIX = "       ↳"


def format_results(results: Sequence[ValidationResult]) -> list[str]:
    """Plain-text report lines, one or two per result."""
    lines: list[str] = []
    for result in results:
        if result.passed:
            lines.append(f"{PASS_PREFIX} {result.message}")
        else:
            lines.append(f"{FAIL_PREFIX} {result.message}")
            lines.append(f"{DETAIL_PREFIX} {result.error}")
    return lines


def render_results(results: Sequence[ValidationResult], console: Console | None = None) -> None:
    """Print a colored pass/fail line per result."""
    console = console or Console()
    for result in results:
        if result.passed:
            console.print(f"[green]{escape(PASS_PREFIX)} {escape(result.message)}[/green]", soft_wrap=True)
        else:
            console.print(f"[red]{escape(FAIL_PREFIX)} {escape(result.message)}[/red]", soft_wrap=True)
            console.print(f"[red]{DETAIL_PREFIX} {escape(str(result.error))}[/red]", soft_wrap=True)


def silent_reporter(results: Sequence[ValidationResult]) -> None:
    """Reporter that prints nothing."""


def console_reporter(console: Console):
    """Reporter bound to a specific console."""

    def report(results: Sequence[ValidationResult]) -> None:
        render_results(results, console)

    return report


__all__ = [
    "console_reporter",
    "format_results",
    "render_results",
    "silent_reporter",
]
