"""
CLI utility helpers: consoles and version lookup.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from rich.console import Console

console = Console()
err_console = Console(stderr=True)


def package_version() -> str:
    """Installed distribution version, or the in-tree version when not installed."""
    try:
        return pkg_version("automation-standard")
    except PackageNotFoundError:
        from automation_standard import __version__

        return __version__
