"""
CLI layer for automation-standard.

Provides the ``standard-validate`` Typer application, which validates a
configuration file against a manifest's create or destroy inputs without
running the application itself. All validation logic lives in
``automation_standard.framework``; this package handles only terminal
transport: argument parsing, coloured output, and exit codes.

Entry point::

    standard-validate --help
"""

from automation_standard.cli.app import app

__all__ = ["app"]
