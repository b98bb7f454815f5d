"""
``standard-validate``: validate a configuration against a manifest.

Loads the manifest (create and destroy inputs), loads the configuration
file, and validates the chosen action's inputs::

    standard-validate create --manifest manifest.json --config config.yaml
    standard-validate destroy -m manifest.yaml -c config.json --quiet

Exit status is 0 when every input passes and 1 otherwise (unknown action,
unreadable manifest or configuration, or any failing input).
"""

from __future__ import annotations

from pathlib import Path

import typer

from automation_standard.cli.utils import console, err_console, package_version
from automation_standard.core.errors import ManifestError, StandardError
from automation_standard.core.logging import LogContext, configure_logging, get_logger
from automation_standard.core.result import Result
from automation_standard.core.settings import get_settings
from automation_standard.framework.config import load_config
from automation_standard.framework.engine import ValidationEngine
from automation_standard.framework.manifest import load_manifest
from automation_standard.framework.report import console_reporter, silent_reporter

PROG = "standard-validate"

logger = get_logger(__name__)

app = typer.Typer(
    name=PROG,
    help="Validate a configuration file against an application manifest.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(package_version())
        raise typer.Exit()


@app.command()
def validate(
    action: str | None = typer.Argument(
        None, help="Action whose inputs are validated: create or destroy."
    ),
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", help="Path to the manifest file (JSON or YAML)."
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to the config file (JSON or YAML)."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Silence all output."),
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Print the version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Validate ACTION's inputs from MANIFEST against CONFIG."""
    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        service=settings.service_name or PROG,
    )

    with LogContext(action=action, manifest=str(manifest)):
        try:
            result = _validate(action, manifest, config, quiet=quiet)
        except StandardError as e:
            logger.info("cli.validate.error", **e.to_dict())
            if not quiet:
                err_console.print(f"{PROG}: {e}", markup=False, highlight=False, soft_wrap=True)
            raise typer.Exit(code=1) from e

        if result.is_err():
            if not quiet:
                err_console.print(f"{PROG}: {result.error}", markup=False, highlight=False, soft_wrap=True)
            raise typer.Exit(code=1)


def _validate(
    action: str | None, manifest_path: Path | None, config_path: Path | None, *, quiet: bool
) -> Result:
    if manifest_path is None:
        raise ManifestError("no manifest file was given (--manifest)")
    manifest = load_manifest(manifest_path)
    configuration = load_config(config_path) if config_path is not None else {}
    # A missing ACTION is reported like any other unknown action.
    inputs = manifest.inputs_for(action or "")

    reporter = silent_reporter if quiet else console_reporter(console)
    return ValidationEngine().validate_and_report(inputs, configuration, strict=True, reporter=reporter)


def main() -> None:
    """Console-script entry point."""
    app()


__all__ = ["app", "main", "validate"]
