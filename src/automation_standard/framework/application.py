"""
Application runner: declare create/destroy actions once, get a CLI for free.

An :class:`Application` bundles metadata with two :class:`Action` objects.
:func:`build_cli` turns it into a Typer app with three sub-commands:

- ``create`` / ``destroy`` load an optional configuration file, validate the
  action's inputs (printing a pass/fail report), resolve them into
  :class:`~automation_standard.framework.values.Values`, and call the
  action's handler.
- ``manifest`` prints the JSON manifest, inputs sorted by name.

Usage::

    from automation_standard import Action, Application, Parameter, Source, int_minimum, run

    def create(values):
        provision(nodes=int(values.get("count")))

    app = Application(
        name="example-cluster",
        description="Provisions an example cluster",
        homepage="https://example.com/example-cluster",
        version="v1.2.3",
        create=Action(
            inputs=[Parameter(name="count", source=Source.PARAMETER, constraints=(int_minimum(1),))],
            handler=create,
        ),
    )

    if __name__ == "__main__":
        run(app)

Tags:
    automation-standard, framework, application, cli, typer

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console
from rich.markup import escape

from automation_standard.core.errors import StandardError, UnknownActionError
from automation_standard.core.logging import LogContext, configure_logging, get_logger
from automation_standard.core.settings import get_settings
from automation_standard.framework.config import load_config
from automation_standard.framework.engine import ValidationEngine
from automation_standard.framework.manifest import Action, Manifest
from automation_standard.framework.report import console_reporter

logger = get_logger(__name__)


class Application(BaseModel):
    """Full configuration for a runnable automation flavor."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, description='e.g. "Example Cluster"')
    description: str = ""
    homepage: str = ""
    version: str = ""
    create: Action = Field(default_factory=Action)
    destroy: Action = Field(default_factory=Action)

    def action(self, name: str) -> Action:
        if name == "create":
            return self.create
        if name == "destroy":
            return self.destroy
        raise UnknownActionError(name)

    def manifest(self) -> Manifest:
        return Manifest.from_application(self, version=get_settings().manifest_version)


def build_cli(
    application: Application,
    *,
    engine: ValidationEngine | None = None,
    console: Console | None = None,
) -> typer.Typer:
    """Typer app exposing ``create``, ``destroy`` and ``manifest``."""
    engine = engine or ValidationEngine()
    console = console or Console()
    err_console = Console(stderr=True)

    long_help = "\n\n".join(part for part in (application.description, application.homepage) if part)
    cli = typer.Typer(
        name=application.name,
        help=long_help or None,
        no_args_is_help=True,
        add_completion=False,
    )

    def _version_callback(value: bool) -> None:
        if value:
            typer.echo(f"{application.name} {application.version}".strip())
            raise typer.Exit()

    @cli.callback()
    def main(
        version: bool | None = typer.Option(  # noqa: UP007
            None,
            "--version",
            "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ) -> None:
        pass

    def _run(action_name: str, config_path: Path | None) -> None:
        action = application.action(action_name)
        with LogContext(action=action_name):
            try:
                config = load_config(config_path) if config_path else {}
            except StandardError as e:
                err_console.print(f"[bold red]Error[/bold red]: {escape(str(e))}", soft_wrap=True)
                raise typer.Exit(code=1) from e

            report = console_reporter(console)
            if engine.validate_and_report(action.inputs, config, reporter=report).is_err():
                raise typer.Exit(code=1)

            values = engine.resolve_values(action.inputs, config).unwrap()

            if action.handler is None:
                err_console.print(
                    f"[bold red]Error[/bold red]: no handler configured for {action_name}",
                    soft_wrap=True,
                )
                raise typer.Exit(code=1)

            logger.info("application.handler.started", application=application.name)
            try:
                action.handler(values)
            except Exception as e:
                logger.error("application.handler.failed", error=str(e), exc_info=True)
                err_console.print(f"[bold red]Error[/bold red]: {escape(str(e))}", soft_wrap=True)
                raise typer.Exit(code=1) from e
            logger.info("application.handler.completed", application=application.name)

    @cli.command("create")
    def create(
        config: Path | None = typer.Option(None, "--config", "-c", help="Path to a JSON or YAML config file."),
    ) -> None:
        """Create cluster."""
        _run("create", config)

    @cli.command("destroy")
    def destroy(
        config: Path | None = typer.Option(None, "--config", "-c", help="Path to a JSON or YAML config file."),
    ) -> None:
        """Destroy cluster."""
        _run("destroy", config)

    @cli.command("manifest")
    def manifest() -> None:
        """Print a JSON manifest."""
        typer.echo(application.manifest().to_json())

    return cli


def run(application: Application) -> None:
    """Configure logging from settings and run the application CLI.

    Exits the process with 0 on success and 1 on failure.
    """
    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        service=settings.service_name or application.name,
    )
    build_cli(application)()


__all__ = ["Application", "build_cli", "run"]
