"""Parameter declaration, resolution and validation.

Architecture::

    source.py        Source enum (ENVIRONMENT_VARIABLE, FILE, CONFIGURATION_PARAMETER)
    constraints.py   Constraint model, ConstraintRegistry, built-in factories
    parameter.py     Parameter model, raw resolution, ParameterSet
    values.py        Values holder handed to action handlers
    engine.py        ValidationEngine: resolve_all / validate / validate_and_report
    report.py        Pass/fail rendering (rich)
    config.py        JSON / YAML configuration loading
    manifest.py      Manifest model and JSON / YAML (de)serialization
    application.py   Application model and generated Typer CLI
"""

from automation_standard.framework.application import Application, build_cli, run
from automation_standard.framework.config import load_config, parse_config
from automation_standard.framework.constraints import (
    Constraint,
    ConstraintKind,
    ConstraintRegistry,
    boolean,
    constraint_by_name,
    default_registry,
    docker_image,
    enum_of,
    int_maximum,
    int_minimum,
)
from automation_standard.framework.engine import (
    ValidationEngine,
    ValidationResult,
    resolve_all,
    validate,
    validate_and_report,
)
from automation_standard.framework.manifest import Action, Manifest, Metadata, load_manifest
from automation_standard.framework.parameter import (
    Parameter,
    ParameterSet,
    join_parameters,
    sort_parameters,
)
from automation_standard.framework.report import format_results, render_results
from automation_standard.framework.source import Source
from automation_standard.framework.values import Values

__all__ = [
    "Action",
    "Application",
    "Constraint",
    "ConstraintKind",
    "ConstraintRegistry",
    "Manifest",
    "Metadata",
    "Parameter",
    "ParameterSet",
    "Source",
    "ValidationEngine",
    "ValidationResult",
    "Values",
    "boolean",
    "build_cli",
    "constraint_by_name",
    "default_registry",
    "docker_image",
    "enum_of",
    "format_results",
    "int_maximum",
    "int_minimum",
    "join_parameters",
    "load_config",
    "load_manifest",
    "parse_config",
    "render_results",
    "resolve_all",
    "run",
    "sort_parameters",
    "validate",
    "validate_and_report",
]
