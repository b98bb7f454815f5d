"""
automation-standard - declarative parameters for automation applications.

An application declares the inputs its create and destroy actions consume
(name, description, source, constraints). The library resolves those inputs
from configuration, environment variables and files, validates them, reports
every failure in one pass, and serializes the declarations into a manifest
that external tooling can validate against without running the application.

Layout::

    automation_standard.core        Errors, Result, logging, settings
    automation_standard.framework   Constraints, parameters, engine, manifest
    automation_standard.cli         ``standard-validate`` command
"""

__version__ = "0.1.0"

from automation_standard.core.errors import (  # noqa: E402
    AggregateValidationError,
    ConstraintViolationError,
    ConstructionError,
    DuplicateParameterError,
    StandardError,
    UnknownConstraintError,
    UnknownSourceError,
    ValidationFailedError,
)
from automation_standard.core.result import Err, Ok, Result  # noqa: E402
from automation_standard.framework import (  # noqa: E402
    Action,
    Application,
    Constraint,
    ConstraintRegistry,
    Manifest,
    Parameter,
    Source,
    ValidationEngine,
    ValidationResult,
    Values,
    boolean,
    build_cli,
    constraint_by_name,
    docker_image,
    enum_of,
    int_maximum,
    int_minimum,
    load_config,
    load_manifest,
    resolve_all,
    run,
    validate,
    validate_and_report,
)

__all__ = [
    "__version__",
    # Errors / Result
    "AggregateValidationError",
    "ConstraintViolationError",
    "ConstructionError",
    "DuplicateParameterError",
    "StandardError",
    "UnknownConstraintError",
    "UnknownSourceError",
    "ValidationFailedError",
    "Err",
    "Ok",
    "Result",
    # Declarations
    "Constraint",
    "ConstraintRegistry",
    "Parameter",
    "Source",
    "boolean",
    "constraint_by_name",
    "docker_image",
    "enum_of",
    "int_maximum",
    "int_minimum",
    # Validation
    "ValidationEngine",
    "ValidationResult",
    "Values",
    "resolve_all",
    "validate",
    "validate_and_report",
    # Manifest / application
    "Action",
    "Application",
    "Manifest",
    "build_cli",
    "load_config",
    "load_manifest",
    "run",
]
