"""
Structured error types for automation-standard.

Provides a typed hierarchy of errors with categories and context so that
parameter declaration mistakes, missing sources, and constraint violations
can be told apart, logged with structure, and rendered to users.

The hierarchy separates two very different kinds of failure:

- **Construction errors** are programming mistakes in how an application
  declared its parameters (unknown constraint, duplicate parameter name,
  enum with fewer than two members, invalid source tag). They are fatal at
  startup; a user cannot fix them by changing input.
- **Source and validation errors** are user-fixable. They are captured per
  parameter during a validation pass and reported, never thrown out of it.

Manifesto:
    - **Typed Error Hierarchy:** Different error types for different failures
    - **Fail loudly on declaration bugs:** Construction errors always raise
    - **Rich Context:** Errors carry metadata for logging and reporting
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       StandardError                              │
        │              (category, context, cause)                          │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  ConstructionError        SourceNotFoundError   ValidationError  │
        │  (CONSTRUCTION)           (SOURCE)              (VALIDATION)     │
        │       │                   ValueNotFoundError         │           │
        │  UnknownConstraintError   (SOURCE)          ConstraintViolation  │
        │  DuplicateParameterError                    AggregateValidation  │
        │  InsufficientEnumValues                     ValidationFailed     │
        │  UnknownSourceError                         UnmatchedParameter   │
        │  UndeclaredParameterError                                        │
        │                                                                  │
        │  ConfigError              ManifestError                          │
        │  (CONFIG)                 (PARSE)                                │
        │       │                        │                                 │
        │  MissingConfigError       UnknownActionError                     │
        │  InvalidConfigError                                              │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = SourceNotFoundError("the environment variable \\"TOKEN\\" was not found")
    >>> error.category
    <ErrorCategory.SOURCE: 'SOURCE'>
    >>> error.with_context(parameter="TOKEN").context.parameter
    'TOKEN'

Guardrails:
    ❌ DON'T: Catch ConstructionError to keep going
    ✅ DO: Let it propagate; fix the declaration

    ❌ DON'T: Raise SourceNotFoundError out of a validation pass
    ✅ DO: Capture it into the per-parameter ValidationResult

Tags:
    error-handling, exception-hierarchy, error-context, automation-standard

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and reporting.

    Categories are grouped by who can fix the problem:
    - **Developer (fatal at startup):** CONSTRUCTION, INTERNAL
    - **User (fix the input):** SOURCE, VALIDATION, CONFIG, PARSE

    Attributes:
        CONSTRUCTION: Invalid parameter or constraint declarations
        SOURCE: Environment variable, file, or config key not present
        VALIDATION: Value failed one or more constraints
        CONFIG: Configuration file missing or malformed
        PARSE: Manifest document could not be parsed
        INTERNAL: Bugs, unexpected state
    """

    CONSTRUCTION = "CONSTRUCTION"  # Declaration mistakes
    SOURCE = "SOURCE"              # Value missing from its source
    VALIDATION = "VALIDATION"      # Constraint violations
    CONFIG = "CONFIG"              # Config file missing/invalid
    PARSE = "PARSE"                # Manifest format errors
    INTERNAL = "INTERNAL"          # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover the metadata this library attaches most often; any
    other key goes into ``metadata``. ``to_dict()`` serializes non-None
    fields for structured logging.

    Attributes:
        parameter: Name of the parameter being resolved
        source: Source literal of that parameter
        constraint: Name of the constraint being checked
        action: Action being validated ("create" or "destroy")
        path: Filesystem path involved (config file, manifest)
        metadata: Additional key-value pairs
    """

    parameter: str | None = None
    source: str | None = None
    constraint: str | None = None
    action: str | None = None
    path: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["parameter", "source", "constraint", "action", "path"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class StandardError(Exception):
    """
    Base exception for all automation-standard errors.

    Every instance carries:
    - **category:** ErrorCategory for classification
    - **context:** ErrorContext with structured metadata
    - **cause:** Optional underlying exception for chaining

    Subclasses set ``default_category`` to provide a sensible default.

    Examples:
        >>> error = StandardError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["error_type"]
        'StandardError'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> StandardError:
        """
        Add context to this error (fluent API).

        Usage:
            raise SourceNotFoundError("missing").with_context(parameter="TOKEN")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONSTRUCTION ERRORS (Programming mistakes, fatal at startup)
# =============================================================================


class ConstructionError(StandardError):
    """
    Invalid parameter or constraint declaration.

    Raised eagerly while an application builds its parameter lists. These
    are bugs in the embedding application, not user input problems.
    """

    default_category = ErrorCategory.CONSTRUCTION


class UnknownConstraintError(ConstructionError):
    """A constraint name is not present in the registry."""

    def __init__(self, name: str, message: str | None = None):
        self.name = name
        super().__init__(message or f"unknown constraint {name!r}")
        self.context.constraint = name


class DuplicateParameterError(ConstructionError):
    """Two parameters in one list share a name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"duplicate spec name {name!r}")
        self.context.parameter = name


class InsufficientEnumValuesError(ConstructionError):
    """An enum constraint was declared with fewer than two allowed values."""

    def __init__(self, values: Sequence[str]):
        self.values = tuple(values)
        super().__init__(
            f"enum constraint requires at least 2 values, got {len(self.values)}"
        )
        self.context.constraint = "enum"


class UnknownSourceError(ConstructionError):
    """A parameter carries a source tag outside the closed enumeration."""

    def __init__(self, source: Any):
        self.source = source
        super().__init__(f"unknown source {source!r}")


class UndeclaredParameterError(ConstructionError, KeyError):
    """A value was requested for a name never declared in the parameter list."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown parameter {name!r}")
        self.context.parameter = name

    def __str__(self) -> str:
        return self.message


# =============================================================================
# SOURCE ERRORS (User-fixable)
# =============================================================================


class SourceNotFoundError(StandardError):
    """The declared source (env var, file, config key) had no value."""

    default_category = ErrorCategory.SOURCE


class ValueNotFoundError(StandardError):
    """A declared parameter has no resolved value in a Values holder."""

    default_category = ErrorCategory.SOURCE

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"no value was resolved for parameter {name!r}")
        self.context.parameter = name


# =============================================================================
# VALIDATION ERRORS (User-fixable)
# =============================================================================


class ValidationError(StandardError):
    """
    Parameter validation error.

    Never fixed by retrying - the input must change.
    """

    default_category = ErrorCategory.VALIDATION


class ConstraintViolationError(ValidationError):
    """
    A resolved value failed one or more constraints.

    ``violations`` holds one human-readable reason per failing constraint,
    each prefixed with the constraint name.
    """

    def __init__(
        self,
        message: str,
        *,
        constraint: str | None = None,
        value: str | None = None,
        violations: Sequence[str] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.constraint = constraint
        self.value = value
        self.violations = tuple(violations) if violations is not None else (message,)
        if constraint is not None:
            self.context.constraint = constraint

    @classmethod
    def combine(cls, errors: Sequence[Exception], value: str | None = None) -> ConstraintViolationError:
        """Fold several constraint failures for one value into a single error."""
        if len(errors) == 1 and isinstance(errors[0], ConstraintViolationError):
            return errors[0]
        reasons = [str(e) for e in errors]
        return cls("; ".join(reasons), value=value, violations=reasons)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.constraint:
            result["constraint"] = self.constraint
        if self.value is not None:
            result["value"] = self.value
        if len(self.violations) > 1:
            result["violations"] = list(self.violations)
        return result


class UnmatchedParameterError(ValidationError):
    """A configuration key has no matching configuration-sourced parameter."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"the parameter {name!r} did not have a matching spec")
        self.context.parameter = name


class AggregateValidationError(ValidationError):
    """
    Failure of a batch resolution, with the per-parameter detail collected.

    ``errors`` maps parameter name to the list of errors found for it.
    """

    def __init__(self, errors: Mapping[str, Sequence[Exception]]):
        self.errors = {name: list(errs) for name, errs in errors.items()}
        details = "; ".join(
            f"{name}: {', '.join(str(e) for e in errs)}" for name, errs in self.errors.items()
        )
        super().__init__(f"failed to resolve parameters ({details})")
        self.context.metadata["error_count"] = sum(len(e) for e in self.errors.values())

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["errors"] = {name: [str(e) for e in errs] for name, errs in self.errors.items()}
        return result


class ValidationFailedError(ValidationError):
    """
    Aggregate "validation failed" signal for control flow.

    Deliberately carries no per-parameter detail; that detail was already
    rendered and is available from the sorted result list.
    """

    def __init__(self, message: str = "validation failed", **kwargs: Any):
        super().__init__(message, **kwargs)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(StandardError):
    """Configuration file error. The file must be fixed."""

    default_category = ErrorCategory.CONFIG


class MissingConfigError(ConfigError):
    """Configuration file does not exist."""

    def __init__(self, path: str, message: str | None = None):
        self.path = path
        super().__init__(message or f"configuration file {path!r} was not found")
        self.context.path = path


class InvalidConfigError(ConfigError):
    """Configuration document is malformed or not a flat mapping."""

    def __init__(self, path: str | None, message: str, *, cause: Exception | None = None):
        self.path = path
        super().__init__(message, cause=cause)
        self.context.path = path


# =============================================================================
# MANIFEST ERRORS
# =============================================================================


class ManifestError(StandardError):
    """Manifest document could not be parsed or validated."""

    default_category = ErrorCategory.PARSE


class UnknownActionError(ManifestError):
    """An action other than create/destroy was requested."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"unknown action {action!r}")
        self.context.action = action


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "StandardError",
    # Construction
    "ConstructionError",
    "UnknownConstraintError",
    "DuplicateParameterError",
    "InsufficientEnumValuesError",
    "UnknownSourceError",
    "UndeclaredParameterError",
    # Source
    "SourceNotFoundError",
    "ValueNotFoundError",
    # Validation
    "ValidationError",
    "ConstraintViolationError",
    "UnmatchedParameterError",
    "AggregateValidationError",
    "ValidationFailedError",
    # Config
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigError",
    # Manifest
    "ManifestError",
    "UnknownActionError",
]
