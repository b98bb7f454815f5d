"""
Resolution and validation engine.

Runs resolution over a whole list of parameters and produces one of two
outcomes: the resolved name -> value mapping for programmatic use, or a
sorted list of per-parameter pass/fail results for display.

Manifesto:
    A user fixing a configuration should see every problem in one pass,
    not one at a time. ``validate()`` therefore evaluates every parameter
    independently and never aborts early, while ``resolve_all()`` stops at
    the first failure for callers that only need the values.

Architecture:
    ::

        params + config
              │
              ├── resolve_all() ─────────> Ok({name: value})
              │                            Err(AggregateValidationError)
              │
              ├── validate() ────────────> [ValidationResult, ...]  (sorted by name)
              │
              └── validate_and_report() ─> reporter(results)
                                           Ok(results) | Err(ValidationFailedError)

Features:
    - **Partial-failure design:** One failing parameter never blocks the others
    - **Deterministic output:** Results sorted by name, independent of
      declaration order and mapping iteration order
    - **Strict mode:** Configuration keys without a matching parameter are
      reported instead of being silently ignored
    - **Explicit registry:** Each engine owns an immutable ConstraintRegistry

Examples:
    >>> from automation_standard.framework import Parameter, Source, int_maximum
    >>> count = Parameter(name="count", source=Source.PARAMETER, constraints=(int_maximum(10),))
    >>> [r.passed for r in validate([count], {"count": "5"})]
    [True]
    >>> str(validate([count], {"count": "20"})[0].error)
    'int-maximum: input 20 was greater than 10'

Guardrails:
    ❌ DON'T: Use resolve_all() to build a report for users
    ✅ DO: Use validate() / validate_and_report() to show everything wrong

    ❌ DON'T: Parse ValidationFailedError for details
    ✅ DO: Inspect the sorted ValidationResult list

Tags:
    automation-standard, framework, engine, validation, partial-failure

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass

from automation_standard.core.errors import (
    AggregateValidationError,
    ConstraintViolationError,
    UnmatchedParameterError,
    ValidationFailedError,
)
from automation_standard.core.logging import get_logger
from automation_standard.core.result import Err, Ok, Result
from automation_standard.framework.constraints import ConstraintRegistry, default_registry
from automation_standard.framework.parameter import Parameter, ensure_unique
from automation_standard.framework.source import Source
from automation_standard.framework.values import Values

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome for one parameter (or one stray configuration key)."""

    name: str
    message: str
    error: Exception | None = None

    @property
    def passed(self) -> bool:
        return self.error is None


Reporter = Callable[[Sequence[ValidationResult]], None]


class ValidationEngine:
    """Resolves and validates parameter lists against one constraint registry.

    Args:
        registry: Constraint catalogue used for every check.
        environ: Environment mapping for ENVIRONMENT sources; ``os.environ``
            when omitted.
    """

    def __init__(
        self,
        registry: ConstraintRegistry | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ):
        self.registry = registry or default_registry()
        self.environ = environ

    def resolve(self, parameter: Parameter, config: Mapping[str, str]) -> Result[str]:
        """Resolve one parameter, stopping at the first failing constraint."""
        return parameter.resolve(config, registry=self.registry, environ=self.environ)

    def resolve_all(
        self,
        params: Iterable[Parameter],
        config: Mapping[str, str],
    ) -> Result[dict[str, str]]:
        """Resolve every parameter, stopping the batch at the first failure.

        Raises:
            DuplicateParameterError: two parameters share a name.
        """
        resolved: dict[str, str] = {}
        for parameter in ensure_unique(params):
            value, errors = self._evaluate(parameter, config)
            if errors:
                logger.info(
                    "engine.resolve_all.failed",
                    parameter=parameter.name,
                    errors=[str(e) for e in errors],
                )
                return Err(AggregateValidationError({parameter.name: errors}))
            resolved[parameter.name] = value

        logger.debug("engine.resolve_all.ok", count=len(resolved))
        return Ok(resolved)

    def resolve_values(
        self,
        params: Iterable[Parameter],
        config: Mapping[str, str],
    ) -> Result[Values]:
        """Like :meth:`resolve_all`, wrapped in a :class:`Values` holder."""
        parameters = ensure_unique(params)
        return self.resolve_all(parameters, config).map(
            lambda resolved: Values(parameters.names(), resolved)
        )

    def validate(
        self,
        params: Iterable[Parameter],
        config: Mapping[str, str],
        *,
        strict: bool = False,
    ) -> list[ValidationResult]:
        """Evaluate every parameter independently; results sorted by name.

        With ``strict=True`` every configuration key that has no matching
        CONFIGURATION_PARAMETER-sourced parameter is reported as a failure.

        Raises:
            DuplicateParameterError: two parameters share a name.
        """
        parameters = ensure_unique(params)
        results: list[ValidationResult] = []

        if strict:
            expected = {p.name for p in parameters.with_source(Source.PARAMETER)}
            for name in sorted(config):
                if name not in expected:
                    results.append(
                        ValidationResult(name=name, message=name, error=UnmatchedParameterError(name))
                    )

        for parameter in parameters:
            _, errors = self._evaluate(parameter, config)
            results.append(
                ValidationResult(
                    name=parameter.name,
                    message=parameter.describe(),
                    error=_single_error(errors),
                )
            )

        results.sort(key=lambda r: r.name)

        failed = sum(1 for r in results if not r.passed)
        logger.info("engine.validate.completed", total=len(results), failed=failed, strict=strict)
        return results

    def validate_and_report(
        self,
        params: Iterable[Parameter],
        config: Mapping[str, str],
        *,
        strict: bool = True,
        reporter: Reporter | None = None,
    ) -> Result[list[ValidationResult]]:
        """Validate, hand the sorted results to ``reporter``, and summarize.

        Returns ``Err(ValidationFailedError)`` when any entry failed. The
        error carries no per-entry detail.
        """
        if reporter is None:
            from automation_standard.framework.report import render_results

            reporter = render_results

        results = self.validate(params, config, strict=strict)
        reporter(results)

        if any(not r.passed for r in results):
            return Err(ValidationFailedError())
        return Ok(results)

    def _evaluate(
        self, parameter: Parameter, config: Mapping[str, str]
    ) -> tuple[str | None, list[Exception]]:
        value, errors = parameter.resolve_all_errors(
            config, registry=self.registry, environ=self.environ
        )
        if errors:
            logger.debug(
                "engine.resolve.failed",
                parameter=parameter.name,
                source=parameter.source.value,
                errors=[str(e) for e in errors],
            )
        else:
            logger.debug("engine.resolve.ok", parameter=parameter.name)
        return value, errors


def _single_error(errors: list[Exception]) -> Exception | None:
    if not errors:
        return None
    if len(errors) == 1:
        return errors[0]
    return ConstraintViolationError.combine(errors)


# =============================================================================
# Module-level conveniences (built-in registry, process environment)
# =============================================================================


def resolve_all(params: Iterable[Parameter], config: Mapping[str, str]) -> Result[dict[str, str]]:
    """See :meth:`ValidationEngine.resolve_all`."""
    return ValidationEngine().resolve_all(params, config)


def validate(
    params: Iterable[Parameter],
    config: Mapping[str, str],
    *,
    strict: bool = False,
) -> list[ValidationResult]:
    """See :meth:`ValidationEngine.validate`."""
    return ValidationEngine().validate(params, config, strict=strict)


def validate_and_report(
    params: Iterable[Parameter],
    config: Mapping[str, str],
    *,
    strict: bool = True,
    reporter: Reporter | None = None,
) -> Result[list[ValidationResult]]:
    """See :meth:`ValidationEngine.validate_and_report`."""
    return ValidationEngine().validate_and_report(
        params, config, strict=strict, reporter=reporter
    )


__all__ = [
    "Reporter",
    "ValidationEngine",
    "ValidationResult",
    "resolve_all",
    "validate",
    "validate_and_report",
]
