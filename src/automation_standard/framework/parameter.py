"""Declared parameters and resolution of their raw values.

Manifesto:
    Actions must validate inputs before executing. A :class:`Parameter`
    declares one input - its name, a description for humans, where the
    value comes from, and the constraints it must satisfy - so that
    resolution and validation are consistent and self-documenting.

Resolution has two steps:

1. :meth:`Parameter.resolve_raw` fetches the raw string from the declared
   :class:`~automation_standard.framework.source.Source`.
2. The constraints run against that string, either stopping at the first
   failure (:meth:`Parameter.resolve`) or collecting every failure
   (:meth:`Parameter.resolve_all_errors`).

Tags:
    automation-standard, framework, params, validation, resolution

Doc-Types:
    api-reference
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from automation_standard.core.errors import (
    DuplicateParameterError,
    SourceNotFoundError,
    UnknownSourceError,
)
from automation_standard.core.logging import get_logger
from automation_standard.core.result import Err, Ok, Result
from automation_standard.framework.constraints import (
    Constraint,
    ConstraintRegistry,
    default_registry,
)
from automation_standard.framework.source import Source

logger = get_logger(__name__)


class Parameter(BaseModel):
    """A single input consumed by an application action.

    Example:
        Parameter(
            name="node-count",
            description="number of nodes to provision",
            source=Source.PARAMETER,
            constraints=(int_minimum(1), int_maximum(10)),
        )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    description: str = ""
    source: Source
    constraints: tuple[Constraint, ...] = ()

    @field_validator("source", mode="before")
    @classmethod
    def _parse_source(cls, value: object) -> Source:
        return Source.parse(value)

    def resolve_raw(
        self,
        config: Mapping[str, str],
        *,
        environ: Mapping[str, str] | None = None,
    ) -> Result[str]:
        """Fetch the raw value from this parameter's source, unchecked."""
        match self.source:
            case Source.PARAMETER:
                if self.name not in config:
                    return Err(self._not_found())
                return Ok(config[self.name])

            case Source.ENVIRONMENT:
                env = os.environ if environ is None else environ
                value = env.get(self.name)
                if value is None:
                    return Err(self._not_found())
                return Ok(value)

            case Source.FILE:
                if not _path_exists(self.name):
                    return Err(self._not_found())
                return Ok(self.name)

            case _:
                return Err(UnknownSourceError(self.source))

    def resolve(
        self,
        config: Mapping[str, str],
        *,
        registry: ConstraintRegistry | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Result[str]:
        """Resolve and check, stopping at the first failing constraint."""
        registry = registry or default_registry()
        return self.resolve_raw(config, environ=environ).flat_map(
            lambda raw: self._check_first(registry, raw)
        )

    def resolve_all_errors(
        self,
        config: Mapping[str, str],
        *,
        registry: ConstraintRegistry | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> tuple[str | None, list[Exception]]:
        """Resolve and run every constraint, collecting all failures.

        Returns:
            ``(value, [])`` on success, ``(None, errors)`` otherwise.
        """
        registry = registry or default_registry()
        raw = self.resolve_raw(config, environ=environ)
        if raw.is_err():
            return None, [raw.error]

        errors = registry.check_all(self.constraints, raw.value)
        if errors:
            return None, errors
        return raw.value, []

    def describe(self) -> str:
        return f"{self.name} ({self.description})"

    def _check_first(self, registry: ConstraintRegistry, raw: str) -> Result[str]:
        for constraint in self.constraints:
            result = registry.check(constraint, raw)
            if result.is_err():
                return result
        return Ok(raw)

    def _not_found(self) -> SourceNotFoundError:
        message = f"the {self.source.describe()} {self.name!r} was not found"
        return SourceNotFoundError(message).with_context(
            parameter=self.name, source=self.source.value
        )


def _path_exists(name: str) -> bool:
    # Any stat failure (too long, NUL byte, permission) counts as absent.
    try:
        return Path(name).exists()
    except (OSError, ValueError):
        return False


class ParameterSet(Sequence[Parameter]):
    """Ordered, name-unique collection of parameters.

    Raises:
        DuplicateParameterError: two parameters share a name.
    """

    def __init__(self, parameters: Iterable[Parameter] = ()):
        self._parameters: list[Parameter] = []
        self._by_name: dict[str, Parameter] = {}
        for parameter in parameters:
            self._add(parameter)

    def _add(self, parameter: Parameter) -> None:
        if parameter.name in self._by_name:
            raise DuplicateParameterError(parameter.name)
        self._by_name[parameter.name] = parameter
        self._parameters.append(parameter)

    def __getitem__(self, index):  # type: ignore[override]
        return self._parameters[index]

    def __len__(self) -> int:
        return len(self._parameters)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self._parameters)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item in self._by_name
        return item in self._parameters

    def get(self, name: str) -> Parameter | None:
        return self._by_name.get(name)

    def names(self) -> list[str]:
        return [p.name for p in self._parameters]

    def with_source(self, source: Source) -> list[Parameter]:
        return [p for p in self._parameters if p.source is source]

    def sorted(self) -> list[Parameter]:
        return sort_parameters(self._parameters)

    def __repr__(self) -> str:
        return f"ParameterSet({self.names()!r})"


def ensure_unique(parameters: Iterable[Parameter]) -> ParameterSet:
    """Return ``parameters`` as a ParameterSet, rejecting duplicate names."""
    if isinstance(parameters, ParameterSet):
        return parameters
    return ParameterSet(parameters)


def join_parameters(first: Iterable[Parameter], second: Iterable[Parameter]) -> ParameterSet:
    """Concatenate two parameter lists, rejecting any name seen twice."""
    return ParameterSet([*first, *second])


def sort_parameters(parameters: Iterable[Parameter]) -> list[Parameter]:
    """New list sorted by name (stable)."""
    return sorted(parameters, key=lambda p: p.name)


__all__ = [
    "Parameter",
    "ParameterSet",
    "ensure_unique",
    "join_parameters",
    "sort_parameters",
]
