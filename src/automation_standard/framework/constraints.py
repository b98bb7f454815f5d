"""
Constraint catalogue, registry, and checking protocol.

A :class:`Constraint` is a named, optionally parameterized restriction on a
parameter's raw string value (``int-maximum`` with value ``"10"``). The
:class:`ConstraintRegistry` owns the fixed catalogue of constraint kinds,
constructs constraints by name, and checks given values against them.

Manifesto:
    Validation rules should be declared once, serialized with the manifest,
    and evaluated identically everywhere. The catalogue is closed: every
    rule is a :class:`ConstraintKind` member with one pure check function,
    and the registry is an explicitly constructed, immutable object owned
    by whoever checks values. There is no module-level mutable table and no
    runtime registration.

Architecture:
    ::

        ┌────────────────────────────────────────────────────────────┐
        │                  ConstraintRegistry                         │
        │         name -> ConstraintEntry(description, check)         │
        ├──────────────────┬─────────────────────────────────────────┤
        │ int-minimum      │ int(given) >= int(value)                 │
        │ int-maximum      │ int(given) <= int(value)                 │
        │ docker-image     │ host.tld/path[/path...]:tag              │
        │ bool             │ given in ("true", "false")               │
        │ enum             │ given in value.split(",")  (>= 2 items)  │
        └──────────────────┴─────────────────────────────────────────┘

        construct(name, value) ──> Constraint | UnknownConstraintError
        check(constraint, given) ──> Ok(given) | Err(ConstraintViolationError)

Examples:
    >>> from automation_standard.framework.constraints import int_maximum
    >>> int_maximum(5).check("4").is_ok()
    True
    >>> str(int_maximum(5).check("6").error)
    'int-maximum: input 6 was greater than 5'

Guardrails:
    ❌ DON'T: Construct Constraint(name="int-min") by hand
    ✅ DO: Use the factories or registry.construct(), which reject unknown names

    ❌ DON'T: Stop at the first failing constraint when building a report
    ✅ DO: Use check_all() so every violated rule is shown

Tags:
    automation-standard, framework, constraints, validation, registry

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, model_serializer

from automation_standard.core.errors import (
    ConstraintViolationError,
    ConstructionError,
    InsufficientEnumValuesError,
    UnknownConstraintError,
)
from automation_standard.core.logging import get_logger
from automation_standard.core.result import Err, Ok, Result

logger = get_logger(__name__)

DOCKER_IMAGE_PATTERN = re.compile(
    r"^[a-z0-9-]+(\.[a-z0-9-]+)+/[a-z0-9_.-]+(/[a-z0-9_.-]+)*:[a-z0-9_.-]{1,128}$"
)
_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")
_ENUM_SEPARATOR = ","


class ConstraintKind(str, Enum):
    """Built-in constraint kinds. Values are the wire names."""

    INT_MINIMUM = "int-minimum"
    INT_MAXIMUM = "int-maximum"
    DOCKER_IMAGE = "docker-image"
    BOOL = "bool"
    ENUM = "enum"


class Constraint(BaseModel):
    """A named restriction placed on a parameter value.

    ``value`` is the constraint's argument (``"10"`` for ``int-maximum``,
    ``"small,large"`` for ``enum``) and is empty when the rule takes none.
    Empty values are omitted when serialized.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    value: str = ""
    description: str = ""

    @model_serializer(mode="wrap")
    def _omit_empty_value(self, handler):
        data = handler(self)
        if isinstance(data, dict) and not data.get("value"):
            data.pop("value", None)
        return data

    def check(self, given: str, registry: ConstraintRegistry | None = None) -> Result[str]:
        """Check ``given`` against this constraint (built-in registry by default)."""
        return (registry or default_registry()).check(self, given)

    def __str__(self) -> str:
        if self.value:
            return f"{self.name}({self.value})"
        return self.name


# =============================================================================
# Check functions - (argument, given) -> failure reason or None
# =============================================================================


def _parse_int(text: str) -> int | None:
    # Decimal digits with an optional sign; no whitespace, underscores or
    # non-ASCII digits, all of which int() would accept.
    if _DECIMAL_INT.fullmatch(text) is None:
        return None
    return int(text)


def _as_ints(argument: str, given: str) -> tuple[int, int] | str:
    bound = _parse_int(argument)
    if bound is None:
        return "constraint value was not an integer"
    value = _parse_int(given)
    if value is None:
        return "given value was not an integer"
    return bound, value


def _check_int_minimum(argument: str, given: str) -> str | None:
    parsed = _as_ints(argument, given)
    if isinstance(parsed, str):
        return parsed
    minimum, value = parsed
    if value < minimum:
        return f"input {value} was less than {minimum}"
    return None


def _check_int_maximum(argument: str, given: str) -> str | None:
    parsed = _as_ints(argument, given)
    if isinstance(parsed, str):
        return parsed
    maximum, value = parsed
    if maximum < value:
        return f"input {value} was greater than {maximum}"
    return None


def _check_docker_image(argument: str, given: str) -> str | None:
    if DOCKER_IMAGE_PATTERN.fullmatch(given) is None:
        return f"input {given} was not a docker image"
    return None


def _check_bool(argument: str, given: str) -> str | None:
    if given in ("true", "false"):
        return None
    return f"input {given} was not 'true' or 'false'"


def _describe_choices(items: Sequence[str]) -> str:
    quoted = [f"'{item}'" for item in items]
    return ", ".join(quoted[:-1]) + " or " + quoted[-1]


def _check_enum(argument: str, given: str) -> str | None:
    items = argument.split(_ENUM_SEPARATOR)

    # 0 values declares nothing, and 1 value should just be a constant.
    if len(items) < 2:
        return "constraint value did not include at least 2 items"

    if given in items:
        return None
    return f"input {given} was not {_describe_choices(items)}"


# =============================================================================
# Registry
# =============================================================================


@dataclass(frozen=True)
class ConstraintEntry:
    """Catalogue entry: a kind, its description and its check function."""

    kind: ConstraintKind
    description: str
    check: Callable[[str, str], str | None]

    @property
    def name(self) -> str:
        return self.kind.value


BUILTIN_ENTRIES: tuple[ConstraintEntry, ...] = (
    ConstraintEntry(ConstraintKind.INT_MINIMUM, "ensure value minimum", _check_int_minimum),
    ConstraintEntry(ConstraintKind.INT_MAXIMUM, "ensure value maximum", _check_int_maximum),
    ConstraintEntry(
        ConstraintKind.DOCKER_IMAGE, "ensure value is a docker image name", _check_docker_image
    ),
    ConstraintEntry(ConstraintKind.BOOL, "ensure value is a boolean", _check_bool),
    ConstraintEntry(
        ConstraintKind.ENUM,
        "ensure value is one of a number of possible values",
        _check_enum,
    ),
)


class ConstraintRegistry:
    """Immutable name -> entry table with construction and checking.

    Build one with :meth:`builtin` (or from a subset of
    :data:`BUILTIN_ENTRIES`) and hand it to whatever checks values.
    """

    def __init__(self, entries: Iterable[ConstraintEntry]):
        table: dict[str, ConstraintEntry] = {}
        for entry in entries:
            if entry.name in table:
                raise ConstructionError(f"constraint {entry.name!r} listed twice")
            table[entry.name] = entry
        self._entries = MappingProxyType(table)

    @classmethod
    def builtin(cls) -> ConstraintRegistry:
        """Registry holding the full built-in catalogue."""
        return cls(BUILTIN_ENTRIES)

    def lookup(self, name: str) -> ConstraintEntry | None:
        """Return the entry for ``name``, or None when it is not catalogued."""
        return self._entries.get(name)

    def names(self) -> list[str]:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def construct(self, name: str, argument: str = "") -> Constraint:
        """Build a constraint by name.

        The argument's shape is checked when the constraint is checked, with
        one exception: an ``enum`` needs at least two members up front.

        Raises:
            UnknownConstraintError: ``name`` is not in this registry.
            InsufficientEnumValuesError: ``enum`` with fewer than two members.
        """
        entry = self.lookup(name)
        if entry is None:
            raise UnknownConstraintError(name)
        if entry.kind is ConstraintKind.ENUM:
            members = argument.split(_ENUM_SEPARATOR) if argument else []
            if len(members) < 2:
                raise InsufficientEnumValuesError(members)
        return Constraint(name=name, value=argument, description=entry.description)

    def check(self, constraint: Constraint, given: str) -> Result[str]:
        """Check one value. Returns Ok(given) or Err with a specific reason."""
        entry = self.lookup(constraint.name)
        if entry is None:
            return Err(UnknownConstraintError(constraint.name))

        reason = entry.check(constraint.value, given)
        if reason is None:
            return Ok(given)

        logger.debug(
            "constraint.check.failed",
            constraint=constraint.name,
            value=given,
            reason=reason,
        )
        return Err(
            ConstraintViolationError(
                f"{constraint.name}: {reason}",
                constraint=constraint.name,
                value=given,
            )
        )

    def check_all(self, constraints: Iterable[Constraint], given: str) -> list[Exception]:
        """Check every constraint in order and return all failures."""
        errors: list[Exception] = []
        for constraint in constraints:
            result = self.check(constraint, given)
            if result.is_err():
                errors.append(result.error)
        return errors

    # ── Typed factories ──────────────────────────────────────────

    def int_minimum(self, minimum: int) -> Constraint:
        return self.construct(ConstraintKind.INT_MINIMUM.value, str(minimum))

    def int_maximum(self, maximum: int) -> Constraint:
        return self.construct(ConstraintKind.INT_MAXIMUM.value, str(maximum))

    def docker_image(self) -> Constraint:
        return self.construct(ConstraintKind.DOCKER_IMAGE.value)

    def boolean(self) -> Constraint:
        return self.construct(ConstraintKind.BOOL.value)

    def enum_of(self, *values: str) -> Constraint:
        if len(values) < 2:
            raise InsufficientEnumValuesError(values)
        for value in values:
            if _ENUM_SEPARATOR in value:
                raise ConstructionError(
                    f"enum value {value!r} must not contain {_ENUM_SEPARATOR!r}"
                )
        return self.construct(ConstraintKind.ENUM.value, _ENUM_SEPARATOR.join(values))


@lru_cache(maxsize=1)
def default_registry() -> ConstraintRegistry:
    """Shared read-only registry with the built-in catalogue."""
    return ConstraintRegistry.builtin()


def constraint_by_name(name: str, value: str = "") -> Constraint:
    """Construct a built-in constraint by name (raises on unknown names)."""
    return default_registry().construct(name, value)


def int_minimum(minimum: int) -> Constraint:
    """Value must parse as an integer no smaller than ``minimum``."""
    return default_registry().int_minimum(minimum)


def int_maximum(maximum: int) -> Constraint:
    """Value must parse as an integer no greater than ``maximum``."""
    return default_registry().int_maximum(maximum)


def docker_image() -> Constraint:
    """Value must be a fully qualified, tagged Docker image name."""
    return default_registry().docker_image()


def boolean() -> Constraint:
    """Value must be exactly ``"true"`` or ``"false"``."""
    return default_registry().boolean()


def enum_of(*values: str) -> Constraint:
    """Value must equal one of ``values`` (at least two, case-sensitive)."""
    return default_registry().enum_of(*values)


__all__ = [
    "BUILTIN_ENTRIES",
    "Constraint",
    "ConstraintEntry",
    "ConstraintKind",
    "ConstraintRegistry",
    "DOCKER_IMAGE_PATTERN",
    "boolean",
    "constraint_by_name",
    "default_registry",
    "docker_image",
    "enum_of",
    "int_maximum",
    "int_minimum",
]
