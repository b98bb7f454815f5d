"""
Ok / Err outcome of resolving or checking a value.

Expected failures (a missing environment variable, a value out of range)
come back as ``Err`` holding the error; declaration bugs raise. Callers
branch with ``is_ok()`` or ``match``::

    match parameter.resolve(config):
        case Ok(value):
            ...
        case Err(error):
            ...

Only the operations the resolution pipeline chains are provided: ``map``
to wrap a resolved mapping, ``flat_map`` to run constraints after a
successful source lookup, and ``unwrap`` once success is certain.

Tags:
    result-pattern, error-handling, automation-standard

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Resolved value.

    Examples:
        >>> Ok("5").map(int).unwrap()
        5
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        return f(self.value)

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """Failure carrying the error; ``map``/``flat_map`` pass it through."""

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the carried error."""
        raise self.error

    def map(self, f: Callable[[T], U]) -> Result[U]:
        return Err(self.error)

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        return Err(self.error)

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


__all__ = ["Err", "Ok", "Result"]
