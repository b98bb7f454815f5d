"""Read-only holder for resolved parameter values.

Handlers receive a :class:`Values` instead of a bare dict so that a typo in
a parameter name is caught instead of silently yielding an empty string.

Two lookups are offered:

- :meth:`Values.lookup` is the checked lookup. A declared name without a
  resolved value comes back as ``Err(ValueNotFoundError)``.
- :meth:`Values.get` returns the string directly and raises.

Asking for a name that was never declared is a bug in the caller and always
raises :class:`UndeclaredParameterError`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from automation_standard.core.errors import UndeclaredParameterError, ValueNotFoundError
from automation_standard.core.result import Err, Ok, Result


class Values(Mapping[str, str]):
    """Resolved values keyed by the names declared for one action."""

    def __init__(self, declared: Iterable[str], resolved: Mapping[str, str]):
        self._declared = frozenset(declared)
        undeclared = sorted(set(resolved) - self._declared)
        if undeclared:
            raise UndeclaredParameterError(undeclared[0])
        self._values = dict(resolved)

    def lookup(self, name: str) -> Result[str]:
        if name not in self._declared:
            raise UndeclaredParameterError(name)
        if name not in self._values:
            return Err(ValueNotFoundError(name))
        return Ok(self._values[name])

    def get(self, name: str, default: str | None = None) -> str:  # type: ignore[override]
        """Value for ``name``; ``default`` only applies to declared names."""
        result = self.lookup(name)
        if result.is_ok():
            return result.value
        if default is not None:
            return default
        raise result.error

    def get_many(self, *names: str) -> list[str]:
        return [self.get(name) for name in names]

    def names(self) -> list[str]:
        return sorted(self._declared)

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)

    def __getitem__(self, name: str) -> str:
        return self.get(name)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __repr__(self) -> str:
        return f"Values({self._values!r})"


__all__ = ["Values"]
