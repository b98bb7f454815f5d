"""Where a parameter's value comes from.

The three members serialize to fixed string literals. Manifest files and the
tooling that reads them depend on these literals, so they never change and
never serialize as integers.

Tags:
    automation-standard, framework, source, wire-contract

Doc-Types:
    api-reference
"""

from __future__ import annotations

from enum import Enum

from automation_standard.core.errors import UnknownSourceError


class Source(str, Enum):
    """Origin category of a parameter's value.

    ENVIRONMENT: environment variable named after the parameter
    FILE: the parameter name is a filesystem path that must exist
    PARAMETER: key in the configuration mapping
    """

    ENVIRONMENT = "ENVIRONMENT_VARIABLE"
    FILE = "FILE"
    PARAMETER = "CONFIGURATION_PARAMETER"

    @classmethod
    def parse(cls, literal: object) -> Source:
        """Map a wire literal (or a member) to a Source.

        Raises:
            UnknownSourceError: for any other value, including ``""``.
        """
        if isinstance(literal, cls):
            return literal
        if isinstance(literal, str):
            for member in cls:
                if member.value == literal:
                    return member
        raise UnknownSourceError(literal)

    def describe(self) -> str:
        """Noun used in "not found" messages (``the file 'x' was not found``)."""
        return _DESCRIPTIONS[self]

    def __str__(self) -> str:
        return self.value


_DESCRIPTIONS = {
    Source.ENVIRONMENT: "environment variable",
    Source.FILE: "file",
    Source.PARAMETER: "parameter",
}


__all__ = ["Source"]
