"""Core primitives shared by every layer of automation-standard.

Architecture::

    errors.py      Structured error hierarchy (StandardError and subclasses)
    result.py      Result[T] envelope (Ok / Err)
    logging.py     structlog configuration and logger access
    settings.py    STANDARD_-prefixed process settings (pydantic-settings)
"""

from automation_standard.core.errors import ErrorCategory, ErrorContext, StandardError
from automation_standard.core.logging import configure_logging, get_logger
from automation_standard.core.result import Err, Ok, Result
from automation_standard.core.settings import StandardSettings, get_settings

__all__ = [
    "Err",
    "ErrorCategory",
    "ErrorContext",
    "Ok",
    "Result",
    "StandardError",
    "StandardSettings",
    "configure_logging",
    "get_logger",
    "get_settings",
]
