"""
Configuration-file loading.

Turns a JSON or YAML document into the flat ``str -> str`` mapping the
engine consults for CONFIGURATION_PARAMETER sources.

Malformed configuration is a hard failure: a document that does not parse,
or whose root is not a mapping of names to scalars, raises
:class:`InvalidConfigError`. There is no silent fallback to an empty
configuration, because an empty configuration would turn one clear parse
error into a list of confusing "not found" failures.

Scalar coercion::

    "text"  -> "text"
    true    -> "true"        (so the bool constraint accepts it)
    3       -> "3"
    1.5     -> "1.5"
    null, lists, mappings    -> InvalidConfigError

Tags:
    automation-standard, configuration, json, yaml, loader

Doc-Types:
    api-reference
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml

from automation_standard.core.errors import InvalidConfigError, MissingConfigError
from automation_standard.core.logging import get_logger

logger = get_logger(__name__)

ConfigFormat = Literal["json", "yaml"]

_YAML_SUFFIXES = {".yaml", ".yml"}


def detect_format(path: str | Path) -> ConfigFormat:
    """``yaml`` for ``.yaml``/``.yml`` files, ``json`` otherwise."""
    return "yaml" if Path(path).suffix.lower() in _YAML_SUFFIXES else "json"


def parse_config(content: str, fmt: ConfigFormat = "json", *, path: str | None = None) -> dict[str, str]:
    """Parse configuration text into a flat string mapping.

    Raises:
        InvalidConfigError: malformed document, non-mapping root, or a
            value that is not a scalar.
    """
    where = f" in {path}" if path else ""
    try:
        if fmt == "yaml":
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidConfigError(path, f"invalid {fmt.upper()} configuration{where}: {e}", cause=e) from e

    # A YAML document with no content (blank, or only comments) is an empty
    # configuration, not an error.
    if data is None and fmt == "yaml":
        data = {}

    if not isinstance(data, Mapping):
        raise InvalidConfigError(
            path, f"expected a mapping at the configuration root{where}, got {type(data).__name__}"
        )

    return {str(key): _coerce(path, str(key), value) for key, value in data.items()}


def load_config(path: str | Path) -> dict[str, str]:
    """Load a JSON or YAML configuration file (format chosen by suffix).

    Raises:
        MissingConfigError: the file does not exist.
        InvalidConfigError: the file is unreadable or malformed.
    """
    path = Path(path)
    if not path.is_file():
        raise MissingConfigError(str(path))

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidConfigError(str(path), f"failed to read configuration {str(path)!r}: {e}", cause=e) from e

    config = parse_config(content, detect_format(path), path=str(path))
    logger.info("config.loaded", path=str(path), keys=len(config))
    return config


def _coerce(path: str | None, key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise InvalidConfigError(
        path,
        f"configuration value for {key!r} must be a scalar, got {type(value).__name__}",
    ).with_context(parameter=key)


__all__ = ["ConfigFormat", "detect_format", "load_config", "parse_config"]
