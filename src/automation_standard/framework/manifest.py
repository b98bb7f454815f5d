"""Pydantic models for the application manifest.

A manifest is the serialized description of an application's declared
parameters and metadata. Tooling such as ``standard-validate`` reads it to
validate a configuration without running the application itself.

Usage::

    from automation_standard.framework.manifest import Manifest, load_manifest

    manifest = Manifest.from_application(app)
    text = manifest.to_json()

    manifest = load_manifest("manifest.yaml")
    inputs = manifest.inputs_for("create")

Example JSON::

    {
      "create": {
        "inputs": [
          {
            "name": "count",
            "description": "number of nodes",
            "source": "CONFIGURATION_PARAMETER",
            "constraints": [
              {"name": "int-minimum", "value": "1", "description": "ensure value minimum"}
            ]
          }
        ]
      },
      "destroy": {"inputs": []},
      "metadata": {"name": "example", "description": "", "version": "v1.2.3", "homepage": ""},
      "version": "v1.0"
    }

Sources are always written as their string literals and constraint values
are omitted when empty. Unknown source literals fail to load.

Tags:
    automation-standard, framework, manifest, yaml, json, declarative

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from automation_standard.core.errors import (
    ConstructionError,
    ManifestError,
    UnknownActionError,
)
from automation_standard.core.logging import get_logger
from automation_standard.framework.parameter import Parameter, ensure_unique, sort_parameters

if TYPE_CHECKING:
    from automation_standard.framework.application import Application

logger = get_logger(__name__)

MANIFEST_VERSION = "v1.0"
ACTIONS = ("create", "destroy")
_YAML_SUFFIXES = {".yaml", ".yml"}


class Action(BaseModel):
    """Inputs (and, at run time, the handler) of a create or destroy action.

    The handler is never serialized.
    """

    model_config = ConfigDict(extra="ignore")

    inputs: list[Parameter] = Field(default_factory=list)
    handler: Callable[..., Any] | None = Field(default=None, exclude=True)

    @field_validator("inputs")
    @classmethod
    def _unique_names(cls, inputs: list[Parameter]) -> list[Parameter]:
        ensure_unique(inputs)
        return inputs


class Metadata(BaseModel):
    """Application metadata section of a manifest."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    description: str = ""
    version: str = ""
    homepage: str = ""


class Manifest(BaseModel):
    """Serializable manifest of an application's actions and metadata."""

    model_config = ConfigDict(extra="ignore")

    create: Action = Field(default_factory=Action)
    destroy: Action = Field(default_factory=Action)
    metadata: Metadata = Field(default_factory=Metadata)
    version: str = MANIFEST_VERSION

    def inputs_for(self, action: str) -> list[Parameter]:
        """Inputs of the named action (``"create"`` or ``"destroy"``)."""
        if action == "create":
            return list(self.create.inputs)
        if action == "destroy":
            return list(self.destroy.inputs)
        raise UnknownActionError(action)

    @classmethod
    def from_application(cls, app: Application, *, version: str = MANIFEST_VERSION) -> Manifest:
        """Build a manifest from an application; inputs are sorted by name."""
        return cls(
            create=Action(inputs=sort_parameters(app.create.inputs)),
            destroy=Action(inputs=sort_parameters(app.destroy.inputs)),
            metadata=Metadata(
                name=app.name,
                description=app.description,
                version=app.version,
                homepage=app.homepage,
            ),
            version=version,
        )

    # ── JSON ─────────────────────────────────────────────────────

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, content: str | bytes) -> Manifest:
        """Parse and validate a JSON manifest.

        Raises:
            ManifestError: malformed JSON or a document that doesn't match
                the schema (including unknown source literals).
        """
        return _validated(lambda: cls.model_validate_json(content))

    # ── YAML ─────────────────────────────────────────────────────

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.model_dump(mode="json"), sort_keys=False)

    @classmethod
    def from_yaml(cls, content: str) -> Manifest:
        """Parse and validate a YAML manifest.

        Raises:
            ManifestError: malformed YAML or schema mismatch.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ManifestError(f"invalid YAML manifest: {e}", cause=e) from e

        if not isinstance(data, dict):
            raise ManifestError(f"expected a mapping at the manifest root, got {type(data).__name__}")

        return _validated(lambda: cls.model_validate(data))


def _validated(build: Callable[[], Manifest]) -> Manifest:
    try:
        return build()
    except ValidationError as e:
        raise ManifestError(f"invalid manifest: {e}", cause=e) from e
    except ConstructionError as e:
        raise ManifestError(f"invalid manifest: {e}", cause=e) from e


def load_manifest(path: str | Path) -> Manifest:
    """Load a manifest file; ``.yaml``/``.yml`` is YAML, anything else JSON.

    Raises:
        ManifestError: the file is missing, unreadable or invalid.
    """
    path = Path(path)
    if not path.is_file():
        raise ManifestError(f"manifest file {str(path)!r} was not found").with_context(path=str(path))

    logger.debug("manifest.load", path=str(path))

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(
            f"failed to read manifest {str(path)!r}: {e}", cause=e
        ).with_context(path=str(path)) from e

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            manifest = Manifest.from_yaml(content)
        else:
            manifest = Manifest.from_json(content)
    except ManifestError as e:
        raise e.with_context(path=str(path))

    logger.info(
        "manifest.loaded",
        path=str(path),
        name=manifest.metadata.name,
        create_inputs=len(manifest.create.inputs),
        destroy_inputs=len(manifest.destroy.inputs),
    )
    return manifest


__all__ = [
    "ACTIONS",
    "MANIFEST_VERSION",
    "Action",
    "Manifest",
    "Metadata",
    "load_manifest",
]
