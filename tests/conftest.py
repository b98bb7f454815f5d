"""
Shared pytest fixtures for automation-standard tests.

This module provides:
- Quiet, stderr-only logging for every test
- Settings cache isolation
- Sample parameter lists, configurations, and manifest files
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from automation_standard.core.logging import clear_context, configure_logging
from automation_standard.core.settings import clear_settings_cache
from automation_standard.framework.constraints import (
    boolean,
    docker_image,
    enum_of,
    int_maximum,
    int_minimum,
)
from automation_standard.framework.parameter import Parameter
from automation_standard.framework.source import Source


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.path).relative_to(Path(__file__).parent)
        if test_path.parts[0] == "cli":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _quiet_logging():
    """Keep log output out of captured stdout."""
    configure_logging(level="WARNING", json_format=True)
    yield
    clear_context()


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Each test sees settings built from its own environment."""
    for key in (
        "STANDARD_LOG_LEVEL",
        "STANDARD_LOG_JSON",
        "STANDARD_MANIFEST_VERSION",
        "STANDARD_SERVICE_NAME",
    ):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Sample declarations
# =============================================================================


@pytest.fixture
def count_param() -> Parameter:
    """Configuration parameter bounded to 1..10."""
    return Parameter(
        name="count",
        description="number of nodes",
        source=Source.PARAMETER,
        constraints=(int_minimum(1), int_maximum(10)),
    )


@pytest.fixture
def cluster_params() -> list[Parameter]:
    """A realistic create-action input list (all configuration-sourced)."""
    return [
        Parameter(
            name="size",
            description="cluster size",
            source=Source.PARAMETER,
            constraints=(enum_of("small", "medium", "large"),),
        ),
        Parameter(
            name="image",
            description="main image",
            source=Source.PARAMETER,
            constraints=(docker_image(),),
        ),
        Parameter(
            name="monitoring",
            description="enable monitoring",
            source=Source.PARAMETER,
            constraints=(boolean(),),
        ),
    ]


@pytest.fixture
def valid_cluster_config() -> dict[str, str]:
    return {"size": "small", "image": "docker.io/nginx:1.2.3", "monitoring": "true"}


# =============================================================================
# Files
# =============================================================================


@pytest.fixture
def write_json(tmp_path: Path):
    """Write a JSON document to tmp_path and return its path."""

    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_manifest_data() -> dict:
    return {
        "create": {
            "inputs": [
                {
                    "name": "count",
                    "description": "number of nodes",
                    "source": "CONFIGURATION_PARAMETER",
                    "constraints": [
                        {"name": "int-minimum", "value": "1", "description": "ensure value minimum"},
                        {"name": "int-maximum", "value": "10", "description": "ensure value maximum"},
                    ],
                }
            ]
        },
        "destroy": {"inputs": []},
        "metadata": {
            "name": "example",
            "description": "example cluster",
            "version": "v1.2.3",
            "homepage": "https://example.com",
        },
        "version": "v1.0",
    }


@pytest.fixture
def manifest_file(write_json, sample_manifest_data) -> Path:
    return write_json("manifest.json", sample_manifest_data)
