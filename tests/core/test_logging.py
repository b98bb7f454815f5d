"""Tests for structlog configuration."""

import json
import os
import subprocess
import sys
from pathlib import Path

from automation_standard.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


class TestConfigureLogging:
    def test_json_lines_go_to_stderr(self, capsys):
        configure_logging(level="INFO", json_format=True, service="test-service")
        get_logger("tests").info("engine.validate.completed", total=3)

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["event"] == "engine.validate.completed"
        assert record["total"] == 3
        assert record["service.name"] == "test-service"
        assert record["logger_name"] == "tests"
        assert record["log.level"] == "info"
        assert "@timestamp" in record

    def test_level_filters_lower_events(self, capsys):
        configure_logging(level="WARNING", json_format=True)
        get_logger("tests").info("hidden")
        assert capsys.readouterr().err == ""

    def test_timestamp_optional(self, capsys):
        configure_logging(level="INFO", json_format=True, add_timestamp=False)
        get_logger("tests").warning("no.timestamp")
        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert "@timestamp" not in record


class TestContext:
    def test_bound_context_is_included(self, capsys):
        configure_logging(level="INFO", json_format=True)
        bind_context(action="create")
        get_logger("tests").info("with.context")
        clear_context()

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["action"] == "create"

    def test_log_context_unbinds_on_exit(self, capsys):
        configure_logging(level="INFO", json_format=True)
        logger = get_logger("tests")
        with LogContext(manifest="manifest.json"):
            logger.info("inside")
        logger.info("outside")

        inside, outside = (json.loads(line) for line in capsys.readouterr().err.strip().splitlines()[-2:])
        assert inside["manifest"] == "manifest.json"
        assert "manifest" not in outside


class TestUnconfiguredDefault:
    """Library use without configure_logging() keeps stdout clean."""

    def test_validate_writes_nothing_to_stdout(self):
        script = (
            "from automation_standard import Parameter, Source, validate\n"
            "param = Parameter(name='count', source=Source.PARAMETER)\n"
            "assert validate([param], {'count': '5'})[0].passed\n"
        )
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(Path(__file__).parents[2] / "src"), env.get("PYTHONPATH")])
        )
        completed = subprocess.run(
            [sys.executable, "-c", script],
            capture_output=True,
            text=True,
            env=env,
            check=False,
        )

        assert completed.returncode == 0, completed.stderr
        assert completed.stdout == ""
