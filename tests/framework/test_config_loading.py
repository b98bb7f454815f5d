"""Tests for configuration-file loading."""

import pytest

from automation_standard.core.errors import InvalidConfigError, MissingConfigError
from automation_standard.framework.config import detect_format, load_config, parse_config


class TestDetectFormat:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("config.yaml", "yaml"),
            ("config.YML", "yaml"),
            ("config.json", "json"),
            ("config", "json"),
        ],
    )
    def test_by_suffix(self, path, expected):
        assert detect_format(path) == expected


class TestParseConfig:
    def test_json(self):
        assert parse_config('{"count": "5", "size": "small"}') == {"count": "5", "size": "small"}

    def test_yaml(self):
        assert parse_config("count: '5'\nsize: small\n", "yaml") == {"count": "5", "size": "small"}

    def test_scalars_coerced_to_strings(self):
        text = '{"count": 5, "ratio": 1.5, "monitoring": true, "debug": false}'
        assert parse_config(text) == {
            "count": "5",
            "ratio": "1.5",
            "monitoring": "true",
            "debug": "false",
        }

    def test_yaml_booleans_satisfy_bool_constraint(self):
        assert parse_config("monitoring: true\n", "yaml") == {"monitoring": "true"}

    def test_empty_yaml_is_empty_config(self):
        assert parse_config("", "yaml") == {}

    @pytest.mark.parametrize("text", ["", "{not json", "[1, 2]", '"text"'])
    def test_malformed_json(self, text):
        with pytest.raises(InvalidConfigError):
            parse_config(text)

    @pytest.mark.parametrize("text", ['{"a": null}', '{"a": [1]}', '{"a": {"b": "c"}}'])
    def test_non_scalar_values_rejected(self, text):
        with pytest.raises(InvalidConfigError) as exc_info:
            parse_config(text)
        assert exc_info.value.context.parameter == "a"

    def test_yaml_non_mapping_root(self):
        with pytest.raises(InvalidConfigError):
            parse_config("- a\n- b\n", "yaml")

    def test_error_names_path(self):
        with pytest.raises(InvalidConfigError, match="in conf.json"):
            parse_config("{", path="conf.json")


class TestLoadConfig:
    def test_json_file(self, write_json):
        path = write_json("config.json", {"count": "5"})
        assert load_config(path) == {"count": "5"}

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("count: 5\n", encoding="utf-8")
        assert load_config(path) == {"count": "5"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(MissingConfigError):
            load_config(tmp_path / "absent.json")

    def test_directory_is_missing(self, tmp_path):
        with pytest.raises(MissingConfigError):
            load_config(tmp_path)

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.context.path == str(path)


class TestUnreadableConfig:
    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_bytes(b'{"a": "\xff"}')
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.context.path == str(path)

    def test_comment_only_yaml_is_empty(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("# nothing set yet\n", encoding="utf-8")
        assert load_config(path) == {}
