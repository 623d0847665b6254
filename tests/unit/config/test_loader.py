"""Tests for configuration loading and validation."""

import os
from unittest.mock import patch

import pytest

from xltemplate.config import ConfigLoader, RenderOptions, XLTConfig, resolve_env_vars
from xltemplate.errors import XLTError
from xltemplate.types import LogFormat, LogLevel


class TestResolveEnvVars:
    """Tests for resolve_env_vars."""

    def test_set_variable(self):
        with patch.dict(os.environ, {"XLT_LEVEL": "DEBUG"}):
            assert resolve_env_vars("${XLT_LEVEL}") == "DEBUG"

    def test_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert resolve_env_vars("${XLT_LEVEL:-INFO}") == "INFO"

    def test_required_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(XLTError) as exc_info:
                resolve_env_vars("${XLT_LEVEL}")
        assert exc_info.value.code == "CONFIG_INVALID"

    def test_custom_message(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(XLTError) as exc_info:
                resolve_env_vars("${XLT_LEVEL:?set the level}")
        assert exc_info.value.detail == "set the level"


class TestLoadFromDict:
    """Tests for ConfigLoader.load_from_dict."""

    def test_empty_gives_defaults(self):
        config = ConfigLoader().load_from_dict({})
        assert config == XLTConfig()
        assert config.render.wrap_text_in_all_cells is False
        assert config.logging.level == LogLevel.INFO

    def test_full_config(self):
        config = ConfigLoader().load_from_dict(
            {
                "render": {"wrap_text_in_all_cells": True},
                "logging": {
                    "level": "debug",
                    "format": "JSON",
                    "show_context": False,
                    "truncate_at": 80,
                    "components": {"range": False},
                },
            }
        )
        assert config.render == RenderOptions(wrap_text_in_all_cells=True)
        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == LogFormat.JSON
        assert config.logging.show_context is False
        assert config.logging.truncate_at == 80
        assert config.logging.components == {"report": True, "sheet": True, "range": False}

    def test_string_booleans(self):
        config = ConfigLoader().load_from_dict({"render": {"wrap_text_in_all_cells": "yes"}})
        assert config.render.wrap_text_in_all_cells is True

    @pytest.mark.parametrize(
        "data",
        [
            {"render": "yes"},
            {"render": {"wrap_text_in_all_cells": "sometimes"}},
            {"logging": {"level": "LOUD"}},
            {"logging": {"format": "xml"}},
            {"logging": {"truncate_at": 0}},
            {"logging": {"truncate_at": True}},
            {"logging": {"components": ["report"]}},
        ],
    )
    def test_invalid(self, data):
        with pytest.raises(XLTError) as exc_info:
            ConfigLoader().load_from_dict(data)
        assert exc_info.value.code == "CONFIG_INVALID"

    def test_get_after_load(self):
        loader = ConfigLoader()
        config = loader.load_from_dict({})
        assert loader.get() is config

    def test_get_before_load(self):
        with pytest.raises(XLTError):
            ConfigLoader().get()


class TestValidate:
    """Tests for ConfigLoader.validate."""

    def test_unknown_keys_are_warnings(self):
        result = ConfigLoader().validate({"extra": 1, "render": {"colour": "red"}})
        assert result.valid
        assert [w.path for w in result.warnings] == ["extra", "render.colour"]

    def test_errors_make_result_invalid(self):
        result = ConfigLoader().validate({"logging": {"level": "LOUD"}})
        assert not result.valid
        assert result.errors[0].path == "logging.level"


class TestLoad:
    """Tests for ConfigLoader.load from files."""

    def test_load_file(self, tmp_path):
        path = tmp_path / "xltemplate.yaml"
        path.write_text("render:\n  wrap_text_in_all_cells: true\nlogging:\n  level: WARN\n")
        config = ConfigLoader().load(path)
        assert config.render.wrap_text_in_all_cells is True
        assert config.logging.level == LogLevel.WARN

    def test_env_vars_in_file(self, tmp_path):
        path = tmp_path / "xltemplate.yaml"
        path.write_text("logging:\n  format: ${XLT_FORMAT:-colored}\n")
        with patch.dict(os.environ, {"XLT_FORMAT": "json"}):
            config = ConfigLoader().load(path)
        assert config.logging.format == LogFormat.JSON

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ConfigLoader().load(tmp_path / "missing.yaml")
        assert config == XLTConfig()

    def test_missing_file_without_defaults(self, tmp_path):
        with pytest.raises(XLTError) as exc_info:
            ConfigLoader().load(tmp_path / "missing.yaml", use_defaults=False)
        assert exc_info.value.code == "CONFIG_INVALID"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "xltemplate.yaml"
        path.write_text("render: [\n")
        with pytest.raises(XLTError) as exc_info:
            ConfigLoader().load(path)
        assert exc_info.value.code == "CONFIG_INVALID"

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "xltemplate.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(XLTError):
            ConfigLoader().load(path)

    def test_path_from_environment(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("logging:\n  level: ERROR\n")
        with patch.dict(os.environ, {"XLTEMPLATE_CONFIG_PATH": str(path)}):
            config = ConfigLoader().load()
        assert config.logging.level == LogLevel.ERROR

    def test_load_defaults(self):
        assert ConfigLoader().load_defaults() == XLTConfig()
