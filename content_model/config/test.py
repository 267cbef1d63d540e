"""Tests for configuration management."""

import logging
from pathlib import Path

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    _convert_value,
    get_definitions_dir,
    get_environment,
    get_environment_info,
    get_json_indent,
    get_log_level,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("CONTENT_MODEL_JSON_INDENT", raising=False)
        assert get_environment(EnvVar.CONTENT_MODEL_JSON_INDENT) == 2

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("CONTENT_MODEL_JSON_INDENT", "8")
        assert get_environment(EnvVar.CONTENT_MODEL_JSON_INDENT, override=0) == 0

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("CONTENT_MODEL_JSON_INDENT", "4")
        result = get_environment(EnvVar.CONTENT_MODEL_JSON_INDENT)
        assert result == 4
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_invalid_int_falls_back_to_default(self, monkeypatch):
        """Unparsable integers resolve to the default."""
        monkeypatch.setenv("CONTENT_MODEL_JSON_INDENT", "wide")
        assert get_environment(EnvVar.CONTENT_MODEL_JSON_INDENT) == 2

    @pytest.mark.unit
    def test_path_type_conversion(self, monkeypatch, tmp_path):
        """Path variables are converted to Path objects."""
        monkeypatch.setenv("CONTENT_MODEL_DEFINITIONS_DIR", str(tmp_path))
        result = get_environment(EnvVar.CONTENT_MODEL_DEFINITIONS_DIR)
        assert result == tmp_path
        assert isinstance(result, Path)


class TestConvertValue:
    """Tests for string conversion helpers."""

    @pytest.mark.unit
    def test_none_returns_default(self):
        assert _convert_value(None, int, 2) == 2

    @pytest.mark.unit
    def test_int_conversion(self):
        assert _convert_value("4", int, 2) == 4

    @pytest.mark.unit
    def test_unparsable_int_returns_default(self):
        assert _convert_value("wide", int, 2) == 2

    @pytest.mark.unit
    def test_path_conversion(self):
        assert _convert_value("defs", Path, None) == Path("defs")

    @pytest.mark.unit
    def test_str_passthrough(self):
        assert _convert_value(" DEBUG ", str, "INFO") == " DEBUG "


class TestConvenienceFunctions:
    """Tests for the typed convenience accessors."""

    @pytest.mark.unit
    def test_log_level_default(self, monkeypatch):
        monkeypatch.delenv("CONTENT_MODEL_LOG_LEVEL", raising=False)
        assert get_log_level() == logging.INFO

    @pytest.mark.unit
    def test_log_level_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("CONTENT_MODEL_LOG_LEVEL", "debug")
        assert get_log_level() == logging.DEBUG

    @pytest.mark.unit
    def test_log_level_unknown_name(self):
        assert get_log_level(override="chatty") == logging.INFO

    @pytest.mark.unit
    def test_json_indent_override(self):
        assert get_json_indent(override=6) == 6

    @pytest.mark.unit
    def test_definitions_dir_unset(self, monkeypatch):
        monkeypatch.delenv("CONTENT_MODEL_DEFINITIONS_DIR", raising=False)
        assert get_definitions_dir() is None

    @pytest.mark.unit
    def test_definitions_dir_override(self, tmp_path):
        assert get_definitions_dir(str(tmp_path)) == tmp_path


class TestIntrospection:
    """Tests for metadata and listing helpers."""

    @pytest.mark.unit
    def test_environment_info(self):
        info = get_environment_info(EnvVar.CONTENT_MODEL_LOG_LEVEL)
        assert isinstance(info, EnvConfig)
        assert info.name == "CONTENT_MODEL_LOG_LEVEL"
        assert info.default == "INFO"

    @pytest.mark.unit
    def test_names_match_members(self):
        """Every member's EnvConfig.name matches the member name."""
        for var in EnvVar:
            assert var.value.name == var.name

    @pytest.mark.unit
    def test_list_by_category(self):
        cli_vars = list_environment_variables("cli")
        assert EnvVar.CONTENT_MODEL_JSON_INDENT in cli_vars
        assert EnvVar.CONTENT_MODEL_LOG_LEVEL not in cli_vars

    @pytest.mark.unit
    def test_list_all(self):
        assert len(list_environment_variables()) == len(EnvVar)
