"""Unit tests for tcxml_csv.config -- configuration model."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from tcxml_csv.config import ConverterConfig


class TestDefaults:
    """Test that default values are correct."""

    def test_parser_version(self):
        config = ConverterConfig()
        assert config.parser_version == "tcxml_csv:1.0.0"

    def test_limits_disabled_by_default(self):
        config = ConverterConfig()
        assert config.max_input_size_mb is None
        assert config.max_depth is None
        assert config.max_test_cases is None

    def test_json_indent(self):
        config = ConverterConfig()
        assert config.json_indent == 2

    def test_line_terminator(self):
        config = ConverterConfig()
        assert config.line_terminator == "\n"

    def test_log_sample_data_off(self):
        config = ConverterConfig()
        assert config.log_sample_data is False


class TestValidation:
    """model_validator should reject invalid values."""

    def test_crlf_accepted(self):
        config = ConverterConfig(line_terminator="\r\n")
        assert config.line_terminator == "\r\n"

    def test_bad_terminator_rejected(self):
        with pytest.raises(ValidationError, match="line_terminator"):
            ConverterConfig(line_terminator=";")

    def test_negative_indent_rejected(self):
        with pytest.raises(ValidationError, match="json_indent"):
            ConverterConfig(json_indent=-1)

    def test_negative_limit_rejected(self):
        with pytest.raises(ValidationError, match="max_test_cases"):
            ConverterConfig(max_test_cases=-1)


class TestFromFile:
    """Test loading configuration from files."""

    def test_from_json_file(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"max_depth": 50, "json_indent": 4}))
        config = ConverterConfig.from_file(str(config_file))
        assert config.max_depth == 50
        assert config.json_indent == 4

    def test_from_yaml_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("max_depth: 25\nmax_test_cases: 3\n")
        config = ConverterConfig.from_file(str(config_file))
        assert config.max_depth == 25
        assert config.max_test_cases == 3

    def test_empty_yaml_keeps_defaults(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text("")
        config = ConverterConfig.from_file(str(config_file))
        assert config == ConverterConfig()

    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            ConverterConfig.from_file("/nonexistent/config.json")

    def test_unsupported_extension_raises(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("max_depth = 50")
        with pytest.raises(ValueError, match="Unsupported config file extension"):
            ConverterConfig.from_file(str(config_file))
