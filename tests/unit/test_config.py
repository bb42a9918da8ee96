"""Unit tests for configuration management.

Tests cover configuration loading, validation, environment variable overrides,
and error handling.
"""

import json
import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from csrtool.config import (
    Config,
    GenerateConfig,
    LoggingConfig,
    get_generate_config,
    get_logging_config,
    get_subject_defaults,
    load_config,
)
from csrtool.config.defaults import DEFAULT_CONFIG
from csrtool.utils.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from CSRTOOL_* variables and any local .env file."""
    for name in [
        "CSRTOOL_KEY_TYPE",
        "CSRTOOL_OUTPUT_KEY",
        "CSRTOOL_OUTPUT_CSR",
        "CSRTOOL_LOG_LEVEL",
        "CSRTOOL_LOG_FILE",
        "CSRTOOL_REDACT_SECRETS",
        "CSRTOOL_SUBJECT_ORGANIZATION",
        "CSRTOOL_SUBJECT_COUNTRY",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestConfigurationSchema:
    """Test pydantic configuration models validation."""

    def test_generate_config_defaults(self) -> None:
        config = GenerateConfig()

        assert config.key_type == "rsa2048"
        assert config.output_key == Path("private.key")
        assert config.output_csr == Path("request.csr")

    def test_generate_config_key_type_case_insensitive(self) -> None:
        assert GenerateConfig(key_type="EC384").key_type == "ec384"

    def test_generate_config_invalid_key_type(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            GenerateConfig(key_type="dsa1024")

        assert "Invalid key_type" in str(exc_info.value)

    def test_logging_config_case_insensitive(self) -> None:
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_logging_config_invalid_level(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            LoggingConfig(level="INVALID")

        assert "Invalid log level" in str(exc_info.value)

    def test_defaults_dict_matches_models(self) -> None:
        """Test DEFAULT_CONFIG validates to the same values as the model defaults."""
        assert Config(**DEFAULT_CONFIG) == Config()


class TestLoadConfig:
    """Test configuration file loading."""

    def test_load_config_with_valid_file(self, tmp_path: Path) -> None:
        # Arrange
        config_file = tmp_path / "config.json"
        config_file.write_text(
            json.dumps(
                {
                    "generate": {"key_type": "ec256", "output_csr": "out/request.csr"},
                    "subject": {"organization": ["Example Org"], "country": ["US"]},
                    "logging": {"level": "DEBUG", "redact_secrets": False},
                }
            )
        )

        # Act
        config = load_config(config_file)

        # Assert
        assert config.generate.key_type == "ec256"
        assert config.generate.output_csr == Path("out/request.csr")
        assert config.generate.output_key == Path("private.key")
        assert config.subject.organization == ["Example Org"]
        assert config.subject.country == ["US"]
        assert config.logging.level == "DEBUG"
        assert config.logging.redact_secrets is False

    def test_load_config_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / "missing.json")

        assert config == Config()

    def test_load_config_default_path(self, tmp_path: Path) -> None:
        """Test config/config.json under the working directory is used."""
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.json").write_text(
            json.dumps({"generate": {"key_type": "rsa4096"}})
        )

        assert load_config().generate.key_type == "rsa4096"

    def test_load_config_malformed_json(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text("{invalid json")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "Invalid JSON" in str(exc_info.value)

    def test_load_config_not_an_object(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text("[1, 2, 3]")

        with pytest.raises(ConfigurationError):
            load_config(config_file)

    def test_load_config_with_validation_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"generate": {"key_type": "ed25519"}}))

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "Configuration validation failed" in str(exc_info.value)

    def test_challenge_password_in_file_warns(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"generate": {"challenge_password": "x"}}))

        with caplog.at_level(logging.WARNING):
            load_config(config_file)

        assert "Challenge password found in configuration file" in caplog.text


class TestEnvironmentOverrides:
    """Test CSRTOOL_* environment variable overrides."""

    def test_env_override_key_type(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"generate": {"key_type": "rsa2048"}}))
        monkeypatch.setenv("CSRTOOL_KEY_TYPE", "ec384")

        assert load_config(config_file).generate.key_type == "ec384"

    def test_env_override_outputs_and_logging(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CSRTOOL_OUTPUT_KEY", "keys/server.key")
        monkeypatch.setenv("CSRTOOL_OUTPUT_CSR", "csrs/server.csr")
        monkeypatch.setenv("CSRTOOL_LOG_LEVEL", "warning")
        monkeypatch.setenv("CSRTOOL_REDACT_SECRETS", "false")

        config = load_config(tmp_path / "missing.json")

        assert config.generate.output_key == Path("keys/server.key")
        assert config.generate.output_csr == Path("csrs/server.csr")
        assert config.logging.level == "WARNING"
        assert config.logging.redact_secrets is False

    def test_env_override_subject_lists(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CSRTOOL_SUBJECT_ORGANIZATION", "Org A, Org B")
        monkeypatch.setenv("CSRTOOL_SUBJECT_COUNTRY", "US")

        config = load_config(tmp_path / "missing.json")

        assert config.subject.organization == ["Org A", "Org B"]
        assert config.subject.country == ["US"]

    def test_env_override_invalid_value(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CSRTOOL_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "missing.json")

    def test_dotenv_file_is_loaded(self, tmp_path: Path) -> None:
        """Test variables from .env in the working directory apply."""
        (tmp_path / ".env").write_text("CSRTOOL_KEY_TYPE=ec256\n")

        # load_dotenv writes to os.environ; restore it afterwards
        with patch.dict(os.environ):
            config = load_config(tmp_path / "missing.json")

        assert config.generate.key_type == "ec256"


class TestAccessors:
    """Test section accessor helpers."""

    def test_accessors_return_sections(self) -> None:
        config = Config()

        assert get_generate_config(config) is config.generate
        assert get_subject_defaults(config) is config.subject
        assert get_logging_config(config) is config.logging
