"""Configuration manager for loading and managing configuration.

This module provides the main configuration loading and management functionality,
including support for JSON configuration files, environment variable overrides,
and configuration validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from csrtool.config.defaults import (
    DEFAULT_CONFIG,
    DEFAULT_CONFIG_PATH,
    DEFAULT_DOTENV_PATH,
)
from csrtool.config.schema import (
    Config,
    GenerateConfig,
    LoggingConfig,
    SubjectDefaultsConfig,
)
from csrtool.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variable prefix for all configuration overrides
ENV_PREFIX = "CSRTOOL_"

# Subject default fields that accept comma-separated environment overrides
_SUBJECT_ENV_FIELDS = {
    "SUBJECT_ORGANIZATION": "organization",
    "SUBJECT_ORGANIZATIONAL_UNIT": "organizational_unit",
    "SUBJECT_COUNTRY": "country",
    "SUBJECT_PROVINCE": "province",
    "SUBJECT_LOCALITY": "locality",
}


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file and environment variables.

    Configuration is loaded with the following precedence (highest to lowest):
    1. CLI arguments (handled by caller)
    2. Environment variables (CSRTOOL_* prefix)
    3. Configuration file (JSON)
    4. Default values

    Args:
        config_path: Path to configuration file. If None, uses ./config/config.json

    Returns:
        Validated Config instance

    Raises:
        ConfigurationError: If configuration is invalid or malformed

    Example:
        >>> config = load_config(Path("custom/config.json"))
        >>> key_type = config.generate.key_type
    """
    load_dotenv(DEFAULT_DOTENV_PATH)

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_PATH)

    config_dict = _load_config_file(config_path)

    # Checked before overrides so only file contents trigger the warning
    _check_sensitive_values(config_dict)

    config_dict = _apply_env_overrides(config_dict)

    try:
        return Config(**config_dict)
    except (ValidationError, TypeError) as e:
        raise ConfigurationError(
            f"Configuration validation failed:\n{e}\n\n"
            f"Fix: Check your configuration file at {config_path} and ensure all "
            f"values match the expected format."
        ) from e


def _load_config_file(config_path: Path) -> dict[str, Any]:
    """Load configuration file or return defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If JSON is malformed or not an object
    """
    if not config_path.exists():
        logger.info(
            f"Config file not found: {config_path}. Using default configuration."
        )
        # Deep copy so callers never mutate the defaults
        return json.loads(json.dumps(DEFAULT_CONFIG))

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in config file: {config_path}\n"
            f"Error: {e}\n"
            f"Fix: Check JSON syntax at line {e.lineno}, column {e.colno}"
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read config file: {config_path}\n"
            f"Error: {e}\n"
            f"Fix: Check file permissions and path"
        ) from e

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Config file must contain a JSON object: {config_path}"
        )

    logger.info(f"Loaded configuration from {config_path}")
    return config_dict


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides with CSRTOOL_ prefix.

    Environment variables follow the pattern: CSRTOOL_<FIELD>
    For example: CSRTOOL_KEY_TYPE, CSRTOOL_LOG_LEVEL,
    CSRTOOL_SUBJECT_ORGANIZATION (comma-separated)

    Args:
        config_dict: Configuration dictionary to update

    Returns:
        Updated configuration dictionary with environment overrides applied
    """
    # Generate section
    if key_type := os.getenv(f"{ENV_PREFIX}KEY_TYPE"):
        config_dict.setdefault("generate", {})["key_type"] = key_type
        logger.debug("Override: key_type from environment")

    if output_key := os.getenv(f"{ENV_PREFIX}OUTPUT_KEY"):
        config_dict.setdefault("generate", {})["output_key"] = output_key
        logger.debug("Override: output_key from environment")

    if output_csr := os.getenv(f"{ENV_PREFIX}OUTPUT_CSR"):
        config_dict.setdefault("generate", {})["output_csr"] = output_csr
        logger.debug("Override: output_csr from environment")

    # Subject section
    for env_name, field in _SUBJECT_ENV_FIELDS.items():
        if raw := os.getenv(f"{ENV_PREFIX}{env_name}"):
            values = [v.strip() for v in raw.split(",") if v.strip()]
            config_dict.setdefault("subject", {})[field] = values
            logger.debug(f"Override: subject {field} from environment")

    # Logging section
    if log_level := os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config_dict.setdefault("logging", {})["level"] = log_level
        logger.debug("Override: log_level from environment")

    if log_file := os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config_dict.setdefault("logging", {})["log_file"] = log_file
        logger.debug("Override: log_file from environment")

    if redact_secrets := os.getenv(f"{ENV_PREFIX}REDACT_SECRETS"):
        config_dict.setdefault("logging", {})["redact_secrets"] = _parse_bool(
            redact_secrets
        )
        logger.debug("Override: redact_secrets from environment")

    return config_dict


def _parse_bool(value: str) -> bool:
    """Parse boolean value from string.

    Args:
        value: String value to parse (case-insensitive)

    Returns:
        Boolean value
    """
    return value.lower() in ("true", "1", "yes", "on")


def _check_sensitive_values(config_dict: dict[str, Any]) -> None:
    """Warn when a challenge password is stored in the configuration file.

    Args:
        config_dict: Configuration dictionary to check
    """
    for section in ("generate", "subject"):
        values = config_dict.get(section) or {}
        if isinstance(values, dict) and (
            "challenge_password" in values or "challengePassword" in values
        ):
            logger.warning(
                "WARNING: Challenge password found in configuration file! "
                "Pass it with --challenge-password at request time instead "
                "of storing it on disk."
            )
            return


def get_generate_config(config: Config) -> GenerateConfig:
    """Get generate command defaults.

    Args:
        config: Configuration instance

    Returns:
        GenerateConfig instance

    Example:
        >>> config = load_config()
        >>> get_generate_config(config).key_type
        'rsa2048'
    """
    return config.generate


def get_subject_defaults(config: Config) -> SubjectDefaultsConfig:
    """Get default subject fields.

    Args:
        config: Configuration instance

    Returns:
        SubjectDefaultsConfig instance
    """
    return config.subject


def get_logging_config(config: Config) -> LoggingConfig:
    """Get logging configuration.

    Args:
        config: Configuration instance

    Returns:
        LoggingConfig instance
    """
    return config.logging
