"""Configuration schema models using pydantic.

This module defines the configuration structure and validation rules using pydantic.
All configuration values are validated according to the schema defined here.
"""

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, field_validator

VALID_KEY_TYPES = ["rsa2048", "rsa4096", "ec256", "ec384"]


class GenerateConfig(BaseModel):
    """Defaults for the generate command.

    Attributes:
        key_type: Key type to generate (rsa2048, rsa4096, ec256, ec384)
        output_key: Output file for the private key
        output_csr: Output file for the CSR
    """

    key_type: str = Field(
        default="rsa2048",
        description="Key type: rsa2048, rsa4096, ec256, ec384"
    )
    output_key: Path = Field(
        default=Path("private.key"),
        description="Output file for the private key"
    )
    output_csr: Path = Field(
        default=Path("request.csr"),
        description="Output file for the CSR"
    )

    @field_validator("key_type")
    @classmethod
    def validate_key_type(cls, v: str) -> str:
        """Validate key type.

        Args:
            v: Key type string

        Returns:
            Validated key type (lowercase)

        Raises:
            ValueError: If key type is not one of the supported types
        """
        v_lower = v.lower()
        if v_lower not in VALID_KEY_TYPES:
            raise ValueError(
                f"Invalid key_type: {v}. Must be one of: {', '.join(VALID_KEY_TYPES)}"
            )
        return v_lower


class SubjectDefaultsConfig(BaseModel):
    """Default subject fields applied when the command line omits them.

    Attributes:
        organization: Organization (O) values
        organizational_unit: Organizational Unit (OU) values
        country: Country (C) values
        province: State or province (ST) values
        locality: Locality (L) values
    """

    organization: List[str] = Field(default_factory=list)
    organizational_unit: List[str] = Field(default_factory=list)
    country: List[str] = Field(default_factory=list)
    province: List[str] = Field(default_factory=list)
    locality: List[str] = Field(default_factory=list)


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
        redact_secrets: Whether to redact challenge passwords and private keys
    """

    level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )
    log_file: Path = Field(
        default=Path("logs/csrtool.log"),
        description="Log file path"
    )
    redact_secrets: bool = Field(
        default=True,
        description="Redact challenge passwords and private keys from logs"
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level.

        Args:
            v: Log level string

        Returns:
            Validated log level (uppercase)

        Raises:
            ValueError: If log level is not valid
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(valid_levels)}"
            )
        return v_upper


class Config(BaseModel):
    """Root configuration model.

    Attributes:
        generate: Defaults for the generate command
        subject: Default subject fields
        logging: Logging configuration

    Example:
        >>> config = Config(generate=GenerateConfig(key_type="EC256"))
        >>> config.generate.key_type
        'ec256'
    """

    generate: GenerateConfig = GenerateConfig()
    subject: SubjectDefaultsConfig = SubjectDefaultsConfig()
    logging: LoggingConfig = LoggingConfig()
