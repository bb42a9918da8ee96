"""Default configuration values.

This module defines the default configuration values used when no configuration
file is provided or when configuration values are not specified.
"""

from typing import Any

# Fallback when no configuration file is present
DEFAULT_CONFIG: dict[str, Any] = {
    "generate": {
        # Same defaults as the original command line tool
        "key_type": "rsa2048",
        "output_key": "private.key",
        "output_csr": "request.csr",
    },
    "subject": {
        # Subject fields merged in when not given on the command line
        "organization": [],
        "organizational_unit": [],
        "country": [],
        "province": [],
        "locality": [],
    },
    "logging": {
        "level": "INFO",
        "log_file": "logs/csrtool.log",
        # Challenge passwords and private keys are masked unless disabled
        "redact_secrets": True,
    },
}

DEFAULT_CONFIG_PATH = "config/config.json"
DEFAULT_DOTENV_PATH = ".env"
