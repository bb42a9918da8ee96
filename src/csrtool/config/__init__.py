"""Config module.

This module provides configuration management functionality.
"""

from csrtool.config.manager import (
    get_generate_config,
    get_logging_config,
    get_subject_defaults,
    load_config,
)
from csrtool.config.schema import (
    Config,
    GenerateConfig,
    LoggingConfig,
    SubjectDefaultsConfig,
)

__all__ = [
    # Main configuration loading
    "load_config",
    # Helper functions
    "get_generate_config",
    "get_subject_defaults",
    "get_logging_config",
    # Configuration models
    "Config",
    "GenerateConfig",
    "SubjectDefaultsConfig",
    "LoggingConfig",
]
