"""Configuration module for nodejs-installer.

Provides configuration file loading, parsing, and validation with support for:
- Project-level config (.nodejs-installer.yml)
- Global config (~/.nodejs-installer/config/config.yml)
- Environment variable expansion
"""

from nodejs_installer.config.models import InstallerConfig
from nodejs_installer.config.loader import (
    ConfigError,
    find_global_config,
    find_project_config,
    load_config,
)
from nodejs_installer.config.validation import validate_config, ConfigValidationWarning

__all__ = [
    "InstallerConfig",
    "ConfigError",
    "load_config",
    "find_project_config",
    "find_global_config",
    "validate_config",
    "ConfigValidationWarning",
]
