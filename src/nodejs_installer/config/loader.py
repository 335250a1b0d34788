"""Configuration file loading and merging.

Handles loading configuration from YAML files with:
- Project-level config (.nodejs-installer.yml)
- Global config (~/.nodejs-installer/config/config.yml)
- Environment variable expansion (${VAR})
- Config merging with proper precedence
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from nodejs_installer.bootstrap.paths import get_installer_home
from nodejs_installer.config.models import InstallerConfig
from nodejs_installer.config.validation import validate_config
from nodejs_installer.core.exceptions import ConfigurationError
from nodejs_installer.core.logging import get_logger

LOGGER = get_logger(__name__)

# Config file names
PROJECT_CONFIG_NAMES = [
    ".nodejs-installer.yml",
    ".nodejs-installer.yaml",
    "nodejs-installer.yml",
    "nodejs-installer.yaml",
]
GLOBAL_CONFIG_NAME = "config.yml"

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigError(ConfigurationError):
    """Configuration loading or parsing error."""

    pass


def load_config(
    project_root: Path,
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> InstallerConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (cli_overrides)
    2. Custom config file (cli_config_path) OR project config (.nodejs-installer.yml)
    3. Global config (~/.nodejs-installer/config/config.yml)
    4. Built-in defaults

    Args:
        project_root: Project root directory for finding .nodejs-installer.yml.
        cli_config_path: Optional path to custom config file (--config flag).
        cli_overrides: Dict of CLI flag overrides.

    Returns:
        Merged InstallerConfig instance.

    Raises:
        ConfigError: If specified config file doesn't exist or has parse errors.
    """
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    # Layer 1: Global config
    global_path = find_global_config()
    if global_path and global_path.exists():
        try:
            global_dict = load_yaml_file(global_path)
            validate_config(global_dict, source=str(global_path))
            merged = merge_configs(merged, global_dict)
            sources.append(f"global:{global_path}")
            LOGGER.debug(f"Loaded global config from {global_path}")
        except (yaml.YAMLError, ConfigError, OSError) as e:
            LOGGER.warning(f"Failed to load global config: {e}")

    # Layer 2: Project or custom config
    if cli_config_path:
        if not cli_config_path.exists():
            raise ConfigError(f"Config file not found: {cli_config_path}")
        config_path: Optional[Path] = cli_config_path
        source_label = "custom"
    else:
        config_path = find_project_config(project_root)
        source_label = "project"

    if config_path and config_path.exists():
        try:
            project_dict = load_yaml_file(config_path)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        validate_config(project_dict, source=str(config_path))
        merged = merge_configs(merged, project_dict)
        sources.append(f"{source_label}:{config_path}")
        LOGGER.debug(f"Loaded {source_label} config from {config_path}")

    # Layer 3: CLI overrides
    if cli_overrides:
        merged = merge_configs(merged, cli_overrides)
        sources.append("cli")
        LOGGER.debug("Applied CLI overrides")

    config = dict_to_config(merged)
    config._config_sources = sources

    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def find_project_config(project_root: Path) -> Optional[Path]:
    """Find config file in project root.

    Args:
        project_root: Directory to search in.

    Returns:
        Path to config file if found, None otherwise.
    """
    for name in PROJECT_CONFIG_NAMES:
        config_path = project_root / name
        if config_path.exists():
            return config_path
    return None


def find_global_config() -> Optional[Path]:
    """Find global config at ~/.nodejs-installer/config/config.yml.

    Returns:
        Path to global config if it exists, None otherwise.
    """
    config_path = get_installer_home() / "config" / GLOBAL_CONFIG_NAME
    if config_path.exists():
        return config_path
    return None


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file.

    Performs environment variable expansion on string values.

    Args:
        path: Path to YAML file.

    Returns:
        Parsed dictionary.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    data = yaml.safe_load(content)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data)


def expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in config values.

    Supports ${VAR} and ${VAR:-default} syntax.
    """
    if isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    else:
        return data


def _env_var_replacer(match: re.Match[str]) -> str:
    """Replace environment variable reference with its value."""
    var_name = match.group(1)
    default_value = match.group(2)

    value = os.environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two config dicts, with overlay taking precedence.

    Rules:
    - Scalar values: overlay replaces base
    - Lists: overlay replaces base (no merging)
    - Dicts: recursive merge
    """
    result = base.copy()

    for key, overlay_value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(overlay_value, dict):
            result[key] = merge_configs(result[key], overlay_value)
        else:
            result[key] = overlay_value

    return result


def dict_to_config(data: Dict[str, Any]) -> InstallerConfig:
    """Convert a config dict to a typed InstallerConfig.

    Values of the wrong type fall back to defaults (validation has already
    warned about them).
    """
    defaults = InstallerConfig()

    def pick(key: str, expected: type, default: Any) -> Any:
        value = data.get(key)
        if value is None or (isinstance(value, bool) and expected is not bool):
            return default
        if not isinstance(value, expected):
            return default
        return value

    version = data.get("version", defaults.version)
    if isinstance(version, (int, float)) and not isinstance(version, bool):
        version = str(version)
    if not isinstance(version, str):
        version = defaults.version

    return InstallerConfig(
        version=version,
        dist_url=pick("dist_url", str, defaults.dist_url),
        vendor_dir=pick("vendor_dir", str, defaults.vendor_dir),
        target_dir=pick("target_dir", str, defaults.target_dir),
        bin_dir=pick("bin_dir", str, defaults.bin_dir),
        force_local=pick("force_local", bool, defaults.force_local),
        package_name=pick("package_name", str, defaults.package_name),
        timeout=pick("timeout", int, defaults.timeout),
    )


def get_default_config() -> InstallerConfig:
    """Get default configuration."""
    return InstallerConfig()
