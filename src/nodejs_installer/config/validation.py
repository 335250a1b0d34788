"""Configuration validation for nodejs-installer.

Validates configuration keys and value types, warning on unknown keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from typing import Any, Dict, List, Optional, Set, Tuple, Type

from nodejs_installer.core.logging import get_logger

LOGGER = get_logger(__name__)

# Valid keys and their expected types
KEY_TYPES: Dict[str, Tuple[Type[Any], ...]] = {
    "version": (str, int, float),
    "dist_url": (str,),
    "vendor_dir": (str,),
    "target_dir": (str,),
    "bin_dir": (str,),
    "force_local": (bool,),
    "package_name": (str,),
    "timeout": (int,),
}

VALID_KEYS: Set[str] = set(KEY_TYPES)


@dataclass
class ConfigValidationWarning:
    """A validation warning for configuration."""

    message: str
    source: str
    key: Optional[str] = None
    suggestion: Optional[str] = None


def validate_config(
    data: Dict[str, Any],
    source: str,
) -> List[ConfigValidationWarning]:
    """Validate configuration dictionary.

    Does not raise exceptions - returns (and logs) warnings instead.

    Args:
        data: Config dictionary to validate.
        source: Source file path for warning messages.

    Returns:
        List of validation warnings.
    """
    warnings: List[ConfigValidationWarning] = []

    if not isinstance(data, dict):
        warnings.append(ConfigValidationWarning(
            message=f"Config must be a mapping, got {type(data).__name__}",
            source=source,
        ))
        return warnings

    for key, value in data.items():
        if key not in VALID_KEYS:
            warning = ConfigValidationWarning(
                message=f"Unknown key '{key}'",
                source=source,
                key=key,
                suggestion=_suggest_key(key, VALID_KEYS),
            )
        elif not _has_type(value, KEY_TYPES[key]):
            expected = " or ".join(t.__name__ for t in KEY_TYPES[key])
            warning = ConfigValidationWarning(
                message=f"'{key}' must be {expected}, got {type(value).__name__}",
                source=source,
                key=key,
            )
        else:
            continue
        warnings.append(warning)
        _log_warning(warning)

    dist_url = data.get("dist_url")
    if isinstance(dist_url, str) and dist_url and not dist_url.startswith("https://"):
        warning = ConfigValidationWarning(
            message="'dist_url' must be an https:// URL",
            source=source,
            key="dist_url",
        )
        warnings.append(warning)
        _log_warning(warning)

    return warnings


def _has_type(value: Any, types: Tuple[Type[Any], ...]) -> bool:
    # bool is a subclass of int; only accept it where bool is expected
    if isinstance(value, bool) and bool not in types:
        return False
    return isinstance(value, types)


def _suggest_key(invalid_key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest a valid key for a potential typo.

    Args:
        invalid_key: The invalid key entered.
        valid_keys: Set of valid keys.

    Returns:
        Closest matching valid key, or None if no good match.
    """
    matches = get_close_matches(invalid_key, list(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _log_warning(warning: ConfigValidationWarning) -> None:
    """Log a validation warning."""
    msg = f"{warning.message} in {warning.source}"
    if warning.suggestion:
        msg += f" (did you mean '{warning.suggestion}'?)"
    LOGGER.warning(msg)
