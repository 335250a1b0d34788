"""
Bootstrap module for nodejs-installer.

This module handles:
- Platform detection (OS family, ARM variant, pointer width)
- Project install layout (lib/node_modules, markers, vendor directories)
- Version normalization and constraint matching
- Downloading and unpacking distributions
- Executable validation
"""

from nodejs_installer.bootstrap.platform import Environment, get_environment, detect_environment
from nodejs_installer.bootstrap.paths import get_installer_home, ProjectPaths
from nodejs_installer.bootstrap.validation import validate_binary, RuntimeValidationResult, ToolStatus

__all__ = [
    "Environment",
    "get_environment",
    "detect_environment",
    "get_installer_home",
    "ProjectPaths",
    "validate_binary",
    "RuntimeValidationResult",
    "ToolStatus",
]
