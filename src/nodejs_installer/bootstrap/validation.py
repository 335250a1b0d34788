"""Runtime validation for nodejs-installer.

Checks that installed executables and wrapper scripts are present and
executable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List


class ToolStatus(str, Enum):
    """Status of an executable on disk."""

    PRESENT = "present"
    MISSING = "missing"
    NOT_EXECUTABLE = "not_executable"


@dataclass
class RuntimeValidationResult:
    """Result of validating the node/npm wrapper scripts of a project."""

    statuses: Dict[str, ToolStatus] = field(default_factory=dict)

    def all_valid(self) -> bool:
        """Check if all validated executables are present and executable."""
        if not self.statuses:
            return True
        return all(status == ToolStatus.PRESENT for status in self.statuses.values())

    def missing(self) -> List[str]:
        """Return executables that are missing or not executable."""
        return [
            name
            for name, status in self.statuses.items()
            if status != ToolStatus.PRESENT
        ]

    def get_status(self, name: str) -> ToolStatus:
        return self.statuses.get(name, ToolStatus.MISSING)

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {name: status.value for name, status in self.statuses.items()}


def validate_binary(path: Path) -> ToolStatus:
    """Validate a single executable file.

    Args:
        path: Path to the file.

    Returns:
        ToolStatus indicating whether the file is present and executable.
    """
    if not path.exists():
        return ToolStatus.MISSING

    if not os.access(path, os.X_OK):
        return ToolStatus.NOT_EXECUTABLE

    return ToolStatus.PRESENT


def validate_bin_scripts(bin_dir: Path, names: List[str]) -> RuntimeValidationResult:
    """Validate the wrapper scripts named in ``names`` inside bin_dir."""
    result = RuntimeValidationResult()
    for name in names:
        result.statuses[name] = validate_binary(bin_dir / name)
    return result
