"""Configuration data models for nodejs-installer.

Defines the typed configuration that represents the .nodejs-installer.yml
structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from nodejs_installer.nodejs.installer import DEFAULT_PACKAGE_NAME, DEFAULT_TARGET_DIR
from nodejs_installer.nodejs.lister import DEFAULT_DIST_URL

DEFAULT_VERSION_CONSTRAINT = "*"
DEFAULT_VENDOR_DIR = "vendor"
DEFAULT_BIN_DIR = "vendor/bin"


@dataclass
class InstallerConfig:
    """Complete nodejs-installer configuration.

    Example .nodejs-installer.yml:
        version: "^18.16"
        target_dir: vendor/nodejs/nodejs
        bin_dir: vendor/bin
        force_local: true
        dist_url: ${NODE_MIRROR:-https://nodejs.org/dist/}
    """

    version: str = DEFAULT_VERSION_CONSTRAINT  # constraint, e.g. "^18.16" or "18.16.0"
    dist_url: str = DEFAULT_DIST_URL
    vendor_dir: str = DEFAULT_VENDOR_DIR
    target_dir: str = DEFAULT_TARGET_DIR
    bin_dir: str = DEFAULT_BIN_DIR
    force_local: bool = False  # never reuse a global Node.js
    package_name: str = DEFAULT_PACKAGE_NAME
    timeout: int = 60  # download timeout in seconds

    # Metadata (not from YAML, set by loader)
    _config_sources: List[str] = field(default_factory=list, repr=False)

    @property
    def config_sources(self) -> List[str]:
        return list(self._config_sources)
