"""Download URL resolution.

Maps a Node.js version and host Environment to the artifact published on
the distribution server.

Artifact layout by platform:
    Linux ARM (>= 4.0.0)     node-v{version}-linux-armv7l.tar.gz
    Windows >= 4.0.0         win-x64/node.exe
    Windows < 4.0.0, 32-bit  node.exe
    Windows < 4.0.0, 64-bit  x64/node.exe
    macOS / SunOS / Linux    node-v{version}-{os}-{arch}.tar.gz
"""

from __future__ import annotations

from typing import Optional

from nodejs_installer.bootstrap.platform import ArmVariant, Environment, get_environment
from nodejs_installer.bootstrap.versions import compare_versions, normalize_version
from nodejs_installer.core.exceptions import ConfigurationError
from nodejs_installer.nodejs.lister import DEFAULT_DIST_URL

WINDOWS_BINARY_NAME = "node.exe"

# First release with per-architecture Windows directories and ARM builds
SPLIT_LAYOUT_VERSION = "4.0.0"


def _artifact_path(version: str, environment: Environment) -> str:
    # ARM is checked first: the generic Linux branch would otherwise claim it
    if environment.is_arm:
        if compare_versions(version, SPLIT_LAYOUT_VERSION) < 0:
            raise ConfigurationError(
                "NodeJS-installer cannot install Node <4.0 on computers with ARM "
                "processors. Please install NodeJS globally on your machine first, "
                "then run the installer again, or consider installing a version "
                "of NodeJS >=4.0."
            )
        if environment.arm_variant == ArmVariant.NONE:
            raise ConfigurationError(
                f"NodeJS-installer cannot install Node on ARM {environment.pointer_width}bits "
                f"processors that are not v6l, v7l or arm64 (found {environment.machine!r}). "
                "Please install NodeJS globally on your machine first, then run the "
                "installer again."
            )
        return "node-v{VERSION}-{OS}.tar.gz"

    if environment.is_windows:
        if compare_versions(version, SPLIT_LAYOUT_VERSION) >= 0:
            return f"win-{{ARCHITECTURE}}/{WINDOWS_BINARY_NAME}"
        if environment.pointer_width == 32:
            return WINDOWS_BINARY_NAME
        return f"{{ARCHITECTURE}}/{WINDOWS_BINARY_NAME}"

    if environment.is_macos or environment.is_sunos or environment.is_linux:
        return "node-v{VERSION}-{OS}-{ARCHITECTURE}.tar.gz"

    raise ConfigurationError(
        f"Unsupported architecture: {environment.os_family.value} - "
        f"{environment.pointer_width} bits"
    )


def resolve_download_url(
    version: str,
    environment: Optional[Environment] = None,
    dist_url: str = DEFAULT_DIST_URL,
) -> str:
    """Return the URL of the Node.js artifact for a version and platform.

    Args:
        version: Node.js version, with or without a leading ``v``.
        environment: Host environment; detected when omitted.
        dist_url: Base URL of the distribution server.

    Returns:
        Fully qualified artifact URL.

    Raises:
        ConfigurationError: If the platform/version combination is unsupported.
    """
    environment = environment or get_environment()
    version = normalize_version(version)

    template = f"{dist_url.rstrip('/')}/v{{VERSION}}/{_artifact_path(version, environment)}"
    return (
        template.replace("{VERSION}", version)
        .replace("{ARCHITECTURE}", environment.arch_label)
        .replace("{OS}", environment.os_label)
    )
