"""Host environment detection.

Reports the operating system family, ARM sub-variant and pointer width of
the running host. Detection is a pure function of three host signals so it
can be exercised for any platform in tests; :func:`get_environment` caches
the answer for the current process.
"""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional

from nodejs_installer.core.exceptions import ConfigurationError


class OsFamily(str, Enum):
    """Operating system families Node.js publishes binaries for."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    SUNOS = "sunos"


class ArmVariant(str, Enum):
    """ARM sub-types with a dedicated Linux distribution."""

    NONE = "none"
    V6L = "v6l"
    V7L = "v7l"
    ARM64 = "arm64"


# Prefixes of platform.system() values that mean a Windows host
_WINDOWS_SYSTEMS = ("windows", "cygwin", "msys", "mingw")

_ARCH_LABELS = {
    32: "x86",
    64: "x64",
}

_ARM_OS_LABELS = {
    ArmVariant.V6L: "linux-armv6l",
    ArmVariant.V7L: "linux-armv7l",
    ArmVariant.ARM64: "linux-arm64",
}


@dataclass(frozen=True)
class Environment:
    """Immutable description of the host platform."""

    os_family: OsFamily
    pointer_width: int
    arm_variant: ArmVariant = ArmVariant.NONE
    machine: str = ""

    @property
    def is_windows(self) -> bool:
        return self.os_family == OsFamily.WINDOWS

    @property
    def is_macos(self) -> bool:
        return self.os_family == OsFamily.MACOS

    @property
    def is_linux(self) -> bool:
        return self.os_family == OsFamily.LINUX

    @property
    def is_sunos(self) -> bool:
        return self.os_family == OsFamily.SUNOS

    @property
    def is_arm(self) -> bool:
        """True for Linux hosts running on any ARM processor."""
        return self.is_linux and _is_arm_machine(self.machine)

    @property
    def arch_label(self) -> str:
        """Architecture label used in distribution file names."""
        return _ARCH_LABELS.get(self.pointer_width, str(self.pointer_width))

    @property
    def os_label(self) -> str:
        """OS label used in distribution file names."""
        if self.is_macos:
            return "darwin"
        if self.is_sunos:
            return "sunos"
        if self.is_arm and self.arm_variant != ArmVariant.NONE:
            return _ARM_OS_LABELS[self.arm_variant]
        if self.is_linux:
            return "linux"
        return "windows"


def _is_arm_machine(machine: str) -> bool:
    machine = machine.lower()
    return machine.startswith("arm") or machine.startswith("aarch64")


def _detect_os_family(system: str) -> Optional[OsFamily]:
    system = system.lower()
    if system.startswith(_WINDOWS_SYSTEMS):
        return OsFamily.WINDOWS
    if system == "darwin":
        return OsFamily.MACOS
    if system in ("sunos", "solaris"):
        return OsFamily.SUNOS
    if system == "linux":
        return OsFamily.LINUX
    return None


def _detect_arm_variant(machine: str, pointer_width: int) -> ArmVariant:
    machine = machine.lower()
    if machine == "armv6l":
        return ArmVariant.V6L
    if machine == "armv7l":
        return ArmVariant.V7L
    if machine in ("aarch64", "arm64") and pointer_width == 64:
        return ArmVariant.ARM64
    return ArmVariant.NONE


def detect_environment(system: str, machine: str, pointer_width: int) -> Environment:
    """Build an Environment from raw host signals.

    Args:
        system: OS name as reported by ``platform.system()``.
        machine: Hardware name as reported by ``uname -m``.
        pointer_width: 32 or 64.

    Returns:
        The detected Environment.

    Raises:
        ConfigurationError: If the OS family is not supported.
    """
    os_family = _detect_os_family(system)
    if os_family is None:
        raise ConfigurationError(
            f"Unsupported architecture: {system} - {pointer_width} bits"
        )

    arm_variant = ArmVariant.NONE
    if os_family == OsFamily.LINUX and _is_arm_machine(machine):
        arm_variant = _detect_arm_variant(machine, pointer_width)

    return Environment(
        os_family=os_family,
        pointer_width=pointer_width,
        arm_variant=arm_variant,
        machine=machine,
    )


def _host_pointer_width() -> int:
    return 64 if sys.maxsize > 2**32 else 32


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Detect and cache the Environment of the running host."""
    return detect_environment(
        platform.system(),
        platform.machine(),
        _host_pointer_width(),
    )
