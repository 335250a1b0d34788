"""Node.js version string handling.

Versions are ``MAJOR.MINOR.PATCH`` strings compared numerically. Version
constraints from configuration are translated to ``packaging`` specifier
sets so that ``^18.2``, ``~18.16``, ``18.x`` and PEP 440 ranges all work.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import Version

from nodejs_installer.core.exceptions import ConfigurationError

VERSION_PATTERN = re.compile(r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?$")

# Constraints that accept any published version
ANY_VERSION = ("", "*", "latest")

_WILDCARD_PATTERN = re.compile(r"^v?(\d+(?:\.\d+)?)(?:\.[x*])?$", re.IGNORECASE)
_CARET_PATTERN = re.compile(r"^\^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?$")
_TILDE_PATTERN = re.compile(r"^~v?(\d+)(?:\.(\d+))?(?:\.(\d+))?$")


def normalize_version(version: str) -> str:
    """Return the canonical ``MAJOR.MINOR.PATCH`` form of a version string.

    A leading ``v`` is dropped and missing components are filled with 0.

    Raises:
        ConfigurationError: If the string is not a version.
    """
    match = VERSION_PATTERN.match(version.strip())
    if not match:
        raise ConfigurationError(f"Invalid Node.js version: {version!r}")
    parts = [part or "0" for part in match.groups()]
    return ".".join(str(int(part)) for part in parts)


def version_key(version: str) -> Tuple[int, int, int]:
    """Numeric sort key for a version string."""
    major, minor, patch = normalize_version(version).split(".")
    return int(major), int(minor), int(patch)


def compare_versions(left: str, right: str) -> int:
    """Compare two versions, returning -1, 0 or 1."""
    left_key, right_key = version_key(left), version_key(right)
    return (left_key > right_key) - (left_key < right_key)


def is_exact_version(constraint: str) -> bool:
    """True if the constraint names one fully specified version."""
    return bool(re.match(r"^v?\d+\.\d+\.\d+$", constraint.strip()))


def constraint_to_specifier(constraint: str) -> SpecifierSet:
    """Translate a version constraint into a SpecifierSet.

    Raises:
        ConfigurationError: If the constraint cannot be parsed.
    """
    constraint = constraint.strip()

    if constraint.lower() in ANY_VERSION:
        return SpecifierSet()

    if is_exact_version(constraint):
        return SpecifierSet(f"=={normalize_version(constraint)}")

    wildcard = _WILDCARD_PATTERN.match(constraint)
    if wildcard:
        return SpecifierSet(f"=={wildcard.group(1)}.*")

    caret = _CARET_PATTERN.match(constraint)
    if caret:
        major, minor, patch = (int(part or 0) for part in caret.groups())
        if major > 0:
            upper = f"{major + 1}"
        elif minor > 0:
            upper = f"0.{minor + 1}"
        else:
            upper = f"0.0.{patch + 1}"
        return SpecifierSet(f">={major}.{minor}.{patch},<{upper}")

    tilde = _TILDE_PATTERN.match(constraint)
    if tilde:
        major, minor, patch = tilde.groups()
        lower = f"{major}.{minor or 0}.{patch or 0}"
        if patch is not None:
            upper = f"{major}.{int(minor) + 1}"
        else:
            upper = f"{int(major) + 1}"
        return SpecifierSet(f">={lower},<{upper}")

    try:
        return SpecifierSet(constraint.replace(" ", ","))
    except InvalidSpecifier as e:
        raise ConfigurationError(f"Invalid version constraint {constraint!r}: {e}") from e


def matching_versions(constraint: str, versions: Iterable[str]) -> List[str]:
    """Return versions satisfying a constraint, highest first."""
    specifier = constraint_to_specifier(constraint)
    matches = [
        normalize_version(version)
        for version in versions
        if Version(normalize_version(version)) in specifier
    ]
    return sorted(set(matches), key=version_key, reverse=True)


def select_version(constraint: str, versions: Iterable[str]) -> str:
    """Pick the highest version satisfying a constraint.

    Raises:
        ConfigurationError: If no version matches.
    """
    matches = matching_versions(constraint, versions)
    if not matches:
        raise ConfigurationError(
            f"No Node.js version matches constraint {constraint!r}"
        )
    return matches[0]


def satisfies(version: Optional[str], constraint: str) -> bool:
    """True if a (possibly missing) version satisfies a constraint."""
    if not version:
        return False
    try:
        return Version(normalize_version(version)) in constraint_to_specifier(constraint)
    except ConfigurationError:
        return False
