"""Remote package descriptors handed to the downloader."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional, Sequence, Tuple
from urllib.parse import urlparse

from nodejs_installer.bootstrap.platform import Environment, get_environment
from nodejs_installer.bootstrap.versions import normalize_version
from nodejs_installer.nodejs.lister import DEFAULT_DIST_URL
from nodejs_installer.nodejs.urls import resolve_download_url

# Dist types understood by the downloader
DIST_TAR = "tar"
DIST_ZIP = "zip"
DIST_FILE = "file"


@dataclass(frozen=True)
class RemotePackage:
    """A Node.js distribution ready to be downloaded."""

    name: str
    normalized_version: str
    pretty_version: str
    dist_url: str
    dist_type: str
    target_dir: str
    binaries: Tuple[str, ...] = ()


def resolve_dist_type(url: str) -> str:
    """Infer the dist type from the file extension of a URL."""
    extension = PurePosixPath(urlparse(url).path).suffix.lstrip(".").lower()
    if extension == "zip":
        return DIST_ZIP
    if extension == "exe":
        return DIST_FILE
    return DIST_TAR


def create_package(
    name: str,
    version: str,
    target_dir: str,
    binaries: Sequence[str] = (),
    environment: Optional[Environment] = None,
    dist_url: str = DEFAULT_DIST_URL,
) -> RemotePackage:
    """Build the RemotePackage for a Node.js version on this platform.

    Args:
        name: Package name.
        version: Requested version as written by the user.
        target_dir: Directory the package is downloaded to, relative to the
            vendor directory.
        binaries: Executables the package provides.
        environment: Host environment; detected when omitted.
        dist_url: Base URL of the distribution server.
    """
    environment = environment or get_environment()
    remote_file = resolve_download_url(version, environment, dist_url)

    if environment.is_windows:
        binaries = [f"{binary}.bat" for binary in binaries]

    return RemotePackage(
        name=name,
        normalized_version=normalize_version(version),
        pretty_version=version,
        dist_url=remote_file,
        dist_type=resolve_dist_type(remote_file),
        target_dir=target_dir,
        binaries=tuple(binaries),
    )
