"""Downloading and unpacking Node.js distributions.

Provides the HTTP helpers used to read the version listing, and the default
:class:`Downloader` that fetches an artifact in the background and unpacks
it into an install directory.
"""

from __future__ import annotations

import shutil
import ssl
import tarfile
import tempfile
import zipfile
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Optional
from urllib.error import URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from nodejs_installer import __version__
from nodejs_installer.core.exceptions import FetchError, InstallFilesystemError
from nodejs_installer.core.logging import get_logger

if TYPE_CHECKING:
    from nodejs_installer.nodejs.package import RemotePackage

LOGGER = get_logger(__name__)

ALLOWED_SCHEMES = ("https",)
DEFAULT_TIMEOUT = 60
USER_AGENT = f"nodejs-installer/{__version__}"


def secure_urlopen(url: str, timeout: int = DEFAULT_TIMEOUT):
    """Open a URL over HTTPS with certificate verification.

    Raises:
        ValueError: If the URL does not use an allowed scheme.
    """
    scheme = urlparse(url).scheme
    if scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Refusing to download from non-HTTPS URL: {url}")

    request = Request(url, headers={"User-Agent": USER_AGENT})
    context = ssl.create_default_context()
    return urlopen(request, timeout=timeout, context=context)  # nosec B310 nosemgrep


def fetch_text(url: str, timeout: int = DEFAULT_TIMEOUT) -> str:
    """Fetch a URL and decode the body as text.

    Raises:
        FetchError: If the request fails.
    """
    LOGGER.debug(f"Fetching {url}")
    try:
        with secure_urlopen(url, timeout=timeout) as response:
            body = response.read()
    except (URLError, ValueError, OSError) as e:
        raise FetchError(f"Error while querying {url}: {e}") from e

    return body.decode("utf-8", errors="replace")


class Downloader(ABC):
    """Download/extract facility the installer delegates to."""

    @abstractmethod
    def download(self, package: "RemotePackage", target_dir: Path) -> "Future[Path]":
        """Start downloading a package's artifact into target_dir.

        Returns:
            Future resolving to the path of the downloaded file.
        """

    @abstractmethod
    def install(self, package: "RemotePackage", archive: Path, destination: Path) -> None:
        """Unpack a downloaded artifact into destination."""


def _ensure_within(root: Path, member_name: str) -> None:
    member_path = (root / member_name).resolve()
    if not member_path.is_relative_to(root.resolve()):
        raise InstallFilesystemError(f"Path traversal detected: {member_name}")


class DistributionDownloader(Downloader):
    """Default Downloader for nodejs.org distributions.

    Handles:
    - Background HTTPS download via a single worker thread
    - tar archives (gzip/xz), zip archives and single-file executables
    - Stripping the single top-level directory archives are packed with
    """

    def __init__(
        self,
        timeout: int = DEFAULT_TIMEOUT,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self._timeout = timeout
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="nodejs-download"
        )

    def close(self) -> None:
        """Shut down the download worker, waiting for a running download."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "DistributionDownloader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def download(self, package: "RemotePackage", target_dir: Path) -> "Future[Path]":
        target_dir.mkdir(parents=True, exist_ok=True)
        file_name = Path(urlparse(package.dist_url).path).name
        destination = target_dir / file_name
        return self._executor.submit(self._fetch, package.dist_url, destination)

    def _fetch(self, url: str, destination: Path) -> Path:
        LOGGER.debug(f"Downloading from {url}")
        partial = destination.with_name(destination.name + ".part")
        try:
            with secure_urlopen(url, timeout=self._timeout) as response:
                with open(partial, "wb") as out:
                    shutil.copyfileobj(response, out)
            partial.replace(destination)
        except (URLError, ValueError, OSError) as e:
            partial.unlink(missing_ok=True)
            raise FetchError(f"Could not download {url}: {e}") from e

        return destination

    def install(self, package: "RemotePackage", archive: Path, destination: Path) -> None:
        destination.mkdir(parents=True, exist_ok=True)

        if package.dist_type == "file":
            target = destination / archive.name
            shutil.copy2(archive, target)
            target.chmod(0o755)
            return

        with tempfile.TemporaryDirectory(dir=destination.parent) as tmp:
            unpack_root = Path(tmp)
            try:
                if package.dist_type == "zip":
                    self._extract_zip(archive, unpack_root)
                else:
                    self._extract_tar(archive, unpack_root)
            except (tarfile.TarError, zipfile.BadZipFile) as e:
                raise InstallFilesystemError(f"Could not extract {archive}: {e}") from e

            self._move_contents(unpack_root, destination)

    def _extract_tar(self, archive: Path, dest: Path) -> None:
        with tarfile.open(archive, "r:*") as tar:
            members = tar.getmembers()
            for member in members:
                _ensure_within(dest, member.name)
                if member.issym() or member.islnk():
                    link_base = Path(member.name).parent if member.issym() else Path()
                    _ensure_within(dest, str(link_base / member.linkname))
            tar.extractall(path=dest, members=members, filter="tar")

    def _extract_zip(self, archive: Path, dest: Path) -> None:
        with zipfile.ZipFile(archive, "r") as zf:
            for name in zf.namelist():
                _ensure_within(dest, name)
            zf.extractall(dest)

    def _move_contents(self, unpack_root: Path, destination: Path) -> None:
        """Move unpacked files into destination.

        A lone top-level directory is stripped, so
        ``node-v18.16.0-linux-x64/bin/node`` lands at ``bin/node``.
        """
        entries = list(unpack_root.iterdir())
        if len(entries) == 1 and entries[0].is_dir() and not entries[0].is_symlink():
            entries = list(entries[0].iterdir())

        for entry in entries:
            target = destination / entry.name
            if target.exists() or target.is_symlink():
                if target.is_dir() and not target.is_symlink():
                    shutil.rmtree(target)
                else:
                    target.unlink()
            shutil.move(str(entry), str(target))
