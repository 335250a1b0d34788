"""Listing of published Node.js versions."""

from __future__ import annotations

import re
from typing import Callable, List, Optional

from nodejs_installer.bootstrap.download import fetch_text
from nodejs_installer.bootstrap.versions import select_version
from nodejs_installer.core.exceptions import ParseError
from nodejs_installer.core.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_DIST_URL = "https://nodejs.org/dist/"

# Anchor text of a release directory, e.g. <a href="v18.16.0/">v18.16.0/</a>
VERSION_ANCHOR_PATTERN = re.compile(r">v([0-9]+\.[0-9]+\.[0-9]+)/<")


class VersionLister:
    """Retrieves the available Node.js versions from the distribution index.

    The index is a plain HTML directory listing; versions are scraped from
    the anchor texts of its release directories.
    """

    def __init__(
        self,
        dist_url: str = DEFAULT_DIST_URL,
        fetch: Optional[Callable[[str], str]] = None,
    ) -> None:
        """Initialize VersionLister.

        Args:
            dist_url: Base URL of the distribution index.
            fetch: Callable returning the body of a URL as text. Defaults to
                an HTTPS fetch.
        """
        self._dist_url = dist_url if dist_url.endswith("/") else f"{dist_url}/"
        self._fetch = fetch or fetch_text

    @property
    def dist_url(self) -> str:
        return self._dist_url

    def list_versions(self) -> List[str]:
        """Return published versions in the order they appear on the page.

        Raises:
            FetchError: If the index cannot be fetched.
            ParseError: If no versions are found on the page.
        """
        html = self._fetch(self._dist_url)
        versions = parse_versions(html)

        if not versions:
            raise ParseError(
                f"Error while querying {self._dist_url}. "
                "Unable to find NodeJS versions on this page."
            )

        LOGGER.debug(f"Found {len(versions)} versions at {self._dist_url}")
        return versions

    def latest_matching(self, constraint: str) -> str:
        """Return the highest listed version satisfying a constraint."""
        return select_version(constraint, self.list_versions())


def parse_versions(html: str) -> List[str]:
    """Extract version numbers from a distribution index page."""
    return VERSION_ANCHOR_PATTERN.findall(html)
