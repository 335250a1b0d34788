"""Exception hierarchy for nodejs-installer.

Every failure surfaced to the user is an :class:`InstallerError` carrying a
single descriptive message. "Already installed" is not an error.
"""

from __future__ import annotations


class InstallerError(Exception):
    """Base class for all nodejs-installer errors."""


class ConfigurationError(InstallerError):
    """Unsupported platform, bad version string or invalid configuration.

    Raised before any network access takes place.
    """


class FetchError(InstallerError):
    """The version listing or a distribution artifact could not be fetched."""


class ParseError(InstallerError):
    """The version listing was fetched but no versions could be extracted."""


class InstallFilesystemError(InstallerError):
    """Creating, moving or deleting files failed during install.

    Steps completed before the failure are not rolled back.
    """
