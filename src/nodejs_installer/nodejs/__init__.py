"""Node.js distribution resolution, installation and wrapper scripts."""

from nodejs_installer.nodejs.bin_scripts import BinScriptGenerator, make_path_relative
from nodejs_installer.nodejs.discovery import NodeDiscovery
from nodejs_installer.nodejs.installer import InstallState, Installer
from nodejs_installer.nodejs.lister import DEFAULT_DIST_URL, VersionLister
from nodejs_installer.nodejs.package import RemotePackage, create_package
from nodejs_installer.nodejs.urls import resolve_download_url

__all__ = [
    "BinScriptGenerator",
    "make_path_relative",
    "NodeDiscovery",
    "InstallState",
    "Installer",
    "DEFAULT_DIST_URL",
    "VersionLister",
    "RemotePackage",
    "create_package",
    "resolve_download_url",
]
