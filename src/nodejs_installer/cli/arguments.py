"""Argument parser for the nodejs-installer CLI."""

from __future__ import annotations

import argparse
from pathlib import Path


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root (default: current directory).",
    )


def _add_layout_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--target-dir",
        metavar="DIR",
        help="Directory for the Node.js executables, relative to the project.",
    )
    parser.add_argument(
        "--bin-dir",
        metavar="DIR",
        help="Directory for the node/npm wrapper scripts, relative to the project.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nodejs-installer",
        description="nodejs-installer - Install a project-local Node.js runtime.",
    )

    # Global options
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show nodejs-installer version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce logging output to errors only.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Path to config file (default: .nodejs-installer.yml in project root).",
    )
    parser.add_argument(
        "--dist-url",
        metavar="URL",
        help="Base URL of the Node.js distribution server.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    install = subparsers.add_parser(
        "install",
        help="Install Node.js into the project and create wrapper scripts.",
    )
    _add_path_argument(install)
    install.add_argument(
        "--node-version",
        metavar="CONSTRAINT",
        help="Node.js version or constraint, e.g. 18.16.0, ^18.16, 20.x.",
    )
    install.add_argument(
        "--force-local",
        action="store_true",
        help="Install locally even when a matching global Node.js exists.",
    )
    install.add_argument(
        "--interactive",
        action="store_true",
        help="Choose among the matching versions interactively.",
    )
    _add_layout_arguments(install)

    list_versions = subparsers.add_parser(
        "list-versions",
        help="List Node.js versions published on the distribution server.",
    )
    list_versions.add_argument(
        "--constraint",
        metavar="CONSTRAINT",
        help="Only show versions matching this constraint, highest first.",
    )
    list_versions.add_argument(
        "--latest",
        action="store_true",
        help="Only show the highest matching version.",
    )

    bin_scripts = subparsers.add_parser(
        "bin-scripts",
        help="(Re)create the node/npm wrapper scripts.",
    )
    _add_path_argument(bin_scripts)
    bin_scripts.add_argument(
        "--global",
        dest="use_global",
        action="store_true",
        help="Point the wrappers at the globally installed Node.js.",
    )
    _add_layout_arguments(bin_scripts)

    status = subparsers.add_parser(
        "status",
        help="Show platform, installed version and wrapper script status.",
    )
    _add_path_argument(status)

    return parser
