"""Shared fixtures for nodejs-installer unit tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests.unit.fakes import (
    FailingDownloader,
    FakeDownloader,
    FakeRunner,
    build_node_tarball,
)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def archives_dir(tmp_path: Path) -> Path:
    return tmp_path / "archives"


@pytest.fixture
def fake_downloader(archives_dir: Path) -> FakeDownloader:
    return FakeDownloader(lambda version: build_node_tarball(archives_dir, version))


@pytest.fixture
def failing_downloader() -> FailingDownloader:
    return FailingDownloader()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers installed by configure_logging during a test."""
    yield
    logger = logging.getLogger("nodejs_installer")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
