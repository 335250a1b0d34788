"""Tests for nodejs_installer.bootstrap.versions."""

from __future__ import annotations

import pytest

from nodejs_installer.bootstrap.versions import (
    compare_versions,
    constraint_to_specifier,
    is_exact_version,
    matching_versions,
    normalize_version,
    satisfies,
    select_version,
)
from nodejs_installer.core.exceptions import ConfigurationError

PUBLISHED = ["0.12.18", "4.9.1", "16.20.2", "18.15.0", "18.16.0", "18.16.1", "20.0.0"]


class TestNormalizeVersion:
    """Tests for normalize_version function."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("18.16.0", "18.16.0"),
            ("v18.16.0", "18.16.0"),
            ("18.16", "18.16.0"),
            ("18", "18.0.0"),
            (" v20.1.2 ", "20.1.2"),
        ],
    )
    def test_normalizes(self, raw: str, expected: str) -> None:
        assert normalize_version(raw) == expected

    @pytest.mark.parametrize("raw", ["", "latest", "18.x", "18.16.0.1", "^18"])
    def test_rejects_non_versions(self, raw: str) -> None:
        with pytest.raises(ConfigurationError, match="Invalid Node.js version"):
            normalize_version(raw)


class TestCompareVersions:
    """Tests for compare_versions function."""

    def test_numeric_not_lexicographic(self) -> None:
        assert compare_versions("10.0.0", "9.11.2") == 1
        assert compare_versions("4.0.0", "4.0.0") == 0
        assert compare_versions("3.10.0", "4.0.0") == -1


class TestIsExactVersion:
    """Tests for is_exact_version function."""

    def test_exact(self) -> None:
        assert is_exact_version("18.16.0")
        assert is_exact_version("v18.16.0")

    def test_not_exact(self) -> None:
        assert not is_exact_version("18.16")
        assert not is_exact_version("^18.16.0")
        assert not is_exact_version("*")


class TestConstraintToSpecifier:
    """Tests for constraint_to_specifier function."""

    @pytest.mark.parametrize("constraint", ["", "*", "latest", "LATEST"])
    def test_any_version(self, constraint: str) -> None:
        assert "0.1.0" in constraint_to_specifier(constraint)
        assert "99.0.0" in constraint_to_specifier(constraint)

    def test_invalid_constraint_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid version constraint"):
            constraint_to_specifier("not a version")


class TestMatchingVersions:
    """Tests for matching_versions and select_version."""

    @pytest.mark.parametrize(
        "constraint,expected",
        [
            ("18.16.0", ["18.16.0"]),
            ("v18.16.0", ["18.16.0"]),
            ("18", ["18.16.1", "18.16.0", "18.15.0"]),
            ("18.x", ["18.16.1", "18.16.0", "18.15.0"]),
            ("18.16.*", ["18.16.1", "18.16.0"]),
            ("^18.16", ["18.16.1", "18.16.0"]),
            ("^18.15.0", ["18.16.1", "18.16.0", "18.15.0"]),
            ("^0.12", ["0.12.18"]),
            ("~18.16.0", ["18.16.1", "18.16.0"]),
            ("~18.15", ["18.16.1", "18.16.0", "18.15.0"]),
            (">=18,<20", ["18.16.1", "18.16.0", "18.15.0"]),
            (">=18 <20", ["18.16.1", "18.16.0", "18.15.0"]),
        ],
    )
    def test_constraints(self, constraint: str, expected: list) -> None:
        assert matching_versions(constraint, PUBLISHED) == expected

    def test_results_are_unique_and_sorted(self) -> None:
        assert matching_versions("*", ["4.0.0", "v10.0.0", "10.0.0", "9.0.0"]) == [
            "10.0.0",
            "9.0.0",
            "4.0.0",
        ]

    def test_select_version_picks_highest(self) -> None:
        assert select_version("*", PUBLISHED) == "20.0.0"
        assert select_version("^16", PUBLISHED) == "16.20.2"

    def test_select_version_without_match_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="No Node.js version matches"):
            select_version("^22", PUBLISHED)


class TestSatisfies:
    """Tests for satisfies function."""

    def test_matching(self) -> None:
        assert satisfies("18.16.0", "^18")
        assert satisfies("v18.16.0", "18.x")

    def test_not_matching(self) -> None:
        assert not satisfies("16.20.2", "^18")

    def test_missing_version(self) -> None:
        assert not satisfies(None, "*")
        assert not satisfies("", "*")

    def test_invalid_input_is_false(self) -> None:
        assert not satisfies("garbage", "*")
        assert not satisfies("18.16.0", "not a version")
