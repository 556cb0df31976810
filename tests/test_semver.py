"""Tests for npm range matching."""

from __future__ import annotations

import pytest

from installed_check.exceptions import InvalidRangeError
from installed_check.semver import normalize_range, parse_version, satisfies


class TestSatisfies:
    @pytest.mark.parametrize(
        ("version", "expression"),
        [
            ("1.5.0", "^1.0.0"),
            ("1.0.0", "^1.0.0"),
            ("3.2.1", ">=3.0.0"),
            ("1.2.9", "~1.2.0"),
            ("1.9.0", "1.x"),
            ("2.6.0", "1.x || >=2.5.0"),
            ("4.0.0", "*"),
            ("1.0.0+build.7", "^1.0.0"),
        ],
    )
    def test_in_range(self, version, expression):
        assert satisfies(version, expression)

    @pytest.mark.parametrize(
        ("version", "expression"),
        [
            ("2.0.0", "^1.0.0"),
            ("16.0.0", ">=18.0.0"),
            ("1.3.0", "~1.2.0"),
            ("2.4.0", "1.x || >=2.5.0"),
        ],
    )
    def test_out_of_range(self, version, expression):
        assert not satisfies(version, expression)

    def test_empty_range_means_any(self):
        assert satisfies("0.0.1", "")
        assert satisfies("9.9.9", "  ")

    def test_leading_v_tolerated(self):
        assert satisfies("v18.17.1", ">=18.0.0")

    def test_unparseable_version_never_satisfies(self):
        assert not satisfies("not-a-version", "*")

    def test_invalid_range_raises(self):
        with pytest.raises(InvalidRangeError) as exc_info:
            satisfies("1.0.0", "banana")
        assert exc_info.value.expression == "banana"
        assert exc_info.value.kind == "range"


class TestSpacedRanges:
    @pytest.mark.parametrize(
        ("version", "expression"),
        [
            ("1.2.3", ">= 0.10.0"),
            ("2.0.0", "> 1"),
            ("2.0.0", "<= 2.0.0"),
            ("1.2.9", "~ 1.2.3"),
            ("1.9.0", "^ 1.2.3"),
            ("2.1.0", ">=1.0.0 || >= 2"),
            ("1.5.0", ">=1.0.0\t<2"),
            ("1.5.0", ">=  1.0.0   <  2.0.0"),
            ("1.5.0", "1.2.3 - 2.0.0"),
        ],
    )
    def test_in_range(self, version, expression):
        assert satisfies(version, expression)

    @pytest.mark.parametrize(
        ("version", "expression"),
        [
            ("1.0.0", "> 1"),
            ("2.0.0", ">= 1.0.0 < 2"),
            ("16.0.0", ">= 18"),
        ],
    )
    def test_out_of_range(self, version, expression):
        assert not satisfies(version, expression)

    def test_normalize_range(self):
        assert normalize_range(">=  1.0.0\t<  2") == ">=1.0.0 <2"
        assert normalize_range("1.2.3 - 2.0.0") == "1.2.3 - 2.0.0"
        assert normalize_range("  ") == "*"


class TestPrerelease:
    def test_plain_range_rejects_prerelease(self):
        assert not satisfies("1.2.0-beta.1", "^1.0.0")

    def test_prerelease_range_on_same_tuple_matches(self):
        assert satisfies("1.2.0-beta.1", ">=1.2.0-beta.0")

    def test_prerelease_on_other_tuple_rejected(self):
        assert not satisfies("1.3.0-beta.1", ">=1.2.0-beta.0")


class TestParseVersion:
    def test_valid(self):
        parsed = parse_version("=1.2.3")
        assert parsed is not None
        assert (parsed.major, parsed.minor, parsed.patch) == (1, 2, 3)

    def test_invalid(self):
        assert parse_version("1.2") is None
