"""Tests for the dependency version evaluator."""

from __future__ import annotations

from installed_check.checks.package_versions import check_package_versions
from installed_check.models import InstalledPackage


def _installed(**versions: str) -> dict[str, InstalledPackage]:
    return {name: InstalledPackage(name=name, version=v) for name, v in versions.items()}


# ── required dependencies ───────────────────────────────────────────────


class TestRequired:
    def test_missing_is_error(self):
        result = check_package_versions({"left-pad": "^1.0.0"}, {})
        assert result.errors == ["left-pad is not installed"]
        assert result.warnings == []

    def test_in_range_is_silent(self):
        result = check_package_versions({"foo": "^1.0.0"}, _installed(foo="1.4.2"))
        assert result.errors == []
        assert result.warnings == []

    def test_out_of_range_is_error(self):
        result = check_package_versions({"foo": "^2.0.0"}, _installed(foo="1.4.2"))
        assert result.errors == ["foo installed version (1.4.2) does not satisfy (^2.0.0)"]
        assert result.warnings == []

    def test_missing_and_mismatch_messages_differ(self):
        result = check_package_versions(
            {"a": "^1.0.0", "b": "^1.0.0"}, _installed(b="0.9.0")
        )
        assert result.errors[0] == "a is not installed"
        assert "does not satisfy" in result.errors[1]

    def test_prerelease_does_not_match_plain_range(self):
        result = check_package_versions({"foo": "^1.0.0"}, _installed(foo="1.1.0-rc.1"))
        assert len(result.errors) == 1

    def test_emission_order_follows_declaration(self):
        result = check_package_versions({"z": "1.0.0", "a": "1.0.0", "m": "1.0.0"}, {})
        assert result.errors == [
            "z is not installed",
            "a is not installed",
            "m is not installed",
        ]


# ── optional dependencies ───────────────────────────────────────────────


class TestOptional:
    def test_missing_is_silent(self):
        result = check_package_versions({}, {}, {"fsevents": "^2.0.0"})
        assert result.errors == []
        assert result.warnings == []

    def test_out_of_range_is_warning(self):
        result = check_package_versions({}, _installed(fsevents="1.0.0"), {"fsevents": "^2.0.0"})
        assert result.errors == []
        assert result.warnings == [
            "fsevents installed version (1.0.0) does not satisfy (^2.0.0)"
        ]

    def test_in_range_is_silent(self):
        result = check_package_versions({}, _installed(fsevents="2.3.0"), {"fsevents": "^2.0.0"})
        assert result.errors == []
        assert result.warnings == []

    def test_optional_wins_over_required_when_missing(self):
        result = check_package_versions({"fsevents": "^2.0.0"}, {}, {"fsevents": "^2.0.0"})
        assert result.errors == []
        assert result.warnings == []

    def test_optional_wins_over_required_on_mismatch(self):
        result = check_package_versions(
            {"fsevents": "^2.0.0"}, _installed(fsevents="1.0.0"), {"fsevents": "^2.0.0"}
        )
        assert result.errors == []
        assert len(result.warnings) == 1


# ── invalid input ───────────────────────────────────────────────────────


class TestInvalidRanges:
    def test_invalid_range_is_error_and_evaluation_continues(self):
        result = check_package_versions(
            {"bad": "banana", "missing": "^1.0.0", "good": "^1.0.0"},
            _installed(bad="1.0.0", good="1.0.0"),
        )
        assert result.errors == [
            "bad has an invalid version range (banana)",
            "missing is not installed",
        ]

    def test_invalid_optional_range_is_error(self):
        result = check_package_versions({}, _installed(opt="1.0.0"), {"opt": "banana"})
        assert result.errors == ["opt has an invalid version range (banana)"]
        assert result.warnings == []

    def test_unparseable_installed_version_is_mismatch(self):
        result = check_package_versions({"foo": "^1.0.0"}, _installed(foo="latest"))
        assert result.errors == ["foo installed version (latest) does not satisfy (^1.0.0)"]

    def test_inputs_not_mutated(self):
        required = {"foo": "^1.0.0"}
        optional = {"bar": "^1.0.0"}
        installed = _installed(foo="2.0.0")
        check_package_versions(required, installed, optional)
        assert required == {"foo": "^1.0.0"}
        assert optional == {"bar": "^1.0.0"}
        assert list(installed) == ["foo"]
