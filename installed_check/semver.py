"""npm-flavoured semver range matching, backed by ``semantic_version``."""

from __future__ import annotations

import re

import semantic_version

from installed_check.exceptions import InvalidRangeError

# node-semver allows whitespace between an operator and its version (">= 0.10.0")
_SPACED_OPERATOR_RE = re.compile(r"(<=|>=|<|>|=|~|\^)\s+")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_range(expression: str) -> str:
    """``>=  1.0.0\\t<  2`` -> ``>=1.0.0 <2``; empty means ``*``."""
    text = _WHITESPACE_RE.sub(" ", expression.strip())
    return _SPACED_OPERATOR_RE.sub(r"\1", text) or "*"


def parse_range(expression: str) -> semantic_version.NpmSpec:
    """Parse an npm range expression (``^1.2.0``, ``1.x || >=2.5``, ``*``).

    An empty expression means "any version", as it does for npm.

    Raises :class:`InvalidRangeError` when the expression is not a valid range.
    """
    try:
        return semantic_version.NpmSpec(normalize_range(expression))
    except ValueError as exc:
        raise InvalidRangeError(expression) from exc


def parse_version(version: str) -> semantic_version.Version | None:
    """Parse a concrete version, tolerating a leading ``v`` or ``=``.

    Returns ``None`` when *version* is not valid semver.
    """
    text = version.strip().lstrip("=v").strip()
    try:
        return semantic_version.Version(text)
    except ValueError:
        return None


def satisfies(version: str, expression: str) -> bool:
    """Return True if *version* lies within the range *expression*.

    Pre-release versions only match when a comparator in the range carries
    a pre-release on the same ``major.minor.patch`` tuple.  A version that
    does not parse never satisfies anything.

    Raises :class:`InvalidRangeError` for an unparseable *expression*.
    """
    spec = parse_range(expression)
    parsed = parse_version(version)
    if parsed is None:
        return False
    return spec.match(parsed)
