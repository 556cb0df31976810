"""Custom exceptions for installed-check.

Only configuration and I/O failures are raised.  Compatibility problems
(missing packages, out-of-range versions, engine mismatches) are collected
into a :class:`~installed_check.models.CheckResult` instead.
"""

from __future__ import annotations


class InstalledCheckError(Exception):
    """Base exception for all installed-check errors."""

    kind = "error"

    @property
    def cause(self) -> BaseException | None:
        """The underlying exception this error wraps, if any."""
        return self.__cause__

    def __str__(self) -> str:
        message = super().__str__()
        if self.__cause__ is not None:
            return f"{message}: {self.__cause__}"
        return message


class ConfigurationError(InstalledCheckError):
    """Raised when the check options are unusable (e.g. no check selected)."""

    kind = "configuration"


class ManifestReadError(InstalledCheckError):
    """Raised when a package.json is missing or malformed."""

    kind = "manifest"


class InstalledListError(InstalledCheckError):
    """Raised when a node_modules tree cannot be inspected."""

    kind = "installed"


class InvalidRangeError(InstalledCheckError):
    """Raised when a semver range expression cannot be parsed."""

    kind = "range"

    def __init__(self, expression: str):
        self.expression = expression
        super().__init__(f"Invalid version range {expression!r}")
