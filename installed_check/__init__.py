"""installed-check — verify installed node_modules against package.json declarations."""

from installed_check.config import CheckOptions
from installed_check.exceptions import (
    ConfigurationError,
    InstalledCheckError,
    InstalledListError,
    InvalidRangeError,
    ManifestReadError,
)
from installed_check.models import CheckResult, InstalledPackage
from installed_check.orchestrator import installed_check, run_installed_check

__all__ = [
    "CheckOptions",
    "CheckResult",
    "ConfigurationError",
    "InstalledCheckError",
    "InstalledListError",
    "InstalledPackage",
    "InvalidRangeError",
    "ManifestReadError",
    "installed_check",
    "run_installed_check",
]
