"""Pure evaluators — no I/O, no ambient state."""

from installed_check.checks.engine_versions import check_engine_versions
from installed_check.checks.package_versions import check_package_versions

__all__ = ["check_engine_versions", "check_package_versions"]
