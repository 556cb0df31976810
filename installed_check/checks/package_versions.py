"""Dependency version evaluator — declared ranges vs installed versions."""

from __future__ import annotations

from installed_check.exceptions import InvalidRangeError
from installed_check.models import (
    DependencyMap,
    EvaluationResult,
    InstalledPackage,
    InstalledSnapshot,
)
from installed_check.semver import satisfies


def check_package_versions(
    required: DependencyMap,
    installed: InstalledSnapshot,
    optional: DependencyMap | None = None,
) -> EvaluationResult:
    """Classify every declared dependency against the installed snapshot.

    Required dependencies that are missing or out of range are errors.
    Optional dependencies are skipped when missing and produce warnings when
    out of range.  A name declared in both is treated as optional.  An
    unparseable range is an error for that entry only.
    """
    optional = optional or {}
    result = EvaluationResult()

    for name, expression in required.items():
        if name in optional:
            continue
        package = installed.get(name)
        if package is None:
            result.errors.append(f"{name} is not installed")
            continue
        _compare(name, expression, package, result, is_optional=False)

    for name, expression in optional.items():
        package = installed.get(name)
        if package is None:
            continue
        _compare(name, expression, package, result, is_optional=True)

    return result


def _compare(
    name: str,
    expression: str,
    package: InstalledPackage,
    result: EvaluationResult,
    *,
    is_optional: bool,
) -> None:
    try:
        ok = satisfies(package.version, expression)
    except InvalidRangeError:
        result.errors.append(f"{name} has an invalid version range ({expression})")
        return
    if ok:
        return
    message = f"{name} installed version ({package.version}) does not satisfy ({expression})"
    if is_optional:
        result.warnings.append(message)
    else:
        result.errors.append(message)
