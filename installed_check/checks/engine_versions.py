"""Engine constraint evaluator — engines ranges vs the running platform."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import structlog

from installed_check.exceptions import InvalidRangeError
from installed_check.models import DependencyMap, EvaluationResult, InstalledSnapshot
from installed_check.semver import satisfies

log = structlog.get_logger("installed_check.checks")


def check_engine_versions(
    engines: DependencyMap,
    dependencies: Iterable[str],
    installed: InstalledSnapshot,
    optional: DependencyMap | None,
    platform_versions: Mapping[str, str],
) -> EvaluationResult:
    """Check declared engines and installed packages' engines against the platform.

    *platform_versions* maps an engine name (``node``, ``npm``) to the version
    currently in use.  Engines with no known platform version are skipped.

    1. Every range in *engines* must accept the platform version; a mismatch
       is always an error.
    2. Every installed package named in *dependencies* that declares its own
       ``engines`` must accept the platform version too; a mismatch is an
       error, or a warning when the package is in *optional*.

    *dependencies* is expected to be pre-filtered by the caller (ignored
    names and, if requested, dev dependencies removed).  It is never
    modified.
    """
    optional = optional or {}
    result = EvaluationResult()

    for engine, expression in engines.items():
        current = platform_versions.get(engine)
        if current is None:
            log.debug("engines.platform_unknown", engine=engine)
            continue
        try:
            ok = satisfies(current, expression)
        except InvalidRangeError:
            result.errors.append(f"engines.{engine} has an invalid version range ({expression})")
            continue
        if not ok:
            result.errors.append(
                f"Current {engine} version ({current}) does not satisfy "
                f"engines.{engine} ({expression})"
            )

    for name in dependencies:
        package = installed.get(name)
        if package is None or not package.engines:
            continue
        target = result.warnings if name in optional else result.errors
        for engine, expression in package.engines.items():
            current = platform_versions.get(engine)
            if current is None:
                continue
            try:
                ok = satisfies(current, expression)
            except InvalidRangeError:
                target.append(f"{name} has an invalid engines.{engine} range ({expression})")
                continue
            if not ok:
                target.append(
                    f"{name} requires engines.{engine} ({expression}) "
                    f"but current version is ({current})"
                )

    return result
