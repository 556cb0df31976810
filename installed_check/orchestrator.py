"""Orchestrator — build check contexts from disk and run the evaluators.

Standalone entry points:

    result = await installed_check({"versionCheck": True, "path": "."})
    result = run_installed_check(CheckOptions(engine_check=True))

Contexts are built root first, then one per workspace member in the order
the root manifest declares them.  Reads are concurrent; evaluation is not.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Mapping, Sequence
from pathlib import Path, PurePosixPath
from typing import Any

import structlog

from installed_check.checks import check_engine_versions, check_package_versions
from installed_check.config import CheckOptions, coerce_options
from installed_check.exceptions import InstalledListError, ManifestReadError
from installed_check.models import (
    CheckContext,
    CheckResult,
    InstalledSnapshot,
    overlay,
)
from installed_check.readers.installed import list_installed
from installed_check.readers.manifest import MANIFEST_FILE, Manifest, read_manifest
from installed_check.readers.platform import detect_platform_versions

log = structlog.get_logger("installed_check.orchestrator")

_GLOB_CHARS = ("*", "?", "[")
_BRACE_RE = re.compile(r"\{([^{}]*)\}")


# ── context construction ────────────────────────────────────────────────


def build_root_context(manifest: Manifest, installed: InstalledSnapshot) -> CheckContext:
    dependencies = dict(manifest.dependencies or {})
    return CheckContext(
        engines=dict(manifest.engines or {}),
        dependencies=dependencies,
        required_dependencies={**dependencies, **(manifest.dev_dependencies or {})},
        optional_dependencies=dict(manifest.optional_dependencies or {}),
        installed=overlay({}, installed),
    )


def build_member_context(
    subpath: str,
    member: Manifest,
    root: Manifest,
    root_installed: InstalledSnapshot,
    member_installed: InstalledSnapshot,
) -> CheckContext:
    """Build a workspace member's context.

    ``engines`` and ``dependencies`` fall back to the root's field in full
    when the member's is absent or empty.  The required and optional sets
    come from the member alone.
    """
    member_dependencies = member.dependencies or {}
    return CheckContext(
        subpath=subpath,
        engines=dict(member.engines or root.engines or {}),
        dependencies=dict(member.dependencies or root.dependencies or {}),
        required_dependencies={**member_dependencies, **(member.dev_dependencies or {})},
        optional_dependencies=dict(member.optional_dependencies or {}),
        installed=overlay(root_installed, member_installed),
    )


def _expand_braces(pattern: str) -> list[str]:
    """``packages/{a,b}/*`` -> ``["packages/a/*", "packages/b/*"]``."""
    match = _BRACE_RE.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(_expand_braces(head + option + tail))
    return expanded


def expand_workspaces(root: Path, patterns: Sequence[str]) -> list[str]:
    """Resolve workspace entries to member subpaths relative to *root*.

    Brace alternatives (``{a,b}``) are expanded first, in the order written.
    Plain entries are kept as written (normalised).  Glob entries expand to
    the sorted directories that hold a package.json.  The root itself and
    duplicates are dropped; declared order is otherwise preserved.
    """
    members: list[str] = []
    seen: set[str] = set()
    for declared in patterns:
        declared = declared.strip().rstrip("/")
        if not declared or declared.startswith("!"):
            continue
        for pattern in _expand_braces(declared):
            pattern = pattern.rstrip("/")
            if not pattern:
                continue
            if any(ch in pattern for ch in _GLOB_CHARS):
                found = sorted(
                    p.relative_to(root).as_posix()
                    for p in root.glob(pattern)
                    if (p / MANIFEST_FILE).is_file()
                )
            else:
                found = [PurePosixPath(pattern).as_posix()]
            for subpath in found:
                if subpath == "." or subpath in seen:
                    continue
                seen.add(subpath)
                members.append(subpath)
    return members


# ── reads ────────────────────────────────────────────────────────────────


async def _read_manifest_wrapped(path: Path, message: str) -> Manifest:
    try:
        return await read_manifest(path)
    except ManifestReadError as exc:
        raise ManifestReadError(message) from exc


async def _read_root_installed(path: Path) -> dict:
    try:
        return await list_installed(path)
    except (InstalledListError, OSError) as exc:
        raise InstalledListError("Failed to list installed modules") from exc


async def _read_member_installed(path: Path) -> dict:
    try:
        return await list_installed(path)
    except (InstalledListError, OSError) as exc:
        log.warning("workspace.installed_unreadable", path=str(path), error=str(exc))
        return {}


async def build_contexts(options: CheckOptions) -> list[CheckContext]:
    """Read the root and (optionally) every workspace member into contexts."""
    root = options.path
    manifest, installed = await asyncio.gather(
        _read_manifest_wrapped(root, "Failed to read package.json"),
        _read_root_installed(root),
    )
    contexts = [build_root_context(manifest, installed)]

    if not (options.traverse_workspaces and manifest.workspaces):
        return contexts

    subpaths = expand_workspaces(root, manifest.workspaces)

    async def _load(subpath: str) -> CheckContext:
        member_path = root / subpath
        member, member_installed = await asyncio.gather(
            _read_manifest_wrapped(member_path, "Failed to read workspace package.json"),
            _read_member_installed(member_path),
        )
        return build_member_context(subpath, member, manifest, installed, member_installed)

    # gather keeps declared order regardless of completion order
    contexts.extend(await asyncio.gather(*(_load(s) for s in subpaths)))
    log.debug("orchestrator.workspaces_loaded", members=subpaths)
    return contexts


# ── evaluation ───────────────────────────────────────────────────────────


def engine_dependencies(
    context: CheckContext,
    *,
    no_dev: bool,
    ignores: Sequence[str] = (),
) -> dict[str, str]:
    """The dependency names the engine check should look at, as a fresh copy."""
    base = context.dependencies if no_dev else context.required_dependencies
    selected = {**base, **context.optional_dependencies}
    ignored = set(ignores)
    return {name: expr for name, expr in selected.items() if name not in ignored}


def evaluate_contexts(
    contexts: Sequence[CheckContext],
    options: CheckOptions,
    platform_versions: Mapping[str, str] | None = None,
) -> CheckResult:
    """Run the enabled evaluators over *contexts* and concatenate the output.

    The version check runs over every context first, then the engine check.
    """
    result = CheckResult()

    if options.version_check:
        for context in contexts:
            result.add(
                context,
                check_package_versions(
                    context.required_dependencies,
                    context.installed,
                    context.optional_dependencies,
                ),
            )

    if options.engine_check:
        for context in contexts:
            dependencies = engine_dependencies(
                context, no_dev=options.engine_no_dev, ignores=options.engine_ignores
            )
            result.add(
                context,
                check_engine_versions(
                    context.engines,
                    dependencies,
                    context.installed,
                    context.optional_dependencies,
                    platform_versions or {},
                ),
            )

    return result


async def installed_check(options: CheckOptions | Mapping[str, Any] | None) -> CheckResult:
    """Check that what is installed satisfies what the manifests declare.

    Raises :class:`ConfigurationError` when no check is selected,
    :class:`ManifestReadError` when the root or a member package.json
    cannot be read, and :class:`InstalledListError` when the root
    node_modules cannot be inspected.
    """
    opts = coerce_options(options)
    contexts = await build_contexts(opts)

    platform_versions = opts.platform_versions
    if opts.engine_check and platform_versions is None:
        platform_versions = await detect_platform_versions()

    log.info(
        "orchestrator.contexts_built",
        path=str(opts.path),
        contexts=len(contexts),
        platform=platform_versions,
    )
    result = evaluate_contexts(contexts, opts, platform_versions)
    log.info(
        "orchestrator.done",
        errors=len(result.errors),
        warnings=len(result.warnings),
    )
    return result


def run_installed_check(options: CheckOptions | Mapping[str, Any] | None) -> CheckResult:
    """Synchronous wrapper around :func:`installed_check`."""
    return asyncio.run(installed_check(options))
