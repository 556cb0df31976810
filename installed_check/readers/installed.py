"""node_modules walker — builds the installed-package snapshot."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterator
from pathlib import Path

import structlog

from installed_check.exceptions import InstalledListError
from installed_check.models import InstalledPackage

log = structlog.get_logger("installed_check.readers")

NODE_MODULES = "node_modules"


def _package_dirs(modules: Path) -> Iterator[tuple[str, Path]]:
    """Yield ``(name, directory)`` for every top-level package, scopes included."""
    for entry in sorted(modules.iterdir()):
        if entry.name.startswith(".") or not entry.is_dir():
            continue
        if entry.name.startswith("@"):
            for scoped in sorted(entry.iterdir()):
                if scoped.name.startswith(".") or not scoped.is_dir():
                    continue
                yield f"{entry.name}/{scoped.name}", scoped
        else:
            yield entry.name, entry


def _read_package(name: str, package_dir: Path) -> InstalledPackage | None:
    manifest_path = package_dir / "package.json"
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        log.debug("installed.skip_entry", package=name, reason=str(exc))
        return None

    if not isinstance(data, dict) or not isinstance(data.get("version"), str):
        log.debug("installed.skip_entry", package=name, reason="no version")
        return None

    engines = data.get("engines")
    if isinstance(engines, dict):
        engines = {k: v for k, v in engines.items() if isinstance(v, str)}
    else:
        engines = {}

    return InstalledPackage(name=name, version=data["version"], engines=engines)


def scan_installed(path: Path) -> dict[str, InstalledPackage]:
    """List packages installed directly under ``<path>/node_modules``.

    Packages are keyed by directory name, which is what manifests refer to
    (npm aliases included).  A missing node_modules yields an empty snapshot.

    Raises :class:`InstalledListError` if node_modules exists but cannot be
    read.
    """
    modules = Path(path) / NODE_MODULES
    if not modules.exists():
        log.debug("installed.no_node_modules", path=str(path))
        return {}
    if not modules.is_dir():
        raise InstalledListError(f"{modules} is not a directory")

    try:
        entries = list(_package_dirs(modules))
    except OSError as exc:
        raise InstalledListError(f"Cannot inspect {modules}") from exc

    installed: dict[str, InstalledPackage] = {}
    for name, package_dir in entries:
        package = _read_package(name, package_dir)
        if package is not None:
            installed[name] = package

    log.debug("installed.scanned", path=str(path), count=len(installed))
    return installed


async def list_installed(path: Path | str) -> dict[str, InstalledPackage]:
    """Async wrapper around :func:`scan_installed` (runs in a worker thread)."""
    return await asyncio.to_thread(scan_installed, Path(path))
