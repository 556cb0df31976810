"""package.json reader."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from installed_check.exceptions import ManifestReadError

MANIFEST_FILE = "package.json"


class Manifest(BaseModel):
    """The subset of package.json that installed-check cares about.

    Absent fields stay ``None`` (not ``{}``) so workspace members can fall
    back to the root's value.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = None
    version: str | None = None
    dependencies: dict[str, str] | None = None
    dev_dependencies: dict[str, str] | None = Field(default=None, alias="devDependencies")
    optional_dependencies: dict[str, str] | None = Field(
        default=None, alias="optionalDependencies"
    )
    engines: dict[str, str] | None = None
    workspaces: list[str] | None = None

    @field_validator("engines", mode="before")
    @classmethod
    def _drop_legacy_engines(cls, v: object) -> object:
        # Very old packages declare engines as a list of strings
        return v if isinstance(v, dict) or v is None else None

    @field_validator("workspaces", mode="before")
    @classmethod
    def _normalize_workspaces(cls, v: object) -> object:
        # Yarn's {"packages": [...], "nohoist": [...]} form
        if isinstance(v, dict):
            return v.get("packages")
        return v


def load_manifest(path: Path) -> Manifest:
    """Read and validate ``<path>/package.json``.

    Raises :class:`ManifestReadError` if the file is missing, is not JSON,
    or has an unexpected shape.
    """
    manifest_path = Path(path) / MANIFEST_FILE
    try:
        content = manifest_path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise ManifestReadError(f"Cannot read {manifest_path}") from exc
    except UnicodeDecodeError as exc:
        raise ManifestReadError(f"Cannot decode {manifest_path}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestReadError(f"Invalid JSON in {manifest_path}") from exc

    if not isinstance(data, dict):
        raise ManifestReadError(f"Expected a JSON object in {manifest_path}")

    try:
        return Manifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestReadError(f"Unexpected package.json content in {manifest_path}") from exc


async def read_manifest(path: Path | str) -> Manifest:
    """Async wrapper around :func:`load_manifest` (runs in a worker thread)."""
    return await asyncio.to_thread(load_manifest, Path(path))
