"""Shared pytest fixtures — on-disk package.json / node_modules trees."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def write_manifest(directory: Path, **fields) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(fields, indent=2))
    return path


def install(directory: Path, name: str, version: str, engines: dict | None = None) -> Path:
    """Create ``<directory>/node_modules/<name>/package.json``."""
    package_dir = directory / "node_modules" / name
    fields: dict = {"name": name, "version": version}
    if engines is not None:
        fields["engines"] = engines
    write_manifest(package_dir, **fields)
    return package_dir


@pytest.fixture
def project(tmp_path):
    """A project root with an empty node_modules."""
    (tmp_path / "node_modules").mkdir()
    return tmp_path


@pytest.fixture
def manifest():
    return write_manifest


@pytest.fixture
def installer():
    return install
