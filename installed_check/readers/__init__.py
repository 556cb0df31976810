"""Disk and process readers feeding the evaluators."""

from installed_check.readers.installed import list_installed, scan_installed
from installed_check.readers.manifest import Manifest, load_manifest, read_manifest
from installed_check.readers.platform import detect_platform_versions

__all__ = [
    "Manifest",
    "detect_platform_versions",
    "list_installed",
    "load_manifest",
    "read_manifest",
    "scan_installed",
]
