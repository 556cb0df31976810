"""Detect the versions of the platform engines (node, npm) on PATH."""

from __future__ import annotations

import asyncio

import structlog

log = structlog.get_logger("installed_check.readers")

PLATFORM_COMMANDS: dict[str, list[str]] = {
    "node": ["node", "--version"],
    "npm": ["npm", "--version"],
}


def normalize_version(raw: str) -> str:
    """``v18.17.1\\n`` -> ``18.17.1``"""
    return raw.strip().lstrip("v")


async def _probe(engine: str, cmd: list[str]) -> str | None:
    """Run a version command; None if the binary is missing or fails."""
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        log.debug("platform.unavailable", engine=engine, reason=str(exc))
        return None

    stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        log.debug(
            "platform.probe_failed",
            engine=engine,
            exit_code=proc.returncode,
            stderr=stderr.decode(errors="replace").strip(),
        )
        return None
    return normalize_version(stdout.decode(errors="replace")) or None


async def detect_platform_versions(
    commands: dict[str, list[str]] | None = None,
) -> dict[str, str]:
    """Probe every engine concurrently and return the versions that were found."""
    commands = commands if commands is not None else PLATFORM_COMMANDS
    engines = list(commands)
    versions = await asyncio.gather(*(_probe(e, commands[e]) for e in engines))
    detected = {e: v for e, v in zip(engines, versions) if v}
    log.debug("platform.detected", versions=detected)
    return detected
