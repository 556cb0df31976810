"""CLI entry point: installed-check.

    installed-check                      # version + engine check of ./
    installed-check -v path/to/project   # version check only
    installed-check -e -i legacy-lib -d  # engine check, skip legacy-lib and devDependencies
"""

from __future__ import annotations

import asyncio
import json
import sys

import click

from installed_check.config import CheckOptions
from installed_check.core.logging import setup_logging
from installed_check.exceptions import InstalledCheckError
from installed_check.models import CheckResult
from installed_check.orchestrator import installed_check


def _print_result(result: CheckResult, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    for line in result.errors:
        click.echo(f"Error: {line}")
    for line in result.warnings:
        click.echo(f"Warning: {line}")
    for line in result.notices:
        click.echo(f"Notice: {line}")

    if not (result.errors or result.warnings):
        click.echo("All installed modules satisfy their declared requirements.")


@click.command("installed-check")
@click.argument("path", default=".", type=click.Path(file_okay=False))
@click.option("-e", "--engine-check", is_flag=True, help="Check engines of the project and its dependencies")
@click.option("-v", "--version-check", is_flag=True, help="Check installed versions against declared ranges")
@click.option(
    "-i",
    "--engine-ignore",
    "engine_ignores",
    multiple=True,
    help="Dependency to skip in the engine check (repeatable)",
)
@click.option("-d", "--engine-no-dev", is_flag=True, help="Skip devDependencies in the engine check")
@click.option("--no-workspaces", is_flag=True, help="Do not check workspace members")
@click.option("--node-version", default=None, help="Check engines against this node version instead of the one on PATH")
@click.option("-s", "--strict", is_flag=True, help="Treat warnings as errors")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--verbose", is_flag=True, help="Verbose logging")
def main(
    path: str,
    engine_check: bool,
    version_check: bool,
    engine_ignores: tuple[str, ...],
    engine_no_dev: bool,
    no_workspaces: bool,
    node_version: str | None,
    strict: bool,
    as_json: bool,
    verbose: bool,
) -> None:
    """Verify that installed modules comply with the requirements in package.json."""
    setup_logging("DEBUG" if verbose else None)

    if not engine_check and not version_check:
        engine_check = version_check = True

    options = CheckOptions(
        path=path,
        engine_check=engine_check,
        version_check=version_check,
        engine_ignores=engine_ignores,
        engine_no_dev=engine_no_dev,
        traverse_workspaces=not no_workspaces,
        platform_versions={"node": node_version} if node_version else None,
    )

    try:
        result = asyncio.run(installed_check(options))
    except InstalledCheckError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    _print_result(result, as_json)

    if result.errors or (strict and result.warnings):
        sys.exit(1)


if __name__ == "__main__":
    main()
