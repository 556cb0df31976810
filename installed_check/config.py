"""Check options."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from installed_check.exceptions import ConfigurationError


class CheckOptions(BaseModel):
    """Options for a check run.

    Accepts the camelCase names used by package.json tooling
    (``engineCheck``, ``versionCheck`` ...) as well as snake_case.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    path: Path = Path(".")
    engine_check: bool = Field(default=False, alias="engineCheck")
    version_check: bool = Field(default=False, alias="versionCheck")
    engine_ignores: tuple[str, ...] = Field(default=(), alias="engineIgnores")
    engine_no_dev: bool = Field(default=False, alias="engineNoDev")
    traverse_workspaces: bool = Field(default=True, alias="traverseWorkspaces")
    # engine name -> version; detected from PATH when None
    platform_versions: dict[str, str] | None = Field(default=None, alias="platformVersions")


def coerce_options(options: CheckOptions | Mapping[str, Any] | None) -> CheckOptions:
    """Validate *options* and make sure at least one check is selected.

    Raises :class:`ConfigurationError` before any I/O happens.
    """
    if options is None:
        raise ConfigurationError("Expected options to be set")

    if not isinstance(options, CheckOptions):
        try:
            options = CheckOptions.model_validate(dict(options))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("Invalid check options") from exc

    if not options.engine_check and not options.version_check:
        raise ConfigurationError(
            "Expected to run at least one check. Add engine_check and/or version_check"
        )
    return options
