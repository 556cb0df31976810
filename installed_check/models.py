"""Data models shared by the evaluators and the orchestrator."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# name -> npm range expression
DependencyMap = Mapping[str, str]


@dataclass(frozen=True)
class InstalledPackage:
    """A package resolved on disk, as found in node_modules."""

    name: str
    version: str
    engines: Mapping[str, str] = field(default_factory=dict)


InstalledSnapshot = Mapping[str, InstalledPackage]


def overlay(base: InstalledSnapshot, top: InstalledSnapshot) -> InstalledSnapshot:
    """Return a new read-only snapshot of *base* with *top* entries taking precedence."""
    merged = dict(base)
    merged.update(top)
    return MappingProxyType(merged)


@dataclass
class EvaluationResult:
    """Output of a single evaluator pass over one context."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CheckContext:
    """Everything needed to check one workspace unit (the root or a member).

    ``dependencies`` holds production dependencies only; ``required_dependencies``
    is dependencies + devDependencies.
    """

    engines: DependencyMap
    dependencies: DependencyMap
    required_dependencies: DependencyMap
    optional_dependencies: DependencyMap
    installed: InstalledSnapshot
    subpath: str | None = None

    def label(self, line: str) -> str:
        if self.subpath:
            return f"[{self.subpath}] {line}"
        return line


@dataclass
class CheckResult:
    """Aggregated, labelled output of a full check run."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    notices: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, context: CheckContext, evaluation: EvaluationResult) -> None:
        """Append *evaluation* output, prefixed with the context's subpath."""
        self.errors.extend(context.label(line) for line in evaluation.errors)
        self.warnings.extend(context.label(line) for line in evaluation.warnings)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "notices": list(self.notices),
        }
