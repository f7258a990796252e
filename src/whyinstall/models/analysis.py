"""Top-level analysis result."""

from __future__ import annotations

from dataclasses import dataclass

from .dependency_chain import DependencyChain
from .usage import ImpactAnalysis


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Everything reported for ``whyinstall <package>``."""

    name: str
    version: str
    paths: tuple[DependencyChain, ...]
    suggestions: tuple[str, ...]
    package_manager: str
    description: str | None = None
    size: int | None = None
    source_files: tuple[str, ...] = ()
    locked_versions: tuple[str, ...] = ()
    impact: ImpactAnalysis | None = None

    def to_dict(self) -> dict[str, object]:
        package: dict[str, object] = {
            "name": self.name,
            "version": self.version,
            "paths": [path.to_dict() for path in self.paths],
        }
        if self.description is not None:
            package["description"] = self.description
        if self.size is not None:
            package["size"] = self.size
        if self.source_files:
            package["sourceFiles"] = list(self.source_files)
        if self.locked_versions:
            package["lockedVersions"] = list(self.locked_versions)
        if self.impact is not None:
            package["impact"] = self.impact.to_dict()
        return {
            "package": package,
            "packageManager": self.package_manager,
            "suggestions": list(self.suggestions),
        }
