"""Dependency chain model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .manifest import DependencyCategory

CHAIN_SEPARATOR = "->"


@dataclass(frozen=True, slots=True)
class DependencyChain:
    """One path through the manifest graph ending in the target package."""

    modules: tuple[str, ...]
    category: DependencyCategory
    manifest_path: Path

    def __post_init__(self) -> None:
        if not self.modules:
            raise ValueError("A dependency chain must contain at least the target")
        if any(not module for module in self.modules):
            raise ValueError("Chain entries must be non-empty package names")

    @property
    def target(self) -> str:
        return self.modules[-1]

    @property
    def key(self) -> tuple[str, str]:
        """Identity used for de-duplication."""
        return (self.category.value, CHAIN_SEPARATOR.join(self.modules))

    def is_direct(self, root_manifest: Path) -> bool:
        """True when the target is declared directly by the project manifest."""
        return len(self.modules) == 1 and self.manifest_path == root_manifest

    def to_dict(self) -> dict[str, object]:
        return {
            "chain": list(self.modules),
            "type": self.category.value,
            "packageJsonPath": str(self.manifest_path),
        }
