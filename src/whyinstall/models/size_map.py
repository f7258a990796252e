"""Size breakdown models."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class SizeBreakdownEntry:
    """Cumulative on-disk bytes attributed to one package."""

    name: str
    size: int

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Breakdown entry name must be non-empty")
        if self.size < 0:
            raise ValueError("Breakdown entry size must be non-negative")

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "size": self.size}


@dataclass(frozen=True, slots=True)
class SizeMap:
    """Transitive size footprint of a package.

    ``breakdown[0]`` is always the package itself; the remaining entries are
    its dependencies ordered by descending size.
    """

    package_name: str
    own_size: int
    breakdown: tuple[SizeBreakdownEntry, ...]
    install_tree_size: int

    def __post_init__(self) -> None:
        if not self.breakdown or self.breakdown[0].name != self.package_name:
            raise ValueError("Breakdown must start with the package's own entry")

    @property
    def total_size(self) -> int:
        return sum(entry.size for entry in self.breakdown)

    @property
    def percent_of_install_tree(self) -> float:
        if self.install_tree_size <= 0:
            return 0.0
        return self.total_size / self.install_tree_size * 100

    def to_dict(self) -> dict[str, object]:
        return {
            "packageName": self.package_name,
            "ownSize": self.own_size,
            "totalSize": self.total_size,
            "breakdown": [entry.to_dict() for entry in self.breakdown],
            "nodeModulesSize": self.install_tree_size,
            "percentOfNodeModules": self.percent_of_install_tree,
        }

    @classmethod
    def from_sizes(
        cls,
        *,
        package_name: str,
        own_size: int,
        dependencies: Iterable[SizeBreakdownEntry],
        install_tree_size: int,
    ) -> SizeMap:
        ordered = sorted(dependencies, key=lambda entry: entry.size, reverse=True)
        own = SizeBreakdownEntry(name=package_name, size=own_size)
        return cls(
            package_name=package_name,
            own_size=own_size,
            breakdown=(own, *ordered),
            install_tree_size=install_tree_size,
        )
