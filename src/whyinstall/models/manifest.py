"""Manifest record model and dependency categories."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from collections.abc import Mapping


class DependencyCategory(str, Enum):
    """Section of a manifest a dependency was declared in."""

    PROD = "prod"
    DEV = "dev"
    PEER = "peer"
    OPTIONAL = "optional"


# Merge order for flattening; a later section overwrites an earlier one.
CATEGORY_SECTIONS: tuple[tuple[str, DependencyCategory], ...] = (
    ("dependencies", DependencyCategory.PROD),
    ("devDependencies", DependencyCategory.DEV),
    ("peerDependencies", DependencyCategory.PEER),
    ("optionalDependencies", DependencyCategory.OPTIONAL),
)


@dataclass(frozen=True, slots=True)
class DependencyEdge:
    """A single declared dependency inside a manifest."""

    name: str
    category: DependencyCategory


@dataclass(frozen=True)
class ManifestRecord:
    """Parsed ``package.json`` content relevant to dependency analysis."""

    name: str | None = None
    version: str | None = None
    description: str | None = None
    dependencies: Mapping[str, str] = field(default_factory=dict)
    dev_dependencies: Mapping[str, str] = field(default_factory=dict)
    peer_dependencies: Mapping[str, str] = field(default_factory=dict)
    optional_dependencies: Mapping[str, str] = field(default_factory=dict)

    def section(self, section: str) -> Mapping[str, str]:
        """Return the dependency map stored under a ``package.json`` key."""
        return {
            "dependencies": self.dependencies,
            "devDependencies": self.dev_dependencies,
            "peerDependencies": self.peer_dependencies,
            "optionalDependencies": self.optional_dependencies,
        }[section]

    def edges(self) -> list[DependencyEdge]:
        """Flatten the four dependency maps into one edge per name.

        Names keep the position of their first declaration; the category is
        the one from the last section that declares them.
        """
        merged: dict[str, DependencyCategory] = {}
        for section, category in CATEGORY_SECTIONS:
            for name in self.section(section):
                merged[name] = category
        return [DependencyEdge(name=name, category=category) for name, category in merged.items()]

    def sections_for(self, name: str) -> tuple[str, ...]:
        """Return every section that declares ``name``."""
        return tuple(section for section, _ in CATEGORY_SECTIONS if name in self.section(section))

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {}
        if self.name is not None:
            data["name"] = self.name
        if self.version is not None:
            data["version"] = self.version
        if self.description is not None:
            data["description"] = self.description
        for section, _ in CATEGORY_SECTIONS:
            deps = self.section(section)
            if deps:
                data[section] = dict(deps)
        return data


class ManifestStatus(str, Enum):
    OK = "ok"
    MISSING = "missing"
    MALFORMED = "malformed"


@dataclass(frozen=True, slots=True)
class ManifestResult:
    """Outcome of loading a manifest file.

    ``missing`` and ``malformed`` stay distinguishable here even though most
    callers treat both as "no manifest at this location".
    """

    path: Path
    status: ManifestStatus
    record: ManifestRecord | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.status is ManifestStatus.OK and self.record is None:
            raise ValueError("An ok manifest result must carry a record")
        if self.status is not ManifestStatus.OK and self.record is not None:
            raise ValueError("Only ok manifest results may carry a record")

    @property
    def ok(self) -> bool:
        return self.status is ManifestStatus.OK
