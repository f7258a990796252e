"""Reconstruct every dependency chain that brings a package into the project.

The traversal is a breadth-first walk over ``package.json`` files, starting
at the project manifest and following each declared dependency to the
manifest the installer would load for it.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from collections.abc import Iterable

from .config import DEFAULT_MAX_DEPTH
from .discovery import locate_manifest
from .models import DependencyChain, DependencyEdge, ManifestRecord
from .parsers import package_json
from .parsers.package_json import MANIFEST_NAME

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class _QueueItem:
    # An empty name marks the project root, which never appears in chains.
    name: str
    chain: tuple[str, ...]
    manifest_path: Path


@dataclass(slots=True)
class _Traversal:
    """State owned by a single ``resolve`` call."""

    target: str
    max_depth: int
    queue: deque[_QueueItem] = field(default_factory=deque)
    visited: set[tuple[str, Path]] = field(default_factory=set)
    chains: list[DependencyChain] = field(default_factory=list)

    def run(self, root_manifest: Path) -> list[DependencyChain]:
        self.queue.append(_QueueItem(name="", chain=(), manifest_path=root_manifest))
        while self.queue:
            self._expand(self.queue.popleft())
        return self.chains

    def _expand(self, item: _QueueItem) -> None:
        if len(item.chain) > self.max_depth:
            logger.debug("Depth limit reached at %s", " -> ".join(item.chain))
            return

        record = package_json.read(item.manifest_path)
        if record is None:
            return

        visit_key = (item.name or record.name or "", item.manifest_path)
        if visit_key in self.visited:
            return
        self.visited.add(visit_key)

        prefix = item.chain + (item.name,) if item.name else item.chain
        for edge in record.edges():
            if edge.name == self.target:
                self._record(record, edge, prefix, item.manifest_path)
                continue
            dep_manifest = locate_manifest(edge.name, item.manifest_path.parent)
            if dep_manifest is not None:
                self.queue.append(
                    _QueueItem(name=edge.name, chain=prefix, manifest_path=dep_manifest)
                )

    def _record(
        self,
        record: ManifestRecord,
        edge: DependencyEdge,
        prefix: tuple[str, ...],
        manifest_path: Path,
    ) -> None:
        sections = record.sections_for(edge.name)
        if len(sections) > 1:
            logger.debug(
                "%s is declared in %s of %s; reporting it as %s",
                edge.name,
                ", ".join(sections),
                manifest_path,
                edge.category.value,
            )
        self.chains.append(
            DependencyChain(
                modules=prefix + (edge.name,),
                category=edge.category,
                manifest_path=manifest_path,
            )
        )


def resolve(
    target: str, project_root: Path, max_depth: int = DEFAULT_MAX_DEPTH
) -> list[DependencyChain]:
    """Return every chain from the project manifest to ``target``.

    A project without ``package.json`` yields an empty list. Chains are in
    discovery order and may contain duplicates; see ``dedupe_chains``.
    """
    root_manifest = Path(project_root).absolute() / MANIFEST_NAME
    if not root_manifest.is_file():
        return []
    return _Traversal(target=target, max_depth=max_depth).run(root_manifest)


def dedupe_chains(chains: Iterable[DependencyChain]) -> list[DependencyChain]:
    """Drop chains whose (category, chain) key was already seen."""
    seen: set[tuple[str, str]] = set()
    unique: list[DependencyChain] = []
    for chain in chains:
        if chain.key in seen:
            continue
        seen.add(chain.key)
        unique.append(chain)
    return unique
