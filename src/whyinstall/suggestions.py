"""Derive recommendations from the shape of resolved dependency chains."""

from __future__ import annotations

from pathlib import Path
from collections.abc import Sequence

from .models import DependencyCategory, DependencyChain


def synthesize(
    package_name: str,
    chains: Sequence[DependencyChain],
    root_manifest: Path,
    locked_versions: Sequence[str] = (),
) -> list[str]:
    """Return human-readable suggestions for already de-duplicated chains."""
    suggestions: list[str] = []

    if not chains:
        suggestions.append(f'Package "{package_name}" is not in dependency tree')
    else:
        if any(chain.category is DependencyCategory.DEV for chain in chains):
            suggestions.append(
                "Consider removing from devDependencies if not needed for development"
            )
        if any(chain.category is DependencyCategory.PEER for chain in chains):
            suggestions.append(
                "This is a peer dependency - ensure all consumers satisfy the peer requirement"
            )
        direct = [chain for chain in chains if chain.is_direct(root_manifest)]
        if direct and len(chains) > len(direct):
            suggestions.append(
                "Can be removed from direct dependencies - it's installed transitively"
            )

    if len(locked_versions) > 1:
        suggestions.append(
            f"Multiple versions locked ({', '.join(locked_versions)}) - consider deduplicating"
        )

    return suggestions
