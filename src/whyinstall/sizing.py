"""Installed-size measurement for packages and their dependency subtrees.

Sizes are estimates. Entries that cannot be read contribute nothing rather
than failing the measurement. Symlinked directories are never descended
into, since pnpm-style layouts link packages into each other's
``node_modules`` and would otherwise be walked repeatedly, possibly forever.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .config import Settings
from .discovery import INSTALL_DIR, PackageNotFoundError, install_path, locate_package_dir
from .models import SizeBreakdownEntry, SizeMap
from .parsers import package_json
from .parsers.package_json import MANIFEST_NAME

logger = logging.getLogger(__name__)


def _entries(directory: Path) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(directory) as it:
            return list(it)
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return []


def _file_size(entry: os.DirEntry[str]) -> int:
    try:
        return entry.stat().st_size
    except OSError as exc:
        logger.debug("Skipping unreadable file %s: %s", entry.path, exc)
        return 0


def measure_own_size(directory: Path) -> int:
    """Sum the sizes of every regular file below ``directory``.

    Nothing is filtered out, but symlinked subdirectories are not followed.
    """
    total = 0
    for entry in _entries(Path(directory)):
        try:
            if entry.is_dir(follow_symlinks=False):
                total += measure_own_size(Path(entry.path))
            elif entry.is_file():
                total += _file_size(entry)
        except OSError:
            continue
    return total


def _is_excluded(name: str, settings: Settings) -> bool:
    lower = name.lower()
    return lower in settings.bundle_exclude_dirs or lower.endswith(".d.ts") or lower.startswith(".")


def measure_bundle_size(directory: Path, settings: Settings | None = None) -> int:
    """Sum the sizes of shipped script files below ``directory``.

    Only ``settings.bundle_extensions`` count. Documentation, tests, type
    declarations, dotfiles and nested ``node_modules`` are skipped; nested
    installs are measured as dependencies in their own right.
    """
    settings = settings or Settings()
    total = 0
    for entry in _entries(Path(directory)):
        if _is_excluded(entry.name, settings):
            continue
        try:
            if entry.is_dir(follow_symlinks=False):
                if entry.name != INSTALL_DIR:
                    total += measure_bundle_size(Path(entry.path), settings)
            elif entry.is_file() and Path(entry.name).suffix.lower() in settings.bundle_extensions:
                total += _file_size(entry)
        except OSError:
            continue
    return total


def measure_install_tree(project_root: Path, settings: Settings | None = None) -> int:
    """Sum every script file under the project's top-level node_modules."""
    settings = settings or Settings()
    total = 0
    pending = [Path(project_root) / INSTALL_DIR]
    while pending:
        for entry in _entries(pending.pop()):
            try:
                if entry.is_dir(follow_symlinks=False):
                    pending.append(Path(entry.path))
                elif entry.is_file() and Path(entry.name).suffix.lower() in settings.bundle_extensions:
                    total += _file_size(entry)
            except OSError:
                continue
    return total


def _dependency_dir(dep_name: str, parent_dir: Path, project_root: Path) -> Path | None:
    nested = install_path(parent_dir, dep_name)
    if nested.is_dir():
        return nested
    hoisted = install_path(project_root, dep_name)
    if hoisted.is_dir():
        return hoisted
    return None


def _collect_dependencies(
    package_dir: Path,
    project_root: Path,
    settings: Settings,
    visited: set[str],
    breakdown: list[SizeBreakdownEntry],
) -> None:
    record = package_json.read(package_dir / MANIFEST_NAME)
    if record is None:
        return

    for dep_name in record.dependencies:
        if dep_name in visited:
            continue
        visited.add(dep_name)

        dep_dir = _dependency_dir(dep_name, package_dir, project_root)
        if dep_dir is None:
            logger.debug("%s (required by %s) is not installed", dep_name, package_dir)
            continue

        size = measure_bundle_size(dep_dir, settings)
        if size > 0:
            breakdown.append(SizeBreakdownEntry(name=dep_name, size=size))
        _collect_dependencies(dep_dir, project_root, settings, visited, breakdown)


def measure_transitive(
    package_name: str, project_root: Path, settings: Settings | None = None
) -> SizeMap:
    """Measure a package together with its production dependency subtree.

    Each package name is counted once for the whole walk, so a dependency
    shared by several packages contributes its size a single time.

    Raises:
        PackageNotFoundError: If the package has no install directory.
    """
    settings = settings or Settings()
    project_root = Path(project_root).absolute()
    package_dir = locate_package_dir(package_name, project_root)
    if package_dir is None:
        raise PackageNotFoundError(package_name)

    own_size = measure_bundle_size(package_dir, settings)
    breakdown: list[SizeBreakdownEntry] = []
    _collect_dependencies(package_dir, project_root, settings, {package_name}, breakdown)

    return SizeMap.from_sizes(
        package_name=package_name,
        own_size=own_size,
        dependencies=breakdown,
        install_tree_size=measure_install_tree(project_root, settings),
    )
