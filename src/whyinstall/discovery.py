"""Locate installed packages inside node_modules directories.

Lookups walk from a starting directory towards the filesystem root, checking
``<dir>/node_modules/<name>`` at every level. This mirrors where a hoisting
installer places a package that several dependents share.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from collections.abc import Iterator

from .parsers.package_json import MANIFEST_NAME

INSTALL_DIR = "node_modules"


class PackageNotFoundError(LookupError):
    """Raised when the analysed package is not installed anywhere."""

    def __init__(self, package_name: str) -> None:
        super().__init__(f'Package "{package_name}" not found in node_modules')
        self.package_name = package_name


def install_path(base: Path, package_name: str) -> Path:
    """Return ``base/node_modules/<name>``, splitting ``@scope/name``."""
    segments = PurePosixPath(package_name).parts
    return base.joinpath(INSTALL_DIR, *segments)


def _ancestors(start_dir: Path) -> Iterator[Path]:
    # The filesystem root itself is never searched.
    current = Path(start_dir).absolute()
    while current.parent != current:
        yield current
        current = current.parent


def locate_manifest(package_name: str, start_dir: Path) -> Path | None:
    """Find the nearest ``package.json`` for ``package_name`` above start_dir."""
    for directory in _ancestors(start_dir):
        candidate = install_path(directory, package_name) / MANIFEST_NAME
        if candidate.is_file():
            return candidate
    return None


def locate_package_dir(package_name: str, start_dir: Path) -> Path | None:
    """Find the nearest install directory for ``package_name`` above start_dir.

    Unlike ``locate_manifest`` this accepts a directory without a manifest,
    which is enough to measure what is on disk.
    """
    for directory in _ancestors(start_dir):
        candidate = install_path(directory, package_name)
        if candidate.is_dir():
            return candidate
    return None


def require_manifest(package_name: str, project_root: Path) -> Path:
    """Return the package's manifest path or raise PackageNotFoundError."""
    found = locate_manifest(package_name, project_root)
    if found is None:
        raise PackageNotFoundError(package_name)
    return found
