"""Detect the project's package manager and read versions from its lockfile."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from collections.abc import Callable

import yaml

from .parsers.package_lock import parse as parse_package_lock
from .parsers.pnpm_lock import parse as parse_pnpm_lock
from .parsers.versions import sort_versions
from .parsers.yarn_lock import parse as parse_yarn_lock

LOCKFILES: dict[str, str] = {
    "npm": "package-lock.json",
    "yarn": "yarn.lock",
    "pnpm": "pnpm-lock.yaml",
}

_PARSERS: dict[str, Callable[[Path], list[tuple[str, str]]]] = {
    "npm": parse_package_lock,
    "yarn": parse_yarn_lock,
    "pnpm": parse_pnpm_lock,
}

logger = logging.getLogger(__name__)


def detect_package_manager(root: Path) -> str:
    """Return ``pnpm``, ``yarn`` or ``npm`` based on which lockfile is present.

    npm is also the answer when there is no lockfile at all.
    """
    root = Path(root)
    if (root / LOCKFILES["pnpm"]).exists():
        return "pnpm"
    if (root / LOCKFILES["yarn"]).exists():
        return "yarn"
    return "npm"


def lockfile_path(root: Path, package_manager: str) -> Path:
    return Path(root) / LOCKFILES[package_manager]


def locked_versions(
    root: Path, package_name: str, package_manager: str | None = None
) -> tuple[str, ...]:
    """Return every version of ``package_name`` pinned in the lockfile.

    A missing or unparseable lockfile yields an empty tuple.
    """
    pm = package_manager or detect_package_manager(root)
    path = lockfile_path(root, pm)
    if not path.is_file():
        return ()

    try:
        pairs = _PARSERS[pm](path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        logger.debug("Ignoring unreadable lockfile %s: %s", path, exc)
        return ()

    return sort_versions(version for name, version in pairs if name == package_name)
