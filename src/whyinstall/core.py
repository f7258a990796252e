"""Core analysis entrypoints.

This module MUST NOT print or exit so it can be used by both the CLI and
other tooling; presentation lives in ``summary`` and ``report``.
"""

from __future__ import annotations

from pathlib import Path

from .config import Settings
from .discovery import require_manifest
from .impact import analyze_impact
from .models import AnalysisResult, SizeMap
from .package_manager import detect_package_manager, locked_versions
from .parsers import package_json
from .parsers.package_json import MANIFEST_NAME
from .resolver import dedupe_chains, resolve
from .sizing import measure_own_size, measure_transitive
from .suggestions import synthesize
from .usage import find_usages


def analyze_package(
    package_name: str,
    project_root: Path | str = ".",
    *,
    include_impact: bool = False,
    settings: Settings | None = None,
) -> AnalysisResult:
    """Explain why ``package_name`` is installed in the project.

    Params:
        package_name: package to explain, e.g. ``lodash`` or ``@babel/core``
        project_root: directory holding the project's package.json
        include_impact: also estimate the risk of removing the package
        settings: traversal and scanning tunables; defaults when None

    Raises:
        PackageNotFoundError: if the package is not installed anywhere
            above ``project_root``. Nothing else is raised for broken
            manifests or unreadable files; they are skipped.
    """
    settings = settings or Settings()
    root = Path(project_root).absolute()

    manifest_path = require_manifest(package_name, root)
    record = package_json.read(manifest_path)

    chains = dedupe_chains(resolve(package_name, root, settings.max_depth))
    usages = find_usages(package_name, root, settings)

    pm = detect_package_manager(root)
    locked = locked_versions(root, package_name, pm)

    return AnalysisResult(
        name=package_name,
        version=(record.version if record and record.version else "unknown"),
        description=record.description if record else None,
        size=measure_own_size(manifest_path.parent),
        paths=tuple(chains),
        source_files=tuple(usage.file for usage in usages),
        locked_versions=locked,
        package_manager=pm,
        impact=analyze_impact(usages) if include_impact else None,
        suggestions=tuple(synthesize(package_name, chains, root / MANIFEST_NAME, locked)),
    )


def analyze_size_map(
    package_name: str, project_root: Path | str = ".", settings: Settings | None = None
) -> SizeMap:
    """Break down the installed weight of a package and its dependencies.

    Raises:
        PackageNotFoundError: if the package has no install directory.
    """
    return measure_transitive(package_name, Path(project_root), settings)
