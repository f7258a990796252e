"""Parse npm package-lock.json to capture locked package versions."""

from __future__ import annotations

from pathlib import Path
from typing import Any


def _walk_v1(deps: dict[str, Any], pairs: list[tuple[str, str]]) -> None:
    for name, meta in deps.items():
        if not isinstance(meta, dict):
            continue
        if "version" in meta:
            pairs.append((name, str(meta["version"])))
        nested = meta.get("dependencies")
        if isinstance(nested, dict):
            _walk_v1(nested, pairs)


def parse(path: Path) -> list[tuple[str, str]]:
    """Return list of (package, version) from lockfile.

    Supports npm v1 ("dependencies" tree) and v2+ ("packages" map). Nested
    install locations such as ``node_modules/a/node_modules/b`` report ``b``.
    """
    import json

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        return []
    pairs: list[tuple[str, str]] = []

    # npm v2+ format
    packages = data.get("packages")
    if isinstance(packages, dict):
        for key, meta in packages.items():
            if not isinstance(meta, dict) or "node_modules/" not in key:
                continue
            name = key.rsplit("node_modules/", 1)[1]
            version = meta.get("version")
            if version:
                pairs.append((name, str(version)))
        if pairs:
            return pairs

    # npm v1 format fallback
    deps = data.get("dependencies")
    if isinstance(deps, dict):
        _walk_v1(deps, pairs)

    return pairs
