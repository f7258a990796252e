"""Parse pnpm-lock.yaml to capture locked package versions."""

from __future__ import annotations

from pathlib import Path


def _split_key(key: str) -> tuple[str, str] | None:
    # Keys look like "/name/1.2.3_peer@1.0.0" (v5), "/name@1.2.3" (v6) or
    # "name@1.2.3(peer@1.0.0)" (v9). Scoped names keep their leading "@".
    ref = key[1:] if key.startswith("/") else key
    ref = ref.split("(", 1)[0]
    offset = 0
    if ref.startswith("@"):
        offset = ref.find("/") + 1
        if offset == 0:
            return None
    rest = ref[offset:]
    cut = min((i for i in (rest.find("@"), rest.find("/")) if i > 0), default=-1)
    if cut < 0:
        return None
    name = ref[: offset + cut]
    version = rest[cut + 1 :]
    if rest[cut] == "/":
        version = version.split("_", 1)[0]
    return name, version


def parse(path: Path) -> list[tuple[str, str]]:
    """Return list of (package, version) from pnpm lock file."""
    import yaml

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        return []
    pkgs = data.get("packages") or {}
    if not isinstance(pkgs, dict):
        return []

    pairs: list[tuple[str, str]] = []
    for key in pkgs.keys():
        if not isinstance(key, str):
            continue
        split = _split_key(key)
        if split is None:
            continue
        name, version = split
        if name and version:
            pairs.append((name, version))

    return pairs
