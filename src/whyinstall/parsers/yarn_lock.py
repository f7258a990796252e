"""Parse yarn.lock to capture locked package versions."""

from __future__ import annotations

from pathlib import Path


def _header_name(header: str) -> str:
    first = header.split(",", 1)[0].strip().strip('"')
    if first.startswith("@"):
        try:
            idx = first.index("@", 1)
        except ValueError:
            return first
        return first[:idx]
    return first.split("@", 1)[0]


def parse(path: Path) -> list[tuple[str, str]]:
    """Return list of (package, version) from yarn lock file."""
    lines = path.read_text(encoding="utf-8").splitlines()
    pairs: list[tuple[str, str]] = []

    current_name: str | None = None
    for raw in lines:
        line = raw.rstrip()
        if not line or line.startswith("#"):
            current_name = None
            continue
        if not line.startswith(" ") and line.endswith(":"):
            current_name = _header_name(line[:-1])
            continue

        if current_name and line.strip().startswith("version "):
            part = line.strip().split(" ", 1)[1].strip()
            if part.startswith('"') and part.endswith('"'):
                version = part.strip('"')
            else:
                version = part
            pairs.append((current_name, version))

    return pairs
