"""Parse package.json into a ManifestRecord.

Loading never raises for a missing, unreadable or malformed file: a broken
or partially installed package must not abort a whole traversal. Use
``load`` when the reason matters and ``read`` when it does not.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ..models import CATEGORY_SECTIONS, ManifestRecord, ManifestResult, ManifestStatus

MANIFEST_NAME = "package.json"

logger = logging.getLogger(__name__)


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _dependency_map(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(name): str(version) for name, version in value.items()}


def parse_manifest(data: Any) -> ManifestRecord:
    """Build a ManifestRecord from decoded JSON.

    Raises ValueError when the document is not a JSON object. Fields of the
    wrong type are dropped rather than rejected.
    """
    if not isinstance(data, dict):
        raise ValueError("package.json must contain a JSON object")

    sections = {section: _dependency_map(data.get(section)) for section, _ in CATEGORY_SECTIONS}
    return ManifestRecord(
        name=_optional_str(data.get("name")),
        version=_optional_str(data.get("version")),
        description=_optional_str(data.get("description")),
        dependencies=sections["dependencies"],
        dev_dependencies=sections["devDependencies"],
        peer_dependencies=sections["peerDependencies"],
        optional_dependencies=sections["optionalDependencies"],
    )


def load(path: Path) -> ManifestResult:
    """Load a manifest, reporting why it is unusable when it is."""
    import json

    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ManifestResult(path=path, status=ManifestStatus.MISSING)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return ManifestResult(path=path, status=ManifestStatus.MALFORMED, error=str(exc))

    try:
        record = parse_manifest(json.loads(content))
    except (json.JSONDecodeError, ValueError, RecursionError) as exc:
        logger.debug("Ignoring malformed manifest %s: %s", path, exc)
        return ManifestResult(path=path, status=ManifestStatus.MALFORMED, error=str(exc))

    return ManifestResult(path=path, status=ManifestStatus.OK, record=record)


def read(path: Path) -> ManifestRecord | None:
    """Return the parsed manifest, or None when there is no usable one."""
    return load(path).record
