"""JSON-friendly report output."""

from __future__ import annotations

from typing import Any

from .models import AnalysisResult, SizeMap

SCHEMA_VERSION = "1"


def build_report(result: AnalysisResult) -> dict[str, Any]:
    """Return the analysis as a dict ready for ``json.dumps``.

    Adds the schema version and the number of distinct paths next to the
    result's own fields; callers own serialization.
    """
    report: dict[str, Any] = {"schemaVersion": SCHEMA_VERSION}
    report.update(result.to_dict())
    report["totals"] = {
        "paths": len(result.paths),
        "sourceFiles": len(result.source_files),
    }
    return report


def build_size_report(size_map: SizeMap) -> dict[str, Any]:
    report: dict[str, Any] = {"schemaVersion": SCHEMA_VERSION}
    report.update(size_map.to_dict())
    return report
