"""Data models for dependency analysis results."""

from __future__ import annotations

from .analysis import AnalysisResult
from .dependency_chain import CHAIN_SEPARATOR, DependencyChain
from .manifest import (
    CATEGORY_SECTIONS,
    DependencyCategory,
    DependencyEdge,
    ManifestRecord,
    ManifestResult,
    ManifestStatus,
)
from .size_map import SizeBreakdownEntry, SizeMap
from .usage import FileUsage, ImpactAnalysis

__all__ = [
    "AnalysisResult",
    "CATEGORY_SECTIONS",
    "CHAIN_SEPARATOR",
    "DependencyCategory",
    "DependencyChain",
    "DependencyEdge",
    "FileUsage",
    "ImpactAnalysis",
    "ManifestRecord",
    "ManifestResult",
    "ManifestStatus",
    "SizeBreakdownEntry",
    "SizeMap",
]
