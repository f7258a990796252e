"""Estimate how risky it is to remove a package from its usage contexts."""

from __future__ import annotations

from collections.abc import Sequence

from .models import FileUsage, ImpactAnalysis

MAX_LISTED_METHODS = 8

_HIGH_RISK_CONTEXTS = {"Database", "HTTP/API"}


def compute_risk_level(usages: Sequence[FileUsage]) -> str:
    """High when used in data or API code, Low when confined to tests or a
    single file of console output, Medium otherwise."""
    contexts = [usage.context or "General usage" for usage in usages]
    if any(context in _HIGH_RISK_CONTEXTS for context in contexts):
        return "High"
    if all(context == "Testing" for context in contexts):
        return "Low"
    if all(context == "Console/output" for context in contexts) and len(usages) == 1:
        return "Low"
    return "Medium"


def describe_impacts(usages: Sequence[FileUsage]) -> list[str]:
    if not usages:
        return [
            "No direct usage found in source files",
            "May be a transitive dependency or unused",
        ]

    impacts: list[str] = []
    methods = list(dict.fromkeys(m for usage in usages for m in usage.methods))
    if methods:
        listed = ", ".join(methods[:MAX_LISTED_METHODS])
        extra = len(methods) - MAX_LISTED_METHODS
        suffix = f" (+{extra} more)" if extra > 0 else ""
        impacts.append(f"Methods used: {listed}{suffix}")
    else:
        impacts.append("Package imported but no method calls detected")
        impacts.append("May be used as default export or namespace")

    ordered_contexts = list(dict.fromkeys(usage.context or "General usage" for usage in usages))
    plural = "" if len(usages) == 1 else "s"
    impacts.append(f"Used in {len(usages)} file{plural}: {', '.join(ordered_contexts)}")

    contexts = set(ordered_contexts)
    if "Database" in contexts:
        impacts.append("Used in database operations - removal may break data access")
    if "HTTP/API" in contexts:
        impacts.append("Used in API/HTTP layer - removal may break endpoints")
    if contexts == {"Testing"}:
        impacts.append("Only used in tests - safe to remove from production dependencies")
    if "Console/output" in contexts and len(usages) == 1:
        impacts.append("Only used for console output - low impact, can be replaced")

    impacts.append("Review the files above to assess actual impact in your codebase")
    return impacts


def analyze_impact(usages: Sequence[FileUsage]) -> ImpactAnalysis:
    return ImpactAnalysis(
        files=tuple(usages),
        risk_level=compute_risk_level(usages),
        impacts=tuple(describe_impacts(usages)),
    )
