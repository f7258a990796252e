"""Human-readable rendering of analysis and size-map results."""

from __future__ import annotations

from collections.abc import Sequence

from .models import AnalysisResult, SizeMap

KIB = 1024
MIB = 1024 * 1024


def format_size(size: int | None) -> str:
    """Return ``512 B``, ``12 KB`` or ``1.50 MB``; empty for 0 or None."""
    if not size:
        return ""
    if size < KIB:
        return f"{size} B"
    if size < MIB:
        return f"{size / KIB:.0f} KB"
    return f"{size / MIB:.2f} MB"


def format_chain(chain: Sequence[str]) -> str:
    """Draw a chain as an indented staircase, one package per line."""
    lines: list[str] = []
    for i, name in enumerate(chain):
        if i == 0:
            lines.append(f"   {name}")
            continue
        prefix = "└─> " if i == len(chain) - 1 else "├─> "
        lines.append("   " + " " * ((i - 1) * 3) + prefix + name)
    return "\n".join(lines)


def render_analysis(result: AnalysisResult) -> str:
    size = format_size(result.size)
    lines = [f"{result.name} v{result.version}" + (f" ({size})" if size else "")]
    if result.description:
        lines.append(f"  {result.description}")

    count = len(result.paths)
    lines.append("")
    lines.append(f"  installed via {count} path{'' if count == 1 else 's'}")
    lines.append("")

    if not result.paths:
        lines.append("  No dependency paths found.")
    for index, path in enumerate(result.paths, start=1):
        lines.append(f"{index}. {path.category.value}")
        lines.append(format_chain(path.modules))

    if result.locked_versions:
        lines.append("")
        lines.append(f"Locked versions: {', '.join(result.locked_versions)}")

    if result.source_files:
        lines.append("")
        lines.append(f"Used in ({len(result.source_files)}):")
        lines.extend(f"  {file}" for file in result.source_files)

    if result.impact is not None:
        lines.append("")
        lines.append(f"Impact (risk: {result.impact.risk_level}):")
        for usage in result.impact.files:
            where = ", ".join(str(n) for n in usage.lines)
            lines.append(f"  {usage.file}:{where} [{usage.context or 'General usage'}]")
        lines.extend(f"  - {note}" for note in result.impact.impacts)

    if result.suggestions:
        lines.append("")
        lines.append("Suggested actions:")
        lines.extend(
            f"  {index}. {suggestion}"
            for index, suggestion in enumerate(result.suggestions, start=1)
        )

    return "\n".join(lines) + "\n"


def render_size_map(size_map: SizeMap) -> str:
    lines = [
        f"Size map for: {size_map.package_name}",
        "",
        f"{size_map.package_name} total impact: {format_size(size_map.total_size) or '0 B'}",
        "",
        "Breakdown:",
    ]
    for entry in size_map.breakdown:
        lines.append(f"- {entry.name}: {format_size(entry.size) or '0 B'}")

    percent = size_map.percent_of_install_tree
    if percent > 0:
        lines.append("")
        lines.append(f"This package contributes {percent:.1f}% of your vendor bundle.")

    return "\n".join(lines) + "\n"
