"""Source usage and impact models."""

from __future__ import annotations

from dataclasses import dataclass

_VALID_RISK_LEVELS = {"Low", "Medium", "High"}


@dataclass(frozen=True, slots=True)
class FileUsage:
    """References to a package found in one project source file."""

    file: str
    lines: tuple[int, ...]
    methods: tuple[str, ...] = ()
    context: str | None = None

    def __post_init__(self) -> None:
        if not self.file:
            raise ValueError("File path must be non-empty")
        if any(line < 1 for line in self.lines):
            raise ValueError("Line numbers are 1-based")

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "file": self.file,
            "lines": list(self.lines),
            "methods": list(self.methods),
        }
        if self.context is not None:
            data["context"] = self.context
        return data


@dataclass(frozen=True, slots=True)
class ImpactAnalysis:
    """Estimated blast radius of removing a package."""

    files: tuple[FileUsage, ...]
    risk_level: str
    impacts: tuple[str, ...]

    def __post_init__(self) -> None:
        if self.risk_level not in _VALID_RISK_LEVELS:
            raise ValueError(f"Invalid risk level: {self.risk_level}")

    def to_dict(self) -> dict[str, object]:
        return {
            "files": [usage.to_dict() for usage in self.files],
            "riskLevel": self.risk_level,
            "impacts": list(self.impacts),
        }
