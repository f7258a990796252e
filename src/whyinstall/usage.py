"""Find where project source files reference a package.

Matching is pattern based: ``require()``, ES ``import``/``export ... from``,
side-effect and dynamic imports. Nothing is parsed into a syntax tree, so a
match inside a comment or string literal still counts.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from .config import (
    DEFAULT_IGNORE_DIRS,
    DEFAULT_SCAN_MAX_DEPTH,
    DEFAULT_SOURCE_EXTENSIONS,
    Settings,
)
from .models import FileUsage

CONTEXT_RADIUS = 2

_IDENT = r"[A-Za-z_$][\w$]*"

logger = logging.getLogger(__name__)


def find_source_files(
    root: Path,
    max_depth: int = DEFAULT_SCAN_MAX_DEPTH,
    extensions: tuple[str, ...] = DEFAULT_SOURCE_EXTENSIONS,
    ignore_dirs: tuple[str, ...] = DEFAULT_IGNORE_DIRS,
    _depth: int = 0,
) -> list[Path]:
    """Return source files below ``root``, at most ``max_depth`` levels down.

    Ignored directory names and every dot-directory are skipped.
    """
    if _depth > max_depth:
        return []

    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", root, exc)
        return []

    files: list[Path] = []
    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                if entry.name in ignore_dirs or entry.name.startswith("."):
                    continue
                files.extend(
                    find_source_files(
                        Path(entry.path), max_depth, extensions, ignore_dirs, _depth + 1
                    )
                )
            elif entry.is_file() and Path(entry.name).suffix in extensions:
                files.append(Path(entry.path))
        except OSError:
            continue
    return files


class _Patterns:
    """Compiled expressions for one package name."""

    def __init__(self, package_name: str) -> None:
        spec = rf"""['"]{re.escape(package_name)}(?:/[^'"]*)?['"]"""
        self.references = [
            re.compile(rf"\brequire\(\s*{spec}\s*\)"),
            re.compile(rf"\bfrom\s+{spec}"),
            re.compile(rf"\bimport\s+{spec}"),
            re.compile(rf"\bimport\(\s*{spec}\s*\)"),
        ]
        self.import_clause = re.compile(rf"""\bimport\s+(?!['"])(?P<clause>[^'";]+?)\s+from\s+{spec}""")
        self.require_binding = re.compile(
            rf"\b(?:const|let|var)\s+(?P<target>\{{[^}}]*\}}|{_IDENT})\s*=\s*require\(\s*{spec}\s*\)"
        )

    def matches(self, text: str) -> bool:
        return any(p.search(text) for p in self.references)

    def first_line(self, content: str) -> int:
        starts = [m.start() for p in self.references for m in [p.search(content)] if m]
        return content[: min(starts, default=0)].count("\n") + 1


def _named_bindings(block: str, alias_sep: str) -> list[str]:
    names: list[str] = []
    for part in block.strip().strip("{}").split(","):
        part = part.strip()
        if not part or part.startswith("..."):
            continue
        if part.startswith("type "):
            part = part[len("type ") :].strip()
        local = part.split(alias_sep, 1)[-1].strip()
        if re.fullmatch(_IDENT, local):
            names.append(local)
    return names


def _bindings(content: str, patterns: _Patterns) -> tuple[list[str], list[str]]:
    """Return (namespace identifiers, directly imported function names)."""
    namespaces: list[str] = []
    named: list[str] = []

    for m in patterns.import_clause.finditer(content):
        clause = m.group("clause").strip()
        if clause.startswith("type "):
            clause = clause[len("type ") :].strip()
        brace = clause.find("{")
        if brace >= 0:
            named.extend(_named_bindings(clause[brace:], " as "))
            clause = clause[:brace]
        for part in clause.split(","):
            part = part.strip()
            if part.startswith("*"):
                part = part.split(" as ", 1)[-1].strip()
            if re.fullmatch(_IDENT, part):
                namespaces.append(part)

    for m in patterns.require_binding.finditer(content):
        target = m.group("target")
        if target.startswith("{"):
            named.extend(_named_bindings(target, ":"))
        else:
            namespaces.append(target)

    return namespaces, named


def _called_methods(content: str, namespaces: list[str], named: list[str]) -> tuple[str, ...]:
    methods: list[str] = []
    for ns in dict.fromkeys(namespaces):
        for m in re.finditer(rf"(?<![\w$.]){re.escape(ns)}\s*\??\.\s*({_IDENT})\s*\(", content):
            methods.append(m.group(1))
    for name in dict.fromkeys(named):
        if re.search(rf"(?<![\w$.]){re.escape(name)}\s*\(", content):
            methods.append(name)
    return tuple(dict.fromkeys(methods))


def classify_context(lines: list[str], usage_lines: tuple[int, ...]) -> str:
    """Label what the code around the usage lines appears to be doing."""
    window: list[str] = []
    for line_no in usage_lines:
        start = max(0, line_no - 1 - CONTEXT_RADIUS)
        window.extend(lines[start : line_no + CONTEXT_RADIUS])
    context = "\n".join(window).lower()

    if "console." in context or "process.stdout" in context or "process.stderr" in context:
        return "Console/output"
    if "response" in context or "res." in context or "req." in context:
        return "HTTP/API"
    if "database" in context or "db." in context or "query" in context:
        return "Database"
    if "test" in context or "spec" in context or "describe" in context:
        return "Testing"
    return "General usage"


def scan_file(path: Path, package_name: str, root: Path) -> FileUsage | None:
    """Return the package's usage in one file, or None when it is not referenced."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Skipping unreadable source %s: %s", path, exc)
        return None

    patterns = _Patterns(package_name)
    if not patterns.matches(content):
        return None

    lines = content.splitlines()
    usage_lines = tuple(i for i, line in enumerate(lines, start=1) if patterns.matches(line))
    namespaces, named = _bindings(content, patterns)
    # Multi-line statements can match as a whole but on no single line.
    if not usage_lines:
        usage_lines = (patterns.first_line(content),)

    try:
        relative = path.relative_to(root).as_posix()
    except ValueError:
        relative = path.as_posix()

    return FileUsage(
        file=relative,
        lines=usage_lines,
        methods=_called_methods(content, namespaces, named),
        context=classify_context(lines, usage_lines),
    )


def find_usages(
    package_name: str, project_root: Path, settings: Settings | None = None
) -> list[FileUsage]:
    """Scan project sources for references to ``package_name``."""
    settings = settings or Settings()
    root = Path(project_root).absolute()
    usages: list[FileUsage] = []
    for path in find_source_files(
        root, settings.scan_max_depth, settings.source_extensions, settings.ignore_dirs
    ):
        usage = scan_file(path, package_name, root)
        if usage is not None:
            usages.append(usage)
    return usages


def find_files_using_package(
    package_name: str, project_root: Path, settings: Settings | None = None
) -> list[str]:
    """Return project-relative paths of files that reference ``package_name``."""
    return [usage.file for usage in find_usages(package_name, project_root, settings)]
