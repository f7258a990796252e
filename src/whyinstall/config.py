"""Configuration loader for whyinstall.

Reads optional settings from a JSON file (default: ``.whyinstall.json`` in
the analysed project) and validates the structure. Every key is optional;
anything not given falls back to the built-in defaults below.

Example::

    {
      "maxDepth": 12,
      "scanMaxDepth": 6,
      "ignoreDirs": ["node_modules", ".git", "dist", "storybook-static"]
    }
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_NAME = ".whyinstall.json"
CONFIG_PATH_ENV_VAR = "WHYINSTALL_CONFIG"

DEFAULT_MAX_DEPTH = 10
DEFAULT_SCAN_MAX_DEPTH = 5
DEFAULT_SOURCE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")
DEFAULT_IGNORE_DIRS = ("node_modules", ".git", "dist", "build", ".next", "coverage")
DEFAULT_BUNDLE_EXTENSIONS = (".js", ".mjs", ".cjs")
DEFAULT_BUNDLE_EXCLUDE_DIRS = (
    "test",
    "tests",
    "__tests__",
    "docs",
    "doc",
    "types",
    "@types",
    "typings",
)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


def _int_field(data: dict[str, Any], key: str, default: int, minimum: int) -> int:
    value = data.get(key, default)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer")
    if value < minimum:
        raise ConfigError(f"'{key}' must be at least {minimum}")
    return value


def _str_tuple_field(
    data: dict[str, Any], key: str, default: tuple[str, ...]
) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ConfigError(f"'{key}' must be an array of non-empty strings")
    return tuple(value)


def _extension_field(
    data: dict[str, Any], key: str, default: tuple[str, ...]
) -> tuple[str, ...]:
    values = _str_tuple_field(data, key, default)
    return tuple(v.lower() if v.startswith(".") else f".{v.lower()}" for v in values)


@dataclass(slots=True, frozen=True)
class Settings:
    """Tunables for traversal, size measurement and source scanning."""

    max_depth: int = DEFAULT_MAX_DEPTH
    scan_max_depth: int = DEFAULT_SCAN_MAX_DEPTH
    source_extensions: tuple[str, ...] = DEFAULT_SOURCE_EXTENSIONS
    ignore_dirs: tuple[str, ...] = DEFAULT_IGNORE_DIRS
    bundle_extensions: tuple[str, ...] = DEFAULT_BUNDLE_EXTENSIONS
    bundle_exclude_dirs: tuple[str, ...] = DEFAULT_BUNDLE_EXCLUDE_DIRS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a dictionary, validating every present field."""
        return cls(
            max_depth=_int_field(data, "maxDepth", DEFAULT_MAX_DEPTH, minimum=1),
            scan_max_depth=_int_field(data, "scanMaxDepth", DEFAULT_SCAN_MAX_DEPTH, minimum=0),
            source_extensions=_extension_field(
                data, "sourceExtensions", DEFAULT_SOURCE_EXTENSIONS
            ),
            ignore_dirs=_str_tuple_field(data, "ignoreDirs", DEFAULT_IGNORE_DIRS),
            bundle_extensions=_extension_field(
                data, "bundleExtensions", DEFAULT_BUNDLE_EXTENSIONS
            ),
            bundle_exclude_dirs=tuple(
                d.lower()
                for d in _str_tuple_field(data, "bundleExcludeDirs", DEFAULT_BUNDLE_EXCLUDE_DIRS)
            ),
        )

    def with_max_depth(self, max_depth: int | None) -> Settings:
        """Return a copy with ``max_depth`` overridden, if one is given."""
        if max_depth is None:
            return self
        if max_depth < 1:
            raise ConfigError("'maxDepth' must be at least 1")
        return replace(self, max_depth=max_depth)


def _resolve_config_path(project_root: Path, path: Path | str | None) -> tuple[Path, bool]:
    """Resolve the configuration file path and whether it must exist.

    Priority:
    1. Explicit path argument
    2. WHYINSTALL_CONFIG environment variable
    3. .whyinstall.json in the project root (optional)
    """
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return Path(project_root) / DEFAULT_CONFIG_NAME, False


def load_settings(project_root: Path | str = ".", path: Path | str | None = None) -> Settings:
    """Load and validate settings from a JSON file.

    Args:
        project_root: Project whose ``.whyinstall.json`` is used by default.
        path: Optional explicit config file. If not provided, uses the
            WHYINSTALL_CONFIG env var or the project default.

    Returns:
        Validated Settings; the defaults when no default file exists.

    Raises:
        ConfigError: If a requested file is missing, unreadable or invalid.
    """
    config_path, required = _resolve_config_path(Path(project_root), path)

    if not config_path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return Settings()

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    return Settings.from_dict(data)
