import json
import sys
from pathlib import Path

import pytest

# Ensure repo_root/src is available on sys.path before any tests import project modules
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


def write_manifest(directory: Path, data: dict) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def install(base: Path, name: str, version: str = "1.0.0", **sections) -> Path:
    """Create base/node_modules/<name>/package.json and return the package dir."""
    package_dir = base.joinpath("node_modules", *name.split("/"))
    write_manifest(package_dir, {"name": name, "version": version, **sections})
    return package_dir


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "app"
    root.mkdir()
    return root
