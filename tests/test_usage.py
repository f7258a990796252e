from pathlib import Path

from whyinstall.config import DEFAULT_SCAN_MAX_DEPTH, Settings
from whyinstall.usage import (
    classify_context,
    find_files_using_package,
    find_source_files,
    find_usages,
    scan_file,
)


def _src(root: Path, rel: str, text: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_find_source_files_skips_ignored_dirs(project: Path):
    _src(project, "src/a.ts", "")
    _src(project, "src/b.py", "")
    _src(project, "node_modules/x/index.js", "")
    _src(project, "dist/bundle.js", "")
    _src(project, ".storybook/main.js", "")
    _src(project, "index.jsx", "")

    found = sorted(p.relative_to(project).as_posix() for p in find_source_files(project))

    assert found == ["index.jsx", "src/a.ts"]


def test_find_source_files_depth_limit(project: Path):
    _src(project, "a/b/c/deep.js", "")
    assert find_source_files(project, max_depth=2) == []
    assert len(find_source_files(project, max_depth=3)) == 1


def test_find_source_files_default_depth(project: Path):
    nested = "/".join(f"d{i}" for i in range(DEFAULT_SCAN_MAX_DEPTH))
    _src(project, f"{nested}/shallow.js", "")
    _src(project, f"{nested}/extra/deep.js", "")

    found = [p.name for p in find_source_files(project)]

    assert found == ["shallow.js"]


def test_detects_require_and_methods(project: Path):
    path = _src(
        project,
        "src/util.js",
        "const _ = require('lodash');\n\nmodule.exports = (xs) => _.uniq(_.flatten(xs));\n",
    )
    usage = scan_file(path, "lodash", project)
    assert usage is not None
    assert usage.file == "src/util.js"
    assert usage.lines == (1,)
    assert usage.methods == ("uniq", "flatten")
    assert usage.context == "General usage"


def test_detects_es_imports(project: Path):
    path = _src(
        project,
        "src/app.ts",
        "import axios, { get as fetchIt } from 'axios';\n"
        "import * as ax from \"axios/lib/core\";\n"
        "export async function load() {\n"
        "  await fetchIt('/x');\n"
        "  return ax.create();\n"
        "}\n",
    )
    usage = scan_file(path, "axios", project)
    assert usage.lines == (1, 2)
    assert set(usage.methods) == {"create", "fetchIt"}


def test_side_effect_and_dynamic_imports(project: Path):
    _src(project, "a.js", "import 'polyfill';\n")
    _src(project, "b.js", "const m = await import('polyfill');\n")
    _src(project, "c.js", "import 'polyfill-extra';\n")

    assert find_files_using_package("polyfill", project) == ["a.js", "b.js"]


def test_name_is_matched_literally(project: Path):
    _src(project, "a.js", "require('lodashXmerge')\n")
    _src(project, "b.js", "require('lodash.merge')\n")
    assert find_files_using_package("lodash.merge", project) == ["b.js"]


def test_destructured_require(project: Path):
    path = _src(project, "srv.js", "const { join: j, resolve } = require('path');\nresolve(j('a', 'b'));\n")
    usage = scan_file(path, "path", project)
    assert set(usage.methods) == {"j", "resolve"}


def test_multiline_require_still_reports_a_line(project: Path):
    path = _src(project, "m.js", "// header\nconst x = require(\n  'chalk'\n);\n")
    usage = scan_file(path, "chalk", project)
    assert usage.lines == (2,)


def test_unreferenced_and_unreadable_files(project: Path):
    path = _src(project, "a.js", "console.log('hi')\n")
    binary = project / "b.js"
    binary.write_bytes(b"\xff\xfe\x00require('x')")
    assert scan_file(path, "x", project) is None
    assert scan_file(binary, "x", project) is None


def test_context_labels():
    lines = ["import x from 'x';", "", "x.hit(db.query('select'));"]
    assert classify_context(lines, (1,)) == "Database"
    assert classify_context(["const c = require('c')", "console.log(c.red('!'))"], (1,)) == "Console/output"
    assert classify_context(["import x from 'x'", "app.get('/', (req, res) => res.send(x()))"], (1,)) == "HTTP/API"
    assert classify_context(["import x from 'x'", "describe('x', () => {})"], (1,)) == "Testing"
    assert classify_context(["import x from 'x'"], (1,)) == "General usage"


def test_find_usages_uses_settings(project: Path):
    _src(project, "lib/a.vue", "import dayjs from 'dayjs'\n")
    _src(project, "lib/b.js", "import dayjs from 'dayjs'\n")
    settings = Settings(source_extensions=(".vue",))

    usages = find_usages("dayjs", project, settings)

    assert [u.file for u in usages] == ["lib/a.vue"]
