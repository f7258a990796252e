from pathlib import Path

from whyinstall.models import DependencyCategory
from whyinstall.resolver import dedupe_chains, resolve

from conftest import install, write_manifest


def test_transitive_chain(project: Path):
    write_manifest(project, {"name": "app", "dependencies": {"a": "*"}})
    install(project, "a", dependencies={"b": "*"})
    install(project, "b")

    chains = resolve("b", project)

    assert len(chains) == 1
    assert chains[0].modules == ("a", "b")
    assert chains[0].category is DependencyCategory.PROD
    assert chains[0].manifest_path == project / "node_modules" / "a" / "package.json"


def test_direct_dependency_per_category(project: Path):
    write_manifest(project, {"devDependencies": {"jest": "*"}, "peerDependencies": {"react": "*"}})
    install(project, "jest")
    install(project, "react")

    jest = resolve("jest", project)
    react = resolve("react", project)

    assert [(c.modules, c.category) for c in jest] == [(("jest",), DependencyCategory.DEV)]
    assert [(c.modules, c.category) for c in react] == [(("react",), DependencyCategory.PEER)]
    assert jest[0].is_direct(project / "package.json")


def test_target_need_not_be_installed_to_be_reported(project: Path):
    write_manifest(project, {"dependencies": {"ghost": "*"}})
    chains = resolve("ghost", project)
    assert [c.modules for c in chains] == [("ghost",)]


def test_missing_project_manifest_returns_empty(project: Path):
    install(project, "a")
    assert resolve("a", project) == []


def test_cycle_terminates(project: Path):
    write_manifest(project, {"dependencies": {"a": "*"}})
    install(project, "a", dependencies={"b": "*"})
    install(project, "b", dependencies={"a": "*", "t": "*"})
    install(project, "t")

    chains = resolve("t", project)

    assert [c.modules for c in chains] == [("a", "b", "t")]


def test_cycle_without_target_returns_empty(project: Path):
    write_manifest(project, {"dependencies": {"a": "*"}})
    install(project, "a", dependencies={"b": "*"})
    install(project, "b", dependencies={"a": "*"})

    assert resolve("zzz", project) == []


def test_diamond_reports_every_route(project: Path):
    write_manifest(project, {"dependencies": {"left": "*", "right": "*"}})
    install(project, "left", dependencies={"shared": "*"})
    install(project, "right", dependencies={"shared": "*"})
    install(project, "shared", dependencies={"t": "*"})
    install(project, "t")

    chains = resolve("t", project)

    # "shared" is expanded once, via the first route reaching it.
    assert [c.modules for c in chains] == [("left", "shared", "t")]


def test_diamond_into_target_records_both_parents(project: Path):
    write_manifest(project, {"dependencies": {"left": "*", "right": "*"}})
    install(project, "left", dependencies={"t": "*"})
    install(project, "right", devDependencies={"t": "*"})
    install(project, "t")

    chains = resolve("t", project)

    assert [(c.modules, c.category) for c in chains] == [
        (("left", "t"), DependencyCategory.PROD),
        (("right", "t"), DependencyCategory.DEV),
    ]


def test_nested_install_is_followed(project: Path):
    write_manifest(project, {"dependencies": {"a": "*"}})
    a_dir = install(project, "a", dependencies={"b": "*"})
    nested_b = install(a_dir, "b", dependencies={"t": "*"})
    install(project, "b")  # hoisted copy without the edge
    install(project, "t")

    chains = resolve("t", project)

    assert [c.modules for c in chains] == [("a", "b", "t")]
    assert chains[0].manifest_path == nested_b / "package.json"


def test_depth_limit_prunes_long_chains(project: Path):
    write_manifest(project, {"dependencies": {"p0": "*"}})
    for i in range(5):
        install(project, f"p{i}", dependencies={f"p{i + 1}": "*"})
    install(project, "p5", dependencies={"t": "*"})
    install(project, "t")

    assert [c.modules for c in resolve("t", project)] == [("p0", "p1", "p2", "p3", "p4", "p5", "t")]
    assert resolve("t", project, max_depth=3) == []


def test_malformed_dependency_manifest_is_skipped(project: Path):
    write_manifest(project, {"dependencies": {"broken": "*", "ok": "*"}})
    broken = project / "node_modules" / "broken"
    broken.mkdir(parents=True)
    (broken / "package.json").write_text("{", encoding="utf-8")
    install(project, "ok", dependencies={"t": "*"})

    assert [c.modules for c in resolve("t", project)] == [("ok", "t")]


def test_deeply_nested_dependency_manifest_is_skipped(project: Path):
    write_manifest(project, {"dependencies": {"deep": "*", "ok": "*"}})
    deep = project / "node_modules" / "deep"
    deep.mkdir(parents=True)
    (deep / "package.json").write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
    install(project, "ok", dependencies={"t": "*"})

    assert [c.modules for c in resolve("t", project)] == [("ok", "t")]


def test_scoped_target(project: Path):
    write_manifest(project, {"dependencies": {"@scope/a": "*"}})
    install(project, "@scope/a", dependencies={"@scope/b": "*"})
    install(project, "@scope/b")

    assert [c.modules for c in resolve("@scope/b", project)] == [("@scope/a", "@scope/b")]


def test_every_chain_ends_in_target(project: Path):
    write_manifest(project, {"dependencies": {"a": "*", "t": "*"}, "devDependencies": {"b": "*"}})
    install(project, "a", dependencies={"t": "*"})
    install(project, "b", dependencies={"a": "*", "t": "*"})
    install(project, "t")

    chains = resolve("t", project)

    assert chains
    assert all(c.target == "t" for c in chains)


def test_dedupe_preserves_first_seen_and_is_idempotent(project: Path):
    write_manifest(project, {"dependencies": {"a": "*"}})
    a_dir = install(project, "a", dependencies={"t": "*"})
    chains = resolve("t", project)
    duplicated = chains + chains

    once = dedupe_chains(duplicated)
    twice = dedupe_chains(once)

    assert once == chains
    assert twice == once
    assert once[0].manifest_path == a_dir / "package.json"
