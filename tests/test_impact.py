from whyinstall.impact import analyze_impact, compute_risk_level
from whyinstall.models import FileUsage


def _usage(file: str, context: str, methods=()):
    return FileUsage(file=file, lines=(1,), methods=tuple(methods), context=context)


def test_no_usages_is_low_risk():
    impact = analyze_impact([])
    assert impact.risk_level == "Low"
    assert impact.impacts == (
        "No direct usage found in source files",
        "May be a transitive dependency or unused",
    )


def test_high_risk_contexts():
    assert compute_risk_level([_usage("a.js", "Testing"), _usage("b.js", "Database")]) == "High"
    assert compute_risk_level([_usage("a.js", "HTTP/API")]) == "High"


def test_low_risk_contexts():
    assert compute_risk_level([_usage("a.test.js", "Testing"), _usage("b.test.js", "Testing")]) == "Low"
    assert compute_risk_level([_usage("cli.js", "Console/output")]) == "Low"


def test_medium_risk_default():
    assert compute_risk_level([_usage("a.js", "Console/output"), _usage("b.js", "Console/output")]) == "Medium"
    assert compute_risk_level([_usage("a.js", "General usage")]) == "Medium"


def test_method_listing_is_truncated():
    methods = [f"m{i}" for i in range(10)]
    impact = analyze_impact([_usage("a.js", "General usage", methods)])
    assert impact.impacts[0] == "Methods used: m0, m1, m2, m3, m4, m5, m6, m7 (+2 more)"
    assert impact.risk_level == "Medium"


def test_notes_for_namespace_only_usage():
    impact = analyze_impact([_usage("a.test.js", "Testing")])
    assert "Package imported but no method calls detected" in impact.impacts
    assert "Only used in tests - safe to remove from production dependencies" in impact.impacts


def test_file_count_lists_contexts_in_first_seen_order():
    impact = analyze_impact(
        [
            _usage("a.js", "General usage", ["get"]),
            _usage("b.test.js", "Testing"),
            _usage("c.js", "General usage"),
        ]
    )
    assert impact.impacts[1] == "Used in 3 files: General usage, Testing"


def test_file_count_is_singular_for_one_file():
    impact = analyze_impact([_usage("cli.js", "Console/output", ["log"])])
    assert impact.impacts[:2] == ("Methods used: log", "Used in 1 file: Console/output")
