"""Tests for report assembly, presentation filters and renderers."""

from __future__ import annotations

import json

import pytest

from gitaudit.contracts.load import validate_instance
from gitaudit.core.engine import AuditEngine
from gitaudit.model import Category, Severity
from gitaudit.model.issue import Issue
from gitaudit.model.report import IssueCounts, Report, Scores, Statistics
from gitaudit.reports import (
    export_json,
    export_markdown,
    filter_report,
    render_compact,
    render_report,
)
from gitaudit.reports.assembler import summarize
from gitaudit.reports.filters import parse_category, parse_severity
from gitaudit.utils.determinism import FIXED_TIMESTAMP


def _issue(issue_id: int, severity: Severity, category: Category = Category.QUALITY, **kw) -> Issue:
    return Issue(
        id=issue_id,
        rule_id=kw.get("rule_id", "QUAL_TEST_RULE_001"),
        category=category,
        severity=severity,
        title=kw.get("title", f"Issue {issue_id}"),
        description=kw.get("description", "Something to look at."),
        file=kw.get("file", "a.py"),
        line=kw.get("line", issue_id),
    )


def _report(issues: tuple[Issue, ...], overall: int = 90) -> Report:
    stats = Statistics(total_files=2, analyzed_files=2, analyzed_lines=1234, languages={"Python": 2})
    return Report(
        repository="demo",
        timestamp=FIXED_TIMESTAMP,
        statistics=stats,
        scores=Scores(overall=overall),
        counts=IssueCounts.of(issues),
        issues=issues,
        summary=summarize(stats, issues, overall),
    )


@pytest.fixture
def mixed_report() -> Report:
    return _report(
        (
            _issue(1, Severity.INFO, Category.PERFORMANCE),
            _issue(2, Severity.CRITICAL, Category.SECURITY, title="Exposed Secret"),
            _issue(3, Severity.WARNING, Category.DEAD_CODE, title="Unused Import"),
            _issue(4, Severity.INFO, Category.QUALITY),
        ),
        overall=72,
    )


class TestSummary:
    def test_clean_run(self):
        text = summarize(Statistics(analyzed_files=3, analyzed_lines=1500), (), 100)
        assert text == "Analyzed 3 files (1,500 lines). Overall the codebase is in good shape."

    def test_counts_and_band(self, mixed_report):
        assert mixed_report.summary == (
            "Analyzed 2 files (1,234 lines). "
            "1 critical issue need immediate attention. "
            "1 warning to review. "
            "Room for improvement."
        )

    def test_plurals_and_poor_band(self):
        issues = (
            _issue(1, Severity.CRITICAL),
            _issue(2, Severity.CRITICAL),
            _issue(3, Severity.WARNING),
            _issue(4, Severity.WARNING),
        )
        text = summarize(Statistics(analyzed_files=1, analyzed_lines=10), issues, 40)
        assert "2 critical issues need immediate attention. " in text
        assert "2 warnings to review. " in text
        assert text.endswith("Significant attention needed.")


class TestIssueCounts:
    def test_of(self, mixed_report):
        assert mixed_report.counts == IssueCounts(total=4, critical=1, warnings=1, suggestions=2)

    def test_to_dict_carries_counts(self, mixed_report):
        stats = mixed_report.to_dict()["statistics"]
        assert stats["totalIssues"] == 4
        assert stats["criticalIssues"] == 1
        assert stats["warnings"] == 1
        assert stats["suggestions"] == 2
        assert stats["totalLines"] == stats["analyzedLines"] == 1234

    def test_to_dict_matches_schema(self, mixed_report):
        validate_instance(mixed_report.to_dict(), "report.schema.json")


class TestFilters:
    def test_no_filter_returns_same_report(self, mixed_report):
        assert filter_report(mixed_report) is mixed_report

    def test_min_severity(self, mixed_report):
        shown = filter_report(mixed_report, min_severity="warning")
        assert [i.id for i in shown.issues] == [2, 3]

    def test_category(self, mixed_report):
        shown = filter_report(mixed_report, category="security")
        assert [i.id for i in shown.issues] == [2]

    def test_unused_alias_means_dead_code(self, mixed_report):
        shown = filter_report(mixed_report, category="unused")
        assert [i.title for i in shown.issues] == ["Unused Import"]

    def test_both_filters(self, mixed_report):
        shown = filter_report(mixed_report, min_severity="info", category="quality")
        assert [i.id for i in shown.issues] == [4]

    def test_counts_scores_and_stats_are_untouched(self, mixed_report):
        shown = filter_report(mixed_report, min_severity="critical")
        assert shown.counts == mixed_report.counts
        assert shown.scores == mixed_report.scores
        assert shown.statistics == mixed_report.statistics
        assert shown.summary == mixed_report.summary

    def test_invalid_values_mean_no_filter(self, mixed_report, caplog):
        shown = filter_report(mixed_report, min_severity="urgent", category="style")
        assert shown.issues == mixed_report.issues
        assert "urgent" in caplog.text

    @pytest.mark.parametrize(
        "raw, expected",
        [("CRITICAL", Severity.CRITICAL), (" info ", Severity.INFO), (None, None), ("bogus", None)],
    )
    def test_parse_severity(self, raw, expected):
        assert parse_severity(raw) is expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("dead_code", Category.DEAD_CODE),
            ("dead-code", Category.DEAD_CODE),
            ("Performance", Category.PERFORMANCE),
            ("bogus", None),
        ],
    )
    def test_parse_category(self, raw, expected):
        assert parse_category(raw) is expected


class TestExporters:
    def test_json_is_sorted_and_parses(self, mixed_report):
        text = export_json(mixed_report)
        assert text.endswith("\n")
        data = json.loads(text)
        assert data["repository"] == "demo"
        assert [i["id"] for i in data["issues"]] == [1, 2, 3, 4]
        assert list(data) == sorted(data)

    def test_markdown_sections(self, mixed_report):
        text = export_markdown(mixed_report)
        assert text.startswith("# GitAudit Report: demo")
        assert "| Security | 100 |" in text
        assert "| CRITICAL | 1 |" in text
        assert "## Top 4 Issues" in text
        first = next(line for line in text.splitlines() if line.startswith("1. "))
        assert "[CRITICAL]" in first
        assert "- Python: 2" in text

    def test_markdown_top_n(self, mixed_report):
        assert "## Top 2 Issues" in export_markdown(mixed_report, top_n=2)


class TestTerminal:
    def test_full_report_sorts_critical_first(self, mixed_report):
        text = render_report(mixed_report)
        assert "Audit Report: demo" in text
        assert text.index("Exposed Secret") < text.index("Unused Import")
        assert "Files analyzed  : 2" in text
        assert "Lines analyzed  : 1,234" in text
        assert "Python" in text

    def test_full_report_without_issues(self):
        assert "No issues found." in render_report(_report(()))

    def test_compact_caps_info_entries(self):
        issues = tuple(_issue(n, Severity.INFO) for n in range(1, 26))
        text = render_compact(_report(issues))
        assert "Info (25):" in text
        assert text.count("    - a.py:") == 20
        assert "... and 5 more" in text

    def test_compact_groups(self, mixed_report):
        text = render_compact(mixed_report)
        assert "Critical (1):" in text
        assert "x a.py:2  Exposed Secret" in text
        assert "Warnings (1):" in text

    def test_score_bar(self):
        from gitaudit.reports.terminal import score_bar

        assert score_bar(50, width=10) == "#####..... 50%"
        assert score_bar(100, width=4) == "#### 100%"


class TestEngineReport:
    def test_files_listing(self, catalog):
        engine = AuditEngine(catalog=catalog)
        engine.analyze_file("src/app.py", "x = 1\ny = 2\n")
        report = engine.generate_report("demo", timestamp=FIXED_TIMESTAMP)
        (record,) = report.files
        assert record.to_dict() == {
            "path": "src/app.py",
            "language": "Python",
            "family": "python",
            "lineCount": 3,
            "byteSize": 12,
        }
