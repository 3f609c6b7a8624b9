"""Tests for preflight/pipeline.py"""

import json

import pytest

from preflight.common.exceptions import ConfigurationError
from preflight.pipeline import parse_error_issue, run_preflight
from preflight.schema import load_rule_set

SCENARIO_HEADERS = ["Title", "Handle", "Published"]
SCENARIO_ROWS = [{"Title": "Shirt", "Handle": "my shirt", "Published": "yes"}]


class TestRunPreflight:
    def test_clean_table(self, clean_product):
        report = run_preflight(list(clean_product), [clean_product], "shopify")
        assert report.issues == []
        assert report.breakdown.score == 100
        assert report.breakdown.ready is True
        assert report.readiness.ready is True
        assert report.fix_result is None

    def test_scenario_report(self):
        report = run_preflight(SCENARIO_HEADERS, SCENARIO_ROWS, "shopify")
        row_codes = [i.code for i in report.issues if not i.is_file_level]
        assert row_codes == ["shopify/invalid_handle", "shopify/invalid_boolean_published"]
        assert report.breakdown.ready is False
        assert report.readiness.blocking_count == 2
        assert report.readiness.auto_fixable_blocking_count == 1

    def test_apply_fixes_revalidates(self):
        report = run_preflight(SCENARIO_HEADERS, SCENARIO_ROWS, "shopify", apply_fixes=True)
        assert report.fix_result.fixes_applied == ["Row 1: normalized Published on online store → TRUE"]
        fixed_codes = {i.code for i in report.fixed_issues}
        assert "shopify/invalid_handle" in fixed_codes
        assert "shopify/invalid_boolean_published" not in fixed_codes
        assert report.fixed_breakdown.ready is False
        assert report.fixed_breakdown.score >= report.breakdown.score

    def test_unknown_format(self):
        with pytest.raises(ConfigurationError, match="Unknown format"):
            run_preflight(["Title"], [], "amazon")

    def test_to_dict_is_json_serializable(self):
        report = run_preflight(SCENARIO_HEADERS, SCENARIO_ROWS, "shopify",
                               parse_errors=["Line 3: expected 3 fields, found 2"], apply_fixes=True)
        data = json.loads(json.dumps(report.to_dict()))
        assert data["format_id"] == "shopify"
        assert data["rows"] == 1
        assert data["issues"][0]["code"] == "shopify/csv_parse_error"
        assert data["fix"]["fixed_by_code"] == {"shopify/invalid_boolean_published": 1}
        assert data["breakdown"]["ready"] is False
        notes = {note["category"]: note for note in data["score_notes"]}
        assert len(notes) == 12
        assert notes["structure"]["label"] == "Structure"
        assert "blocking" in notes["structure"]["note"]


class TestParseErrors:
    def test_parse_issue_comes_first_and_blocks(self, clean_product):
        report = run_preflight(list(clean_product), [clean_product], "shopify",
                               parse_errors=["Line 3: expected 5 fields, found 4"])
        first = report.issues[0]
        assert first.code == "shopify/csv_parse_error"
        assert first.is_file_level
        assert first.severity == "error"
        assert "Line 3" in first.message
        assert report.breakdown.ready is False

    def test_parse_issue_kept_after_fixing(self, clean_product):
        report = run_preflight(list(clean_product), [clean_product], "shopify",
                               parse_errors=["Line 3: bad"], apply_fixes=True)
        assert report.fixed_issues[0].code == "shopify/csv_parse_error"

    def test_long_list_summarised(self, shopify):
        errors = [f"Line {n}: bad" for n in range(2, 9)]
        issue = parse_error_issue(errors, shopify)
        assert issue.message.startswith("7 line(s) could not be parsed cleanly")
        assert "Line 6: bad" in issue.message
        assert "Line 7: bad" not in issue.message
        assert issue.message.endswith("; and 2 more")

    def test_no_errors(self):
        assert parse_error_issue([], load_rule_set("ebay")) is None
