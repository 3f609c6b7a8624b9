"""Tests for preflight/scoring/readiness.py"""

from preflight.models import Issue
from preflight.scoring import build_score_notes, compute_readiness_summary, score


def _published(row):
    return Issue("error", "shopify/invalid_boolean_published", "Bad Published value",
                 row_index=row, column="Published on online store")


MISSING_TITLE = Issue("error", "shopify/missing_required_column", "Missing column: Title", column="Title")
COMPARE_AT = Issue("warning", "shopify/compare_at_lt_price", "Compare-at below price",
                   row_index=0, column="Compare-at price")


class TestComputeReadinessSummary:
    def test_groups_by_code_largest_first(self):
        summary = compute_readiness_summary([MISSING_TITLE, _published(3), _published(1), COMPARE_AT], "shopify")
        assert summary.ready is False
        assert summary.blocking_count == 3
        assert summary.auto_fixable_blocking_count == 2

        first, second = summary.blocking_groups
        assert (first.code, first.count, first.first_row_index) == ("shopify/invalid_boolean_published", 2, 3)
        assert first.title == "Invalid Published value"
        assert first.auto_fixable_count == 2
        assert (second.code, second.count, second.first_row_index) == ("shopify/missing_required_column", 1, None)
        assert second.auto_fixable_count == 0

    def test_warnings_do_not_block(self):
        summary = compute_readiness_summary([COMPARE_AT], "shopify")
        assert summary.ready is True
        assert summary.blocking_groups == []

    def test_unknown_code_uses_code_as_title(self):
        issue = Issue("error", "shopify/mystery", "Something odd", row_index=0)
        summary = compute_readiness_summary([issue], "shopify")
        assert summary.blocking_groups[0].title == "shopify/mystery"
        assert summary.auto_fixable_blocking_count == 0

    def test_file_level_issue_never_counted_as_auto_fixable(self):
        file_level = Issue("error", "shopify/invalid_boolean_published", "Bad column")
        summary = compute_readiness_summary([file_level], "shopify")
        assert summary.blocking_count == 1
        assert summary.auto_fixable_blocking_count == 0


class TestBuildScoreNotes:
    def _notes(self, shopify, issues):
        breakdown = score(issues, shopify)
        return {note.category: note for note in build_score_notes(breakdown, issues, "shopify")}

    def test_notes_per_category(self, shopify):
        notes = self._notes(shopify, [MISSING_TITLE, COMPARE_AT])
        assert len(notes) == 12
        assert notes["structure"].note == "1 blocking"
        assert notes["structure"].label == "Structure"
        assert notes["structure"].score == 74
        assert notes["pricing"].note == "1 warnings"
        assert notes["seo"].note == "No issues detected"
        assert notes["seo"].score == 100

    def test_non_blocking_errors_counted_as_errors(self, shopify):
        issue = Issue("error", "shopify/invalid_image_url", "Bad URL", row_index=0, column="Product image URL")
        notes = self._notes(shopify, [issue])
        assert notes["images"].note == "1 errors"

    def test_unknown_code_lands_in_column_category(self, shopify):
        issue = Issue("error", "shopify/mystery_price", "Odd price", row_index=0, column="Price")
        notes = self._notes(shopify, [issue])
        assert notes["pricing"].note == "1 blocking"
        assert notes["pricing"].score < 100
        assert notes["structure"].note == "No issues detected"

    def test_unknown_code_without_column_lands_in_structure(self, shopify):
        issue = Issue("warning", "shopify/mystery", "Something odd", row_index=0)
        notes = self._notes(shopify, [issue])
        assert notes["structure"].note == "1 warnings"
