"""Tests for preflight/models"""

from preflight.models import CanonicalTable, FixResult, Issue


class TestIssue:
    def test_file_level(self):
        issue = Issue("error", "shopify/missing_required_column", "msg", column="Title")
        assert issue.is_file_level
        assert issue.name == "missing_required_column"

    def test_key_ignores_message(self):
        a = Issue("error", "shopify/invalid_handle", "one", row_index=0, column="URL handle")
        b = Issue("error", "shopify/invalid_handle", "two", row_index=0, column="URL handle")
        assert a.key == b.key
        assert not a.is_file_level

    def test_to_dict(self):
        issue = Issue("warning", "ebay/duplicate_sku", "msg", row_index=2, column="CustomLabel")
        assert issue.to_dict() == {
            "severity": "warning",
            "code": "ebay/duplicate_sku",
            "message": "msg",
            "row_index": 2,
            "column": "CustomLabel",
            "suggestion": "",
        }


class TestCanonicalTable:
    def _table(self):
        return CanonicalTable(
            format_id="shopify",
            fixed_headers=["Title", "Vendor", "Notes"],
            rows=[{"Title": "Tee", "Vendor": "", "Notes": "x"}],
            source_map={"Title": "Title", "Vendor": None},
            unknown_headers=["Notes"],
        )

    def test_column_supplied(self):
        table = self._table()
        assert table.column_supplied("Title")
        assert not table.column_supplied("Vendor")
        assert table.column_supplied("Notes")
        assert not table.column_supplied("Price")

    def test_copy_is_independent(self):
        table = self._table()
        clone = table.copy()
        clone.rows[0]["Title"] = "Changed"
        clone.fixed_headers.append("Extra")
        clone.source_map["Vendor"] = "Vendor"
        assert table.rows[0]["Title"] == "Tee"
        assert "Extra" not in table.fixed_headers
        assert table.source_map["Vendor"] is None


class TestFixResult:
    def test_to_dict_leaves_out_table_and_rows(self):
        result = FixResult(
            fixed_headers=["Title"],
            fixed_rows=[{"Title": "Tee"}],
            fixes_applied=["Row 1: normalized Title → Tee"],
            fixed_by_code={"shopify/x": 1},
            table=CanonicalTable(format_id="shopify"),
        )
        data = result.to_dict()
        assert set(data) == {"fixed_headers", "fixes_applied", "fixed_by_code",
                             "auto_fixable_blocking_found"}
        assert data["fixed_by_code"] == {"shopify/x": 1}
