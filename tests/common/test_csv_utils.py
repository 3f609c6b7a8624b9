"""Tests for preflight/common/csv_utils.py"""

from preflight.common.csv_utils import parse_csv_text, read_csv, to_csv_text, write_csv


class TestParseCsvText:
    def test_headers_and_rows(self):
        result = parse_csv_text("Title,Handle\nShirt,shirt\n")
        assert result.headers == ["Title", "Handle"]
        assert result.rows == [{"Title": "Shirt", "Handle": "shirt"}]
        assert result.parse_errors == []

    def test_skips_blank_lines(self):
        result = parse_csv_text("A,B\n\n1,2\n,\n")
        assert result.rows == [{"A": "1", "B": "2"}]

    def test_quoted_newlines_and_commas(self):
        result = parse_csv_text('Title,Body\n"Tee","<p>a, b\nc</p>"\n')
        assert result.rows[0]["Body"] == "<p>a, b\nc</p>"

    def test_short_row_is_padded_and_reported(self):
        result = parse_csv_text("A,B\n1\n")
        assert result.rows == [{"A": "1", "B": ""}]
        assert result.parse_errors == ["Line 2: expected 2 fields, found 1"]

    def test_long_row_keeps_extra_values(self):
        result = parse_csv_text("A,B\n1,2,3\n")
        assert result.rows == [{"A": "1", "B": "2", "Column 3": "3"}]
        assert len(result.parse_errors) == 1
        assert result.parse_errors[0].startswith("Line 2:")

    def test_repeated_headers_get_their_own_columns(self):
        result = parse_csv_text("A,A,A\n1,,3\n")
        assert result.headers == ["A", "A (2)", "A (3)"]
        assert result.rows == [{"A": "1", "A (2)": "", "A (3)": "3"}]

    def test_empty_text(self):
        result = parse_csv_text("")
        assert result.headers == []
        assert result.rows == []


class TestReadCsv:
    def test_strips_byte_order_mark(self, tmp_path):
        path = tmp_path / "products.csv"
        path.write_text("\ufeffTitle,Handle\r\nShirt,shirt\r\n", encoding="utf-8")
        result = read_csv(path)
        assert result.headers == ["Title", "Handle"]
        assert result.rows[0]["Title"] == "Shirt"


class TestWriteCsv:
    def test_to_csv_text_fills_missing_and_ignores_extra(self):
        text = to_csv_text(["A", "B"], [{"A": "1", "C": "ignored"}])
        assert text == "A,B\r\n1,\r\n"

    def test_write_then_read(self, tmp_path):
        path = tmp_path / "out.csv"
        written = write_csv(path, ["Title", "Price"], [{"Title": "Tee, blue", "Price": "10"}])
        assert written == 1
        result = read_csv(path)
        assert result.rows == [{"Title": "Tee, blue", "Price": "10"}]
