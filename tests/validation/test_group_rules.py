"""
Tests for variant-group rules (Shopify products spread over several rows).
"""

from __future__ import annotations

# ── Shared helpers ─────────────────────────────────────────────────────────────

def _run(check, *rows):
    headers = list(dict.fromkeys(key for row in rows for key in row))
    rows = [{header: row.get(header, "") for header in headers} for row in rows]
    return check(headers, rows, "shopify")


def _variant(handle="tee", title="", **fields):
    row = {"URL handle": handle, "Title": title, "Vendor": "Acme", "Price": "10"}
    row.update(fields)
    return row


def _hits(issues, code):
    return [(i.row_index, i.column) for i in issues if i.code == code]


def _row_issues(issues):
    return [i for i in issues if not i.is_file_level]


# ── Check 1: Duplicate grouping key ────────────────────────────────────────────

class TestDuplicateGroupKey:
    def test_repeated_handle_without_variant_data(self, check):
        _, issues = _run(check, _variant(title="Tee"), _variant(title="Tee"))
        assert _hits(issues, "shopify/duplicate_handle_not_variants") == [
            (0, "URL handle"),
            (1, "URL handle"),
        ]

    def test_option_values_make_rows_variants(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 name": "Size", "Option1 value": "S"}),
            _variant(**{"Option1 name": "Size", "Option1 value": "M"}),
        )
        assert _row_issues(issues) == []

    def test_handles_compared_case_insensitively(self, check):
        _, issues = _run(check, _variant(handle="tee", title="Tee"), _variant(handle="tee ", title="Tee"))
        assert len(_hits(issues, "shopify/duplicate_handle_not_variants")) == 2


# ── Check 2: Option combinations ───────────────────────────────────────────────

class TestUniqueOptionTuples:
    def test_repeated_option_value(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 name": "Color", "Option1 value": "Red"}),
            _variant(**{"Option1 name": "Color", "Option1 value": "Red"}),
        )
        assert _hits(issues, "shopify/options_not_unique") == [
            (0, "Option1 value"),
            (1, "Option1 value"),
        ]

    def test_option_values_compared_case_insensitively(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 name": "Color", "Option1 value": "Red"}),
            _variant(**{"Option1 name": "Color", "Option1 value": " red"}),
        )
        assert len(_hits(issues, "shopify/options_not_unique")) == 2

    def test_distinct_skus_without_options_share_a_blank_combination(self, check):
        _, issues = _run(check, _variant(title="Tee", SKU="TEE-1"), _variant(SKU="TEE-2"))
        assert len(_hits(issues, "shopify/options_not_unique")) == 2
        assert _hits(issues, "shopify/duplicate_handle_not_variants") == []

    def test_only_the_repeated_combination_is_reported(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 name": "Size", "Option1 value": "S"}),
            _variant(**{"Option1 name": "Size", "Option1 value": "M"}),
            _variant(**{"Option1 name": "Size", "Option1 value": "M"}),
        )
        assert [row for row, _ in _hits(issues, "shopify/options_not_unique")] == [1, 2]


# ── Check 4: Shared product fields ─────────────────────────────────────────────

class TestSharedFields:
    def test_vendor_mismatch(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 name": "Size", "Option1 value": "S"}),
            _variant(Vendor="Other", **{"Option1 name": "Size", "Option1 value": "M"}),
        )
        assert _hits(issues, "shopify/shared_field_mismatch") == [(1, "Vendor")]

    def test_blank_on_variant_row_is_fine(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 name": "Size", "Option1 value": "S"}),
            _variant(Vendor="", **{"Option1 name": "Size", "Option1 value": "M"}),
        )
        assert _row_issues(issues) == []

    def test_option_names_inconsistent(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 name": "Size", "Option1 value": "S"}),
            _variant(**{"Option1 name": "Color", "Option1 value": "Red"}),
        )
        assert _hits(issues, "shopify/option_name_inconsistent") == [(1, "Option1 name")]

    def test_different_titles_under_one_handle(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 name": "Size", "Option1 value": "S"}),
            _variant(title="Cap", **{"Option1 name": "Size", "Option1 value": "M"}),
        )
        assert _hits(issues, "shopify/handle_title_mismatch") == [(1, "Title")]
        assert _hits(issues, "shopify/shared_field_mismatch") == []

    def test_option_named_on_first_row_only(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 name": "Size", "Option1 value": "S"}),
            _variant(**{"Option1 value": "M"}),
        )
        assert _hits(issues, "shopify/option_name_missing") == []
        assert _row_issues(issues) == []

    def test_option_never_named(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 value": "S"}),
            _variant(**{"Option1 value": "M"}),
        )
        assert _hits(issues, "shopify/option_name_missing") == [
            (0, "Option1 name"),
            (1, "Option1 name"),
        ]


# ── Check 5: Identifier uniqueness ─────────────────────────────────────────────

class TestIdentifierUniqueness:
    def test_same_sku_within_product_is_an_error(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", SKU="TEE-1", **{"Option1 name": "Size", "Option1 value": "S"}),
            _variant(SKU="TEE-1", **{"Option1 name": "Size", "Option1 value": "M"}),
        )
        hits = [i for i in issues if i.code == "shopify/duplicate_sku"]
        assert [i.row_index for i in hits] == [0, 1]
        assert all(i.severity == "error" for i in hits)
        assert _hits(issues, "shopify/duplicate_sku_across_products") == []

    def test_same_sku_across_products_is_a_warning(self, check):
        _, issues = _run(
            check,
            _variant(handle="tee", title="Tee", SKU="A1"),
            _variant(handle="cap", title="Cap", SKU="a1"),
        )
        hits = [i for i in issues if i.code == "shopify/duplicate_sku_across_products"]
        assert [i.row_index for i in hits] == [0, 1]
        assert all(i.severity == "warning" for i in hits)
        assert _hits(issues, "shopify/duplicate_sku") == []


# ── Check 7: Placeholder option value ──────────────────────────────────────────

class TestPlaceholderOptionMix:
    def test_default_title_next_to_real_options(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 name": "Title", "Option1 value": "Default Title"}),
            _variant(**{"Option1 value": "Large"}),
        )
        hits = [i for i in issues if i.code == "shopify/mixed_default_title_with_options"]
        assert [(i.row_index, i.column) for i in hits] == [(0, "Option1 value"), (1, "Option1 value")]
        assert all(i.severity == "warning" for i in hits)

    def test_single_default_title_variant(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 name": "Title", "Option1 value": "Default Title"}),
        )
        assert _row_issues(issues) == []


# ── Check 8: Image rows carrying variant fields ────────────────────────────────

class TestMediaRowFields:
    def test_image_row_with_a_price(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Product image URL": "https://cdn.example.com/1.jpg"}),
            _variant(**{"Product image URL": "https://cdn.example.com/2.jpg"}),
        )
        hits = [i for i in issues if i.code == "shopify/image_row_has_variant_fields"]
        assert [(i.row_index, i.column) for i in hits] == [(1, "Product image URL")]
        assert "Price" in hits[0].message

    def test_variant_row_with_its_own_image(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 name": "Size", "Option1 value": "S",
                                     "Product image URL": "https://cdn.example.com/1.jpg"}),
            _variant(**{"Option1 value": "M", "Product image URL": "https://cdn.example.com/2.jpg"}),
        )
        assert _hits(issues, "shopify/image_row_has_variant_fields") == []


# ── Check 9: Variant data needs the first option ───────────────────────────────

class TestOptionForVariantData:
    def test_variant_rows_without_option1(self, check):
        _, issues = _run(check, _variant(title="Tee", SKU="TEE-S"), _variant(SKU="TEE-M"))
        hits = [i for i in issues if i.code == "shopify/missing_option1_for_variant_data"]
        assert [(i.row_index, i.column) for i in hits] == [
            (0, "Option1 name"),
            (0, "Option1 value"),
            (1, "Option1 value"),
        ]
        assert all(i.severity == "error" for i in hits)

    def test_single_row_product_needs_no_option(self, check, clean_product):
        _, issues = check(list(clean_product), [clean_product])
        assert _hits(issues, "shopify/missing_option1_for_variant_data") == []

    def test_one_variant_row_missing_its_value(self, check):
        _, issues = _run(
            check,
            _variant(title="Tee", **{"Option1 name": "Size", "Option1 value": "S"}),
            _variant(SKU="TEE-M"),
        )
        assert _hits(issues, "shopify/missing_option1_for_variant_data") == [(1, "Option1 value")]


# ── Media-only rows ────────────────────────────────────────────────────────────

class TestMediaOnlyRows:
    def test_image_row_is_not_a_variant(self, check):
        _, issues = check(
            ["Handle", "Title", "Price", "Image Src"],
            [
                {"Handle": "tee", "Title": "Tee", "Price": "10",
                 "Image Src": "https://cdn.example.com/1.jpg"},
                {"Handle": "tee", "Title": "", "Price": "",
                 "Image Src": "https://cdn.example.com/2.jpg"},
            ],
        )
        assert _row_issues(issues) == []

    def test_image_row_url_still_checked(self, check):
        _, issues = check(
            ["Handle", "Title", "Price", "Image Src"],
            [
                {"Handle": "tee", "Title": "Tee", "Price": "10",
                 "Image Src": "https://cdn.example.com/1.jpg"},
                {"Handle": "tee", "Title": "", "Price": "", "Image Src": "2.jpg"},
            ],
        )
        assert _hits(issues, "shopify/invalid_image_url") == [(1, "Product image URL")]

    def test_duplicate_image_position_includes_image_rows(self, check):
        _, issues = check(
            ["Handle", "Title", "Price", "Image Src", "Image position"],
            [
                {"Handle": "tee", "Title": "Tee", "Price": "10",
                 "Image Src": "https://cdn.example.com/1.jpg", "Image position": "1"},
                {"Handle": "tee", "Title": "", "Price": "",
                 "Image Src": "https://cdn.example.com/2.jpg", "Image position": "1"},
            ],
        )
        assert _hits(issues, "shopify/duplicate_image_position") == [(1, "Image position")]
