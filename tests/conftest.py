"""Shared test fixtures."""

import pytest

from preflight.schema import canonicalize, load_rule_set
from preflight.validation import validate


@pytest.fixture
def shopify():
    """The shipped Shopify product profile."""
    return load_rule_set("shopify")


@pytest.fixture
def ebay():
    """The shipped eBay one-listing-per-row profile."""
    return load_rule_set("ebay")


@pytest.fixture
def ebay_variations():
    """The shipped eBay variation-listing profile."""
    return load_rule_set("ebay_variations")


@pytest.fixture
def check():
    """Canonicalize and validate a raw table. Returns (table, issues)."""
    def _check(headers, rows, format_id="shopify"):
        rule_set = load_rule_set(format_id)
        table, _ = canonicalize(headers, rows, rule_set)
        return table, validate(table, rule_set)
    return _check


@pytest.fixture
def clean_product():
    """One Shopify product row that passes every check."""
    return {
        "Title": "Tee",
        "URL handle": "tee",
        "Vendor": "Acme",
        "Price": "10.00",
        "Product image URL": "https://cdn.example.com/tee.jpg",
    }
