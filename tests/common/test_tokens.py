"""Tests for preflight/common/tokens.py"""

from preflight.common.tokens import (
    match_boolean,
    match_vocabulary,
    resolve_boolean,
    resolve_vocabulary,
)

STATUS = {
    "accepted": ["active", "draft", "archived"],
    "synonyms": {"enabled": "active", "hidden": "draft", "broken": "bogus"},
}


class TestBooleanTokens:
    def test_exact_token_any_case(self):
        assert match_boolean("true", {}) == "TRUE"
        assert match_boolean(" False ", {}) == "FALSE"

    def test_synonym_is_not_an_exact_match(self):
        assert match_boolean("yes", {}) is None

    def test_default_synonyms(self):
        assert resolve_boolean("yes", {}) == "TRUE"
        assert resolve_boolean("Off", {}) == "FALSE"
        assert resolve_boolean("0", {}) == "FALSE"

    def test_unknown_value(self):
        assert resolve_boolean("maybe", {}) is None

    def test_custom_tokens(self):
        params = {"true_token": "Yes", "false_token": "No"}
        assert match_boolean("yes", params) == "Yes"
        assert resolve_boolean("1", params) == "Yes"

    def test_custom_synonyms_replace_defaults(self):
        params = {"true_synonyms": ["si"], "false_synonyms": []}
        assert resolve_boolean("si", params) == "TRUE"
        assert resolve_boolean("yes", params) is None


class TestVocabulary:
    def test_match_ignores_case(self):
        assert match_vocabulary("DRAFT", STATUS) == "draft"

    def test_synonym_resolves(self):
        assert resolve_vocabulary("Enabled", STATUS) == "active"

    def test_synonym_to_unaccepted_value_is_ignored(self):
        assert resolve_vocabulary("broken", STATUS) is None

    def test_unknown_value(self):
        assert resolve_vocabulary("deleted", STATUS) is None

    def test_no_synonyms_configured(self):
        assert resolve_vocabulary("ACTIVE", {"accepted": ["active"]}) == "active"
