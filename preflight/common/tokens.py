"""
Controlled-vocabulary helpers shared by validation rules and auto-fix transforms.

A rule and the transform that repairs its findings must agree on what a
token means, so both resolve values through these functions using the same
rule parameters.
"""

from typing import Any, Iterable, Mapping, Optional

DEFAULT_TRUE_SYNONYMS = ('yes', 'y', '1', 't', 'on')
DEFAULT_FALSE_SYNONYMS = ('no', 'n', '0', 'f', 'off')


def boolean_tokens(params: Mapping[str, Any]) -> tuple:
    """(true token, false token) configured for a boolean column."""
    return params.get('true_token', 'TRUE'), params.get('false_token', 'FALSE')


def match_boolean(value: str, params: Mapping[str, Any]) -> Optional[str]:
    """Canonical token if ``value`` is already one, ignoring case."""
    key = (value or '').strip().casefold()
    for token in boolean_tokens(params):
        if key == token.casefold():
            return token
    return None


def resolve_boolean(value: str, params: Mapping[str, Any]) -> Optional[str]:
    """
    Map a boolean-like value to the canonical token.

    Args:
        value: Cell value (e.g., 'yes', 'False', '0')
        params: Rule parameters (``true_token``, ``false_token``,
            ``true_synonyms``, ``false_synonyms``)

    Returns:
        The canonical token, or None if the value is not a known synonym
    """
    exact = match_boolean(value, params)
    if exact is not None:
        return exact
    key = (value or '').strip().casefold()
    true_token, false_token = boolean_tokens(params)
    if key in _folded(params.get('true_synonyms', DEFAULT_TRUE_SYNONYMS)):
        return true_token
    if key in _folded(params.get('false_synonyms', DEFAULT_FALSE_SYNONYMS)):
        return false_token
    return None


def match_vocabulary(value: str, params: Mapping[str, Any]) -> Optional[str]:
    """Accepted value equal to ``value`` ignoring case and surrounding space."""
    key = (value or '').strip().casefold()
    for accepted in params.get('accepted', ()):
        if key == str(accepted).casefold():
            return str(accepted)
    return None


def resolve_vocabulary(value: str, params: Mapping[str, Any]) -> Optional[str]:
    """Accepted value for ``value`` directly or through the ``synonyms`` map."""
    exact = match_vocabulary(value, params)
    if exact is not None:
        return exact
    key = (value or '').strip().casefold()
    for synonym, target in (params.get('synonyms') or {}).items():
        if key == str(synonym).casefold():
            return match_vocabulary(str(target), params)
    return None


def _folded(values: Iterable[Any]) -> set:
    return {str(v).casefold() for v in values}
