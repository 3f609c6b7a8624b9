"""
Auto-fix transforms.

Each transform takes a cell value and the parameters of the rule that
flagged it, and returns the corrected value, or None when the correct value
cannot be derived from the cell alone. A transform's output always passes
the rule that flagged the input, so fixing is idempotent.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from ..common.text_utils import clean_money
from ..common.tokens import resolve_boolean, resolve_vocabulary

# File-level fix for a missing required column, handled by the engine itself
ADD_COLUMN = 'add_column'

Transform = Callable[[str, Mapping[str, Any]], Optional[str]]


def fix_boolean(value: str, params: Mapping[str, Any]) -> Optional[str]:
    return resolve_boolean(value, params)


def fix_money(value: str, params: Mapping[str, Any]) -> Optional[str]:
    return clean_money(value)


def fix_vocabulary(value: str, params: Mapping[str, Any]) -> Optional[str]:
    return resolve_vocabulary(value, params)


TRANSFORMS: Dict[str, Transform] = {
    'boolean': fix_boolean,
    'money': fix_money,
    'vocabulary': fix_vocabulary,
}


def known_fix_names() -> set:
    return set(TRANSFORMS) | {ADD_COLUMN}
