"""
Deterministic auto-fixing.

Modules:
    transforms  - Cell transforms (boolean, money, vocabulary)
    auto_fix    - auto_fix(): applies transforms for blocking, auto-fixable errors
    fixes_log   - Grouping and plain-text rendering of fix messages
"""

from .auto_fix import auto_fix
from .fixes_log import FixGroup, classify_fix, generate_fixes_log_text, group_fixes_by_type
from .transforms import ADD_COLUMN, TRANSFORMS

__all__ = [
    'ADD_COLUMN',
    'FixGroup',
    'TRANSFORMS',
    'auto_fix',
    'classify_fix',
    'generate_fixes_log_text',
    'group_fixes_by_type',
]
