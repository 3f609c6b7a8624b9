"""
Validation of canonical tables.

Modules:
    context    - Per-pass state (row copy, media-only rows, variant groups) and issue accumulator
    validator  - validate(): runs a format's ordered rules
    rules      - Registered row, group and file-level checks
"""

from .context import IssueCollector, ValidationContext
from .validator import validate

__all__ = ['IssueCollector', 'ValidationContext', 'validate']
