"""
Data models for catalog preflight.

This module contains pure data classes with no business logic.
"""

from .issue import Issue, IssueMeta
from .results import (
    BlockingGroup,
    FixResult,
    IssueCounts,
    ReadinessSummary,
    ValidationBreakdown,
)
from .rule_set import FormatRuleSet, MediaOnlySettings, OutcomeSlot, RuleSpec
from .table import CanonicalizeDiagnostics, CanonicalTable

__all__ = [
    'BlockingGroup',
    'CanonicalTable',
    'CanonicalizeDiagnostics',
    'FixResult',
    'FormatRuleSet',
    'Issue',
    'IssueCounts',
    'IssueMeta',
    'MediaOnlySettings',
    'OutcomeSlot',
    'ReadinessSummary',
    'RuleSpec',
    'ValidationBreakdown',
]
