"""
Readiness summary and per-category score notes for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from ..common.constants import CATEGORIES, SEVERITY_ERROR, SEVERITY_WARNING
from ..models import BlockingGroup, Issue, ReadinessSummary, ValidationBreakdown
from ..registry import get_meta, is_blocking
from .scorer import infer_category


def compute_readiness_summary(issues: List[Issue], format_id: str) -> ReadinessSummary:
    """
    Group blocking errors by code.

    Groups are sorted by count (largest first); ties keep first-seen order.
    An issue counts as auto-fixable only if it is row-level and its
    metadata says so.
    """
    groups: Dict[str, BlockingGroup] = {}
    blocking_count = 0
    auto_fixable_count = 0

    for issue in issues:
        meta = get_meta(format_id, issue.code)
        if not is_blocking(issue.severity, meta):
            continue
        blocking_count += 1
        auto_fixable = bool(meta and meta.auto_fixable) and not issue.is_file_level
        if auto_fixable:
            auto_fixable_count += 1

        group = groups.get(issue.code)
        if group is None:
            groups[issue.code] = BlockingGroup(
                code=issue.code,
                title=meta.title if meta else issue.code,
                count=1,
                first_row_index=issue.row_index,
                auto_fixable_count=1 if auto_fixable else 0,
            )
            continue
        group.count += 1
        group.auto_fixable_count += 1 if auto_fixable else 0
        if group.first_row_index is None and issue.row_index is not None:
            group.first_row_index = issue.row_index

    return ReadinessSummary(
        ready=blocking_count == 0,
        blocking_count=blocking_count,
        auto_fixable_blocking_count=auto_fixable_count,
        blocking_groups=sorted(groups.values(), key=lambda g: -g.count),
    )


@dataclass
class ScoreNote:
    category: str
    label: str
    score: int
    note: str


def build_score_notes(breakdown: ValidationBreakdown, issues: List[Issue], format_id: str) -> List[ScoreNote]:
    """One short note per category, e.g. '2 blocking, 1 warnings'."""
    tallies = {category: {'blocking': 0, 'errors': 0, 'warnings': 0} for category in CATEGORIES}
    for issue in issues:
        meta = get_meta(format_id, issue.code)
        category = meta.category if meta is not None else infer_category(issue.column)
        tally = tallies.setdefault(category, {'blocking': 0, 'errors': 0, 'warnings': 0})
        if issue.severity == SEVERITY_ERROR:
            tally['errors'] += 1
            if is_blocking(issue.severity, meta):
                tally['blocking'] += 1
        elif issue.severity == SEVERITY_WARNING:
            tally['warnings'] += 1

    notes = []
    for category, tally in tallies.items():
        parts = []
        if tally['blocking']:
            parts.append(f"{tally['blocking']} blocking")
        if tally['errors'] and not tally['blocking']:
            parts.append(f"{tally['errors']} errors")
        if tally['warnings']:
            parts.append(f"{tally['warnings']} warnings")
        notes.append(ScoreNote(
            category=category,
            label=category.capitalize(),
            score=breakdown.categories.get(category, 100),
            note=', '.join(parts) if parts else 'No issues detected',
        ))
    return notes
