"""
Deterministic Auto-Fix Engine

Applies only fixes whose correct value follows from the cell itself:
boolean tokens, money formatting and controlled-vocabulary synonyms. Missing
required columns get an empty column so the table has the right shape; the
values themselves are never invented.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from ..common.constants import SEVERITY_ERROR
from ..models import CanonicalTable, FixResult, FormatRuleSet, Issue
from ..registry import get_meta
from .transforms import ADD_COLUMN, TRANSFORMS

logger = logging.getLogger(__name__)


def _add_column(table: CanonicalTable, column: str) -> bool:
    """Add (or mark as supplied) a blank column. Returns True if anything changed."""
    changed = False
    if column not in table.fixed_headers:
        table.fixed_headers.append(column)
        changed = True
    for row in table.rows:
        row.setdefault(column, '')
    if table.source_map.get(column) is None:
        table.source_map[column] = column
        changed = True
    return changed


def auto_fix(table: CanonicalTable, issues: List[Issue], rule_set: FormatRuleSet) -> FixResult:
    """
    Apply safe fixes for the given issues.

    Row-level issues are fixed only when they are errors whose metadata is
    both blocking and auto-fixable, using the transform named by the rule
    that reported them. Each cell gets at most one transform per pass.

    Args:
        table: Canonical table the issues were reported for (not modified)
        issues: Output of ``validate`` for that table
        rule_set: Format profile the table was validated against

    Returns:
        FixResult with the corrected headers and rows and a de-duplicated log
    """
    fixed = table.copy()
    log: Dict[str, None] = {}
    fixed_by_code: Dict[str, int] = {}
    auto_fixable_blocking = 0
    touched: set = set()

    for issue in issues:
        meta = get_meta(rule_set.format_id, issue.code)
        fixable = (
            issue.severity == SEVERITY_ERROR
            and meta is not None
            and meta.blocking
            and meta.auto_fixable
        )
        if fixable:
            auto_fixable_blocking += 1

        fix = rule_set.fix_for(issue.code)
        if fix is None:
            continue
        transform_name, spec = fix

        if transform_name == ADD_COLUMN:
            if issue.is_file_level and issue.column and _add_column(fixed, issue.column):
                log[f"Added missing required column: {issue.column}"] = None
                fixed_by_code[issue.code] = fixed_by_code.get(issue.code, 0) + 1
            continue

        if not fixable or issue.row_index is None or issue.column is None:
            continue
        if issue.row_index >= len(fixed.rows) or (issue.row_index, issue.column) in touched:
            continue

        row = fixed.rows[issue.row_index]
        old = row.get(issue.column, '')
        new = TRANSFORMS[transform_name](old, spec.params)
        if new is None or new == old:
            continue

        row[issue.column] = new
        touched.add((issue.row_index, issue.column))
        log[f"Row {issue.row_index + 1}: normalized {issue.column} → {new}"] = None
        fixed_by_code[issue.code] = fixed_by_code.get(issue.code, 0) + 1

    if log:
        logger.info("Applied %d fix(es) across %d code(s)", len(log), len(fixed_by_code))
    else:
        logger.debug("No auto-fixable issues to apply")

    return FixResult(
        fixed_headers=fixed.fixed_headers,
        fixed_rows=fixed.rows,
        fixes_applied=list(log),
        fixed_by_code=fixed_by_code,
        auto_fixable_blocking_found=auto_fixable_blocking,
        table=fixed,
    )
