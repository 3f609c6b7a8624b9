"""
Validation context and issue accumulator.

One ValidationContext lives for one validation pass. It owns a private copy
of the rows (so rules can normalize tokens for later rules without touching
the caller's table), the media-only classification of every row and the
variant-group partition, each computed once and shared by all rules.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from ..common.exceptions import ConfigurationError
from ..common.text_utils import is_blank, value_key
from ..models import CanonicalTable, FormatRuleSet, Issue, RuleSpec

logger = logging.getLogger(__name__)


class IssueCollector:
    """
    Accumulates issues for one pass.

    Duplicates (same severity, code, row and column) are collapsed, keeping
    the first. File-level issues come first in the order they were reported,
    then row-level issues in row order; within a row, report order is kept.
    """

    def __init__(self) -> None:
        self._file_level: List[Issue] = []
        self._row_level: List[Issue] = []
        self._seen: set = set()

    def add(self, issue: Issue) -> bool:
        if issue.key in self._seen:
            return False
        self._seen.add(issue.key)
        if issue.is_file_level:
            self._file_level.append(issue)
        else:
            self._row_level.append(issue)
        return True

    def issues(self) -> List[Issue]:
        # sorted() is stable, so report order survives within a row
        return self._file_level + sorted(self._row_level, key=lambda issue: issue.row_index)

    def __len__(self) -> int:
        return len(self._file_level) + len(self._row_level)


class ValidationContext:
    """Shared state handed to every rule during one validation pass."""

    def __init__(self, table: CanonicalTable, rule_set: FormatRuleSet) -> None:
        self.table = table
        self.rule_set = rule_set
        self.rows: List[Dict[str, str]] = [dict(row) for row in table.rows]
        self.collector = IssueCollector()
        self.media_only: tuple = tuple(self._is_media_only(row) for row in self.rows)
        self._groups: Optional[List[List[int]]] = None
        self._leaders: Optional[set] = None
        self._members: Optional[Dict[int, List[int]]] = None

    # ── Cell access ──

    def value(self, row_index: int, column: str) -> str:
        """Raw cell value ('' when absent)."""
        return self.rows[row_index].get(column) or ''

    def text(self, row_index: int, column: str) -> str:
        """Trimmed cell value."""
        return self.value(row_index, column).strip()

    def column_supplied(self, column: str) -> bool:
        return self.table.column_supplied(column)

    def normalize(self, spec: RuleSpec, row_index: int, column: str, value: str) -> None:
        """Rewrite a cell for the rest of this pass. Only the rule's own columns may change."""
        if column not in spec.columns:
            raise ConfigurationError(
                f"Rule '{spec.rule}' tried to normalize column '{column}' "
                f"outside its declared columns {list(spec.columns)}",
                self.rule_set.format_id,
            )
        self.rows[row_index][column] = value

    # ── Row selection ──

    def row_indices(self, spec: RuleSpec, skip_media_only: bool = True) -> Iterator[int]:
        """Row indices a rule applies to. Media-only rows are skipped unless the rule opts in."""
        skip = skip_media_only and not spec.param('include_media_only', False)
        for index in range(len(self.rows)):
            if skip and self.media_only[index]:
                continue
            yield index

    def _is_media_only(self, row: Dict[str, str]) -> bool:
        settings = self.rule_set.media_only
        key = self.rule_set.grouping_key
        if settings is None or key is None:
            return False
        if is_blank(row.get(key)):
            return False
        if not any(not is_blank(row.get(col)) for col in settings.media_columns):
            return False
        return all(is_blank(row.get(col)) for col in settings.signal_columns)

    # ── Variant groups ──

    def group_key(self, row_index: int) -> str:
        key = self.rule_set.grouping_key
        return value_key(self.value(row_index, key)) if key else ''

    def groups(self, include_media_only: bool = False) -> List[List[int]]:
        """
        Row indices grouped by grouping key, in order of first appearance.

        Rows with a blank key belong to no group. Media-only rows are left out
        unless asked for.
        """
        if include_media_only:
            return self._partition(include_media_only=True)
        if self._groups is None:
            self._groups = self._partition(include_media_only=False)
        return self._groups

    def _partition(self, include_media_only: bool) -> List[List[int]]:
        if self.rule_set.grouping_key is None:
            return []
        partition: Dict[str, List[int]] = {}
        for index in range(len(self.rows)):
            if self.media_only[index] and not include_media_only:
                continue
            key = self.group_key(index)
            if key:
                partition.setdefault(key, []).append(index)
        return list(partition.values())

    def is_group_leader(self, row_index: int) -> bool:
        """True for the first non-media row of its group, and for ungrouped rows."""
        if self._leaders is None:
            self._leaders = {members[0] for members in self.groups()}
        if not self.group_key(row_index):
            return True
        return row_index in self._leaders

    def group_members(self, row_index: int) -> List[int]:
        """Non-media rows of this row's group; just the row itself when it has none."""
        if self._members is None:
            self._members = {m: members for members in self.groups() for m in members}
        return self._members.get(row_index, [row_index])

    # ── Reporting ──

    def report(
        self,
        spec: RuleSpec,
        slot: str,
        message: str,
        row_index: Optional[int] = None,
        column: Optional[str] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """Record an issue for one of the rule's outcome slots. Unconfigured slots are ignored."""
        outcome = spec.outcome(slot)
        if outcome is None:
            return
        self.collector.add(Issue(
            severity=outcome.severity,
            code=self.rule_set.code(outcome.name),
            message=message,
            row_index=row_index,
            column=column,
            suggestion=suggestion or outcome.suggestion,
        ))


def row_label(row_index: int) -> str:
    """1-based row label used in messages."""
    return f"Row {row_index + 1}"
