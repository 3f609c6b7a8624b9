"""
Result data models returned by the fixer and the scorer.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .table import CanonicalTable


@dataclass
class FixResult:
    """Outcome of one auto-fix pass."""
    fixed_headers: List[str] = field(default_factory=list)
    fixed_rows: List[Dict[str, str]] = field(default_factory=list)
    fixes_applied: List[str] = field(default_factory=list)      # de-duplicated log lines
    fixed_by_code: Dict[str, int] = field(default_factory=dict)
    auto_fixable_blocking_found: int = 0
    # The corrected table, ready to validate again
    table: Optional[CanonicalTable] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fixed_headers": list(self.fixed_headers),
            "fixes_applied": list(self.fixes_applied),
            "fixed_by_code": dict(self.fixed_by_code),
            "auto_fixable_blocking_found": self.auto_fixable_blocking_found,
        }


@dataclass
class IssueCounts:
    errors: int = 0
    warnings: int = 0
    infos: int = 0
    blocking_errors: int = 0


@dataclass
class ValidationBreakdown:
    """Weighted readiness score for a validated table."""
    score: int = 100
    categories: Dict[str, int] = field(default_factory=dict)
    counts: IssueCounts = field(default_factory=IssueCounts)
    ready: bool = True
    label: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BlockingGroup:
    """Blocking issues sharing one code, for display."""
    code: str
    title: str
    count: int
    first_row_index: Optional[int]
    auto_fixable_count: int


@dataclass
class ReadinessSummary:
    ready: bool
    blocking_count: int
    auto_fixable_blocking_count: int
    blocking_groups: List[BlockingGroup] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
