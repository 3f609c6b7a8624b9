"""
Issue data models.

An Issue is one problem found in a table; IssueMeta is the static
description of an issue code shared by every Issue carrying it.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Issue:
    """A single validation finding."""
    severity: str                   # error | warning | info
    code: str                       # "<format_id>/<name>"
    message: str
    row_index: Optional[int] = None  # 0-based; None means file-level
    column: Optional[str] = None
    suggestion: str = ""

    @property
    def key(self) -> Tuple[str, str, Optional[int], Optional[str]]:
        """Identity used to collapse duplicates within one validation pass."""
        return (self.severity, self.code, self.row_index, self.column)

    @property
    def is_file_level(self) -> bool:
        return self.row_index is None

    @property
    def name(self) -> str:
        """Code without the format prefix."""
        return self.code.rsplit("/", 1)[-1]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class IssueMeta:
    """Static metadata describing an issue code."""
    code: str
    category: str
    blocking: bool          # prevents a successful import
    auto_fixable: bool      # the corrected value is derivable from the cell alone
    title: str
    explanation: str = ""
    rationale: str = ""     # why the marketplace cares
    remedy: str = ""        # how to fix it by hand

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
