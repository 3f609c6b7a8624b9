"""
Table data models.

Pure data classes for a catalog table mapped onto a format profile.
No business logic - only data structure definitions.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass
class CanonicalTable:
    """
    A catalog table mapped onto the canonical headers of one format.

    Every row carries a value (possibly an empty string) for every header in
    ``fixed_headers``. Canonical headers come first in profile order, then
    any input headers the profile does not know, in input order.
    """

    format_id: str
    fixed_headers: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)
    # Canonical header -> input header it was read from (None if the input lacked it)
    source_map: Dict[str, Optional[str]] = field(default_factory=dict)
    unknown_headers: List[str] = field(default_factory=list)

    def column_supplied(self, header: str) -> bool:
        """True if the input provided this column (unknown headers always were)."""
        if header in self.source_map:
            return self.source_map[header] is not None
        return header in self.fixed_headers

    def copy(self) -> "CanonicalTable":
        return CanonicalTable(
            format_id=self.format_id,
            fixed_headers=list(self.fixed_headers),
            rows=[dict(row) for row in self.rows],
            source_map=dict(self.source_map),
            unknown_headers=list(self.unknown_headers),
        )


@dataclass
class CanonicalizeDiagnostics:
    """Header problems found while canonicalizing. Never user-facing issues."""

    duplicate_input_headers: List[str] = field(default_factory=list)
    # (canonical header, input headers that all resolve to it; first one wins)
    alias_collisions: List[Tuple[str, List[str]]] = field(default_factory=list)
    # (input position, name given to the blank header)
    renamed_blank_headers: List[Tuple[int, str]] = field(default_factory=list)
    duplicate_output_headers: List[str] = field(default_factory=list)

    @property
    def has_problems(self) -> bool:
        return bool(
            self.duplicate_input_headers
            or self.alias_collisions
            or self.renamed_blank_headers
            or self.duplicate_output_headers
        )
