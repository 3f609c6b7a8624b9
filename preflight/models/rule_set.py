"""
Format profile models.

A FormatRuleSet describes one target marketplace file: its canonical
headers, accepted header spellings, required fields and the ordered list of
validation rules. Instances are built by ``preflight.schema.rule_sets`` and
never change afterwards.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class OutcomeSlot:
    """One kind of finding a rule can report, e.g. a rule's ``invalid`` case."""
    name: str               # code without the format prefix
    severity: str
    fix: Optional[str] = None   # auto-fix transform name
    suggestion: str = ""


@dataclass(frozen=True)
class RuleSpec:
    """A configured rule: which check to run, on what, reporting which codes."""
    rule: str
    params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    outcomes: Mapping[str, OutcomeSlot] = field(default_factory=lambda: MappingProxyType({}))
    # Columns this rule reads and may normalize
    columns: Tuple[str, ...] = ()

    def param(self, key: str, default: Any = None) -> Any:
        return self.params.get(key, default)

    def outcome(self, slot: str) -> Optional[OutcomeSlot]:
        return self.outcomes.get(slot)


@dataclass(frozen=True)
class MediaOnlySettings:
    """How to recognise rows that only attach extra media to a product."""
    media_columns: Tuple[str, ...]
    signal_columns: Tuple[str, ...]


@dataclass(frozen=True)
class FormatRuleSet:
    """Immutable description of a target marketplace format."""
    format_id: str
    name: str
    canonical_headers: Tuple[str, ...]
    # Canonical header -> accepted source spellings, highest priority first
    aliases: Mapping[str, Tuple[str, ...]]
    required_fields: Tuple[str, ...] = ()
    recommended_fields: Tuple[str, ...] = ()
    grouping_key: Optional[str] = None
    identifier: Optional[str] = None
    media_only: Optional[MediaOnlySettings] = None
    rules: Tuple[RuleSpec, ...] = ()
    # Normalized so the weights sum to 1
    category_weights: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    description: str = ""

    def code(self, name: str) -> str:
        """Full issue code for a code name in this format."""
        return f"{self.format_id}/{name}"

    def emittable_codes(self) -> List[Tuple[str, str]]:
        """(code, severity) pairs any configured rule can report, in rule order."""
        seen: Dict[Tuple[str, str], None] = {}
        for spec in self.rules:
            for slot in spec.outcomes.values():
                seen[(self.code(slot.name), slot.severity)] = None
        return list(seen)

    def fix_for(self, code: str) -> Optional[Tuple[str, RuleSpec]]:
        """(transform name, rule) for the rule slot that reports ``code`` with a fix."""
        for spec in self.rules:
            for slot in spec.outcomes.values():
                if slot.fix and self.code(slot.name) == code:
                    return slot.fix, spec
        return None
