"""
Rule registry.

Rule sets name their checks by string; this module maps those names to the
check functions and records what each check needs from its configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Tuple

from ...common.exceptions import ConfigurationError


@dataclass(frozen=True)
class RuleDefinition:
    name: str
    check: Callable
    slots: Tuple[str, ...]            # outcome slots the check may report
    required_slots: Tuple[str, ...]   # slots a rule set must configure
    column_params: Tuple[str, ...]    # params naming one or more columns
    needs_grouping: bool = False


_RULES: Dict[str, RuleDefinition] = {}


def rule(
    name: str,
    *,
    slots: Iterable[str],
    required: Iterable[str] | None = None,
    columns: Iterable[str] = ('column',),
    needs_grouping: bool = False,
) -> Callable:
    """Register a check function under ``name``."""
    slots = tuple(slots)

    def decorator(func: Callable) -> Callable:
        _RULES[name] = RuleDefinition(
            name=name,
            check=func,
            slots=slots,
            required_slots=tuple(required) if required is not None else slots[:1],
            column_params=tuple(columns),
            needs_grouping=needs_grouping,
        )
        return func

    return decorator


def get_rule_definition(name: str) -> RuleDefinition:
    try:
        return _RULES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown rule: {name}") from None


def list_rule_names() -> List[str]:
    return sorted(_RULES)


def columns_in(value: Any) -> List[str]:
    """Flatten a column param (a name, a list of names or a list of name pairs)."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    found: List[str] = []
    for item in value:
        found.extend(columns_in(item))
    return found
