"""
Format rule-set loader.

Builds immutable FormatRuleSet objects from ``config/formats/*.yaml`` and
checks them for configuration mistakes up front, so a bad profile fails at
load time instead of producing misleading issues.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from ..common.config_loader import list_config_files, load_config
from ..common.constants import CATEGORIES, SEVERITIES
from ..common.exceptions import ConfigurationError
from ..common.text_utils import header_key, normalize_header
from ..fixing.transforms import known_fix_names
from ..models import FormatRuleSet, MediaOnlySettings, OutcomeSlot, RuleSpec
from ..validation.rules import columns_in, get_rule_definition

logger = logging.getLogger(__name__)

FORMATS_DIR = 'formats'

# Column params a rule may leave out
_OPTIONAL_COLUMN_PARAMS = frozenset({'only_if_any', 'when_column'})


def _freeze(value: Any) -> Any:
    """Turn parsed YAML into read-only containers."""
    if isinstance(value, dict):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


@lru_cache(maxsize=1)
def _format_index() -> Dict[str, str]:
    """Map format id -> config file, from every file in the formats directory."""
    index: Dict[str, str] = {}
    for filename in list_config_files(FORMATS_DIR):
        format_id = load_config(filename).get('id')
        if not format_id:
            raise ConfigurationError(f"Format file {filename} has no 'id'")
        if format_id in index:
            raise ConfigurationError(
                f"Format id '{format_id}' is defined in both {index[format_id]} and {filename}"
            )
        index[format_id] = filename
    return index


def list_formats() -> List[Tuple[str, str]]:
    """
    List available format profiles.

    Returns:
        Sorted (format id, display name) pairs

    Example:
        [('ebay', 'eBay Listings'), ('shopify', 'Shopify Products'), ...]
    """
    return sorted((format_id, load_rule_set(format_id).name) for format_id in _format_index())


@lru_cache(maxsize=None)
def load_rule_set(format_id: str) -> FormatRuleSet:
    """
    Load a format profile by id.

    Args:
        format_id: Profile id (e.g., 'shopify')

    Returns:
        The immutable FormatRuleSet, cached for the life of the process

    Raises:
        ConfigurationError: If the id is unknown or the profile is inconsistent
    """
    index = _format_index()
    if format_id not in index:
        known = ', '.join(sorted(index)) or 'none'
        raise ConfigurationError(f"Unknown format '{format_id}' (available: {known})", format_id)

    rule_set = build_rule_set(load_config(index[format_id]))
    logger.debug("Loaded format '%s' with %d headers and %d rules",
                 format_id, len(rule_set.canonical_headers), len(rule_set.rules))
    return rule_set


def build_rule_set(config: Mapping[str, Any]) -> FormatRuleSet:
    """Build and check a FormatRuleSet from a parsed profile mapping."""
    format_id = config.get('id')
    if not format_id:
        raise ConfigurationError("Format profile has no 'id'")

    headers, aliases = _parse_headers(format_id, config.get('headers') or [])
    known = set(headers)

    def check_columns(columns: List[str], where: str) -> None:
        for column in columns:
            if column not in known:
                raise ConfigurationError(
                    f"{where} refers to unknown column '{column}'", format_id
                )

    required = tuple(config.get('required_fields') or ())
    recommended = tuple(config.get('recommended_fields') or ())
    check_columns(list(required), 'required_fields')
    check_columns(list(recommended), 'recommended_fields')

    grouping_key = config.get('grouping_key')
    identifier = config.get('identifier')
    check_columns([c for c in (grouping_key, identifier) if c], 'grouping_key/identifier')

    media_only = None
    if config.get('media_only'):
        media_cfg = config['media_only']
        media_only = MediaOnlySettings(
            media_columns=tuple(media_cfg.get('media_columns') or ()),
            signal_columns=tuple(media_cfg.get('signal_columns') or ()),
        )
        check_columns(list(media_only.media_columns + media_only.signal_columns), 'media_only')

    rules = tuple(
        _parse_rule(format_id, position, entry, grouping_key, check_columns)
        for position, entry in enumerate(config.get('rules') or [], start=1)
    )
    _check_fix_conflicts(format_id, rules)

    return FormatRuleSet(
        format_id=format_id,
        name=config.get('name', format_id),
        description=config.get('description', ''),
        canonical_headers=tuple(headers),
        aliases=MappingProxyType(aliases),
        required_fields=required,
        recommended_fields=recommended,
        grouping_key=grouping_key,
        identifier=identifier,
        media_only=media_only,
        rules=rules,
        category_weights=_normalize_weights(format_id, config.get('category_weights') or {}),
    )


def _parse_headers(format_id: str, entries: List[Any]) -> Tuple[List[str], Dict[str, Tuple[str, ...]]]:
    headers: List[str] = []
    aliases: Dict[str, Tuple[str, ...]] = {}
    owner: Dict[str, str] = {}

    for entry in entries:
        if isinstance(entry, str):
            entry = {'name': entry}
        name = normalize_header(entry.get('name'))
        if not name:
            raise ConfigurationError("Header entry without a name", format_id)
        if name in aliases:
            raise ConfigurationError(f"Header '{name}' is listed twice", format_id)

        spellings = [name] + [normalize_header(a) for a in entry.get('aliases') or []]
        ordered: List[str] = []
        for spelling in spellings:
            key = header_key(spelling)
            if key in owner and owner[key] != name:
                raise ConfigurationError(
                    f"Alias '{spelling}' is claimed by both '{owner[key]}' and '{name}'", format_id
                )
            if key not in owner:
                owner[key] = name
                ordered.append(spelling)
        headers.append(name)
        aliases[name] = tuple(ordered)

    if not headers:
        raise ConfigurationError("Format profile defines no headers", format_id)
    return headers, aliases


def _parse_rule(format_id, position, entry, grouping_key, check_columns) -> RuleSpec:
    where = f"Rule {position}"
    if not isinstance(entry, dict) or 'rule' not in entry:
        raise ConfigurationError(f"{where} has no 'rule' name", format_id)

    definition = get_rule_definition(entry['rule'])
    where = f"Rule {position} ({definition.name})"
    if definition.needs_grouping and not grouping_key:
        raise ConfigurationError(f"{where} needs a grouping_key", format_id)

    params = {key: value for key, value in entry.items() if key not in ('rule', 'outcomes')}

    columns: List[str] = []
    for param in definition.column_params:
        if param not in params:
            if param in _OPTIONAL_COLUMN_PARAMS:
                continue
            raise ConfigurationError(f"{where} is missing '{param}'", format_id)
        columns.extend(columns_in(params[param]))
    check_columns(columns, where)

    if 'regex' in params:
        try:
            re.compile(params['regex'])
        except re.error as exc:
            raise ConfigurationError(f"{where} has an invalid regex: {exc}", format_id) from exc

    outcomes: Dict[str, OutcomeSlot] = {}
    for slot, outcome in (entry.get('outcomes') or {}).items():
        if slot not in definition.slots:
            raise ConfigurationError(
                f"{where} has no outcome '{slot}' (expected one of {list(definition.slots)})", format_id
            )
        if not isinstance(outcome, dict):
            raise ConfigurationError(f"{where} outcome '{slot}' must be a mapping", format_id)
        name = str(outcome.get('code', '')).strip()
        if not name or '/' in name:
            raise ConfigurationError(f"{where} outcome '{slot}' needs a plain 'code'", format_id)
        severity = outcome.get('severity')
        if severity not in SEVERITIES:
            raise ConfigurationError(f"{where} outcome '{slot}' has invalid severity '{severity}'", format_id)
        fix = outcome.get('fix')
        if fix is not None and fix not in known_fix_names():
            raise ConfigurationError(f"{where} outcome '{slot}' uses unknown fix '{fix}'", format_id)
        outcomes[slot] = OutcomeSlot(
            name=name,
            severity=severity,
            fix=fix,
            suggestion=outcome.get('suggestion', ''),
        )

    for slot in definition.required_slots:
        if slot not in outcomes:
            raise ConfigurationError(f"{where} must configure outcome '{slot}'", format_id)

    return RuleSpec(
        rule=definition.name,
        params=_freeze(params),
        outcomes=MappingProxyType(outcomes),
        columns=tuple(dict.fromkeys(columns)),
    )


def _check_fix_conflicts(format_id: str, rules: Tuple[RuleSpec, ...]) -> None:
    fixes: Dict[str, str] = {}
    for spec in rules:
        for slot in spec.outcomes.values():
            if not slot.fix:
                continue
            if fixes.setdefault(slot.name, slot.fix) != slot.fix:
                raise ConfigurationError(
                    f"Code '{slot.name}' is fixed by both '{fixes[slot.name]}' and '{slot.fix}'",
                    format_id,
                )


def _normalize_weights(format_id: str, weights: Mapping[str, Any]) -> Mapping[str, float]:
    for category, weight in weights.items():
        if category not in CATEGORIES:
            raise ConfigurationError(f"Unknown category '{category}' in category_weights", format_id)
        if not isinstance(weight, (int, float)) or weight < 0:
            raise ConfigurationError(f"Weight for '{category}' must be a non-negative number", format_id)

    total = float(sum(weights.values()))
    if total <= 0:
        raise ConfigurationError("category_weights must contain a positive weight", format_id)
    return MappingProxyType({category: weight / total for category, weight in weights.items() if weight > 0})
