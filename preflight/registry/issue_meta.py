"""
Issue Metadata Registry

Static lookup from issue code to category, blocking/auto-fixable policy and
the explanatory text shown to users. Loaded once from
``config/issue_meta/*.yaml``:

- ``generic.yaml`` holds fallbacks keyed by code suffix, used for codes any
  format can emit (e.g. ``*/missing_required_column``)
- every other file lists the formats it covers and their issue entries
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional, Tuple

from ..common.config_loader import list_config_files, load_config
from ..common.constants import CATEGORIES, SEVERITY_ERROR
from ..common.exceptions import ConfigurationError
from ..models import IssueMeta

logger = logging.getLogger(__name__)

META_DIR = 'issue_meta'
GENERIC_FILE = f'{META_DIR}/generic.yaml'


def _split_code(code: str, format_id: str) -> Tuple[str, str]:
    if '/' in code:
        prefix, name = code.split('/', 1)
        return prefix, name
    return format_id, code


def _parse_entry(name: str, data: Mapping[str, Any], source: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ConfigurationError(f"{source}: entry '{name}' must be a mapping")
    category = data.get('category')
    if category not in CATEGORIES:
        raise ConfigurationError(f"{source}: entry '{name}' has unknown category '{category}'")
    for flag in ('blocking', 'auto_fixable'):
        if not isinstance(data.get(flag), bool):
            raise ConfigurationError(f"{source}: entry '{name}' needs a true/false '{flag}'")
    if not data.get('title'):
        raise ConfigurationError(f"{source}: entry '{name}' has no title")
    return {
        'category': category,
        'blocking': data['blocking'],
        'auto_fixable': data['auto_fixable'],
        'title': str(data['title']).strip(),
        'explanation': str(data.get('explanation', '')).strip(),
        'rationale': str(data.get('rationale', '')).strip(),
        'remedy': str(data.get('remedy', '')).strip(),
    }


@lru_cache(maxsize=1)
def _load_registry() -> Tuple[Dict[str, Dict[str, Any]], Dict[str, Dict[str, Dict[str, Any]]]]:
    """(generic entries by suffix, format entries by format id then code name)"""
    generic: Dict[str, Dict[str, Any]] = {}
    by_format: Dict[str, Dict[str, Dict[str, Any]]] = {}

    for filename in list_config_files(META_DIR):
        config = load_config(filename)
        entries = {
            str(name): _parse_entry(str(name), data, filename)
            for name, data in (config.get('issues') or {}).items()
        }
        if filename == GENERIC_FILE:
            generic.update(entries)
            continue
        formats = config.get('formats') or []
        if not formats:
            raise ConfigurationError(f"{filename}: no 'formats' listed")
        for format_id in formats:
            by_format.setdefault(format_id, {}).update(entries)

    logger.debug("Loaded issue metadata: %d generic, %s",
                 len(generic), {fid: len(entries) for fid, entries in by_format.items()})
    return generic, by_format


@lru_cache(maxsize=None)
def get_meta(format_id: str, code: str) -> Optional[IssueMeta]:
    """
    Look up metadata for an issue code.

    Exact (format, code) entries win; otherwise a generic entry whose key is
    the code name, or a suffix of it, is used.

    Args:
        format_id: Format the issue was reported for
        code: Full issue code (e.g., 'shopify/invalid_handle')

    Returns:
        IssueMeta, or None if nothing matches
    """
    generic, by_format = _load_registry()
    prefix, name = _split_code(code, format_id)

    entry = by_format.get(prefix, {}).get(name) if prefix == format_id else None
    if entry is None:
        entry = generic.get(name)
    if entry is None:
        entry = next(
            (data for suffix, data in generic.items() if name.endswith('_' + suffix)),
            None,
        )
    if entry is None:
        return None
    return IssueMeta(code=code, **entry)


def is_blocking(issue_severity: str, meta: Optional[IssueMeta]) -> bool:
    """Blocking applies to errors only; an error without metadata counts as blocking."""
    if issue_severity != SEVERITY_ERROR:
        return False
    return meta.blocking if meta is not None else True


def known_codes(format_id: str) -> list:
    """Code names with a format-specific entry."""
    _, by_format = _load_registry()
    return sorted(by_format.get(format_id, {}))
