"""
Schema Canonicalizer

Maps arbitrary input headers onto the canonical headers of a format.

- Each canonical header takes its value from the first alias found in the
  input, in alias priority order, so the result does not depend on input
  column order.
- Input headers the format does not know are kept verbatim after the
  canonical headers. So are headers that lost an alias collision, and
  headers repeating an earlier one up to case or spacing (renamed
  ``Notes (2)``), so no value is ever dropped.
- The raw input is never modified.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..common.text_utils import header_key, normalize_header
from ..models import CanonicalizeDiagnostics, CanonicalTable, FormatRuleSet

logger = logging.getLogger(__name__)


def _cell(value) -> str:
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        return ', '.join('' if v is None else str(v) for v in value)
    return str(value)


def _unique_name(base: str, taken: set) -> str:
    name, suffix = base, 2
    while header_key(name) in taken:
        name = f"{base} ({suffix})"
        suffix += 1
    return name


def canonicalize(
    headers: Sequence[Optional[str]],
    rows: Iterable[Mapping[Optional[str], object]],
    rule_set: FormatRuleSet,
) -> Tuple[CanonicalTable, CanonicalizeDiagnostics]:
    """
    Map a raw table onto a format's canonical schema.

    Args:
        headers: Input header row, in file order
        rows: Input rows keyed by the raw header text
        rule_set: Target format profile

    Returns:
        (CanonicalTable, CanonicalizeDiagnostics)
    """
    diagnostics = CanonicalizeDiagnostics()
    rows = list(rows)

    # ── Normalize input headers; every distinct raw header becomes one input column ──
    # normalized name -> raw header it reads from
    inputs: Dict[str, Optional[str]] = {}
    by_key: Dict[str, str] = {}
    taken: set = set()
    for position, raw in enumerate(headers, start=1):
        name = normalize_header(raw)
        if not name:
            name = _unique_name(f"Column {position}", taken)
            diagnostics.renamed_blank_headers.append((position, name))
        key = header_key(name)
        if key in by_key:
            first = by_key[key]
            if first not in diagnostics.duplicate_input_headers:
                diagnostics.duplicate_input_headers.append(first)
            if raw in inputs.values():
                # The exact same header again reads the same cell
                continue
            name = _unique_name(first, taken)
            key = header_key(name)
            logger.warning("Header '%s' repeats '%s'; kept as '%s'", raw, first, name)
        by_key[key] = name
        taken.add(key)
        inputs[name] = raw

    # ── Resolve canonical headers through their aliases ──
    source_map: Dict[str, Optional[str]] = {}
    consumed: set = set()
    for canonical in rule_set.canonical_headers:
        matches = []
        for alias in rule_set.aliases.get(canonical, (canonical,)):
            found = by_key.get(header_key(alias))
            if found is not None and found not in matches:
                matches.append(found)
        source_map[canonical] = matches[0] if matches else None
        if matches:
            consumed.add(matches[0])
        if len(matches) > 1:
            diagnostics.alias_collisions.append((canonical, matches))
            logger.warning("Columns %s all map to '%s'; using '%s'",
                           ", ".join(f"'{m}'" for m in matches), canonical, matches[0])

    # ── Everything not consumed is kept after the canonical headers ──
    taken_output = {header_key(h) for h in rule_set.canonical_headers}
    # output header -> normalized input header it reads from
    extra_sources: Dict[str, str] = {}
    for name in inputs:
        if name in consumed:
            continue
        output_name = _unique_name(name, taken_output)
        taken_output.add(header_key(output_name))
        extra_sources[output_name] = name
    unknown = list(extra_sources)

    # Row keys that never appeared in the header row
    known_raw = set(inputs.values())
    stray: List[str] = []
    for row in rows:
        for key in row:
            if key in known_raw or key in stray or key is None:
                continue
            stray.append(key)
    stray_names: Dict[object, str] = {}
    for key in stray:
        stray_names[key] = _unique_name(normalize_header(str(key)) or "Column", taken_output)
        taken_output.add(header_key(stray_names[key]))
    if any(None in row for row in rows):
        stray_names[None] = _unique_name("Extra values", taken_output)

    fixed_headers = list(rule_set.canonical_headers) + unknown + list(stray_names.values())
    seen_output: set = set()
    for header in fixed_headers:
        if header in seen_output:
            diagnostics.duplicate_output_headers.append(header)
        seen_output.add(header)
    if diagnostics.duplicate_output_headers:
        logger.error("Internal error: duplicate output headers %s", diagnostics.duplicate_output_headers)
        fixed_headers = list(dict.fromkeys(fixed_headers))

    # ── Build rows ──
    def read(row: Mapping, raw: Optional[str]) -> str:
        return _cell(row.get(raw))

    out_rows: List[Dict[str, str]] = []
    for row in rows:
        out = {header: '' for header in fixed_headers}
        for canonical, source in source_map.items():
            if source is not None:
                out[canonical] = read(row, inputs[source])
        for name, source in extra_sources.items():
            out[name] = read(row, inputs[source])
        for key, name in stray_names.items():
            if key in row:
                out[name] = _cell(row[key])
        out_rows.append(out)

    table = CanonicalTable(
        format_id=rule_set.format_id,
        fixed_headers=fixed_headers,
        rows=out_rows,
        source_map=source_map,
        unknown_headers=unknown + list(stray_names.values()),
    )
    logger.debug("Canonicalized %d row(s) for '%s': %d mapped, %d unknown column(s)",
                 len(out_rows), rule_set.format_id,
                 sum(1 for s in source_map.values() if s), len(table.unknown_headers))
    return table, diagnostics
