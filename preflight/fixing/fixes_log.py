"""
Fix log

Groups auto-fix messages by kind of change and renders them as a plain-text
log that can be saved next to the corrected file.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

# (keywords, label), first match wins
_FIX_TYPES = (
    (('added missing', 'column:'), 'Added columns'),
    (('handle',), 'URL handle'),
    (('published', 'charge tax', 'requires shipping', 'gift card'), 'Boolean fields'),
    (('status', 'action', 'format', 'duration'), 'Status / listing settings'),
    (('price', 'cost per item'), 'Price fields'),
    (('inventory', 'quantity', 'continue selling'), 'Inventory'),
    (('option', 'variation'), 'Options / variants'),
    (('weight', 'shipping', 'dispatch'), 'Weight / shipping'),
    (('image', 'picture'), 'Images'),
)


@dataclass
class FixGroup:
    type: str
    count: int
    sample: str     # first message of this type


def classify_fix(message: str) -> str:
    """Short label for the kind of change a fix message describes."""
    text = message.lower()
    for keywords, label in _FIX_TYPES:
        if any(keyword in text for keyword in keywords):
            return label
    return 'Other normalization'


def group_fixes_by_type(fixes: List[str]) -> List[FixGroup]:
    """Group fix messages by type, largest group first, then alphabetical."""
    groups: dict = {}
    for message in fixes:
        label = classify_fix(message)
        if label in groups:
            groups[label].count += 1
        else:
            groups[label] = FixGroup(type=label, count=1, sample=message)
    return sorted(groups.values(), key=lambda g: (-g.count, g.type))


def generate_fixes_log_text(
    fixes: List[str],
    file_name: Optional[str] = None,
    format_id: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Render a plain-text fix log.

    Args:
        fixes: Messages from FixResult.fixes_applied
        file_name: Source file name for the header
        format_id: Format profile id for the header
        generated_at: Timestamp for the header (default: now, UTC)

    Returns:
        Log text ending with a newline
    """
    when = (generated_at or datetime.now(timezone.utc)).isoformat(timespec='seconds')
    lines = [
        "=== Auto Fix Log ===",
        f"Date:     {when}",
        f"File:     {file_name or 'unknown'}",
        f"Format:   {format_id or 'unknown'}",
        f"Actions:  {len(fixes)}",
        "",
        "--- Summary by type ---",
    ]
    lines += [f"  {group.count:>4}x  {group.type}" for group in group_fixes_by_type(fixes)]
    lines += ["", "--- Full action list ---"]
    lines += [f"{number:>5}.  {message}" for number, message in enumerate(fixes, start=1)]
    return "\n".join(lines) + "\n"
