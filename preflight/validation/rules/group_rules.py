"""
Variant-group rules.

Rows sharing a grouping key (e.g. a Shopify URL handle) form one product.
These checks look across the rows of a group, and across the table for
identifier duplicates.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from ...common.text_utils import is_blank, is_plain_integer, value_key
from ...models import RuleSpec
from ..context import ValidationContext, row_label
from .registry import rule


def _rows_text(members: Sequence[int]) -> str:
    return ', '.join(str(m + 1) for m in members)


def _looks_like_variants(ctx: ValidationContext, members: Sequence[int], option_values: Sequence[str]) -> bool:
    """A group is variant-like if any row has option values or it has distinct identifiers."""
    if any(not is_blank(ctx.value(m, col)) for m in members for col in option_values):
        return True
    identifier = ctx.rule_set.identifier
    if identifier is None:
        return False
    identifiers = {value_key(ctx.value(m, identifier)) for m in members} - {''}
    return len(identifiers) >= 2


# ── Check 1: Duplicate grouping key ──

@rule('duplicate_group_key', slots=('duplicate',), columns=('option_values',), needs_grouping=True)
def check_duplicate_group_key(ctx: ValidationContext, spec: RuleSpec) -> None:
    key_column = ctx.rule_set.grouping_key
    option_values = spec.param('option_values') or ()

    for members in ctx.groups():
        if len(members) < 2 or _looks_like_variants(ctx, members, option_values):
            continue
        display = ctx.text(members[0], key_column)
        for m in members:
            ctx.report(
                spec, 'duplicate',
                f'{row_label(m)}: "{key_column}" value "{display}" repeats on rows '
                f'{_rows_text(members)}, but the rows are not variants '
                f'(no option values or distinct identifiers)',
                row_index=m, column=key_column,
                suggestion=f'Give each product its own "{key_column}", or add option values',
            )


# ── Check 2: Option combinations ──

@rule('unique_option_tuples', slots=('duplicate',), columns=('option_values',), needs_grouping=True)
def check_unique_option_tuples(ctx: ValidationContext, spec: RuleSpec) -> None:
    """
    Within a variant-like group, each option combination may appear once.

    With ``ignore_incomplete`` rows missing any of the values are left to
    the presence checks.
    """
    key_column = ctx.rule_set.grouping_key
    option_values = spec.param('option_values')
    ignore_incomplete = spec.param('ignore_incomplete', False)

    for members in ctx.groups():
        if len(members) < 2 or not _looks_like_variants(ctx, members, option_values):
            continue
        by_tuple: Dict[Tuple[str, ...], List[int]] = {}
        for m in members:
            combo = tuple(value_key(ctx.value(m, col)) for col in option_values)
            if ignore_incomplete and '' in combo:
                continue
            by_tuple.setdefault(combo, []).append(m)

        display_key = ctx.text(members[0], key_column)
        for rows in by_tuple.values():
            if len(rows) < 2:
                continue
            shown = ' / '.join(ctx.text(rows[0], col) for col in option_values if ctx.text(rows[0], col))
            for m in rows:
                ctx.report(
                    spec, 'duplicate',
                    f'{row_label(m)}: option combination "{shown or "(blank)"}" repeats '
                    f'within "{display_key}" on rows {_rows_text(rows)}',
                    row_index=m, column=option_values[0],
                    suggestion='Give each variant a distinct combination of option values',
                )


# ── Check 3: Option fill order ──

@rule('option_fill_order', slots=('out_of_order',), columns=('options',))
def check_option_fill_order(ctx: ValidationContext, spec: RuleSpec) -> None:
    """Option columns fill left to right: Option2 needs Option1, Option3 needs Option2."""
    options = spec.param('options')
    for i in ctx.row_indices(spec):
        filled = [
            not is_blank(ctx.value(i, name_col)) or not is_blank(ctx.value(i, value_col))
            for name_col, value_col in options
        ]
        for position in range(1, len(options)):
            if filled[position] and not filled[position - 1]:
                ctx.report(
                    spec, 'out_of_order',
                    f'{row_label(i)}: "{options[position][0]}" is used but '
                    f'"{options[position - 1][0]}" is empty',
                    row_index=i, column=options[position][1],
                    suggestion='Move option values into the lowest free option columns',
                )
                break


# ── Check 4: Shared product fields ──

@rule('shared_fields', slots=('mismatch',), columns=('fields',), needs_grouping=True)
def check_shared_fields(ctx: ValidationContext, spec: RuleSpec) -> None:
    """Product-level fields repeated on variant rows must match the first non-blank value."""
    for members in ctx.groups():
        if len(members) < 2:
            continue
        for field in spec.param('fields'):
            first_row, first_value = None, ''
            for m in members:
                value = ctx.text(m, field)
                if not value:
                    continue
                if first_row is None:
                    first_row, first_value = m, value
                elif value_key(value) != value_key(first_value):
                    ctx.report(
                        spec, 'mismatch',
                        f'{row_label(m)}: "{field}" is "{value}" but {row_label(first_row).lower()} '
                        f'of the same product has "{first_value}"',
                        row_index=m, column=field,
                        suggestion=f'Use "{first_value}" or leave it blank on variant rows',
                    )


# ── Check 5: Identifier uniqueness ──

@rule('identifier_uniqueness', slots=('within_group', 'across_table'), required=('across_table',))
def check_identifier_uniqueness(ctx: ValidationContext, spec: RuleSpec) -> None:
    """
    Identifiers (SKUs) should be unique.

    A repeat inside one product is reported as ``within_group``; a repeat in
    another product (or, without grouping, on another row) as ``across_table``.
    """
    column = spec.param('column')
    by_identifier: Dict[str, List[int]] = {}
    for i in ctx.row_indices(spec):
        key = value_key(ctx.value(i, column))
        if key:
            by_identifier.setdefault(key, []).append(i)

    def group_of(index: int) -> str:
        # Ungrouped rows are their own product
        return ctx.group_key(index) or f'\0{index}'

    for rows in by_identifier.values():
        if len(rows) < 2:
            continue
        shown = ctx.text(rows[0], column)
        for m in rows:
            same = [o for o in rows if o != m and group_of(o) == group_of(m)]
            other = [o for o in rows if group_of(o) != group_of(m)]
            if same:
                ctx.report(
                    spec, 'within_group',
                    f'{row_label(m)}: "{column}" "{shown}" is repeated within the same product '
                    f'(rows {_rows_text(sorted(same + [m]))})',
                    row_index=m, column=column,
                    suggestion=f'Give each variant its own "{column}"',
                )
            if other:
                ctx.report(
                    spec, 'across_table',
                    f'{row_label(m)}: "{column}" "{shown}" is also used on rows {_rows_text(other)}',
                    row_index=m, column=column,
                    suggestion=f'Make "{column}" unique across the file',
                )


# ── Check 6: Image positions ──

@rule('duplicate_image_position', slots=('duplicate',), needs_grouping=True)
def check_duplicate_image_position(ctx: ValidationContext, spec: RuleSpec) -> None:
    """Whole-number image positions should not repeat within one product, media rows included."""
    column = spec.param('column')
    for members in ctx.groups(include_media_only=True):
        seen: Dict[str, int] = {}
        for m in members:
            position = ctx.text(m, column)
            if not position or not is_plain_integer(position):
                continue
            if position in seen:
                ctx.report(
                    spec, 'duplicate',
                    f'{row_label(m)}: "{column}" {position} is already used on '
                    f'{row_label(seen[position]).lower()} of the same product',
                    row_index=m, column=column,
                    suggestion='Number images 1, 2, 3... within each product',
                )
            else:
                seen[position] = m


# ── Check 7: Placeholder option value ──

@rule('placeholder_option_mix', slots=('mixed',), columns=('option_values',), needs_grouping=True)
def check_placeholder_option_mix(ctx: ValidationContext, spec: RuleSpec) -> None:
    """
    A product either has one placeholder variant (Shopify's "Default Title")
    or real option values on its variant rows, never both.
    """
    key_column = ctx.rule_set.grouping_key
    option_values = spec.param('option_values')
    placeholder = spec.param('placeholder', 'Default Title')
    placeholder_key = value_key(placeholder)

    for members in ctx.groups():
        if not any(value_key(ctx.value(m, option_values[0])) == placeholder_key for m in members):
            continue
        if not any(value_key(ctx.value(m, col)) not in ('', placeholder_key)
                   for m in members for col in option_values):
            continue
        display = ctx.text(members[0], key_column)
        for m in members:
            ctx.report(
                spec, 'mixed',
                f'{row_label(m)}: "{display}" mixes "{placeholder}" rows with real option values '
                f'(rows {_rows_text(members)})',
                row_index=m, column=option_values[0],
                suggestion=f'Use "{placeholder}" only for single-variant products; '
                           f'give every variant row real option values',
            )


# ── Check 8: Image rows carrying variant fields ──

@rule('media_row_fields', slots=('has_fields',),
      columns=('anchor', 'media_column', 'option_values', 'fields'), needs_grouping=True)
def check_media_row_fields(ctx: ValidationContext, spec: RuleSpec) -> None:
    """
    A later row of a product with an image but no title and no option values
    reads as an extra image row; it should not also carry variant fields.
    """
    anchor = spec.param('anchor')
    media_column = spec.param('media_column')
    option_values = spec.param('option_values')
    fields = spec.param('fields')

    for members in ctx.groups():
        for m in members[1:]:
            if not is_blank(ctx.value(m, anchor)) or is_blank(ctx.value(m, media_column)):
                continue
            if any(not is_blank(ctx.value(m, col)) for col in option_values):
                continue
            present = [col for col in fields if not is_blank(ctx.value(m, col))]
            if not present:
                continue
            ctx.report(
                spec, 'has_fields',
                f'{row_label(m)}: looks like an extra image row but also sets '
                f'{", ".join(present)}',
                row_index=m, column=media_column,
                suggestion='Keep only the handle and image fields on extra image rows; '
                           'move variant fields to the variant rows',
            )


# ── Check 9: Variant data needs the first option ──

@rule('option_for_variant_data', slots=('missing',), columns=('option', 'data_columns'), needs_grouping=True)
def check_option_for_variant_data(ctx: ValidationContext, spec: RuleSpec) -> None:
    """
    In a product with several rows, rows carrying variant data need the first
    option filled in. The option name only has to appear on one row.
    """
    key_column = ctx.rule_set.grouping_key
    name_col, value_col = spec.param('option')
    data_columns = spec.param('data_columns')

    for members in ctx.groups():
        if len(members) < 2:
            continue
        data_rows = [m for m in members if any(not is_blank(ctx.value(m, c)) for c in data_columns)]
        if not data_rows:
            continue
        if all(is_blank(ctx.value(m, name_col)) for m in members):
            ctx.report(
                spec, 'missing',
                f'{row_label(members[0])}: "{ctx.text(members[0], key_column)}" has '
                f'{len(members)} variant rows but no "{name_col}"',
                row_index=members[0], column=name_col,
                suggestion=f'Name the option in "{name_col}", e.g. Size',
            )
        for m in data_rows:
            if is_blank(ctx.value(m, value_col)):
                ctx.report(
                    spec, 'missing',
                    f'{row_label(m)}: variant row has no "{value_col}"',
                    row_index=m, column=value_col,
                    suggestion=f'Fill in "{value_col}" so each variant is kept',
                )
