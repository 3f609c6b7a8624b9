"""
Row-local rules.

Each check looks at one row at a time: value presence, token vocabularies,
number formats, URL well-formedness, length ceilings and option pairing.
"""

from __future__ import annotations

import re

from ...common.text_utils import (
    clean_money,
    is_blank,
    is_http_url,
    is_plain_integer,
    is_plain_number,
    slugify_handle,
    split_list,
    value_key,
)
from ...common.tokens import (
    boolean_tokens,
    match_boolean,
    match_vocabulary,
    resolve_boolean,
    resolve_vocabulary,
)
from ...models import RuleSpec
from ..context import ValidationContext, row_label
from .registry import rule


# ── Presence ──

def _condition_holds(ctx: ValidationContext, spec: RuleSpec, row_index: int) -> bool:
    """``when_column`` must (``when_in``) or must not (``when_not_in``) hold one of the listed values."""
    column = spec.param('when_column')
    if column is None:
        return True
    value = value_key(ctx.value(row_index, column))
    when_in = spec.param('when_in')
    if when_in is not None and value not in {value_key(v) for v in when_in}:
        return False
    when_not_in = spec.param('when_not_in')
    if when_not_in is not None and value in {value_key(v) for v in when_not_in}:
        return False
    return True


@rule('required_value', slots=('blank',), columns=('column', 'only_if_any', 'when_column'))
def check_required_value(ctx: ValidationContext, spec: RuleSpec) -> None:
    """
    Cell must not be blank.

    ``only_if_any`` limits the check to rows carrying data in at least one of
    the listed columns; ``when_column`` with ``when_in`` / ``when_not_in``
    limits it by another column's value (e.g. WooCommerce variation rows);
    ``first_in_group_only`` checks only the first row of each variant group.
    A column missing from the input is reported once at file level by
    ``required_columns`` instead.
    """
    column = spec.param('column')
    if not ctx.column_supplied(column):
        return
    only_if_any = spec.param('only_if_any') or ()
    first_only = spec.param('first_in_group_only', False)

    for i in ctx.row_indices(spec):
        if first_only and not ctx.is_group_leader(i):
            continue
        if only_if_any and all(is_blank(ctx.value(i, c)) for c in only_if_any):
            continue
        if not _condition_holds(ctx, spec, i):
            continue
        if is_blank(ctx.value(i, column)):
            ctx.report(
                spec, 'blank',
                f'{row_label(i)}: "{column}" is blank',
                row_index=i, column=column,
                suggestion=f'Fill in "{column}"',
            )


# ── Vocabularies ──

@rule('boolean', slots=('invalid', 'blank'), required=('invalid',))
def check_boolean(ctx: ValidationContext, spec: RuleSpec) -> None:
    column = spec.param('column')
    true_token, false_token = boolean_tokens(spec.params)

    for i in ctx.row_indices(spec, skip_media_only=False):
        raw = ctx.text(i, column)
        if not raw:
            if ctx.column_supplied(column) and not ctx.media_only[i]:
                ctx.report(spec, 'blank', f'{row_label(i)}: "{column}" is blank',
                           row_index=i, column=column)
            continue

        exact = match_boolean(raw, spec.params)
        if exact is not None:
            if raw != exact:
                ctx.normalize(spec, i, column, exact)
            continue

        target = resolve_boolean(raw, spec.params)
        ctx.report(
            spec, 'invalid',
            f'{row_label(i)}: "{column}" must be {true_token} or {false_token}, got "{raw}"',
            row_index=i, column=column,
            suggestion=f'Use "{target}"' if target else f'Use {true_token} or {false_token}',
        )


@rule('vocabulary', slots=('invalid', 'blank'), required=('invalid',))
def check_vocabulary(ctx: ValidationContext, spec: RuleSpec) -> None:
    """Cell must be one of a small accepted set, ignoring case."""
    column = spec.param('column')
    accepted = [str(a) for a in spec.param('accepted', ())]

    for i in ctx.row_indices(spec, skip_media_only=False):
        raw = ctx.text(i, column)
        if not raw:
            if ctx.column_supplied(column) and not ctx.media_only[i]:
                ctx.report(spec, 'blank', f'{row_label(i)}: "{column}" is blank',
                           row_index=i, column=column,
                           suggestion=f'Use one of: {", ".join(accepted)}')
            continue

        exact = match_vocabulary(raw, spec.params)
        if exact is not None:
            if raw != exact:
                ctx.normalize(spec, i, column, exact)
            continue

        target = resolve_vocabulary(raw, spec.params)
        ctx.report(
            spec, 'invalid',
            f'{row_label(i)}: "{column}" has unsupported value "{raw}"',
            row_index=i, column=column,
            suggestion=f'Use "{target}"' if target else f'Use one of: {", ".join(accepted)}',
        )


# ── Numbers ──

@rule('money', slots=('invalid', 'negative'), required=('invalid',))
def check_money(ctx: ValidationContext, spec: RuleSpec) -> None:
    column = spec.param('column')
    for i in ctx.row_indices(spec):
        raw = ctx.text(i, column)
        if not raw:
            continue
        if is_plain_number(raw):
            if float(raw) < 0:
                ctx.report(spec, 'negative', f'{row_label(i)}: "{column}" is negative ({raw})',
                           row_index=i, column=column)
            continue

        cleaned = clean_money(raw)
        ctx.report(
            spec, 'invalid',
            f'{row_label(i)}: "{column}" is not a plain number: "{raw}"',
            row_index=i, column=column,
            suggestion=f'Use "{cleaned}"' if cleaned is not None else 'Use a plain number like 19.99',
        )


@rule('integer', slots=('invalid', 'negative'), required=('invalid',))
def check_integer(ctx: ValidationContext, spec: RuleSpec) -> None:
    column = spec.param('column')
    for i in ctx.row_indices(spec):
        raw = ctx.text(i, column)
        if not raw:
            continue
        if not is_plain_integer(raw):
            ctx.report(spec, 'invalid', f'{row_label(i)}: "{column}" must be a whole number, got "{raw}"',
                       row_index=i, column=column, suggestion='Use a whole number like 10')
        elif int(raw) < 0:
            ctx.report(spec, 'negative', f'{row_label(i)}: "{column}" is negative ({raw})',
                       row_index=i, column=column)


@rule('compare_fields', slots=('below',), columns=('column', 'reference'))
def check_compare_fields(ctx: ValidationContext, spec: RuleSpec) -> None:
    """``column`` must not be below ``reference`` when both are plain numbers."""
    column = spec.param('column')
    reference = spec.param('reference')
    for i in ctx.row_indices(spec):
        value, ref = ctx.text(i, column), ctx.text(i, reference)
        if not (value and ref and is_plain_number(value) and is_plain_number(ref)):
            continue
        if float(value) < float(ref):
            ctx.report(
                spec, 'below',
                f'{row_label(i)}: "{column}" ({value}) is lower than "{reference}" ({ref})',
                row_index=i, column=column,
                suggestion=f'Raise "{column}" above "{reference}" or clear it',
            )


@rule('below_reference', slots=('not_below',), columns=('column', 'reference'))
def check_below_reference(ctx: ValidationContext, spec: RuleSpec) -> None:
    """``column`` must be strictly lower than ``reference`` when both are plain numbers (sale prices)."""
    column = spec.param('column')
    reference = spec.param('reference')
    for i in ctx.row_indices(spec):
        value, ref = ctx.text(i, column), ctx.text(i, reference)
        if not (value and ref and is_plain_number(value) and is_plain_number(ref)):
            continue
        if float(value) >= float(ref):
            ctx.report(
                spec, 'not_below',
                f'{row_label(i)}: "{column}" ({value}) is not lower than "{reference}" ({ref})',
                row_index=i, column=column,
                suggestion=f'Lower "{column}" below "{reference}" or clear it',
            )


# ── Text shape ──

@rule('pattern', slots=('invalid',))
def check_pattern(ctx: ValidationContext, spec: RuleSpec) -> None:
    column = spec.param('column')
    flags = re.IGNORECASE if spec.param('ignore_case', False) else 0
    regex = re.compile(spec.param('regex'), flags)
    describe = spec.param('description', 'the expected format')

    for i in ctx.row_indices(spec, skip_media_only=False):
        raw = ctx.text(i, column)
        if not raw or regex.fullmatch(raw):
            continue
        suggestion = None
        if spec.param('suggest_slug', False):
            slug = slugify_handle(raw)
            if slug:
                suggestion = f'Use "{slug}"'
        ctx.report(
            spec, 'invalid',
            f'{row_label(i)}: "{column}" value "{raw}" does not match {describe}',
            row_index=i, column=column, suggestion=suggestion,
        )


@rule('max_length', slots=('too_long',))
def check_max_length(ctx: ValidationContext, spec: RuleSpec) -> None:
    column = spec.param('column')
    limit = int(spec.param('limit'))
    for i in ctx.row_indices(spec, skip_media_only=False):
        length = len(ctx.text(i, column))
        if length > limit:
            ctx.report(
                spec, 'too_long',
                f'{row_label(i)}: "{column}" is {length} characters (limit {limit})',
                row_index=i, column=column,
                suggestion=f'Shorten "{column}" to {limit} characters or fewer',
            )


@rule('url', slots=('invalid', 'too_many'), required=('invalid',))
def check_url(ctx: ValidationContext, spec: RuleSpec) -> None:
    """http(s) URL, or a ``separator``-delimited list of them capped at ``max_count``."""
    column = spec.param('column')
    separator = spec.param('separator')
    max_count = spec.param('max_count')

    for i in ctx.row_indices(spec, skip_media_only=False):
        raw = ctx.text(i, column)
        if not raw:
            continue
        parts = split_list(raw, separator) if separator else [raw]
        bad = [part for part in parts if not is_http_url(part)]
        if bad:
            ctx.report(
                spec, 'invalid',
                f'{row_label(i)}: "{column}" is not a valid http(s) URL: "{bad[0]}"',
                row_index=i, column=column,
                suggestion='Use a full URL starting with https://',
            )
        if max_count is not None and len(parts) > int(max_count):
            ctx.report(
                spec, 'too_many',
                f'{row_label(i)}: "{column}" lists {len(parts)} entries (limit {max_count})',
                row_index=i, column=column,
                suggestion=f'Keep at most {max_count} entries',
            )


@rule('list_items', slots=('too_many', 'item_too_long', 'duplicate'), required=())
def check_list_items(ctx: ValidationContext, spec: RuleSpec) -> None:
    """
    A ``separator``-delimited list (tags, materials): at most ``max_count``
    entries, each at most ``max_item_length`` characters, no repeats.
    """
    column = spec.param('column')
    separator = spec.param('separator', ',')
    max_count = spec.param('max_count')
    max_length = spec.param('max_item_length')

    for i in ctx.row_indices(spec):
        items = split_list(ctx.text(i, column), separator)
        if not items:
            continue
        if max_count is not None and len(items) > int(max_count):
            ctx.report(
                spec, 'too_many',
                f'{row_label(i)}: "{column}" lists {len(items)} entries (limit {max_count})',
                row_index=i, column=column,
                suggestion=f'Keep the best {max_count} entries',
            )
        if max_length is not None:
            long_items = [item for item in items if len(item) > int(max_length)]
            if long_items:
                ctx.report(
                    spec, 'item_too_long',
                    f'{row_label(i)}: "{column}" entries over {max_length} characters: '
                    f'{", ".join(long_items[:3])}',
                    row_index=i, column=column,
                    suggestion=f'Shorten each entry to {max_length} characters or fewer',
                )
        keys = [value_key(item) for item in items]
        repeated = [item for n, item in enumerate(items) if keys[n] in keys[:n]]
        if repeated:
            ctx.report(
                spec, 'duplicate',
                f'{row_label(i)}: "{column}" repeats {", ".join(repeated[:3])}',
                row_index=i, column=column,
                suggestion='Remove the repeated entries',
            )


# ── Options ──

@rule('option_pairs', slots=('value_missing', 'name_missing', 'count_mismatch'),
      required=('value_missing',), columns=('pairs',))
def check_option_pairs(ctx: ValidationContext, spec: RuleSpec) -> None:
    """
    Option names and values come in pairs; with a ``separator`` their counts must match.

    A value without a name is fine when another row of the same product names
    the option, since exports only name options on the first variant row.
    """
    separator = spec.param('separator')
    for i in ctx.row_indices(spec):
        for name_col, value_col in spec.param('pairs'):
            name, value = ctx.text(i, name_col), ctx.text(i, value_col)
            if name and not value:
                ctx.report(spec, 'value_missing',
                           f'{row_label(i)}: "{name_col}" is set but "{value_col}" is blank',
                           row_index=i, column=value_col,
                           suggestion=f'Fill in "{value_col}" or clear "{name_col}"')
            elif value and not name:
                if any(ctx.text(m, name_col) for m in ctx.group_members(i)):
                    continue
                ctx.report(spec, 'name_missing',
                           f'{row_label(i)}: "{value_col}" is set but "{name_col}" is blank',
                           row_index=i, column=name_col,
                           suggestion=f'Fill in "{name_col}"')
            elif name and value and separator:
                names, values = split_list(name, separator), split_list(value, separator)
                if len(names) != len(values):
                    ctx.report(spec, 'count_mismatch',
                               f'{row_label(i)}: {len(names)} names in "{name_col}" '
                               f'but {len(values)} values in "{value_col}"',
                               row_index=i, column=value_col,
                               suggestion=f'Give one value per name, separated by "{separator}"')
