"""
File-level rules: checks about columns rather than individual rows.
"""

from __future__ import annotations

from ...common.text_utils import is_blank
from ...models import RuleSpec
from ..context import ValidationContext
from .registry import rule


@rule('required_columns', slots=('missing',), columns=())
def check_required_columns(ctx: ValidationContext, spec: RuleSpec) -> None:
    for column in ctx.rule_set.required_fields:
        if not ctx.column_supplied(column):
            ctx.report(
                spec, 'missing',
                f'Required column "{column}" is missing',
                column=column,
                suggestion=f'Add a "{column}" column and fill it in for every product',
            )


@rule('recommended_columns', slots=('missing',), columns=())
def check_recommended_columns(ctx: ValidationContext, spec: RuleSpec) -> None:
    for column in ctx.rule_set.recommended_fields:
        if not ctx.column_supplied(column):
            ctx.report(
                spec, 'missing',
                f'Recommended column "{column}" is missing',
                column=column,
                suggestion=f'Consider adding a "{column}" column',
            )


@rule('all_blank_column', slots=('blank',))
def check_all_blank_column(ctx: ValidationContext, spec: RuleSpec) -> None:
    """A supplied column whose every cell is empty."""
    column = spec.param('column')
    if not ctx.rows or not ctx.column_supplied(column):
        return
    if all(is_blank(ctx.value(i, column)) for i in range(len(ctx.rows))):
        ctx.report(
            spec, 'blank',
            f'Column "{column}" is present but empty on every row',
            column=column,
        )
