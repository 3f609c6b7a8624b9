"""
Row & Cross-Row Validator

Runs the ordered rule list of a format against a canonical table and
returns a de-duplicated, deterministically ordered list of issues.
"""

from __future__ import annotations

import logging
from typing import List

from ..common.exceptions import ConfigurationError
from ..models import CanonicalTable, FormatRuleSet, Issue
from .context import ValidationContext
from .rules import get_rule_definition

logger = logging.getLogger(__name__)


def validate(table: CanonicalTable, rule_set: FormatRuleSet) -> List[Issue]:
    """
    Validate a canonical table.

    The caller's table is not modified: rules work on a private copy of the
    rows, and token normalizations made by one rule are visible only to the
    rules that run after it in the same pass.

    Args:
        table: Table produced by ``canonicalize`` for the same format
        rule_set: Format profile supplying the rules

    Returns:
        File-level issues first, then row-level issues in row order

    Raises:
        ConfigurationError: If the table belongs to another format or a rule
            is misconfigured
    """
    if table.format_id != rule_set.format_id:
        raise ConfigurationError(
            f"Table was canonicalized for '{table.format_id}', "
            f"cannot validate it as '{rule_set.format_id}'",
            rule_set.format_id,
        )

    ctx = ValidationContext(table, rule_set)
    for spec in rule_set.rules:
        definition = get_rule_definition(spec.rule)
        before = len(ctx.collector)
        definition.check(ctx, spec)
        logger.debug("%s: rule %s reported %d issue(s)",
                     rule_set.format_id, spec.rule, len(ctx.collector) - before)

    issues = ctx.collector.issues()
    media_rows = sum(ctx.media_only)
    logger.debug("%s: %d row(s), %d media-only, %d issue(s)",
                 rule_set.format_id, len(ctx.rows), media_rows, len(issues))
    return issues
