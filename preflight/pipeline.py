"""
Preflight pipeline

Runs canonicalize -> validate -> (auto-fix -> validate) -> score for one
table and collects everything into a PreflightReport.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .common.constants import CSV_PARSE_ERROR, SEVERITY_ERROR
from .common.exceptions import ConfigurationError
from .fixing import auto_fix
from .models import (
    CanonicalizeDiagnostics,
    CanonicalTable,
    FixResult,
    FormatRuleSet,
    Issue,
    ReadinessSummary,
    ValidationBreakdown,
)
from .schema import canonicalize, load_rule_set
from .scoring import ScoreNote, build_score_notes, compute_readiness_summary, score
from .validation import validate

logger = logging.getLogger(__name__)

# Parse errors quoted in full in the file-level issue message
_PARSE_ERRORS_SHOWN = 5


@dataclass
class PreflightReport:
    """Everything one preflight run produced."""
    format_id: str
    table: CanonicalTable
    diagnostics: CanonicalizeDiagnostics
    issues: List[Issue]
    breakdown: ValidationBreakdown
    readiness: ReadinessSummary
    fix_result: Optional[FixResult] = None
    # Issues and score of the fixed table, when fixes were applied
    fixed_issues: List[Issue] = field(default_factory=list)
    fixed_breakdown: Optional[ValidationBreakdown] = None

    @property
    def score_notes(self) -> List[ScoreNote]:
        return build_score_notes(self.breakdown, self.issues, self.format_id)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'format_id': self.format_id,
            'rows': len(self.table.rows),
            'headers': list(self.table.fixed_headers),
            'unknown_headers': list(self.table.unknown_headers),
            'diagnostics': {
                'duplicate_input_headers': list(self.diagnostics.duplicate_input_headers),
                'alias_collisions': [
                    {'canonical': canonical, 'headers': list(headers)}
                    for canonical, headers in self.diagnostics.alias_collisions
                ],
                'renamed_blank_headers': [
                    {'position': position, 'name': name}
                    for position, name in self.diagnostics.renamed_blank_headers
                ],
            },
            'issues': [issue.to_dict() for issue in self.issues],
            'breakdown': self.breakdown.to_dict(),
            'readiness': self.readiness.to_dict(),
            'score_notes': [asdict(note) for note in self.score_notes],
        }
        if self.fix_result is not None:
            data['fix'] = self.fix_result.to_dict()
            data['fixed_issues'] = [issue.to_dict() for issue in self.fixed_issues]
            data['fixed_breakdown'] = self.fixed_breakdown.to_dict() if self.fixed_breakdown else None
        return data


def parse_error_issue(parse_errors: Sequence[str], rule_set: FormatRuleSet) -> Optional[Issue]:
    """Fold CSV parse errors into one file-level issue."""
    if not parse_errors:
        return None
    shown = '; '.join(parse_errors[:_PARSE_ERRORS_SHOWN])
    more = len(parse_errors) - _PARSE_ERRORS_SHOWN
    if more > 0:
        shown += f'; and {more} more'
    return Issue(
        severity=SEVERITY_ERROR,
        code=rule_set.code(CSV_PARSE_ERROR),
        message=f'{len(parse_errors)} line(s) could not be parsed cleanly: {shown}',
        suggestion='Check the file for unbalanced quotes or rows with the wrong number of columns',
    )


def run_preflight(
    headers: Sequence[Optional[str]],
    rows: Iterable[Mapping[Optional[str], object]],
    format_id: str,
    parse_errors: Sequence[str] = (),
    apply_fixes: bool = False,
) -> PreflightReport:
    """
    Run the full preflight for one table.

    Args:
        headers: Input header row
        rows: Input rows keyed by raw header
        format_id: Target format profile id
        parse_errors: Row-level problems reported by the CSV reader
        apply_fixes: Also auto-fix and re-validate the fixed table

    Returns:
        PreflightReport; parse problems come first in its issue list

    Raises:
        ConfigurationError: If the format is unknown or misconfigured
    """
    try:
        rule_set = load_rule_set(format_id)
        table, diagnostics = canonicalize(headers, rows, rule_set)
        issues = validate(table, rule_set)
    except ConfigurationError as exc:
        logger.error("Configuration error for format '%s': %s", format_id, exc)
        raise

    parse_issue = parse_error_issue(list(parse_errors), rule_set)
    if parse_issue is not None:
        issues = [parse_issue] + issues

    report = PreflightReport(
        format_id=format_id,
        table=table,
        diagnostics=diagnostics,
        issues=issues,
        breakdown=score(issues, rule_set),
        readiness=compute_readiness_summary(issues, format_id),
    )
    logger.info("%s: %d row(s), %d issue(s), score %d (%s)",
                format_id, len(table.rows), len(issues),
                report.breakdown.score, report.breakdown.label)

    if apply_fixes:
        report.fix_result = auto_fix(table, issues, rule_set)
        fixed_issues = validate(report.fix_result.table, rule_set)
        if parse_issue is not None:
            fixed_issues = [parse_issue] + fixed_issues
        report.fixed_issues = fixed_issues
        report.fixed_breakdown = score(fixed_issues, rule_set)
        logger.info("%s: after %d fix(es), %d issue(s), score %d",
                    format_id, len(report.fix_result.fixes_applied),
                    len(fixed_issues), report.fixed_breakdown.score)

    return report
