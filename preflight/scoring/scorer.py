"""
Scoring & Readiness Engine

Turns an issue list into per-category scores, a weighted overall score and
a readiness flag.

Each category starts at 100 and loses

    10·e + 4·w + 1·i + 6·ln(1+e) + 2.5·ln(1+w) + 1.25·ln(1+i) + 12·b

points for e errors, w warnings, i infos and b blocking errors in it. The
overall score is the weight-normalized sum of category scores; categories
without a weight still get a score for display.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional

from ..common.constants import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    LOG_PENALTY_ERROR,
    LOG_PENALTY_INFO,
    LOG_PENALTY_WARNING,
    NOT_READY_LABEL_BANDS,
    PENALTY_PER_BLOCKING,
    PENALTY_PER_ERROR,
    PENALTY_PER_INFO,
    PENALTY_PER_WARNING,
    READY_LABEL_BANDS,
    SEVERITY_ERROR,
    SEVERITY_WARNING,
)
from ..models import FormatRuleSet, Issue, IssueCounts, ValidationBreakdown
from ..registry import get_meta, is_blocking

# (column keywords, category) for issues without metadata, first match wins
_COLUMN_CATEGORIES = (
    (('image', 'img', 'alt text', 'picture'), 'images'),
    (('price', 'compare', 'cost', 'tax', 'currency'), 'pricing'),
    (('inventory', 'qty', 'quantity', 'policy'), 'inventory'),
    (('option', 'variant', 'variation', 'sku', 'handle', 'customlabel'), 'variant'),
    (('seo', 'title', 'body', 'description'), 'seo'),
    (('weight', 'shipping', 'dispatch'), 'shipping'),
)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def infer_category(column: Optional[str]) -> str:
    """Guess a category from the column name when an issue has no metadata."""
    text = (column or '').lower()
    for keywords, category in _COLUMN_CATEGORIES:
        if any(keyword in text for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def category_penalty(errors: int, warnings: int, infos: int, blocking: int) -> float:
    return (
        PENALTY_PER_ERROR * errors
        + PENALTY_PER_WARNING * warnings
        + PENALTY_PER_INFO * infos
        + LOG_PENALTY_ERROR * math.log1p(errors)
        + LOG_PENALTY_WARNING * math.log1p(warnings)
        + LOG_PENALTY_INFO * math.log1p(infos)
        + PENALTY_PER_BLOCKING * blocking
    )


def readiness_label(score: int, ready: bool) -> str:
    bands = READY_LABEL_BANDS if ready else NOT_READY_LABEL_BANDS
    for minimum, label in bands:
        if score >= minimum:
            return label
    return bands[-1][1]


def score(issues: List[Issue], rule_set: FormatRuleSet) -> ValidationBreakdown:
    """
    Score a validated table.

    Args:
        issues: Output of ``validate`` (plus any parse issues)
        rule_set: Format profile supplying category weights

    Returns:
        ValidationBreakdown; ``ready`` is True exactly when there are no
        blocking errors
    """
    counts = IssueCounts()
    # category -> [errors, warnings, infos, blocking]
    per_category: Dict[str, List[int]] = {category: [0, 0, 0, 0] for category in CATEGORIES}

    for issue in issues:
        meta = get_meta(rule_set.format_id, issue.code)
        category = meta.category if meta is not None else infer_category(issue.column)
        tally = per_category.setdefault(category, [0, 0, 0, 0])

        if issue.severity == SEVERITY_ERROR:
            counts.errors += 1
            tally[0] += 1
        elif issue.severity == SEVERITY_WARNING:
            counts.warnings += 1
            tally[1] += 1
        else:
            counts.infos += 1
            tally[2] += 1

        if is_blocking(issue.severity, meta):
            counts.blocking_errors += 1
            tally[3] += 1

    categories: Dict[str, int] = {}
    category_values: Dict[str, float] = {}
    for category, (errors, warnings, infos, blocking) in per_category.items():
        value = _clamp(100.0 - category_penalty(errors, warnings, infos, blocking))
        category_values[category] = value
        categories[category] = _round_half_up(value)

    weighted = sum(
        category_values.get(category, 100.0) * weight
        for category, weight in rule_set.category_weights.items()
    )
    overall = _round_half_up(_clamp(weighted))
    ready = counts.blocking_errors == 0

    return ValidationBreakdown(
        score=overall,
        categories=categories,
        counts=counts,
        ready=ready,
        label=readiness_label(overall, ready),
    )
