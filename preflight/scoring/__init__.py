"""
Scoring and readiness.

Modules:
    scorer     - score(): weighted per-category scores and the readiness flag
    readiness  - Blocking-issue summary and per-category notes
"""

from .readiness import ScoreNote, build_score_notes, compute_readiness_summary
from .scorer import category_penalty, infer_category, readiness_label, score

__all__ = [
    'ScoreNote',
    'build_score_notes',
    'category_penalty',
    'compute_readiness_summary',
    'infer_category',
    'readiness_label',
    'score',
]
