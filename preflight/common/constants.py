"""
Shared constants for the project.

This module contains engine-wide constants that should have a single source of truth.
"""

# Issue severities, most severe first
SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"
SEVERITY_INFO = "info"
SEVERITIES = (SEVERITY_ERROR, SEVERITY_WARNING, SEVERITY_INFO)

# Issue categories used for metadata and per-category scoring
CATEGORIES = (
    "structure",
    "variant",
    "pricing",
    "inventory",
    "seo",
    "images",
    "sku",
    "attributes",
    "media",
    "compliance",
    "tags",
    "shipping",
)
DEFAULT_CATEGORY = "structure"

# Category penalty coefficients: linear terms per issue, then diminishing log terms
PENALTY_PER_ERROR = 10.0
PENALTY_PER_WARNING = 4.0
PENALTY_PER_INFO = 1.0
LOG_PENALTY_ERROR = 6.0
LOG_PENALTY_WARNING = 2.5
LOG_PENALTY_INFO = 1.25
PENALTY_PER_BLOCKING = 12.0

# Readiness labels as (minimum score, label). Only ready tables reach the first two.
READY_LABEL_BANDS = (
    (90, "Ready to import"),
    (70, "Ready with minor issues"),
    (0, "Importable, needs review"),
)
NOT_READY_LABEL_BANDS = (
    (50, "Not ready: fix blocking issues"),
    (0, "Not ready: major problems"),
)

# Code suffixes emitted by the engine itself rather than by a configured rule
MISSING_REQUIRED_COLUMN = "missing_required_column"
MISSING_RECOMMENDED_COLUMN = "missing_recommended_column"
CSV_PARSE_ERROR = "csv_parse_error"
