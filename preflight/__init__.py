"""
Catalog Preflight

Cleans and validates product-catalog CSV exports before bulk import into
e-commerce marketplaces.

Modules:
    models      - Data models (CanonicalTable, Issue, IssueMeta, FormatRuleSet, results)
    common      - Shared utilities (config loader, settings, CSV utils, logging)
    schema      - Format profiles and header canonicalization
    registry    - Issue metadata lookup
    validation  - Row and cross-row validation rules
    fixing      - Deterministic auto-fix engine and fix log
    scoring     - Weighted scores and readiness
    pipeline    - End-to-end run for one table
    cli         - Command line entry point
"""

from .fixing import auto_fix
from .registry import get_meta
from .schema import canonicalize, list_formats, load_rule_set
from .scoring import score
from .validation import validate

__version__ = "0.1.0"

__all__ = [
    'auto_fix',
    'canonicalize',
    'get_meta',
    'list_formats',
    'load_rule_set',
    'score',
    'validate',
]
