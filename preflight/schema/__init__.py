"""
Format profiles and header canonicalization.

Modules:
    rule_sets      - Load FormatRuleSet profiles from config/formats
    canonicalizer  - Map raw headers and rows onto a profile's canonical schema
"""

from .canonicalizer import canonicalize
from .rule_sets import build_rule_set, list_formats, load_rule_set

__all__ = ['build_rule_set', 'canonicalize', 'list_formats', 'load_rule_set']
