# Importing the rule modules registers their checks
from . import file_rules, group_rules, row_rules
from .registry import RuleDefinition, columns_in, get_rule_definition, list_rule_names, rule

__all__ = ['RuleDefinition', 'columns_in', 'get_rule_definition', 'list_rule_names', 'rule']
