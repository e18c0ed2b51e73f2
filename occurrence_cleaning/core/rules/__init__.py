"""
Rule engine and configuration loading.
"""

from .rule_config import CleaningConfigLoader, RuleConfigLoader
from .rule_engine import RuleEngine
from .rule_sets import (
    DEFAULT_SOURCES,
    RULE_LIBRARY,
    SOURCE_RULES,
    apply_rules,
    build_rule_definitions,
    rules_for_source,
)

__all__ = [
    "CleaningConfigLoader",
    "DEFAULT_SOURCES",
    "RULE_LIBRARY",
    "RuleConfigLoader",
    "RuleEngine",
    "SOURCE_RULES",
    "apply_rules",
    "build_rule_definitions",
    "rules_for_source",
]
