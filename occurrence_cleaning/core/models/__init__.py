"""
Core data models for the occurrence cleaning pipelines.

All models use Pydantic for runtime validation.
"""

from .cleaning_report import CleaningReport, RuleResult
from .rule_definition import RuleDefinition, RuleType
from .source_config import SourceConfig, SourceId

__all__ = [
    "CleaningReport",
    "RuleResult",
    "RuleDefinition",
    "RuleType",
    "SourceConfig",
    "SourceId",
]
