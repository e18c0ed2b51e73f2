"""
Cleaning step implementations.

Provides filters, pattern exclusions, field rewrites and structural steps
(deduplication, empty-column pruning) over Spark DataFrames.
"""

from .base_step import BaseStep
from .pattern_step import PatternEntry, PatternExclusionStep
from .predicate_steps import (
    ColumnsDifferStep,
    EqualsStep,
    ExcludeTrueStep,
    ExcludeValuesStep,
    RangeStep,
    RequiredFieldStep,
)
from .rewrite_steps import (
    DatePartsBackfillStep,
    ExpeditionDateStep,
    ReclassifyStep,
    ReplaceValueStep,
)
from .structural_steps import DeduplicateStep, PruneEmptyColumnsStep

__all__ = [
    "BaseStep",
    "ColumnsDifferStep",
    "DatePartsBackfillStep",
    "DeduplicateStep",
    "EqualsStep",
    "ExcludeTrueStep",
    "ExcludeValuesStep",
    "ExpeditionDateStep",
    "PatternEntry",
    "PatternExclusionStep",
    "PruneEmptyColumnsStep",
    "RangeStep",
    "ReclassifyStep",
    "ReplaceValueStep",
    "RequiredFieldStep",
]
