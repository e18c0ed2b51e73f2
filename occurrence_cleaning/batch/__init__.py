"""
Spark batch processing module.
"""

from .pipeline import CleaningPipeline
from .readers import OccurrenceReader
from .writers import CsvWriter

__all__ = [
    "CleaningPipeline",
    "OccurrenceReader",
    "CsvWriter",
]
