"""
Batch data source readers.
"""

from .occurrence_reader import OccurrenceReader, extract_occurrence_file

__all__ = [
    "OccurrenceReader",
    "extract_occurrence_file",
]
