"""
Batch data sink writers.
"""

from .csv_writer import CsvWriter, StagedCsv

__all__ = [
    "CsvWriter",
    "StagedCsv",
]
