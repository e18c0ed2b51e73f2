"""
PatternExclusionStep - drops records whose text fields match regular expressions.
"""

import re
from dataclasses import dataclass
from typing import Any

from pyspark.sql import Column, DataFrame
from pyspark.sql import functions as F

from .base_step import BaseStep, col


@dataclass(frozen=True)
class PatternEntry:
    """One row of the exclusion table."""

    pattern: str
    field_name: str
    case_insensitive: bool = True

    @property
    def spark_pattern(self) -> str:
        return f"(?i){self.pattern}" if self.case_insensitive else self.pattern

    def matches(self) -> Column:
        """True where the field matches; a null field never matches."""
        return F.coalesce(col(self.field_name).rlike(self.spark_pattern), F.lit(False))


class PatternExclusionStep(BaseStep):
    """
    Drops records where any entry of a (pattern, field, case sensitivity)
    table matches. Matching is a search, not a full match, so a pattern can
    hit anywhere in the text.

    Parameters:
    - patterns: List of entries, each with 'pattern' and optionally 'field'
      (defaults to the step's field) and 'case_insensitive' (default True)
    - pattern / case_insensitive: Shorthand for a single-entry table
    """

    requires_field = False

    def __init__(self, rule_name: str, field_name: str | None = None, parameters: dict[str, Any] | None = None):
        super().__init__(rule_name, field_name, parameters)

        raw_entries = self.parameters.get("patterns")
        if raw_entries is None and "pattern" in self.parameters:
            raw_entries = [{
                "pattern": self.parameters["pattern"],
                "case_insensitive": self.parameters.get("case_insensitive", True),
            }]
        if not raw_entries:
            raise ValueError("PatternExclusionStep requires 'patterns' or 'pattern' parameter")

        self.entries = [self._parse_entry(entry) for entry in raw_entries]

    def _parse_entry(self, entry: dict[str, Any]) -> PatternEntry:
        pattern = entry.get("pattern")
        if not pattern or not isinstance(pattern, str):
            raise ValueError(f"Pattern entry in '{self.rule_name}' must have a string 'pattern'")

        # Patterns run on the JVM, but the dialects agree on everything used here
        try:
            re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern '{pattern}' in '{self.rule_name}': {e}")

        field_name = entry.get("field", self.field_name)
        if not field_name:
            raise ValueError(f"Pattern entry '{pattern}' in '{self.rule_name}' has no field")

        return PatternEntry(
            pattern=pattern,
            field_name=field_name,
            case_insensitive=bool(entry.get("case_insensitive", True)),
        )

    def is_applicable(self, df: DataFrame) -> bool:
        return any(entry.field_name in df.columns for entry in self.entries)

    def transform(self, df: DataFrame) -> DataFrame:
        matched = None
        for entry in self.entries:
            if entry.field_name not in df.columns:
                continue
            hit = entry.matches()
            matched = hit if matched is None else matched | hit
        return df.filter(~matched)

    @property
    def rule_type(self) -> str:
        return "pattern_exclusion"
