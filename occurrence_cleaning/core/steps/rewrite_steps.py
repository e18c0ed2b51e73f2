"""
Steps that rewrite field values instead of removing records.
"""

import re
from typing import Any

from pyspark.sql import DataFrame
from pyspark.sql import functions as F

from occurrence_cleaning.core.schema import event_day

from .base_step import BaseStep, col


def _checked_pattern(pattern: Any, rule_name: str) -> str:
    if not pattern or not isinstance(pattern, str):
        raise ValueError(f"'{rule_name}' requires a string 'pattern' parameter")
    try:
        re.compile(pattern)
    except re.error as e:
        raise ValueError(f"Invalid regex pattern '{pattern}' in '{rule_name}': {e}")
    return pattern


class ReplaceValueStep(BaseStep):
    """
    Rewrites one value of a field to another, keeping the column type.

    Parameters:
    - old: Value to replace
    - new: Replacement value
    """

    def __init__(self, rule_name: str, field_name: str | None = None, parameters: dict[str, Any] | None = None):
        super().__init__(rule_name, field_name, parameters)
        if "old" not in self.parameters or "new" not in self.parameters:
            raise ValueError("ReplaceValueStep requires 'old' and 'new' parameters")
        self.old = self.parameters["old"]
        self.new = self.parameters["new"]

    def transform(self, df: DataFrame) -> DataFrame:
        field = col(self.field_name)
        dtype = df.schema[self.field_name].dataType
        rewritten = F.when(field == self.old, F.lit(self.new)).otherwise(field).cast(dtype)
        return df.withColumn(self.field_name, rewritten)

    @property
    def rule_type(self) -> str:
        return "replace_value"


class ReclassifyStep(BaseStep):
    """
    Sets a field to a fixed value when another field matches a pattern and
    the field does not already hold that value.

    Parameters:
    - match_field: Field searched for the pattern
    - pattern: Regular expression (search semantics)
    - value: New value for field_name
    - case_insensitive: Default False
    """

    def __init__(self, rule_name: str, field_name: str | None = None, parameters: dict[str, Any] | None = None):
        super().__init__(rule_name, field_name, parameters)
        self.match_field = self.parameters.get("match_field")
        if not self.match_field:
            raise ValueError("ReclassifyStep requires 'match_field' parameter")
        if "value" not in self.parameters:
            raise ValueError("ReclassifyStep requires 'value' parameter")
        self.value = self.parameters["value"]
        pattern = _checked_pattern(self.parameters.get("pattern"), rule_name)
        self.pattern = f"(?i){pattern}" if self.parameters.get("case_insensitive", False) else pattern

    def is_applicable(self, df: DataFrame) -> bool:
        return self.field_name in df.columns and self.match_field in df.columns

    def transform(self, df: DataFrame) -> DataFrame:
        field = col(self.field_name)
        # Null in either field leaves the record as it is
        condition = col(self.match_field).rlike(self.pattern) & (field != self.value)
        return df.withColumn(self.field_name, F.when(condition, F.lit(self.value)).otherwise(field))

    @property
    def rule_type(self) -> str:
        return "reclassify"


class ExpeditionDateStep(BaseStep):
    """
    Reconstructs the event date of records from one expedition whose source
    recorded only day and month in the time field.

    field_name is the date column written. For matching records it becomes
    the ISO date ("yyyy-MM-dd") parsed from "<year>-<time_field>"; other
    records keep their value. A time value that cannot be parsed yields a
    null date.

    Parameters:
    - match_field: Provenance field identifying the expedition
    - pattern: Regular expression searched in match_field
    - year: Year the expedition took place
    - time_field: Field holding day and month (default "eventTime")
    - date_format: Spark datetime pattern of the combined string
      (default "yyyy-d-MMM", e.g. "2008-15-Mar")
    """

    def __init__(self, rule_name: str, field_name: str | None = None, parameters: dict[str, Any] | None = None):
        super().__init__(rule_name, field_name, parameters)
        self.match_field = self.parameters.get("match_field")
        if not self.match_field:
            raise ValueError("ExpeditionDateStep requires 'match_field' parameter")
        self.pattern = _checked_pattern(self.parameters.get("pattern"), rule_name)

        year = self.parameters.get("year")
        if not isinstance(year, int):
            raise ValueError("ExpeditionDateStep requires an integer 'year' parameter")
        self.year = year
        self.time_field = self.parameters.get("time_field", "eventTime")
        self.date_format = self.parameters.get("date_format", "yyyy-d-MMM")

    def is_applicable(self, df: DataFrame) -> bool:
        return self.match_field in df.columns and self.time_field in df.columns

    def transform(self, df: DataFrame) -> DataFrame:
        if self.field_name in df.columns:
            current = col(self.field_name).cast("string")
        else:
            current = F.lit(None).cast("string")

        reconstructed = F.date_format(
            F.to_date(F.concat(F.lit(f"{self.year}-"), F.trim(col(self.time_field))), self.date_format),
            "yyyy-MM-dd",
        )
        is_expedition = F.coalesce(col(self.match_field).rlike(self.pattern), F.lit(False))
        return df.withColumn(self.field_name, F.when(is_expedition, reconstructed).otherwise(current))

    @property
    def rule_type(self) -> str:
        return "expedition_date"


class DatePartsBackfillStep(BaseStep):
    """
    Fills missing year, month and day columns from the calendar day of the
    event date. Existing values are never overwritten.

    Parameters:
    - parts: Which of "year", "month", "day" to fill (default all three)
    """

    PART_FUNCTIONS = {
        "year": F.year,
        "month": F.month,
        "day": F.dayofmonth,
    }

    def __init__(self, rule_name: str, field_name: str | None = None, parameters: dict[str, Any] | None = None):
        super().__init__(rule_name, field_name, parameters)
        self.parts = list(self.parameters.get("parts", ["year", "month", "day"]))
        unknown = [part for part in self.parts if part not in self.PART_FUNCTIONS]
        if unknown:
            raise ValueError(f"Unknown date parts: {unknown}")

    def transform(self, df: DataFrame) -> DataFrame:
        day = event_day(col(self.field_name))
        for part in self.parts:
            existing = col(part).cast("int") if part in df.columns else F.lit(None).cast("int")
            derived = self.PART_FUNCTIONS[part](day)
            df = df.withColumn(part, F.coalesce(existing, derived))
        return df

    @property
    def rule_type(self) -> str:
        return "date_parts_backfill"
