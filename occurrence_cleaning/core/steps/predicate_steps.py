"""
Row filters driven by a single field value.
"""

from typing import Any

from pyspark.sql import DataFrame

from occurrence_cleaning.core.schema import event_day

from .base_step import BaseStep, col


class EqualsStep(BaseStep):
    """
    Keeps records whose field equals a value.

    Parameters:
    - value: Required value
    - keep_null: Keep records where the field is null (default False)
    """

    def __init__(self, rule_name: str, field_name: str | None = None, parameters: dict[str, Any] | None = None):
        super().__init__(rule_name, field_name, parameters)
        if "value" not in self.parameters:
            raise ValueError("EqualsStep requires 'value' parameter")
        self.value = self.parameters["value"]
        self.keep_null = bool(self.parameters.get("keep_null", False))

    def transform(self, df: DataFrame) -> DataFrame:
        condition = col(self.field_name) == self.value
        if self.keep_null:
            condition = condition | col(self.field_name).isNull()
        return df.filter(condition)

    @property
    def rule_type(self) -> str:
        return "equals"


class RangeStep(BaseStep):
    """
    Keeps records whose numeric field lies within inclusive bounds.

    Parameters:
    - min: Minimum value (inclusive)
    - max: Maximum value (inclusive)
    - keep_null: Keep records where the field is null (default False)
    """

    def __init__(self, rule_name: str, field_name: str | None = None, parameters: dict[str, Any] | None = None):
        super().__init__(rule_name, field_name, parameters)
        self.min_value = self.parameters.get("min")
        self.max_value = self.parameters.get("max")
        self.keep_null = bool(self.parameters.get("keep_null", False))

        if self.min_value is None and self.max_value is None:
            raise ValueError("RangeStep requires at least one of: min, max")

    def transform(self, df: DataFrame) -> DataFrame:
        field = col(self.field_name)
        condition = None
        if self.min_value is not None:
            condition = field >= self.min_value
        if self.max_value is not None:
            upper = field <= self.max_value
            condition = upper if condition is None else condition & upper
        if self.keep_null:
            condition = condition | field.isNull()
        return df.filter(condition)

    @property
    def rule_type(self) -> str:
        return "range"


class ExcludeValuesStep(BaseStep):
    """
    Drops records whose field is one of a set of values. Null is kept.

    Parameters:
    - values: Values to exclude
    """

    def __init__(self, rule_name: str, field_name: str | None = None, parameters: dict[str, Any] | None = None):
        super().__init__(rule_name, field_name, parameters)
        values = self.parameters.get("values")
        if not values:
            raise ValueError("ExcludeValuesStep requires a non-empty 'values' parameter")
        self.values = list(values)

    def transform(self, df: DataFrame) -> DataFrame:
        field = col(self.field_name)
        return df.filter(field.isNull() | ~field.isin(self.values))

    @property
    def rule_type(self) -> str:
        return "exclude_values"


class ExcludeTrueStep(BaseStep):
    """
    Drops records whose boolean field is true. False and null are kept.
    """

    def transform(self, df: DataFrame) -> DataFrame:
        field = col(self.field_name)
        return df.filter(field.isNull() | ~field)

    @property
    def rule_type(self) -> str:
        return "exclude_true"


class RequiredFieldStep(BaseStep):
    """
    Drops records where the field is null.

    Unlike other steps this one also runs when the column is missing
    entirely, in which case no record can satisfy it.

    Parameters:
    - as_date: Also drop values without a leading calendar date (default False)
    """

    def __init__(self, rule_name: str, field_name: str | None = None, parameters: dict[str, Any] | None = None):
        super().__init__(rule_name, field_name, parameters)
        self.as_date = bool(self.parameters.get("as_date", False))

    def is_applicable(self, df: DataFrame) -> bool:
        return True

    def transform(self, df: DataFrame) -> DataFrame:
        if self.field_name not in df.columns:
            return df.limit(0)
        value = event_day(col(self.field_name)) if self.as_date else col(self.field_name)
        return df.filter(value.isNotNull())

    @property
    def rule_type(self) -> str:
        return "required"


class ColumnsDifferStep(BaseStep):
    """
    Drops records where two fields hold the same value.

    Parameters:
    - other_field: Field compared with field_name
    """

    def __init__(self, rule_name: str, field_name: str | None = None, parameters: dict[str, Any] | None = None):
        super().__init__(rule_name, field_name, parameters)
        self.other_field = self.parameters.get("other_field")
        if not self.other_field:
            raise ValueError("ColumnsDifferStep requires 'other_field' parameter")

    def is_applicable(self, df: DataFrame) -> bool:
        return self.field_name in df.columns and self.other_field in df.columns

    def transform(self, df: DataFrame) -> DataFrame:
        left, right = col(self.field_name), col(self.other_field)
        return df.filter(left.isNull() | right.isNull() | (left != right))

    @property
    def rule_type(self) -> str:
        return "columns_differ"
