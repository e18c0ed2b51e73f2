"""
Base interface for all cleaning steps.

A step takes a DataFrame of occurrence records and returns a new one; it
never mutates its input. Filter steps remove rows, rewrite steps change
field values and structural steps change the set of rows or columns as a
whole.
"""

from abc import ABC, abstractmethod
from typing import Any

from pyspark.sql import Column, DataFrame
from pyspark.sql import functions as F


def col(name: str) -> Column:
    """Column reference that tolerates dots and spaces in field names."""
    return F.col(f"`{name}`")


class BaseStep(ABC):
    """
    Abstract base class for cleaning steps.

    Each subclass implements one step type (equals, range, pattern_exclusion,
    deduplicate, ...). `requires_field` declares whether `field_name` is
    mandatory for the type.
    """

    requires_field: bool = True

    def __init__(self, rule_name: str, field_name: str | None = None, parameters: dict[str, Any] | None = None):
        """
        Initialize step.

        Args:
            rule_name: Library name of the rule this step implements
            field_name: Field the step reads or rewrites
            parameters: Step-specific parameters

        Raises:
            ValueError: If a field is required but not given
        """
        self.rule_name = rule_name
        self.field_name = field_name
        self.parameters = parameters or {}

        if self.requires_field and not self.field_name:
            raise ValueError(f"{self.__class__.__name__} '{rule_name}' requires a field_name")

    def is_applicable(self, df: DataFrame) -> bool:
        """
        Whether the step can run against this DataFrame.

        Steps on a field the source does not provide are skipped: an absent
        optional field never excludes a record.
        """
        return self.field_name is None or self.field_name in df.columns

    def apply(self, df: DataFrame) -> DataFrame:
        """Run the step, or return the input unchanged when not applicable."""
        if not self.is_applicable(df):
            return df
        return self.transform(df)

    @abstractmethod
    def transform(self, df: DataFrame) -> DataFrame:
        """
        Return a new DataFrame with the step applied.

        Args:
            df: Occurrence records

        Returns:
            Transformed records
        """
        pass

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Return the step type identifier."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rule={self.rule_name}, field={self.field_name}, params={self.parameters})"
