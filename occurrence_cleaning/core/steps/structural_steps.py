"""
Steps that act on the batch as a whole: deduplication and column pruning.
"""

from typing import Any

from pyspark.sql import DataFrame, Window
from pyspark.sql import functions as F

from occurrence_cleaning.core.schema import RECORD_ORDER, is_internal
from occurrence_cleaning.observability.logger import get_logger

from .base_step import BaseStep, col

logger = get_logger(__name__)


class DeduplicateStep(BaseStep):
    """
    Keeps one record per combination of key fields.

    The survivor of each group is the record that came first in the input
    file (lowest record order), so the result does not depend on how Spark
    partitions the data. Null key values compare equal to each other.

    Parameters:
    - keys: Fields forming the deduplication key
    - order_by: Tie-break column (default "_record_order")
    """

    requires_field = False

    def __init__(self, rule_name: str, field_name: str | None = None, parameters: dict[str, Any] | None = None):
        super().__init__(rule_name, field_name, parameters)
        self.keys = list(self.parameters.get("keys") or [])
        if not self.keys:
            raise ValueError("DeduplicateStep requires a non-empty 'keys' parameter")
        self.order_by = self.parameters.get("order_by", RECORD_ORDER)

    def is_applicable(self, df: DataFrame) -> bool:
        return any(key in df.columns for key in self.keys)

    def transform(self, df: DataFrame) -> DataFrame:
        keys = [key for key in self.keys if key in df.columns]
        if len(keys) < len(self.keys):
            logger.warning(
                f"Deduplicating '{self.rule_name}' on available keys only",
                extra={"rule": self.rule_name, "keys": keys},
            )

        if self.order_by not in df.columns:
            raise ValueError(
                f"Deduplication '{self.rule_name}' needs the '{self.order_by}' column to pick survivors"
            )

        window = Window.partitionBy(*[col(key) for key in keys]).orderBy(col(self.order_by).asc())
        return (
            df.withColumn("_dedup_rank", F.row_number().over(window))
            .filter(F.col("_dedup_rank") == 1)
            .drop("_dedup_rank")
        )

    @property
    def rule_type(self) -> str:
        return "deduplicate"


class PruneEmptyColumnsStep(BaseStep):
    """
    Drops every column that is null in all records.

    Internal bookkeeping columns are never dropped, and an empty batch keeps
    its columns so the output still carries a header.
    """

    requires_field = False

    def transform(self, df: DataFrame) -> DataFrame:
        candidates = [name for name in df.columns if not is_internal(name)]
        if not candidates or df.isEmpty():
            return df

        counts = df.select([F.count(col(name)).alias(name) for name in candidates]).first()
        empty = [name for name in candidates if counts[name] == 0]
        if not empty:
            return df
        return df.drop(*empty)

    @property
    def rule_type(self) -> str:
        return "prune_empty_columns"
