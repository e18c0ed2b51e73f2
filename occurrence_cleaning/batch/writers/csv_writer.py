"""
Single-file CSV writer for cleaned occurrence records.
"""

import csv
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from pyspark.sql import DataFrame

from occurrence_cleaning.core.schema import RECORD_ORDER, is_internal
from occurrence_cleaning.observability.logger import get_logger

logger = get_logger(__name__)


@dataclass
class StagedCsv:
    """A CSV file written beside its destination, not yet in place."""

    output_path: Path
    staged_path: Path
    staging_dir: Path
    record_count: int
    columns: list[str]

    def commit(self) -> int:
        """Move the staged file over the destination."""
        try:
            os.replace(self.staged_path, self.output_path)
        finally:
            self.discard()

        logger.info(
            "Wrote CSV",
            extra={"path": str(self.output_path), "records": self.record_count, "columns": len(self.columns)},
        )
        return self.record_count

    def discard(self) -> None:
        shutil.rmtree(self.staging_dir, ignore_errors=True)


class CsvWriter:
    """
    Writes a DataFrame to exactly one CSV file.

    Spark writes a directory of part files, so the records are written to a
    temporary directory beside the target and the single part file is then
    renamed over it. Until that rename an existing output stays untouched.

    Embedded quotes are doubled (RFC 4180), which is what R, pandas and the
    csv module expect.
    """

    def __init__(self, date_format: str = "yyyy-MM-dd"):
        self.date_format = date_format

    def write(self, df: DataFrame, output_path: str | Path) -> int:
        """
        Write records as CSV with a header row.

        Internal columns are not written. Records are written in input file
        order when the record order column is present. Nulls become empty
        cells.

        Args:
            df: Records to write
            output_path: Destination CSV file; parent directories are created

        Returns:
            Number of records written
        """
        return self.stage(df, output_path).commit()

    def write_together(self, outputs: list[tuple[DataFrame, str | Path]]) -> list[int]:
        """
        Write several CSV files, replacing none of them unless all were staged.

        Args:
            outputs: (records, destination) pairs

        Returns:
            Number of records written per destination, in order
        """
        staged: list[StagedCsv] = []
        try:
            for df, output_path in outputs:
                staged.append(self.stage(df, output_path))
        except Exception:
            for pending in staged:
                pending.discard()
            raise

        return [pending.commit() for pending in staged]

    def stage(self, df: DataFrame, output_path: str | Path) -> StagedCsv:
        """
        Write records to a staging directory beside output_path.

        Raises:
            RuntimeError: If Spark produced more than one part file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        columns = [name for name in df.columns if not is_internal(name)]
        ordered = df.repartition(1)
        if RECORD_ORDER in df.columns:
            ordered = ordered.sortWithinPartitions(RECORD_ORDER)
        ordered = ordered.select(*[f"`{name}`" for name in columns])

        record_count = ordered.count()

        staging_dir = Path(tempfile.mkdtemp(prefix=f".{output_path.name}.", dir=output_path.parent))
        try:
            spark_dir = staging_dir / "csv"
            (
                ordered.write
                .mode("overwrite")
                .option("header", "true")
                .option("escape", '"')
                .option("dateFormat", self.date_format)
                .option("nullValue", "")
                .option("emptyValue", "")
                .csv(str(spark_dir))
            )

            part_files = sorted(spark_dir.glob("part-*.csv"))
            if len(part_files) > 1:
                raise RuntimeError(f"Expected one part file in {spark_dir}, found {len(part_files)}")

            if part_files:
                staged = part_files[0]
            else:
                # Spark writes no part file for an empty DataFrame
                staged = staging_dir / "empty.csv"
                with open(staged, "w", newline="") as f:
                    csv.writer(f).writerow(columns)
        except Exception:
            shutil.rmtree(staging_dir, ignore_errors=True)
            raise

        return StagedCsv(output_path, staged, staging_dir, record_count, columns)
