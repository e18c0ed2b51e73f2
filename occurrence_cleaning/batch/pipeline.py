"""
Batch cleaning pipeline orchestration.

Coordinates the flow: read → filter chain → coordinate validation → write
"""

from pathlib import Path

from pyspark.sql import DataFrame, SparkSession
from pyspark.sql import functions as F

from occurrence_cleaning.batch.readers import OccurrenceReader
from occurrence_cleaning.batch.writers import CsvWriter
from occurrence_cleaning.coordinates import (
    FLAG_COLUMNS,
    REVIEW_FLAGS,
    CoordinateValidator,
    SparkCoordinateValidator,
    ValidatorUnavailableError,
    failure_counts,
)
from occurrence_cleaning.coordinates.base import DUPLICATES, SUMMARY
from occurrence_cleaning.core.models import CleaningReport, RuleDefinition, SourceConfig
from occurrence_cleaning.core.rules import RuleEngine, build_rule_definitions
from occurrence_cleaning.core.schema import is_internal
from occurrence_cleaning.observability.logger import get_logger, log_operation
from occurrence_cleaning.observability.metrics import MetricsCollector

logger = get_logger(__name__)

VALIDATOR_RULE_NAME = "coordinate_validator"


class CleaningPipeline:
    """
    Cleans one source's occurrence download.

    Flow:
    1. Read the occurrence file into typed records
    2. Apply the source's ordered rule chain
    3. Flag coordinates; drop invalid records and secondary duplicates
    4. Write survivors to one CSV (and, if configured, flagged-but-kept
       records to a review CSV)

    Nothing is written unless every stage before the writer succeeded.
    """

    def __init__(
        self,
        spark: SparkSession,
        config: SourceConfig,
        rules: list[RuleDefinition] | None = None,
        validator: CoordinateValidator | None = None,
        reader: OccurrenceReader | None = None,
        writer: CsvWriter | None = None,
        metrics: MetricsCollector | None = None,
    ):
        """
        Initialize cleaning pipeline.

        Args:
            spark: Active Spark session
            config: Source configuration
            rules: Rule definitions in evaluation order; defaults to the
                   built-in library entries named in config.rules
            validator: Coordinate validator (default SparkCoordinateValidator)
            reader: Occurrence reader
            writer: CSV writer
            metrics: Metrics collector

        Raises:
            ValueError: If a rule is unknown or misconfigured
        """
        self.spark = spark
        self.config = config

        self.rules = rules if rules is not None else build_rule_definitions(config.rules)
        self.rule_engine = RuleEngine(self.rules)
        self.validator = validator or SparkCoordinateValidator()
        self.reader = reader or OccurrenceReader(spark)
        self.writer = writer or CsvWriter()
        self.metrics = metrics or MetricsCollector()

    def run(self, input_path: str | Path | None = None, output_path: str | Path | None = None) -> CleaningReport:
        """
        Clean the source's occurrence file.

        Args:
            input_path: Overrides config.input_path
            output_path: Overrides config.output_path

        Returns:
            CleaningReport with per-rule and validator counts

        Raises:
            FileNotFoundError: If the input cannot be found
            ValueError: If the input lacks coordinate columns
            ValidatorUnavailableError: If coordinate validation fails
        """
        source_id = self.config.source_id
        input_path = str(input_path or self.config.input_path)
        output_path = str(output_path or self.config.output_path)

        with log_operation(f"Cleaning {source_id}", logger=logger, source_id=source_id) as operation:
            try:
                report = self._run(source_id, input_path, output_path)
            except Exception:
                self.metrics.record_run(source_id, success=False, duration_seconds=operation.elapsed)
                raise
            operation.set(
                records_written=report.written_records,
                records_removed=report.total_records - report.written_records,
            )
            self.metrics.record_run(source_id, success=True, duration_seconds=operation.elapsed)

        for line in report.summary_lines():
            logger.info(line, extra={"source_id": source_id})
        return report

    def _run(self, source_id: str, input_path: str, output_path: str) -> CleaningReport:
        # Step 1: Read file
        df = self.reader.read(input_path, delimiter=self.config.delimiter, quote=self.config.quote)
        total_records = df.count()
        logger.info(
            f"Read {total_records} records",
            extra={"source_id": source_id, "input_path": input_path, "records": total_records},
        )
        self.metrics.record_read(source_id, total_records)

        # Step 2: Rule chain
        cleaned, rule_results = self.rule_engine.apply_with_results(df)
        for result in rule_results:
            self.metrics.record_exclusions(source_id, result.rule_name, result.rows_removed)
        after_rules = rule_results[-1].rows_after if rule_results else total_records

        # Step 3: Coordinate validation
        flagged, flag_counts = self._validate(cleaned)
        self.metrics.record_validator_flags(source_id, flag_counts)

        kept = flagged.filter(F.col(SUMMARY) & F.col(DUPLICATES))
        kept_count = kept.count()
        validator_removed = after_rules - kept_count
        self.metrics.record_exclusions(source_id, VALIDATOR_RULE_NAME, validator_removed)
        logger.info(
            f"Coordinate validator removed {validator_removed} records",
            extra={
                "source_id": source_id,
                "rows_before": after_rules,
                "rows_after": kept_count,
                "invalid": flag_counts[SUMMARY],
                "duplicates": flag_counts[DUPLICATES],
            },
        )

        suspicious = F.lit(False)
        for flag in REVIEW_FLAGS:
            suspicious = suspicious | ~F.col(flag)
        review = kept.filter(suspicious)
        review_count = review.count()
        if review_count > 0:
            logger.warning(
                f"{review_count} records flagged for manual review (kept in output)",
                extra={
                    "source_id": source_id,
                    "review_records": review_count,
                    **{flag: flag_counts[flag] for flag in REVIEW_FLAGS},
                },
            )

        # Step 4: Write; the review file is staged with the output so that
        # neither replaces an existing file unless both were written
        outputs = [(kept.drop(*FLAG_COLUMNS), output_path)]
        review_path = None
        if self.config.review_flags and self.config.review_path:
            review_path = self._review_path(output_path)
            review_columns = [name for name in kept.columns if name not in FLAG_COLUMNS or name in REVIEW_FLAGS]
            outputs.append((review.select(*[f"`{name}`" for name in review_columns]), review_path))

        written = self.writer.write_together(outputs)[0]
        self.metrics.record_written(source_id, written)

        output_columns = [name for name in kept.columns if name not in FLAG_COLUMNS and not is_internal(name)]

        flagged.unpersist()
        cleaned.unpersist()

        return CleaningReport(
            source_id=source_id,
            input_path=input_path,
            output_path=output_path,
            total_records=total_records,
            rule_results=rule_results,
            validator_flags=flag_counts,
            validator_removed=validator_removed,
            review_records=review_count,
            review_path=review_path,
            written_records=written,
            output_columns=output_columns,
        )

    def _validate(self, df: DataFrame) -> tuple[DataFrame, dict[str, int]]:
        """Flag coordinates and count failures per test."""
        try:
            flagged = self.validator.flag(
                df,
                species=self.config.species_field,
                dataset=self.config.dataset_field,
                additions=self.config.duplicate_fields,
            )
            return flagged, failure_counts(flagged)
        except ValidatorUnavailableError:
            raise
        except Exception as e:
            raise ValidatorUnavailableError(f"Coordinate validation failed: {e}", cause=e) from e

    def _review_path(self, output_path: str) -> str:
        """Review file sits beside the output when the output was redirected."""
        configured = Path(self.config.review_path)
        if output_path == self.config.output_path:
            return str(configured)
        return str(Path(output_path).parent / configured.name)
