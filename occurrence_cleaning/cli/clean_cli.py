"""
Command-line interface for the occurrence cleaning pipelines.

Usage:
    occurrence-clean run --source {GBIF,SCAR,all} [options]
    occurrence-clean rules --source {GBIF,SCAR}
"""

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError
from pyspark.sql import SparkSession

from occurrence_cleaning.batch.pipeline import CleaningPipeline
from occurrence_cleaning.core.models import RuleDefinition, SourceConfig
from occurrence_cleaning.core.rules import (
    DEFAULT_SOURCES,
    CleaningConfigLoader,
    rules_for_source,
)
from occurrence_cleaning.observability.logger import get_logger, setup_logger
from occurrence_cleaning.observability.metrics import write_metrics

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = "config/cleaning.yaml"
SOURCES = list(DEFAULT_SOURCES)

SESSION_CONFIG = {
    # Values that cannot be cast become null instead of failing the job
    "spark.sql.ansi.enabled": "false",
    "spark.sql.legacy.timeParserPolicy": "CORRECTED",
    "spark.sql.adaptive.enabled": "true",
    "spark.sql.adaptive.coalescePartitions.enabled": "true",
}


def create_spark_session(
    app_name: str = "OccurrenceCleaning",
    master: str = "local[*]",
    extra_config: dict[str, str] | None = None,
) -> SparkSession:
    """
    Create Spark session for cleaning runs.

    Args:
        app_name: Application name
        master: Spark master URL
        extra_config: Settings applied on top of SESSION_CONFIG

    Returns:
        SparkSession
    """
    builder = SparkSession.builder.appName(app_name).master(master)
    for key, value in {**SESSION_CONFIG, **(extra_config or {})}.items():
        builder = builder.config(key, value)

    return builder.getOrCreate()


def load_source_settings(
    source_id: str,
    config_path: str | None,
) -> tuple[SourceConfig, list[RuleDefinition]]:
    """
    Resolve a source's configuration and rule chain.

    Falls back to the built-in defaults when no configuration file exists
    at the default location. An explicitly requested file must exist.

    Raises:
        FileNotFoundError: If an explicit configuration file is missing
        ValueError: If the configuration is invalid
        pydantic.ValidationError: If a source field has an invalid value
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if Path(path).exists():
        loader = CleaningConfigLoader(path)
        return loader.load_source(source_id), loader.load_rules(source_id)

    if config_path:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.warning(f"Configuration file not found: {path}, using built-in defaults")
    return DEFAULT_SOURCES[source_id], rules_for_source(source_id)


def _redirect(config: SourceConfig, input_path: str | None, output_dir: str | None) -> SourceConfig:
    updates = {}
    if input_path:
        updates["input_path"] = input_path
    if output_dir:
        updates["output_path"] = str(Path(output_dir) / Path(config.output_path).name)
        if config.review_path:
            updates["review_path"] = str(Path(output_dir) / Path(config.review_path).name)
    return config.model_copy(update=updates) if updates else config


def run_command(args) -> int:
    """
    Execute the cleaning runs.

    A source whose configuration is invalid fails on its own; the other
    sources still run.

    Args:
        args: Command-line arguments

    Returns:
        Exit code: 0 if every source succeeded, 1 otherwise
    """
    source_ids = SOURCES if args.source == "all" else [args.source]

    failed = []
    settings = {}
    for source_id in source_ids:
        try:
            config, rules = load_source_settings(source_id, args.config)
            settings[source_id] = (_redirect(config, args.input, args.output_dir), rules)
        except (FileNotFoundError, ValueError, ValidationError) as e:
            logger.error(f"Invalid configuration for {source_id}: {e}", exc_info=True, extra={"source_id": source_id})
            failed.append(source_id)

    if settings:
        logger.info("Creating Spark session...")
        spark = create_spark_session(f"OccurrenceCleaning-{args.source}")
        try:
            for source_id, (config, rules) in settings.items():
                try:
                    pipeline = CleaningPipeline(spark, config, rules=rules)
                    report = pipeline.run()
                    logger.info(
                        f"{source_id} cleaned",
                        extra={
                            "source_id": source_id,
                            "records_read": report.total_records,
                            "records_written": report.written_records,
                            "output_path": report.output_path,
                        },
                    )
                except Exception as e:
                    logger.error(f"Cleaning {source_id} failed: {e}", exc_info=True, extra={"source_id": source_id})
                    failed.append(source_id)
        finally:
            if args.metrics_file:
                write_metrics(args.metrics_file)
                logger.info(f"Metrics written to {args.metrics_file}")
            spark.stop()

    if failed:
        logger.error(f"Sources failed: {', '.join(failed)}")
        return 1
    return 0


def rules_command(args) -> int:
    """Print a source's ordered rule chain."""
    try:
        config, rules = load_source_settings(args.source, args.config)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        print(f"\nError: {e}")
        return 1

    print(f"\n{'=' * 80}")
    print(f"RULE CHAIN FOR {config.source_id}")
    print(f"{'=' * 80}\n")
    print(f"{'#':<4} {'Rule':<40} {'Type':<20} {'Field'}")
    print(f"{'-' * 80}")
    for position, rule in enumerate(rules, start=1):
        status = "" if rule.enabled else " (disabled)"
        print(f"{position:<4} {rule.rule_name + status:<40} {rule.rule_type:<20} {rule.field_name or '-'}")
        if rule.description:
            print(f"{'':<4} {rule.description}")
    print(f"\n{'=' * 80}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="occurrence-clean",
        description="Clean crabeater seal occurrence downloads",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Clean both sources with the default paths
  occurrence-clean run --source all

  # Clean a GBIF archive into another directory
  occurrence-clean run --source GBIF --input Data/GBIF/download.zip --output-dir out/

  # Export run metrics for the node-exporter textfile collector
  occurrence-clean run --source SCAR --metrics-file metrics/cleaning.prom

  # Show the SCAR rule chain
  occurrence-clean rules --source SCAR
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Clean occurrence downloads")
    run_parser.add_argument(
        "--source",
        required=True,
        choices=SOURCES + ["all"],
        help="Source to clean"
    )
    run_parser.add_argument(
        "--input",
        help="Input file (DwC-A zip or occurrence.txt); only with a single source"
    )
    run_parser.add_argument(
        "--output-dir",
        help="Directory for the cleaned CSV (default: from configuration)"
    )
    run_parser.add_argument(
        "--config",
        help=f"Path to cleaning configuration YAML (default: {DEFAULT_CONFIG_PATH} if present)"
    )
    run_parser.add_argument(
        "--metrics-file",
        help="Write Prometheus metrics to this textfile"
    )

    rules_parser = subparsers.add_parser("rules", help="Show a source's rule chain")
    rules_parser.add_argument(
        "--source",
        required=True,
        choices=SOURCES,
        help="Source whose rules to show"
    )
    rules_parser.add_argument(
        "--config",
        help=f"Path to cleaning configuration YAML (default: {DEFAULT_CONFIG_PATH} if present)"
    )

    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        help="Log output format (default: LOG_FORMAT environment variable, then json)"
    )

    args = parser.parse_args(argv)

    if args.log_format:
        setup_logger(format_type=args.log_format)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "run":
        if args.input and args.source == "all":
            parser.error("--input requires a single --source")
        return run_command(args)
    return rules_command(args)


if __name__ == "__main__":
    sys.exit(main())
