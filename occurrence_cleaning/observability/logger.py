"""
Structured logging for the occurrence cleaning pipelines

All package loggers are children of the `occurrence_cleaning` logger, which
owns the single handler. Records are rendered as JSON by python-json-logger,
or as plain text for local runs. Row counts travel as extra fields so that a
run's exclusions can be reconstructed from the log alone.
"""
import logging
import os
import sys
import time
from typing import Any

from pythonjsonlogger import jsonlogger

PACKAGE_LOGGER = "occurrence_cleaning"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

JSON_FORMAT = "%(timestamp)s %(level)s %(logger)s %(message)s"
TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s [%(source_id)s] %(message)s"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter adding timestamp, level, logger, location and process
    fields. Extra fields passed by the caller (rule, rows_removed, ...) are
    emitted as top-level keys.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["location"] = f"{record.module}:{record.funcName}"
        log_record["process_id"] = record.process


class SourceContextFilter(logging.Filter):
    """Give every record a source_id so the text format can print it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "source_id"):
            record.source_id = "-"
        return True


def _build_handler(format_type: str, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if format_type == "json":
        handler.setFormatter(CustomJsonFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    else:
        handler.addFilter(SourceContextFilter())
        handler.setFormatter(logging.Formatter(fmt=TEXT_FORMAT, datefmt="%H:%M:%S"))
    return handler


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Configure a logger with one stdout handler

    Calling it again replaces the handler, so the CLI can reconfigure the
    package logger after modules have created theirs.

    Args:
        name: Logger name (default: the package logger)
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL; defaults to the
               LOG_LEVEL environment variable, then INFO
        format_type: "json" or "text"; defaults to the LOG_FORMAT
                     environment variable, then json

    Returns:
        Configured logger
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_level = LOG_LEVELS.get(level_name, logging.INFO)
    format_type = (format_type or os.getenv("LOG_FORMAT", "json")).lower()

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()
    logger.addHandler(_build_handler(format_type, log_level))
    logger.propagate = False

    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Get a logger, configuring its owner on first use

    Module loggers (`occurrence_cleaning.*`) share the package logger's
    handler; any other name gets a handler of its own.

    Args:
        name: Logger name, usually `__name__`

    Returns:
        Logger instance
    """
    owner = PACKAGE_LOGGER if name.startswith(PACKAGE_LOGGER + ".") else name
    if not logging.getLogger(owner).handlers:
        setup_logger(owner)
    return logging.getLogger(name)


def log_rule_result(logger: logging.Logger, result: Any, **extra_fields) -> None:
    """
    Log the outcome of one cleaning step

    Args:
        logger: Logger to write to
        result: RuleResult of the step
        **extra_fields: Additional fields (e.g. source_id)
    """
    fields = {
        "rule": result.rule_name,
        "rule_type": result.rule_type,
        "rows_before": result.rows_before,
        "rows_after": result.rows_after,
        "rows_removed": result.rows_removed,
        **extra_fields,
    }
    if result.skipped:
        logger.warning(f"Skipped rule '{result.rule_name}': field not present", extra=fields)
        return
    if result.columns_removed:
        fields["columns_removed"] = result.columns_removed
    logger.info(f"Applied rule '{result.rule_name}': -{result.rows_removed} rows", extra=fields)


class log_operation:
    """
    Context manager logging the start, outcome and duration of an operation

    Fields attached with `set` while the operation runs are included in
    the completion record.

    Usage:
        with log_operation("Cleaning GBIF", logger=logger, source_id="GBIF") as op:
            report = pipeline.run()
            op.set(records_written=report.written_records)
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **extra_fields):
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.result_fields: dict[str, Any] = {}
        self.start_time: float | None = None

    @property
    def elapsed(self) -> float:
        """Seconds since the operation started"""
        if self.start_time is None:
            return 0.0
        return time.perf_counter() - self.start_time

    def set(self, **fields) -> None:
        self.result_fields.update(fields)

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.info(
            f"Starting: {self.operation_name}",
            extra={"operation": self.operation_name, **self.extra_fields},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        fields = {
            "operation": self.operation_name,
            "duration_seconds": round(self.elapsed, 3),
            **self.extra_fields,
            **self.result_fields,
        }

        if exc_type is None:
            self.logger.info(f"Completed: {self.operation_name}", extra={**fields, "status": "success"})
        else:
            self.logger.error(
                f"Failed: {self.operation_name}",
                extra={
                    **fields,
                    "status": "error",
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val),
                },
                exc_info=True,
            )
        return False
