"""
Unit tests for structured logging and metrics.
"""

import json
import logging

import pytest

from occurrence_cleaning.core.models import RuleResult
from occurrence_cleaning.observability.logger import (
    PACKAGE_LOGGER,
    get_logger,
    log_operation,
    log_rule_result,
    setup_logger,
)
from occurrence_cleaning.observability.metrics import (
    REGISTRY,
    MetricsCollector,
    generate_metrics,
    write_metrics,
)

pytestmark = pytest.mark.unit


def sample(name, **labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestLogger:
    """Tests for JSON logging"""

    def test_json_output_has_extra_fields(self, capsys):
        logger = setup_logger("test-json", level="INFO", format_type="json")

        logger.info("Applied rule", extra={"rule": "latitude_bound", "rows_removed": 3})

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["message"] == "Applied rule"
        assert record["level"] == "INFO"
        assert record["logger"] == "test-json"
        assert record["rule"] == "latitude_bound"
        assert record["rows_removed"] == 3

    def test_text_format(self, capsys):
        logger = setup_logger("test-text", level="INFO", format_type="text")

        logger.warning("Field not present")

        out = capsys.readouterr().out
        assert "WARNING test-text [-] Field not present" in out

    def test_text_format_shows_source(self, capsys):
        logger = setup_logger("test-text-source", level="INFO", format_type="text")

        logger.info("Read 26 records", extra={"source_id": "GBIF"})

        assert "[GBIF] Read 26 records" in capsys.readouterr().out

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        logger = setup_logger("test-env")

        assert logger.level == logging.ERROR

    def test_setup_does_not_stack_handlers(self):
        setup_logger("test-handlers")
        logger = setup_logger("test-handlers")

        assert len(logger.handlers) == 1

    def test_get_logger_reuses_configuration(self):
        first = get_logger("test-reuse")

        assert get_logger("test-reuse") is first
        assert len(first.handlers) == 1

    def test_module_loggers_share_package_handler(self):
        module_logger = get_logger("occurrence_cleaning.batch.pipeline")

        assert module_logger.handlers == []
        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == 1
        assert module_logger.getEffectiveLevel() == logging.getLogger(PACKAGE_LOGGER).level


class TestLogOperation:
    """Tests for the log_operation context manager"""

    def test_logs_success(self, capsys):
        logger = setup_logger("test-operation", format_type="json")

        with log_operation("Cleaning SCAR", logger=logger, source_id="SCAR") as op:
            pass

        lines = [json.loads(line) for line in capsys.readouterr().out.strip().splitlines()]
        assert lines[0]["message"] == "Starting: Cleaning SCAR"
        assert lines[-1]["status"] == "success"
        assert lines[-1]["source_id"] == "SCAR"
        assert op.elapsed >= 0

    def test_logs_and_reraises_failure(self, capsys):
        logger = setup_logger("test-operation-error", format_type="json")

        with pytest.raises(RuntimeError):
            with log_operation("Cleaning GBIF", logger=logger):
                raise RuntimeError("validator down")

        last = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert last["status"] == "error"
        assert last["error_type"] == "RuntimeError"
        assert last["error_message"] == "validator down"

    def test_set_fields_reach_completion_record(self, capsys):
        logger = setup_logger("test-operation-set", format_type="json")

        with log_operation("Cleaning SCAR", logger=logger) as op:
            op.set(records_written=3)

        lines = [json.loads(line) for line in capsys.readouterr().out.strip().splitlines()]
        assert "records_written" not in lines[0]
        assert lines[-1]["records_written"] == 3


class TestLogRuleResult:
    """Tests for log_rule_result"""

    def test_applied_rule(self, capsys):
        logger = setup_logger("test-rule-applied", format_type="json")
        result = RuleResult(
            rule_name="empty_column_pruning",
            rule_type="prune_empty_columns",
            rows_before=8,
            rows_after=8,
            columns_removed=["issue"],
        )

        log_rule_result(logger, result, source_id="GBIF")

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["level"] == "INFO"
        assert record["rule"] == "empty_column_pruning"
        assert record["rows_removed"] == 0
        assert record["columns_removed"] == ["issue"]
        assert record["source_id"] == "GBIF"

    def test_skipped_rule_warns(self, capsys):
        logger = setup_logger("test-rule-skipped", format_type="json")
        result = RuleResult(rule_name="year_bound", rule_type="range", rows_before=5, rows_after=5, skipped=True)

        log_rule_result(logger, result, field="year")

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["level"] == "WARNING"
        assert record["field"] == "year"
        assert "columns_removed" not in record


class TestMetricsCollector:
    """Tests for MetricsCollector"""

    def test_counts_records(self):
        collector = MetricsCollector()
        before = sample("cleaning_records_excluded_total", source_id="TEST", rule_name="latitude_bound")

        collector.record_read("TEST", 10)
        collector.record_exclusions("TEST", "latitude_bound", 4)
        collector.record_exclusions("TEST", "latitude_bound", 0)

        after = sample("cleaning_records_excluded_total", source_id="TEST", rule_name="latitude_bound")
        assert after - before == 4

    def test_validator_flags_by_test(self):
        collector = MetricsCollector()
        before = sample("cleaning_validator_flags_total", source_id="TEST", test="cc_cap")

        collector.record_validator_flags("TEST", {"cc_cap": 2, "cc_val": 0})

        assert sample("cleaning_validator_flags_total", source_id="TEST", test="cc_cap") - before == 2

    def test_run_outcomes(self):
        collector = MetricsCollector()
        before = sample("cleaning_runs_total", source_id="TEST", status="failure")

        collector.record_run("TEST", success=False, duration_seconds=1.5)

        assert sample("cleaning_runs_total", source_id="TEST", status="failure") - before == 1
        assert b"cleaning_run_duration_seconds" in generate_metrics()

    def test_write_metrics_textfile(self, tmp_path):
        MetricsCollector().record_written("TEST", 3)
        path = tmp_path / "metrics" / "cleaning.prom"

        write_metrics(path)

        assert 'cleaning_records_written_total{source_id="TEST"}' in path.read_text()
