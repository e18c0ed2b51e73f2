"""
Prometheus metrics for the occurrence cleaning pipelines

A cleaning run is a short-lived batch job, so metrics are exported by
writing the registry to a textfile for the node-exporter textfile collector
rather than by serving them over HTTP.
"""
from pathlib import Path

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    write_to_textfile,
)

REGISTRY = CollectorRegistry()


# =======================
# RECORD COUNTS
# =======================

records_read_total = Counter(
    name="cleaning_records_read_total",
    documentation="Occurrence records read from the source file",
    labelnames=["source_id"],
    registry=REGISTRY,
)

records_excluded_total = Counter(
    name="cleaning_records_excluded_total",
    documentation="Occurrence records removed, by the rule or validator step that removed them",
    labelnames=["source_id", "rule_name"],
    registry=REGISTRY,
)

records_written_total = Counter(
    name="cleaning_records_written_total",
    documentation="Occurrence records written to the cleaned CSV",
    labelnames=["source_id"],
    registry=REGISTRY,
)

validator_flags_total = Counter(
    name="cleaning_validator_flags_total",
    documentation="Records failing each coordinate validator test",
    labelnames=["source_id", "test"],
    registry=REGISTRY,
)

# =======================
# RUN OUTCOMES
# =======================

run_duration_seconds = Histogram(
    name="cleaning_run_duration_seconds",
    documentation="Wall-clock duration of a cleaning run",
    labelnames=["source_id"],
    buckets=[1.0, 5.0, 10.0, 30.0, 60.0, 120.0, 300.0, 600.0],
    registry=REGISTRY,
)

runs_total = Counter(
    name="cleaning_runs_total",
    documentation="Cleaning runs by outcome",
    labelnames=["source_id", "status"],  # status: success, failure
    registry=REGISTRY,
)


def generate_metrics() -> bytes:
    """Render the registry in Prometheus text format"""
    return generate_latest(REGISTRY)


def write_metrics(path: str | Path) -> None:
    """
    Write the registry to a textfile

    Args:
        path: Destination .prom file; parent directories are created
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    write_to_textfile(str(path), REGISTRY)


class MetricsCollector:
    """
    Records the outcome of cleaning runs into the module registry.
    """

    def record_read(self, source_id: str, record_count: int) -> None:
        if record_count > 0:
            records_read_total.labels(source_id=source_id).inc(record_count)

    def record_exclusions(self, source_id: str, rule_name: str, record_count: int) -> None:
        if record_count > 0:
            records_excluded_total.labels(source_id=source_id, rule_name=rule_name).inc(record_count)

    def record_validator_flags(self, source_id: str, flag_counts: dict[str, int]) -> None:
        for test, count in flag_counts.items():
            if count > 0:
                validator_flags_total.labels(source_id=source_id, test=test).inc(count)

    def record_written(self, source_id: str, record_count: int) -> None:
        if record_count > 0:
            records_written_total.labels(source_id=source_id).inc(record_count)

    def record_run(self, source_id: str, success: bool, duration_seconds: float = 0.0) -> None:
        status = "success" if success else "failure"
        runs_total.labels(source_id=source_id, status=status).inc()
        if duration_seconds > 0:
            run_duration_seconds.labels(source_id=source_id).observe(duration_seconds)
