"""
Pytest configuration and fixtures for occurrence-cleaning tests

Spark session, typed occurrence frames and fixture paths shared by all test
levels.
"""
import datetime
import os
from pathlib import Path
from typing import Any, Callable, Generator

import pytest
from pyspark.sql import DataFrame, SparkSession
from pyspark.sql.types import DoubleType, StringType

from occurrence_cleaning.cli.clean_cli import create_spark_session
from occurrence_cleaning.core.schema import RECORD_ORDER, occurrence_struct


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that only need a local Spark session"
    )
    config.addinivalue_line(
        "markers", "integration: Tests running a full cleaning pipeline on fixture files"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests through the command-line interface"
    )
    config.addinivalue_line(
        "markers", "slow: Property-based tests running many Spark jobs"
    )


# =======================
# SPARK FIXTURES
# =======================

TEST_SESSION_CONFIG = {
    "spark.sql.shuffle.partitions": "2",
    "spark.sql.adaptive.enabled": "false",
    "spark.driver.memory": "1g",
    "spark.ui.enabled": "false",
    "spark.sql.warehouse.dir": "/tmp/occurrence-cleaning-warehouse",
}


@pytest.fixture(scope="session")
def spark_session() -> Generator[SparkSession, None, None]:
    """
    Local two-core session with the CLI's settings

    Adaptive execution is off so small fixture frames keep two partitions
    and exercise the ordering code paths.
    """
    spark = create_spark_session(
        "occurrence-cleaning-test", master="local[2]", extra_config=TEST_SESSION_CONFIG
    )
    spark.sparkContext.setLogLevel("ERROR")

    yield spark

    spark.stop()


@pytest.fixture
def spark_test_session(spark_session) -> SparkSession:
    """The shared session with the cache cleared before each test"""
    spark_session.catalog.clearCache()
    return spark_session


# =======================
# DATA FIXTURES
# =======================

def _coerce(value: Any, data_type) -> Any:
    if value is None:
        return None
    if isinstance(data_type, DoubleType) and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if isinstance(data_type, StringType) and isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return value


@pytest.fixture(scope="session")
def make_occurrences(spark_session) -> Callable[..., DataFrame]:
    """
    Build typed occurrence DataFrames from dicts

    Columns are the union of the dict keys in first-seen order (or the given
    list) plus the record order column, typed with the canonical schema.
    Records are numbered in list order.

    Usage:
        df = make_occurrences([{"decimalLatitude": -60.5, "eventDate": "2010-01-05"}])
    """
    def _make(records: list[dict[str, Any]], columns: list[str] | None = None) -> DataFrame:
        if columns is None:
            columns = []
            for record in records:
                for name in record:
                    if name not in columns:
                        columns.append(name)
        columns = [name for name in columns if name != RECORD_ORDER] + [RECORD_ORDER]

        schema = occurrence_struct(columns)
        rows = []
        for position, record in enumerate(records):
            values = {**record, RECORD_ORDER: record.get(RECORD_ORDER, position)}
            rows.append(tuple(_coerce(values.get(field.name), field.dataType) for field in schema.fields))

        return spark_session.createDataFrame(rows, schema)

    return _make


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture(scope="session")
def test_data_dir() -> Path:
    """Directory holding the GBIF and SCAR fixture downloads"""
    return Path(os.path.dirname(__file__)) / "fixtures"


@pytest.fixture(scope="session")
def config_path() -> Path:
    """Path to the shipped cleaning configuration"""
    return Path(os.path.dirname(os.path.dirname(__file__))) / "config" / "cleaning.yaml"
