"""
Integration tests for the SCAR cleaning pipeline.
"""

import csv
import zipfile

import pytest

from occurrence_cleaning.batch import CleaningPipeline
from occurrence_cleaning.core.rules import DEFAULT_SOURCES

pytestmark = pytest.mark.integration

EXPECTED_COLUMNS = [
    "occurrenceID",
    "scientificName",
    "species",
    "decimalLatitude",
    "decimalLongitude",
    "coordinateUncertaintyInMeters",
    "hasGeospatialIssues",
    "eventDate",
    "individualCount",
    "datasetKey",
]


def read_rows(path):
    with open(path, newline="") as f:
        return list(csv.DictReader(f))


@pytest.fixture
def scar_config(test_data_dir, tmp_path):
    return DEFAULT_SOURCES["SCAR"].model_copy(update={
        "input_path": str(test_data_dir / "scar_occurrence.txt"),
        "output_path": str(tmp_path / "SCAR_cleaned.csv"),
    })


def test_scar_survivors(spark_test_session, scar_config, tmp_path):
    report = CleaningPipeline(spark_test_session, scar_config).run()

    rows = read_rows(scar_config.output_path)

    assert [row["occurrenceID"] for row in rows] == ["s1", "s11", "s12", "s15"]
    assert list(rows[0]) == EXPECTED_COLUMNS
    assert report.total_records == 15
    assert report.written_records == 4
    assert report.review_path is None
    assert sorted(path.name for path in tmp_path.iterdir()) == ["SCAR_cleaned.csv"]


def test_same_day_sightings_keep_their_times(spark_test_session, scar_config):
    CleaningPipeline(spark_test_session, scar_config).run()

    rows = {row["occurrenceID"]: row for row in read_rows(scar_config.output_path)}

    assert rows["s11"]["eventDate"] == "1988-01-15T08:00:00"
    assert rows["s15"]["eventDate"] == "1988-01-15T17:30:00"
    assert (rows["s11"]["decimalLatitude"], rows["s11"]["decimalLongitude"]) == (
        rows["s15"]["decimalLatitude"], rows["s15"]["decimalLongitude"],
    )


def test_scar_rule_and_validator_counts(spark_test_session, scar_config):
    report = CleaningPipeline(spark_test_session, scar_config).run()

    removed = {result.rule_name: result.rows_removed for result in report.rule_results}

    assert removed == {
        "species_filter": 1,
        "latitude_bound": 1,
        "geospatial_issue_exclusion": 1,
        "uncertainty_sentinel_exclusion": 1,
        "missing_date_exclusion": 1,
        "primary_deduplication": 1,
        "uncertainty_ceiling": 1,
        "zero_count_exclusion": 1,
        "missing_count_exclusion": 1,
        "empty_column_pruning": 0,
    }
    assert report.rule_results[-1].columns_removed == ["recordedBy", "occurrenceRemarks"]
    assert report.validator_flags["cc_equ"] == 1
    assert report.validator_flags["cc_val"] == 1
    assert report.validator_removed == 2


def test_scar_from_archive(spark_test_session, scar_config, test_data_dir, tmp_path):
    archive_path = tmp_path / "SCAR_APIS.zip"
    with zipfile.ZipFile(archive_path, "w") as archive:
        archive.write(test_data_dir / "scar_occurrence.txt", "occurrence.txt")
        archive.writestr("meta.xml", "<archive/>")

    report = CleaningPipeline(spark_test_session, scar_config).run(input_path=archive_path)

    assert report.written_records == 4
    assert (tmp_path / "SCAR_APIS" / "occurrence.txt").exists()
