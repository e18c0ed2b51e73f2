"""
Integration tests for the GBIF cleaning pipeline.

Runs the full chain (read, rules, coordinate validation, write) over a
fixture download containing one record per exclusion reason.
"""

import csv

import pytest

from occurrence_cleaning.batch import CleaningPipeline
from occurrence_cleaning.coordinates import SparkCoordinateValidator
from occurrence_cleaning.core.rules import DEFAULT_SOURCES

pytestmark = pytest.mark.integration

EXPECTED_COLUMNS = [
    "gbifID",
    "species",
    "occurrenceStatus",
    "basisOfRecord",
    "decimalLatitude",
    "decimalLongitude",
    "coordinateUncertaintyInMeters",
    "hasGeospatialIssues",
    "eventDate",
    "eventTime",
    "year",
    "month",
    "day",
    "individualCount",
    "collectionCode",
    "samplingProtocol",
    "datasetKey",
    "publisher",
]


def read_rows(path):
    with open(path, newline="") as f:
        return list(csv.DictReader(f))


@pytest.fixture
def gbif_config(test_data_dir, tmp_path):
    return DEFAULT_SOURCES["GBIF"].model_copy(update={
        "input_path": str(test_data_dir / "gbif_occurrence.txt"),
        "output_path": str(tmp_path / "GBIF_cleaned.csv"),
        "review_path": str(tmp_path / "GBIF_flagged_review.csv"),
    })


@pytest.fixture
def gbif_report(spark_test_session, gbif_config):
    return CleaningPipeline(spark_test_session, gbif_config).run()


class TestGbifPipeline:
    """Full GBIF run over the fixture download"""

    def test_survivors(self, gbif_report, gbif_config):
        rows = read_rows(gbif_config.output_path)

        assert [row["gbifID"] for row in rows] == ["1", "11", "12", "16", "25", "26"]
        assert gbif_report.total_records == 26
        assert gbif_report.written_records == 6

    def test_header_drops_empty_columns(self, gbif_report, gbif_config):
        with open(gbif_config.output_path, newline="") as f:
            header = next(csv.reader(f))

        assert header == EXPECTED_COLUMNS
        assert gbif_report.output_columns == EXPECTED_COLUMNS

    def test_rewritten_values(self, gbif_report, gbif_config):
        rows = {row["gbifID"]: row for row in read_rows(gbif_config.output_path)}

        assert rows["11"]["basisOfRecord"] == "MACHINE_OBSERVATION"
        assert rows["12"]["individualCount"] == "1"
        assert (rows["16"]["eventDate"], rows["16"]["year"], rows["16"]["month"], rows["16"]["day"]) == (
            "2008-03-15", "2008", "3", "15",
        )
        assert rows["25"]["eventDate"] == "2014-12-01T10:30:00Z"
        assert (rows["25"]["year"], rows["25"]["month"], rows["25"]["day"]) == ("2014", "12", "1")
        assert rows["26"]["eventDate"] == "2015-01-10/2015-01-12"
        assert rows["1"]["coordinateUncertaintyInMeters"] == ""

    def test_rule_counts(self, gbif_report):
        removed = {result.rule_name: result.rows_removed for result in gbif_report.rule_results}

        assert removed == {
            "status_filter": 1,
            "latitude_bound": 1,
            "specimen_exclusion": 1,
            "geospatial_issue_exclusion": 1,
            "uncertainty_sentinel_exclusion": 1,
            "unknown_publisher_exclusion": 1,
            "death_remark_exclusion": 1,
            "approximate_coordinate_exclusion": 1,
            "identical_coordinate_exclusion": 1,
            "biologging_reclassification": 0,
            "zero_count_normalization": 0,
            "collection_code_exclusion": 1,
            "identification_uncertainty_exclusion": 1,
            "issue_code_exclusion": 1,
            "expedition_date_backfill": 0,
            "date_parts_backfill": 0,
            "missing_date_exclusion": 2,
            "minimum_year_filter": 1,
            "primary_deduplication": 1,
            "uncertainty_ceiling": 1,
            "empty_column_pruning": 0,
        }
        assert gbif_report.rule_results[-1].columns_removed == ["occurrenceRemarks", "issue"]

    def test_validator_counts(self, gbif_report):
        flags = gbif_report.validator_flags

        assert gbif_report.validator_removed == 3
        assert flags["cc_val"] == 1
        assert flags["cc_cap"] == 1
        assert flags["cc_dpl"] == 1
        assert flags["cc_summary"] == 2

    def test_review_file_has_header_only(self, gbif_report, gbif_config):
        with open(gbif_config.review_path, newline="") as f:
            lines = list(csv.reader(f))

        assert gbif_report.review_records == 0
        assert gbif_report.review_path == gbif_config.review_path
        assert lines[0][-2:] == ["cc_outl", "cc_ddmm"]
        assert len(lines) == 1


def test_review_file_lists_flagged_records(spark_test_session, gbif_config):
    # Thresholds that flag every dataset as degree-minute converted
    validator = SparkCoordinateValidator(ddmm_min_records=1, ddmm_min_span=0.0, ddmm_diff=-10.0)

    report = CleaningPipeline(spark_test_session, gbif_config, validator=validator).run()

    review = read_rows(gbif_config.review_path)
    assert report.review_records == 6
    assert [row["gbifID"] for row in review] == ["1", "11", "12", "16", "25", "26"]
    assert {row["cc_ddmm"] for row in review} == {"false"}
    # Flagged records stay in the cleaned output
    assert len(read_rows(gbif_config.output_path)) == 6


def test_review_file_follows_redirected_output(spark_test_session, test_data_dir, tmp_path):
    out_dir = tmp_path / "redirected"

    report = CleaningPipeline(spark_test_session, DEFAULT_SOURCES["GBIF"]).run(
        input_path=test_data_dir / "gbif_occurrence.txt",
        output_path=out_dir / "cleaned.csv",
    )

    assert report.review_path == str(out_dir / "GBIF_flagged_review.csv")
    assert (out_dir / "GBIF_flagged_review.csv").exists()
