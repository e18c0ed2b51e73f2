"""
Unit tests for the Spark coordinate validator.
"""

import pytest

from occurrence_cleaning.coordinates import (
    FLAG_COLUMNS,
    SparkCoordinateValidator,
    ValidatorUnavailableError,
    failure_counts,
)
from occurrence_cleaning.core.schema import RECORD_ORDER

pytestmark = pytest.mark.unit

SPECIES = "Lobodon carcinophaga"


@pytest.fixture
def validator():
    """Validator without capitals or centroids, so tests only trip what they target"""
    return SparkCoordinateValidator(capitals=[], centroids=[])


def point(lon, lat, **extra):
    return {"species": SPECIES, "decimalLongitude": lon, "decimalLatitude": lat, "datasetKey": None, **extra}


def flags_by_order(flagged):
    return {row[RECORD_ORDER]: row.asDict() for row in flagged.collect()}


class TestBasicTests:
    """cc_val, cc_equ, cc_zer and cc_gbf"""

    def test_valid_record_passes_everything(self, validator, make_occurrences):
        flagged = validator.flag(make_occurrences([point(-58.25, -62.5)]))

        row = flagged.first()

        assert all(row[flag] for flag in FLAG_COLUMNS)

    def test_invalid_coordinates_fail_validity_only(self, validator, make_occurrences):
        flagged = validator.flag(make_occurrences([point(10.0, -95.0), point(None, -62.0), point(200.0, -62.0)]))

        for row in flagged.collect():
            assert row["cc_val"] is False
            assert row["cc_summary"] is False
            assert row["cc_equ"] and row["cc_zer"] and row["cc_gbf"] and row["cc_cap"]

    def test_equal_absolute_coordinates(self, validator, make_occurrences):
        flagged = flags_by_order(validator.flag(make_occurrences([point(-60.5, 60.5), point(-60.5, -61.5)])))

        assert flagged[0]["cc_equ"] is False
        assert flagged[1]["cc_equ"] is True

    def test_zero_coordinates(self, validator, make_occurrences):
        df = make_occurrences([point(0.0, -62.0), point(0.2, 0.3), point(1.0, -62.0)])

        flagged = flags_by_order(validator.flag(df))

        assert [flagged[i]["cc_zer"] for i in range(3)] == [False, False, True]

    def test_gbif_headquarters(self, validator, make_occurrences):
        flagged = flags_by_order(validator.flag(make_occurrences([point(12.58, 55.68), point(12.7, 55.68)])))

        assert flagged[0]["cc_gbf"] is False
        assert flagged[1]["cc_gbf"] is True
        assert flagged[0]["cc_summary"] is False


class TestReferenceTests:
    """cc_cap and cc_cen"""

    def test_custom_capitals(self, make_occurrences):
        validator = SparkCoordinateValidator(capitals=[("Testville", 10.0, -60.0)], centroids=[])
        df = make_occurrences([point(10.05, -60.0), point(11.0, -60.0)])

        flagged = flags_by_order(validator.flag(df))

        assert flagged[0]["cc_cap"] is False
        assert flagged[1]["cc_cap"] is True

    def test_custom_centroids(self, make_occurrences):
        validator = SparkCoordinateValidator(capitals=[], centroids=[("Testland", 20.0, -70.0)])
        df = make_occurrences([point(20.0, -70.005), point(20.0, -70.05)])

        flagged = flags_by_order(validator.flag(df))

        assert flagged[0]["cc_cen"] is False
        assert flagged[1]["cc_cen"] is True

    def test_default_tables_include_stanley(self, make_occurrences):
        flagged = SparkCoordinateValidator().flag(make_occurrences([point(-57.85, -51.69), point(-62.1, -64.3)]))

        counts = failure_counts(flagged)

        assert counts["cc_cap"] == 1
        assert counts["cc_summary"] == 1
        assert counts["cc_val"] == 0


class TestOutlierTest:
    """cc_outl"""

    def test_distant_location_is_outlier(self, validator, make_occurrences):
        records = [point(-50.0, -60.0 - i / 10, datasetKey=f"ds-{i}") for i in range(10)]
        records.append(point(100.0, -65.0, datasetKey="ds-far"))

        flagged = flags_by_order(validator.flag(make_occurrences(records)))

        assert flagged[10]["cc_outl"] is False
        assert all(flagged[i]["cc_outl"] for i in range(10))
        # Outliers are for review, not removal
        assert flagged[10]["cc_summary"] is True

    def test_small_species_skipped(self, validator, make_occurrences):
        records = [point(-50.0, -60.0 - i / 10) for i in range(5)] + [point(100.0, -65.0)]

        flagged = validator.flag(make_occurrences(records))

        assert failure_counts(flagged)["cc_outl"] == 0


class TestDdmmTest:
    """cc_ddmm"""

    def test_low_decimal_dataset_flagged(self, validator, make_occurrences):
        biased = [point(-40.1 - i, -60.2 - i, datasetKey="ddmm") for i in range(12)]
        # Every decimal part above .6
        control = [point(-41.7 - i, -61.8 - i, datasetKey="control") for i in range(12)]

        flagged = validator.flag(make_occurrences(biased + control))
        rows = flagged.collect()

        assert {row["cc_ddmm"] for row in rows if row["datasetKey"] == "ddmm"} == {False}
        assert {row["cc_ddmm"] for row in rows if row["datasetKey"] == "control"} == {True}

    def test_small_dataset_skipped(self, validator, make_occurrences):
        records = [point(-40.1 - i, -60.2 - i, datasetKey="small") for i in range(9)]

        flagged = validator.flag(make_occurrences(records))

        assert failure_counts(flagged)["cc_ddmm"] == 0

    def test_narrow_dataset_skipped(self, validator, make_occurrences):
        records = [point(-40.1 - i * 0.01, -60.1 - i * 0.01, datasetKey="narrow") for i in range(12)]

        flagged = validator.flag(make_occurrences(records))

        assert failure_counts(flagged)["cc_ddmm"] == 0


class TestDuplicateTest:
    """cc_dpl"""

    def test_first_record_survives(self, validator, make_occurrences):
        df = make_occurrences([
            point(-58.25, -62.5, **{RECORD_ORDER: 5}),
            point(-58.25, -62.5, **{RECORD_ORDER: 2}),
            point(-58.25, -62.5, species="Hydrurga leptonyx", **{RECORD_ORDER: 9}),
        ])

        flagged = flags_by_order(validator.flag(df))

        assert flagged[2]["cc_dpl"] is True
        assert flagged[5]["cc_dpl"] is False
        assert flagged[9]["cc_dpl"] is True

    def test_additions_split_groups(self, validator, make_occurrences):
        df = make_occurrences([
            point(-58.25, -62.5, eventDate="2010-01-05"),
            point(-58.25, -62.5, eventDate="2010-01-06"),
            point(-58.25, -62.5, eventDate="2010-01-05"),
        ])

        flagged = flags_by_order(validator.flag(df, additions=["eventDate"]))

        assert [flagged[i]["cc_dpl"] for i in range(3)] == [True, True, False]

    def test_missing_addition_ignored(self, validator, make_occurrences):
        df = make_occurrences([point(-58.25, -62.5), point(-58.25, -62.5)])

        flagged = validator.flag(df, additions=["year"])

        assert failure_counts(flagged)["cc_dpl"] == 1

    def test_without_record_order(self, validator, make_occurrences):
        df = make_occurrences([point(-58.25, -62.5), point(-58.25, -62.5)]).drop(RECORD_ORDER)

        flagged = validator.flag(df)

        assert failure_counts(flagged)["cc_dpl"] == 1
        assert RECORD_ORDER not in flagged.columns


class TestValidatorContract:
    """Output shape and failure handling"""

    def test_adds_flag_columns_after_input(self, validator, make_occurrences):
        df = make_occurrences([point(-58.25, -62.5)])

        flagged = validator.flag(df)

        assert flagged.columns == df.columns + FLAG_COLUMNS
        assert flagged.count() == 1

    def test_existing_flags_replaced(self, validator, make_occurrences):
        df = validator.flag(make_occurrences([point(-58.25, -62.5)]))

        again = validator.flag(df)

        assert again.columns.count("cc_val") == 1

    def test_missing_coordinates_raise(self, validator, make_occurrences):
        df = make_occurrences([{"species": SPECIES, "decimalLatitude": -62.5}])

        with pytest.raises(ValidatorUnavailableError, match="decimalLongitude"):
            validator.flag(df)

    def test_internal_failure_is_wrapped(self, validator, make_occurrences, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("reference table unavailable")

        monkeypatch.setattr(validator, "_reference_flags", broken)

        with pytest.raises(ValidatorUnavailableError) as excinfo:
            validator.flag(make_occurrences([point(-58.25, -62.5)]))

        assert isinstance(excinfo.value.cause, RuntimeError)
