"""
Coordinate tests computed with Spark column expressions.

Follows the conventions of the CoordinateCleaner R package: every test adds
a boolean column that is True when the record passes. Tests other than
cc_val only judge records with valid coordinates; a record with invalid
coordinates fails cc_val and passes the rest.
"""

from functools import reduce
from operator import and_

from pyspark.sql import Column, DataFrame, Window
from pyspark.sql import functions as F

from occurrence_cleaning.core.schema import LATITUDE, LONGITUDE, RECORD_ORDER
from occurrence_cleaning.observability.logger import get_logger

from .base import (
    CAPITALS,
    CENTROIDS,
    DDMM_CONVERSION,
    DUPLICATES,
    EQUAL_COORDINATES,
    FLAG_COLUMNS,
    GBIF_HEADQUARTERS,
    HARD_FLAGS,
    OUTLIERS,
    SUMMARY,
    VALIDITY,
    ZERO_COORDINATES,
    CoordinateValidator,
    ValidatorUnavailableError,
)
from .geo import haversine_m
from .reference import CAPITALS as CAPITAL_POINTS
from .reference import CENTROIDS as CENTROID_POINTS
from .reference import GBIF_HQ, ReferencePoint

logger = get_logger(__name__)

REFERENCE_SCHEMA = "ref_name string, ref_lon double, ref_lat double"

# Temporary grouping columns
_SPECIES_KEY = "_cc_species"
_DATASET_KEY = "_cc_dataset"
_ORDER_KEY = "_cc_order"


def _field(name: str) -> Column:
    return F.col(f"`{name}`")


def failure_counts(flagged: DataFrame) -> dict[str, int]:
    """Number of records failing each test of a flagged DataFrame."""
    row = flagged.select(
        [F.sum(F.when(~F.col(flag), 1).otherwise(0)).alias(flag) for flag in FLAG_COLUMNS]
    ).first()
    return {flag: int(row[flag] or 0) for flag in FLAG_COLUMNS}


class SparkCoordinateValidator(CoordinateValidator):
    """
    Flags problematic coordinates in occurrence records.

    Args:
        capitals: Reference capitals, (name, lon, lat) tuples
        centroids: Reference country centroids, (name, lon, lat) tuples
        capital_radius_m: Records closer than this to a capital fail cc_cap
        centroid_radius_m: Records closer than this to a centroid fail cc_cen
        gbif_radius_m: Records closer than this to GBIF headquarters fail cc_gbf
        zero_buffer_deg: Records closer than this to (0, 0) fail cc_zer
        outlier_multiplier: IQR multiplier of the outlier test
        outlier_min_records: Species with fewer records skip the outlier test
        outlier_max_points: Above this many distinct points a species is
            snapped to a grid before distances are computed
        outlier_grid_deg: Cell size of that grid
        ddmm_diff: Threshold on the ddmm bias score
        ddmm_min_span: Minimum extent (degrees, both axes) of a tested dataset
        ddmm_min_records: Datasets with fewer records skip the ddmm test
    """

    def __init__(
        self,
        capitals: list[ReferencePoint] | None = None,
        centroids: list[ReferencePoint] | None = None,
        capital_radius_m: float = 10000.0,
        centroid_radius_m: float = 1000.0,
        gbif_radius_m: float = 1000.0,
        zero_buffer_deg: float = 0.5,
        outlier_multiplier: float = 5.0,
        outlier_min_records: int = 7,
        outlier_max_points: int = 10000,
        outlier_grid_deg: float = 0.5,
        ddmm_diff: float = 1.0,
        ddmm_min_span: float = 2.0,
        ddmm_min_records: int = 10,
    ):
        self.capitals = list(CAPITAL_POINTS if capitals is None else capitals)
        self.centroids = list(CENTROID_POINTS if centroids is None else centroids)
        self.capital_radius_m = capital_radius_m
        self.centroid_radius_m = centroid_radius_m
        self.gbif_radius_m = gbif_radius_m
        self.zero_buffer_deg = zero_buffer_deg
        self.outlier_multiplier = outlier_multiplier
        self.outlier_min_records = outlier_min_records
        self.outlier_max_points = outlier_max_points
        self.outlier_grid_deg = outlier_grid_deg
        self.ddmm_diff = ddmm_diff
        self.ddmm_min_span = ddmm_min_span
        self.ddmm_min_records = ddmm_min_records

    def flag(
        self,
        df: DataFrame,
        lon: str = LONGITUDE,
        lat: str = LATITUDE,
        species: str = "species",
        dataset: str = "datasetKey",
        additions: list[str] | None = None,
    ) -> DataFrame:
        missing = [name for name in (lon, lat) if name not in df.columns]
        if missing:
            raise ValidatorUnavailableError(f"Coordinate columns missing: {missing}")

        try:
            flagged = self._flag(df, lon, lat, species, dataset, list(additions or [])).cache()
            # Surface Spark errors here rather than at the caller's first action
            flagged.count()
        except Exception as e:
            raise ValidatorUnavailableError(f"Coordinate validation failed: {e}", cause=e) from e
        return flagged

    def _flag(
        self,
        df: DataFrame,
        lon: str,
        lat: str,
        species: str,
        dataset: str,
        additions: list[str],
    ) -> DataFrame:
        stale = [name for name in FLAG_COLUMNS if name in df.columns]
        if stale:
            df = df.drop(*stale)
        output_columns = df.columns

        x = _field(lon).cast("double")
        y = _field(lat).cast("double")

        annotated = (
            df.withColumn(_SPECIES_KEY, self._group_key(df, species))
            .withColumn(_DATASET_KEY, self._group_key(df, dataset))
            .withColumn(
                VALIDITY,
                x.isNotNull() & y.isNotNull() & ~F.isnan(x) & ~F.isnan(y)
                & x.between(-180.0, 180.0) & y.between(-90.0, 90.0),
            )
        )
        invalid = ~F.col(VALIDITY)
        _, hq_lon, hq_lat = GBIF_HQ

        annotated = (
            annotated
            .withColumn(EQUAL_COORDINATES, invalid | (F.abs(x) != F.abs(y)))
            .withColumn(
                ZERO_COORDINATES,
                invalid | ((x != 0) & (y != 0) & (F.sqrt(x * x + y * y) > self.zero_buffer_deg)),
            )
            .withColumn(
                GBIF_HEADQUARTERS,
                invalid | (haversine_m(x, y, F.lit(hq_lon), F.lit(hq_lat)) > self.gbif_radius_m),
            )
        )
        annotated = self._reference_flags(annotated, x, y)
        annotated = self._outlier_flags(annotated, x, y)
        annotated = annotated.withColumn(SUMMARY, reduce(and_, [F.col(name) for name in HARD_FLAGS]))
        annotated = self._ddmm_flags(annotated, x, y)
        annotated = self._duplicate_flags(annotated, output_columns, lon, lat, species, additions)

        return annotated.select(
            *[_field(name) for name in output_columns],
            *[F.col(name) for name in FLAG_COLUMNS],
        )

    @staticmethod
    def _group_key(df: DataFrame, name: str) -> Column:
        # Records without a group value form a group of their own
        if name in df.columns:
            return F.coalesce(_field(name).cast("string"), F.lit(""))
        return F.lit("")

    def _reference_flags(self, annotated: DataFrame, x: Column, y: Column) -> DataFrame:
        """cc_cap and cc_cen: distance to the nearest reference point."""
        spark = annotated.sparkSession
        points = annotated.filter(F.col(VALIDITY)).select(x.alias("_cc_x"), y.alias("_cc_y")).distinct()

        flags = points
        for flag, references, radius in (
            (CAPITALS, self.capitals, self.capital_radius_m),
            (CENTROIDS, self.centroids, self.centroid_radius_m),
        ):
            if not references:
                flags = flags.withColumn(flag, F.lit(True))
                continue

            reference_df = spark.createDataFrame(
                [(name, float(ref_lon), float(ref_lat)) for name, ref_lon, ref_lat in references],
                REFERENCE_SCHEMA,
            )
            nearest = (
                points.crossJoin(F.broadcast(reference_df))
                .groupBy("_cc_x", "_cc_y")
                .agg(F.min(haversine_m(F.col("_cc_x"), F.col("_cc_y"), F.col("ref_lon"), F.col("ref_lat"))).alias("_cc_dist"))
                .select("_cc_x", "_cc_y", (F.col("_cc_dist") > radius).alias(flag))
            )
            flags = flags.join(nearest, ["_cc_x", "_cc_y"], "left")

        joined = annotated.join(flags, (x == F.col("_cc_x")) & (y == F.col("_cc_y")), "left")
        for flag in (CAPITALS, CENTROIDS):
            joined = joined.withColumn(flag, F.coalesce(F.col(flag), F.lit(True)))
        return joined.drop("_cc_x", "_cc_y")

    def _outlier_flags(self, annotated: DataFrame, x: Column, y: Column) -> DataFrame:
        """
        cc_outl: per species, the mean distance of each distinct location to
        every other location, weighted by the number of records there. A
        location fails when its mean lies more than `outlier_multiplier`
        interquartile ranges above the species' upper quartile. Quartiles
        are taken over records, not locations.
        """
        records = annotated.filter(F.col(VALIDITY)).select(
            F.col(_SPECIES_KEY).alias("_sp"), x.alias("_x"), y.alias("_y")
        )
        points = records.groupBy("_sp", "_x", "_y").agg(F.count(F.lit(1)).alias("_w"))
        sizes = (
            points.groupBy("_sp")
            .agg(F.sum("_w").alias("_n"), F.count(F.lit(1)).alias("_n_points"))
            .filter(F.col("_n") >= self.outlier_min_records)
        )

        grid = self.outlier_grid_deg
        coarse = F.col("_n_points") > self.outlier_max_points
        cells = (
            points.join(sizes, "_sp")
            .withColumn("_cx", F.when(coarse, F.floor(F.col("_x") / grid) * grid + grid / 2).otherwise(F.col("_x")))
            .withColumn("_cy", F.when(coarse, F.floor(F.col("_y") / grid) * grid + grid / 2).otherwise(F.col("_y")))
        )
        weighted = cells.groupBy("_sp", "_cx", "_cy").agg(F.sum("_w").alias("_w"))
        others = weighted.select(
            "_sp", F.col("_cx").alias("_ox"), F.col("_cy").alias("_oy"), F.col("_w").alias("_ow")
        )

        mean_distance = (
            weighted.join(others, "_sp")
            .filter((F.col("_cx") != F.col("_ox")) | (F.col("_cy") != F.col("_oy")))
            .withColumn("_d", haversine_m(F.col("_cx"), F.col("_cy"), F.col("_ox"), F.col("_oy")))
            .groupBy("_sp", "_cx", "_cy", "_w")
            .agg((F.sum(F.col("_d") * F.col("_ow")) / F.sum("_ow")).alias("_mean_d"))
        )
        quartiles = (
            mean_distance
            .select("_sp", F.explode(F.array_repeat(F.col("_mean_d"), F.col("_w").cast("int"))).alias("_d"))
            .groupBy("_sp")
            .agg(F.expr("percentile(_d, array(0.25, 0.75))").alias("_q"))
        )

        q25, q75 = F.col("_q")[0], F.col("_q")[1]
        spread = (q75 - q25) * self.outlier_multiplier
        cell_flags = mean_distance.join(quartiles, "_sp").select(
            "_sp", "_cx", "_cy",
            (F.col("_mean_d") <= q75 + spread).alias(OUTLIERS),
        )
        point_flags = (
            cells.select("_sp", "_x", "_y", "_cx", "_cy")
            .join(cell_flags, ["_sp", "_cx", "_cy"])
            .select("_sp", "_x", "_y", OUTLIERS)
        )

        joined = annotated.join(
            point_flags,
            (F.col(_SPECIES_KEY) == F.col("_sp")) & (x == F.col("_x")) & (y == F.col("_y")),
            "left",
        )
        return (
            joined.withColumn(OUTLIERS, F.coalesce(F.col(OUTLIERS), F.lit(True)))
            .drop("_sp", "_x", "_y")
        )

    def _ddmm_flags(self, annotated: DataFrame, x: Column, y: Column) -> DataFrame:
        """
        cc_ddmm: flags datasets whose coordinates look like degree-minute
        values stored as decimal degrees. Minutes never exceed .59, so such
        datasets have too many distinct locations with both decimal parts
        below .6 (expected share 0.36 for genuine decimal degrees).
        """
        records = annotated.filter(F.col(VALIDITY)).select(
            F.col(_DATASET_KEY).alias("_ds"), x.alias("_x"), y.alias("_y")
        )
        extent = records.groupBy("_ds").agg(
            F.count(F.lit(1)).alias("_n"),
            (F.max("_x") - F.min("_x")).alias("_span_x"),
            (F.max("_y") - F.min("_y")).alias("_span_y"),
        )

        abs_x, abs_y = F.abs(F.col("_x")), F.abs(F.col("_y"))
        low_share = (
            records.distinct()
            .withColumn("_low", ((abs_x - F.floor(abs_x)) < 0.6) & ((abs_y - F.floor(abs_y)) < 0.6))
            .groupBy("_ds")
            .agg(F.avg(F.col("_low").cast("double")).alias("_p_low"))
        )

        score = F.col("_p_low") / 0.36 - (1 - F.col("_p_low")) / 0.64
        biased = (
            (F.col("_n") >= self.ddmm_min_records)
            & (F.col("_span_x") >= self.ddmm_min_span)
            & (F.col("_span_y") >= self.ddmm_min_span)
            & (score > self.ddmm_diff)
        )
        dataset_flags = extent.join(low_share, "_ds").select("_ds", (~biased).alias(DDMM_CONVERSION))

        joined = annotated.join(dataset_flags, F.col(_DATASET_KEY) == F.col("_ds"), "left")
        return (
            joined.withColumn(DDMM_CONVERSION, F.coalesce(F.col(DDMM_CONVERSION), F.lit(True)))
            .drop("_ds")
        )

    def _duplicate_flags(
        self,
        annotated: DataFrame,
        columns: list[str],
        lon: str,
        lat: str,
        species: str,
        additions: list[str],
    ) -> DataFrame:
        """cc_dpl: only the earliest record of each location group passes."""
        keys = [lon, lat]
        if species in columns:
            keys.append(species)
        for name in additions:
            if name in columns:
                keys.append(name)
            else:
                logger.warning(
                    f"Duplicate check field '{name}' not present, ignoring it",
                    extra={"field": name},
                )

        if RECORD_ORDER in columns:
            annotated = annotated.withColumn(_ORDER_KEY, F.col(RECORD_ORDER))
        else:
            annotated = annotated.withColumn(_ORDER_KEY, F.monotonically_increasing_id())

        window = Window.partitionBy(*[_field(name) for name in keys]).orderBy(F.col(_ORDER_KEY).asc())
        return (
            annotated.withColumn(DUPLICATES, F.row_number().over(window) == 1)
            .drop(_ORDER_KEY)
        )
