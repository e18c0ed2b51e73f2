"""
Base interface for coordinate validators.

A validator annotates occurrence records with one boolean column per test.
True means the record passed the test.
"""

from abc import ABC, abstractmethod

from pyspark.sql import DataFrame

from occurrence_cleaning.core.schema import LATITUDE, LONGITUDE

VALIDITY = "cc_val"
EQUAL_COORDINATES = "cc_equ"
ZERO_COORDINATES = "cc_zer"
CAPITALS = "cc_cap"
CENTROIDS = "cc_cen"
GBIF_HEADQUARTERS = "cc_gbf"
OUTLIERS = "cc_outl"
SUMMARY = "cc_summary"
DDMM_CONVERSION = "cc_ddmm"
DUPLICATES = "cc_dpl"

# Tests whose failure makes a record invalid
HARD_FLAGS = [
    VALIDITY,
    EQUAL_COORDINATES,
    ZERO_COORDINATES,
    CAPITALS,
    CENTROIDS,
    GBIF_HEADQUARTERS,
]

# Tests whose failure marks a record as suspicious but plausible
REVIEW_FLAGS = [OUTLIERS, DDMM_CONVERSION]

FLAG_COLUMNS = HARD_FLAGS + [OUTLIERS, SUMMARY, DDMM_CONVERSION, DUPLICATES]


class ValidatorUnavailableError(Exception):
    """The coordinate validator could not run on a batch."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class CoordinateValidator(ABC):
    """
    Abstract base class for coordinate validators.

    Implementations return the input DataFrame with every column in
    FLAG_COLUMNS added, and raise ValidatorUnavailableError for any failure.
    """

    @abstractmethod
    def flag(
        self,
        df: DataFrame,
        lon: str = LONGITUDE,
        lat: str = LATITUDE,
        species: str = "species",
        dataset: str = "datasetKey",
        additions: list[str] | None = None,
    ) -> DataFrame:
        """
        Annotate records with coordinate test results.

        Args:
            df: Occurrence records
            lon: Longitude column
            lat: Latitude column
            species: Column grouping records for the outlier and duplicate tests
            dataset: Column grouping records for the ddmm test
            additions: Extra columns that must also match for two records
                       to count as duplicates

        Returns:
            df with the flag columns added

        Raises:
            ValidatorUnavailableError: If the tests cannot be computed
        """
        pass
