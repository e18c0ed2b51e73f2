"""
Coordinate validation for occurrence records.
"""

from .base import (
    FLAG_COLUMNS,
    HARD_FLAGS,
    REVIEW_FLAGS,
    CoordinateValidator,
    ValidatorUnavailableError,
)
from .geo import haversine_m
from .spark_validator import SparkCoordinateValidator, failure_counts

__all__ = [
    "FLAG_COLUMNS",
    "HARD_FLAGS",
    "REVIEW_FLAGS",
    "CoordinateValidator",
    "SparkCoordinateValidator",
    "ValidatorUnavailableError",
    "failure_counts",
    "haversine_m",
]
