"""
Occurrence record schema and typing.
"""

from .occurrence_schema import (
    EVENT_DATE,
    INTERNAL_PREFIX,
    LATITUDE,
    LONGITUDE,
    OCCURRENCE_FIELD_TYPES,
    RECORD_ORDER,
    cast_occurrence_columns,
    event_day,
    is_internal,
    occurrence_struct,
)

__all__ = [
    "EVENT_DATE",
    "INTERNAL_PREFIX",
    "LATITUDE",
    "LONGITUDE",
    "OCCURRENCE_FIELD_TYPES",
    "RECORD_ORDER",
    "cast_occurrence_columns",
    "event_day",
    "is_internal",
    "occurrence_struct",
]
