"""
Canonical Darwin Core field types for occurrence records.

Raw occurrence files are read as strings; `cast_occurrence_columns` turns the
known fields into their semantic Spark types. Values that cannot be cast
become null so that later rules exclude them instead of failing the run.
The event date stays as recorded in the source.
"""

from pyspark.sql import Column, DataFrame
from pyspark.sql import functions as F
from pyspark.sql.types import (
    BooleanType,
    DataType,
    DoubleType,
    IntegerType,
    LongType,
    StringType,
    StructField,
    StructType,
)

LATITUDE = "decimalLatitude"
LONGITUDE = "decimalLongitude"
EVENT_DATE = "eventDate"

# Columns starting with this prefix are pipeline bookkeeping, never output
INTERNAL_PREFIX = "_"
RECORD_ORDER = "_record_order"

OCCURRENCE_FIELD_TYPES: dict[str, DataType] = {
    "species": StringType(),
    "occurrenceStatus": StringType(),
    "basisOfRecord": StringType(),
    LATITUDE: DoubleType(),
    LONGITUDE: DoubleType(),
    "coordinateUncertaintyInMeters": DoubleType(),
    "hasGeospatialIssues": BooleanType(),
    # Kept as recorded; rules read the calendar day through event_day()
    EVENT_DATE: StringType(),
    "eventTime": StringType(),
    "year": IntegerType(),
    "month": IntegerType(),
    "day": IntegerType(),
    "individualCount": IntegerType(),
    "occurrenceRemarks": StringType(),
    "collectionCode": StringType(),
    "samplingProtocol": StringType(),
    "datasetKey": StringType(),
    "publisher": StringType(),
    "issue": StringType(),
}

TRUE_STRINGS = ("true", "t", "1", "yes")
FALSE_STRINGS = ("false", "f", "0", "no")

# Leading calendar date of an ISO 8601 instant or interval
_DATE_PREFIX = r"^\s*(\d{4}-\d{1,2}-\d{1,2})"


def is_internal(column_name: str) -> bool:
    return column_name.startswith(INTERNAL_PREFIX)


def event_day(column: Column) -> Column:
    """
    Calendar date at the start of an ISO 8601 event date.

    Time of day and interval ends are ignored: "2008-03-15T10:00:00Z" and
    "2008-03-15/2008-03-17" both give 2008-03-15. Text without a leading
    date gives null.
    """
    return F.to_date(F.regexp_extract(column.cast("string"), _DATE_PREFIX, 1), "yyyy-M-d")


def occurrence_struct(columns: list[str]) -> StructType:
    """
    Build a StructType for the given columns using the canonical types.

    Unknown columns are typed as strings.
    """
    fields = []
    for name in columns:
        if name == RECORD_ORDER:
            fields.append(StructField(name, LongType(), True))
        else:
            fields.append(StructField(name, OCCURRENCE_FIELD_TYPES.get(name, StringType()), True))
    return StructType(fields)


def _blank_to_null(column: Column) -> Column:
    return F.when(F.trim(column) == "", F.lit(None)).otherwise(column)


def _cast_string(column: Column, target: DataType) -> Column:
    if isinstance(target, DoubleType):
        return column.cast("double")
    if isinstance(target, IntegerType):
        # "2.0" is a valid count in some exports
        return column.cast("double").cast("int")
    if isinstance(target, BooleanType):
        lowered = F.lower(F.trim(column))
        return (
            F.when(lowered.isin(*TRUE_STRINGS), F.lit(True))
            .when(lowered.isin(*FALSE_STRINGS), F.lit(False))
            .otherwise(F.lit(None).cast("boolean"))
        )
    return column


def cast_occurrence_columns(df: DataFrame) -> DataFrame:
    """
    Normalise blanks to null and cast known fields to their canonical types.

    Columns that already carry a non-string type are left as they are, so
    the function is safe to apply to typed DataFrames.

    Args:
        df: DataFrame read from a delimited occurrence file

    Returns:
        DataFrame with typed occurrence columns
    """
    string_columns = {name for name, dtype in df.dtypes if dtype == "string"}

    projections = []
    for name in df.columns:
        column = F.col(f"`{name}`")
        if name not in string_columns:
            projections.append(column)
            continue

        column = _blank_to_null(column)
        target = OCCURRENCE_FIELD_TYPES.get(name)
        if target is not None:
            column = _cast_string(column, target)
        projections.append(column.alias(name))

    return df.select(*projections)
