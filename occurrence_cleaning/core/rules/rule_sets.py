"""
Built-in rule library and per-source rule selections.

Both sources draw their rules from one shared library; each source names
the subset it uses and the order in which the rules run.
"""

from pyspark.sql import DataFrame

from occurrence_cleaning.core.models import RuleDefinition, SourceConfig
from occurrence_cleaning.core.schema import EVENT_DATE, LATITUDE, LONGITUDE

from .rule_engine import RuleEngine

TARGET_SPECIES = "Lobodon carcinophaga"

REMARKS = "occurrenceRemarks"
UNCERTAINTY = "coordinateUncertaintyInMeters"


def _rule(name, rule_type, field=None, description=None, **parameters) -> RuleDefinition:
    return RuleDefinition(
        rule_name=name,
        rule_type=rule_type,
        field_name=field,
        parameters=parameters,
        description=description,
    )


_LIBRARY_RULES = [
    _rule(
        "species_filter", "equals", "species",
        "Keep only crabeater seal records",
        value=TARGET_SPECIES,
    ),
    _rule(
        "status_filter", "equals", "occurrenceStatus",
        "Keep only records reporting the animal as present",
        value="PRESENT",
    ),
    _rule(
        "latitude_bound", "range", LATITUDE,
        "Keep only records south of 45 S",
        max=-45, keep_null=False,
    ),
    _rule(
        "specimen_exclusion", "exclude_values", "basisOfRecord",
        "Drop preserved and fossil specimens",
        values=["PRESERVED_SPECIMEN", "FOSSIL_SPECIMEN"],
    ),
    _rule(
        "geospatial_issue_exclusion", "exclude_true", "hasGeospatialIssues",
        "Drop records the aggregator flagged with geospatial issues",
    ),
    _rule(
        "uncertainty_sentinel_exclusion", "exclude_values", UNCERTAINTY,
        "Drop placeholder uncertainty values",
        values=[301.0, 3036.0, 999.0, 9999.0],
    ),
    _rule(
        "unknown_publisher_exclusion", "required", "publisher",
        "Drop records with no publisher",
    ),
    _rule(
        "death_remark_exclusion", "pattern_exclusion", REMARKS,
        "Drop records of dead animals",
        pattern="deceased|dead|died|mumm", case_insensitive=True,
    ),
    _rule(
        "approximate_coordinate_exclusion", "pattern_exclusion", REMARKS,
        "Drop records whose remarks say the coordinates are approximate",
        pattern="coord.* approx", case_insensitive=True,
    ),
    _rule(
        "identical_coordinate_exclusion", "columns_differ", LATITUDE,
        "Drop records with latitude equal to longitude",
        other_field=LONGITUDE,
    ),
    _rule(
        "biologging_reclassification", "reclassify", "basisOfRecord",
        "Biologging tags are machine observations",
        match_field="samplingProtocol", pattern="bio-log", value="MACHINE_OBSERVATION",
    ),
    _rule(
        "zero_count_normalization", "replace_value", "individualCount",
        "A count of 0 means 'not counted' in GBIF exports",
        old=0, new=1,
    ),
    _rule(
        "collection_code_exclusion", "pattern_exclusion", "collectionCode",
        "Drop the ANTXXIII cruise records",
        pattern="ANTXXIII", case_insensitive=False,
    ),
    _rule(
        "identification_uncertainty_exclusion", "pattern_exclusion", REMARKS,
        "Drop records whose identification is in doubt",
        pattern=r"seal.*\?|crabeater.*\?", case_insensitive=True,
    ),
    _rule(
        "issue_code_exclusion", "pattern_exclusion", "issue",
        "Drop records with presumed negated latitude",
        pattern="PRESUMED_NEGATED_LATITUDE", case_insensitive=False,
    ),
    _rule(
        "expedition_date_backfill", "expedition_date", EVENT_DATE,
        "Rebuild event dates of the 2008 Belgian expedition from eventTime",
        match_field="collectionCode", pattern="Belgian", year=2008,
        time_field="eventTime", date_format="yyyy-d-MMM",
    ),
    _rule(
        "date_parts_backfill", "date_parts_backfill", EVENT_DATE,
        "Derive missing year, month and day from the event date",
    ),
    _rule(
        "missing_date_exclusion", "required", EVENT_DATE,
        "Drop records without a readable event date",
        as_date=True,
    ),
    _rule(
        "minimum_year_filter", "range", "year",
        "Drop records from before 1968",
        min=1968, keep_null=False,
    ),
    _rule(
        "primary_deduplication", "deduplicate", None,
        "Keep one record per date and location",
        keys=[EVENT_DATE, LATITUDE, LONGITUDE],
    ),
    _rule(
        "uncertainty_ceiling", "range", UNCERTAINTY,
        "Drop records with coordinate uncertainty above 10 km",
        max=10000, keep_null=True,
    ),
    _rule(
        "zero_count_exclusion", "exclude_values", "individualCount",
        "Drop records counting zero animals",
        values=[0],
    ),
    _rule(
        "missing_count_exclusion", "required", "individualCount",
        "Drop records without a count",
    ),
    _rule(
        "empty_column_pruning", "prune_empty_columns", None,
        "Drop columns empty in every surviving record",
    ),
]

RULE_LIBRARY: dict[str, RuleDefinition] = {rule.rule_name: rule for rule in _LIBRARY_RULES}

SOURCE_RULES: dict[str, list[str]] = {
    "GBIF": [
        "status_filter",
        "latitude_bound",
        "specimen_exclusion",
        "geospatial_issue_exclusion",
        "uncertainty_sentinel_exclusion",
        "unknown_publisher_exclusion",
        "death_remark_exclusion",
        "approximate_coordinate_exclusion",
        "identical_coordinate_exclusion",
        "biologging_reclassification",
        "zero_count_normalization",
        "collection_code_exclusion",
        "identification_uncertainty_exclusion",
        "issue_code_exclusion",
        "expedition_date_backfill",
        "date_parts_backfill",
        "missing_date_exclusion",
        "minimum_year_filter",
        "primary_deduplication",
        "uncertainty_ceiling",
        "empty_column_pruning",
    ],
    "SCAR": [
        "species_filter",
        "latitude_bound",
        "geospatial_issue_exclusion",
        "uncertainty_sentinel_exclusion",
        "missing_date_exclusion",
        "primary_deduplication",
        "uncertainty_ceiling",
        "zero_count_exclusion",
        "missing_count_exclusion",
        "empty_column_pruning",
    ],
}

DEFAULT_SOURCES: dict[str, SourceConfig] = {
    "GBIF": SourceConfig(
        source_id="GBIF",
        input_path="Data/GBIF/rgbif_download/occurrence.txt",
        output_path="Cleaned_Data/GBIF_cleaned.csv",
        review_path="Cleaned_Data/GBIF_flagged_review.csv",
        rules=SOURCE_RULES["GBIF"],
        duplicate_fields=["year", "month", "day"],
        review_flags=True,
    ),
    "SCAR": SourceConfig(
        source_id="SCAR",
        input_path="Data/SCAR_APIS_1980-90/occurrence.txt",
        output_path="Cleaned_Data/SCAR_cleaned.csv",
        rules=SOURCE_RULES["SCAR"],
        duplicate_fields=[EVENT_DATE],
        review_flags=False,
    ),
}


def build_rule_definitions(
    rule_names: list[str],
    library: dict[str, RuleDefinition] | None = None,
) -> list[RuleDefinition]:
    """
    Resolve an ordered list of rule names against a rule library.

    Args:
        rule_names: Names in evaluation order
        library: Rule library (defaults to RULE_LIBRARY)

    Returns:
        Rule definitions in the same order

    Raises:
        ValueError: If a name is not in the library
    """
    library = RULE_LIBRARY if library is None else library
    unknown = [name for name in rule_names if name not in library]
    if unknown:
        raise ValueError(f"Rules not found in library: {unknown}")
    return [library[name] for name in rule_names]


def rules_for_source(source_id: str) -> list[RuleDefinition]:
    """Built-in ordered rule definitions for a source."""
    if source_id not in SOURCE_RULES:
        raise ValueError(f"Unknown source: {source_id}. Expected one of {sorted(SOURCE_RULES)}")
    return build_rule_definitions(SOURCE_RULES[source_id])


def apply_rules(df: DataFrame, source: str) -> DataFrame:
    """
    Run a source's built-in cleaning chain.

    Args:
        df: Occurrence records loaded from that source
        source: "GBIF" or "SCAR"

    Returns:
        Records surviving every rule
    """
    return RuleEngine(rules_for_source(source)).apply(df)
