"""
SourceConfig model describing how one aggregator's download is cleaned.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SourceId = Literal["GBIF", "SCAR"]


class SourceConfig(BaseModel):
    """
    Input, output and rule selection for one data source.

    Attributes:
        source_id: "GBIF" or "SCAR"
        input_path: DwC-A zip or delimited occurrence file
        output_path: Cleaned CSV destination
        review_path: Where records flagged as plausible but suspicious
                     (ddmm conversion, outliers) are written for manual review
        delimiter: Field delimiter of the input file
        quote: Quote character; empty string disables quoting
        rules: Ordered names of rules from the rule library
        duplicate_fields: Extra fields for the validator duplicate check
        species_field: Column identifying the taxon
        dataset_field: Column identifying the contributing dataset
        review_flags: Whether flagged-but-plausible records are written out
    """

    source_id: SourceId
    input_path: str = Field(..., min_length=1)
    output_path: str = Field(..., min_length=1)
    review_path: str | None = None
    delimiter: str = "\t"
    quote: str = ""
    rules: list[str] = Field(..., min_length=1)
    duplicate_fields: list[str] = Field(default_factory=list)
    species_field: str = "species"
    dataset_field: str = "datasetKey"
    review_flags: bool = False

    @field_validator("delimiter")
    @classmethod
    def check_delimiter(cls, v):
        """Spark needs a single-character separator."""
        if len(v) != 1:
            raise ValueError("delimiter must be a single character")
        return v

    @model_validator(mode="after")
    def check_review_path(self):
        """Flagged records need somewhere to go."""
        if self.review_flags and not self.review_path:
            raise ValueError("review_flags=True requires a review_path")
        return self

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "source_id": "SCAR",
                "input_path": "Data/SCAR_APIS_1980-90/occurrence.txt",
                "output_path": "Cleaned_Data/SCAR_cleaned.csv",
                "rules": ["species_filter", "latitude_bound"],
                "duplicate_fields": ["eventDate"],
            }
        }
    )
