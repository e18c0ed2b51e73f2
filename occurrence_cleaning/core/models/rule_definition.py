"""
RuleDefinition model describing one named step of the cleaning chain.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

RuleType = Literal[
    "equals",
    "range",
    "exclude_values",
    "exclude_true",
    "required",
    "columns_differ",
    "pattern_exclusion",
    "replace_value",
    "reclassify",
    "expedition_date",
    "date_parts_backfill",
    "deduplicate",
    "prune_empty_columns",
]


class RuleDefinition(BaseModel):
    """
    A named, configurable step applied to a batch of occurrence records.

    Attributes:
        rule_name: Library name ("latitude_bound")
        rule_type: Step type, looked up in the rule engine registry
        field_name: Field the step reads or rewrites (None for structural steps)
        parameters: Step-specific params (e.g., {"max": -45})
        enabled: Whether the step runs
        description: Why the rule exists, shown by `occurrence-clean rules`
    """

    rule_name: str = Field(..., min_length=1)
    rule_type: RuleType
    field_name: str | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)
    enabled: bool = True
    description: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "rule_name": "latitude_bound",
                "rule_type": "range",
                "field_name": "decimalLatitude",
                "parameters": {"max": -45},
                "enabled": True,
                "description": "Southern Ocean boundary",
            }
        }
    )
