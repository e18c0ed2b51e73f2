"""
Models describing the outcome of a cleaning run (ephemeral, logged and
returned to the caller, never persisted).
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class RuleResult(BaseModel):
    """
    Row counts before and after one step of the cleaning chain.

    Attributes:
        rule_name: Library name of the step
        rule_type: Step type
        rows_before: Rows entering the step
        rows_after: Rows leaving the step
        columns_removed: Columns dropped by structural steps
        skipped: True when the step's field was absent and it did nothing
    """

    rule_name: str
    rule_type: str
    rows_before: int = Field(..., ge=0)
    rows_after: int = Field(..., ge=0)
    columns_removed: list[str] = Field(default_factory=list)
    skipped: bool = False

    @field_validator("rows_after")
    @classmethod
    def check_no_rows_added(cls, v, info):
        """No step may re-introduce records."""
        before = info.data.get("rows_before")
        if before is not None and v > before:
            raise ValueError(f"rows_after ({v}) exceeds rows_before ({before})")
        return v

    @property
    def rows_removed(self) -> int:
        return self.rows_before - self.rows_after


class CleaningReport(BaseModel):
    """
    Summary of one source's cleaning run.

    Attributes:
        source_id: Which source was cleaned
        input_path: File that was read
        output_path: Cleaned CSV that was written
        total_records: Records read
        rule_results: One entry per executed rule, in order
        validator_flags: Records failing each coordinate test
        validator_removed: Records dropped as invalid or secondary duplicates
        review_records: Records flagged for manual review (kept in output)
        review_path: Where review records were written, if anywhere
        written_records: Rows in the cleaned CSV
        output_columns: Header of the cleaned CSV
        finished_at: When the run completed
    """

    source_id: str
    input_path: str
    output_path: str
    total_records: int = Field(..., ge=0)
    rule_results: list[RuleResult] = Field(default_factory=list)
    validator_flags: dict[str, int] = Field(default_factory=dict)
    validator_removed: int = Field(0, ge=0)
    review_records: int = Field(0, ge=0)
    review_path: str | None = None
    written_records: int = Field(0, ge=0)
    output_columns: list[str] = Field(default_factory=list)
    finished_at: datetime = Field(default_factory=datetime.now)

    @property
    def rules_removed(self) -> int:
        return sum(result.rows_removed for result in self.rule_results)

    def summary_lines(self) -> list[str]:
        """Human-readable summary, one line per rule."""
        lines = [f"Source: {self.source_id}", f"Records read: {self.total_records}"]
        for result in self.rule_results:
            suffix = " (skipped)" if result.skipped else ""
            lines.append(f"  {result.rule_name}: -{result.rows_removed} -> {result.rows_after}{suffix}")
            if result.columns_removed:
                lines.append(f"    columns removed: {', '.join(result.columns_removed)}")
        for test, count in self.validator_flags.items():
            lines.append(f"  flagged by {test}: {count}")
        lines.append(f"Removed by coordinate validator: {self.validator_removed}")
        lines.append(f"Flagged for review: {self.review_records}")
        lines.append(f"Records written: {self.written_records} -> {self.output_path}")
        return lines
