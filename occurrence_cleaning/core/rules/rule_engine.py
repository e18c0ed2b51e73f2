"""
Rule engine for running the cleaning chain over occurrence records.

The rule engine builds one step per rule definition and applies the steps
to a DataFrame in order, recording how many records each step removed.
"""

from typing import Any

from pyspark.sql import DataFrame

from occurrence_cleaning.core.models import RuleDefinition, RuleResult
from occurrence_cleaning.core.steps import (
    BaseStep,
    ColumnsDifferStep,
    DatePartsBackfillStep,
    DeduplicateStep,
    EqualsStep,
    ExcludeTrueStep,
    ExcludeValuesStep,
    ExpeditionDateStep,
    PatternExclusionStep,
    PruneEmptyColumnsStep,
    RangeStep,
    ReclassifyStep,
    ReplaceValueStep,
    RequiredFieldStep,
)
from occurrence_cleaning.observability.logger import get_logger, log_rule_result

logger = get_logger(__name__)


class RuleEngine:
    """
    Orchestrates cleaning steps on a batch of occurrence records.

    Builds steps from rule definitions and applies them in order. Every step
    returns a new DataFrame; the input is never modified.
    """

    STEP_REGISTRY: dict[str, type[BaseStep]] = {
        "equals": EqualsStep,
        "range": RangeStep,
        "exclude_values": ExcludeValuesStep,
        "exclude_true": ExcludeTrueStep,
        "required": RequiredFieldStep,
        "columns_differ": ColumnsDifferStep,
        "pattern_exclusion": PatternExclusionStep,
        "replace_value": ReplaceValueStep,
        "reclassify": ReclassifyStep,
        "expedition_date": ExpeditionDateStep,
        "date_parts_backfill": DatePartsBackfillStep,
        "deduplicate": DeduplicateStep,
        "prune_empty_columns": PruneEmptyColumnsStep,
    }

    def __init__(self, rules: list[RuleDefinition | dict[str, Any]]):
        """
        Initialize the rule engine with rule definitions.

        Args:
            rules: Rule definitions in evaluation order, either RuleDefinition
                   models or dicts containing:
                   - rule_name: str
                   - rule_type: str (see STEP_REGISTRY)
                   - field_name: str (optional for structural steps)
                   - parameters: Dict[str, Any] (optional)
                   - enabled: bool (default True)

        Raises:
            ValueError: If a rule has an unknown type or invalid parameters
        """
        self.rules = rules
        self.steps: list[BaseStep] = []
        self._build_steps()

    def _build_steps(self) -> None:
        """Build step instances from rule definitions."""
        for rule in self.rules:
            if isinstance(rule, RuleDefinition):
                rule = rule.model_dump()

            # Skip disabled rules
            if not rule.get("enabled", True):
                continue

            rule_name = rule.get("rule_name")
            if not rule_name:
                raise ValueError(f"Rule definition is missing 'rule_name': {rule}")

            rule_type = rule.get("rule_type")
            if not rule_type:
                raise ValueError(f"Rule '{rule_name}' is missing 'rule_type'")

            step_class = self.STEP_REGISTRY.get(rule_type)
            if not step_class:
                raise ValueError(f"Unknown rule type: {rule_type}")

            try:
                step = step_class(rule_name, rule.get("field_name"), rule.get("parameters") or {})
            except ValueError as e:
                raise ValueError(f"Failed to create step for rule '{rule_name}': {e}")
            self.steps.append(step)

    @property
    def rule_names(self) -> list[str]:
        return [step.rule_name for step in self.steps]

    def apply(self, df: DataFrame) -> DataFrame:
        """
        Apply every step in order.

        Args:
            df: Occurrence records

        Returns:
            Cleaned records
        """
        cleaned, _ = self.apply_with_results(df)
        return cleaned

    def apply_with_results(self, df: DataFrame) -> tuple[DataFrame, list[RuleResult]]:
        """
        Apply every step in order, counting rows before and after each one.

        Each intermediate result is cached so the counts do not recompute
        the whole chain; the previous cache is released once the next step
        has been materialised.

        Args:
            df: Occurrence records

        Returns:
            Tuple of (cleaned records, one RuleResult per step)
        """
        results: list[RuleResult] = []
        current = df
        rows_before = current.count()
        cached: DataFrame | None = None

        for step in self.steps:
            columns_before = current.columns

            if not step.is_applicable(current):
                result = RuleResult(
                    rule_name=step.rule_name,
                    rule_type=step.rule_type,
                    rows_before=rows_before,
                    rows_after=rows_before,
                    skipped=True,
                )
                results.append(result)
                log_rule_result(logger, result, field=step.field_name)
                continue

            transformed = step.transform(current).cache()
            rows_after = transformed.count()
            if cached is not None:
                cached.unpersist()
            cached = transformed
            current = transformed

            columns_removed = [name for name in columns_before if name not in current.columns]
            result = RuleResult(
                rule_name=step.rule_name,
                rule_type=step.rule_type,
                rows_before=rows_before,
                rows_after=rows_after,
                columns_removed=columns_removed,
            )
            results.append(result)
            log_rule_result(logger, result)
            rows_before = rows_after

        return current, results

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded rules.

        Returns:
            Dictionary with rule counts and order
        """
        return {
            "total_rules": len(self.steps),
            "rules_by_type": self._count_by_type(),
            "rule_order": self.rule_names,
        }

    def _count_by_type(self) -> dict[str, int]:
        """Count steps by rule type."""
        counts: dict[str, int] = {}
        for step in self.steps:
            counts[step.rule_type] = counts.get(step.rule_type, 0) + 1
        return counts
