"""
Rule configuration management.

Loads the rule library and per-source settings from YAML files, falling
back to the built-in defaults for anything the file leaves out.
"""

from pathlib import Path
from typing import Any

import yaml

from occurrence_cleaning.core.models import RuleDefinition, SourceConfig

from .rule_engine import RuleEngine
from .rule_sets import DEFAULT_SOURCES, RULE_LIBRARY, build_rule_definitions


class RuleConfigLoader:
    """
    Loads cleaning rules from YAML configuration files.

    Expected YAML format:
    ```yaml
    rule_library:
      latitude_bound:
        type: range
        field: decimalLatitude
        params:
          max: -45
      death_remark_exclusion:
        type: pattern_exclusion
        field: occurrenceRemarks
        params:
          pattern: "deceased|dead|died|mumm"

    sources:
      GBIF:
        rules:
          - latitude_bound
          - death_remark_exclusion
    ```

    Library entries in the file replace built-in rules of the same name and
    add new ones; built-in rules the file does not mention stay available.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")
        self._config: dict[str, Any] | None = None

    @property
    def config(self) -> dict[str, Any]:
        if self._config is None:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
            if config is None:
                config = {}
            if not isinstance(config, dict):
                raise ValueError(f"Configuration file {self.config_path} must contain a mapping")
            self._config = config
        return self._config

    def load_library(self) -> dict[str, RuleDefinition]:
        """
        Load the rule library.

        Returns:
            Mapping of rule name to definition

        Raises:
            ValueError: If a library entry is invalid
        """
        library = dict(RULE_LIBRARY)
        entries = self.config.get("rule_library") or {}
        if not isinstance(entries, dict):
            raise ValueError("'rule_library' must be a mapping of rule name to definition")

        for rule_name, rule_def in entries.items():
            library[rule_name] = self._parse_rule(rule_name, rule_def)
        return library

    def load_source_rules(self, source_id: str) -> list[str] | None:
        """Ordered rule names configured for a source, or None if not set."""
        source = self._source_section(source_id)
        rules = source.get("rules")
        if rules is None:
            return None
        if not isinstance(rules, list) or not all(isinstance(name, str) for name in rules):
            raise ValueError(f"'rules' for source '{source_id}' must be a list of rule names")
        return rules

    def load_rules(self, source_id: str) -> list[RuleDefinition]:
        """
        Load the ordered rule definitions for one source.

        Args:
            source_id: "GBIF" or "SCAR"

        Returns:
            Rule definitions suitable for RuleEngine

        Raises:
            ValueError: If a configured rule name is not in the library
        """
        rule_names = self.load_source_rules(source_id)
        if rule_names is None:
            rule_names = DEFAULT_SOURCES[source_id].rules
        return build_rule_definitions(rule_names, self.load_library())

    def _source_section(self, source_id: str) -> dict[str, Any]:
        sources = self.config.get("sources") or {}
        if not isinstance(sources, dict):
            raise ValueError("'sources' must be a mapping of source id to settings")
        section = sources.get(source_id) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Settings for source '{source_id}' must be a mapping")
        return section

    def _parse_rule(self, rule_name: str, rule_def: Any) -> RuleDefinition:
        """
        Parse a single rule definition.

        Args:
            rule_name: Library name of the rule
            rule_def: The rule definition from YAML

        Returns:
            Parsed rule definition

        Raises:
            ValueError: If rule definition is invalid
        """
        if not isinstance(rule_def, dict):
            raise ValueError(f"Rule '{rule_name}' must be a mapping")

        if "type" not in rule_def:
            raise ValueError(f"Rule '{rule_name}' is missing 'type'")

        rule_type = rule_def["type"]
        if rule_type not in RuleEngine.STEP_REGISTRY:
            raise ValueError(f"Unknown rule type '{rule_type}' for rule '{rule_name}'")

        # Extract parameters
        parameters = rule_def.get("params", rule_def.get("parameters", {})) or {}

        return RuleDefinition(
            rule_name=rule_name,
            rule_type=rule_type,
            field_name=rule_def.get("field"),
            parameters=parameters,
            enabled=rule_def.get("enabled", True),
            description=rule_def.get("description"),
        )


class CleaningConfigLoader(RuleConfigLoader):
    """
    Loads complete source configurations (paths, delimiter, rules, validator
    settings) from the same YAML file.

    Expected YAML format, in addition to `rule_library`:
    ```yaml
    sources:
      SCAR:
        input_path: Data/SCAR_APIS_1980-90/occurrence.txt
        output_path: Cleaned_Data/SCAR_cleaned.csv
        delimiter: "\\t"
        duplicate_fields: [eventDate]
        rules: [species_filter, latitude_bound]
    ```
    """

    def load_source(self, source_id: str) -> SourceConfig:
        """
        Build the configuration for one source.

        Fields missing from the file fall back to DEFAULT_SOURCES.

        Raises:
            ValueError: If the source is unknown or a rule is not in the library
            pydantic.ValidationError: If a field has an invalid value
        """
        if source_id not in DEFAULT_SOURCES:
            raise ValueError(f"Unknown source: {source_id}. Expected one of {sorted(DEFAULT_SOURCES)}")

        overrides = dict(self._source_section(source_id))
        overrides.pop("source_id", None)
        merged = {**DEFAULT_SOURCES[source_id].model_dump(), **overrides}
        config = SourceConfig(**merged)

        # Fail before any data is read
        build_rule_definitions(config.rules, self.load_library())
        return config

    def load_sources(self) -> dict[str, SourceConfig]:
        """Configurations for every known source."""
        return {source_id: self.load_source(source_id) for source_id in DEFAULT_SOURCES}
