"""
Rule configuration management.

Loads rule sets from YAML files and provides a builder for declaring them
programmatically.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from formcheck.core.messages import MessageLookup
from formcheck.core.models import RuleDefinition, ValidatorConfig

from .rule_engine import Validator


def apply_definitions(validator: Validator, definitions: list[RuleDefinition]) -> Validator:
    """Register enabled rule definitions on a validator, in order."""
    for definition in definitions:
        if not definition.enabled:
            continue
        validator.add(
            definition.field_name,
            definition.rule,
            definition.param,
            severity=definition.severity,
            message=definition.message,
        )
    return validator


class RuleConfigLoader:
    """
    Loads validation rules from YAML configuration files.

    Expected YAML format:
    ```yaml
    validator:
      date_format: "%d/%m/%Y"

    rules:
      age:
        - rule: required
          param: true
        - rule: range_val
          param: [18, 65]

      nickname:
        - rule: string_allow
          param: [alpha, numbers]
          severity: warning
          message: "{field} may only hold letters and digits"
    ```

    The ``validator`` section is optional and holds ValidatorConfig options.
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

    def _read(self) -> dict[str, Any]:
        with open(self.config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a mapping")
        return config

    def load_rules(self) -> list[RuleDefinition]:
        """
        Load and parse validation rules from YAML file.

        Returns:
            Rule definitions in file order

        Raises:
            ValueError: If YAML is invalid or missing required fields
        """
        config = self._read()
        if "rules" not in config:
            raise ValueError("Configuration file must contain 'rules' section")

        field_rules = config["rules"]
        if not isinstance(field_rules, dict):
            raise ValueError("'rules' section must map field names to rule lists")

        rules = []
        for field_name, field_rule_list in field_rules.items():
            if not isinstance(field_rule_list, list):
                raise ValueError(f"Rules for field '{field_name}' must be a list")

            for idx, rule_def in enumerate(field_rule_list):
                rules.append(self._parse_rule(str(field_name), rule_def, idx))

        return rules

    def _parse_rule(self, field_name: str, rule_def: Any, idx: int) -> RuleDefinition:
        """
        Parse a single rule definition.

        A bare string is shorthand for a flag rule switched on ("- required").

        Raises:
            ValueError: If rule definition is invalid
        """
        if isinstance(rule_def, str):
            rule_def = {"rule": rule_def, "param": True}
        if not isinstance(rule_def, dict):
            raise ValueError(f"Rule #{idx} for field '{field_name}' must be a mapping")
        if "rule" not in rule_def:
            raise ValueError(f"Rule #{idx} for field '{field_name}' is missing 'rule'")

        try:
            return RuleDefinition(field_name=field_name, **rule_def)
        except ValidationError as e:
            raise ValueError(f"Invalid rule #{idx} for field '{field_name}': {e}")

    def load_config(self) -> ValidatorConfig:
        """Validator options from the optional ``validator`` section."""
        section = self._read().get("validator") or {}
        if not isinstance(section, dict):
            raise ValueError("'validator' section must be a mapping")
        return ValidatorConfig(**section)

    def build_validator(self, catalog: MessageLookup | None = None) -> Validator:
        """Create a Validator configured and populated from the file."""
        validator = Validator(self.load_config(), catalog=catalog)
        return apply_definitions(validator, self.load_rules())


class RuleConfigBuilder:
    """
    Programmatically build rule configurations (for testing or dynamic rules).
    """

    def __init__(self):
        """Initialize empty rule configuration."""
        self.rules: list[RuleDefinition] = []

    def add(
        self,
        field_name: str,
        rule: str,
        param: Any = None,
        severity: str = "error",
        message: str | None = None,
    ) -> "RuleConfigBuilder":
        """Add any rule."""
        self.rules.append(RuleDefinition(
            field_name=field_name,
            rule=rule,
            param=param,
            severity=severity,
            message=message,
        ))
        return self

    def add_required(self, field_name: str, severity: str = "error") -> "RuleConfigBuilder":
        """Add a required field rule."""
        return self.add(field_name, "required", True, severity)

    def add_length(
        self,
        field_name: str,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> "RuleConfigBuilder":
        """Add length rules; both bounds make an inclusive range_length."""
        if min_length is not None and max_length is not None:
            return self.add(field_name, "range_length", [min_length, max_length])
        if min_length is not None:
            self.add(field_name, "min_length", min_length)
        if max_length is not None:
            self.add(field_name, "max_length", max_length)
        return self

    def add_range(
        self,
        field_name: str,
        min_value: float | None = None,
        max_value: float | None = None,
    ) -> "RuleConfigBuilder":
        """Add value rules; both bounds make an inclusive range_val."""
        if min_value is not None and max_value is not None:
            return self.add(field_name, "range_val", [min_value, max_value])
        if min_value is not None:
            self.add(field_name, "min_val", min_value)
        if max_value is not None:
            self.add(field_name, "max_val", max_value)
        return self

    def add_options(self, field_name: str, options: list[Any]) -> "RuleConfigBuilder":
        """Add an allowed-options rule."""
        return self.add(field_name, "options", options)

    def add_string_allow(self, field_name: str, features: list[str], severity: str = "error") -> "RuleConfigBuilder":
        """Add a character-class rule listing the only allowed features."""
        return self.add(field_name, "string_allow", features, severity)

    def build(self) -> list[RuleDefinition]:
        """Build and return the rule configuration."""
        return list(self.rules)

    def apply(self, validator: Validator) -> Validator:
        """Register the built rules on a validator."""
        return apply_definitions(validator, self.rules)
