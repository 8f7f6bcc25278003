"""
Registry mapping each rule name to its parameter check and its evaluator.

The mapping is built once per registry, so dispatch never depends on
constructing names at evaluation time.
"""

from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from formcheck.core.models import ValidatorConfig
from formcheck.core.validators import (
    FLAVOURS,
    DateValidator,
    Evaluator,
    RuleResult,
    UnknownRuleError,
)
from formcheck.core.validators.choice_validator import validate_compare, validate_options, validate_unique
from formcheck.core.validators.custom_validator import validate_custom
from formcheck.core.validators.file_validator import (
    validate_extension,
    validate_max_size,
    validate_min_size,
    validate_upload,
)
from formcheck.core.validators.range_validator import (
    validate_exact_length,
    validate_exact_val,
    validate_max_length,
    validate_max_val,
    validate_min_length,
    validate_min_val,
    validate_range_length,
    validate_range_val,
)
from formcheck.core.validators.regex_validator import validate_email, validate_url
from formcheck.core.validators.required_field_validator import validate_required, validate_required_either
from formcheck.core.validators.string_validator import validate_string_allow, validate_string_deny
from formcheck.core.validators.type_validator import validate_decimal, validate_json, validate_number

from . import param_checks
from .param_checks import ParamCheck

RULES = (
    "required", "required_either", "options", "compare",
    "min_length", "max_length", "exact_length", "range_length",
    "min_val", "max_val", "exact_val", "range_val",
    "date", "min_date", "max_date", "range_date",
    "date_time", "min_date_time", "max_date_time", "range_date_time",
    "time", "min_time", "max_time", "range_time",
    "min_date_field", "max_date_field", "min_date_time_field", "max_date_time_field",
    "min_time_field", "max_time_field",
    "url", "email", "extension", "json", "max_size", "min_size", "unique",
    "string_allow", "string_deny", "custom", "upload", "number", "decimal",
)

_NON_DATE_ENTRIES: dict[str, tuple[ParamCheck, Evaluator]] = {
    "required": (param_checks.check_flag, validate_required),
    "required_either": (param_checks.check_field_names, validate_required_either),
    "options": (param_checks.check_collection, validate_options),
    "unique": (param_checks.check_collection, validate_unique),
    "compare": (param_checks.check_not_null, validate_compare),
    "min_length": (param_checks.check_number, validate_min_length),
    "max_length": (param_checks.check_number, validate_max_length),
    "exact_length": (param_checks.check_number, validate_exact_length),
    "range_length": (param_checks.check_number_range, validate_range_length),
    "min_val": (param_checks.check_number, validate_min_val),
    "max_val": (param_checks.check_number, validate_max_val),
    "exact_val": (param_checks.check_number, validate_exact_val),
    "range_val": (param_checks.check_number_range, validate_range_val),
    "url": (param_checks.check_flag, validate_url),
    "email": (param_checks.check_flag, validate_email),
    "json": (param_checks.check_flag, validate_json),
    "number": (param_checks.check_flag, validate_number),
    "decimal": (param_checks.check_decimal, validate_decimal),
    "string_allow": (param_checks.check_string_features, validate_string_allow),
    "string_deny": (param_checks.check_string_features, validate_string_deny),
    "custom": (param_checks.check_callable, validate_custom),
    "upload": (param_checks.check_flag, validate_upload),
    "extension": (param_checks.check_extensions, validate_extension),
    "min_size": (param_checks.check_number, validate_min_size),
    "max_size": (param_checks.check_number, validate_max_size),
}


class RuleRegistry:
    """
    Resolves rule names to (parameter check, evaluator) pairs.

    Date rules depend on the configured formats, so each registry is bound to
    a ValidatorConfig. Registries are read-only once built and can be shared.
    """

    def __init__(self, config: ValidatorConfig | None = None):
        """
        Initialize the registry.

        Args:
            config: Validator options; only the date formats are used here
        """
        self.config = config or ValidatorConfig()
        self._entries = self._build_entries()

    def _build_entries(self) -> dict[str, tuple[ParamCheck, Evaluator]]:
        entries = dict(_NON_DATE_ENTRIES)
        for flavour in FLAVOURS:
            fmt = self.config.format_for(flavour)
            evaluators = DateValidator(flavour, fmt).evaluators()
            checks = {
                flavour: param_checks.check_flag,
                f"min_{flavour}": param_checks.moment_check(flavour, fmt),
                f"max_{flavour}": param_checks.moment_check(flavour, fmt),
                f"range_{flavour}": param_checks.moment_range_check(flavour, fmt),
                f"min_{flavour}_field": param_checks.check_field_names,
                f"max_{flavour}_field": param_checks.check_field_names,
            }
            for name, check in checks.items():
                entries[name] = (check, evaluators[name])

        missing = set(RULES) - set(entries)
        if missing:
            raise RuntimeError(f"Rules without an implementation: {sorted(missing)}")
        return {name: entries[name] for name in RULES}

    def __contains__(self, rule_name: object) -> bool:
        return rule_name in self._entries

    def names(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def check_param(self, rule_name: str, param: Any) -> Any:
        """
        Validate and normalize a rule parameter.

        Raises:
            UnknownRuleError: If the rule name is not supported
            RuleDefinitionError: If the parameter has the wrong shape
        """
        if rule_name not in self._entries:
            raise UnknownRuleError(rule_name)
        check, _ = self._entries[rule_name]
        return check(rule_name, param)

    def evaluator(self, rule_name: str) -> Evaluator:
        if rule_name not in self._entries:
            raise UnknownRuleError(rule_name)
        return self._entries[rule_name][1]

    def evaluate(self, rule_name: str, value: Any, param: Any, record: Mapping[str, Any]) -> RuleResult:
        return self.evaluator(rule_name)(value, param, record)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rules={len(self._entries)}, config={self.config!r})"


@lru_cache(maxsize=1)
def default_registry() -> RuleRegistry:
    """Registry using the default date formats."""
    return RuleRegistry()
