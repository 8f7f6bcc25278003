"""
Length and numeric value rules (min, max, exact and inclusive ranges).
"""

from collections.abc import Mapping
from typing import Any

from formcheck.core.models import Violation

from .base_validator import RuleResult, as_number, is_empty


def _length(value: Any) -> int:
    if isinstance(value, list | tuple | set | frozenset | Mapping):
        return len(value)
    return len(str(value))


def validate_min_length(value: Any, param: float, record: Mapping[str, Any]) -> RuleResult:
    if is_empty(value):
        return None
    if _length(value) < param:
        return Violation(rule="min_length")
    return None


def validate_max_length(value: Any, param: float, record: Mapping[str, Any]) -> RuleResult:
    if is_empty(value):
        return None
    if _length(value) > param:
        return Violation(rule="max_length")
    return None


def validate_exact_length(value: Any, param: float, record: Mapping[str, Any]) -> RuleResult:
    if is_empty(value):
        return None
    if _length(value) != param:
        return Violation(rule="exact_length")
    return None


def validate_range_length(value: Any, param: tuple[float, float], record: Mapping[str, Any]) -> RuleResult:
    """Length must lie within [min, max], both bounds included."""
    if is_empty(value):
        return None
    low, high = param
    if not low <= _length(value) <= high:
        return Violation(rule="range_length")
    return None


def _numeric_check(rule: str, value: Any, passes) -> RuleResult:
    """Run a numeric comparison, reporting non-numeric values as such."""
    if is_empty(value):
        return None
    number = as_number(value)
    if number is None:
        return Violation(rule=rule, key="number")
    if not passes(number):
        return Violation(rule=rule)
    return None


def validate_min_val(value: Any, param: float, record: Mapping[str, Any]) -> RuleResult:
    return _numeric_check("min_val", value, lambda n: n >= param)


def validate_max_val(value: Any, param: float, record: Mapping[str, Any]) -> RuleResult:
    return _numeric_check("max_val", value, lambda n: n <= param)


def validate_exact_val(value: Any, param: float, record: Mapping[str, Any]) -> RuleResult:
    return _numeric_check("exact_val", value, lambda n: n == param)


def validate_range_val(value: Any, param: tuple[float, float], record: Mapping[str, Any]) -> RuleResult:
    """Value must lie within [min, max], both bounds included."""
    low, high = param
    return _numeric_check("range_val", value, lambda n: low <= n <= high)
