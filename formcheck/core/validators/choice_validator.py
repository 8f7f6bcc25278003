"""
Rules comparing a value against fixed choices: options, unique and compare.
"""

from collections.abc import Mapping
from typing import Any

from formcheck.core.models import Violation

from .base_validator import RuleResult, as_text_items, freeze, is_empty


def validate_options(value: Any, param: tuple[Any, ...], record: Mapping[str, Any]) -> RuleResult:
    """
    Every submitted option must be one of the allowed ones.

    Collections (multi-select values) must be wholly contained in the allowed
    set; a partial overlap fails.
    """
    if is_empty(value):
        return None
    allowed = {str(option) for option in param}
    if not set(as_text_items(value)) <= allowed:
        return Violation(rule="options")
    return None


def validate_unique(value: Any, param: tuple[Any, ...], record: Mapping[str, Any]) -> RuleResult:
    """
    Fail when the value already exists in the supplied list of taken values.
    """
    if is_empty(value):
        return None
    taken = {str(existing) for existing in param}
    if any(item in taken for item in as_text_items(value)):
        return Violation(rule="unique")
    return None


def validate_compare(value: Any, param: Any, record: Mapping[str, Any]) -> RuleResult:
    """
    The value must equal the parameter (compared as text when types differ).

    Collection parameters are stored frozen, so the value is frozen the same
    way before comparing.
    """
    if is_empty(value):
        return None
    if freeze(value) != param and str(value) != str(param):
        return Violation(rule="compare")
    return None
