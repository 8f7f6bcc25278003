"""
Presence rules: a field must hold a value, or one of a group of fields must.
"""

from collections.abc import Mapping
from typing import Any

from formcheck.core.models import Violation

from .base_validator import RuleResult, is_empty


def validate_required(value: Any, param: bool, record: Mapping[str, Any]) -> RuleResult:
    """
    Fail when the value is missing.

    Fails for None, False, the empty string and empty collections.
    "0", 0 and whitespace-only strings are present.
    """
    if not param:
        return None
    if is_empty(value):
        return Violation(rule="required")
    return None


def validate_required_either(value: Any, param: tuple[str, ...], record: Mapping[str, Any]) -> RuleResult:
    """
    Fail when the value and every referenced sibling field are all empty.

    A referenced field that is not part of the record is reported as an
    invalid reference rather than as a missing value.
    """
    for sibling in param:
        if sibling not in record:
            return Violation(rule="required_either", key="required_either_field")

    if not is_empty(value):
        return None
    if any(not is_empty(record[sibling]) for sibling in param):
        return None
    return Violation(rule="required_either")
