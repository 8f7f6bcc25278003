"""
Custom rule delegating to a caller-supplied predicate.
"""

from collections.abc import Callable, Mapping
from typing import Any

from formcheck.core.models import Violation

from .base_validator import RuleResult, is_empty


def validate_custom(value: Any, param: Callable[[Any, Mapping[str, Any]], bool], record: Mapping[str, Any]) -> RuleResult:
    """
    Validate using the custom predicate.

    The predicate signature should be:
        def my_check(value: Any, record: Mapping[str, Any]) -> bool

    A falsy return is the only failure signal. Exceptions raised by the
    predicate are programming errors and propagate to the caller.
    """
    if is_empty(value):
        return None
    if not param(value, record):
        return Violation(rule="custom")
    return None
