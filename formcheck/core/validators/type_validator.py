"""
Value-type rules: number, decimal and json.
"""

import json
import re
from collections.abc import Mapping
from typing import Any

from formcheck.core.models import Violation

from .base_validator import RuleResult, as_number, is_empty


def validate_number(value: Any, param: bool, record: Mapping[str, Any]) -> RuleResult:
    """The value must be a number or a numeric string."""
    if not param or is_empty(value):
        return None
    if as_number(value) is None:
        return Violation(rule="number")
    return None


def validate_decimal(value: Any, param: bool | int, record: Mapping[str, Any]) -> RuleResult:
    """
    The value must be written as a decimal number.

    With an integer parameter the fractional part must have exactly that many
    digits; with True any non-empty fractional part is accepted.
    """
    if param is False or is_empty(value):
        return None
    if param is True:
        pattern = r"[0-9]+\.[0-9]+"
    else:
        pattern = rf"[0-9]+\.[0-9]{{{int(param)}}}"
    if not re.fullmatch(pattern, str(value)):
        return Violation(rule="decimal")
    return None


def validate_json(value: Any, param: bool, record: Mapping[str, Any]) -> RuleResult:
    """The value must be a JSON document."""
    if not param or is_empty(value):
        return None
    if not isinstance(value, str | bytes | bytearray):
        return Violation(rule="json")
    try:
        json.loads(value)
    except (ValueError, RecursionError):
        return Violation(rule="json")
    return None
