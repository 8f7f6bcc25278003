"""
Shared contract and helpers for all rule evaluators.

Every evaluator is a plain function with the signature
``(value, param, record) -> Violation | None``: it returns None when the value
passes and a Violation naming the failed rule otherwise. The whole record is
always passed explicitly so cross-field rules can look up sibling values.
"""

import re
from collections.abc import Callable, Mapping
from numbers import Number
from types import MappingProxyType
from typing import Any

from formcheck.core.models import Violation

RuleResult = Violation | None
Evaluator = Callable[[Any, Any, Mapping[str, Any]], RuleResult]

_NUMBER_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


class RuleDefinitionError(ValueError):
    """Raised when a rule is declared with an unknown name or a malformed parameter."""

    def __init__(self, rule_name: str, message: str):
        self.rule_name = rule_name
        self.message = message
        super().__init__(f"[{rule_name}] {message}")


class UnknownRuleError(RuleDefinitionError):
    """Raised when a rule name is not part of the supported rule set."""

    def __init__(self, rule_name: str):
        super().__init__(rule_name, f"Unrecognized validation rule '{rule_name}'")


def is_empty(value: Any) -> bool:
    """
    Whether a value counts as "not provided".

    None, False, the empty string and empty collections are empty.
    The string "0" and the number 0 are present values.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, frozenset, Mapping)):
        return len(value) == 0
    return False


def as_number(value: Any) -> int | float | None:
    """Convert a number or numeric string to a number, None if it is neither."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return value
    if isinstance(value, Number):
        return float(value)
    if isinstance(value, str) and _NUMBER_RE.match(value):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            return float(text)
    return None


def as_sequence(value: Any) -> list[Any] | None:
    """
    Return the items of a sequentially indexed collection.

    Lists and tuples qualify, as do mappings whose keys are exactly 0..n-1
    (as ints or digit strings). Anything else returns None.
    """
    if isinstance(value, list | tuple):
        return list(value)
    if isinstance(value, Mapping) and value:
        try:
            indexes = sorted(int(k) for k in value.keys())
        except (TypeError, ValueError):
            return None
        if indexes != list(range(len(value))):
            return None
        by_index = {int(k): v for k, v in value.items()}
        return [by_index[i] for i in indexes]
    return None


def freeze(value: Any) -> Any:
    """Read-only copy of a value: lists become tuples, sets frozensets, mappings proxies."""
    if isinstance(value, list | tuple):
        return tuple(freeze(item) for item in value)
    if isinstance(value, set | frozenset):
        return frozenset(freeze(item) for item in value)
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    return value


def as_text_items(value: Any) -> list[str]:
    """Flatten a scalar or collection into a list of strings for membership checks."""
    if isinstance(value, Mapping):
        return [str(v) for v in value.values()]
    if isinstance(value, list | tuple | set | frozenset):
        return [str(v) for v in value]
    return [str(value)]
