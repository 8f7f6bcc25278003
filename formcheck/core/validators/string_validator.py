"""
Character-class rules: string_allow and string_deny.

Each feature of the string vocabulary has a detector telling whether the
value contains that kind of character. string_allow lists the only features
a value may contain; string_deny lists features it must not contain.
"""

import re
from collections.abc import Mapping
from typing import Any

from formcheck.core.models import Violation

from .base_validator import RuleResult, is_empty

# Vocabulary order is also the order violated features are reported in
STRING_FEATURES = (
    "alpha",
    "numbers",
    "spaces",
    "low_strips",
    "mid_strips",
    "dots",
    "commas",
    "punctuation",
    "quotes",
    "symbols",
)

FEATURE_DETECTORS: dict[str, re.Pattern] = {
    "alpha": re.compile(r"[^\W\d_]"),
    "numbers": re.compile(r"[0-9]"),
    "spaces": re.compile(r"\s"),
    "low_strips": re.compile(r"_"),
    "mid_strips": re.compile(r"-"),
    "dots": re.compile(r"\."),
    "commas": re.compile(r","),
    "punctuation": re.compile(r"[¿?¡!]"),
    "quotes": re.compile(r"['\"]"),
    # Anything outside word characters, whitespace and the common punctuation set
    "symbols": re.compile(r"[^\w\s&*():+.,\[\]\-;/?!¿¡'\"#%$@]"),
}


def has_feature(feature: str, value: str) -> bool:
    """Whether the value contains at least one character of the feature."""
    return FEATURE_DETECTORS[feature].search(value) is not None


def violated_features(value: str, requested: tuple[str, ...], allow: bool) -> list[str]:
    """
    Features of the vocabulary the value breaks.

    In allow mode a requested feature is always fine and an unrequested one
    must be absent. In deny mode a requested feature must be absent and an
    unrequested one is always fine.
    """
    violated = []
    for feature in STRING_FEATURES:
        if (feature in requested) == allow:
            continue
        if has_feature(feature, value):
            violated.append(feature)
    return violated


def _string_mode(rule: str, value: Any, param: tuple[str, ...], allow: bool) -> RuleResult:
    if is_empty(value):
        return None
    violated = violated_features(str(value), param, allow)
    if violated:
        return Violation(rule=rule, key="string", details=tuple(f"string_{f}" for f in violated))
    return None


def validate_string_allow(value: Any, param: tuple[str, ...], record: Mapping[str, Any]) -> RuleResult:
    return _string_mode("string_allow", value, param, allow=True)


def validate_string_deny(value: Any, param: tuple[str, ...], record: Mapping[str, Any]) -> RuleResult:
    return _string_mode("string_deny", value, param, allow=False)
