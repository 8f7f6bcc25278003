"""
Rule evaluators.

Provides the check functions for presence, choices, lengths and values,
types, patterns, character classes, dates, uploads and custom predicates.
"""

from .base_validator import (
    Evaluator,
    RuleDefinitionError,
    RuleResult,
    UnknownRuleError,
    as_number,
    as_sequence,
    freeze,
    is_empty,
)
from .date_validator import FLAVOURS, DateValidator, date_flavour, parse_moment
from .string_validator import STRING_FEATURES, violated_features

__all__ = [
    "Evaluator",
    "RuleResult",
    "RuleDefinitionError",
    "UnknownRuleError",
    "as_number",
    "as_sequence",
    "freeze",
    "is_empty",
    "DateValidator",
    "FLAVOURS",
    "date_flavour",
    "parse_moment",
    "STRING_FEATURES",
    "violated_features",
]
