"""
Rule declaration, registry and validation engine.
"""

from .registry import RULES, RuleRegistry, default_registry
from .rule_config import RuleConfigBuilder, RuleConfigLoader, apply_definitions
from .rule_engine import Validator
from .rule_spec import ERROR, WARNING, RuleSpec, Severity

__all__ = [
    "ERROR",
    "WARNING",
    "RULES",
    "RuleConfigBuilder",
    "RuleConfigLoader",
    "RuleRegistry",
    "RuleSpec",
    "Severity",
    "Validator",
    "apply_definitions",
    "default_registry",
]
