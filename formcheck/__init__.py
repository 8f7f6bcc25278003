"""
formcheck: declarative per-field validation of form-like records.

Rules are declared per field, evaluated against a record and reported as
error or warning messages per field instead of raising on the first failure.
"""

from formcheck.core.messages import MessageCatalog, MessageFormatter, mapping_catalog
from formcheck.core.models import FileUpload, RuleDefinition, ValidationOutcome, ValidatorConfig, Violation
from formcheck.core.rules import (
    ERROR,
    RULES,
    WARNING,
    RuleConfigBuilder,
    RuleConfigLoader,
    RuleRegistry,
    RuleSpec,
    Validator,
)
from formcheck.core.validators import STRING_FEATURES, RuleDefinitionError, UnknownRuleError

__version__ = "0.1.0"

__all__ = [
    "ERROR",
    "WARNING",
    "RULES",
    "STRING_FEATURES",
    "FileUpload",
    "MessageCatalog",
    "MessageFormatter",
    "RuleConfigBuilder",
    "RuleConfigLoader",
    "RuleDefinition",
    "RuleDefinitionError",
    "RuleRegistry",
    "RuleSpec",
    "UnknownRuleError",
    "ValidationOutcome",
    "Validator",
    "ValidatorConfig",
    "Violation",
    "mapping_catalog",
]
