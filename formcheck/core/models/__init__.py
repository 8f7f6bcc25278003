"""
Data models for the validation engine.

All models use Pydantic for runtime validation and type safety.
"""

from .file_upload import FileUpload
from .validation_result import ValidationOutcome
from .validation_rule import RuleDefinition
from .validator_config import ValidatorConfig
from .violation import Violation

__all__ = [
    "FileUpload",
    "RuleDefinition",
    "ValidationOutcome",
    "ValidatorConfig",
    "Violation",
]
