"""
RuleDefinition model representing one rule entry read from a configuration file.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class RuleDefinition(BaseModel):
    """
    A declarative rule entry, before it is turned into a RuleSpec.

    Parameter shapes are not checked here; RuleSpec does that when the
    definition is registered.

    Attributes:
        field_name: Which field this rule applies to
        rule: Rule identifier ("required", "range_val", ...)
        param: Rule-specific parameter (e.g., [18, 65] for range_val)
        severity: "error" (blocks the record) or "warning" (annotation only)
        message: Optional template replacing the catalog message
        enabled: Whether the rule is registered at all
    """

    field_name: str = Field(..., min_length=1)
    rule: str = Field(..., min_length=1)
    param: Any = None
    severity: Literal["error", "warning"] = "error"
    message: str | None = None
    enabled: bool = True

    class Config:
        json_schema_extra = {
            "example": {
                "field_name": "age",
                "rule": "range_val",
                "param": [18, 65],
                "severity": "error",
                "message": None,
                "enabled": True,
            }
        }
