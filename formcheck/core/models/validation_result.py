"""
ValidationOutcome model representing the outcome of validating a record (ephemeral).
"""

from pydantic import BaseModel, Field, field_validator


class ValidationOutcome(BaseModel):
    """
    Outcome of one validation pass over a record.

    Note: ValidationOutcome is rebuilt on every pass, nothing accumulates
    across calls.

    Attributes:
        passed: Overall validation status (False if any error-severity rule failed)
        errors: Field name -> message for error-severity failures
        warnings: Field name -> message for warning-severity failures
    """

    passed: bool
    errors: dict[str, str] = Field(default_factory=dict)
    warnings: dict[str, str] = Field(default_factory=dict)

    @field_validator("errors")
    @classmethod
    def check_passed_consistency(cls, v, info):
        """Validate that passed=True implies errors is empty."""
        if info.data.get("passed") and len(v) > 0:
            raise ValueError("passed=True but errors is not empty")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "passed": False,
                "errors": {
                    "age": "The value must be between 18 and 65."
                },
                "warnings": {
                    "nickname": "This field does not allow: underscores"
                },
            }
        }
