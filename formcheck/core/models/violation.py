"""
Violation model representing a single failed rule check (ephemeral).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class Violation(BaseModel):
    """
    Result of a failed rule check.

    Evaluators return a Violation on failure and None when the value passes.

    Attributes:
        rule: Name of the rule that failed ("min_length", "upload")
        key: Message catalog key for the base message. Defaults to the rule
             name; differs for reference errors ("date_field") or value-type
             failures ("number")
        details: Catalog keys whose messages are appended to the base
                 message ("string_numbers", "upload_error_4")
    """

    model_config = ConfigDict(frozen=True)

    rule: str
    key: str = ""
    details: tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def default_key(cls, data: Any) -> Any:
        """Use the rule name as catalog key unless one is given."""
        if isinstance(data, dict) and not data.get("key"):
            data = {**data, "key": data.get("rule", "")}
        return data
