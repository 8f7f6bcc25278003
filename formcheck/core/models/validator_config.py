"""
ValidatorConfig model holding the options that change how rules are evaluated.
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_DATE_TIME_FORMAT = "%Y-%m-%d %H:%M"
DEFAULT_TIME_FORMAT = "%H:%M"

# Reference instant used to check that a format survives a format/parse cycle
_SAMPLE_MOMENT = datetime(2017, 9, 8, 13, 45, 30)


class ValidatorConfig(BaseModel):
    """
    Options for a Validator.

    Attributes:
        return_boolean: Only report overall pass/fail, without field messages
        date_format: strptime/strftime format for date rules
        date_time_format: strptime/strftime format for date-time rules
        time_format: strptime/strftime format for time rules
        locale: Packaged message catalog to use ("en", "es")
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    return_boolean: bool = False
    date_format: str = DEFAULT_DATE_FORMAT
    date_time_format: str = DEFAULT_DATE_TIME_FORMAT
    time_format: str = DEFAULT_TIME_FORMAT
    locale: str = "en"

    @field_validator("date_format", "date_time_format", "time_format")
    @classmethod
    def check_format(cls, v: str) -> str:
        """Reject formats that cannot parse what they produce."""
        if not v or "%" not in v:
            raise ValueError(f"'{v}' is not a date format")
        try:
            datetime.strptime(_SAMPLE_MOMENT.strftime(v), v)
        except (ValueError, re.error) as e:
            raise ValueError(f"Date format '{v}' cannot be parsed back: {e}")
        return v

    def format_for(self, flavour: Literal["date", "date_time", "time"]) -> str:
        """Return the configured format for a date flavour."""
        return {
            "date": self.date_format,
            "date_time": self.date_time_format,
            "time": self.time_format,
        }[flavour]

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "ValidatorConfig":
        """
        Load options from the ``validator`` section of a YAML file.

        Args:
            config_path: Path to the YAML file

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the section is not a mapping
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Validator configuration file not found: {config_path}")

        with open(path) as f:
            config = yaml.safe_load(f) or {}

        section = config.get("validator", {})
        if not isinstance(section, dict):
            raise ValueError("'validator' section must be a mapping")
        return cls(**section)
