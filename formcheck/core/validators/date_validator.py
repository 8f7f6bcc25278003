"""
Date, date-time and time rules.

Each flavour parses values with its own configured format and compares
them chronologically against the bounds stored on the rule, or against the
value of another field of the record.
"""

from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any, Literal

from formcheck.core.models import Violation

from .base_validator import Evaluator, RuleResult, is_empty

Flavour = Literal["date", "date_time", "time"]
Moment = date | datetime | time

FLAVOURS: tuple[Flavour, ...] = ("date", "date_time", "time")


def parse_moment(value: Any, flavour: Flavour, fmt: str) -> Moment | None:
    """
    Convert a value to the flavour's type.

    Accepts strings in the given format and date/datetime/time objects.
    Returns None when the value cannot be read as that flavour.
    """
    if isinstance(value, datetime):
        if flavour == "date":
            return value.date()
        if flavour == "time":
            return value.time()
        return value
    if isinstance(value, date):
        if flavour == "date":
            return value
        if flavour == "date_time":
            return datetime.combine(value, time())
        return None
    if isinstance(value, time):
        return value if flavour == "time" else None
    if not isinstance(value, str):
        return None

    try:
        parsed = datetime.strptime(value.strip(), fmt)
    except ValueError:
        return None
    if flavour == "date":
        return parsed.date()
    if flavour == "time":
        return parsed.time()
    return parsed


class DateValidator:
    """
    Evaluators for one date flavour.

    Parameters:
    - flavour: "date", "date_time" or "time"
    - fmt: strptime format used to read string values
    """

    def __init__(self, flavour: Flavour, fmt: str):
        if flavour not in FLAVOURS:
            raise ValueError(f"Unsupported date flavour: {flavour}")
        self.flavour = flavour
        self.fmt = fmt

    def parse(self, value: Any) -> Moment | None:
        return parse_moment(value, self.flavour, self.fmt)

    def validate_format(self, value: Any, param: bool, record: Mapping[str, Any]) -> RuleResult:
        """The value must be readable with the flavour's format."""
        if not param or is_empty(value):
            return None
        if self.parse(value) is None:
            return Violation(rule=self.flavour)
        return None

    def _bounded(self, rule: str, value: Any, passes) -> RuleResult:
        if is_empty(value):
            return None
        moment = self.parse(value)
        if moment is None:
            return Violation(rule=rule, key=self.flavour)
        if not passes(moment):
            return Violation(rule=rule)
        return None

    def validate_min(self, value: Any, param: Moment, record: Mapping[str, Any]) -> RuleResult:
        return self._bounded(f"min_{self.flavour}", value, lambda m: m >= param)

    def validate_max(self, value: Any, param: Moment, record: Mapping[str, Any]) -> RuleResult:
        return self._bounded(f"max_{self.flavour}", value, lambda m: m <= param)

    def validate_range(self, value: Any, param: tuple[Moment, Moment], record: Mapping[str, Any]) -> RuleResult:
        """Value must lie within [start, end], both bounds included."""
        start, end = param
        return self._bounded(f"range_{self.flavour}", value, lambda m: start <= m <= end)

    def _against_fields(self, rule: str, value: Any, fields: tuple[str, ...], record: Mapping[str, Any], passes) -> RuleResult:
        if is_empty(value):
            return None
        moment = self.parse(value)
        if moment is None:
            return Violation(rule=rule, key=self.flavour)

        for field in fields:
            other = record.get(field)
            reference = None if is_empty(other) else self.parse(other)
            if reference is None:
                return Violation(rule=rule, key=f"{self.flavour}_field")
            if not passes(moment, reference):
                return Violation(rule=rule)
        return None

    def validate_min_field(self, value: Any, param: tuple[str, ...], record: Mapping[str, Any]) -> RuleResult:
        """Value must not be earlier than the referenced field(s)."""
        return self._against_fields(f"min_{self.flavour}_field", value, param, record, lambda m, ref: m >= ref)

    def validate_max_field(self, value: Any, param: tuple[str, ...], record: Mapping[str, Any]) -> RuleResult:
        """Value must not be later than the referenced field(s)."""
        return self._against_fields(f"max_{self.flavour}_field", value, param, record, lambda m, ref: m <= ref)

    def evaluators(self) -> dict[str, Evaluator]:
        """Map each rule name of this flavour to its evaluator."""
        f = self.flavour
        return {
            f: self.validate_format,
            f"min_{f}": self.validate_min,
            f"max_{f}": self.validate_max,
            f"range_{f}": self.validate_range,
            f"min_{f}_field": self.validate_min_field,
            f"max_{f}_field": self.validate_max_field,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(flavour={self.flavour}, fmt={self.fmt})"


def date_flavour(rule_name: str) -> Flavour | None:
    """Date flavour a rule works with, None for non-date rules."""
    core = rule_name.removesuffix("_field")
    for prefix in ("min_", "max_", "range_"):
        core = core.removeprefix(prefix)
    return core if core in FLAVOURS else None
