"""
Parameter-shape checks run when a rule is declared.

Each check takes ``(rule_name, param)``, raises RuleDefinitionError when the
parameter has the wrong shape and returns the normalized parameter stored on
the RuleSpec.
"""

from collections.abc import Callable, Mapping, Set
from typing import Any

from formcheck.core.validators import (
    STRING_FEATURES,
    RuleDefinitionError,
    as_number,
    freeze,
    parse_moment,
)
from formcheck.core.validators.date_validator import Flavour

ParamCheck = Callable[[str, Any], Any]


def check_flag(name: str, param: Any) -> bool:
    if not isinstance(param, bool):
        raise RuleDefinitionError(name, "parameter must be a boolean (True or False)")
    return param


def check_number(name: str, param: Any) -> int | float:
    number = as_number(param)
    if number is None:
        raise RuleDefinitionError(name, f"parameter must be numeric, got {type(param).__name__}")
    return number


def check_decimal(name: str, param: Any) -> bool | int:
    """Either a flag or the exact number of decimal digits."""
    if isinstance(param, bool):
        return param
    number = as_number(param)
    if number is None or number < 0 or int(number) != number:
        raise RuleDefinitionError(name, "parameter must be a boolean or a non-negative digit count")
    return int(number)


def _check_pair(name: str, param: Any) -> tuple[Any, Any]:
    if not isinstance(param, list | tuple) or len(param) != 2:
        raise RuleDefinitionError(name, "parameter must be a [min, max] pair")
    return param[0], param[1]


def check_number_range(name: str, param: Any) -> tuple[int | float, int | float]:
    low, high = _check_pair(name, param)
    low_n, high_n = as_number(low), as_number(high)
    if low_n is None or high_n is None:
        raise RuleDefinitionError(name, "both range bounds must be numeric")
    if low_n > high_n:
        raise RuleDefinitionError(name, f"range minimum {low_n} is greater than maximum {high_n}")
    return low_n, high_n


def moment_check(flavour: Flavour, fmt: str) -> ParamCheck:
    """Build a check parsing a single date bound with the flavour's format."""
    def check(name: str, param: Any):
        moment = parse_moment(param, flavour, fmt)
        if moment is None:
            raise RuleDefinitionError(name, f"parameter must be a valid {flavour.replace('_', ' ')} in format '{fmt}'")
        return moment

    return check


def moment_range_check(flavour: Flavour, fmt: str) -> ParamCheck:
    """Build a check parsing a [start, end] pair with the flavour's format."""
    single = moment_check(flavour, fmt)

    def check(name: str, param: Any):
        start, end = (single(name, bound) for bound in _check_pair(name, param))
        if start > end:
            raise RuleDefinitionError(name, "range start is later than range end")
        return start, end

    return check


def check_collection(name: str, param: Any) -> tuple[Any, ...]:
    """A non-empty list, tuple or set. Mappings contribute keys and values."""
    if isinstance(param, Mapping):
        items = list(param.keys()) + list(param.values())
    elif isinstance(param, list | tuple):
        items = list(param)
    elif isinstance(param, Set):
        items = sorted(param, key=str)
    else:
        raise RuleDefinitionError(name, "parameter must be a list of values")
    if not items:
        raise RuleDefinitionError(name, "parameter must contain at least one element")
    return tuple(items)


def check_string_features(name: str, param: Any) -> tuple[str, ...]:
    items = check_collection(name, param)
    unknown = [str(item) for item in items if item not in STRING_FEATURES]
    if unknown:
        raise RuleDefinitionError(
            name,
            f"unknown string features ({', '.join(unknown)}); expected any of {', '.join(STRING_FEATURES)}",
        )
    return items


def check_not_null(name: str, param: Any) -> Any:
    if param is None:
        raise RuleDefinitionError(name, "parameter must not be null")
    return freeze(param)


def check_extensions(name: str, param: Any) -> tuple[str, ...]:
    check_not_null(name, param)
    items = [param] if isinstance(param, str) else list(check_collection(name, param))
    extensions = tuple(str(item).lower().lstrip(".") for item in items)
    if not all(extensions):
        raise RuleDefinitionError(name, "extensions must be non-empty strings")
    return extensions


def check_field_names(name: str, param: Any) -> tuple[str, ...]:
    """A field name or a non-empty list of field names."""
    check_not_null(name, param)
    fields = [param] if isinstance(param, str) else param
    if not isinstance(fields, list | tuple) or not fields:
        raise RuleDefinitionError(name, "parameter must be a field name or a non-empty list of field names")
    if not all(isinstance(field, str) and field for field in fields):
        raise RuleDefinitionError(name, "field names must be non-empty strings")
    return tuple(fields)


def check_callable(name: str, param: Any) -> Callable[[Any, Mapping[str, Any]], bool]:
    if not callable(param):
        raise RuleDefinitionError(name, "parameter must be a callable taking (value, record) and returning a boolean")
    return param
