"""
Pattern rules for e-mail addresses and URLs.
"""

import re
from collections.abc import Mapping
from typing import Any

from formcheck.core.models import Violation

from .base_validator import RuleResult, is_empty

EMAIL_PATTERN = re.compile(
    r"[_a-z0-9-]+(\.[_a-z0-9-]+)*(\+[_a-z0-9-]+)?@[a-z0-9-]+(\.[a-z0-9-]+)*\.[a-z]{2,}",
    re.IGNORECASE,
)

# Optional scheme, a dotted host ending in a 2-6 letter suffix, then an optional path/query
URL_PATTERN = re.compile(
    r"(https?://)?[a-z0-9.-]+\.[a-z.]{2,6}(:\d+)?([/?#][\w/?=&%#:+~.,;@!$'()*-]*)?/?",
    re.IGNORECASE,
)


def _pattern_check(rule: str, pattern: re.Pattern, value: Any, param: bool) -> RuleResult:
    if not param or is_empty(value):
        return None
    if not pattern.fullmatch(str(value)):
        return Violation(rule=rule)
    return None


def validate_email(value: Any, param: bool, record: Mapping[str, Any]) -> RuleResult:
    return _pattern_check("email", EMAIL_PATTERN, value, param)


def validate_url(value: Any, param: bool, record: Mapping[str, Any]) -> RuleResult:
    return _pattern_check("url", URL_PATTERN, value, param)
