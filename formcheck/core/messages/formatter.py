"""
MessageFormatter: turns a Violation into the message filed for a field.
"""

import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from typing import TYPE_CHECKING, Any

from formcheck.core.models import FileUpload, ValidatorConfig, Violation
from formcheck.core.validators.date_validator import date_flavour
from formcheck.core.validators.file_validator import SIZE_RULES
from formcheck.utils import bytes_to_str, natural_join

from .catalog import MessageLookup

if TYPE_CHECKING:
    from formcheck.core.rules.rule_spec import RuleSpec

_PLACEHOLDER_RE = re.compile(r"\{(field|value|param)\}")

# Catalog key for the word joining the last two items of a list
CONJUNCTION_KEY = "and"


class MessageFormatter:
    """
    Renders violation messages.

    The template is the rule's own message when it has one, otherwise the
    catalog entry for the violation key followed by the catalog entries of
    its details. Placeholders {field}, {value} and {param} are substituted in
    a single pass, so substituted text is never re-expanded.
    """

    def __init__(self, catalog: MessageLookup, config: ValidatorConfig | None = None):
        self.catalog = catalog
        self.config = config or ValidatorConfig()

    def format(self, violation: Violation, spec: "RuleSpec", field: str, value: Any) -> str:
        """
        Build the message for a failed rule.

        Args:
            violation: What failed
            spec: The rule that produced the violation
            field: Field name the value belongs to
            value: The submitted value
        """
        template = spec.message or self.template_for(violation)
        replacements = {
            "field": field,
            "value": self.render_value(value),
            "param": self.render_param(spec),
        }
        return _PLACEHOLDER_RE.sub(lambda m: replacements[m.group(1)], template)

    def template_for(self, violation: Violation) -> str:
        template = self.catalog(violation.key)
        if violation.details:
            template = f"{template} {', '.join(self.catalog(d) for d in violation.details)}"
        return template

    def render_value(self, value: Any) -> str:
        upload = FileUpload.coerce(value)
        if upload is not None:
            return upload.name
        if value is None:
            return ""
        if isinstance(value, Mapping):
            return self._join(self.render_value(v) for v in value.values())
        if isinstance(value, list | tuple | set | frozenset):
            return self._join(self.render_value(v) for v in value)
        return str(value)

    def render_param(self, spec: "RuleSpec") -> str:
        """Render a rule parameter the way its message expects it."""
        param = spec.param
        if callable(param):
            return "callback"
        if spec.name in SIZE_RULES:
            return bytes_to_str(param)

        flavour = date_flavour(spec.name)
        if flavour is not None and not spec.name.endswith("_field"):
            fmt = self.config.format_for(flavour)
            if isinstance(param, tuple):
                return self._join(self._format_moment(m, fmt) for m in param)
            if isinstance(param, date | datetime | time):
                return self._format_moment(param, fmt)

        if isinstance(param, Mapping):
            return self._join(param.values())
        if isinstance(param, list | tuple | set | frozenset):
            return self._join(param)
        return str(param)

    def _join(self, items: Iterable[Any]) -> str:
        return natural_join(items, last_separator=f" {self.catalog(CONJUNCTION_KEY)} ")

    @staticmethod
    def _format_moment(moment: date | datetime | time, fmt: str) -> str:
        return moment.strftime(fmt)
