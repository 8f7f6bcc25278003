"""
Validator: applies per-field rule sets to records.

Rules are registered per field and evaluated in insertion order (fields
first, then rules within a field). Each failure is filed as a message under
its field in the error or warning map according to the rule's severity.
"""

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from formcheck.core.messages import MessageCatalog, MessageFormatter, MessageLookup
from formcheck.core.models import ValidationOutcome, ValidatorConfig
from formcheck.observability.logger import get_logger, log_operation

from .registry import RuleRegistry
from .rule_spec import ERROR, RuleSpec, Severity

logger = get_logger(__name__)

RuleEntry = Sequence[Any] | Mapping[str, Any]


class Validator:
    """
    Validates records against rules declared per field.

    Usage:
        validator = Validator()
        validator.add("age", "range_val", [18, 65]) \\
                 .add("nick", "string_allow", ["alpha", "numbers"], severity="warning")
        if not validator.validate({"age": 70, "nick": "bob_99"}):
            print(validator.get_errors())

    ``check`` returns a fresh ValidationOutcome and keeps no state, so it is
    safe to call concurrently. ``validate`` additionally remembers the last
    outcome for ``get_errors`` / ``get_warnings``.
    """

    def __init__(self, config: ValidatorConfig | Mapping[str, Any] | None = None, catalog: MessageLookup | None = None):
        """
        Initialize the validator.

        Args:
            config: ValidatorConfig or a mapping of its options
            catalog: Key -> template lookup; defaults to the packaged catalog
                     for the configured locale
        """
        if config is None:
            config = ValidatorConfig()
        elif not isinstance(config, ValidatorConfig):
            config = ValidatorConfig(**config)

        self.config = config
        self.registry = RuleRegistry(config)
        self.formatter = MessageFormatter(catalog or MessageCatalog(config.locale), config)
        self._rules: dict[str, dict[str, RuleSpec]] = {}
        self._last_outcome: ValidationOutcome | None = None

    def add(
        self,
        field: str,
        rule: str | Iterable[RuleEntry],
        param: Any = None,
        severity: Severity | None = None,
        message: str | None = None,
    ) -> "Validator":
        """
        Register one or several rules for a field.

        Re-adding a rule name for the same field replaces the earlier rule
        while keeping its position.

        Args:
            field: Field name the rules apply to
            rule: Rule name, or a list of entries given either as
                  [name, param, severity, message] sequences or as mappings
                  with "rule", "param", "severity" and "message" keys. Values
                  missing from an entry default to this call's arguments.
            param: Rule parameter
            severity: "error" (default) or "warning"
            message: Template replacing the catalog message

        Returns:
            self, so calls can be chained

        Raises:
            RuleDefinitionError: If a rule name or parameter is invalid
        """
        if isinstance(rule, str):
            entries = [(rule, param, severity, message)]
        else:
            entries = [self._unpack_entry(entry, param, severity, message) for entry in rule]

        # Build every spec first so a bad entry leaves the rule set untouched
        specs = [
            RuleSpec(name, entry_param, entry_severity or ERROR, entry_message, registry=self.registry)
            for name, entry_param, entry_severity, entry_message in entries
        ]
        field_rules = self._rules.setdefault(field, {})
        for spec in specs:
            field_rules[spec.name] = spec
            logger.debug(f"Registered rule {spec.name} on field {field}", extra={"field": field, "rule": spec.name})
        return self

    @staticmethod
    def _unpack_entry(entry: RuleEntry, param: Any, severity: Severity | None, message: str | None) -> tuple:
        if isinstance(entry, str):
            return entry, param, severity, message
        if isinstance(entry, Mapping):
            if "rule" not in entry:
                raise ValueError(f"Rule entry {dict(entry)!r} is missing 'rule'")
            return (
                entry["rule"],
                entry.get("param", param),
                entry.get("severity") or severity,
                entry.get("message") or message,
            )

        values = list(entry)
        if not values:
            raise ValueError("Rule entry must not be empty")
        defaults = [None, param, severity, message]
        padded = values + defaults[len(values):]
        name, entry_param, entry_severity, entry_message = padded[:4]
        return (
            name,
            param if entry_param is None else entry_param,
            entry_severity or severity,
            entry_message or message,
        )

    def remove(self, field: str, rule: str | None = None) -> "Validator":
        """Drop one rule of a field, or every rule of the field when rule is None."""
        if rule is None:
            self._rules.pop(field, None)
        elif field in self._rules:
            self._rules[field].pop(rule, None)
            if not self._rules[field]:
                del self._rules[field]
        return self

    @property
    def rules(self) -> Mapping[str, Mapping[str, RuleSpec]]:
        """Read-only view of the registered rules, per field."""
        return MappingProxyType({field: MappingProxyType(rules) for field, rules in self._rules.items()})

    def check(self, record: Mapping[str, Any]) -> ValidationOutcome:
        """
        Validate a record and return its outcome.

        Fields without rules are ignored and fields with rules that are absent
        from the record are skipped. Every remaining (field, rule) pair is
        evaluated regardless of earlier failures.

        Args:
            record: Field name -> submitted value

        Returns:
            ValidationOutcome; in return_boolean mode only ``passed`` is set
        """
        passed = True
        errors: dict[str, str] = {}
        warnings: dict[str, str] = {}

        for field, field_rules in self._rules.items():
            if field not in record:
                continue
            value = record[field]

            for spec in field_rules.values():
                violation = self.registry.evaluate(spec.name, value, spec.param, record)
                if violation is None:
                    continue

                logger.debug(
                    f"Rule {spec.name} failed on field {field}",
                    extra={"field": field, "rule": spec.name, "key": violation.key, "severity": spec.severity},
                )
                if spec.severity == ERROR:
                    passed = False
                if self.config.return_boolean:
                    continue

                text = self.formatter.format(violation, spec, field, value)
                if spec.severity == ERROR:
                    errors[field] = text
                else:
                    warnings[field] = text

        logger.debug(
            "Validation pass finished",
            extra={"passed": passed, "error_count": len(errors), "warning_count": len(warnings)},
        )
        return ValidationOutcome(passed=passed, errors=errors, warnings=warnings)

    def validate(self, record: Mapping[str, Any]) -> bool:
        """
        Validate a record, keeping its outcome for get_errors / get_warnings.

        Returns:
            True when no error-severity rule failed
        """
        self._last_outcome = self.check(record)
        return self._last_outcome.passed

    def validate_batch(self, records: Iterable[Mapping[str, Any]]) -> list[ValidationOutcome]:
        """
        Validate several independent records.

        Returns:
            One ValidationOutcome per record, in input order
        """
        records = list(records)
        with log_operation("Validating batch", logger=logger, record_count=len(records)):
            return [self.check(record) for record in records]

    @property
    def last_outcome(self) -> ValidationOutcome | None:
        return self._last_outcome

    def get_errors(self) -> dict[str, str]:
        """Error messages of the last validate call, per field."""
        return dict(self._last_outcome.errors) if self._last_outcome else {}

    def get_warnings(self) -> dict[str, str]:
        """Warning messages of the last validate call, per field."""
        return dict(self._last_outcome.warnings) if self._last_outcome else {}

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of registered rules.

        Returns:
            Dictionary with rule counts by field, type and severity
        """
        specs = [spec for rules in self._rules.values() for spec in rules.values()]
        return {
            "total_rules": len(specs),
            "fields": list(self._rules),
            "rules_by_type": self._count(spec.name for spec in specs),
            "rules_by_severity": self._count(spec.severity for spec in specs),
        }

    @staticmethod
    def _count(keys: Iterable[str]) -> dict[str, int]:
        counts: dict[str, int] = {}
        for key in keys:
            counts[key] = counts.get(key, 0) + 1
        return counts

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(fields={list(self._rules)}, config={self.config!r})"
