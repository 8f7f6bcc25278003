"""
Unit tests for the Validator, rule configuration loading and building.
"""

import pytest
from hypothesis import given, settings, strategies as st

from formcheck import (
    RuleConfigBuilder,
    RuleConfigLoader,
    RuleDefinitionError,
    RuleSpec,
    UnknownRuleError,
    ValidationOutcome,
    Validator,
    ValidatorConfig,
)


class TestValidatorRegistration:
    """Tests for adding and removing rules"""

    def test_add_is_chainable(self, validator):
        """Test add returns the validator"""
        result = validator.add("age", "required", True).add("age", "min_val", 18)
        assert result is validator
        assert list(validator.rules["age"]) == ["required", "min_val"]

    def test_add_list_of_sequences(self, validator):
        """Test several rules declared at once as sequences"""
        validator.add("nick", [
            ["required", True],
            ["max_length", 10, "warning"],
            ["string_allow", ["alpha"], None, "{field} letters only"],
        ])
        rules = validator.rules["nick"]
        assert rules["max_length"].severity == "warning"
        assert rules["string_allow"].severity == "error"
        assert rules["string_allow"].message == "{field} letters only"

    def test_add_list_of_mappings(self, validator):
        """Test several rules declared at once as mappings"""
        validator.add("age", [
            {"rule": "required", "param": True},
            {"rule": "range_val", "param": [18, 65], "severity": "warning"},
        ])
        assert validator.rules["age"]["range_val"].param == (18, 65)
        assert validator.rules["age"]["range_val"].severity == "warning"

    def test_list_entries_inherit_call_defaults(self, validator):
        """Test values missing from entries come from the call arguments"""
        validator.add("flag", ["required", "json"], True, severity="warning")
        assert {spec.severity for spec in validator.rules["flag"].values()} == {"warning"}
        assert validator.rules["flag"]["json"].param is True

    def test_mapping_entry_without_rule(self, validator):
        """Test a mapping entry must name its rule"""
        with pytest.raises(ValueError, match="missing 'rule'"):
            validator.add("x", [{"param": True}])

    def test_replacing_keeps_position(self, validator):
        """Test re-adding a rule replaces it in place"""
        validator.add("code", "required", True).add("code", "min_length", 2).add("code", "number", True)
        validator.add("code", "min_length", 4)
        assert list(validator.rules["code"]) == ["required", "min_length", "number"]
        assert validator.rules["code"]["min_length"].param == 4

    def test_bad_entry_leaves_rules_untouched(self, validator):
        """Test one invalid entry rejects the whole call"""
        validator.add("age", "required", True)
        with pytest.raises(RuleDefinitionError):
            validator.add("age", [["min_val", 1], ["range_val", [65, 18]]])
        assert list(validator.rules["age"]) == ["required"]

    def test_unknown_rule(self, validator):
        """Test unknown rule names are rejected at declaration"""
        with pytest.raises(UnknownRuleError, match="no_such_rule"):
            validator.add("x", "no_such_rule", True)
        assert "x" not in validator.rules

    def test_invalid_severity(self, validator):
        """Test severities other than error and warning are rejected"""
        with pytest.raises(RuleDefinitionError):
            validator.add("x", "required", True, severity="fatal")

    def test_remove(self, validator):
        """Test removing one rule and then a whole field"""
        validator.add("a", "required", True).add("a", "email", True).add("b", "required", True)
        validator.remove("a", "email")
        assert list(validator.rules["a"]) == ["required"]
        validator.remove("a", "required")
        assert "a" not in validator.rules
        validator.remove("b").remove("missing")
        assert dict(validator.rules) == {}

    def test_rules_view_is_read_only(self, validator):
        """Test the rules view cannot be mutated"""
        validator.add("a", "required", True)
        with pytest.raises(TypeError):
            validator.rules["a"]["email"] = RuleSpec("email", True)

    def test_rule_summary(self, validator):
        """Test rule summary counts"""
        validator.add("a", "required", True).add("a", "email", True, severity="warning")
        validator.add("b", "required", True)
        summary = validator.get_rule_summary()
        assert summary["total_rules"] == 3
        assert summary["fields"] == ["a", "b"]
        assert summary["rules_by_type"] == {"required": 2, "email": 1}
        assert summary["rules_by_severity"] == {"error": 2, "warning": 1}


class TestValidatorEvaluation:
    """Tests for validating records"""

    def test_range_and_string_example(self, validator):
        """Test an error and a warning on the same record"""
        validator.add("age", "range_val", [18, 65])
        validator.add("nick", "string_allow", ["alpha", "numbers"], severity="warning")

        assert validator.validate({"age": 70, "nick": "bob_99"}) is False
        assert validator.get_errors() == {"age": "age must be between 18 and 65"}
        assert validator.get_warnings() == {"nick": "not allowed: underscores"}

    def test_warnings_do_not_fail(self, validator):
        """Test warning-severity failures keep the record valid"""
        validator.add("nick", "string_allow", ["alpha"], severity="warning")
        outcome = validator.check({"nick": "bob_99"})
        assert outcome.passed is True
        assert outcome.errors == {}
        assert outcome.warnings == {"nick": "not allowed: numbers, underscores"}

    def test_absent_fields_skipped(self, validator):
        """Test fields missing from the record are not evaluated"""
        validator.add("email", "required", True)
        assert validator.validate({}) is True
        assert validator.get_errors() == {}

    def test_present_empty_field_checked(self, validator):
        """Test present but empty fields are evaluated"""
        validator.add("email", "required", True)
        assert validator.validate({"email": ""}) is False
        assert validator.get_errors() == {"email": "email is required"}

    def test_whitespace_is_present_for_every_rule(self, validator):
        """Test required and length rules agree that whitespace is a value"""
        validator.add("name", "required", True).add("name2", "min_length", 2)
        assert validator.validate({"name": "   ", "name2": "   "}) is True
        assert validator.get_errors() == {}

    def test_fields_without_rules_ignored(self, validator):
        """Test extra record fields are ignored"""
        validator.add("a", "min_val", 1)
        assert validator.validate({"a": 2, "junk": object()}) is True

    def test_later_failure_overwrites_earlier(self, validator):
        """Test one message per field, from the last failing rule"""
        validator.add("code", "min_length", 5).add("code", "number", True)
        validator.validate({"code": "ab"})
        assert validator.get_errors() == {"code": "number"}

    def test_all_rules_evaluated(self, validator):
        """Test evaluation continues after a failure"""
        validator.add("code", "number", True).add("code", "min_length", 5, severity="warning")
        outcome = validator.check({"code": "ab"})
        assert set(outcome.errors) == {"code"}
        assert set(outcome.warnings) == {"code"}

    def test_empty_values_pass_non_presence_rules(self, validator):
        """Test empty values only trip presence rules"""
        validator.add("email", "email", True).add("email", "min_length", 3)
        assert validator.validate({"email": ""}) is True

    def test_required_either(self, validator):
        """Test one of a group of fields must be filled"""
        validator.add("a", "required_either", ["b"])
        assert validator.validate({"a": "", "b": ""}) is False
        assert "a" in validator.get_errors()
        assert validator.validate({"a": "", "b": "x"}) is True

    def test_required_either_bad_reference(self, validator):
        """Test a sibling missing from the record is an invalid reference"""
        validator.add("a", "required_either", ["b"])
        validator.validate({"a": "x"})
        assert validator.get_errors() == {"a": "required_either_field"}

    def test_multi_file_max_size(self, validator, make_upload):
        """Test size limits apply to every file of a multi-file field"""
        validator.add("docs", "max_size", 1024)
        small, large = make_upload("a.pdf", size=100), make_upload("b.pdf", size=5000)
        assert validator.validate({"docs": [small, small]}) is True
        assert validator.validate({"docs": [small, large]}) is False
        assert validator.get_errors() == {"docs": "docs is larger than 1 KB"}

    def test_custom_receives_record(self, validator):
        """Test custom predicates see the whole record"""
        validator.add("confirm", "custom", lambda value, record: value == record["password"])
        assert validator.validate({"password": "s3cret", "confirm": "s3cret"}) is True
        assert validator.validate({"password": "s3cret", "confirm": "nope"}) is False
        assert validator.get_errors() == {"confirm": "rejected by callback"}

    def test_custom_exception_propagates(self, validator):
        """Test predicate errors reach the caller"""
        def explode(value, record):
            raise RuntimeError("boom")

        validator.add("x", "custom", explode)
        with pytest.raises(RuntimeError, match="boom"):
            validator.validate({"x": 1})

    def test_get_errors_before_validate(self, validator):
        """Test accessors before any validation"""
        assert validator.get_errors() == {}
        assert validator.get_warnings() == {}
        assert validator.last_outcome is None

    def test_outcome_replaced_each_call(self, validator):
        """Test nothing accumulates across validate calls"""
        validator.add("age", "min_val", 18)
        validator.validate({"age": 10})
        assert validator.get_errors()
        validator.validate({"age": 20})
        assert validator.get_errors() == {}
        assert validator.last_outcome == ValidationOutcome(passed=True)

    def test_returned_errors_are_copies(self, validator):
        """Test callers cannot mutate the stored outcome"""
        validator.add("age", "min_val", 18)
        validator.validate({"age": 10})
        validator.get_errors().clear()
        assert validator.get_errors()

    def test_boolean_mode(self, test_catalog):
        """Test return_boolean mode reports only pass/fail"""
        validator = Validator({"return_boolean": True}, catalog=test_catalog)
        validator.add("age", "range_val", [18, 65]).add("nick", "string_allow", ["alpha"], severity="warning")
        outcome = validator.check({"age": 70, "nick": "bob_99"})
        assert outcome == ValidationOutcome(passed=False)
        assert validator.check({"age": 30}).passed is True

    def test_config_mapping(self, test_catalog):
        """Test options given as a mapping"""
        validator = Validator({"date_format": "%d/%m/%Y"}, catalog=test_catalog)
        assert validator.config.date_format == "%d/%m/%Y"
        validator.add("start", "min_date", "08/09/2017")
        assert validator.validate({"start": "01/01/2018"}) is True
        assert validator.validate({"start": "2018-01-01"}) is False

    def test_unknown_config_option(self):
        """Test unknown options are rejected"""
        with pytest.raises(ValueError):
            Validator({"strict": True})

    def test_packaged_catalog(self):
        """Test the default catalog follows the configured locale"""
        validator = Validator({"locale": "es"}).add("name", "required", True)
        validator.validate({"name": ""})
        assert validator.get_errors() == {"name": "Este campo es obligatorio."}

    def test_validate_batch(self, validator):
        """Test batch validation returns one outcome per record"""
        validator.add("age", "range_val", [18, 65])
        outcomes = validator.validate_batch([{"age": 30}, {"age": 70}, {}])
        assert [o.passed for o in outcomes] == [True, False, True]
        assert outcomes[1].errors == {"age": "age must be between 18 and 65"}
        assert validator.last_outcome is None

    @given(age=st.one_of(st.integers(-1000, 1000), st.text(max_size=5), st.none()))
    @settings(max_examples=50)
    def test_idempotent(self, age):
        """Test validating the same record twice gives the same outcome"""
        validator = Validator().add("age", "range_val", [18, 65]).add("age", "required", True)
        assert validator.check({"age": age}) == validator.check({"age": age})

    @given(age=st.integers(-1000, 1000))
    @settings(max_examples=50)
    def test_passed_matches_errors(self, age):
        """Test passed is True exactly when no error was filed"""
        validator = Validator().add("age", "range_val", [18, 65])
        outcome = validator.check({"age": age})
        assert outcome.passed == (not outcome.errors)
        assert outcome.passed == (18 <= age <= 65)


class TestRuleConfigLoader:
    """Tests for YAML rule configuration"""

    def test_load_rules(self, tmp_path):
        """Test rules load in file order"""
        path = tmp_path / "rules.yaml"
        path.write_text(
            "rules:\n"
            "  age:\n"
            "    - required\n"
            "    - rule: range_val\n"
            "      param: [18, 65]\n"
            "  nick:\n"
            "    - rule: string_allow\n"
            "      param: [alpha, numbers]\n"
            "      severity: warning\n"
            "      enabled: false\n",
            encoding="utf-8",
        )
        rules = RuleConfigLoader(path).load_rules()
        assert [(r.field_name, r.rule) for r in rules] == [
            ("age", "required"), ("age", "range_val"), ("nick", "string_allow"),
        ]
        assert rules[0].param is True
        assert rules[2].enabled is False

    def test_build_validator(self, tmp_path, test_catalog):
        """Test a validator built from a file honours options and enabled flags"""
        path = tmp_path / "rules.yaml"
        path.write_text(
            "validator:\n"
            "  date_format: '%d/%m/%Y'\n"
            "rules:\n"
            "  start:\n"
            "    - rule: min_date\n"
            "      param: '08/09/2017'\n"
            "  nick:\n"
            "    - rule: string_allow\n"
            "      param: [alpha]\n"
            "      enabled: false\n",
            encoding="utf-8",
        )
        validator = RuleConfigLoader(path).build_validator(catalog=test_catalog)
        assert list(validator.rules) == ["start"]
        assert validator.validate({"start": "01/01/2017"}) is False
        assert validator.get_errors() == {"start": "on or after 08/09/2017"}

    def test_matches_builder(self, tmp_path, test_catalog):
        """Test a YAML file and the builder produce the same rule set"""
        path = tmp_path / "rules.yaml"
        path.write_text(
            "rules:\n"
            "  name:\n"
            "    - required\n"
            "    - rule: range_length\n"
            "      param: [2, 40]\n"
            "  color:\n"
            "    - rule: options\n"
            "      param: [red, green]\n",
            encoding="utf-8",
        )
        from_file = RuleConfigLoader(path).build_validator(catalog=test_catalog)
        built = (
            RuleConfigBuilder()
            .add_required("name")
            .add_length("name", min_length=2, max_length=40)
            .add_options("color", ["red", "green"])
            .apply(Validator(catalog=test_catalog))
        )
        as_dict = lambda v: {field: dict(rules) for field, rules in v.rules.items()}
        assert as_dict(from_file) == as_dict(built)

    def test_missing_file(self, tmp_path):
        """Test a missing file is reported"""
        with pytest.raises(FileNotFoundError):
            RuleConfigLoader(tmp_path / "nope.yaml")

    @pytest.mark.parametrize("content, match", [
        ("validator: {}\n", "'rules' section"),
        ("rules: [age]\n", "map field names"),
        ("rules:\n  age: required\n", "must be a list"),
        ("rules:\n  age:\n    - param: 3\n", "missing 'rule'"),
        ("rules:\n  age:\n    - rule: required\n      severity: fatal\n", "Invalid rule #0"),
        ("- just\n- a list\n", "must contain a mapping"),
    ])
    def test_invalid_files(self, tmp_path, content, match):
        """Test malformed files are rejected"""
        path = tmp_path / "rules.yaml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ValueError, match=match):
            RuleConfigLoader(path).load_rules()

    def test_invalid_parameter_reported_on_build(self, tmp_path):
        """Test parameter shapes are checked when rules are registered"""
        path = tmp_path / "rules.yaml"
        path.write_text("rules:\n  age:\n    - rule: range_val\n      param: 18\n", encoding="utf-8")
        with pytest.raises(RuleDefinitionError):
            RuleConfigLoader(path).build_validator()


class TestRuleConfigBuilder:
    """Tests for the programmatic builder"""

    def test_builder(self):
        """Test builder helpers produce definitions"""
        rules = (
            RuleConfigBuilder()
            .add_required("name")
            .add_length("name", min_length=2, max_length=40)
            .add_range("age", min_value=18)
            .add_options("color", ["red", "green"])
            .add_string_allow("nick", ["alpha"], severity="warning")
            .build()
        )
        assert [(r.field_name, r.rule) for r in rules] == [
            ("name", "required"),
            ("name", "range_length"),
            ("age", "min_val"),
            ("color", "options"),
            ("nick", "string_allow"),
        ]
        assert rules[-1].severity == "warning"

    def test_apply(self, validator):
        """Test built rules register on a validator"""
        RuleConfigBuilder().add_range("age", max_value=65).add_required("age").apply(validator)
        assert list(validator.rules["age"]) == ["max_val", "required"]
        assert validator.validate({"age": 70}) is False


class TestValidatorConfig:
    """Tests for validator options"""

    def test_defaults(self):
        """Test default options"""
        config = ValidatorConfig()
        assert config.return_boolean is False
        assert config.format_for("date") == "%Y-%m-%d"
        assert config.format_for("date_time") == "%Y-%m-%d %H:%M"
        assert config.format_for("time") == "%H:%M"
        assert config.locale == "en"

    @pytest.mark.parametrize("fmt", ["", "YYYY-MM-DD"])
    def test_invalid_format(self, fmt):
        """Test formats without directives are rejected"""
        with pytest.raises(ValueError):
            ValidatorConfig(date_format=fmt)

    def test_from_yaml(self, tmp_path):
        """Test options load from the validator section"""
        path = tmp_path / "config.yaml"
        path.write_text("validator:\n  return_boolean: true\n  time_format: '%H:%M:%S'\n", encoding="utf-8")
        config = ValidatorConfig.from_yaml(path)
        assert config.return_boolean is True
        assert config.time_format == "%H:%M:%S"

    def test_from_yaml_without_section(self, tmp_path):
        """Test a file without a validator section gives defaults"""
        path = tmp_path / "config.yaml"
        path.write_text("rules: {}\n", encoding="utf-8")
        assert ValidatorConfig.from_yaml(path) == ValidatorConfig()
