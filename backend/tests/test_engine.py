"""Tests for the field and form validators."""

import pytest

from formguard.validation import (
    MethodRegistry,
    init_error_messages,
    validate_data,
    validate_field,
)


@pytest.fixture
def methods():
    return MethodRegistry.with_defaults()


def messages_for(rules, methods, custom=None):
    return init_error_messages(rules, custom or {}, methods)


# =============================================================================
# validate_field
# =============================================================================


class TestRequiredShortCircuit:
    """An empty required field reports only the required message."""

    def test_empty_required_returns_only_required_message(self, methods):
        rules = {"code": {"required": True, "minLength": 5, "email": True, "foo": True}}
        table = messages_for(rules, methods)

        errors = validate_field(rules["code"], methods, "", "code", table, {})

        assert errors == ["This field is required"]

    def test_required_with_custom_message(self, methods):
        rules = {"code": {"required": True}}
        table = messages_for(rules, methods, {"code": {"required": "Code please"}})

        errors = validate_field(rules["code"], methods, None, "code", table, {})

        assert errors == ["Code please"]

    def test_empty_list_is_empty(self, methods):
        rules = {"tags": {"required": True, "minLength": 2}}
        table = messages_for(rules, methods)

        assert validate_field(rules["tags"], methods, [], "tags", table, {}) == [
            "This field is required"
        ]

    def test_conditional_required_active(self, methods):
        rules = {"code": {"required": [True, "hasDiscount"]}}
        table = messages_for(rules, methods)

        errors = validate_field(rules["code"], methods, "", "code", table, {"hasDiscount": "yes"})

        assert errors == ["This field is required"]

    def test_conditional_required_inactive(self, methods):
        rules = {"code": {"required": [True, "hasDiscount"]}}
        table = messages_for(rules, methods)

        errors = validate_field(rules["code"], methods, "", "code", table, {"hasDiscount": False})

        assert errors == []


class TestEmptyOptional:
    """An empty optional field is valid whatever else it declares."""

    def test_no_required_rule(self, methods):
        rules = {"site": {"url": True, "minLength": 50, "foo": True}}
        table = messages_for(rules, methods)

        assert validate_field(rules["site"], methods, "", "site", table, {}) == []

    def test_required_disabled(self, methods):
        rules = {"site": {"required": False, "url": True}}
        table = messages_for(rules, methods)

        assert validate_field(rules["site"], methods, "  ", "site", table, {}) == []

    def test_custom_required_redefines_emptiness(self, methods):
        methods.register("required", lambda value, params=None: value not in (None, "", "-"), "Pick one")
        rules = {"choice": {"minLength": 3}}
        table = messages_for(rules, methods)

        # "-" now counts as empty, so minLength never runs
        assert validate_field(rules["choice"], methods, "-", "choice", table, {}) == []

    def test_required_called_with_value_only(self, methods):
        methods.register("required", lambda value: value not in (None, "", "-"), "Pick one")
        rules = {"choice": {"required": True, "minLength": 3}}
        table = messages_for(rules, methods)

        assert validate_field(rules["choice"], methods, "-", "choice", table, {}) == ["Pick one"]
        assert validate_field(rules["choice"], methods, "abcd", "choice", table, {}) == []
        assert validate_field(rules["choice"], methods, "ab", "choice", table, {}) == [
            "Please enter more characters"
        ]

    def test_registry_without_required_still_validates(self):
        methods = MethodRegistry()
        methods.register("email", lambda value, params: "@" in value, "Bad email")
        rules = {"a": {"email": True}, "b": {"required": True}}
        table = messages_for(rules, methods)

        assert validate_data(rules, methods, {"a": "x"}, table) == {
            "a": ["Bad email"],
            "b": ["This field is required"],
        }


class TestRuleEvaluation:
    def test_valid_value_has_no_errors(self, methods):
        rules = {"email": {"required": True, "email": True}}
        table = messages_for(rules, methods)

        assert validate_field(rules["email"], methods, "a@b.io", "email", table, {}) == []

    def test_errors_follow_declaration_order(self, methods):
        rules = {"name": {"maxLength": 2, "regexp": "^[0-9]+$", "email": True}}
        table = messages_for(rules, methods)

        errors = validate_field(rules["name"], methods, "abc", "name", table, {})

        assert errors == [
            "Please enter fewer characters",
            "Please use the required format",
            "Please enter a valid email address",
        ]

    def test_falsy_parameter_skips_rule(self, methods):
        rules = {"name": {"minLength": 0, "email": None, "url": False}}
        table = messages_for(rules, methods)

        assert validate_field(rules["name"], methods, "x", "name", table, {}) == []

    def test_unknown_rule_is_reported(self, methods):
        rules = {"name": {"foo": True}}
        table = messages_for(rules, methods)

        errors = validate_field(rules["name"], methods, "value", "name", table, {})

        assert errors == ['Method "foo" not found']

    def test_disabled_unknown_rule_is_ignored(self, methods):
        rules = {"name": {"foo": False}}
        table = messages_for(rules, methods)

        assert validate_field(rules["name"], methods, "value", "name", table, {}) == []

    def test_predicate_fault_becomes_field_error(self, methods):
        def explode(value, params):
            raise RuntimeError("boom")

        methods.register("explode", explode, "never shown")
        rules = {"name": {"explode": True, "maxLength": 1}}
        table = messages_for(rules, methods)

        errors = validate_field(rules["name"], methods, "abc", "name", table, {})

        assert errors == [
            'Method "explode" failed: RuntimeError: boom',
            "Please enter fewer characters",
        ]

    def test_params_passed_to_predicate(self, methods):
        seen = []

        def record(value, params):
            seen.append((value, params))
            return True

        methods.register("record", record, "unused")
        rules = {"name": {"record": ["param", lambda data: True]}}
        table = messages_for(rules, methods)

        validate_field(rules["name"], methods, "abc", "name", table, {})

        assert seen == [("abc", "param")]

    def test_missing_table_entry_falls_back_to_default(self, methods):
        rules = {"name": {"maxLength": 1}}

        errors = validate_field(rules["name"], methods, "abc", "name", {}, {})

        assert errors == ["Please enter fewer characters"]

    def test_translate_applies_to_messages(self, methods):
        rules = {"name": {"maxLength": 1, "foo": True}}
        table = messages_for(rules, methods)

        errors = validate_field(
            rules["name"], methods, "abc", "name", table, {}, translate=str.upper
        )

        assert errors == ["PLEASE ENTER FEWER CHARACTERS", 'Method "foo" not found']


class TestDependencyGating:
    def test_inactive_dependency_never_evaluates_rule(self, methods):
        calls = []

        def tracking_min_length(value, params):
            calls.append(params)
            return len(value) >= params

        methods.register("minLength", tracking_min_length, "Too short")
        rules = {"code": {"minLength": [5, "hasDiscount"]}}
        table = messages_for(rules, methods)

        errors = validate_field(rules["code"], methods, "abc", "code", table, {"hasDiscount": False})

        assert errors == []
        assert calls == []

    def test_changing_gated_parameter_has_no_effect(self, methods):
        data = {"hasDiscount": False}
        results = []
        for param in (1, 5, 500):
            rules = {"code": {"minLength": [param, "hasDiscount"]}}
            table = messages_for(rules, methods)
            results.append(validate_field(rules["code"], methods, "abc", "code", table, data))

        assert results == [[], [], []]

    def test_active_dependency_reports_once(self, methods):
        rules = {"code": {"minLength": [5, "hasDiscount"]}}
        table = messages_for(rules, methods)

        errors = validate_field(rules["code"], methods, "abc", "code", table, {"hasDiscount": True})

        assert errors.count("Please enter more characters") == 1
        assert errors == ["Please enter more characters"]


# =============================================================================
# validate_data
# =============================================================================


class TestValidateData:
    def test_valid_field_maps_to_none(self, methods):
        rules = {"a": {"required": True}, "b": {"required": True, "email": True}}
        table = messages_for(rules, methods)

        result = validate_data(rules, methods, {"a": "x", "b": "nope"}, table)

        assert result == {"a": None, "b": ["Please enter a valid email address"]}
        assert result["a"] is None

    def test_only_ruled_fields_are_validated(self, methods):
        rules = {"a": {"required": True}}
        table = messages_for(rules, methods)

        result = validate_data(rules, methods, {"a": "x", "extra": ""}, table)

        assert list(result) == ["a"]

    def test_field_order_follows_rules(self, methods):
        rules = {"z": {"required": True}, "a": {"required": True}, "m": {}}
        table = messages_for(rules, methods)

        result = validate_data(rules, methods, {}, table)

        assert list(result) == ["z", "a", "m"]
        assert result["m"] is None

    def test_missing_field_is_empty(self, methods):
        rules = {"a": {"required": True}}
        table = messages_for(rules, methods)

        assert validate_data(rules, methods, {}, table) == {"a": ["This field is required"]}

    def test_compound_names_are_looked_up(self, methods):
        rules = {"user[email]": {"required": True, "email": True}, "phones[]": {"tel": True}}
        table = messages_for(rules, methods)
        data = {"user": {"email": "bad"}, "phones": ["+1 555 0100", "x"]}

        result = validate_data(rules, methods, data, table)

        assert result == {
            "user[email]": ["Please enter a valid email address"],
            "phones[]": ["Please enter a valid phone number"],
        }

    def test_idempotent(self, methods):
        rules = {
            "a": {"required": True, "minLength": [3, "b"]},
            "b": {"email": True},
        }
        table = messages_for(rules, methods)
        data = {"a": "xy", "b": "me@example.com"}

        first = validate_data(rules, methods, data, table)
        second = validate_data(rules, methods, data, table)

        assert first == second == {"a": ["Please enter more characters"], "b": None}

    def test_does_not_mutate_inputs(self, methods):
        rules = {"a": {"required": True, "minLength": [3, "b"]}}
        table = messages_for(rules, methods)
        data = {"a": "", "b": "x"}

        validate_data(rules, methods, data, table)

        assert rules == {"a": {"required": True, "minLength": [3, "b"]}}
        assert data == {"a": "", "b": "x"}

    def test_recomputes_after_data_change(self, methods):
        rules = {"a": {"required": True}}
        table = messages_for(rules, methods)

        assert validate_data(rules, methods, {}, table) == {"a": ["This field is required"]}
        assert validate_data(rules, methods, {"a": "now set"}, table) == {"a": None}
