"""Field schema parsing, structural checks, value validation and rendering."""

from datetime import date

import pytest

from apogee.core.errors import ValidationError
from apogee.services.field_schema import (
    FieldDefinition,
    check_field_schema,
    ensure_valid_values,
    parse_field_schema,
    render_field,
    render_schema,
    validate_configured_values,
    validate_field_value,
)


def field(**kwargs) -> FieldDefinition:
    data = {"id": "f1", "name": "Annual Maximum", "type": "number"}
    data.update(kwargs)
    return FieldDefinition.model_validate(data)


class TestValidateFieldValue:

    def test_required_field_empty(self):
        f = field(required=True)
        assert validate_field_value(f, None) == "Annual Maximum is required"
        assert validate_field_value(f, "") == "Annual Maximum is required"

    def test_optional_empty_passes_without_running_rules(self):
        f = field(validation={"min": 10})
        assert validate_field_value(f, None) is None
        assert validate_field_value(f, "") is None

    def test_zero_is_not_empty(self):
        f = field(required=True, validation={"min": 1})
        assert validate_field_value(f, 0) == "Minimum value is 1"

    def test_no_validation_rules_passes(self):
        assert validate_field_value(field(), "anything") is None

    def test_non_numeric_value(self):
        f = field(type="money", validation={"min": 0})
        assert validate_field_value(f, "abc") == "Must be a valid number"

    def test_numeric_bounds(self):
        f = field(validation={"min": 0, "max": 5000})
        assert validate_field_value(f, -1) == "Minimum value is 0"
        assert validate_field_value(f, "5000.5") == "Maximum value is 5000"
        assert validate_field_value(f, "2500") is None

    def test_fractional_bound_in_message(self):
        f = field(validation={"min": 0.5})
        assert validate_field_value(f, 0.1) == "Minimum value is 0.5"

    def test_custom_message_overrides(self):
        f = field(validation={"max": 10, "message": "Too much"})
        assert validate_field_value(f, 11) == "Too much"
        f = field(validation={"message": "Numbers only"})
        assert validate_field_value(f, "x") == "Numbers only"

    def test_percentage_not_bounded_unless_set(self):
        f = field(type="percentage", validation={"decimals": 2})
        assert validate_field_value(f, 150) is None

    def test_text_lengths(self):
        f = field(type="text", name="Plan Code", validation={"minLength": 2, "maxLength": 4})
        assert validate_field_value(f, "a") == "Minimum length is 2 characters"
        assert validate_field_value(f, "abcde") == "Maximum length is 4 characters"
        assert validate_field_value(f, "abc") is None

    def test_pattern_failure_reported_last(self):
        f = field(type="text", validation={"minLength": 5, "pattern": "^[0-9]+$"})
        # both the length and the pattern fail; the pattern runs last
        assert validate_field_value(f, "ab") == "Invalid format"

    def test_pattern_is_unanchored_search(self):
        f = field(type="textarea", validation={"pattern": "[0-9]"})
        assert validate_field_value(f, "plan 7") is None

    def test_date_and_cross_field_rules_are_not_enforced(self):
        f = field(type="date", validation={"minDate": "today"})
        assert validate_field_value(f, "1999-01-01") is None
        f = field(validation={"lessThanField": "f2"})
        assert validate_field_value(f, 10_000) is None


class TestConfiguredValues:

    SCHEMA = {
        "fields": [
            {"id": "max", "name": "Annual Maximum", "type": "money", "required": True,
             "validation": {"min": 0, "max": 5000}},
            {"id": "tier", "name": "Plan Tier", "type": "dropdown",
             "options": [{"value": "gold", "label": "Gold"}]},
        ]
    }

    def test_errors_keyed_by_field_id(self):
        schema = parse_field_schema(self.SCHEMA)
        errors = validate_configured_values(schema.fields, {"max": 9000})
        assert errors == {"max": "Maximum value is 5000"}

    def test_empty_result_when_valid(self):
        schema = parse_field_schema(self.SCHEMA)
        assert validate_configured_values(schema.fields, {"max": 100, "tier": "gold"}) == {}

    def test_ensure_valid_values_raises_with_details(self):
        schema = parse_field_schema(self.SCHEMA)
        with pytest.raises(ValidationError) as exc_info:
            ensure_valid_values(schema, {})
        assert exc_info.value.details["fields"] == {"max": "Annual Maximum is required"}


class TestSchemaChecks:

    def test_malformed_schema(self):
        with pytest.raises(ValidationError, match="malformed"):
            parse_field_schema({"fields": [{"id": "a", "name": "A", "type": "slider"}]})

    def test_empty_schema_is_allowed(self):
        assert check_field_schema(None) == {"fields": []}

    def test_normalised_output_is_camel_case(self):
        stored = check_field_schema({
            "fields": [{"id": "a", "name": "A", "type": "text", "validation": {"max_length": 3}}]
        })
        assert stored["fields"][0]["validation"] == {"maxLength": 3}

    def test_collects_all_problems(self):
        with pytest.raises(ValidationError) as exc_info:
            check_field_schema({
                "fields": [
                    {"id": "a", "name": "A", "type": "dropdown"},
                    {"id": "a", "name": "B", "type": "number", "validation": {"min": 5, "max": 1}},
                    {"id": "c", "name": "C", "type": "text", "validation": {"pattern": "("}},
                ]
            })
        problems = exc_info.value.details["problems"]
        assert 'Duplicate field id "a"' in problems
        assert "A: dropdown fields need at least one option" in problems
        assert "B: min is greater than max" in problems
        assert "C: pattern is not a valid regular expression" in problems

    def test_cross_field_reference_must_be_numeric(self):
        with pytest.raises(ValidationError) as exc_info:
            check_field_schema({
                "fields": [
                    {"id": "ded", "name": "Deductible", "type": "money",
                     "validation": {"lessThanField": "name"}},
                    {"id": "name", "name": "Name", "type": "text"},
                ]
            })
        assert exc_info.value.details["problems"] == [
            'Deductible: cross-field reference "name" must be between numeric fields'
        ]

    def test_cross_field_reference_to_numeric_field_passes(self):
        stored = check_field_schema({
            "fields": [
                {"id": "ded", "name": "Deductible", "type": "money",
                 "validation": {"lessThanField": "max"}},
                {"id": "max", "name": "Maximum", "type": "money"},
            ]
        })
        assert stored["fields"][0]["validation"]["lessThanField"] == "max"

    def test_bad_date_bound(self):
        with pytest.raises(ValidationError) as exc_info:
            check_field_schema({
                "fields": [{"id": "d", "name": "Start", "type": "date", "validation": {"minDate": "tomorrow"}}]
            })
        assert "not an ISO date" in exc_info.value.details["problems"][0]


class TestRender:

    def test_money_descriptor(self):
        d = render_field(field(type="money", validation={"min": 0, "max": 100}))
        assert d["input"] == "number"
        assert d["prefix"] == "$"
        assert (d["min"], d["max"], d["step"]) == (0, 100, 0.01)

    def test_percentage_defaults(self):
        d = render_field(field(type="percentage"))
        assert d["suffix"] == "%"
        assert (d["min"], d["max"]) == (0, 100)

    def test_date_today_resolved_at_render(self):
        today = date(2026, 3, 14)
        d = render_field(field(type="date", validation={"minDate": "today", "maxDate": "2030-01-01"}), today=today)
        assert d["minDate"] == "2026-03-14"
        assert d["maxDate"] == "2030-01-01"

    def test_dropdown_options(self):
        d = render_field(field(type="dropdown", options=[{"value": "g", "label": "Gold"}]))
        assert d["input"] == "select"
        assert d["options"] == [{"value": "g", "label": "Gold"}]

    def test_render_schema_keeps_order(self):
        schema = parse_field_schema({
            "fields": [
                {"id": "b", "name": "B", "type": "checkbox"},
                {"id": "a", "name": "A", "type": "textarea"},
            ]
        })
        assert [d["id"] for d in render_schema(schema)] == ["b", "a"]
