"""
Dynamic field schema — parsing, structural checks, value validation and
render descriptors for benefit template forms.

A template's ``field_schema`` is data, not code:

    {"fields": [
        {"id": "f1", "name": "Annual Maximum", "type": "money",
         "required": true, "validation": {"min": 0, "max": 5000}},
        {"id": "f2", "name": "Plan Tier", "type": "dropdown",
         "required": false, "options": [{"value": "gold", "label": "Gold"}]}
    ]}

Every check dispatches on the field ``type`` tag; there are no per-type
field classes.
"""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from apogee.core.constants import NUMERIC_FIELD_TYPES, TEXT_FIELD_TYPES, FieldType
from apogee.core.errors import ValidationError
from apogee.core.logging import get_logger

logger = get_logger(__name__)

TODAY_SENTINEL = "today"
CURRENCY_PREFIX = "$"
PERCENT_SUFFIX = "%"
PERCENT_DEFAULT_MIN = 0
PERCENT_DEFAULT_MAX = 100

INPUT_KINDS: dict[str, str] = {
    FieldType.TEXT: "text",
    FieldType.TEXTAREA: "textarea",
    FieldType.NUMBER: "number",
    FieldType.MONEY: "number",
    FieldType.PERCENTAGE: "number",
    FieldType.DATE: "date",
    FieldType.DROPDOWN: "select",
    FieldType.CHECKBOX: "checkbox",
}


# ── Schema models ─────────────────────────────

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DropdownOption(_CamelModel):
    value: str
    label: str


class RequiredIf(_CamelModel):
    """Conditional requirement. Stored with the schema, not enforced."""

    field: str
    value: Any = None


class FieldValidation(_CamelModel):
    # numeric
    min: float | None = None
    max: float | None = None
    decimals: int | None = Field(default=None, ge=0)
    # text
    min_length: int | None = Field(default=None, ge=0)
    max_length: int | None = Field(default=None, ge=0)
    pattern: str | None = None
    # date: ISO date or "today"
    min_date: str | None = None
    max_date: str | None = None
    # cross-field (ids of other numeric fields)
    less_than_field: str | None = None
    greater_than_field: str | None = None
    required_if: RequiredIf | None = None
    message: str | None = None


class FieldDefinition(_CamelModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    type: FieldType
    required: bool = False
    description: str | None = None
    placeholder: str | None = None
    options: list[DropdownOption] | None = None
    validation: FieldValidation | None = None


class FieldSchema(_CamelModel):
    fields: list[FieldDefinition] = Field(default_factory=list)


def parse_field_schema(raw: Mapping[str, Any] | None) -> FieldSchema:
    """Parse a stored/submitted ``{"fields": [...]}`` blob into models."""
    try:
        return FieldSchema.model_validate(raw or {"fields": []})
    except PydanticValidationError as exc:
        raise ValidationError(
            "Field schema is malformed",
            details={"errors": [
                {"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()
            ]},
        ) from exc


def dump_field_schema(schema: FieldSchema) -> dict[str, Any]:
    """Serialise back to the camelCase JSON layout stored in the database."""
    return schema.model_dump(by_alias=True, exclude_none=True, mode="json")


# ── Structural checks (on template save) ──────

def find_schema_problems(schema: FieldSchema) -> list[str]:
    """Return human-readable problems with a schema; empty when it is sound."""
    problems: list[str] = []
    by_id: dict[str, FieldDefinition] = {}

    for field in schema.fields:
        if field.id in by_id:
            problems.append(f'Duplicate field id "{field.id}"')
        by_id[field.id] = field

    for field in schema.fields:
        if field.type == FieldType.DROPDOWN and not field.options:
            problems.append(f"{field.name}: dropdown fields need at least one option")

        rules = field.validation
        if rules is None:
            continue

        if rules.min is not None and rules.max is not None and rules.min > rules.max:
            problems.append(f"{field.name}: min is greater than max")
        if rules.min_length and rules.max_length and rules.min_length > rules.max_length:
            problems.append(f"{field.name}: minLength is greater than maxLength")
        if rules.pattern is not None:
            try:
                re.compile(rules.pattern)
            except re.error:
                problems.append(f"{field.name}: pattern is not a valid regular expression")
        for bound in (rules.min_date, rules.max_date):
            if bound is not None and bound != TODAY_SENTINEL and _parse_iso_date(bound) is None:
                problems.append(f'{field.name}: date bound "{bound}" is not an ISO date or "today"')

        for ref in (rules.less_than_field, rules.greater_than_field):
            if ref is None:
                continue
            target = by_id.get(ref)
            if target is None or ref == field.id:
                problems.append(f'{field.name}: cross-field reference "{ref}" does not name another field')
            elif target.type not in NUMERIC_FIELD_TYPES or field.type not in NUMERIC_FIELD_TYPES:
                problems.append(f'{field.name}: cross-field reference "{ref}" must be between numeric fields')

        if rules.required_if is not None and rules.required_if.field not in by_id:
            problems.append(f'{field.name}: requiredIf refers to unknown field "{rules.required_if.field}"')

    return problems


def check_field_schema(raw: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Parse and structurally check a submitted schema.

    Returns the normalised JSON to store; raises ValidationError listing
    every problem found.
    """
    schema = parse_field_schema(raw)
    problems = find_schema_problems(schema)
    if problems:
        raise ValidationError("Field schema is invalid", details={"problems": problems})
    return dump_field_schema(schema)


# ── Value validation (on benefit configure) ───

def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _to_number(value: Any) -> float:
    """Loose numeric coercion; NaN when the value is not a number."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def _format_number(number: float) -> str:
    if float(number).is_integer():
        return str(int(number))
    return str(number)


def validate_field_value(field: FieldDefinition, value: Any) -> str | None:
    """
    Check one value against its field definition.

    Returns the error message or None.  When several checks fail, the
    message of the last failing check is returned.
    """
    if _is_empty(value):
        return f"{field.name} is required" if field.required else None

    rules = field.validation
    if rules is None:
        return None

    error: str | None = None

    if field.type in NUMERIC_FIELD_TYPES:
        number = _to_number(value)
        if math.isnan(number):
            return rules.message or "Must be a valid number"
        if rules.min is not None and number < rules.min:
            error = rules.message or f"Minimum value is {_format_number(rules.min)}"
        if rules.max is not None and number > rules.max:
            error = rules.message or f"Maximum value is {_format_number(rules.max)}"

    elif field.type in TEXT_FIELD_TYPES:
        text = str(value)
        if rules.min_length and len(text) < rules.min_length:
            error = rules.message or f"Minimum length is {rules.min_length} characters"
        if rules.max_length and len(text) > rules.max_length:
            error = rules.message or f"Maximum length is {rules.max_length} characters"
        if rules.pattern:
            try:
                matched = re.search(rules.pattern, text) is not None
            except re.error:
                matched = False
            if not matched:
                error = rules.message or "Invalid format"

    return error


def validate_configured_values(
    fields: Iterable[FieldDefinition],
    values: Mapping[str, Any] | None,
) -> dict[str, str]:
    """
    Validate configured values against a field list, in schema order.

    Returns ``{field_id: message}``; an empty dict means the values pass.
    Cross-field and requiredIf rules are not enforced here.
    """
    values = values or {}
    errors: dict[str, str] = {}
    for field in fields:
        message = validate_field_value(field, values.get(field.id))
        if message is not None:
            errors[field.id] = message
    return errors


def ensure_valid_values(schema: FieldSchema, values: Mapping[str, Any] | None) -> None:
    """Raise ValidationError carrying per-field messages when values fail."""
    errors = validate_configured_values(schema.fields, values)
    if errors:
        logger.info("Configured values rejected", field_errors=errors)
        raise ValidationError("Benefit configuration is invalid", details={"fields": errors})


# ── Render descriptors ────────────────────────

def _parse_iso_date(text: str) -> date | None:
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def _resolve_date_bound(bound: str | None, today: date) -> str | None:
    if bound == TODAY_SENTINEL:
        return today.isoformat()
    return bound


def _step(rules: FieldValidation | None, default: float | str) -> float | str:
    if rules is not None and rules.decimals:
        return 10 ** -rules.decimals
    return default


def render_field(field: FieldDefinition, *, today: date | None = None) -> dict[str, Any]:
    """
    Describe how a field is presented as a form input.

    "today" in date bounds is resolved against ``today`` (the current date
    at render time), not when values are validated.
    """
    today = today or date.today()
    rules = field.validation
    descriptor: dict[str, Any] = {
        "id": field.id,
        "name": field.name,
        "type": field.type.value,
        "input": INPUT_KINDS[field.type],
        "required": field.required,
        "description": field.description,
        "placeholder": field.placeholder,
    }

    if field.type == FieldType.NUMBER:
        descriptor.update(
            min=rules.min if rules else None,
            max=rules.max if rules else None,
            step=_step(rules, "any"),
        )
    elif field.type == FieldType.MONEY:
        descriptor.update(
            prefix=CURRENCY_PREFIX,
            min=rules.min if rules else None,
            max=rules.max if rules else None,
            step=0.01,
        )
    elif field.type == FieldType.PERCENTAGE:
        descriptor.update(
            suffix=PERCENT_SUFFIX,
            min=rules.min if rules and rules.min is not None else PERCENT_DEFAULT_MIN,
            max=rules.max if rules and rules.max is not None else PERCENT_DEFAULT_MAX,
            step=_step(rules, 0.01),
        )
    elif field.type in TEXT_FIELD_TYPES:
        if rules is not None:
            descriptor.update(
                minLength=rules.min_length,
                maxLength=rules.max_length,
                pattern=rules.pattern,
            )
    elif field.type == FieldType.DATE:
        descriptor.update(
            minDate=_resolve_date_bound(rules.min_date if rules else None, today),
            maxDate=_resolve_date_bound(rules.max_date if rules else None, today),
        )
    elif field.type == FieldType.DROPDOWN:
        descriptor["options"] = [o.model_dump() for o in field.options or []]

    return descriptor


def render_schema(schema: FieldSchema, *, today: date | None = None) -> list[dict[str, Any]]:
    today = today or date.today()
    return [render_field(field, today=today) for field in schema.fields]
