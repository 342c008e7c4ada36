"""Typed values for dynamic project attributes.

Attribute values are persisted as strings; their meaning depends on the
attribute's ``type``. Each type has a parse step (raw request value or stored
string -> typed in-memory value) and a format step (typed value -> stored
string). ``validate_attribute`` checks a whole ``(type, value, options)``
triple and returns the string form to persist.
"""
import enum
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from core.exceptions import ValidationError

MAX_VALUE_LENGTH = 255
# Bounds how many digits format(value, "f") can write out
MAX_NUMBER_EXPONENT = 200


class AttributeType(str, enum.Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    SELECT = "select"


MESSAGES = {
    "type": "Invalid attribute type selected.",
    "value.required": "Attribute value is required.",
    "value.string": "Value must be text.",
    "value.number": "Value must be a number for number type attributes.",
    "value.date": "Value must be a valid date for date type attributes.",
    "value.max": "Value may not be greater than 255 characters.",
    "value.in": "Selected value must be one of the provided options.",
    "options.required": "Options are required for select type attributes.",
    "options.string": "Option values must be text.",
    "options.distinct": "Option values must be distinct.",
}


def coerce_type(raw) -> AttributeType:
    try:
        return AttributeType(raw)
    except ValueError:
        raise ValidationError({"type": [MESSAGES["type"]]})


def _parse_string(raw) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise ValueError(MESSAGES["value.string"])
    return raw


def _parse_number(raw) -> Decimal:
    # bool is an int subclass; true/false is not a number here
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str, Decimal)):
        raise ValueError(MESSAGES["value.number"])
    try:
        number = Decimal(str(raw).strip())
    except InvalidOperation:
        raise ValueError(MESSAGES["value.number"])
    if not number.is_finite() or abs(number.adjusted()) > MAX_NUMBER_EXPONENT:
        raise ValueError(MESSAGES["value.number"])
    return number


def _parse_date(raw) -> date:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise ValueError(MESSAGES["value.date"])
    text = raw.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValueError(MESSAGES["value.date"])


def _format_number(value: Decimal) -> str:
    return format(value, "f")


def _format_date(value: date) -> str:
    return value.isoformat()


_PARSERS = {
    AttributeType.STRING: _parse_string,
    AttributeType.NUMBER: _parse_number,
    AttributeType.DATE: _parse_date,
    AttributeType.SELECT: _parse_string,
}

_FORMATTERS = {
    AttributeType.STRING: str,
    AttributeType.NUMBER: _format_number,
    AttributeType.DATE: _format_date,
    AttributeType.SELECT: str,
}


def parse_value(type_: AttributeType, raw):
    """Return the typed form of ``raw``; raises ``ValueError`` with a user message."""
    return _PARSERS[AttributeType(type_)](raw)


def format_value(type_: AttributeType, value) -> str:
    return _FORMATTERS[AttributeType(type_)](value)


def _check_options(options) -> list[str]:
    if not isinstance(options, (list, tuple)) or not options:
        raise ValidationError({"options": [MESSAGES["options.required"]]})
    if not all(isinstance(o, str) and o != "" for o in options):
        raise ValidationError({"options": [MESSAGES["options.string"]]})
    if len(set(options)) != len(options):
        raise ValidationError({"options": [MESSAGES["options.distinct"]]})
    return list(options)


def validate_attribute(type_, value, options=None) -> tuple[AttributeType, str, list[str] | None]:
    """Validate a ``(type, value, options)`` triple.

    Returns the normalised triple ready for storage: the type as an enum
    member, the value in its persisted string form and the options list (or
    ``None`` for every type other than ``select``).
    """
    attr_type = coerce_type(type_)

    if attr_type is AttributeType.SELECT:
        options = _check_options(options)
    else:
        options = None

    if value is None or (isinstance(value, str) and value == ""):
        raise ValidationError({"value": [MESSAGES["value.required"]]})

    try:
        typed = parse_value(attr_type, value)
    except ValueError as exc:
        raise ValidationError({"value": [str(exc)]})

    if attr_type is AttributeType.SELECT and typed not in options:
        raise ValidationError({"value": [MESSAGES["value.in"]]})

    stored = format_value(attr_type, typed)
    if len(stored) > MAX_VALUE_LENGTH:
        raise ValidationError({"value": [MESSAGES["value.max"]]})

    return attr_type, stored, options
