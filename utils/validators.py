from datetime import datetime
from flask import request
from workflow.errors import InvalidPayload


def json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidPayload("Request body must be a JSON object")
    return data


def require_fields(data: dict, fields: list):
    missing = [f for f in fields if f not in data or data.get(f) in (None, "", [])]
    if missing:
        raise InvalidPayload(f"Missing required fields: {', '.join(missing)}")


def parse_text(value, field):
    if not isinstance(value, str):
        raise InvalidPayload(f"{field} must be a string")
    text = value.strip()
    if not text:
        raise InvalidPayload(f"{field} must not be blank")
    return text


def parse_date(value, field):
    """Accept YYYY-MM-DD or a full ISO-8601 timestamp and return a date."""
    if not isinstance(value, str):
        raise InvalidPayload(f"{field} must be a date string")
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
    except ValueError:
        raise InvalidPayload(f"{field} must be a valid date (YYYY-MM-DD)")


def parse_positive_number(value, field, maximum=None):
    if isinstance(value, bool):
        raise InvalidPayload(f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidPayload(f"{field} must be a number")
    if number != number or number <= 0:
        raise InvalidPayload(f"{field} must be greater than zero")
    if maximum is not None and number > maximum:
        raise InvalidPayload(f"{field} must not exceed {maximum:g}")
    return number


def parse_choice(value, enum_cls, field):
    key = str(value or "").strip().upper()
    try:
        return enum_cls(key)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidPayload(f"{field} must be one of: {allowed}")


def parse_bool(value, field, default=False):
    if value is None:
        return default
    if not isinstance(value, bool):
        raise InvalidPayload(f"{field} must be true or false")
    return value
