import re
from datetime import datetime, timezone


def validate_email(email):
    """Validate email format"""
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return re.match(pattern, email) is not None


def json_object(payload):
    """Return the request payload as a dict; a missing body is an empty one"""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError('Request body must be a JSON object')
    return payload


def missing_fields(data, required_fields):
    """Return the required fields that are absent or empty in the payload"""
    missing = []
    for field in required_fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing


def parse_date(value, field='date'):
    """Parse a YYYY-MM-DD or ISO 8601 string into a naive UTC datetime.

    Raises ValueError with a client-facing message when the value cannot be
    parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Invalid {field}. Use YYYY-MM-DD or ISO 8601 format")
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid {field}. Use YYYY-MM-DD or ISO 8601 format")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_amount(value, field='amount'):
    """Parse a non-negative currency amount"""
    if isinstance(value, bool):
        raise ValueError(f"Invalid {field}. Must be a number")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {field}. Must be a number")
    if amount != amount or amount in (float('inf'), float('-inf')):
        raise ValueError(f"Invalid {field}. Must be a number")
    if amount < 0:
        raise ValueError(f"Invalid {field}. Must not be negative")
    return amount


def parse_enum(enum_class, value, field):
    """Look up an enum member by its human-readable label"""
    try:
        return enum_class(value)
    except ValueError:
        allowed = ', '.join(member.value for member in enum_class)
        raise ValueError(f"Invalid {field}. Must be one of: {allowed}")


def parse_id(value, field):
    """Parse a foreign-key reference into an integer id.

    Accepts integers, integral floats and digit strings; anything that would
    have to be truncated is rejected.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid {field}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Invalid {field}")
        return int(value)
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    raise ValueError(f"Invalid {field}")
