"""Built-in validation methods.

Each method is a pure predicate ``(value, params) -> bool`` with a default
message. Multi-valued fields (checkbox groups, ``phones[]``) are checked
item by item; a single failing item fails the whole field.
"""

import re
from datetime import date
from typing import Any, Callable

from formguard.validation.types import FileRef, Method


# =============================================================================
# Format Patterns
# =============================================================================

# Email: Basic RFC 5322 compliant pattern
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
)

# Phone: Flexible pattern supporting international formats
PHONE_PATTERN = re.compile(
    r"^[\+]?[(]?[0-9]{1,3}[)]?[-\s\.]?[(]?[0-9]{1,4}[)]?[-\s\.]?[0-9]{1,4}[-\s\.]?[0-9]{1,9}$"
)

# URL: Basic URL pattern
URL_PATTERN = re.compile(
    r"^https?://[^\s/$.?#].[^\s]*$",
    re.IGNORECASE
)


def _each(value: Any, check: Callable[[Any], bool]) -> bool:
    if isinstance(value, (list, tuple)):
        return all(check(item) for item in value)
    return check(value)


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return None


# =============================================================================
# Predicates
# =============================================================================


def required(value: Any, params: Any = None) -> bool:
    """True when the value is present.

    None, blank strings, False and empty collections are empty.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def regexp(value: Any, params: Any) -> bool:
    pattern = params if isinstance(params, re.Pattern) else re.compile(str(params))
    return _each(value, lambda v: bool(pattern.search(str(v))))


def email(value: Any, params: Any = None) -> bool:
    return _each(value, lambda v: bool(EMAIL_PATTERN.match(str(v))))


def tel(value: Any, params: Any = None) -> bool:
    return _each(value, lambda v: bool(PHONE_PATTERN.match(str(v))))


def url(value: Any, params: Any = None) -> bool:
    return _each(value, lambda v: bool(URL_PATTERN.match(str(v))))


def _is_date(value: Any) -> bool:
    if isinstance(value, date):
        return True
    try:
        date.fromisoformat(str(value))
    except ValueError:
        return False
    return True


def is_date(value: Any, params: Any = None) -> bool:
    return _each(value, _is_date)


def number(value: Any, params: Any = None) -> bool:
    return _each(value, lambda v: _to_number(v) is not None)


def min_length(value: Any, params: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return len(value) >= int(params)
    return len(str(value)) >= int(params)


def max_length(value: Any, params: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return len(value) <= int(params)
    return len(str(value)) <= int(params)


def min_value(value: Any, params: Any) -> bool:
    def check(v: Any) -> bool:
        num = _to_number(v)
        return num is not None and num >= float(params)

    return _each(value, check)


def max_value(value: Any, params: Any) -> bool:
    def check(v: Any) -> bool:
        num = _to_number(v)
        return num is not None and num <= float(params)

    return _each(value, check)


def _extensions(params: Any) -> set[str]:
    if isinstance(params, str):
        params = params.split(",")
    return {str(ext).strip().lstrip(".").lower() for ext in params if str(ext).strip()}


def filetype(value: Any, params: Any) -> bool:
    """Every selected file has one of the allowed extensions ("jpg,png" or a list)."""
    allowed = _extensions(params)

    def check(v: Any) -> bool:
        name = v.name if isinstance(v, FileRef) else str(v)
        return "." in name and name.rsplit(".", 1)[1].lower() in allowed

    return _each(value, check)


def max_filesize(value: Any, params: Any) -> bool:
    """Every selected file is at most ``params`` bytes."""
    limit = int(params)
    return _each(value, lambda v: not isinstance(v, FileRef) or v.size <= limit)


DEFAULT_METHODS: dict[str, Method] = {
    "required": Method(required, "This field is required"),
    "regexp": Method(regexp, "Please use the required format"),
    "email": Method(email, "Please enter a valid email address"),
    "tel": Method(tel, "Please enter a valid phone number"),
    "url": Method(url, "Please enter a valid URL"),
    "date": Method(is_date, "Please enter a valid date"),
    "number": Method(number, "Please enter a valid number"),
    "minLength": Method(min_length, "Please enter more characters"),
    "maxLength": Method(max_length, "Please enter fewer characters"),
    "min": Method(min_value, "Please enter a greater value"),
    "max": Method(max_value, "Please enter a smaller value"),
    "filetype": Method(filetype, "Please choose a file of an allowed type"),
    "maxFilesize": Method(max_filesize, "The file is too big"),
}
