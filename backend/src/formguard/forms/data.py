"""Data extraction from form controls.

Turns declared inputs into a Data Map and encodes the map for submission.
Lookups by compound name live in ``formguard.validation.lookup`` and are
re-exported here for adapter callers.
"""

import json
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from formguard.forms.model import FormInput, GroupInput, InputDefinition
from formguard.merge import deepmerge
from formguard.validation.lookup import get_value_by_name, name_path
from formguard.validation.types import DataMap, FileRef

SEND_TYPES = ("serialize", "json", "formData")

__all__ = [
    "MultipartBody",
    "SEND_TYPES",
    "convert_data",
    "get_data",
    "get_input_data",
    "get_value_by_name",
]


def _checkbox_value(item: InputDefinition) -> Any:
    if not item.checked:
        return False
    return item.value if item.value not in ("", None) else True


def _raw_value(form_input: FormInput) -> Any:
    if isinstance(form_input, GroupInput):
        if form_input.type == "radio":
            checked = [i.value for i in form_input.inputs if i.checked]
            return checked[0] if checked else ""
        if form_input.type == "checkbox":
            return [i.value for i in form_input.inputs if i.checked]
        if form_input.type == "file":
            return [f for i in form_input.inputs for f in i.files]
        return [i.value for i in form_input.inputs]

    if form_input.type == "checkbox":
        return _checkbox_value(form_input)
    if form_input.type == "radio":
        return form_input.value if form_input.checked else ""
    if form_input.type == "file":
        return list(form_input.files)
    if form_input.multiple:
        value = form_input.value
        if value in ("", None):
            return []
        return list(value) if isinstance(value, (list, tuple)) else [value]
    return form_input.value


def get_input_data(form_input: FormInput) -> DataMap:
    """Extract one control's (or group's) value as a Data Map fragment."""
    path, is_list = name_path(form_input.name)
    value = _raw_value(form_input)

    if is_list and not isinstance(value, list):
        value = [] if value in ("", None, False) else [value]

    if not path:
        return {form_input.name: value}

    fragment: Any = value
    for token in reversed(path):
        fragment = {token: fragment}
    return fragment


def get_data(inputs: dict[str, FormInput]) -> DataMap:
    """Snapshot every control into one Data Map."""
    data: DataMap = {}
    for form_input in inputs.values():
        data = deepmerge(data, get_input_data(form_input))
    return data


# =============================================================================
# Encoding
# =============================================================================


@dataclass
class MultipartBody:
    """Fields and files for a multipart/form-data request."""

    fields: list[tuple[str, str]] = field(default_factory=list)
    files: list[tuple[str, tuple[str, bytes, str]]] = field(default_factory=list)


def _scalar_text(value: Any) -> str | None:
    if value is None or value is False:
        return None
    if value is True:
        return "on"
    return str(value)


def _flatten(prefix: str, value: Any, body: MultipartBody) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]" if prefix else key, item, body)
    elif isinstance(value, list):
        for item in value:
            keep = prefix.endswith("[]") or isinstance(item, FileRef)
            _flatten(prefix if keep else f"{prefix}[]", item, body)
    elif isinstance(value, FileRef):
        body.files.append((prefix, (value.name, value.content, value.content_type)))
    else:
        text = _scalar_text(value)
        if text is not None:
            body.fields.append((prefix, text))


def _json_default(value: Any) -> Any:
    if isinstance(value, FileRef):
        return value.name
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def convert_data(data: DataMap, send_type: str) -> str | MultipartBody:
    """Encode a Data Map for the configured send type.

    Args:
        data: Form data snapshot
        send_type: "serialize" (url-encoded), "json" or "formData" (multipart)

    Raises:
        ValueError: For unknown send types
    """
    if send_type == "json":
        return json.dumps(data, default=_json_default)

    body = MultipartBody()
    _flatten("", data, body)

    if send_type == "serialize":
        return urlencode(body.fields)
    if send_type == "formData":
        return body

    raise ValueError(
        f"Unsupported send type '{send_type}'. Expected one of: {', '.join(SEND_TYPES)}"
    )
