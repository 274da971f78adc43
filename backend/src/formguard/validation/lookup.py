"""Value lookup by compound field name."""

import re
from typing import Any

from formguard.validation.types import DataMap

_NAME_TOKEN = re.compile(r"[^.\[\]]+|\[\]")


def name_path(name: str) -> tuple[list[str], bool]:
    """Split ``user[phones][]`` into (["user", "phones"], True)."""
    tokens = _NAME_TOKEN.findall(name)
    is_list = bool(tokens) and tokens[-1] == "[]"
    return [t for t in tokens if t != "[]"], is_list


def get_value_by_name(name: str, data: DataMap) -> Any:
    """Look up a field value, supporting dotted and bracketed names.

    A direct key always wins. Otherwise ``user[email]``, ``user.email``,
    ``phones[]`` and ``items[0]`` walk into nested mappings and lists.
    Missing paths give None.
    """
    if name in data:
        return data[name]

    path, _ = name_path(name)
    if not path:
        return None

    current: Any = data
    for token in path:
        if isinstance(current, dict) and token in current:
            current = current[token]
        elif isinstance(current, list) and token.isdigit() and int(token) < len(current):
            current = current[int(token)]
        else:
            return None
    return current
