"""Recursive merge of configuration mappings."""

import copy
from collections.abc import Mapping
from typing import Any


def deepmerge(target: Mapping[str, Any] | None, source: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge ``source`` over ``target`` and return a new mapping.

    Nested mappings merge key by key. Sequences and scalars from ``source``
    replace the value in ``target`` wholesale, so rule lists and dependency
    chains are never spliced. Neither argument is mutated.
    """
    result: dict[str, Any] = {key: _copy(value) for key, value in (target or {}).items()}

    for key, value in (source or {}).items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deepmerge(current, value)
        else:
            result[key] = _copy(value)

    return result


def _copy(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _copy(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_copy(item) for item in value]
    if callable(value):
        return value
    return copy.copy(value)
