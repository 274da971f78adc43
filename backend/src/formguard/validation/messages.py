"""Error message resolution.

Precomputes, for every field and rule, the message shown when that rule
fails. Priority per entry:
1. Field-level custom message: ``messages[field][rule]``
2. Rule-level custom message: ``messages[rule]``
3. The method's default message

Messages are stored untranslated; translation happens when they are shown.
"""

from collections.abc import Mapping
from typing import Any

from formguard.validation.registry import MethodRegistry
from formguard.validation.types import ErrorMessageTable, RuleSpec


def resolve_message(
    field_name: str,
    rule: str,
    custom_messages: Mapping[str, Any],
    methods: MethodRegistry,
) -> str:
    """Pick the message for one field/rule pair."""
    field_messages = custom_messages.get(field_name)
    if isinstance(field_messages, Mapping) and field_messages.get(rule):
        return str(field_messages[rule])

    rule_message = custom_messages.get(rule)
    if isinstance(rule_message, str) and rule_message:
        return rule_message

    method = methods.get(rule)
    if method is None:
        return f'Method "{rule}" not found'
    return method.default_message


def init_error_messages(
    rules: RuleSpec,
    custom_messages: Mapping[str, Any] | None,
    methods: MethodRegistry,
) -> ErrorMessageTable:
    """Build a fresh message table for a rule set.

    Args:
        rules: Field name -> rule name -> rule parameter
        custom_messages: ``{field: {rule: text}}`` and/or ``{rule: text}`` entries
        methods: Method registry supplying default messages

    Returns:
        New mapping field name -> rule name -> message text
    """
    custom = custom_messages or {}
    return {
        field_name: {
            rule: resolve_message(field_name, rule, custom, methods)
            for rule in (field_rules or {})
        }
        for field_name, field_rules in rules.items()
    }


class ErrorMessageCache:
    """Owner-held message table that is replaced, never edited in place.

    ``rebuild`` computes a complete new table and swaps it in with a single
    assignment, so readers see either the old table or the new one. The
    cache remembers which registry version it was built from, so a
    registry changed behind its owner's back is detected by ``is_current``.
    """

    def __init__(self) -> None:
        self._table: ErrorMessageTable = {}
        self._methods: MethodRegistry | None = None
        self._methods_version = -1
        self.version = 0

    @property
    def table(self) -> ErrorMessageTable:
        return self._table

    def is_current(self, methods: MethodRegistry) -> bool:
        """True when the table was built from this registry at its current version."""
        return self._methods is methods and self._methods_version == methods.version

    def rebuild(
        self,
        rules: RuleSpec,
        custom_messages: Mapping[str, Any] | None,
        methods: MethodRegistry,
    ) -> ErrorMessageTable:
        table = init_error_messages(rules, custom_messages, methods)
        self._table = table
        self._methods = methods
        self._methods_version = methods.version
        self.version += 1
        return table
