"""Field and form validation.

Evaluates a field's applicable rules against its current value and
aggregates per-field results for the whole form. Neither function raises
for misconfiguration: unknown rules and faulty predicates are reported as
field errors so a validation pass always completes.
"""

import logging
from typing import Any, Callable

from formguard.validation.dependencies import is_checkable
from formguard.validation.lookup import get_value_by_name
from formguard.validation.registry import MethodRegistry
from formguard.validation.types import (
    DataMap,
    ErrorMessageTable,
    Method,
    RuleSpec,
    ValidationResult,
)

logger = logging.getLogger(__name__)

Translate = Callable[[str], str]


def _run_method(rule: str, check: Callable[[], bool]) -> tuple[bool, str | None]:
    """Call a method predicate; a raised exception becomes a diagnostic."""
    try:
        return check(), None
    except Exception as e:
        logger.warning("Method '%s' raised while validating: %r", rule, e)
        return False, f'Method "{rule}" failed: {type(e).__name__}: {e}'


def _message(
    error_messages: ErrorMessageTable,
    name: str,
    rule: str,
    method: Method,
    translate: Translate | None,
) -> str:
    message = error_messages.get(name, {}).get(rule, method.default_message)
    return translate(message) if translate else message


def validate_field(
    rules: dict[str, Any],
    methods: MethodRegistry,
    value: Any,
    name: str,
    error_messages: ErrorMessageTable,
    data: DataMap,
    translate: Translate | None = None,
) -> list[str]:
    """Validate one field's value against its rules.

    Emptiness is decided by the ``required`` method. An empty required
    field reports only the required message; an empty optional field is
    valid whatever other rules it declares. Otherwise every checkable rule
    runs in declaration order.

    Args:
        rules: Rule name -> rule parameter for this field
        methods: Method registry (must contain ``required``)
        value: Current field value
        name: Field name, used to look up messages
        error_messages: Precomputed message table
        data: Whole-form data, used by rule dependencies
        translate: Optional translation applied to resolved messages

    Returns:
        Messages in rule order. Empty list means the field is valid.
    """
    required = methods["required"]
    is_present, fault = _run_method("required", lambda: required.check_value(value))
    if fault:
        return [fault]

    is_empty = not is_present
    is_required = is_checkable(rules.get("required"), data) is not None

    if is_empty and is_required:
        return [_message(error_messages, name, "required", required, translate)]

    if is_empty:
        return []

    errors: list[str] = []

    for rule, rule_param in rules.items():
        if rule == "required":
            continue

        params = is_checkable(rule_param, data)
        if params is None:
            continue

        method = methods.get(rule)
        if method is None:
            errors.append(f'Method "{rule}" not found')
            continue

        valid, fault = _run_method(rule, lambda: method.check(value, params))
        if fault:
            errors.append(fault)
        elif not valid:
            errors.append(_message(error_messages, name, rule, method, translate))

    return errors


def validate_data(
    rules: RuleSpec,
    methods: MethodRegistry,
    data: DataMap,
    error_messages: ErrorMessageTable,
    translate: Translate | None = None,
) -> ValidationResult:
    """Validate every field that has rules.

    Fields present in ``data`` without rules are ignored. The result keeps
    the rule set's field order; a valid field maps to None, an invalid one
    to its non-empty message list.
    """
    result: ValidationResult = {}

    for name, field_rules in rules.items():
        value = get_value_by_name(name, data)
        errors = validate_field(
            field_rules or {},
            methods,
            value,
            name,
            error_messages,
            data,
            translate,
        )
        result[name] = errors or None

    return result
