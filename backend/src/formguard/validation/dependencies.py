"""Dependency resolution for conditional rules.

A rule like ``{"minLength": [5, "hasDiscount"]}`` only applies while the
``hasDiscount`` field is truthy. Dependencies are evaluated in declared
order and combined with AND.
"""

import logging
from typing import Any

from formguard.errors import RuleConfigError
from formguard.validation.lookup import get_value_by_name
from formguard.validation.types import (
    Conditional,
    DataMap,
    Dependency,
    FieldDependency,
    parse_rule_param,
)

logger = logging.getLogger(__name__)


def dependency_holds(dependency: Dependency, data: DataMap) -> bool:
    """Evaluate one dependency against the form data.

    A predicate that raises is logged and counts as not satisfied.
    """
    if isinstance(dependency, FieldDependency):
        return bool(get_value_by_name(dependency.field, data))

    try:
        return bool(dependency.predicate(data))
    except Exception as e:
        logger.warning("Dependency function error: %r", e)
        return False


def is_checkable(rule_param: Any, data: DataMap) -> Any | None:
    """Decide whether a rule applies and return its effective parameter.

    Args:
        rule_param: Raw rule parameter (scalar, ``[value, *dependencies]``) or
            an ``Unconditional``/``Conditional`` instance
        data: Current form data

    Returns:
        The parameter to pass to the method, or None when the rule is
        disabled or one of its dependencies does not hold.
    """
    try:
        param = parse_rule_param(rule_param)
    except RuleConfigError as e:
        logger.warning("Rule parameter %r is not checkable: %s", rule_param, e)
        return None

    if param is None or not param.value:
        return None

    if isinstance(param, Conditional):
        for dependency in param.dependencies:
            if not dependency_holds(dependency, data):
                return None

    return param.value
