"""formguard validation engine.

This module provides the rule evaluation core:
- Method registry: rule name -> predicate + default message
- Dependency resolver: decides whether a conditional rule applies
- Field and form validators: ordered error lists per field
- Error message resolver: precomputed, replace-only message table

Usage:
    from formguard.validation import (
        MethodRegistry,
        init_error_messages,
        validate_data,
    )

    methods = MethodRegistry.with_defaults()
    messages = init_error_messages(rules, {}, methods)
    errors = validate_data(rules, methods, data, messages)
"""

from formguard.validation.types import (
    Conditional,
    DataMap,
    Dependency,
    ErrorMessageTable,
    FieldDependency,
    FileRef,
    Method,
    PredicateDependency,
    RuleParam,
    RuleSpec,
    Unconditional,
    ValidationResult,
    parse_rule_param,
)
from formguard.validation.lookup import get_value_by_name
from formguard.validation.registry import MethodRegistry
from formguard.validation.dependencies import dependency_holds, is_checkable
from formguard.validation.engine import validate_data, validate_field
from formguard.validation.messages import (
    ErrorMessageCache,
    init_error_messages,
    resolve_message,
)

__all__ = [
    # Types
    "Conditional",
    "DataMap",
    "Dependency",
    "ErrorMessageTable",
    "FieldDependency",
    "FileRef",
    "Method",
    "PredicateDependency",
    "RuleParam",
    "RuleSpec",
    "Unconditional",
    "ValidationResult",
    "parse_rule_param",
    # Registry
    "MethodRegistry",
    # Engine
    "dependency_holds",
    "get_value_by_name",
    "is_checkable",
    "validate_data",
    "validate_field",
    # Messages
    "ErrorMessageCache",
    "init_error_messages",
    "resolve_message",
]
