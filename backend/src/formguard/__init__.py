"""formguard: form validation with conditional rules and localized messages."""

from formguard.controller import FormController, SubmitResult
from formguard.errors import (
    FormDefinitionError,
    FormguardError,
    RuleConfigError,
    SubmissionError,
)
from formguard.merge import deepmerge
from formguard.validation import (
    MethodRegistry,
    init_error_messages,
    is_checkable,
    validate_data,
    validate_field,
)

__version__ = "0.1.0"

__all__ = [
    "FormController",
    "FormDefinitionError",
    "FormguardError",
    "MethodRegistry",
    "RuleConfigError",
    "SubmissionError",
    "SubmitResult",
    "deepmerge",
    "init_error_messages",
    "is_checkable",
    "validate_data",
    "validate_field",
]
