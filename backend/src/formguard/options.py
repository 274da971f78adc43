"""Validator options: built-in defaults and the three-way merge.

Precedence, lowest to highest:
1. DEFAULT_OPTIONS
2. Options declared on the form markup
3. Options passed programmatically

Rules inferred from individual inputs rank below any rule present in the
merged options.
"""

from collections.abc import Mapping
from typing import Any

from formguard.errors import RuleConfigError
from formguard.forms.model import FormInput
from formguard.forms.options import get_input_rules
from formguard.merge import deepmerge
from formguard.validation.types import RuleSpec, parse_rule_param

DEFAULT_OPTIONS: dict[str, Any] = {
    "ajax": {
        "url": None,
        "enctype": "application/x-www-form-urlencoded",
        "sendType": "serialize",  # serialize | json | formData
        "method": "GET",
    },
    "rules": {},
    "messages": {},
    "states": {
        "error": "error",
        "valid": "valid",
        "pristine": "pristine",
        "dirty": "dirty",
    },
    "formStatePrefix": "jedi-",
    "callbacks": {
        "success": None,
        "error": None,
    },
    "clean": True,
    "redirect": True,
    "language": "en",
    "translations": {},
}


def merge_options(
    defaults: Mapping[str, Any] | None,
    form_options: Mapping[str, Any] | None,
    options: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Combine the three option sources in ascending precedence."""
    return deepmerge(deepmerge(defaults, form_options), options)


def build_rules(options_rules: Mapping[str, Any] | None, inputs: Mapping[str, FormInput]) -> RuleSpec:
    """Derive the effective rule set.

    Every field from the options keeps its rules; every input contributes
    the rules inferred from its markup underneath the explicit ones.
    Field order: option-declared fields first, then remaining inputs in
    document order.
    """
    rules: RuleSpec = {name: dict(field_rules or {}) for name, field_rules in (options_rules or {}).items()}

    for name, form_input in inputs.items():
        rules[name] = deepmerge(get_input_rules(form_input), rules.get(name, {}))

    return rules


def check_rules(rules: RuleSpec) -> None:
    """Parse every rule parameter once so malformed ones fail at load time.

    Raises:
        RuleConfigError: Naming the field and rule with the bad parameter
    """
    for name, field_rules in rules.items():
        if not isinstance(field_rules, Mapping):
            raise RuleConfigError(f"Rules for field '{name}' must be a mapping")
        for rule, param in field_rules.items():
            try:
                parse_rule_param(param)
            except RuleConfigError as e:
                raise RuleConfigError(f"Field '{name}', rule '{rule}': {e}") from e
