"""Options and rules declared in form markup.

``get_form_options`` reads form-level attributes (action, method, data-*)
into a partial options mapping. ``get_input_rules`` infers a control's
rules from its type and attributes (required, pattern, minlength, ...).
"""

import json
from typing import Any

from formguard.errors import FormDefinitionError
from formguard.forms.model import FormDefinition, FormInput
from formguard.merge import deepmerge

# Input type -> rule enabled by that type
TYPE_RULES: dict[str, str] = {
    "email": "email",
    "tel": "tel",
    "url": "url",
    "number": "number",
    "date": "date",
}

_FALSE_STRINGS = {"false", "0", "no", "off"}


def _flag(value: Any) -> bool:
    """Markup boolean: presence enables unless the value says otherwise."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def _mapping(value: Any, attribute: str) -> dict[str, Any]:
    """Parse a mapping attribute given either as a mapping or as JSON text."""
    if value in (None, ""):
        return {}
    if isinstance(value, dict):
        return value
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError) as e:
        raise FormDefinitionError(f"Attribute '{attribute}' is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise FormDefinitionError(f"Attribute '{attribute}' must be a JSON object")
    return parsed


def _number(value: Any) -> int | float:
    num = float(value)
    return int(num) if num.is_integer() else num


def get_form_options(form: FormDefinition) -> dict[str, Any]:
    """Read options declared on the form element.

    ``data-options`` supplies a base mapping; dedicated attributes win over it.
    """
    attrs = form.attributes
    options = _mapping(attrs.get("data-options"), "data-options")
    declared: dict[str, Any] = {}
    ajax: dict[str, Any] = {}

    if attrs.get("action"):
        ajax["url"] = attrs["action"]
    if attrs.get("method"):
        ajax["method"] = str(attrs["method"]).upper()
    if attrs.get("enctype"):
        ajax["enctype"] = attrs["enctype"]
    if attrs.get("data-send-type"):
        ajax["sendType"] = attrs["data-send-type"]
    if ajax:
        declared["ajax"] = ajax

    language = attrs.get("data-language") or attrs.get("lang")
    if language:
        declared["language"] = language

    for attribute, key in (("data-clean", "clean"), ("data-redirect", "redirect")):
        if attribute in attrs:
            declared[key] = _flag(attrs[attribute])

    return deepmerge(options, declared)


def get_input_rules(form_input: FormInput) -> dict[str, Any]:
    """Infer rules from a control's type and attributes.

    ``data-rules`` (mapping or JSON text) wins over rules inferred from
    other attributes.
    """
    attrs = form_input.attributes
    rules: dict[str, Any] = {}

    if _flag(attrs.get("required")):
        rules["required"] = True

    type_rule = TYPE_RULES.get(form_input.type)
    if type_rule:
        rules[type_rule] = True

    if attrs.get("pattern"):
        rules["regexp"] = f"^(?:{attrs['pattern']})$"

    for attribute, rule in (
        ("minlength", "minLength"),
        ("maxlength", "maxLength"),
        ("min", "min"),
        ("max", "max"),
    ):
        if attrs.get(attribute) not in (None, ""):
            rules[rule] = _number(attrs[attribute])

    if attrs.get("data-filetype"):
        rules["filetype"] = attrs["data-filetype"]
    elif attrs.get("accept"):
        extensions = [
            token.strip().lstrip(".")
            for token in str(attrs["accept"]).split(",")
            if token.strip().startswith(".")
        ]
        if extensions:
            rules["filetype"] = ",".join(extensions)

    if attrs.get("data-max-filesize"):
        rules["maxFilesize"] = int(attrs["data-max-filesize"])

    return deepmerge(rules, _mapping(attrs.get("data-rules"), "data-rules"))
