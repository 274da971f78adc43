"""Form adapters: definitions, data extraction, markup-declared options and marking."""

from formguard.forms.model import (
    FormDefinition,
    FormInput,
    GroupInput,
    InputDefinition,
    group_inputs,
)
from formguard.forms.data import (
    MultipartBody,
    convert_data,
    get_data,
    get_input_data,
    get_value_by_name,
)
from formguard.forms.options import get_form_options, get_input_rules
from formguard.forms.marking import FieldState, mark_field
from formguard.forms.loader import FormLoader

__all__ = [
    "FieldState",
    "FormDefinition",
    "FormInput",
    "FormLoader",
    "GroupInput",
    "InputDefinition",
    "MultipartBody",
    "convert_data",
    "get_data",
    "get_form_options",
    "get_input_data",
    "get_input_rules",
    "get_value_by_name",
    "group_inputs",
    "mark_field",
]
