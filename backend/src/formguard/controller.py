"""Form controller.

Owns everything one form needs to validate itself: merged options, the
effective rule set, the method registry, the translation dictionary and
the cached error message table. Reacts to change/input/submit events and
submits valid data through the transport.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

import httpx

from formguard.errors import FormDefinitionError, SubmissionError
from formguard.forms.data import convert_data, get_data, get_input_data
from formguard.forms.marking import FieldState, mark_field
from formguard.forms.model import FormDefinition, FormInput, group_inputs
from formguard.forms.options import get_form_options
from formguard.i18n import Dictionary
from formguard.merge import deepmerge
from formguard.options import DEFAULT_OPTIONS, build_rules, check_rules, merge_options
from formguard.transport import send
from formguard.validation import (
    DataMap,
    ErrorMessageCache,
    ErrorMessageTable,
    MethodRegistry,
    RuleSpec,
    ValidationResult,
    get_value_by_name,
    validate_data,
    validate_field,
)

logger = logging.getLogger(__name__)


@dataclass
class SubmitResult:
    """Outcome of a submit event.

    Attributes:
        valid: True when client-side validation passed and the server
            reported no validation errors
        errors: Per-field client-side or server-side errors
        response: Decoded server reply, when the form was sent
        redirect: URL the caller should navigate to, if any
        base_message: Form-level message (server ``base`` errors, send failures)
        sent: True when a request was made
    """

    valid: bool
    errors: dict[str, list[str] | None] = field(default_factory=dict)
    response: dict[str, Any] | None = None
    redirect: str | None = None
    base_message: str = ""
    sent: bool = False


class FormController:
    """Validates one form.

    Example:
        form = FormLoader(Path("forms")).get_form("signup")
        controller = FormController(form, {"rules": {"email": {"required": True}}})
        result = controller.handle_submit()
    """

    def __init__(
        self,
        form: FormDefinition,
        options: dict[str, Any] | None = None,
        *,
        methods: MethodRegistry | None = None,
        client: httpx.Client | None = None,
    ):
        self.form = form
        self.client = client
        self.inputs: dict[str, FormInput] = group_inputs(form.inputs)

        self.options = merge_options(DEFAULT_OPTIONS, get_form_options(form), options)
        self.rules: RuleSpec = build_rules(self.options["rules"], self.inputs)
        check_rules(self.rules)

        self.methods = methods.copy() if methods else MethodRegistry.with_defaults()
        self.dictionary = Dictionary(self.options["translations"])
        self.data: DataMap = {}
        self.form_state: str | None = None
        self.base_message = ""

        pristine = self.options["states"]["pristine"]
        self.fields: dict[str, FieldState] = {
            name: FieldState(name, {pristine}) for name in self.inputs
        }

        self._messages = ErrorMessageCache()
        self._rebuild_messages()

    # -------------------------------------------------------------------------
    # Message table
    # -------------------------------------------------------------------------

    @property
    def error_messages(self) -> ErrorMessageTable:
        # methods registered directly on self.methods
        if not self._messages.is_current(self.methods):
            self._rebuild_messages()
        return self._messages.table

    def _rebuild_messages(self) -> None:
        self._messages.rebuild(self.rules, self.options["messages"], self.methods)

    def translate(self, text: str) -> str:
        return self.dictionary.translate(text, self.options["language"])

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def _input(self, name: str) -> FormInput:
        if name not in self.inputs:
            raise FormDefinitionError(f"Form '{self.form.name}' has no input named '{name}'")
        return self.inputs[name]

    def handle_input(self, name: str) -> None:
        """The user typed into a field: it is no longer pristine."""
        self._input(name)
        state = self.fields[name]
        state.classes.discard(self.options["states"]["pristine"])
        state.classes.add(self.options["states"]["dirty"])

    def handle_input_change(self, name: str) -> list[str]:
        """A field's value was committed: validate that field alone.

        Returns:
            Translated messages for the field (empty when valid)
        """
        input_data = get_input_data(self._input(name))
        self.data = deepmerge(self.data, input_data)
        self.fields[name].classes.discard(self.options["states"]["dirty"])

        errors = validate_field(
            self.rules.get(name, {}),
            self.methods,
            get_value_by_name(name, input_data),
            name,
            self.error_messages,
            self.data,
            self.translate,
        )
        mark_field(self.fields[name], self.options["states"], errors)
        return errors

    def validate(self) -> ValidationResult:
        """Snapshot the form and validate every ruled field."""
        self.data = get_data(self.inputs)
        return validate_data(
            self.rules,
            self.methods,
            self.data,
            self.error_messages,
            self.translate,
        )

    def handle_submit(self) -> SubmitResult:
        """Validate the whole form and send it when valid and configured to."""
        errors = self.validate()

        for name, field_errors in errors.items():
            if name in self.fields:
                mark_field(self.fields[name], self.options["states"], field_errors)

        if any(errors[name] for name in errors if name in self.fields):
            self._callback("error", {"errors": errors})
            return SubmitResult(valid=False, errors=errors)

        ajax = self.options["ajax"]
        if not ajax.get("url"):
            self._callback("success", {"data": self.data})
            return SubmitResult(valid=True, errors=errors)

        payload = convert_data(self.data, ajax["sendType"])
        return self._send(ajax, payload)

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def _set_form_state(self, state: str) -> None:
        self.form_state = self.options["formStatePrefix"] + self.options["states"][state]

    def _send(self, ajax: dict[str, Any], payload: Any) -> SubmitResult:
        try:
            response = send(ajax, payload, self.translate, client=self.client)
        except SubmissionError as e:
            logger.warning("%s %s %s (%s)", e.method, e.url, e.status, e.status_text)
            self.base_message = self.translate("Can not send form!")
            self._set_form_state("error")
            return SubmitResult(valid=False, base_message=self.base_message, sent=True)

        server_errors = response.get("validationErrors")
        if server_errors:
            self._callback("error", {"errors": server_errors})
            server_errors = dict(server_errors)
            base = server_errors.pop("base", None)
            if base:
                self.base_message = ", ".join(base)
                self._set_form_state("error")
            else:
                self.base_message = ""

            for name, messages in server_errors.items():
                if name in self.fields:
                    mark_field(self.fields[name], self.options["states"], messages)

            return SubmitResult(
                valid=False,
                errors=server_errors,
                response=response,
                base_message=self.base_message,
                sent=True,
            )

        self._callback("success", {"response": response})
        self.base_message = ""
        self._set_form_state("valid")

        redirect = response.get("redirect") if self.options["redirect"] else None
        if not redirect and self.options["clean"]:
            self.form.reset()

        return SubmitResult(valid=True, response=response, redirect=redirect, sent=True)

    def _callback(self, kind: str, payload: dict[str, Any]) -> None:
        callback: Callable[[dict[str, Any]], Any] | None = self.options["callbacks"].get(kind)
        if callback is None:
            return
        try:
            callback(payload)
        except Exception as e:
            logger.error("%s callback failed: %r", kind, e)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def collect(self, params: str | list[str] = "") -> DataMap:
        """Collect data for the whole form, a list of fields or one field.

        The collected fragment is also merged into the controller's data.
        """
        if not params:
            self.data = get_data(self.inputs)
            return self.data

        names = params if isinstance(params, list) else [params]
        collected: DataMap = {}
        for name in names:
            input_data = get_input_data(self._input(name))
            collected = deepmerge(collected, input_data)
        self.data = deepmerge(self.data, collected)
        return collected

    def add_method(self, rule: str, func: Callable[[Any, Any], Any], message: str) -> None:
        """Register a validation method and rebuild the message table."""
        self.methods.register(rule, func, message)
        self._rebuild_messages()

    def add_rule(self, name: str, rule: str, param: Any) -> None:
        """Add or replace one rule on a field and rebuild the message table."""
        field_rules = dict(self.rules.get(name, {}))
        field_rules[rule] = param
        check_rules({name: field_rules})
        self.rules = {**self.rules, name: field_rules}
        self._rebuild_messages()

    def remove_rule(self, name: str, rule: str) -> None:
        if name not in self.rules:
            return
        field_rules = {k: v for k, v in self.rules.get(name, {}).items() if k != rule}
        self.rules = {**self.rules, name: field_rules}
        self._rebuild_messages()

    def set_messages(self, messages: dict[str, Any]) -> None:
        """Merge custom messages over the configured ones."""
        self.options["messages"] = deepmerge(self.options["messages"], messages)
        self._rebuild_messages()

    def set_language(self, language: str) -> None:
        self.options["language"] = language
        self._rebuild_messages()

    def add_to_dictionary(self, source_text: str, translated_text: str, language: str) -> None:
        """Add a translation used when messages are shown."""
        self.dictionary.add_translation(source_text, translated_text, language)
