"""Form definitions: the declared inputs of a form and their markup attributes."""

from dataclasses import dataclass, field
from typing import Any

from formguard.errors import FormDefinitionError
from formguard.validation.types import FileRef


@dataclass
class InputDefinition:
    """A single form control.

    Attributes:
        name: Control name, possibly compound (``user[email]``, ``tags[]``)
        type: Control type as declared in markup (text, email, checkbox, file, select, ...)
        value: Current value; a list for multi-selects
        checked: Checked state for checkbox and radio controls
        multiple: True for multi-selects and multi-file inputs
        files: Selected files for file inputs
        attributes: Remaining markup attributes (required, pattern, data-*)
    """

    name: str
    type: str = "text"
    value: Any = ""
    checked: bool = False
    multiple: bool = False
    files: list[FileRef] = field(default_factory=list)
    attributes: dict[str, Any] = field(default_factory=dict)
    initial: dict[str, Any] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.initial = {
            "value": self.value,
            "checked": self.checked,
            "files": list(self.files),
        }

    def reset(self) -> None:
        """Restore the value the control was declared with."""
        self.value = self.initial["value"]
        self.checked = self.initial["checked"]
        self.files = list(self.initial["files"])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InputDefinition":
        """Create InputDefinition from YAML/JSON dict."""
        if "name" not in data:
            raise FormDefinitionError(f"Input has no name: {data!r}")
        files = [
            FileRef(
                name=f["name"],
                size=f.get("size", 0),
                content_type=f.get("contentType", "application/octet-stream"),
            )
            for f in data.get("files", [])
        ]
        return cls(
            name=data["name"],
            type=data.get("type", "text"),
            value=data.get("value", [] if data.get("multiple") else ""),
            checked=data.get("checked", False),
            multiple=data.get("multiple", False),
            files=files,
            attributes=dict(data.get("attributes", {})),
        )


@dataclass
class GroupInput:
    """Several controls sharing one name (radio group, checkbox group, phone[])."""

    name: str
    inputs: list[InputDefinition] = field(default_factory=list)

    @property
    def type(self) -> str:
        return self.inputs[0].type if self.inputs else "text"

    @property
    def attributes(self) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for item in self.inputs:
            merged.update(item.attributes)
        return merged

    def add(self, input_def: InputDefinition) -> None:
        self.inputs.append(input_def)

    def reset(self) -> None:
        for item in self.inputs:
            item.reset()


FormInput = InputDefinition | GroupInput


@dataclass
class FormDefinition:
    """A declared form.

    Attributes:
        name: Unique form name
        attributes: Form-level markup attributes (action, method, data-*)
        inputs: Controls in document order
    """

    name: str
    attributes: dict[str, Any] = field(default_factory=dict)
    inputs: list[InputDefinition] = field(default_factory=list)
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormDefinition":
        """Create FormDefinition from a parsed YAML document."""
        if not data.get("form"):
            raise FormDefinitionError("Form definition has no 'form' name")
        return cls(
            name=data["form"],
            attributes=dict(data.get("attributes", {})),
            inputs=[InputDefinition.from_dict(item) for item in data.get("inputs", [])],
            description=data.get("description", ""),
        )

    def reset(self) -> None:
        for item in self.inputs:
            item.reset()


def group_inputs(inputs: list[InputDefinition]) -> dict[str, FormInput]:
    """Index inputs by name, grouping controls that share a name."""
    grouped: dict[str, FormInput] = {}
    for item in inputs:
        existing = grouped.get(item.name)
        if existing is None:
            grouped[item.name] = item
        elif isinstance(existing, GroupInput):
            existing.add(item)
        else:
            grouped[item.name] = GroupInput(item.name, [existing, item])
    return grouped
