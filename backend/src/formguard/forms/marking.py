"""Field state marking.

Tracks what the UI shows for a field: pristine/dirty, valid/error and the
message text. Rendering is left to the caller.
"""

from dataclasses import dataclass, field


@dataclass
class FieldState:
    """Display state of one field.

    Attributes:
        name: Field name
        classes: State classes currently applied (e.g., {"dirty", "error"})
        message: Message text shown under the field
    """

    name: str
    classes: set[str] = field(default_factory=set)
    message: str = ""

    def has(self, state_class: str) -> bool:
        return state_class in self.classes


def mark_field(state: FieldState, states: dict[str, str], errors: list[str] | None) -> FieldState:
    """Apply a validation result to a field state.

    Args:
        state: Field state to update
        states: Class names from options (``error``, ``valid``, ...)
        errors: Messages for the field; None or empty marks it valid
    """
    if errors:
        state.classes.add(states["error"])
        state.classes.discard(states["valid"])
        state.message = ", ".join(errors)
    else:
        state.classes.add(states["valid"])
        state.classes.discard(states["error"])
        state.message = ""
    return state
