"""Core types for the formguard validation engine.

This module defines the data model shared by the engine and the adapters:
- Data Map: flat mapping of field name to current value
- Rule parameters: unconditional or conditional on other fields
- Methods: predicate plus default message, keyed by rule name
- Error message table and validation result shapes
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from formguard.errors import RuleConfigError

DataMap = dict[str, Any]

# field name -> rule name -> raw rule parameter
RuleSpec = dict[str, dict[str, Any]]

# field name -> rule name -> message text
ErrorMessageTable = dict[str, dict[str, str]]

# field name -> None (valid) or non-empty list of messages
ValidationResult = dict[str, list[str] | None]

Predicate = Callable[[Any, Any], Any]
DependencyPredicate = Callable[[DataMap], Any]


@dataclass(frozen=True)
class FileRef:
    """Opaque marker for a file selected in a file input.

    Attributes:
        name: File name as reported by the client
        size: Size in bytes
        content_type: MIME type, if known
        content: File body, used only when the form is submitted as multipart
    """

    name: str
    size: int = 0
    content_type: str = "application/octet-stream"
    content: bytes = field(default=b"", repr=False)


# =============================================================================
# Rule Parameters
# =============================================================================


@dataclass(frozen=True)
class FieldDependency:
    """Dependency satisfied when the named field has a truthy value."""

    field: str


@dataclass(frozen=True)
class PredicateDependency:
    """Dependency satisfied when the predicate returns truthy for the data."""

    predicate: DependencyPredicate


Dependency = FieldDependency | PredicateDependency


@dataclass(frozen=True)
class Unconditional:
    """Rule parameter that always applies when its value is truthy."""

    value: Any


@dataclass(frozen=True)
class Conditional:
    """Rule parameter gated by dependencies, evaluated in declared order."""

    value: Any
    dependencies: tuple[Dependency, ...] = ()


RuleParam = Unconditional | Conditional


def _parse_dependency(raw: Any) -> Dependency:
    if isinstance(raw, (FieldDependency, PredicateDependency)):
        return raw
    if isinstance(raw, str):
        return FieldDependency(raw)
    if callable(raw):
        return PredicateDependency(raw)
    raise RuleConfigError(
        f"Unsupported rule dependency {raw!r}: expected a field name or a callable"
    )


def parse_rule_param(raw: Any) -> RuleParam | None:
    """Convert a loose rule parameter into its tagged form.

    Accepted shapes:
        None / False / 0 / "" -> None (rule disabled)
        scalar (True, number, string, compiled regex) -> Unconditional
        [value, dep, dep, ...] -> Conditional

    Raises:
        RuleConfigError: If a dependency is neither a field name nor a callable
    """
    if isinstance(raw, (Unconditional, Conditional)):
        return raw
    if isinstance(raw, (list, tuple)):
        if not raw:
            return None
        head, *dependencies = raw
        return Conditional(head, tuple(_parse_dependency(dep) for dep in dependencies))
    if not raw:
        return None
    return Unconditional(raw)


# =============================================================================
# Methods
# =============================================================================


@dataclass(frozen=True)
class Method:
    """A validation method backing a rule name.

    Attributes:
        predicate: Pure function (value, params) -> truthy when valid
        default_message: Message used when no custom message is configured
    """

    predicate: Predicate
    default_message: str

    def check(self, value: Any, params: Any = None) -> bool:
        return bool(self.predicate(value, params))

    def check_value(self, value: Any) -> bool:
        """Call the predicate with the value alone, as ``required`` is called."""
        return bool(self.predicate(value))
