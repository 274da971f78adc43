"""
forms/schema.py — JSON Schema validation for formguard YAML form files.

Usage:
    from formguard.forms.schema import validate_forms_dir, validate_form_file

    issues = validate_forms_dir(Path("forms"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

_SCHEMAS_DIR = Path(__file__).parent / "schemas"
FORM_SCHEMA = "form.schema.json"


@dataclass
class FormIssue:
    """A single validation finding for a form YAML file."""

    file: Path
    message: str
    path: str = ""          # path within the document, e.g. "inputs[0]/type"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def load_schema(name: str = FORM_SCHEMA) -> dict[str, Any]:
    schema_path = _SCHEMAS_DIR / name
    with schema_path.open() as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _duplicate_names(doc: dict[str, Any], yaml_path: Path) -> list[FormIssue]:
    """Controls sharing a name must share a type (they form one group)."""
    issues = []
    seen: dict[str, str] = {}
    for index, item in enumerate(doc.get("inputs") or []):
        if not isinstance(item, dict) or "name" not in item:
            continue
        item_type = item.get("type", "text")
        previous = seen.setdefault(item["name"], item_type)
        if previous != item_type:
            issues.append(
                FormIssue(
                    file=yaml_path,
                    message=(
                        f"Input '{item['name']}' is declared as both "
                        f"'{previous}' and '{item_type}'"
                    ),
                    path=f"inputs[{index}]/type",
                    severity="warning",
                )
            )
    return issues


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_form_file(
    yaml_path: Path,
    *,
    schema: dict[str, Any] | None = None,
) -> list[FormIssue]:
    """
    Validate a single form YAML file against the form schema.

    Args:
        yaml_path: Path to the YAML file to validate.
        schema:    Pre-loaded schema.  Loaded automatically if omitted.

    Returns:
        A list of :class:`FormIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            doc = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [FormIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if doc is None:
        return [FormIssue(file=yaml_path, message="File is empty or contains only whitespace")]

    validator = Draft202012Validator(schema or load_schema())

    issues = [
        FormIssue(file=yaml_path, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=lambda e: [str(p) for p in e.path])
    ]
    if not issues and isinstance(doc, dict):
        issues.extend(_duplicate_names(doc, yaml_path))
    return issues


def validate_forms_dir(
    forms_dir: Path,
    *,
    strict: bool = False,
) -> list[FormIssue]:
    """
    Validate all ``*.yaml`` files in *forms_dir*.

    Args:
        forms_dir: Directory holding form definitions.
        strict:    If ``True``, warnings are escalated to errors.

    Returns:
        A flat list of :class:`FormIssue` objects across all files.
        Empty list means all files are valid.
    """
    if not forms_dir.is_dir():
        return [
            FormIssue(
                file=forms_dir,
                message=f"Forms directory does not exist: {forms_dir}",
            )
        ]

    try:
        schema = load_schema()
    except (FileNotFoundError, json.JSONDecodeError) as exc:
        return [
            FormIssue(
                file=_SCHEMAS_DIR,
                message=f"Failed to load JSON Schema files: {exc}",
            )
        ]

    all_issues: list[FormIssue] = []

    for yaml_file in sorted(forms_dir.glob("*.yaml")):
        file_issues = validate_form_file(yaml_file, schema=schema)
        if strict:
            for issue in file_issues:
                if issue.severity == "warning":
                    issue.severity = "error"
        all_issues.extend(file_issues)

    return all_issues
