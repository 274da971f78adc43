"""Load form definitions from YAML files."""

from pathlib import Path

import yaml

from formguard.errors import FormDefinitionError
from formguard.forms.model import FormDefinition


class FormLoader:
    """Loads form definitions from ``*.yaml`` files in one directory."""

    def __init__(self, forms_path: Path):
        self.forms_path = forms_path
        self.forms: dict[str, FormDefinition] = {}

    def load_all(self) -> None:
        """Load every form definition, rejecting duplicate names."""
        if not self.forms_path.exists():
            return

        for yaml_file in sorted(self.forms_path.glob("*.yaml")):
            form = self.load_file(yaml_file)
            if form is None:
                continue
            if form.name in self.forms:
                raise FormDefinitionError(
                    f"Duplicate form name '{form.name}' in {yaml_file}"
                )
            self.forms[form.name] = form

    def load_file(self, yaml_file: Path) -> FormDefinition | None:
        """Load one file; files without a ``form`` key are skipped."""
        with open(yaml_file) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise FormDefinitionError(f"{yaml_file}: YAML parse error: {e}") from e

        if not data or "form" not in data:
            return None
        return FormDefinition.from_dict(data)

    def get_form(self, name: str) -> FormDefinition | None:
        return self.forms.get(name)

    def list_forms(self) -> list[str]:
        return sorted(self.forms)
