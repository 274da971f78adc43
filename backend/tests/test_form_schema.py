"""
Tests for formguard.forms.schema and formguard.forms.loader

Covers:
  - validate_form_file()    — single-file validation (valid + invalid)
  - validate_forms_dir()    — directory walk (shipped forms pass)
  - validate_forms_dir(strict=True)
  - FormLoader              — loading, skipping, duplicates
"""
from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from formguard.errors import FormDefinitionError
from formguard.forms import FormDefinition, FormLoader, GroupInput, group_inputs
from formguard.forms.schema import FormIssue, validate_form_file, validate_forms_dir
from formguard.validation import FileRef


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _write_yaml(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(data))
    return path


_REPO_ROOT = Path(__file__).resolve().parents[2]
_FORMS_DIR = _REPO_ROOT / "forms"


def _minimal(name: str = "demo", **extra) -> dict:
    return {"form": name, "inputs": [{"name": "email", "type": "email"}], **extra}


# ---------------------------------------------------------------------------
# validate_form_file
# ---------------------------------------------------------------------------


class TestValidateFormFile:
    def test_minimal_form_is_valid(self, tmp_path):
        assert validate_form_file(_write_yaml(tmp_path / "demo.yaml", _minimal())) == []

    def test_missing_inputs(self, tmp_path):
        issues = validate_form_file(_write_yaml(tmp_path / "demo.yaml", {"form": "demo"}))
        assert len(issues) == 1
        assert "'inputs' is a required property" in issues[0].message

    def test_unknown_top_level_key(self, tmp_path):
        issues = validate_form_file(_write_yaml(tmp_path / "demo.yaml", _minimal(fields=[])))
        assert any("fields" in i.message for i in issues)

    def test_bad_send_type_path(self, tmp_path):
        doc = _minimal(attributes={"data-send-type": "xml"})

        issues = validate_form_file(_write_yaml(tmp_path / "demo.yaml", doc))

        assert [i.path for i in issues] == ["attributes/data-send-type"]

    def test_input_without_name(self, tmp_path):
        doc = {"form": "demo", "inputs": [{"type": "text"}]}
        issues = validate_form_file(_write_yaml(tmp_path / "demo.yaml", doc))
        assert issues[0].path == "inputs[0]"

    def test_yaml_parse_error(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("form: [unclosed\n")

        issues = validate_form_file(path)

        assert len(issues) == 1
        assert "YAML parse error" in issues[0].message

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert "empty" in validate_form_file(path)[0].message

    def test_mixed_types_under_one_name_warns(self, tmp_path):
        doc = {
            "form": "demo",
            "inputs": [
                {"name": "plan", "type": "radio", "value": "a"},
                {"name": "plan", "type": "checkbox", "value": "b"},
            ],
        }

        issues = validate_form_file(_write_yaml(tmp_path / "demo.yaml", doc))

        assert len(issues) == 1
        assert issues[0].severity == "warning"
        assert issues[0].path == "inputs[1]/type"

    def test_issue_str(self):
        issue = FormIssue(file=Path("f.yaml"), message="boom", path="inputs[0]")
        assert str(issue) == "[ERROR] f.yaml at inputs[0]: boom"


# ---------------------------------------------------------------------------
# validate_forms_dir
# ---------------------------------------------------------------------------


class TestValidateFormsDir:
    def test_shipped_forms_are_valid(self):
        assert validate_forms_dir(_FORMS_DIR) == []

    def test_missing_directory(self, tmp_path):
        issues = validate_forms_dir(tmp_path / "nope")
        assert len(issues) == 1
        assert "does not exist" in issues[0].message

    def test_strict_escalates_warnings(self, tmp_path):
        _write_yaml(
            tmp_path / "demo.yaml",
            {"form": "demo", "inputs": [{"name": "a"}, {"name": "a", "type": "email"}]},
        )

        assert validate_forms_dir(tmp_path)[0].severity == "warning"
        assert validate_forms_dir(tmp_path, strict=True)[0].severity == "error"


# ---------------------------------------------------------------------------
# FormLoader
# ---------------------------------------------------------------------------


class TestFormLoader:
    def test_loads_shipped_forms(self):
        loader = FormLoader(_FORMS_DIR)
        loader.load_all()

        assert loader.list_forms() == ["contact", "signup"]
        signup = loader.get_form("signup")
        assert signup.attributes["data-send-type"] == "json"
        assert isinstance(group_inputs(signup.inputs)["plan"], GroupInput)

    def test_skips_files_without_form_key(self, tmp_path):
        _write_yaml(tmp_path / "notes.yaml", {"title": "not a form"})
        _write_yaml(tmp_path / "demo.yaml", _minimal())

        loader = FormLoader(tmp_path)
        loader.load_all()

        assert loader.list_forms() == ["demo"]

    def test_duplicate_names_rejected(self, tmp_path):
        _write_yaml(tmp_path / "a.yaml", _minimal("demo"))
        _write_yaml(tmp_path / "b.yaml", _minimal("demo"))

        with pytest.raises(FormDefinitionError, match="Duplicate form name 'demo'"):
            FormLoader(tmp_path).load_all()

    def test_parse_error(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("form: [unclosed\n")

        with pytest.raises(FormDefinitionError, match="YAML parse error"):
            FormLoader(tmp_path).load_file(path)

    def test_missing_directory_loads_nothing(self, tmp_path):
        loader = FormLoader(tmp_path / "nope")
        loader.load_all()
        assert loader.forms == {}


class TestFormDefinition:
    def test_from_dict(self):
        form = FormDefinition.from_dict(
            {
                "form": "upload",
                "inputs": [
                    {"name": "tags", "type": "select", "multiple": True},
                    {
                        "name": "cv",
                        "type": "file",
                        "files": [{"name": "cv.pdf", "size": 10, "contentType": "application/pdf"}],
                    },
                ],
            }
        )

        tags, cv = form.inputs
        assert tags.value == []
        assert cv.files == [FileRef("cv.pdf", size=10, content_type="application/pdf")]

    def test_requires_form_name(self):
        with pytest.raises(FormDefinitionError):
            FormDefinition.from_dict({"inputs": []})

    def test_input_requires_name(self):
        with pytest.raises(FormDefinitionError, match="no name"):
            FormDefinition.from_dict({"form": "x", "inputs": [{"type": "text"}]})

    def test_reset_restores_declared_values(self):
        form = FormDefinition.from_dict(
            {"form": "x", "inputs": [{"name": "agree", "type": "checkbox", "checked": True}]}
        )
        form.inputs[0].checked = False

        form.reset()

        assert form.inputs[0].checked is True
