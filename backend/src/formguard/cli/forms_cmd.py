"""Form CLI commands — schema checks, data checks and message tables."""

from pathlib import Path
from typing import Any

import click
import yaml

from formguard.config import FormguardConfig
from formguard.controller import FormController
from formguard.errors import FormguardError
from formguard.forms.loader import FormLoader
from formguard.forms.options import get_form_options
from formguard.forms.schema import validate_form_file, validate_forms_dir
from formguard.validation import MethodRegistry, validate_data


def _load_mapping(path: Path) -> dict[str, Any]:
    """Read a JSON or YAML file holding a mapping."""
    with path.open() as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as e:
            raise click.ClickException(f"{path}: cannot parse: {e}")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise click.ClickException(f"{path}: expected a mapping at the top level")
    return data


def _controller(form_name: str, options_path: Path | None, language: str | None) -> FormController:
    config = FormguardConfig.from_env()
    loader = FormLoader(config.forms_path)
    try:
        loader.load_all()
    except FormguardError as e:
        raise click.ClickException(str(e))

    form = loader.get_form(form_name)
    if form is None:
        available = ", ".join(loader.list_forms()) or "none"
        raise click.ClickException(
            f"Form '{form_name}' not found in {config.forms_path} (available: {available})"
        )

    options = _load_mapping(options_path) if options_path else {}
    try:
        controller = FormController(form, options)
    except FormguardError as e:
        raise click.ClickException(str(e))

    declared = options.get("language") or get_form_options(form).get("language")
    controller.set_language(language or declared or config.language)
    return controller


@click.group()
def forms():
    """Form definition commands."""
    pass


@forms.command()
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
@click.option(
    "--path",
    "target_path",
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help="Validate a single YAML file instead of the whole forms directory.",
)
def validate(strict: bool, target_path: Path | None):
    """Validate form YAML files against the form JSON Schema."""
    config = FormguardConfig.from_env()

    if target_path is not None:
        issues = validate_form_file(target_path)
        if strict:
            for issue in issues:
                issue.severity = "error"
    else:
        if not config.forms_path.exists():
            click.echo(f"Error: Forms directory not found at {config.forms_path}", err=True)
            raise SystemExit(1)
        issues = validate_forms_dir(config.forms_path, strict=strict)

    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]

    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} schema error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if warnings:
        click.echo(click.style(f"{len(warnings)} warning(s) found.", fg="yellow"))

    if target_path is None:
        loader = FormLoader(config.forms_path)
        try:
            loader.load_all()
        except FormguardError as e:
            click.echo(click.style(f"\nLoading forms failed: {e}", fg="red"), err=True)
            raise SystemExit(1)

        click.echo(f"\nLoaded {len(loader.forms)} forms:")
        for name in loader.list_forms():
            form = loader.get_form(name)
            click.echo(f"  ✓ {name} ({len(form.inputs)} inputs)")

    click.echo(click.style("\nAll forms are valid.", fg="green", bold=True))


@click.command()
@click.argument("form_name")
@click.argument("data_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--language", "-l", default=None, help="Language for messages.")
@click.option(
    "--options",
    "options_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON/YAML file with options that override the form's own.",
)
def check(form_name: str, data_file: Path, language: str | None, options_path: Path | None):
    """Validate DATA_FILE (JSON or YAML) against form FORM_NAME."""
    controller = _controller(form_name, options_path, language)
    data = _load_mapping(data_file)

    result = validate_data(
        controller.rules,
        controller.methods,
        data,
        controller.error_messages,
        controller.translate,
    )

    invalid = 0
    for name, errors in result.items():
        if errors:
            invalid += 1
            click.echo(click.style(f"  ✗ {name}: {', '.join(errors)}", fg="red"))
        else:
            click.echo(f"  ✓ {name}")

    if invalid:
        click.echo(click.style(f"\n{invalid} invalid field(s).", fg="red", bold=True))
        raise SystemExit(1)

    click.echo(click.style("\nAll fields are valid.", fg="green", bold=True))


@click.command()
@click.argument("form_name")
@click.option("--language", "-l", default=None, help="Language for messages.")
def messages(form_name: str, language: str | None):
    """Print the resolved error message table of a form."""
    controller = _controller(form_name, None, language)
    table = {
        name: {rule: controller.translate(text) for rule, text in rules.items()}
        for name, rules in controller.error_messages.items()
    }
    click.echo(yaml.safe_dump(table, allow_unicode=True, sort_keys=False), nl=False)


@click.command()
def methods():
    """List the built-in validation methods."""
    registry = MethodRegistry.with_defaults()
    for name in registry.names():
        click.echo(f"  {name}: {registry[name].default_message}")
