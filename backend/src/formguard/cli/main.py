"""formguard CLI entry point."""

import logging

import click


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log warnings and debug output.")
def cli(verbose: bool):
    """formguard — form validation CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from formguard.cli.forms_cmd import check, forms, messages, methods  # noqa: E402

cli.add_command(forms)
cli.add_command(check)
cli.add_command(messages)
cli.add_command(methods)
