"""User-facing output helpers.

Diagnostics and progress go to stderr so stdout stays reserved for the text a
user asked for (usage text and next steps).
"""

import sys

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Write a diagnostic or progress message to stderr."""
    click.echo(message, file=sys.stderr, nl=nl)


def machine_output(message: str = "", *, nl: bool = True) -> None:
    """Write requested output to stdout."""
    click.echo(message, nl=nl)
