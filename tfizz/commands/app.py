"""
Defines the main Click command group for tfizz.

This module provides:
- The root `cli` command group for the application.
- Registration of the evaluation subcommands.

Usage:
Import `cli` to run the command palette.
"""

import click
from tfizz.commands.base import RichGroup
from tfizz.commands.solve import number, numbers, range_, standard


@click.group(
    cls=RichGroup,
    help="""
    tfizz Command Palette

    Evaluate numbers against ordered divisor/word rules.
    """,
)
def cli() -> None:
    """
    The root Click command group for tfizz.
    """
    pass


cli.add_command(number)
cli.add_command(numbers)
cli.add_command(range_, name="range")
cli.add_command(standard)
