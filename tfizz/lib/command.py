"""
Command processing for tfizz.

Runs `/command args` strings through the Click command palette. Handles:
- Command parsing
- Help system integration
- Error reporting
"""

import shlex
import click
from tfizz.commands.app import cli
from tfizz.config.settings import console
from tfizz.lib.log import LOG


def command_process(user_input: str) -> bool:
    """Run a command string such as `/range 1 100 --token 7:Foo`.

    Args:
        user_input: The command, the leading '/' is optional

    Returns:
        bool: True if the command ran, False if it could not be parsed or failed

    Note:
        `/help` shows the palette help. Errors are printed, never raised.
    """
    try:
        parts: list[str] = shlex.split(user_input.strip().removeprefix("/"))
    except ValueError as e:
        LOG(f"Error parsing command: {e}")
        console.print(f"[bold red]Error parsing input: {e}[/bold red]")
        return False

    if not parts:
        console.print("[bold red]Error: No command provided.[/bold red]")
        return False

    if parts[0] == "help":
        parts = ["--help"]

    try:
        cli.main(args=parts, prog_name="/", standalone_mode=False)
        return True
    except click.exceptions.ClickException as e:
        console.print(f"[bold red]Error:[/bold red] {e.format_message()}")
        return False
    except click.exceptions.Exit as e:
        return e.exit_code == 0
    except Exception as e:
        LOG(f"Command processing error: {e}")
        console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        return False
