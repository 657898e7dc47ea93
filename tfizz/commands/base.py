"""
Base classes for Rich-enhanced Click commands and groups.

This module defines:
- `rich_help`: builds the markup help text shown for a command.
- `RichGroup`: a Click group listing its subcommands with Rich colors.
- `RichCommand`: a Click command whose help is rendered in a Rich panel.
- `NumericCommand`: a RichCommand accepting negative numbers as arguments.
- `results_print`: prints evaluation results, honoring an output limit.
"""

from collections.abc import Iterable
from itertools import islice
from typing import Any
import re
from rich.panel import Panel
import click
from tfizz.config.settings import console
from tfizz.lib.log import LOG


def rich_help(command: str, description: str, usage: str, args: dict) -> str:
    """
    Generate Rich-enhanced help text for commands.

    :param command: The command name.
    :param description: Description of the command.
    :param usage: Usage syntax for the command.
    :param args: Dictionary of arguments and their descriptions.
    :return: Formatted Rich help string.
    """
    lines: list[str] = [
        f"[bold cyan]{command}[/bold cyan]: {description}",
        "",
        "[bold yellow]Usage:[/bold yellow]",
        f"    [green]{usage}[/green]",
        "",
        "[bold yellow]Arguments:[/bold yellow]",
    ]
    lines.extend(f"    [green]{arg}[/green]: {desc}" for arg, desc in args.items())
    return "\n".join(lines) + "\n"


class RichGroup(click.Group):
    """
    A Click Group that renders its help with Rich: usage line, description,
    then one line per registered subcommand.
    """

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        try:
            info_name: str = ctx.info_name.lstrip("/") if ctx.info_name else ""
            console.print(
                f"[bold yellow]Usage:[/bold yellow] [cyan]/{info_name}[/cyan] "
                f"[magenta]COMMAND [ARGS]...[/magenta]\n"
            )
            if self.help:
                console.print(f"[bold cyan]{self.help.strip()}[/bold cyan]\n")

            if self.commands:
                console.print("[bold green]Available Commands:[/bold green]")
                for name, command in sorted(self.commands.items()):
                    console.print(
                        f"- [cyan]{name}[/cyan]: "
                        f"[white]{command.short_help or 'No description available.'}[/white]"
                    )
        except Exception as e:
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {e}")


class RichCommand(click.Command):
    """
    A Click Command that renders its help text inside a Rich panel.
    """

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        try:
            help_text: str = self.help or "No help text available."
            panel_width: int = max(len(line) for line in help_text.splitlines()) + 10
            panel = Panel(
                help_text, expand=False, width=min(panel_width, 80), border_style="cyan"
            )
            console.print(panel)
        except Exception as e:
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {e}")


NEGATIVE_NUMBER = re.compile(r"^-\d+$")


class NumericCommand(RichCommand):
    """
    A RichCommand whose positional arguments may be negative numbers.

    Arguments such as `-5` are passed through as values, while any other
    unknown `-x` / `--xyz` still fails as an unknown option.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        settings: dict[str, Any] = dict(kwargs.get("context_settings") or {})
        settings["ignore_unknown_options"] = True
        kwargs["context_settings"] = settings
        super().__init__(*args, **kwargs)

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        self.options_check(ctx, args)
        return super().parse_args(ctx, args)

    def options_check(self, ctx: click.Context, args: list[str]) -> None:
        """
        Reject option-like arguments that are neither declared options nor
        negative numbers.

        :param ctx: The Click context for the command.
        :param args: Raw command-line arguments.
        :raises click.NoSuchOption: On an unknown option.
        """
        takes_value: dict[str, bool] = {}
        for param in self.get_params(ctx):
            if isinstance(param, click.Option):
                for opt in param.opts + param.secondary_opts:
                    takes_value[opt] = not param.is_flag

        skip_next: bool = False
        for arg in args:
            if skip_next:
                skip_next = False
                continue
            if arg == "--":
                break
            name, has_value, _ = arg.partition("=")
            if name in takes_value:
                skip_next = takes_value[name] and not has_value
                continue
            if len(arg) > 1 and arg.startswith("-") and not NEGATIVE_NUMBER.match(arg):
                raise click.NoSuchOption(name, ctx=ctx)


def results_print(results: Iterable[str], limit: int = 0) -> int:
    """
    Print results one per line, stopping after `limit` lines when nonzero.

    Results are pulled lazily, so only the printed prefix is ever evaluated.

    :param results: Evaluation results.
    :param limit: Maximum number of lines, 0 for all.
    :return: Number of lines printed.
    """
    if limit:
        results = islice(results, limit)
    count: int = 0
    for line in results:
        console.print(line, markup=False, highlight=False, soft_wrap=True)
        count += 1
    return count
