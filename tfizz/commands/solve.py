"""
Evaluation CLI Commands

Commands that run the token substitution evaluator and print one result per
line.

Commands:
- /number <n>:               Evaluate a single number
- /numbers <n>...:           Evaluate numbers in the given order
- /range <start> <end>:      Evaluate an inclusive range, up or down
- /standard <n>:             Classic FizzBuzz from 1 to n

`--token D:W` (repeatable, in order) replaces the default Fizz/Buzz rules, and
`--remote` replaces them with the rule fetched from the token service; the
two cannot be combined.
Negative numbers can be given directly as arguments.
"""

import asyncio
from collections.abc import Callable, Iterator
from typing import Any, Optional
import click
from tfizz.commands.base import NumericCommand, rich_help, results_print
from tfizz.config.settings import appsettings, console
from tfizz.lib.evaluator import (
    DEFAULT_TOKENS,
    InvalidTokenSet,
    TokenSet,
    TokenSource,
    evaluate_number,
    evaluate_range,
    evaluate_sequence,
    evaluate_standard,
)
from tfizz.lib.remote import token_get
from tfizz.lib.log import LOG
from tfizz.models.dataModel import FetchResult


class TokenParamType(click.ParamType):
    """Click parameter type for a `DIVISOR:WORD` rule."""

    name = "token"

    def convert(
        self,
        value: Any,
        param: Optional[click.Parameter],
        ctx: Optional[click.Context],
    ) -> tuple[int, str]:
        if isinstance(value, tuple):
            return value
        divisor, sep, word = str(value).partition(":")
        if not sep:
            self.fail(f"{value!r} is not of the form DIVISOR:WORD", param, ctx)
        try:
            return int(divisor), word
        except ValueError:
            self.fail(f"{divisor!r} is not an integer divisor", param, ctx)


TOKEN = TokenParamType()


def tokens_select(tokens: tuple[tuple[int, str], ...], remote: bool) -> TokenSource | None:
    """Pick the token origin requested on the command line.

    Returns:
        The token origin, or None when the remote fetch failed (already
        reported to the user).

    Raises:
        click.UsageError: if both explicit rules and --remote are given
    """
    if remote and tokens:
        raise click.UsageError("--token and --remote cannot be combined")
    if remote:
        result: FetchResult = asyncio.run(token_get())
        if result.unavailable:
            console.print(
                "[bold yellow]The token service was shut down for being idle. "
                "Please wait a moment for it to restart and try again.[/bold yellow]"
            )
            return None
        if not result.status:
            console.print(
                "[bold red]An error occurred while handling custom tokens from the "
                f"API:[/bold red] {result.message}"
            )
            return None
        return result.token
    if tokens:
        return TokenSet(tokens)
    return DEFAULT_TOKENS


def evaluation_run(
    tokens: tuple[tuple[int, str], ...],
    remote: bool,
    evaluate: Callable[[TokenSource], Iterator[str]],
    limit: Optional[int],
) -> None:
    """Resolve the token origin, evaluate and print the results.

    Invalid token sets are reported to the user instead of propagating.
    """
    try:
        source = tokens_select(tokens, remote)
        if source is None:
            return
        results_print(
            evaluate(source), appsettings.output_limit if limit is None else limit
        )
    except InvalidTokenSet as e:
        LOG(f"Invalid token set: {e}")
        console.print(f"[bold red]Invalid token set:[/bold red] {e}")


def limit_option(func: Callable) -> Callable:
    return click.option(
        "--limit",
        type=click.IntRange(min=0),
        default=None,
        help="Print only the first N results (0 for all)",
    )(func)


def token_options(func: Callable) -> Callable:
    """Attach the shared --token/--remote options."""
    func = click.option(
        "--remote",
        is_flag=True,
        help="Use the rule fetched from the token service",
    )(func)
    func = click.option(
        "--token",
        "tokens",
        type=TOKEN,
        multiple=True,
        help="DIVISOR:WORD rule, repeat to add more",
    )(func)
    return func


@click.command(
    cls=NumericCommand,
    short_help="evaluate one number",
    help=rich_help(
        command="number",
        description="Evaluate a single number",
        usage="/number <n> [--token D:W]... [--remote]",
        args={"<n>": "integer, may be negative"},
    ),
)
@click.argument("n", type=int)
@token_options
def number(n: int, tokens: tuple[tuple[int, str], ...], remote: bool) -> None:
    """
    Evaluate and print one number.
    """
    evaluation_run(tokens, remote, lambda source: iter([evaluate_number(n, source)]), 0)


@click.command(
    cls=NumericCommand,
    short_help="evaluate a list of numbers",
    help=rich_help(
        command="numbers",
        description="Evaluate numbers in the order given",
        usage="/numbers <n>... [--token D:W]... [--remote] [--limit K]",
        args={"<n>...": "integers, order and duplicates are kept"},
    ),
)
@click.argument("values", type=int, nargs=-1)
@token_options
@limit_option
def numbers(
    values: tuple[int, ...],
    tokens: tuple[tuple[int, str], ...],
    remote: bool,
    limit: Optional[int],
) -> None:
    """
    Evaluate and print a sequence of numbers.
    """
    evaluation_run(
        tokens, remote, lambda source: evaluate_sequence(values, source), limit
    )


@click.command(
    "range",
    cls=NumericCommand,
    short_help="evaluate an inclusive range",
    help=rich_help(
        command="range",
        description="Evaluate every number from start to end, counting down if start > end",
        usage="/range <start> <end> [--token D:W]... [--remote] [--limit K]",
        args={"<start>": "first number", "<end>": "last number (inclusive)"},
    ),
)
@click.argument("start", type=int)
@click.argument("end", type=int)
@token_options
@limit_option
def range_(
    start: int,
    end: int,
    tokens: tuple[tuple[int, str], ...],
    remote: bool,
    limit: Optional[int],
) -> None:
    """
    Evaluate and print an inclusive range.
    """
    evaluation_run(
        tokens, remote, lambda source: evaluate_range(start, end, source), limit
    )


@click.command(
    cls=NumericCommand,
    short_help="classic FizzBuzz from 1 to n",
    help=rich_help(
        command="standard",
        description="Classic FizzBuzz with the default rules, from 1 to n",
        usage="/standard <n> [--limit K]",
        args={"<n>": "last number, counts down from 1 if below 1"},
    ),
)
@click.argument("n", type=int)
@limit_option
def standard(n: int, limit: Optional[int]) -> None:
    """
    Print the classic problem up to n.
    """
    evaluation_run((), False, lambda _: evaluate_standard(n), limit)
