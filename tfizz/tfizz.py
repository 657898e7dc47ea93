"""
tfizz Main Module.

This module is the process entry point for tfizz, a command-line tool that
evaluates numbers against ordered divisor/word rules ("twisted" FizzBuzz).

Features:
- Runs one command of the tfizz command palette per invocation
- Defaults to the classic problem from 1 to 100
- Handles graceful termination on user interruption

Examples:
    Classic problem:
        $ tfizz

    Descending range with custom rules:
        $ tfizz --ask "/range 127 -20 --token 5:Fizz --token 9:Buzz --token 27:Bar"

    First 20 results of a very large range:
        $ tfizz --ask "/range 1 2000000000 --limit 20"

    Rule fetched from the third-party token service:
        $ tfizz --ask "/range 1 100 --remote"
"""

from argparse import Namespace, ArgumentParser, ArgumentDefaultsHelpFormatter
from tfizz.lib.command import command_process
from tfizz.config.settings import console
from tfizz.lib.log import LOG
import signal
import sys
from typing import Final, Optional
from types import FrameType

__version__: Final[str] = "0.1.0"

DEFAULT_COMMAND: Final[str] = "/standard 100"

parser: Final[ArgumentParser] = ArgumentParser(
    description="Evaluate numbers against ordered divisor/word rules.",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
parser.add_argument(
    "--ask",
    type=str,
    default=DEFAULT_COMMAND,
    help="Command to run, e.g. '/range -5 5 --token 7:Foo'",
)
parser.add_argument(
    "-V", "--version", action="version", version=f"%(prog)s {__version__}"
)


def run(options: Namespace) -> int:
    """Run the requested command.

    Args:
        options: Parsed command-line arguments

    Returns:
        int: process exit code, 0 on success
    """
    LOG(f"Running command: {options.ask}")
    return 0 if command_process(options.ask) else 1


def signal_handle(sig: int, frame: Optional[FrameType]) -> None:
    """Exit quietly on Ctrl-C, even in the middle of a long range."""
    console.print("\n[bold cyan]Interrupt received. Exiting.[/bold cyan]")
    sys.exit(0)


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point.

    Args:
        argv: Command-line arguments, sys.argv[1:] when omitted
    """
    options: Namespace = parser.parse_args(argv)
    signal.signal(signal.SIGINT, signal_handle)
    sys.exit(run(options))


if __name__ == "__main__":
    main()
