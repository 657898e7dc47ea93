"""Tests for the evaluation commands."""

import io
import pytest
import click
from click.testing import CliRunner
from unittest.mock import AsyncMock, patch
from rich.console import Console
from tfizz.commands import solve
from tfizz.commands.app import cli
from tfizz.models.dataModel import ExternalToken, FetchResult


@pytest.fixture
def runner() -> CliRunner:
    """Provide Click test runner."""
    return CliRunner()


@pytest.fixture
def captured_output() -> io.StringIO:
    """Capture console output."""
    output = io.StringIO()
    console = Console(file=output, width=200)
    with (
        patch("tfizz.commands.solve.console", console),
        patch("tfizz.commands.base.console", console),
    ):
        yield output


def lines(output: io.StringIO) -> list[str]:
    return output.getvalue().splitlines()


def test_cli_group_structure() -> None:
    assert isinstance(cli, click.Group)
    assert set(cli.commands) == {"number", "numbers", "range", "standard"}


def test_number(runner: CliRunner, captured_output: io.StringIO) -> None:
    result = runner.invoke(solve.number, ["15"])
    assert result.exit_code == 0
    assert lines(captured_output) == ["FizzBuzz"]


def test_number_negative_with_tokens(runner: CliRunner, captured_output: io.StringIO) -> None:
    result = runner.invoke(solve.number, ["-7", "--token", "7:Foo", "--token", "2:Bar"])
    assert result.exit_code == 0
    assert lines(captured_output) == ["Foo"]


def test_numbers_keeps_order(runner: CliRunner, captured_output: io.StringIO) -> None:
    result = runner.invoke(solve.numbers, ["-5", "6", "300", "12", "15"])
    assert result.exit_code == 0
    assert lines(captured_output) == ["Buzz", "Fizz", "FizzBuzz", "Fizz", "FizzBuzz"]


def test_numbers_token_order(runner: CliRunner, captured_output: io.StringIO) -> None:
    args = ["119", "357", "--token", "7:Poem", "--token", "17:Writer", "--token", "3:College"]
    result = runner.invoke(solve.numbers, args)
    assert result.exit_code == 0
    assert lines(captured_output) == ["PoemWriter", "PoemWriterCollege"]


def test_range_descending(runner: CliRunner, captured_output: io.StringIO) -> None:
    result = runner.invoke(solve.range_, ["-2", "-27"])
    assert result.exit_code == 0
    output = lines(captured_output)
    assert len(output) == 26
    assert output[:4] == ["-2", "Fizz", "-4", "Buzz"]
    assert output[-1] == "Fizz"


def test_range_limit(runner: CliRunner, captured_output: io.StringIO) -> None:
    result = runner.invoke(solve.range_, ["1", "2000000000", "--limit", "20"])
    assert result.exit_code == 0
    output = lines(captured_output)
    assert len(output) == 20
    assert output[14] == "FizzBuzz"


def test_standard(runner: CliRunner, captured_output: io.StringIO) -> None:
    result = runner.invoke(solve.standard, ["-5"])
    assert result.exit_code == 0
    assert lines(captured_output) == ["1", "FizzBuzz", "-1", "-2", "Fizz", "-4", "Buzz"]


def test_zero_divisor_reported(runner: CliRunner, captured_output: io.StringIO) -> None:
    result = runner.invoke(solve.range_, ["1", "10", "--token", "0:Zero"])
    assert result.exit_code == 0
    assert "Invalid token set" in captured_output.getvalue()


def test_malformed_token_option(runner: CliRunner) -> None:
    result = runner.invoke(solve.number, ["3", "--token", "Fizz"])
    assert result.exit_code == 2
    assert "DIVISOR:WORD" in result.output


def test_remote_token(runner: CliRunner, captured_output: io.StringIO) -> None:
    fetched = FetchResult(status=True, token=ExternalToken(number=5, word="Foo"))
    with patch("tfizz.commands.solve.token_get", AsyncMock(return_value=fetched)):
        args = ["3", "6", "7", "12", "13", "28", "40", "45", "--remote"]
        result = runner.invoke(solve.numbers, args)
    assert result.exit_code == 0
    assert lines(captured_output) == ["3", "6", "7", "12", "13", "28", "Foo", "Foo"]


def test_remote_unavailable(runner: CliRunner, captured_output: io.StringIO) -> None:
    fetched = FetchResult(status=False, unavailable=True, message="asleep")
    with patch("tfizz.commands.solve.token_get", AsyncMock(return_value=fetched)):
        result = runner.invoke(solve.range_, ["1", "100", "--remote"])
    assert result.exit_code == 0
    assert "shut down for being idle" in captured_output.getvalue()


def test_remote_error(runner: CliRunner, captured_output: io.StringIO) -> None:
    fetched = FetchResult(status=False, message="Token service answered HTTP 500")
    with patch("tfizz.commands.solve.token_get", AsyncMock(return_value=fetched)):
        result = runner.invoke(solve.number, ["15", "--remote"])
    assert result.exit_code == 0
    output = captured_output.getvalue()
    assert "An error occurred while handling custom tokens" in output
    assert "FizzBuzz" not in output


def test_output_limit_setting(runner: CliRunner, captured_output: io.StringIO) -> None:
    with patch.object(solve.appsettings, "output_limit", 3):
        result = runner.invoke(solve.standard, ["100"])
    assert result.exit_code == 0
    assert lines(captured_output) == ["1", "2", "Fizz"]


def test_command_help(runner: CliRunner, captured_output: io.StringIO) -> None:
    result = runner.invoke(solve.range_, ["--help"])
    assert result.exit_code == 0
    assert "counting down" in captured_output.getvalue()


def test_token_and_remote_are_exclusive(runner: CliRunner, captured_output: io.StringIO) -> None:
    fetched = FetchResult(status=True, token=ExternalToken(number=5, word="Foo"))
    mock_get = AsyncMock(return_value=fetched)
    with patch("tfizz.commands.solve.token_get", mock_get):
        result = runner.invoke(solve.number, ["3", "--token", "3:Fizz", "--remote"])
    assert result.exit_code == 2
    assert "cannot be combined" in result.output
    assert captured_output.getvalue() == ""
    mock_get.assert_not_called()


def test_mistyped_option_is_unknown(runner: CliRunner) -> None:
    result = runner.invoke(solve.numbers, ["3", "--tokn", "3:X"])
    assert result.exit_code == 2
    assert "No such option" in result.output
    assert "--tokn" in result.output


def test_negative_numbers_next_to_options(runner: CliRunner, captured_output: io.StringIO) -> None:
    result = runner.invoke(solve.range_, ["--token", "-3:Fizz", "-3", "--limit=2", "-6"])
    assert result.exit_code == 0
    assert lines(captured_output) == ["Fizz", "-4"]
