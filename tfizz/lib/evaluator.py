"""
Token substitution evaluator.

Maps integers to strings using an ordered set of (divisor, word) rules: a
number becomes the concatenation of the words of every divisor that divides
it, or its own decimal text when nothing matches.

The evaluator handles:
- Single numbers, arbitrary sequences and inclusive ranges in either direction
- Token sets from the built-in default, a caller mapping or an external token
- Arbitrarily large and negative integers

Example:
    >>> evaluate_number(15)
    'FizzBuzz'
    >>> list(evaluate_range(-2, -5, {2: "Even"}))
    ['Even', '-3', 'Even', '-5']
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Final, Self, Union
from tfizz.models.dataModel import ExternalToken
from tfizz.lib.log import LOG


class InvalidTokenSet(ValueError):
    """Raised when a token set cannot be used for evaluation."""


class TokenSet(Mapping):
    """Immutable, order-preserving mapping of divisor to word.

    Iteration follows definition order, which decides the order of the words
    when several divisors match the same number.

    Attributes:
        pairs: The (divisor, word) rules in definition order
    """

    __slots__ = ("pairs",)

    def __init__(
        self: Self,
        tokens: Union[Mapping[int, str], Iterable[tuple[int, str]], ExternalToken] = (),
    ) -> None:
        """Build a token set from a mapping, (divisor, word) pairs or an external token.

        Args:
            tokens: divisor -> word mapping, iterable of (divisor, word), or
                a single ExternalToken

        Raises:
            InvalidTokenSet: on a zero or non-integer divisor, a non-string
                word, or a repeated divisor
        """
        if isinstance(tokens, ExternalToken):
            tokens = tokens.tokens
        items = tokens.items() if isinstance(tokens, Mapping) else tokens
        pairs: list[tuple[int, str]] = []
        seen: set[int] = set()
        try:
            for divisor, word in items:
                pair_validate(divisor, word)
                if divisor in seen:
                    raise InvalidTokenSet(f"Divisor {divisor} is defined twice")
                seen.add(divisor)
                pairs.append((divisor, word))
        except InvalidTokenSet as e:
            LOG(f"Rejected token set: {e}")
            raise
        except (TypeError, ValueError) as e:
            LOG(f"Rejected token set: {e}")
            raise InvalidTokenSet(f"Malformed token entry: {e}") from e
        object.__setattr__(self, "pairs", tuple(pairs))

    def __setattr__(self: Self, name: str, value: object) -> None:
        raise AttributeError("TokenSet is immutable")

    def __reduce__(self: Self) -> tuple:
        # Rebuild through __init__ so copies and unpickled sets are revalidated
        return (TokenSet, (self.pairs,))

    def __getitem__(self: Self, divisor: int) -> str:
        for key, word in self.pairs:
            if key == divisor:
                return word
        raise KeyError(divisor)

    def __iter__(self: Self) -> Iterator[int]:
        return (divisor for divisor, _ in self.pairs)

    def __len__(self: Self) -> int:
        return len(self.pairs)

    def __eq__(self: Self, other: object) -> bool:
        # Order is part of a token set's meaning
        if isinstance(other, TokenSet):
            return self.pairs == other.pairs
        return NotImplemented

    def __hash__(self: Self) -> int:
        return hash(self.pairs)

    def __repr__(self: Self) -> str:
        body = ", ".join(f"{divisor}: {word!r}" for divisor, word in self.pairs)
        return f"TokenSet({{{body}}})"


def pair_validate(divisor: object, word: object) -> None:
    """Check a single (divisor, word) rule.

    Raises:
        InvalidTokenSet: if the rule cannot be evaluated
    """
    if isinstance(divisor, bool) or not isinstance(divisor, int):
        raise InvalidTokenSet(
            f"Divisor must be an integer, got {type(divisor).__name__}"
        )
    if divisor == 0:
        raise InvalidTokenSet(f"Divisor 0 is not allowed (word {word!r})")
    if not isinstance(word, str):
        raise InvalidTokenSet(
            f"Word for divisor {divisor} must be a string, got {type(word).__name__}"
        )


DEFAULT_TOKENS: Final[TokenSet] = TokenSet({3: "Fizz", 5: "Buzz"})

TokenSource = Union[
    TokenSet, ExternalToken, Mapping[int, str], Iterable[tuple[int, str]]
]


def tokenset_resolve(tokens: TokenSource) -> TokenSet:
    """Turn any supported token origin into a TokenSet.

    The result fully replaces the default set; origins are never merged.

    Args:
        tokens: a TokenSet, an ExternalToken, a mapping or (divisor, word) pairs

    Returns:
        TokenSet: validated, order-preserving token set

    Raises:
        InvalidTokenSet: for None, strings, or invalid rules
    """
    if isinstance(tokens, TokenSet):
        return tokens
    if tokens is None or isinstance(tokens, (str, bytes)):
        raise InvalidTokenSet(f"Unsupported token source: {tokens!r}")
    return TokenSet(tokens)


def integer_check(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    return value


def number_substitute(number: int, tokens: TokenSet) -> str:
    """Evaluate one number against an already resolved token set."""
    integer_check(number, "number")
    result: str = "".join(
        word for divisor, word in tokens.pairs if number % divisor == 0
    )
    return result or str(number)


def evaluate_number(number: int, tokens: TokenSource = DEFAULT_TOKENS) -> str:
    """Evaluate a single number.

    Every divisor of the token set that divides `number` contributes its word,
    in token set order. A negative multiple of a divisor matches as well, and
    0 matches every divisor.

    Args:
        number: integer to evaluate, any size or sign
        tokens: token origin, the default Fizz/Buzz set when omitted

    Returns:
        str: concatenated words, or the decimal text of `number` if none match

    Raises:
        TypeError: if `number` is not an integer
        InvalidTokenSet: if the token origin is unusable
    """
    return number_substitute(number, tokenset_resolve(tokens))


def evaluate_sequence(
    numbers: Iterable[int], tokens: TokenSource = DEFAULT_TOKENS
) -> Iterator[str]:
    """Lazily evaluate a sequence of numbers, in input order.

    The token set is validated immediately; numbers are evaluated only as the
    returned iterator is consumed. The iterator is single-pass, call again to
    restart.

    Args:
        numbers: finite iterable of integers, duplicates allowed
        tokens: token origin, the default Fizz/Buzz set when omitted

    Returns:
        Iterator[str]: one result per number
    """
    tokenset: TokenSet = tokenset_resolve(tokens)
    return (number_substitute(number, tokenset) for number in numbers)


def range_numbers(start: int, end: int) -> range:
    """Inclusive range from `start` to `end`, descending when start > end."""
    integer_check(start, "start")
    integer_check(end, "end")
    if start <= end:
        return range(start, end + 1)
    return range(start, end - 1, -1)


def evaluate_range(
    start: int, end: int, tokens: TokenSource = DEFAULT_TOKENS
) -> Iterator[str]:
    """Lazily evaluate every number from `start` to `end`, both inclusive.

    Counts up when start <= end and down otherwise; start == end yields a
    single result. Nothing is materialized, so ranges of billions of numbers
    can be consumed partially.

    Args:
        start: first number evaluated
        end: last number evaluated
        tokens: token origin, the default Fizz/Buzz set when omitted

    Returns:
        Iterator[str]: one result per number of the range

    Raises:
        TypeError: if a bound is not an integer
        InvalidTokenSet: if the token origin is unusable
    """
    return evaluate_sequence(range_numbers(start, end), tokens)


def evaluate_standard(number: int) -> Iterator[str]:
    """The classic problem: default tokens from 1 toward `number`, inclusive.

    A negative or zero `number` counts down from 1.
    """
    return evaluate_range(1, number)
