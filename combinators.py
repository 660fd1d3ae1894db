# combinators.py
# Generic parser combinators over text.
#
# =============================================================================
#  PARSERS AS VALUES
# =============================================================================
#
# A parser is a pure function from the remaining input to either None (no
# match) or a (value, remaining_input) pair. Parsers hold no state, so one
# instance can be reused for any number of inputs and invoked from any
# number of call sites.
#
# Failure is silent: a parser that does not match returns None and says
# nothing about where or why. Diagnostics live in the decoder layer.
#
# Repetition (many, many1, sep_by1) runs as a loop rather than through
# right recursion, so long digit runs, long strings and long arrays never
# deepen the call stack. Only genuine nesting, built with lazy(), recurses.
# =============================================================================

from typing import Callable, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")
U = TypeVar("U")

ParseResult = Optional[Tuple[T, str]]


# ---------------------------------------------------------------------------
# PARSER TYPE
# ---------------------------------------------------------------------------
class Parser(Generic[T]):
    """
    Wrapper around a parse function with the sequencing combinators as methods.

    The wrapped function is exposed as ``run``. Combinators call ``run``
    directly instead of going through ``__call__`` to keep one stack frame
    per combinator on nested input.
    """

    __slots__ = ("run",)

    def __init__(self, run: Callable[[str], ParseResult]):
        self.run = run

    def __call__(self, text: str) -> ParseResult:
        return self.run(text)

    def map(self, transform: Callable[[T], U]) -> "Parser[U]":
        run = self.run

        def parse(text: str):
            result = run(text)
            if result is None:
                return None
            value, rest = result
            return transform(value), rest

        return Parser(parse)

    def and_then(self, next_parser: Callable[[T], "Parser[U]"]) -> "Parser[U]":
        """Run this parser, then the parser built from its value on the rest."""
        run = self.run

        def parse(text: str):
            result = run(text)
            if result is None:
                return None
            value, rest = result
            return next_parser(value).run(rest)

        return Parser(parse)

    def keep(self, other: "Parser[U]") -> "Parser[U]":
        """Match both in sequence, keep the value of ``other``."""
        return self.and_then(lambda _: other)

    def skip(self, other: "Parser") -> "Parser[T]":
        """Match both in sequence, keep the value of this parser."""
        return self.and_then(lambda value: other.map(lambda _: value))

    def __add__(self, other: "Parser[str]") -> "Parser[str]":
        return self.and_then(lambda left: other.map(lambda right: left + right))


# ---------------------------------------------------------------------------
# PRIMITIVES
# ---------------------------------------------------------------------------
def literal(expected: str) -> Parser[str]:
    size = len(expected)

    def parse(text: str):
        if text.startswith(expected):
            return expected, text[size:]
        return None

    return Parser(parse)


def satisfy(predicate: Callable[[str], bool]) -> Parser[str]:
    """Consume exactly one character for which ``predicate`` holds."""

    def parse(text: str):
        if text and predicate(text[0]):
            return text[0], text[1:]
        return None

    return Parser(parse)


def always(value: T) -> Parser[T]:
    """Succeed with ``value`` without consuming input."""
    return Parser(lambda text: (value, text))


def fail() -> Parser:
    return Parser(lambda text: None)


# ---------------------------------------------------------------------------
# CHOICE AND RECURSION
# ---------------------------------------------------------------------------
def one_of(*parsers: Parser[T]) -> Parser[T]:
    """
    Try each parser in the listed order on the same input.

    The first match wins. The order is part of the contract.
    """
    runs = [parser.run for parser in parsers]

    def parse(text: str):
        for run in runs:
            result = run(text)
            if result is not None:
                return result
        return None

    return Parser(parse)


def lazy(supplier: Callable[[], Parser[T]]) -> Parser[T]:
    """Build the underlying parser only when input arrives."""
    return Parser(lambda text: supplier().run(text))


# ---------------------------------------------------------------------------
# REPETITION
# ---------------------------------------------------------------------------
def many(parser: Parser[T]) -> Parser[List[T]]:
    """Zero or more matches, collected in order."""
    run = parser.run

    def parse(text: str):
        values: List[T] = []
        while True:
            result = run(text)
            # A match that consumes nothing would repeat forever.
            if result is None or len(result[1]) == len(text):
                return values, text
            value, text = result
            values.append(value)

    return Parser(parse)


def many1(parser: Parser[T]) -> Parser[List[T]]:
    return many(parser).and_then(lambda values: always(values) if values else fail())


def sep_by1(parser: Parser[T], separator: Parser) -> Parser[List[T]]:
    """One or more matches of ``parser`` separated by ``separator``."""
    return parser.and_then(
        lambda first: many(separator.keep(parser)).map(lambda rest: [first] + rest)
    )
