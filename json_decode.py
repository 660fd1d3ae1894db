# json_decode.py
# Decoder combinators: project application values out of a JsonValue tree.
#
# =============================================================================
#  DECODERS AS VALUES
# =============================================================================
#
# A decoder is a pure function from a JsonValue to a Result. The combinators
# mirror the parser combinators, with Result in place of (value, rest) pairs:
# map, and_then, choice and constant decoders compose into decoders for
# whole documents.
#
# Error messages name the offending value in JSON text, not the whole
# document, e.g. '3.14 is not an integer'. Composite decoders report the
# first failure in declaration order and stop there; only one_of and
# with_error replace a message.
# =============================================================================

import math
from functools import reduce
from logging import getLogger
from typing import Any, Callable, Generic, Iterable, Optional, Sequence, TypeVar

from json_encode import encode
from json_parser import DEPTH_LIMIT_DEFAULT, parse
from json_result import Err, Ok, Result, combine
from json_value import Array, Bool, JsonValue, Null, Num, Object, Str

logger = getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


def _text(value: JsonValue) -> str:
    return encode(value, allow_nan=True)


# ---------------------------------------------------------------------------
# DECODER TYPE
# ---------------------------------------------------------------------------
class Decoder(Generic[T]):
    """Wrapper around a decode function with the chaining combinators as methods."""

    __slots__ = ("run",)

    def __init__(self, run: Callable[[JsonValue], Result[T]]):
        self.run = run

    def __call__(self, value: JsonValue) -> Result[T]:
        return self.run(value)

    def map(self, transform: Callable[[T], U]) -> "Decoder[U]":
        run = self.run
        return Decoder(lambda value: run(value).map(transform))

    def and_then(self, next_decoder: Callable[[T], "Decoder[U]"]) -> "Decoder[U]":
        """
        Decode, then decode the same input with a decoder chosen by the result.

        This is how tagged unions are read: decode the tag, then pick the
        decoder for that variant.
        """
        run = self.run
        return Decoder(lambda value: run(value).and_then(lambda a: next_decoder(a).run(value)))

    def or_else(self, other: "Decoder[T]") -> "Decoder[T]":
        """Fall back to ``other`` on failure; its error is the one reported."""
        run, run_other = self.run, other.run

        def decode(value: JsonValue) -> Result[T]:
            result = run(value)
            if isinstance(result, Err):
                return run_other(value)
            return result

        return Decoder(decode)

    def with_error(self, to_message: Callable[[JsonValue], str]) -> "Decoder[T]":
        """Replace any failure message with one built from the input value."""
        run = self.run

        def decode(value: JsonValue) -> Result[T]:
            result = run(value)
            if isinstance(result, Err):
                return Err(to_message(value))
            return result

        return Decoder(decode)


# ---------------------------------------------------------------------------
# PRIMITIVE DECODERS
# ---------------------------------------------------------------------------
def _decode_integer(value: JsonValue) -> Result[int]:
    if isinstance(value, Num) and math.isfinite(value.value) and value.value == math.trunc(value.value):
        return Ok(int(value.value))
    return Err(f"{_text(value)} is not an integer")


def _decode_double(value: JsonValue) -> Result[float]:
    if isinstance(value, Num):
        return Ok(value.value)
    return Err(f"{_text(value)} is not a double")


def _decode_boolean(value: JsonValue) -> Result[bool]:
    if isinstance(value, Bool):
        return Ok(value.value)
    return Err(f"{_text(value)} is not a boolean")


def _decode_string(value: JsonValue) -> Result[str]:
    if isinstance(value, Str):
        return Ok(value.value)
    return Err(f"{_text(value)} is not a string")


integer: Decoder[int] = Decoder(_decode_integer)
double: Decoder[float] = Decoder(_decode_double)
boolean: Decoder[bool] = Decoder(_decode_boolean)
string: Decoder[str] = Decoder(_decode_string)

# The value itself, undecoded.
raw: Decoder[JsonValue] = Decoder(Ok)


# ---------------------------------------------------------------------------
# STRUCTURE
# ---------------------------------------------------------------------------
def field(name: str, decoder: Decoder[T]) -> Decoder[T]:
    """Decode member ``name`` of an object with ``decoder``."""

    def decode(value: JsonValue) -> Result[T]:
        if not isinstance(value, Object):
            return Err(f"Expecting a JSON object with field '{name}' but was {_text(value)}")
        if name not in value.members:
            return Err(f"Field '{name}' not found")
        return decoder.run(value.members[name])

    return Decoder(decode)


def at(path: Sequence[str], decoder: Decoder[T]) -> Decoder[T]:
    """Decode the value reached by following ``path`` through nested objects."""
    for name in reversed(path):
        decoder = field(name, decoder)
    return decoder


def list_of(item: Decoder[T]) -> Decoder[list]:
    """
    Decode every item of an array with ``item``.

    Items are decoded left to right; the first failure is returned and the
    remaining items are not looked at.
    """
    run = item.run

    def decode(value: JsonValue) -> Result[list]:
        if not isinstance(value, Array):
            return Err(f"{_text(value)} is not an array")
        return combine(run(element) for element in value.items)

    return Decoder(decode)


def nullable(decoder: Decoder[T]) -> Decoder[Optional[T]]:
    run = decoder.run
    return Decoder(lambda value: Ok(None) if isinstance(value, Null) else run(value))


# ---------------------------------------------------------------------------
# CONSTANTS
# ---------------------------------------------------------------------------
def succeed(result: T) -> Decoder[T]:
    return Decoder(lambda _: Ok(result))


def fail(message: str) -> Decoder[Any]:
    return Decoder(lambda _: Err(message))


# ---------------------------------------------------------------------------
# COMBINING DECODERS
# ---------------------------------------------------------------------------
def sequence(decoders: Iterable[Decoder[Any]]) -> Decoder[list]:
    """
    Run each decoder on the same input and collect the results in order.

    Stops at the first failure, so later decoders are never run.
    """
    runs = [decoder.run for decoder in decoders]
    return Decoder(lambda value: combine(run(value) for run in runs))


def _map_n(transform: Callable[..., R], *decoders: Decoder[Any]) -> Decoder[R]:
    return sequence(decoders).map(lambda values: transform(*values))


def map2(transform: Callable[..., R], a: Decoder, b: Decoder) -> Decoder[R]:
    return _map_n(transform, a, b)


def map3(transform: Callable[..., R], a: Decoder, b: Decoder, c: Decoder) -> Decoder[R]:
    return _map_n(transform, a, b, c)


def map4(transform: Callable[..., R], a: Decoder, b: Decoder, c: Decoder, d: Decoder) -> Decoder[R]:
    return _map_n(transform, a, b, c, d)


def map5(
    transform: Callable[..., R],
    a: Decoder,
    b: Decoder,
    c: Decoder,
    d: Decoder,
    e: Decoder,
) -> Decoder[R]:
    """Combine five decoders. Chain with and_then for more."""
    return _map_n(transform, a, b, c, d, e)


def or_(first: Decoder[T], second: Decoder[T]) -> Decoder[T]:
    return first.or_else(second)


def one_of(first: Decoder[T], *rest: Decoder[T]) -> Decoder[T]:
    """
    First decoder to succeed wins.

    When all fail, the individual messages are dropped in favour of one that
    names the input: 'oneOf failed to decode <json>'.
    """
    return reduce(Decoder.or_else, rest, first).with_error(
        lambda value: f"oneOf failed to decode {_text(value)}"
    )


# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def decode(text: str, decoder: Decoder[T], *, max_depth: int = DEPTH_LIMIT_DEFAULT) -> Result[T]:
    """Parse ``text`` and decode the resulting tree with ``decoder``."""
    value = parse(text, max_depth=max_depth)
    if value is None:
        logger.debug("decode aborted: input is not valid JSON")
        return Err("Invalid JSON")
    return decoder.run(value)
