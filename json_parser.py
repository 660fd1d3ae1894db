# json_parser.py
# JSON grammar assembled from parser combinators, plus a validator CLI.
#
# =============================================================================
#  PARSER IMPLEMENTATION: COMBINATOR GRAMMAR
# =============================================================================
#
# Each rule of the grammar at json.org is one parser value below, named after
# the rule it implements, so the module reads close to the official grammar.
# The rules are composed only from the primitives in combinators.py.
#
# Recursion: a value may contain values. The value rule is built per nesting
# depth and refers to the next depth through lazy(), so nothing is constructed
# until input reaches that depth. Past max_depth the array and object
# alternatives are left out and deeper input simply does not match, which
# bounds the call stack on adversarial nesting.
#
# A document is valid only if one whitespace-wrapped value consumes the whole
# input. Anything left over, even a single character, means no value.
# =============================================================================

import argparse
import logging
import sys
from functools import lru_cache
from logging import getLogger
from typing import List, Optional

from combinators import Parser, always, fail, lazy, literal, many, many1, one_of, satisfy, sep_by1
from json_value import NULL, Array, Bool, JsonValue, Num, Object, Str

logger = getLogger(__name__)

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 32       # Nested arrays/objects accepted by parse()
_FRAMES_PER_LEVEL   = 14       # Upper bound on stack frames one nesting level costs
_STACK_HEADROOM     = 250      # Frames left for callers and scalar rules
_RULE_CACHE_SIZE    = 256      # Cached per-depth rules, shared by all max_depth values

_WHITESPACE = " \n\r\t"
_HIGH_SURROGATES = range(0xD800, 0xDC00)
_LOW_SURROGATES = range(0xDC00, 0xE000)


def _joined(parser: Parser[str]) -> Parser[str]:
    return many(parser).map("".join)


# ---------------------------------------------------------------------------
# WHITESPACE
# ---------------------------------------------------------------------------
ws = _joined(satisfy(lambda c: c in _WHITESPACE))

# ---------------------------------------------------------------------------
# NUMBERS
# ---------------------------------------------------------------------------
onenine = satisfy(lambda c: "1" <= c <= "9")
digit = satisfy(lambda c: "0" <= c <= "9")
digits = many1(digit).map("".join)

# No leading zeros: "0" stands alone, anything longer starts with 1-9.
integer = one_of(
    onenine + digits,
    digit,
    literal("-") + onenine + digits,
    literal("-") + digit,
)

fraction = one_of(
    literal(".") + digits,
    always(""),
)

sign = one_of(
    literal("+"),
    literal("-"),
    always(""),
)

exponent = one_of(
    literal("E") + sign + digits,
    literal("e") + sign + digits,
    always(""),
)

number = integer + fraction + exponent

# ---------------------------------------------------------------------------
# STRINGS
# ---------------------------------------------------------------------------
hex_digit = one_of(
    digit,
    satisfy(lambda c: "A" <= c <= "F"),
    satisfy(lambda c: "a" <= c <= "f"),
)

_hex_code = (hex_digit + hex_digit + hex_digit + hex_digit).map(lambda h: int(h, 16))


def _after_code_unit(code: int) -> Parser[str]:
    """Pair a high surrogate with a directly following low surrogate escape."""
    if code not in _HIGH_SURROGATES:
        return always(chr(code))
    low_surrogate = literal("\\u").keep(_hex_code).and_then(
        lambda low: always(chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)))
        if low in _LOW_SURROGATES
        else fail()
    )
    return one_of(low_surrogate, always(chr(code)))


escape = one_of(
    literal('"'),
    literal("\\"),
    literal("/"),
    literal("b").map(lambda _: "\b"),
    literal("f").map(lambda _: "\f"),
    literal("n").map(lambda _: "\n"),
    literal("r").map(lambda _: "\r"),
    literal("t").map(lambda _: "\t"),
    literal("u").keep(_hex_code).and_then(_after_code_unit),
)

character = one_of(
    satisfy(lambda c: c >= " " and c != '"' and c != "\\"),
    literal("\\").keep(escape),
)

string = literal('"').keep(_joined(character)).skip(literal('"'))

# ---------------------------------------------------------------------------
# SCALAR VALUES
# ---------------------------------------------------------------------------
json_null = literal("null").map(lambda _: NULL)

json_bool = one_of(
    literal("true").map(lambda _: Bool(True)),
    literal("false").map(lambda _: Bool(False)),
)

json_string = string.map(Str)

json_number = number.map(lambda text: Num(float(text)))


# ---------------------------------------------------------------------------
# CONTAINERS
# ---------------------------------------------------------------------------
def _array(element: Parser[JsonValue]) -> Parser[JsonValue]:
    return one_of(
        literal("[").keep(ws).keep(literal("]")).map(lambda _: Array(())),
        literal("[").keep(sep_by1(element, literal(","))).skip(literal("]")).map(Array),
    )


def _object(element: Parser[JsonValue]) -> Parser[JsonValue]:
    member = (
        ws.keep(string)
        .skip(ws)
        .skip(literal(":"))
        .and_then(lambda key: element.map(lambda value: (key, value)))
    )
    return one_of(
        literal("{").keep(sep_by1(member, literal(","))).skip(literal("}")).map(Object),
        literal("{").keep(ws).keep(literal("}")).map(lambda _: Object({})),
    )


@lru_cache(maxsize=_RULE_CACHE_SIZE)
def _value(depth: int, max_depth: int) -> Parser[JsonValue]:
    """
    Value rule for input nested inside ``depth`` containers.

    Try order is fixed: null, boolean, string, number, array, object.
    """
    if depth >= max_depth:
        return one_of(json_null, json_bool, json_string, json_number)
    inner = lazy(lambda: _element(depth + 1, max_depth))
    return one_of(json_null, json_bool, json_string, json_number, _array(inner), _object(inner))


@lru_cache(maxsize=_RULE_CACHE_SIZE)
def _element(depth: int, max_depth: int) -> Parser[JsonValue]:
    return ws.keep(_value(depth, max_depth)).skip(ws)


# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def max_depth_ceiling() -> int:
    """Largest ``max_depth`` the current recursion limit can carry."""
    return max(0, (sys.getrecursionlimit() - _STACK_HEADROOM) // _FRAMES_PER_LEVEL)


def parse(text: str, *, max_depth: int = DEPTH_LIMIT_DEFAULT) -> Optional[JsonValue]:
    """
    Parse a complete JSON document.

    Returns the value when the whole input is one whitespace-wrapped JSON
    value, and None for anything else: malformed syntax, trailing content,
    empty input, or containers nested deeper than ``max_depth``.

    Each level of nesting costs a bounded number of stack frames, so
    ``max_depth`` above max_depth_ceiling() raises ValueError instead of
    risking RecursionError mid-parse. Scanning slices the remaining text
    once per character, so time grows quadratically with the length of a
    single string or number.
    """
    ceiling = max_depth_ceiling()
    if not 0 <= max_depth <= ceiling:
        raise ValueError(f"max_depth must be between 0 and {ceiling}, got {max_depth}")
    result = _element(0, max_depth).run(text)
    if result is None:
        logger.debug("no JSON value at start of %d characters of input", len(text))
        return None
    value, rest = result
    if rest:
        logger.debug("unconsumed input at offset %d", len(text) - len(rest))
        return None
    return value


# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _cli(argv: List[str]) -> int:
    """
    Command-line validator: exit 0 and print OK for valid JSON, 1 otherwise.
    """
    ap = argparse.ArgumentParser(description="JSON validator")
    ap.add_argument("file", help="JSON file to verify")
    ap.add_argument("--debug", action="store_true", help="log parser diagnostics to stderr")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT)
    args = ap.parse_args(argv)
    if not 0 <= args.max_depth <= max_depth_ceiling():
        ap.error(f"--max-depth must be between 0 and {max_depth_ceiling()}")

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with open(args.file, "r", encoding="utf-8") as fh:
        data = fh.read()

    if parse(data, max_depth=args.max_depth) is None:
        print(f"Invalid JSON: {args.file}", file=sys.stderr)
        return 1
    print("OK")
    return 0


# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(_cli(sys.argv[1:]))
