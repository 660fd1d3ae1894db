# json_encode.py
# Minified JSON text from a JsonValue tree, and small value builders.

import math
from typing import Mapping, Optional

from json_value import NULL, Array, Bool, JsonValue, Null, Num, Object, Str

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _escape(text: str) -> str:
    out = []
    for ch in text:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch < " ":
            # The grammar rejects raw control characters inside strings.
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return "".join(out)


def _number(value: float, allow_nan: bool) -> str:
    if math.isfinite(value):
        return repr(value)
    if not allow_nan:
        raise ValueError(f"Out of range float values are not JSON compliant: {value!r}")
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def encode(value: JsonValue, *, allow_nan: bool = False) -> str:
    """
    Encode ``value`` as minified JSON text.

    Non-ASCII text is written as is. NaN and infinities raise ValueError
    unless ``allow_nan`` is set, in which case they are written the way
    JavaScript prints them; that output is not valid JSON.
    """
    if isinstance(value, Null):
        return "null"
    if isinstance(value, Bool):
        return "true" if value.value else "false"
    if isinstance(value, Num):
        return _number(value.value, allow_nan)
    if isinstance(value, Str):
        return f'"{_escape(value.value)}"'
    if isinstance(value, Array):
        return "[" + ",".join(encode(item, allow_nan=allow_nan) for item in value.items) + "]"
    if isinstance(value, Object):
        members = (
            f'"{_escape(key)}":{encode(member, allow_nan=allow_nan)}'
            for key, member in value.members.items()
        )
        return "{" + ",".join(members) + "}"
    raise TypeError(f"not a JSON value: {value!r}")


# ---------------------------------------------------------------------------
# BUILDERS
# ---------------------------------------------------------------------------
def string(value: str) -> JsonValue:
    return Str(value)


def number(value: float) -> JsonValue:
    return Num(value)


def boolean(value: bool) -> JsonValue:
    return Bool(value)


def null() -> JsonValue:
    return NULL


def array(*items: JsonValue) -> JsonValue:
    return Array(items)


def obj(members: Optional[Mapping[str, JsonValue]] = None, **named: JsonValue) -> JsonValue:
    """Build an Object from a mapping and/or keyword members; keywords win."""
    merged = dict(members or {})
    merged.update(named)
    return Object(merged)
