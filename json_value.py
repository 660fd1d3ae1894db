# json_value.py
# Immutable tree produced by the grammar and consumed by the decoders.

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple


class JsonValue:
    """
    Base of the closed JSON value hierarchy.

    Exactly six subclasses exist: Null, Bool, Str, Num, Array and Object.
    Code that dispatches on the variant ends with an explicit failure for
    anything else.
    """

    __slots__ = ()


@dataclass(frozen=True)
class Null(JsonValue):
    pass


@dataclass(frozen=True)
class Bool(JsonValue):
    value: bool


@dataclass(frozen=True)
class Str(JsonValue):
    value: str


@dataclass(frozen=True)
class Num(JsonValue):
    """Every JSON number, integral or not, is held as a float."""

    value: float

    def __post_init__(self):
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True)
class Array(JsonValue):
    items: Tuple[JsonValue, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class Object(JsonValue):
    """
    Mapping of member names to values.

    Members are copied into a read-only view. Building from pairs with a
    repeated key keeps the last one.
    """

    members: Mapping[str, JsonValue] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "members", MappingProxyType(dict(self.members)))

    def __hash__(self):
        return hash(frozenset(self.members.items()))


NULL = Null()
