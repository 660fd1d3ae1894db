# json_result.py
# Two-variant outcome type used by the decoder layer.
#
# =============================================================================
#  RESULT: SUCCESS VALUE OR ERROR MESSAGE
# =============================================================================
#
# Ok carries a decoded value, Err carries a human readable message. Chaining
# with and_then short-circuits on the first Err and keeps its message intact;
# only an explicit error-mapping step (Decoder.with_error) ever rewrites it.
# =============================================================================

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")
R = TypeVar("R")


# ---------------------------------------------------------------------------
# VARIANTS
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome holding ``value``."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def map(self, transform: Callable[[T], U]) -> "Result[U]":
        return Ok(transform(self.value))

    def and_then(self, next_step: Callable[[T], "Result[U]"]) -> "Result[U]":
        return next_step(self.value)


@dataclass(frozen=True)
class Err:
    """Failed outcome holding an error message."""

    error: str

    @property
    def is_ok(self) -> bool:
        return False

    def map(self, transform: Callable) -> "Err":
        return self

    def and_then(self, next_step: Callable) -> "Err":
        return self


Result = Union[Ok[T], Err]


# ---------------------------------------------------------------------------
# COMBINING RESULTS
# ---------------------------------------------------------------------------
def combine(results: Iterable["Result[T]"]) -> "Result[List[T]]":
    """
    Collapse a sequence of results into a result of a list.

    Returns the first Err in iteration order. Iteration stops there, so a
    lazily produced sequence is not evaluated past the first failure.
    """
    values: List[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)


def map2(transform: Callable[[T, U], R], a: "Result[T]", b: "Result[U]") -> "Result[R]":
    return a.and_then(lambda a_value: b.map(lambda b_value: transform(a_value, b_value)))


def map3(
    transform: Callable[[T, U, V], R],
    a: "Result[T]",
    b: "Result[U]",
    c: "Result[V]",
) -> "Result[R]":
    return a.and_then(
        lambda a_value: map2(lambda b_value, c_value: transform(a_value, b_value, c_value), b, c)
    )
