"""Shape outcomes returned by the fallible matrix constructors and combinators."""

from dataclasses import dataclass
from typing import Tuple, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class ShapeMismatch:
    """
    Two dimensions that were required to agree did not.

    Returned (never raised) by ``Matrix.from_nested``, ``concat_horizontal``,
    ``concat_vertical`` and ``map2``.

    Attributes
    ----------
    operation : str
        Name of the operation that rejected its inputs.
    expected : tuple of int
        Dimension(s) the operation required.
    actual : tuple of int
        Dimension(s) it was given.
    """
    operation: str
    expected: Tuple[int, ...]
    actual: Tuple[int, ...]

    def __str__(self) -> str:
        return f"{self.operation}: expected {self.expected}, got {self.actual}"


class ShapeError(ValueError):
    """Raised by :func:`expect` when a result turned out to be a ShapeMismatch."""

    def __init__(self, mismatch: ShapeMismatch):
        super().__init__(str(mismatch))
        self.mismatch = mismatch


def expect(result: Union[T, ShapeMismatch]) -> T:
    """Return ``result`` unchanged, or raise ShapeError if it is a mismatch."""
    if isinstance(result, ShapeMismatch):
        raise ShapeError(result)
    return result
