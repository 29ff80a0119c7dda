"""
===========================================================
flat_matrix.core — dense 2-D matrix on one flat buffer
===========================================================

Implements the ``Matrix`` value type:
  - construction      : empty(), repeat(), from_nested(), from_array()
  - element access    : get(), set(), update()
  - row / column      : get_row(), get_column()
  - composition       : concat_horizontal(), concat_vertical()
  - transformation    : map(), map2(), indexed_map(), filter(), to_indexed()

Layout
------
Storage is column-major: element (i, j) lives at linear offset
``i + j * rows``. A column is therefore a contiguous slice of the buffer
and a row is a strided one.

Failure model
-------------
- Out-of-range reads return an "absent" value (``None`` or the given
  default); out-of-range writes return the matrix unchanged.
- Incompatible shapes are reported by *returning* a ``ShapeMismatch``;
  use ``flat_matrix.expect`` to turn that into an exception instead.
- Bad arguments to the raw API (negative sizes, wrong buffer length)
  raise ``ValueError``.
"""

# --- Imports --------------------------------------------------------------

import logging
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np

from . import buffer
from .errors import ShapeMismatch

logger = logging.getLogger(__name__)


def _mismatch(operation: str, expected, actual) -> ShapeMismatch:
    m = ShapeMismatch(operation, tuple(expected), tuple(actual))
    logger.debug("shape mismatch: %s", m)
    return m


# --- Matrix ---------------------------------------------------------------

class Matrix:
    """
    Immutable rows x cols matrix over a column-major flat buffer.

    Parameters
    ----------
    rows, cols : int
        Non-negative dimensions.
    data : iterable
        Exactly ``rows * cols`` values in column-major order.
    """

    __slots__ = ("_rows", "_cols", "_data")
    __hash__ = None

    def __init__(self, rows: int, cols: int, data: Iterable[Any] = ()):
        if rows < 0 or cols < 0:
            raise ValueError(f"Matrix dimensions must be >= 0, got ({rows}, {cols})")
        buf = buffer.from_values(data)
        if len(buf) != rows * cols:
            raise ValueError(
                f"Buffer of length {len(buf)} does not fit a {rows}x{cols} matrix")
        self._rows = rows
        self._cols = cols
        self._data = buf

    @classmethod
    def _wrap(cls, rows: int, cols: int, buf) -> "Matrix":
        # Adopts a buffer fresh from flat_matrix.buffer; nothing else holds it.
        m = cls.__new__(cls)
        m._rows = rows
        m._cols = cols
        m._data = buf
        return m

    # --- Construction -----------------------------------------------------

    @classmethod
    def empty(cls) -> "Matrix":
        """The 0x0 matrix."""
        return cls(0, 0)

    @classmethod
    def repeat(cls, rows: int, cols: int, value: Any) -> "Matrix":
        """Every cell set to its own deep copy of ``value``."""
        if rows < 0 or cols < 0:
            raise ValueError(f"Matrix dimensions must be >= 0, got ({rows}, {cols})")
        return cls._wrap(rows, cols, buffer.filled(rows * cols, value))

    @classmethod
    def from_nested(cls, columns: Iterable[Iterable[Any]]) -> Union["Matrix", ShapeMismatch]:
        """
        Build a matrix whose columns are the inner sequences of ``columns``.

        The outer sequence is read as a list of columns, not rows:
        ``from_nested([[1, 2, 3], [4, 5, 6]])`` has shape (3, 2).

        Returns
        -------
        Matrix or ShapeMismatch
            A mismatch when the inner sequences differ in length.
        """
        cols = [list(c) for c in columns]
        height = len(cols[0]) if cols else 0
        for c in cols:
            if len(c) != height:
                return _mismatch("from_nested", (height,), (len(c),))
        return cls(height, len(cols), [v for c in cols for v in c])

    @classmethod
    def from_array(cls, array) -> "Matrix":
        """
        Build from a 2-D array-like; ``array[i, j]`` becomes element (i, j).
        """
        A = np.asarray(array)
        if A.ndim != 2:
            raise ValueError("from_array expects a 2D array")
        rows, cols = A.shape
        return cls(rows, cols, A.ravel(order="F").tolist())

    # --- Dimensions -------------------------------------------------------

    @property
    def height(self) -> int:
        return self._rows

    @property
    def width(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._cols

    def _offset(self, i: int, j: int) -> Optional[int]:
        if 0 <= i < self._rows and 0 <= j < self._cols:
            return i + j * self._rows
        return None

    # --- Element access ---------------------------------------------------

    def get(self, i: int, j: int, default: Any = None) -> Any:
        """Element (i, j), or ``default`` when out of range."""
        k = self._offset(i, j)
        if k is None:
            return default
        return self._data[k]

    def set(self, i: int, j: int, value: Any) -> "Matrix":
        """Copy with (i, j) replaced; out of range returns ``self`` as is."""
        k = self._offset(i, j)
        if k is None:
            return self
        return Matrix._wrap(self._rows, self._cols, buffer.replace(self._data, k, value))

    def update(self, i: int, j: int, f: Callable[[Any], Any]) -> "Matrix":
        """``set(i, j, f(get(i, j)))`` when (i, j) is in range."""
        k = self._offset(i, j)
        if k is None:
            return self
        return self.set(i, j, f(self._data[k]))

    # --- Rows / columns ---------------------------------------------------

    def get_row(self, i: int) -> Optional[List[Any]]:
        """Row ``i`` in column order, or None when out of range."""
        if not 0 <= i < self._rows:
            return None
        return self._data[i::self._rows].tolist()

    def get_column(self, j: int) -> Optional[List[Any]]:
        """Column ``j`` (a contiguous buffer slice), or None when out of range."""
        if not 0 <= j < self._cols:
            return None
        start = j * self._rows
        return self._data[start:start + self._rows].tolist()

    # --- Composition ------------------------------------------------------

    def concat_horizontal(self, other: "Matrix") -> Union["Matrix", ShapeMismatch]:
        """
        Columns of ``self`` followed by the columns of ``other``.

        Heights must agree. In column-major order this is a plain append of
        the two buffers.
        """
        if self._rows != other._rows:
            return _mismatch("concat_horizontal", (self._rows,), (other._rows,))
        return Matrix._wrap(self._rows, self._cols + other._cols,
                            buffer.concat(self._data, other._data))

    def concat_vertical(self, other: "Matrix") -> Union["Matrix", ShapeMismatch]:
        """
        Rows of ``self`` followed by the rows of ``other``.

        Widths must agree. Each result column is rebuilt from the matching
        column of both inputs.
        """
        if self._cols != other._cols:
            return _mismatch("concat_vertical", (self._cols,), (other._cols,))
        data = buffer.interleave_columns(self._data, self._rows,
                                         other._data, other._rows, self._cols)
        return Matrix._wrap(self._rows + other._rows, self._cols, data)

    # --- Transformation ---------------------------------------------------

    def map(self, f: Callable[[Any], Any]) -> "Matrix":
        return Matrix(self._rows, self._cols, [f(v) for v in self._data])

    def map2(self, f: Callable[[Any, Any], Any],
             other: "Matrix") -> Union["Matrix", ShapeMismatch]:
        """Pairwise ``f(a, b)`` over two matrices of the same shape."""
        if self.shape != other.shape:
            return _mismatch("map2", self.shape, other.shape)
        return Matrix(self._rows, self._cols,
                      [f(a, b) for a, b in zip(self._data, other._data)])

    def indexed_map(self, f: Callable[[int, int, Any], Any]) -> "Matrix":
        """
        Apply ``f(i, j, value)`` to every cell.

        Coordinates are recovered from the linear offset ``k`` as
        ``i = k % rows`` and ``j = k // rows``.
        """
        rows = self._rows
        if rows == 0:
            return Matrix(0, self._cols)
        return Matrix(rows, self._cols,
                      [f(k % rows, k // rows, v) for k, v in enumerate(self._data)])

    def filter(self, predicate: Callable[[Any], bool]) -> List[Any]:
        """Matching values in linear order; positions are discarded."""
        return [v for v in self._data if predicate(v)]

    def to_indexed(self) -> List[Tuple[Tuple[int, int], Any]]:
        """``((i, j), value)`` for every cell, in linear order."""
        return list(self.indexed_map(lambda i, j, v: ((i, j), v)))

    # --- Conversion -------------------------------------------------------

    def to_nested(self) -> List[List[Any]]:
        """List of columns; the inverse of ``from_nested``."""
        return [self.get_column(j) for j in range(self._cols)]

    def to_array(self, dtype=None) -> np.ndarray:
        """
        2-D ``(rows, cols)`` copy of the contents.

        Parameters
        ----------
        dtype : data-type, optional
            Cast target (e.g. ``float``); object dtype when omitted.
        """
        A = self._data.reshape((self._rows, self._cols), order="F")
        return A.astype(dtype) if dtype is not None else A.copy()

    # --- Python protocol --------------------------------------------------

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data.tolist())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return all(_same(a, b) for a, b in zip(self._data, other._data))

    def __repr__(self) -> str:
        return f"Matrix({self._rows}, {self._cols}, {self._data.tolist()!r})"


def _same(a, b) -> bool:
    # Array elements compare element-wise; collapse that to one answer.
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return bool(np.array_equal(a, b))
    return bool(a == b)
