"""
===========================================================
flat_matrix.buffer — flat storage helpers (NumPy object arrays)
===========================================================

Every matrix owns one read-only 1-D ``numpy`` array of ``dtype=object``.
The helpers below are the only places where such arrays are allocated, so
the "one buffer, one owner" rule holds: each helper returns a fresh array
and locks it before handing it out.
"""

# --- Imports --------------------------------------------------------------

import copy
from typing import Any, Iterable

import numpy as np


# --- Allocation -----------------------------------------------------------

def _lock(buf: np.ndarray) -> np.ndarray:
    buf.flags.writeable = False
    return buf


def from_values(values: Iterable[Any]) -> np.ndarray:
    """
    Copy ``values`` into a new read-only object buffer.

    Cells are assigned one by one: a bulk ``buf[:] = values`` would let
    NumPy broadcast sequence-valued elements into extra dimensions.
    """
    values = list(values)
    buf = np.empty(len(values), dtype=object)
    for k, v in enumerate(values):
        buf[k] = v
    return _lock(buf)


def filled(size: int, value: Any) -> np.ndarray:
    """Buffer of ``size`` independent deep copies of ``value``."""
    return from_values(copy.deepcopy(value) for _ in range(size))


# --- Structural helpers ---------------------------------------------------

def replace(buf: np.ndarray, offset: int, value: Any) -> np.ndarray:
    """Copy of ``buf`` with slot ``offset`` set to ``value``."""
    out = buf.copy()
    out[offset] = value
    return _lock(out)


def concat(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """``a`` followed by ``b`` in a new buffer."""
    return _lock(np.concatenate([a, b]))


def interleave_columns(a: np.ndarray, a_height: int,
                       b: np.ndarray, b_height: int, width: int) -> np.ndarray:
    """
    Stack two column-major buffers of equal ``width`` column by column.

    Column ``j`` of the result is column ``j`` of ``a`` followed by column
    ``j`` of ``b``.
    """
    # Row-major reshape of a column-major buffer: one array row per column.
    A = a.reshape((width, a_height))
    B = b.reshape((width, b_height))
    out = np.concatenate([A, B], axis=1).reshape(-1)
    # reshape(-1) may return a view of the concatenation; own the memory.
    return _lock(out.copy())
