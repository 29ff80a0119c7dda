"""
===========================================================
flat_matrix — dense 2-D matrices on a single flat buffer
===========================================================

A small NumPy-backed container for rectangular data stored in one
column-major buffer, with size-checked construction and functional
transformations.

Main entry points
-----------------
- Matrix.empty(), Matrix.repeat(rows, cols, value)
- Matrix.from_nested(columns)   -> Matrix | ShapeMismatch
- m.get(i, j) / m.set(i, j, v) / m.update(i, j, f)
- m.get_row(i) / m.get_column(j)
- m.concat_horizontal(o) / m.concat_vertical(o)
- m.map(f) / m.map2(f, o) / m.indexed_map(f) / m.filter(p)
- expect(result)                -> Matrix, or raises ShapeError

Typical workflow
----------------
    from flat_matrix import Matrix, ShapeMismatch, expect
    m = Matrix.from_nested([[1, 2], [3, 4]])   # two columns of height 2
    if isinstance(m, ShapeMismatch):
        ...
    doubled = m.map(lambda v: 2 * v)
    wide = expect(m.concat_horizontal(doubled))
"""

# --- Public Imports -------------------------------------------------------

import logging

from .core import Matrix
from .errors import ShapeError, ShapeMismatch, expect

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Matrix",
    "ShapeMismatch",
    "ShapeError",
    "expect",
]
