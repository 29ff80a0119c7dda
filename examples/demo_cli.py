"""
===========================================================
Flat Matrix Demo (CLI version)
===========================================================

Usage
-----
    python3 examples/demo_cli.py 1,2,3 4,5,6

Each argument is one COLUMN (comma-separated values). The demo prints the
shape, the rows, a doubled copy, the coordinate sum i+j of every cell and
the matrix stacked under itself.

Exit status is 1 when the columns have different lengths.
"""

# --- Imports --------------------------------------------------------------

import sys
from flat_matrix import Matrix, ShapeMismatch, expect


# --- Helpers --------------------------------------------------------------

def parse_column(text: str) -> list[float]:
    return [float(v) for v in text.split(",") if v.strip()]


def print_rows(label: str, m: Matrix):
    print(f"{label} ({m.height}x{m.width}):")
    for i in range(m.height):
        print("  " + "  ".join(f"{v:g}" for v in m.get_row(i)))


# --- Main routine ---------------------------------------------------------

def main(argv=None):
    argv = argv or sys.argv[1:]
    if not argv:
        print("Usage: demo_cli.py col1 [col2 ...]   (values comma-separated)")
        return 1

    m = Matrix.from_nested(parse_column(a) for a in argv)
    if isinstance(m, ShapeMismatch):
        print(f"[error] {m}")
        return 1

    print_rows("input", m)
    print_rows("doubled", m.map(lambda v: 2 * v))
    print_rows("i+j", m.indexed_map(lambda i, j, v: i + j))
    print_rows("stacked", expect(m.concat_vertical(m)))
    return 0


# --- Entrypoint -----------------------------------------------------------

if __name__ == "__main__":
    raise SystemExit(main())
