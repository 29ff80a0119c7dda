import matplotlib.pyplot as plt
import numpy as np

from .core import Matrix


def plot_matrix(m: Matrix, title="Matrix", ax=None, cmap="viridis", show=True):
    """
    Draw a numeric matrix as a heat map (row 0 at the top).

    Returns the Axes so callers can keep decorating or save the figure.
    """
    A = m.to_array(dtype=float)
    if ax is None:
        _, ax = plt.subplots(figsize=(5, 5))
    im = ax.imshow(A, cmap=cmap, origin="upper", aspect="equal")
    ax.figure.colorbar(im, ax=ax)
    ax.set_title(f"{title} ({m.height}x{m.width})")
    ax.set_xlabel("column j")
    ax.set_ylabel("row i")
    ax.set_xticks(np.arange(m.width))
    ax.set_yticks(np.arange(m.height))
    if show:
        plt.tight_layout()
        plt.show()
    return ax
