"""
Centroid estimation for a figure mask.
"""

import numpy as np

from figshape.errors import EmptyFigure


def estimate_centroid(figure):
    """
    Mean (x, y) of all pixels holding the figure color, truncated to int.

    Raises EmptyFigure when no pixel matches; the centroid is undefined then.
    """
    ys, xs = np.nonzero(figure.matches())
    count = len(xs)

    if count == 0:
        raise EmptyFigure(
            f"Figure {figure.color_hex} has no pixels of its own color",
            figure_id=figure.figure_id,
        )

    return int(xs.sum()) // count, int(ys.sum()) // count
