"""
Figure isolation by color.

Splits a flat-color image into one figure per non-background color. The
background is the color of the top-left pixel.
"""

import numpy as np

from figshape.models import Figure, generate_figure_id
from figshape.tracer import get_tracer, trace


def background_color(img):
    """Color of pixel (0, 0), taken as the image background."""
    return _as_color(img[0, 0])


def _as_color(value):
    if np.ndim(value) == 0:
        return (int(value),)
    return tuple(int(v) for v in value)


def find_figure_colors(img, background=None):
    """
    List distinct non-background colors in order of first appearance.

    Scan order is row-major, so the figure nearest the top comes first.
    """
    if background is None:
        background = background_color(img)

    channels = 1 if img.ndim == 2 else img.shape[2]
    pixels = img.reshape(-1, channels)
    colors, first_index = np.unique(pixels, axis=0, return_index=True)

    ordered = [_as_color(colors[i]) for i in np.argsort(first_index)]
    return [c for c in ordered if c != background]


def filter_figure(img, color, background):
    """
    Copy img, replacing every pixel not equal to color with background.
    """
    if img.ndim == 2:
        keep = img == color[0]
    else:
        keep = np.all(img == np.asarray(color, dtype=img.dtype), axis=-1)

    filtered = np.empty_like(img)
    filtered[...] = np.asarray(background, dtype=img.dtype) if img.ndim == 3 else background[0]
    filtered[keep] = img[keep]
    return filtered


@trace(label="isolate_figures")
def isolate_figures(img):
    """
    Partition an image into figures, one per distinct non-background color.

    Returns a list of Figure objects in first-appearance order.
    """
    tracer = get_tracer()

    background = background_color(img)
    colors = find_figure_colors(img, background)

    figures = []
    for color in colors:
        mask = filter_figure(img, color, background)
        figures.append(Figure(
            figure_id=generate_figure_id(color),
            color=color,
            background=background,
            mask=mask,
        ))

    tracer.event(f"Isolated {len(figures)} figures", background=background)

    return figures
