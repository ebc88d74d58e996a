"""
Radial signal construction by ray casting.

One ray per integer degree is marched outward from the figure centroid until
it leaves the figure. The sequence of ray lengths is the figure's radial
signal: nearly constant for a circle, with one hump per corner for polygons.

Angle convention: ray `d` travels along (-cos d, -sin d) in image
coordinates (x right, y down). Degree 90 therefore points up, and increasing
degrees sweep clockwise on screen.

Ray length is Euclidean: each scaled direction is split into `magnitude`
one-pixel sub-steps rather than into as many steps as its largest axis delta,
which would measure Chebyshev distance and give a disk four humps.
"""

import math

import numpy as np

from figshape.errors import MalformedAngularRange, UnboundedRay
from figshape.tracer import get_tracer, trace

FULL_REVOLUTION = 360


def ray_direction(degree, magnitude):
    """
    Direction vector for a ray, scaled to magnitude.

    Rounded to 9 decimals so axis-aligned rays get exact zero components;
    a residual 1e-16 would otherwise be pushed a whole pixel by ceiling.
    """
    rad = math.radians(degree)
    dx = round(-math.cos(rad) * magnitude, 9)
    dy = round(-math.sin(rad) * magnitude, 9)
    return dx, dy


def ray_increment(degree, magnitude):
    """
    Per-step sub-pixel increment along a ray.

    The scaled direction is split into `magnitude` sub-steps, so each one
    covers one pixel of travel and never more than one pixel per axis.
    """
    dx, dy = ray_direction(degree, magnitude)
    return dx / magnitude, dy / magnitude


def default_max_steps(width, height):
    """Step cap for a mask: its diagonal, rounded up, plus one."""
    return int(math.ceil(math.hypot(width, height))) + 1


def march_ray(inside, centroid, increment, max_steps):
    """
    March one ray and return its length in steps.

    inside is a boolean array, True on figure pixels. Coordinates are rounded
    up to the next pixel at every step. The length starts at 1 and grows by
    one for every sampled pixel still inside the figure. Leaving the array
    counts as reaching the boundary.

    Returns None when no boundary is met within max_steps.
    """
    height, width = inside.shape
    cx, cy = centroid
    sx, sy = increment

    ks = np.arange(1, max_steps + 1)
    xs = np.ceil(cx + ks * sx).astype(np.int64)
    ys = np.ceil(cy + ks * sy).astype(np.int64)

    in_bounds = (xs >= 0) & (xs < width) & (ys >= 0) & (ys < height)
    hit = ~in_bounds
    hit[in_bounds] = ~inside[ys[in_bounds], xs[in_bounds]]

    if not hit.any():
        return None
    return int(np.argmax(hit)) + 1


def check_angular_range(start_angle, end_angle):
    """Raise MalformedAngularRange unless the span is one full revolution."""
    if end_angle - start_angle != FULL_REVOLUTION:
        raise MalformedAngularRange(
            f"Angular range [{start_angle}, {end_angle}) spans "
            f"{end_angle - start_angle} degrees, expected {FULL_REVOLUTION}"
        )


@trace(label="cast_rays", arg_names=["figure", "centroid"])
def cast_rays(figure, centroid, start_angle=90, end_angle=450, magnitude=4, max_steps=None):
    """
    Build the radial signal of a figure.

    Args:
        figure: Figure to sample
        centroid: (x, y) origin of every ray
        start_angle: first degree sampled (inclusive)
        end_angle: last degree sampled (exclusive), start_angle + 360
        magnitude: length the direction vector is scaled to
        max_steps: per-ray step cap, defaults to the mask diagonal

    Returns:
        int numpy array of length 360, index i holding the ray length at
        degree start_angle + i

    Raises MalformedAngularRange for any span other than 360 degrees and
    UnboundedRay when a ray exceeds max_steps.
    """
    tracer = get_tracer()

    check_angular_range(start_angle, end_angle)

    inside = figure.matches()
    if max_steps is None:
        max_steps = default_max_steps(figure.width, figure.height)

    signal = np.zeros(end_angle - start_angle, dtype=np.int64)

    for index, degree in enumerate(range(start_angle, end_angle)):
        length = march_ray(inside, centroid, ray_increment(degree, magnitude), max_steps)
        if length is None:
            raise UnboundedRay(
                f"Ray at {degree} degrees found no boundary within {max_steps} steps",
                figure_id=figure.figure_id,
            )
        signal[index] = length

    tracer.event(f"Ray lengths: min={signal.min()} max={signal.max()}", level="DEBUG")

    return signal


def ray_endpoints(centroid, signal, start_angle=90, magnitude=4, stride=1):
    """
    Pixel where each sampled ray stopped, for overlays.

    Returns a list of [x, y] points, one per `stride` rays.
    """
    cx, cy = centroid
    points = []
    for index in range(0, len(signal), stride):
        sx, sy = ray_increment(start_angle + index, magnitude)
        length = int(signal[index])
        points.append([int(math.ceil(cx + length * sx)), int(math.ceil(cy + length * sy))])
    return points
