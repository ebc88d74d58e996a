"""
Shape inference from a figure's smoothed radial signal.

A circle keeps a nearly constant distance to its centroid. Any other figure
is named by counting humps in the signal, one per corner.
"""

from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from figshape.errors import ClassificationError, EmptySignal
from figshape.models import ClassificationResult, ShapeCategory
from figshape.signal.centroid import estimate_centroid
from figshape.signal.ray_cast import cast_rays
from figshape.signal.smoothing import rotate_to_minimum, smooth_signal, window_for_width
from figshape.tracer import get_tracer, trace

# Centroid, ray lengths, smoothed ray lengths and smoothing half-width
RadialSignal = namedtuple("RadialSignal", ["centroid", "raw", "smoothed", "window"])


def signal_spread(smoothed):
    """Difference between the largest and smallest sample."""
    ordered = np.sort(smoothed)
    return int(ordered[-1] - ordered[0])


def is_circle(smoothed, threshold=8):
    """True when the smoothed signal varies by less than threshold."""
    return signal_spread(smoothed) < threshold


def count_peaks(smoothed):
    """
    Count local maxima at or above the signal's mean.

    A peak is an ascending run followed by a drop; a plateau on top counts
    once, at its last sample. A signal still rising at its end counts one
    more peak.
    """
    values = [int(v) for v in smoothed]
    if not values:
        return 0

    baseline = sum(values) // len(values)
    peaks = 0
    ascending = False

    for i in range(1, len(values) - 1):
        last_delta = values[i] - values[i - 1]
        next_delta = values[i + 1] - values[i]

        if last_delta > 0:
            ascending = True
        elif last_delta < 0:
            ascending = False

        if values[i] < baseline:
            continue

        if (last_delta > 0 and next_delta < 0) or (last_delta == 0 and next_delta < 0 and ascending):
            peaks += 1
            ascending = False

    if ascending:
        peaks += 1

    return peaks


def category_for_peaks(peak_count, triangle_max_peaks=3, quadrilateral_max_peaks=5):
    """Map a peak count to a shape category."""
    if peak_count <= triangle_max_peaks:
        return ShapeCategory.TRIANGLE
    if peak_count <= quadrilateral_max_peaks:
        return ShapeCategory.QUADRILATERAL
    return ShapeCategory.OTHER


def build_smoothed_signal(figure, config):
    """
    Run centroid, ray casting and smoothing for one figure.

    Returns a RadialSignal. Its raw signal keeps the ray order starting at
    config.ray.start_angle; the smoothed signal starts at the raw signal's
    lowest window when config.smoothing.start_at_minimum is set.
    Raises ClassificationError subclasses on degenerate input.
    """
    centroid = estimate_centroid(figure)

    raw = cast_rays(
        figure,
        centroid,
        start_angle=config.ray.start_angle,
        end_angle=config.ray.end_angle,
        magnitude=config.ray.ray_magnitude,
        max_steps=config.ray.max_ray_steps,
    )

    window = window_for_width(
        figure.width,
        small_window=config.smoothing.small_window,
        large_window=config.smoothing.large_window,
        width_threshold=config.smoothing.width_threshold,
    )
    aligned = rotate_to_minimum(raw, window) if config.smoothing.start_at_minimum else raw
    smoothed = smooth_signal(aligned, window, mode=config.smoothing.mode)

    if len(smoothed) == 0:
        raise EmptySignal(
            f"Smoothing window {window} leaves no samples of {len(raw)}",
            figure_id=figure.figure_id,
        )

    return RadialSignal(centroid, raw, smoothed, window)


@trace(label="analyze_figure", arg_names=["figure"])
def analyze_figure(figure, config):
    """
    Classify one figure and keep the signals behind the decision.

    Returns (ClassificationResult, RadialSignal). The signal is None when the
    figure failed. Never raises for degenerate figures: a ClassificationError
    becomes a result with category UNASSIGNED and the failure reason set.
    """
    tracer = get_tracer()

    base = {
        "figure_id": figure.figure_id,
        "color": list(figure.color),
        "color_hex": figure.color_hex,
    }

    try:
        signal = build_smoothed_signal(figure, config)
    except ClassificationError as e:
        tracer.event(f"Figure {figure.color_hex} not classified: {e}", level="WARN")
        return ClassificationResult(failure=e.reason, message=str(e), **base), None

    smoothed = signal.smoothed
    spread = signal_spread(smoothed)
    details = {"centroid": list(signal.centroid), "window": signal.window, "spread": spread}

    if is_circle(smoothed, config.classifier.circle_spread_threshold):
        tracer.event(f"Figure {figure.color_hex}: circle (spread={spread})")
        return ClassificationResult(category=ShapeCategory.CIRCLE, **base, **details), signal

    peaks = count_peaks(smoothed)
    category = category_for_peaks(
        peaks,
        triangle_max_peaks=config.classifier.triangle_max_peaks,
        quadrilateral_max_peaks=config.classifier.quadrilateral_max_peaks,
    )
    tracer.event(f"Figure {figure.color_hex}: {category.value} (peaks={peaks}, spread={spread})")

    return ClassificationResult(category=category, peak_count=peaks, **base, **details), signal


def classify_figure(figure, config):
    """Classify one figure. See analyze_figure."""
    result, _ = analyze_figure(figure, config)
    return result


@trace(label="analyze_figures")
def analyze_figures(figures, config):
    """
    Analyze a batch of figures.

    Figures are independent, so with config.batch.workers > 1 they run in a
    thread pool. Returns (result, signal) pairs in input order.
    """
    tracer = get_tracer()

    max_workers = min(config.batch.workers, len(figures))

    if max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            analyses = list(executor.map(lambda f: analyze_figure(f, config), figures))
    else:
        analyses = [analyze_figure(f, config) for f in figures]

    failed = sum(1 for result, _ in analyses if not result.succeeded)
    tracer.event(f"Classified {len(analyses)} figures, {failed} failed")

    return analyses


def classify_figures(figures, config):
    """Classify a batch of figures, results in input order."""
    return [result for result, _ in analyze_figures(figures, config)]
