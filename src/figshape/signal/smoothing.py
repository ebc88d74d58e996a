"""
Sliding-window mean filter for radial signals.

Suppresses the one-pixel jitter that ray marching leaves on straight edges.
"""

import numpy as np

SMOOTHING_MODES = ("truncate", "circular")


def window_for_width(width, small_window=8, large_window=15, width_threshold=120):
    """Half-width of the smoothing window for a mask of the given width."""
    return small_window if width < width_threshold else large_window


def smooth_signal(signal, half_width, mode="truncate"):
    """
    Replace each sample by the mean of the 2 * half_width + 1 samples
    centered on it, truncated to int.

    In "truncate" mode the first and last half_width samples have no full
    window and are dropped, so the result has len(signal) - 2 * half_width
    samples (empty once half_width reaches half the signal). In "circular"
    mode the window wraps around and the length is unchanged.
    """
    if mode not in SMOOTHING_MODES:
        raise ValueError(f"Unknown smoothing mode: {mode}")

    signal = np.asarray(signal, dtype=np.int64)
    window = 2 * half_width + 1

    if mode == "circular":
        if len(signal) == 0:
            return signal.copy()
        indices = np.arange(-half_width, len(signal) + half_width) % len(signal)
        signal = signal[indices]

    if len(signal) < window:
        return np.zeros(0, dtype=np.int64)

    sums = np.convolve(signal, np.ones(window, dtype=np.int64), mode="valid")
    return sums // window


def rotate_to_minimum(signal, half_width):
    """
    Roll a cyclic signal so its lowest window is centered on index 0.

    Windows of 2 * half_width + 1 samples wrap around the end. The center of
    the one with the smallest sum moves to index 0, so a truncating smoothing
    pass drops samples from a valley instead of cutting a corner peak in two.
    """
    signal = np.asarray(signal, dtype=np.int64)
    if len(signal) == 0:
        return signal.copy()

    window = 2 * half_width + 1
    indices = np.arange(-half_width, len(signal) + half_width) % len(signal)
    sums = np.convolve(signal[indices], np.ones(window, dtype=np.int64), mode="valid")
    return np.roll(signal, -int(np.argmin(sums)))
