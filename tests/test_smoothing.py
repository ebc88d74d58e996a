"""Tests for radial signal smoothing."""

import numpy as np
import pytest


class TestSmoothSignal:
    """Tests for the smooth_signal function."""

    def test_constant_signal_unchanged(self):
        """Smoothing a constant signal keeps its value."""
        from figshape.signal.smoothing import smooth_signal

        smoothed = smooth_signal(np.full(360, 42), 15)

        assert np.all(smoothed == 42)

    @pytest.mark.parametrize("half_width", [0, 1, 8, 15, 179])
    def test_truncated_length(self, half_width):
        """The first and last half_width samples are dropped."""
        from figshape.signal.smoothing import smooth_signal

        smoothed = smooth_signal(np.full(360, 7), half_width)

        assert len(smoothed) == 360 - 2 * half_width

    @pytest.mark.parametrize("half_width", [180, 200])
    def test_window_too_large_is_empty(self, half_width):
        """A window wider than the signal leaves nothing."""
        from figshape.signal.smoothing import smooth_signal

        assert len(smooth_signal(np.full(360, 7), half_width)) == 0

    def test_window_mean(self):
        """Each output is the mean of its 2w + 1 neighbors."""
        from figshape.signal.smoothing import smooth_signal

        smoothed = smooth_signal([0, 3, 6, 9, 12], 1)

        assert list(smoothed) == [3, 6, 9]

    def test_mean_is_truncated(self):
        """Fractional means are truncated toward zero."""
        from figshape.signal.smoothing import smooth_signal

        assert list(smooth_signal([1, 2, 2, 2, 2], 1)) == [1, 2, 2]

    def test_input_not_modified(self):
        """Smoothing is free of side effects."""
        from figshape.signal.smoothing import smooth_signal

        signal = np.arange(20)
        smooth_signal(signal, 2)

        assert np.array_equal(signal, np.arange(20))

    def test_circular_keeps_length(self):
        """Circular smoothing wraps the window instead of dropping samples."""
        from figshape.signal.smoothing import smooth_signal

        smoothed = smooth_signal(np.full(360, 9), 15, mode="circular")

        assert len(smoothed) == 360
        assert np.all(smoothed == 9)

    def test_circular_wraps_ends(self):
        """The first sample's window reaches back to the end of the signal."""
        from figshape.signal.smoothing import smooth_signal

        smoothed = smooth_signal([9, 0, 0, 0, 0, 0, 3], 1, mode="circular")

        assert smoothed[0] == 4  # (3 + 9 + 0) / 3
        assert smoothed[-1] == 4  # (0 + 3 + 9) / 3
        assert len(smoothed) == 7

    def test_unknown_mode(self):
        """Only the documented modes are accepted."""
        from figshape.signal.smoothing import smooth_signal

        with pytest.raises(ValueError):
            smooth_signal([1, 2, 3], 1, mode="gaussian")


class TestWindowForWidth:
    """Tests for the figure-size dependent window."""

    def test_small_figure(self):
        from figshape.signal.smoothing import window_for_width

        assert window_for_width(119) == 8

    def test_large_figure(self):
        from figshape.signal.smoothing import window_for_width

        assert window_for_width(120) == 15
        assert window_for_width(400) == 15


class TestRotateToMinimum:
    """Tests for aligning a cyclic signal to its lowest window."""

    def test_single_sample_window(self):
        from figshape.signal.smoothing import rotate_to_minimum

        assert list(rotate_to_minimum([5, 4, 1, 2, 3], 0)) == [1, 2, 3, 5, 4]

    def test_window_sums_wrap(self):
        """The lowest wrapped three-sample window is centered on 2."""
        from figshape.signal.smoothing import rotate_to_minimum

        # wrapped window sums: 12, 10, 7, 6, 10
        assert list(rotate_to_minimum([5, 4, 1, 2, 3], 1)) == [2, 3, 5, 4, 1]

    def test_keeps_samples(self):
        from figshape.signal.smoothing import rotate_to_minimum

        signal = np.array([7, 3, 9, 1, 4, 4, 8])
        rotated = rotate_to_minimum(signal, 2)

        assert sorted(rotated) == sorted(signal)
        assert np.array_equal(signal, [7, 3, 9, 1, 4, 4, 8])

    def test_window_longer_than_signal(self):
        from figshape.signal.smoothing import rotate_to_minimum

        assert len(rotate_to_minimum(np.arange(10), 180)) == 10

    def test_empty(self):
        from figshape.signal.smoothing import rotate_to_minimum

        assert len(rotate_to_minimum([], 8)) == 0

    def test_corner_at_start_is_not_split(self):
        """
        Truncation cuts the rise off a peak at the start of the signal, so it
        is not counted; after rotation every hump is interior.
        """
        from figshape.classify.shape_classifier import count_peaks
        from figshape.signal.smoothing import rotate_to_minimum, smooth_signal

        hump = [0, 2, 4, 6, 8, 10, 8, 6, 4, 2]
        signal = np.roll(np.array(hump * 4), 7)

        assert count_peaks(smooth_signal(signal, 2)) == 3
        assert count_peaks(smooth_signal(rotate_to_minimum(signal, 2), 2)) == 4
