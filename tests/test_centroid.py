"""Tests for centroid estimation."""

import numpy as np
import pytest


class TestEstimateCentroid:
    """Tests for the estimate_centroid function."""

    def test_square_centroid(self, square_image, make_figure):
        """A square's centroid is its geometric center."""
        from figshape.signal.centroid import estimate_centroid

        assert estimate_centroid(make_figure(square_image)) == (100, 100)

    def test_disk_centroid(self, disk_image, make_figure):
        """A disk's centroid is its center."""
        from figshape.signal.centroid import estimate_centroid

        assert estimate_centroid(make_figure(disk_image)) == (100, 100)

    def test_centroid_truncates(self):
        """The mean is truncated to integers, not rounded."""
        from figshape.models import Figure
        from figshape.signal.centroid import estimate_centroid

        mask = np.full((10, 10), 255, dtype=np.uint8)
        mask[2, 3] = 0
        mask[2, 4] = 0
        mask[3, 4] = 0
        figure = Figure(figure_id="f", color=(0,), background=(255,), mask=mask)

        # mean x = 11 / 3, mean y = 7 / 3
        assert estimate_centroid(figure) == (3, 2)

    def test_empty_figure_raises(self):
        """A mask without the figure color has no centroid."""
        from figshape.errors import EmptyFigure
        from figshape.models import FailureReason, Figure
        from figshape.signal.centroid import estimate_centroid

        mask = np.full((20, 20, 3), 255, dtype=np.uint8)
        figure = Figure(figure_id="f", color=(0, 0, 0), background=(255, 255, 255), mask=mask)

        with pytest.raises(EmptyFigure) as excinfo:
            estimate_centroid(figure)

        assert excinfo.value.reason == FailureReason.EMPTY_FIGURE
        assert excinfo.value.figure_id == "f"
