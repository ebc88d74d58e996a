"""Pytest fixtures for figshape tests."""

import os
import tempfile

import cv2
import numpy as np
import pytest

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


def blank_image(width=200, height=200, color=WHITE):
    """White RGB canvas."""
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:] = color
    return img


def equilateral_triangle(center, circumradius):
    """Vertices of an upward-pointing equilateral triangle, as int32 points."""
    cx, cy = center
    half_base = circumradius * np.sqrt(3) / 2
    return np.array([
        [cx, cy - circumradius],
        [cx + half_base, cy + circumradius / 2],
        [cx - half_base, cy + circumradius / 2],
    ]).round().astype(np.int32)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def disk_image():
    """200x200 white image with a black filled disk of radius 50 at (100, 100)."""
    img = blank_image()
    cv2.circle(img, (100, 100), 50, BLACK, -1)
    return img


@pytest.fixture
def triangle_image():
    """200x200 white image with a black equilateral triangle centered at (100, 110)."""
    img = blank_image()
    cv2.fillPoly(img, [equilateral_triangle((100, 110), 70)], BLACK)
    return img


@pytest.fixture
def square_image():
    """200x200 white image with a black filled square from (50, 50) to (150, 150)."""
    img = blank_image()
    cv2.rectangle(img, (50, 50), (150, 150), BLACK, -1)
    return img


@pytest.fixture
def multi_figure_image():
    """400x200 white image with a red disk, a green square and a blue triangle."""
    img = blank_image(width=400)
    cv2.circle(img, (70, 100), 45, RED, -1)
    cv2.rectangle(img, (150, 55), (240, 145), GREEN, -1)
    cv2.fillPoly(img, [equilateral_triangle((320, 110), 65)], BLUE)
    return img


@pytest.fixture
def default_config():
    """Create default pipeline configuration."""
    from figshape.config import PipelineConfig
    return PipelineConfig()


@pytest.fixture
def make_figure():
    """Factory turning a single-figure image into a Figure."""
    from figshape.isolate.color_filter import isolate_figures

    def _make(img):
        figures = isolate_figures(img)
        assert len(figures) == 1
        return figures[0]

    return _make


@pytest.fixture
def write_image(temp_dir):
    """Factory writing an RGB image to a PNG in the temp dir."""
    def _write(img, name="input.png"):
        path = os.path.join(temp_dir, name)
        cv2.imwrite(path, cv2.cvtColor(img, cv2.COLOR_RGB2BGR))
        return path

    return _write


@pytest.fixture
def tracer_off():
    """Make sure the global tracer is disabled after the test."""
    yield
    from figshape.tracer import configure_tracer
    configure_tracer(enabled=False)
