"""
Pydantic data models for figshape.

Figures are immutable; classification produces a separate frozen result per
figure so concurrent passes never share mutable state. Content-based IDs keep
reports deterministic.
"""

import hashlib
from collections import Counter
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


class ShapeCategory(str, Enum):
    """Outline categories a figure can be assigned."""
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    QUADRILATERAL = "quadrilateral"
    OTHER = "other"
    UNASSIGNED = "unassigned"

    @property
    def code(self):
        """One-letter code used in text summaries."""
        return _CATEGORY_CODES[self]


_CATEGORY_CODES = {
    ShapeCategory.CIRCLE: "C",
    ShapeCategory.TRIANGLE: "T",
    ShapeCategory.QUADRILATERAL: "Q",
    ShapeCategory.OTHER: "O",
    ShapeCategory.UNASSIGNED: "U",
}


class FailureReason(str, Enum):
    """Why a figure could not be classified."""
    EMPTY_FIGURE = "empty_figure"
    MALFORMED_ANGULAR_RANGE = "malformed_angular_range"
    UNBOUNDED_RAY = "unbounded_ray"
    EMPTY_SIGNAL = "empty_signal"


def color_to_hex(color):
    """Format an RGB (or gray) color as upper-case RRGGBB."""
    if isinstance(color, (int, np.integer)):
        color = (color,)
    if len(color) == 1:
        color = tuple(color) * 3
    return "".join(f"{int(c):02X}" for c in color[:3])


class Figure(BaseModel):
    """
    One isolated figure: a raster mask and the color that marks its pixels.

    Every mask pixel is either `color` or `background`. The mask is excluded
    from serialization.
    """
    figure_id: str
    color: Tuple[int, ...]
    background: Tuple[int, ...]
    mask: np.ndarray = Field(exclude=True, repr=False)

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    @property
    def width(self):
        return self.mask.shape[1]

    @property
    def height(self):
        return self.mask.shape[0]

    @property
    def color_hex(self):
        return color_to_hex(self.color)

    def pixel(self, x, y):
        """Return the color at column x, row y as a tuple."""
        value = self.mask[y, x]
        if np.ndim(value) == 0:
            return (int(value),)
        return tuple(int(v) for v in value)

    def matches(self):
        """Boolean array, True where the mask holds the figure color."""
        if self.mask.ndim == 2:
            return self.mask == self.color[0]
        return np.all(self.mask == np.asarray(self.color, dtype=self.mask.dtype), axis=-1)


class ClassificationResult(BaseModel):
    """Outcome of classifying one figure. Written once, never updated."""
    figure_id: str
    color: List[int]
    color_hex: str
    category: ShapeCategory = ShapeCategory.UNASSIGNED
    failure: Optional[FailureReason] = None
    message: str = ""
    centroid: Optional[List[int]] = None
    window: Optional[int] = None
    spread: Optional[int] = None
    peak_count: Optional[int] = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def succeeded(self):
        return self.failure is None

    def __str__(self):
        return f"{self.color_hex} = {self.category.code}"


class ImageReport(BaseModel):
    """Results for every figure found in one input image."""
    image_id: str
    source_path: str = ""
    width: int
    height: int
    background: List[int] = Field(default_factory=list)
    results: List[ClassificationResult] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class ClassificationReport(BaseModel):
    """Root report covering all processed images."""
    report_id: str
    created_at: str = Field(default_factory=lambda: datetime.now().isoformat())
    images: List[ImageReport] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def results(self):
        """All figure results, in image order."""
        return [r for image in self.images for r in image.results]

    @property
    def failure_count(self):
        return sum(1 for r in self.results if not r.succeeded)

    @property
    def has_failures(self):
        return self.failure_count > 0

    def category_counts(self):
        """Count of results per category value."""
        return dict(Counter(r.category.value for r in self.results))


def generate_figure_id(color):
    """
    Generate deterministic figure ID from its color.

    Colors are unique within an image, so the color alone identifies a figure.
    """
    data = ",".join(str(int(c)) for c in color)
    h = hashlib.sha256(data.encode()).hexdigest()[:12]
    return f"fig_{h}"


def generate_report_id(input_paths):
    """Generate deterministic report ID from input file paths."""
    data = ":".join(sorted(input_paths))
    h = hashlib.sha256(data.encode()).hexdigest()[:16]
    return f"report_{h}"


def generate_image_id(source_path, index):
    """Generate deterministic image ID from source path and index."""
    data = f"{source_path}:{index}"
    h = hashlib.sha256(data.encode()).hexdigest()[:12]
    return f"image_{h}"
