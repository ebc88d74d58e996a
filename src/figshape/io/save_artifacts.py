"""
Artifact saving utilities for figshape.

Handles writing debug images, JSON files and ray overlays.
"""

import json
import os

import cv2
import numpy as np

from figshape.tracer import get_tracer


def ensure_dir(path):
    """Create directory if it does not exist."""
    os.makedirs(path, exist_ok=True)


def save_image(img, path, max_edge=None):
    """
    Save an RGB or single-channel image to disk.

    Optionally downscales to max_edge while preserving aspect ratio.
    """
    tracer = get_tracer()

    if max_edge and max(img.shape[:2]) > max_edge:
        scale = max_edge / max(img.shape[:2])
        new_size = (int(img.shape[1] * scale), int(img.shape[0] * scale))
        img = cv2.resize(img, new_size, interpolation=cv2.INTER_NEAREST)

    if img.ndim == 3 and img.shape[2] == 3:
        img = cv2.cvtColor(img, cv2.COLOR_RGB2BGR)

    ensure_dir(os.path.dirname(path))
    cv2.imwrite(path, img)
    tracer.event(f"Saved image: {path}", level="DEBUG")


def save_json(data, path, indent=2):
    """Save a dictionary or Pydantic model to JSON."""
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)

    tracer.event(f"Saved JSON: {path}", level="DEBUG")


def draw_ray_overlay(mask, centroid, endpoints, ray_color=(255, 0, 0), centroid_color=(0, 160, 0)):
    """
    Draw rays from the centroid to their stopping points over a mask.

    Returns a new RGB image; the mask is not modified.
    """
    if mask.ndim == 2:
        overlay = cv2.cvtColor(mask, cv2.COLOR_GRAY2RGB)
    else:
        overlay = mask.copy()

    center = (int(centroid[0]), int(centroid[1]))
    for x, y in endpoints:
        cv2.line(overlay, center, (int(x), int(y)), ray_color, 1)
        cv2.circle(overlay, (int(x), int(y)), 2, ray_color, -1)

    cv2.circle(overlay, center, 3, centroid_color, -1)
    return overlay


class DebugArtifactWriter:
    """
    Manage debug artifact writing for a single image.

    Artifacts land under <out_dir>/debug/<image_id>/<figure_id>/.
    """

    def __init__(self, out_dir, image_id, enabled=True, max_edge=1600):
        self.out_dir = out_dir
        self.image_id = image_id
        self.enabled = enabled
        self.max_edge = max_edge

    def get_figure_dir(self, figure_id):
        path = os.path.join(self.out_dir, "debug", self.image_id, figure_id)
        ensure_dir(path)
        return path

    def save_image(self, img, figure_id, filename):
        """Save an image artifact."""
        if not self.enabled:
            return
        save_image(img, os.path.join(self.get_figure_dir(figure_id), filename), max_edge=self.max_edge)

    def save_json(self, data, figure_id, filename):
        """Save a JSON artifact."""
        if not self.enabled:
            return
        save_json(data, os.path.join(self.get_figure_dir(figure_id), filename))

    def save_signal(self, figure_id, raw, smoothed, window):
        """Save raw and smoothed radial signals as JSON."""
        self.save_json(
            {
                "window": int(window),
                "raw": np.asarray(raw).tolist(),
                "smoothed": np.asarray(smoothed).tolist(),
            },
            figure_id,
            "signal.json",
        )
