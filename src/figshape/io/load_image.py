"""
Image loading utilities for figshape.

Inputs are flat-color raster files; decoding is left to OpenCV.
"""

import os

import cv2

from figshape.tracer import get_tracer, trace

SUPPORTED_EXTENSIONS = [".png", ".bmp", ".gif", ".tiff", ".tif", ".jpg", ".jpeg"]


@trace(label="load_image", arg_names=["path"])
def load_image(path):
    """
    Load an image from disk.

    Returns a tuple of (image, metadata) where:
    - image: RGB numpy array (H, W, 3), uint8
    - metadata: dict with width, height, source_path

    Raises FileNotFoundError if path does not exist.
    Raises ValueError if image cannot be decoded.
    """
    tracer = get_tracer()

    if not os.path.exists(path):
        raise FileNotFoundError(f"Image not found: {path}")

    img_bgr = cv2.imread(path, cv2.IMREAD_COLOR)

    if img_bgr is None:
        raise ValueError(f"Failed to load image: {path}")

    img_rgb = cv2.cvtColor(img_bgr, cv2.COLOR_BGR2RGB)
    height, width = img_rgb.shape[:2]

    tracer.event(f"Loaded image: {width}x{height}")

    metadata = {
        "width": width,
        "height": height,
        "source_path": os.path.abspath(path),
    }

    return img_rgb, metadata


def validate_image_inputs(paths):
    """
    Validate that all input paths exist and are readable images.

    Returns a list of error messages (empty if all valid).
    """
    errors = []

    for path in paths:
        if not os.path.exists(path):
            errors.append(f"File not found: {path}")
            continue

        ext = os.path.splitext(path)[1].lower()
        if ext not in SUPPORTED_EXTENSIONS:
            errors.append(f"Unsupported image format: {path}")
            continue

        if cv2.imread(path, cv2.IMREAD_COLOR) is None:
            errors.append(f"Cannot read image: {path}")

    return errors
