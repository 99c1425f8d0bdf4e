"""Image export utilities for rendered images.

Rendered buffers hold unclamped float RGB values on a 0-255 scale. Export
clips them to [0, 255] and truncates to 8 bits; no tone mapping or gamma
is applied.

Supported formats:
    - PNG (8-bit RGB via Pillow), written and read back for reference checks

Example:
    >>> from whitted.core.renderer import render
    >>> from whitted.preview.export import save_png
    >>>
    >>> image = render(scene, seed=3)
    >>> save_png(image, "output.png")
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a float RGB image to uint8 for display/export.

    Args:
        image: Image array of shape (H, W, 3) with values on a 0-255 scale.

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    clipped = np.clip(np.nan_to_num(image, nan=0.0), 0.0, 255.0)
    return clipped.astype(np.uint8)


def save_png(image: npt.NDArray[np.floating], filepath: str | Path) -> Path:
    """Save a rendered image as a PNG file.

    Args:
        image: Image array of shape (H, W, 3) with values on a 0-255 scale.
        filepath: Output file path (should end in .png).

    Returns:
        The path written to.

    Raises:
        ValueError: If the image is not an (H, W, 3) array.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    output = Path(filepath)
    PILImage.fromarray(image_to_uint8(image)).save(output)
    logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], output)
    return output


def load_png(filepath: str | Path) -> npt.NDArray[np.float64]:
    """Read an 8-bit PNG back as a float64 (H, W, 3) array on a 0-255 scale."""
    with PILImage.open(filepath) as png:
        return np.asarray(png.convert("RGB"), dtype=np.float64)


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Root mean squared difference between two images of the same shape.

    Used to compare a render against a saved reference; both images should
    be on the same scale (for example both passed through ``image_to_uint8``).

    Raises:
        ValueError: If the shapes differ.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    squared = np.square(np.subtract(image_a, image_b, dtype=np.float64))
    return math.sqrt(float(squared.mean()))
