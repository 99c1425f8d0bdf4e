"""Preview module for rendered output.

Components:
    export: 8-bit conversion, PNG export and reload via Pillow, and RMSE
        comparison against a reference render

Example:
    >>> from whitted.core.renderer import render
    >>> from whitted.preview import save_png
    >>> from whitted.scene import create_default_scene
    >>>
    >>> image = render(create_default_scene(), seed=1)
    >>> save_png(image, "billiards.png")
"""

from whitted.preview.export import (
    compute_rmse,
    image_to_uint8,
    load_png,
    save_png,
)

__all__ = [
    "save_png",
    "image_to_uint8",
    "load_png",
    "compute_rmse",
]
