"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole camera frame (basis, viewport, per-pixel directions)
        and the jittered antialiasing sample walk

Example:
    >>> from whitted.camera import setup_camera
    >>> from whitted.scene import Camera
    >>> frame = setup_camera(Camera(), width=320, height=450)
    >>> ray = frame.make_ray(*frame.pixel_offsets(160, 225))
"""

from .pinhole import (
    CameraFrame,
    get_camera_info,
    setup_camera,
)

__all__ = [
    "CameraFrame",
    "setup_camera",
    "get_camera_info",
]
