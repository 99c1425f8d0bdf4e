"""Pinhole camera model mapping pixels to primary ray directions.

The camera builds an orthonormal basis from the view parameters:

- forward: normalize(look_direction - position)
- right: normalize(forward x up)
- cam_up: normalize(right x forward)

A virtual viewport sits one unit in front of the eye. Its width follows
from the field of view, ``2 * tan(fov / 2)``, and its height from the image
aspect ratio. Pixel (0, 0) maps to the viewport's top-left corner and pixel
(width - 1, height - 1) to its bottom-right corner.

Antialiasing walks a jittered path inside the pixel: after sample ``i`` the
accumulated offsets move by ``(-1)^i * U[0, 1) * pixel_step`` along each
axis, so successive samples alternate direction and stay within about one
pixel step of the pixel corner.

Example:
    >>> from whitted.camera.pinhole import setup_camera
    >>> from whitted.scene.scene import Camera
    >>> frame = setup_camera(Camera(field_of_view=90.0), width=3, height=3)
    >>> frame.pixel_direction(1, 1)  # Center pixel looks straight ahead
    Vector3(x=0.0, y=0.0, z=1.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from whitted.core.ray import Ray
from whitted.core.vector import Vector3
from whitted.scene.scene import Camera

# =============================================================================
# Camera Frame
# =============================================================================


@dataclass(frozen=True)
class CameraFrame:
    """Precomputed camera basis and viewport geometry for one image size.

    Attributes:
        origin: Eye position; every primary ray starts here.
        forward: Unit view direction.
        right: Unit vector pointing right in the image plane.
        up: Unit vector pointing up in the image plane.
        viewport_width: Width of the viewport at unit distance.
        viewport_height: Height of the viewport at unit distance.
        top_left: Direction to the top-left corner of the viewport.
        pixel_width: Horizontal viewport step between adjacent pixels.
        pixel_height: Vertical viewport step between adjacent pixels.
        width: Image width in pixels.
        height: Image height in pixels.
    """

    origin: Vector3
    forward: Vector3
    right: Vector3
    up: Vector3
    viewport_width: float
    viewport_height: float
    top_left: Vector3
    pixel_width: float
    pixel_height: float
    width: int
    height: int

    def direction(self, inc_x: float, inc_y: float) -> Vector3:
        """Direction through the viewport at offsets from the top-left corner.

        Args:
            inc_x: Offset to the right, in viewport units.
            inc_y: Offset downward, in viewport units.

        Returns:
            The (unnormalized) world-space direction.
        """
        return self.top_left + self.right * inc_x - self.up * inc_y

    def pixel_offsets(self, x: int, y: int) -> tuple[float, float]:
        """Viewport offsets of pixel (x, y)'s corner sample."""
        return x * self.pixel_width, y * self.pixel_height

    def pixel_direction(self, x: int, y: int) -> Vector3:
        """Direction through pixel (x, y), without jitter."""
        return self.direction(*self.pixel_offsets(x, y))

    def sample_offsets(
        self,
        x: int,
        y: int,
        sample_count: int,
        rng: np.random.Generator,
    ) -> Iterator[tuple[float, float]]:
        """Yield the jittered viewport offsets for each sample of a pixel.

        The first sample is the pixel corner. After sample ``i`` the vertical
        then horizontal offsets each move by ``(-1)^i`` times a uniform
        fraction of one pixel step.

        Args:
            x: Pixel column.
            y: Pixel row.
            sample_count: Number of samples to yield.
            rng: Random source for the jitter.

        Yields:
            (inc_x, inc_y) offsets in viewport units.
        """
        inc_x, inc_y = self.pixel_offsets(x, y)
        for i in range(sample_count):
            yield inc_x, inc_y
            sign = 1.0 if i % 2 == 0 else -1.0
            inc_y += sign * rng.random() * self.pixel_height
            inc_x += sign * rng.random() * self.pixel_width

    def make_ray(self, inc_x: float, inc_y: float) -> Ray:
        """Primary ray from the eye through the given viewport offsets."""
        return Ray(self.origin, self.direction(inc_x, inc_y))


# =============================================================================
# Camera Setup
# =============================================================================


def setup_camera(camera: Camera, width: int, height: int) -> CameraFrame:
    """Compute the camera frame for an image of the given size.

    Args:
        camera: Camera settings (position, look direction, up, field of view).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The CameraFrame used to generate primary rays.
    """
    aspect_ratio = width / height
    viewport_width = 2.0 * math.tan(camera.field_of_view * math.pi / 360.0)
    viewport_height = viewport_width / aspect_ratio

    forward = (camera.look_direction - camera.position).normalize()
    right = forward.cross(camera.up).normalize()
    cam_up = right.cross(forward).normalize()

    top_left = forward - right * (viewport_width / 2.0) + cam_up * (viewport_height / 2.0)

    # A single row or column has no step to take
    pixel_width = viewport_width / (width - 1) if width > 1 else 0.0
    pixel_height = viewport_height / (height - 1) if height > 1 else 0.0

    return CameraFrame(
        origin=camera.position,
        forward=forward,
        right=right,
        up=cam_up,
        viewport_width=viewport_width,
        viewport_height=viewport_height,
        top_left=top_left,
        pixel_width=pixel_width,
        pixel_height=pixel_height,
        width=width,
        height=height,
    )


def get_camera_info(frame: CameraFrame) -> dict[str, tuple[float, float, float]]:
    """Get the camera basis as plain tuples, for debugging and logging."""
    return {
        "origin": frame.origin.to_tuple(),
        "forward": frame.forward.to_tuple(),
        "right": frame.right.to_tuple(),
        "up": frame.up.to_tuple(),
        "top_left": frame.top_left.to_tuple(),
    }
