"""Immutable 3D vector used for positions, directions and RGB colors.

Colors share the same type as geometry and live on a 0-255 scale. Nothing
here clamps: values above 255 are expected from bright scenes and are
clamped by the image writer.

Example:
    >>> from whitted.core.vector import Vector3
    >>> v = Vector3(3.0, 0.0, 4.0)
    >>> v.norm()
    5.0
    >>> v.normalize()
    Vector3(x=0.6, y=0.0, z=0.8)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Shared fallback generator for callers that do not supply their own
_default_rng = np.random.default_rng()


@dataclass(frozen=True, slots=True)
class Vector3:
    """A real-valued triple with value semantics.

    Attributes:
        x: First component (or red channel).
        y: Second component (or green channel).
        z: Third component (or blue channel).
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def add(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def divide(self, scalar: float) -> Vector3:
        """Divide every component by ``scalar``.

        Division by zero is not an error here: it produces infinite or NaN
        components, matching IEEE float semantics.
        """
        if scalar == 0:
            return Vector3(_ieee_div(self.x), _ieee_div(self.y), _ieee_div(self.z))
        return self.scale(1.0 / scalar)

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vector3:
        """Return the unit vector in the same direction.

        The zero vector is returned unchanged instead of dividing by zero.
        """
        length = self.norm()
        if length == 0:
            return self
        return self.divide(length)

    @staticmethod
    def random_in_unit_sphere(
        minimum: float = -1.0,
        maximum: float = 1.0,
        rng: np.random.Generator | None = None,
    ) -> Vector3:
        """Rejection-sample a point strictly inside the unit sphere.

        Components are drawn uniformly from ``[minimum, maximum)`` until the
        resulting vector has norm below 1. For the default bounds this takes
        about 1.91 draws on average. The loop has no iteration cap, so the
        bounds must overlap the unit ball.

        Args:
            minimum: Lower bound of each component.
            maximum: Upper bound of each component.
            rng: Random source. Defaults to a module-level generator.

        Returns:
            A vector with ``norm() < 1``.
        """
        if rng is None:
            rng = _default_rng
        span = maximum - minimum
        while True:
            candidate = Vector3(
                rng.random() * span + minimum,
                rng.random() * span + minimum,
                rng.random() * span + minimum,
            )
            if candidate.norm() < 1.0:
                return candidate

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_numpy(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_iterable(cls, values) -> Vector3:
        """Build a vector from any 3-item sequence such as a list or tuple."""
        x, y, z = values
        return cls(float(x), float(y), float(z))

    def is_close(self, other: Vector3, tolerance: float = 1e-9) -> bool:
        return (
            abs(self.x - other.x) <= tolerance
            and abs(self.y - other.y) <= tolerance
            and abs(self.z - other.z) <= tolerance
        )

    # Operator forms of the named operations

    def __add__(self, other: Vector3) -> Vector3:
        return self.add(other)

    def __sub__(self, other: Vector3) -> Vector3:
        return self.subtract(other)

    def __mul__(self, scalar: float) -> Vector3:
        return self.scale(scalar)

    def __rmul__(self, scalar: float) -> Vector3:
        return self.scale(scalar)

    def __truediv__(self, scalar: float) -> Vector3:
        return self.divide(scalar)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


def _ieee_div(value: float) -> float:
    # x / 0.0 under IEEE 754 rather than Python's ZeroDivisionError
    if value == 0 or math.isnan(value):
        return math.nan
    return math.copysign(math.inf, value)


BLACK = Vector3(0.0, 0.0, 0.0)
