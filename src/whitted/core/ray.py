"""Ray data structure for recursive ray tracing.

A ray is an origin point plus a direction. The direction is normalized
once at construction, so every consumer (sphere intersection in
particular, which treats the quadratic's leading coefficient as exactly 1)
can rely on unit length without checking again.

Example:
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.vector import Vector3
    >>> ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, 2))
    >>> ray.direction
    Vector3(x=0.0, y=0.0, z=1.0)
    >>> ray.at(5.0)  # Point 5 units along the ray
    Vector3(x=0.0, y=0.0, z=5.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from whitted.core.vector import Vector3


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray with an origin point and a unit direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Normalized on construction; a
            zero direction stays zero.
    """

    origin: Vector3
    direction: Vector3

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalize())

    def at(self, t: float) -> Vector3:
        """Compute the point ``origin + direction * t``.

        Args:
            t: The parameter value. Positive values are in front of the origin.
        """
        return self.origin + self.direction * t
