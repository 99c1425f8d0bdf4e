"""Infinite plane primitive with ray-plane intersection.

A plane is defined by any point on it and its normal. The normal is used
as given (it is not normalized), so scenes should supply unit normals.

The ray-plane intersection solves ``<n, origin + t * direction - point> = 0``:

    t = <n, point - origin> / <n, direction>

Example:
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.vector import Vector3
    >>> from whitted.geometry.plane import Plane
    >>> floor = Plane(point=Vector3(0, -1, 0), normal_vector=Vector3(0, 1, 0))
    >>> floor.intersect(Ray(Vector3(0, 0, 0), Vector3(0, -1, 0)), 1e-3)
    1.0
"""

from __future__ import annotations

from dataclasses import dataclass, field

from whitted.core.ray import Ray
from whitted.core.vector import Vector3
from whitted.geometry.base import NO_HIT, Primitive
from whitted.materials.material import Material


@dataclass(eq=False)
class Plane(Primitive):
    """An infinite plane through ``point`` facing ``normal_vector``.

    Attributes:
        point: Any point on the plane.
        normal_vector: The plane normal, constant over the surface.
        material: Surface material.
        id: Optional display name, used by scene editing operations.
    """

    point: Vector3
    normal_vector: Vector3
    material: Material = field(default_factory=Material)
    id: str | None = None

    kind = "plane"

    def intersect(self, ray: Ray, epsilon: float) -> float:
        """Test for ray-plane intersection.

        A denominator below ``epsilon`` in magnitude is a miss. That covers
        rays parallel to the plane and keeps a ray reflected off the plane
        from hitting it again.

        Args:
            ray: The ray to test (unit direction).
            epsilon: Self-intersection tolerance.

        Returns:
            The hit distance if it exceeds ``epsilon``, else ``NO_HIT``.
        """
        denom = self.normal_vector.dot(ray.direction)
        if abs(denom) < epsilon:
            return NO_HIT

        t = self.normal_vector.dot(self.point - ray.origin) / denom
        return t if t > epsilon else NO_HIT

    def normal(self, point: Vector3) -> Vector3:
        return self.normal_vector

    def to_dict(self) -> dict:
        return {
            "type": self.kind,
            "id": self.id,
            "point": list(self.point.to_tuple()),
            "normal": list(self.normal_vector.to_tuple()),
            "material": self.material.to_dict(),
        }
