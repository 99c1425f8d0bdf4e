"""Sphere primitive with numerically stable ray-sphere intersection.

The intersection solves

    |origin + t * direction - center|^2 = radius^2

which, with ``O = origin - center`` and a unit direction, expands to

    t^2 + 2t<O, direction> + (<O, O> - radius^2) = 0

Because the ray direction is unit length the leading coefficient is
exactly 1. The roots are computed as ``q / a`` and ``c / q`` with
``q = -(b + sign(b) * sqrt(discriminant)) / 2``, which avoids the
catastrophic cancellation of the textbook formula when ``b^2`` is close to
``4ac``.

Example:
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.vector import Vector3
    >>> from whitted.geometry.sphere import Sphere
    >>> sphere = Sphere(center=Vector3(0, 0, 0), radius=1.0)
    >>> sphere.intersect(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), 1e-3)
    4.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from whitted.core.ray import Ray
from whitted.core.vector import Vector3
from whitted.geometry.base import NO_HIT, Primitive
from whitted.materials.material import Material


def _solve_quadratic_stable(b: float, c: float, sqrt_d: float) -> tuple[float, float]:
    """Solve t^2 + b*t + c = 0 given the square root of the discriminant.

    Returns:
        Tuple of (t0, t1) where t0 <= t1, or (NO_HIT, NO_HIT) when both
        roots are zero and cannot be separated (tangent ray from the surface).
    """
    q = -(b + math.copysign(sqrt_d, b)) / 2.0
    if q == 0.0:
        return NO_HIT, NO_HIT

    t0 = q  # a == 1
    t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


@dataclass(eq=False)
class Sphere(Primitive):
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (not validated).
        material: Surface material.
        id: Optional display name, used by scene editing operations.
    """

    center: Vector3
    radius: float
    material: Material = field(default_factory=Material)
    id: str | None = None

    kind = "sphere"

    def intersect(self, ray: Ray, epsilon: float) -> float:
        """Test for ray-sphere intersection.

        The far root must clear ``epsilon``; then the near root is returned
        if it is non-negative, otherwise the far one. This keeps a ray that
        starts on the surface (a reflection) from hitting the same sphere
        at t ~ 0 when it leaves it.

        Args:
            ray: The ray to test (unit direction).
            epsilon: Self-intersection tolerance.

        Returns:
            The hit distance, or ``NO_HIT``.
        """
        oc = ray.origin - self.center
        b = 2.0 * oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = b * b - 4.0 * c

        if discriminant < 0.0:
            return NO_HIT

        t0, t1 = _solve_quadratic_stable(b, c, math.sqrt(discriminant))

        if t1 >= epsilon:
            return t0 if t0 >= 0.0 else t1
        return NO_HIT

    def normal(self, point: Vector3) -> Vector3:
        """Outward unit normal: from the center through ``point``."""
        return (point - self.center).normalize()

    def to_dict(self) -> dict:
        return {
            "type": self.kind,
            "id": self.id,
            "center": list(self.center.to_tuple()),
            "radius": self.radius,
            "material": self.material.to_dict(),
        }
