"""Scene-level closest-hit resolution.

The resolver scans every primitive in insertion order and keeps the
nearest hit. There is no acceleration structure; scenes are a handful of
primitives. Each primitive applies its own epsilon gate, so the resolver
only compares distances.

Example:
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.vector import Vector3
    >>> from whitted.geometry import Sphere
    >>> from whitted.scene.intersection import closest_intersection
    >>> near = Sphere(Vector3(0, 0, 3), 1.0)
    >>> far = Sphere(Vector3(0, 0, 9), 1.0)
    >>> hit = closest_intersection(Ray(Vector3(), Vector3(0, 0, 1)), [far, near], 1e-3)
    >>> hit.primitive is near, hit.t
    (True, 2.0)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from whitted.core.ray import Ray
from whitted.geometry.base import NO_HIT, Primitive


@dataclass(frozen=True)
class Intersection:
    """Result of a closest-hit query.

    Created fresh for every query and never stored in the scene.

    Attributes:
        primitive: The nearest primitive hit, or None on a miss.
        t: Distance along the ray to the hit, ``NO_HIT`` on a miss.
    """

    primitive: Primitive | None = None
    t: float = NO_HIT

    @property
    def hit(self) -> bool:
        return self.primitive is not None


def closest_intersection(
    ray: Ray,
    primitives: Iterable[Primitive],
    epsilon: float,
) -> Intersection:
    """Find the nearest primitive hit by a ray.

    A primitive replaces the current best only when strictly nearer, so on
    an exact tie the one inserted first wins.

    Args:
        ray: The ray to trace (unit direction).
        primitives: Scene primitives in insertion order.
        epsilon: Scene-wide self-intersection tolerance.

    Returns:
        The closest Intersection, or a miss record.
    """
    best: Primitive | None = None
    best_t = NO_HIT

    for primitive in primitives:
        t = primitive.intersect(ray, epsilon)
        if t < best_t:
            best = primitive
            best_t = t

    return Intersection(primitive=best, t=best_t)
