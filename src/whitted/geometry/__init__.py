"""Geometry module for scene primitives.

Components:
    base: The Primitive interface (intersect, normal) and the NO_HIT sentinel
    sphere: Sphere primitive with stable ray-sphere intersection
    plane: Infinite plane primitive

Intersection routines take the scene's epsilon explicitly and return a
ray distance, with ``NO_HIT`` (positive infinity) for a miss:

    t = primitive.intersect(ray, epsilon)
"""

from .base import NO_HIT, Primitive
from .plane import Plane
from .sphere import Sphere

PRIMITIVE_TYPES: dict[str, type[Primitive]] = {
    Sphere.kind: Sphere,
    Plane.kind: Plane,
}

__all__ = [
    "NO_HIT",
    "Primitive",
    "Sphere",
    "Plane",
    "PRIMITIVE_TYPES",
]
