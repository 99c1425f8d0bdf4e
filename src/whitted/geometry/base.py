"""Common interface for scene primitives.

Every primitive answers two questions: how far along a ray it is hit
(``intersect``) and which way its surface faces at a point (``normal``).
The set of primitive kinds is closed: new kinds subclass ``Primitive`` and
register a ``kind`` tag for scene (de)serialization.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from whitted.core.ray import Ray
from whitted.core.vector import Vector3
from whitted.materials.material import Material

# Distance reported when a ray misses a primitive
NO_HIT = math.inf


class Primitive(ABC):
    """Base class for renderable surfaces.

    Subclasses are dataclasses compared by identity, so two primitives with
    equal fields are still distinct scene entries.
    """

    kind: str = ""
    material: Material
    id: str | None

    @abstractmethod
    def intersect(self, ray: Ray, epsilon: float) -> float:
        """Return the ray parameter of the nearest accepted hit, or ``NO_HIT``.

        Args:
            ray: The ray to test (unit direction).
            epsilon: Scene-wide self-intersection tolerance.
        """

    @abstractmethod
    def normal(self, point: Vector3) -> Vector3:
        """Return the surface normal at ``point``."""

    @abstractmethod
    def to_dict(self) -> dict:
        """Serialize to a plain dict tagged with ``type``."""
