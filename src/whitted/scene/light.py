"""Point lights and shadow visibility."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from whitted.core.ray import Ray
from whitted.core.vector import Vector3
from whitted.geometry.base import Primitive
from whitted.scene.intersection import closest_intersection


@dataclass(eq=False)
class Light:
    """A point light with no distance falloff.

    Attributes:
        position: Light position in world space.
        intensity: Scale of the Lambertian contribution.
        id: Optional display name, used by scene editing operations.
    """

    position: Vector3 = field(default_factory=Vector3)
    intensity: float = 1.0
    id: str | None = None

    def visible(
        self,
        point: Vector3,
        candidate: Primitive,
        primitives: Iterable[Primitive],
        epsilon: float,
    ) -> bool:
        """Check whether ``point`` on ``candidate`` receives this light.

        A ray is cast from the light toward the point. The point is lit only
        when the first thing that ray hits is ``candidate`` itself. Hitting
        the candidate counts at any distance above ``-epsilon``, so a point
        is never shadowed by a numerical near-miss on its own surface, while
        any other primitive in front of it occludes it.

        Args:
            point: The surface point being shaded.
            candidate: The primitive the point lies on.
            primitives: All scene primitives.
            epsilon: Scene-wide tolerance.

        Returns:
            True if the light reaches the point.
        """
        ray = Ray(self.position, point - self.position)
        intersection = closest_intersection(ray, primitives, epsilon)
        return intersection.primitive is candidate and intersection.t > -epsilon

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "position": list(self.position.to_tuple()),
            "intensity": self.intensity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Light:
        return cls(
            position=Vector3.from_iterable(data.get("position", (0.0, 0.0, 0.0))),
            intensity=float(data.get("intensity", 1.0)),
            id=data.get("id"),
        )
