"""Surface material with diffuse, specular and ambient weights.

A single material model covers every surface in the scene. Its three
weights scale independent shading terms:

- diffuse: Lambertian light from point lights plus one stochastic bounce
- specular: mirror reflection traced recursively
- ambient: a flat fraction of the surface color

The weights are meant to lie in [0, 1] but are neither validated nor
normalized against each other; a material whose weights sum past 1 simply
renders brighter.

Example:
    >>> from whitted.core.vector import Vector3
    >>> from whitted.materials.material import Material
    >>> Material.reflect(Vector3(1, -1, 0), Vector3(0, 1, 0))
    Vector3(x=1.0, y=1.0, z=0.0)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from whitted.core.ray import Ray
from whitted.core.vector import Vector3

if TYPE_CHECKING:
    from whitted.scene.intersection import Intersection


@dataclass
class Material:
    """Shading weights and base color of a surface.

    Attributes:
        diffuse: Weight of the Lambertian term (and gate for diffuse bounces).
        specular: Weight of the mirror reflection term.
        ambient: Weight of the constant ambient term.
        color: Base RGB color on a 0-255 scale.
    """

    diffuse: float = 0.0
    specular: float = 0.0
    ambient: float = 0.0
    color: Vector3 = field(default_factory=Vector3)

    @staticmethod
    def reflect(incident: Vector3, normal: Vector3) -> Vector3:
        """Reflect an incident direction about a surface normal.

        Computes ``incident - normal * 2<normal, incident>``. The normal
        should be unit length for a length-preserving reflection.

        Args:
            incident: The incoming direction (pointing toward the surface).
            normal: The surface normal.

        Returns:
            The mirrored direction.
        """
        return incident - normal * (2.0 * normal.dot(incident))

    def scatter_ray(
        self,
        ray: Ray,
        intersection: Intersection,
        rng: np.random.Generator | None = None,
    ) -> Ray:
        """Build the stochastic diffuse bounce ray for a hit.

        The surface normal is flipped, when needed, to face the side the
        incoming ray arrived from, then perturbed by a random point of the
        unit ball. The result starts at the hit point.

        Facing the incoming side keeps bounces on the visible side of the
        surface, so they pick up the scene in front of it rather than
        behind it. Together with the integrator adding the traced bounce to
        the base color, this makes diffuse surfaces brighter than a model
        that negates the normal unconditionally or drops the bounce.

        Args:
            ray: The ray that produced the hit.
            intersection: The hit being shaded (must reference a primitive).
            rng: Random source for the perturbation.

        Returns:
            The bounce ray. Tracing it is the integrator's job.
        """
        point = ray.at(intersection.t)
        normal = intersection.primitive.normal(point)
        if normal.dot(ray.direction) > 0.0:
            normal = -normal
        target = normal + Vector3.random_in_unit_sphere(-1.0, 1.0, rng)
        return Ray(point, target)

    def to_dict(self) -> dict:
        return {
            "diffuse": self.diffuse,
            "specular": self.specular,
            "ambient": self.ambient,
            "color": list(self.color.to_tuple()),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Material:
        return cls(
            diffuse=float(data.get("diffuse", 0.0)),
            specular=float(data.get("specular", 0.0)),
            ambient=float(data.get("ambient", 0.0)),
            color=Vector3.from_iterable(data.get("color", (0.0, 0.0, 0.0))),
        )
