"""Recursive Whitted-style shading integrator.

This module evaluates the color seen along a ray by recursing through the
scene: direct Lambertian light from point lights (with shadow tests), one
stochastic diffuse bounce, mirror reflection, and an ambient term.

The only state carried through the recursion is the remaining depth. Each
call to ``compute_color`` spends one level first and returns black once
fewer than one level remains, so recursion is bounded by the requested
depth, itself capped at ``MAX_DEPTH_CAP``.

Color at a hit with material (diffuse kd, specular ks, ambient ka, color C):

    C' = C + trace(scatter bounce)                  if kd > 0, else C
    L  = min(1, sum of max(0, <l, n> * intensity)) over visible lights
    color = ks * trace(mirror ray) + C' * (L * kd) + C' * ka

No clamping or gamma is applied; colors may exceed 255.

Example:
    >>> import numpy as np
    >>> from whitted.core.integrator import trace_ray
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.vector import Vector3
    >>> from whitted.scene.default import create_default_scene
    >>> scene = create_default_scene()
    >>> rng = np.random.default_rng(42)
    >>> color = trace_ray(scene, Ray(Vector3(), Vector3(0, -0.1, 1)), 3, rng)
"""

from __future__ import annotations

import numpy as np

from whitted.core.ray import Ray
from whitted.core.vector import BLACK, Vector3
from whitted.materials.material import Material
from whitted.scene.intersection import Intersection, closest_intersection
from whitted.scene.scene import Scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Hard ceiling on recursion depth, whatever the camera asks for
MAX_DEPTH_CAP = 16

# Upper bound on the summed Lambertian factor from all lights
MAX_LAMBERTIAN = 1.0


def clamp_depth(depth: int) -> int:
    """Limit a requested recursion depth to ``MAX_DEPTH_CAP``."""
    return min(depth, MAX_DEPTH_CAP)


# =============================================================================
# Ray Tracing Core
# =============================================================================


def trace_ray(
    scene: Scene,
    ray: Ray,
    depth: int,
    rng: np.random.Generator | None = None,
) -> Vector3:
    """Trace a ray into the scene and return the color it sees.

    Args:
        scene: The scene to trace against.
        ray: The ray to trace.
        depth: Remaining recursion depth. ``compute_color`` spends one level
            before shading.
        rng: Random source for diffuse bounces.

    Returns:
        The camera background if nothing is hit, else the shaded color.
    """
    intersection = closest_intersection(ray, scene.primitives, scene.epsilon)
    if not intersection.hit:
        return scene.camera.background
    return compute_color(scene, ray, intersection, depth, rng)


def compute_color(
    scene: Scene,
    ray: Ray,
    intersection: Intersection,
    depth: int,
    rng: np.random.Generator | None = None,
) -> Vector3:
    """Shade a hit by combining diffuse, specular and ambient terms.

    Args:
        scene: The scene being rendered.
        ray: The ray that produced the hit.
        intersection: The hit to shade (must reference a primitive).
        depth: Remaining recursion depth, decremented before anything else.
        rng: Random source for the diffuse bounce.

    Returns:
        The unclamped RGB color, or black when the depth is exhausted.
    """
    depth = clamp_depth(depth) - 1
    if depth < 1:
        return BLACK

    primitive = intersection.primitive
    material: Material = primitive.material
    point = ray.at(intersection.t)
    normal = primitive.normal(point)
    color = material.color

    # Lambertian reflectance (diffuse)
    lambertian_amount = 0.0
    if material.diffuse > 0:
        lambertian_amount = direct_lighting(scene, point, normal, primitive)
        # One stochastic bounce is blended in whether or not any light is visible
        color = color + scatter(scene, ray, intersection, depth, rng)

    # Mirror reflection (specular)
    reflection = BLACK
    if material.specular > 0:
        reflected_ray = Ray(point, Material.reflect(ray.direction, normal))
        reflection = trace_ray(scene, reflected_ray, depth, rng) * material.specular

    return (
        reflection
        + color * (lambertian_amount * material.diffuse)
        + color * material.ambient
    )


def direct_lighting(scene: Scene, point: Vector3, normal: Vector3, primitive) -> float:
    """Sum the Lambertian factor of every light that reaches ``point``.

    Each visible light adds ``max(0, <normalize(light - point), normal> *
    intensity)``; the total is clamped to ``MAX_LAMBERTIAN`` so overlapping
    lights cannot blow out the surface color.
    """
    amount = 0.0
    for light in scene.lights:
        if light.visible(point, primitive, scene.primitives, scene.epsilon):
            cosine = (light.position - point).normalize().dot(normal)
            amount += max(cosine * light.intensity, 0.0)
    return min(amount, MAX_LAMBERTIAN)


def scatter(
    scene: Scene,
    ray: Ray,
    intersection: Intersection,
    depth: int,
    rng: np.random.Generator | None = None,
) -> Vector3:
    """Trace a single random diffuse bounce from a hit.

    This is one noisy sample, not an average; pixel supersampling is what
    reduces the noise.
    """
    bounce = intersection.primitive.material.scatter_ray(ray, intersection, rng)
    return trace_ray(scene, bounce, depth, rng)
