"""Core rendering module.

Components:
    vector: Immutable 3D vector used for points, directions and colors
    ray: Ray with a normalized direction
    integrator: Recursive shading (direct light, diffuse bounce, mirror)
    renderer: Frame loop, antialiasing, progress and parallel scanlines
"""

from .ray import Ray
from .vector import BLACK, Vector3

# Note: integrator and renderer are NOT imported here to avoid circular imports
# with whitted.scene. Import them directly when needed:
#   from whitted.core.renderer import Renderer

__all__ = [
    "Vector3",
    "BLACK",
    "Ray",
]
