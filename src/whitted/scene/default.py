"""Default billiard-ball scene.

A dark floor with a triangle of six small colored balls, and a mirror ball
resting on top of the rack, lit by a single point light above and behind
the camera. The camera sits at the origin looking down +Z.

Coordinates are in scene units where a ball has radius 0.055 and the floor
is at y = -0.2; the balls rest at y = -0.145 so they touch the floor.

Example:
    >>> from whitted.scene.default import create_default_scene
    >>> scene = create_default_scene()
    >>> scene.get_primitive_count(), scene.get_light_count()
    (8, 1)
"""

from __future__ import annotations

from dataclasses import dataclass

from whitted.core.vector import Vector3
from whitted.materials.material import Material
from whitted.scene.scene import Camera, ImageConfig, Scene

# =============================================================================
# Default Scene Parameters
# =============================================================================


@dataclass
class DefaultSceneParams:
    """Parameters for tweaking the default scene.

    Attributes:
        light_intensity: Intensity of the top light.
        floor_color: RGB color of the floor (0-255).
        mirror_specular: Specular weight of the mirror ball on top of the rack.
    """

    light_intensity: float = 1.0
    floor_color: tuple[float, float, float] = (61.0, 62.0, 64.0)
    mirror_specular: float = 0.7


# =============================================================================
# Default Scene Constants
# =============================================================================

BALL_RADIUS = 0.055
BALL_Y = -0.145
FLOOR_Y = -0.2
LIGHT_POSITION = (0.0, 4.0, -2.0)

# (id, center x, center z, color, specular)
RACK_BALLS = (
    ("1st row ball 1", 0.1, 1.4, (175.0, 250.0, 201.0), 0.3),
    ("1st row ball 2", 0.0, 1.4, (245.0, 175.0, 250.0), 0.3),
    ("1st row ball 3", -0.1, 1.4, (250.0, 110.0, 129.0), 0.3),
    ("2nd row ball 1", 0.05, 1.3, (110.0, 115.0, 250.0), 0.3),
    ("2nd row ball 2", -0.05, 1.3, (161.0, 116.0, 112.0), 0.3),
    ("3rd row ball 1", 0.0, 1.2, (245.0, 203.0, 86.0), 0.1),
)


# =============================================================================
# Default Scene Factory
# =============================================================================


def create_default_scene(params: DefaultSceneParams | None = None) -> Scene:
    """Create the default billiard-ball scene.

    Args:
        params: Optional DefaultSceneParams. If None, uses the defaults.

    Returns:
        A populated Scene with a 320x450 image config and a depth-3 camera.
    """
    if params is None:
        params = DefaultSceneParams()

    scene = Scene(camera=Camera(), image=ImageConfig())

    scene.add_light(
        Vector3(*LIGHT_POSITION),
        intensity=params.light_intensity,
        id="top light",
    )

    scene.add_plane(
        Vector3(0.0, FLOOR_Y, 1.0),
        Vector3(0.0, 1.0, 0.0),
        Material(diffuse=0.7, specular=0.1, ambient=0.5, color=Vector3(*params.floor_color)),
        id="floor",
    )

    for ball_id, x, z, color, specular in RACK_BALLS:
        scene.add_sphere(
            Vector3(x, BALL_Y, z),
            BALL_RADIUS,
            Material(diffuse=0.05, specular=specular, ambient=0.5, color=Vector3(*color)),
            id=ball_id,
        )

    # Mirror ball balanced on the middle of the rack
    scene.add_sphere(
        Vector3(0.0, -0.02, 1.3),
        BALL_RADIUS,
        Material(
            diffuse=0.2,
            specular=params.mirror_specular,
            ambient=0.5,
            color=Vector3(20.0, 20.0, 20.0),
        ),
        id="top mirror sphere",
    )

    return scene
