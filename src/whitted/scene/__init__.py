"""Scene module for scene data and closest-hit queries.

Components:
    scene: The Scene aggregate, Camera and ImageConfig settings, the render
        guard and JSON (de)serialization
    intersection: Intersection record and the closest-hit resolver
    light: Point lights with shadow visibility tests
    default: The default billiard-ball scene
"""

from .default import DefaultSceneParams, create_default_scene
from .intersection import Intersection, closest_intersection
from .light import Light
from .scene import (
    DEFAULT_EPSILON,
    Camera,
    ImageConfig,
    RenderInProgressError,
    Scene,
    load_scene,
    save_scene,
)

__all__ = [
    # Scene aggregate
    "Scene",
    "Camera",
    "ImageConfig",
    "DEFAULT_EPSILON",
    "RenderInProgressError",
    "load_scene",
    "save_scene",
    # Intersection
    "Intersection",
    "closest_intersection",
    # Lights
    "Light",
    # Default scene
    "DefaultSceneParams",
    "create_default_scene",
]
