"""Pytest configuration for ray tracer tests.

This module provides shared fixtures for all test modules: a seeded random
generator and a few small scenes that render quickly.
"""

import numpy as np
import pytest

from whitted.core.vector import Vector3
from whitted.materials import Material
from whitted.scene import Camera, ImageConfig, Scene


@pytest.fixture
def rng():
    """Seeded generator so stochastic bounces and jitter are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def white_diffuse():
    """Fully diffuse white material with no specular or ambient term."""
    return Material(diffuse=1.0, specular=0.0, ambient=0.0, color=Vector3(255.0, 255.0, 255.0))


@pytest.fixture
def floor_scene(white_diffuse):
    """A white floor at y = -1 lit from directly above.

    The camera looks down toward (0, -1, 1) so the center of the image sees
    the floor. Rendered at 5x5 with depth 2.
    """
    scene = Scene(
        camera=Camera(
            position=Vector3(0.0, 0.0, 0.0),
            look_direction=Vector3(0.0, -1.0, 1.0),
            up=Vector3(0.0, 1.0, 0.0),
            field_of_view=40.0,
            antialias_samples=1,
            max_depth=2,
        ),
        image=ImageConfig(width=5, height=5),
    )
    scene.add_plane(Vector3(0.0, -1.0, 0.0), Vector3(0.0, 1.0, 0.0), white_diffuse, id="floor")
    scene.add_light(Vector3(0.0, 5.0, 0.0), intensity=1.0, id="sun")
    return scene


@pytest.fixture
def sphere_scene():
    """A diffuse, slightly reflective sphere on a floor, rendered at 8x6."""
    scene = Scene(
        camera=Camera(antialias_samples=2, max_depth=3, background=Vector3(10.0, 20.0, 30.0)),
        image=ImageConfig(width=8, height=6),
    )
    scene.add_plane(
        Vector3(0.0, -1.0, 0.0),
        Vector3(0.0, 1.0, 0.0),
        Material(diffuse=0.5, specular=0.2, ambient=0.3, color=Vector3(120.0, 120.0, 120.0)),
        id="floor",
    )
    scene.add_sphere(
        Vector3(0.0, 0.0, 4.0),
        1.0,
        Material(diffuse=0.6, specular=0.3, ambient=0.2, color=Vector3(200.0, 40.0, 40.0)),
        id="ball",
    )
    scene.add_light(Vector3(2.0, 5.0, 0.0), intensity=1.0, id="key")
    return scene
