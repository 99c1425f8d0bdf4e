"""Tests for the default billiard-ball scene."""

import math

import pytest

from whitted.core.renderer import render
from whitted.core.vector import Vector3
from whitted.geometry import Plane, Sphere
from whitted.scene import DefaultSceneParams, ImageConfig, create_default_scene
from whitted.scene.default import BALL_RADIUS, BALL_Y, FLOOR_Y


class TestDefaultScene:
    """Tests for create_default_scene."""

    def test_contents(self):
        scene = create_default_scene()

        assert scene.get_primitive_count() == 8
        assert scene.get_light_count() == 1
        assert scene.object_ids()[:2] == ["top light", "floor"]
        assert scene.object_ids()[-1] == "top mirror sphere"

    def test_settings(self):
        scene = create_default_scene()

        assert (scene.image.width, scene.image.height) == (320, 450)
        assert scene.camera.field_of_view == 40.0
        assert scene.camera.max_depth == 3
        assert scene.camera.background == Vector3(0.0, 0.0, 0.0)

    def test_light(self):
        light = create_default_scene().get("top light")
        assert light.position == Vector3(0.0, 4.0, -2.0)
        assert light.intensity == 1.0

    def test_balls_rest_on_floor(self):
        scene = create_default_scene()
        floor = scene.get("floor")

        assert isinstance(floor, Plane)
        assert floor.point.y == FLOOR_Y
        assert BALL_Y - BALL_RADIUS == pytest.approx(FLOOR_Y)

        rack = [p for p in scene.primitives if isinstance(p, Sphere) and p.id != "top mirror sphere"]
        assert len(rack) == 6
        assert all(ball.radius == BALL_RADIUS and ball.center.y == BALL_Y for ball in rack)

    def test_params(self):
        params = DefaultSceneParams(
            light_intensity=0.5,
            floor_color=(10.0, 20.0, 30.0),
            mirror_specular=0.9,
        )
        scene = create_default_scene(params)

        assert scene.get("top light").intensity == 0.5
        assert scene.get("floor").material.color == Vector3(10.0, 20.0, 30.0)
        assert scene.get("top mirror sphere").material.specular == 0.9

    def test_scenes_are_independent(self):
        a = create_default_scene()
        b = create_default_scene()

        a.remove("floor")

        assert "floor" in b.object_ids()

    def test_small_render(self):
        """Test the default scene renders to finite, non-negative colors."""
        scene = create_default_scene()
        scene.image = ImageConfig(width=32, height=45, scale=0.5)

        image = render(scene, seed=0)

        assert image.shape == (22, 16, 3)
        assert all(math.isfinite(v) and v >= 0.0 for v in image.ravel())
        assert image.max() > 0.0
