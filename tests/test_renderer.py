"""Tests for the frame renderer.

This module tests the Renderer class including:
- Output buffer shape, dtype and scaling
- Progress reporting through callbacks, generators and logs
- Antialiasing as the mean of jittered samples
- Seeded determinism across worker counts
- The render guard against concurrent renders and edits
- Cooperative cancellation
- Settings validation
"""

import logging

import numpy as np
import pytest

from whitted.camera import setup_camera
from whitted.core.integrator import trace_ray
from whitted.core.renderer import (
    RenderCancelledError,
    Renderer,
    progress_percent,
    render,
    render_pixel,
)
from whitted.core.vector import Vector3
from whitted.materials import Material
from whitted.scene import Camera, ImageConfig, RenderInProgressError, Scene


class TestRendererOutput:
    """Test the rendered image buffer."""

    def test_shape_and_dtype(self, sphere_scene):
        image = Renderer(sphere_scene, seed=1).render()

        assert image.shape == (6, 8, 3)
        assert image.dtype == np.float64
        assert np.all(np.isfinite(image))

    def test_scale_applies_to_both_dimensions(self, sphere_scene):
        sphere_scene.image = ImageConfig(width=10, height=8, scale=0.5)

        image = render(sphere_scene, seed=1)

        assert image.shape == (4, 5, 3)

    def test_empty_scene_is_background(self):
        scene = Scene(
            camera=Camera(background=Vector3(10.0, 20.0, 30.0)),
            image=ImageConfig(width=4, height=3),
        )

        image = render(scene)

        assert np.all(image == np.array([10.0, 20.0, 30.0]))

    def test_values_are_not_clamped(self):
        """Test that colors above 255 are kept in the buffer."""
        scene = Scene(image=ImageConfig(width=3, height=3))
        scene.add_sphere(
            Vector3(0.0, 0.0, 3.0),
            10.0,
            Material(ambient=2.0, color=Vector3(255.0, 255.0, 255.0)),
        )

        image = render(scene)

        assert np.allclose(image, 510.0)

    def test_get_image_returns_last_render(self, sphere_scene):
        renderer = Renderer(sphere_scene, seed=3)
        assert renderer.get_image() is None

        image = renderer.render()

        assert renderer.get_image() is image

    @pytest.mark.parametrize("workers", [1, 3])
    def test_every_row_written_to_returned_buffer(self, workers):
        """Test each scanline lands in the buffer that render() returns."""
        scene = Scene(
            camera=Camera(background=Vector3(1.0, 2.0, 3.0)),
            image=ImageConfig(width=3, height=7),
        )
        renderer = Renderer(scene, workers=workers)

        image = renderer.render()

        assert image is renderer.get_image()
        assert np.all(image == np.array([1.0, 2.0, 3.0]))

    def test_cancelled_render_keeps_partial_buffer(self, sphere_scene):
        renderer = Renderer(sphere_scene, seed=3)
        with pytest.raises(RenderCancelledError):
            renderer.render(callback=lambda percent: renderer.cancel())

        partial = renderer.get_image()

        assert partial.shape == (6, 8, 3)
        assert np.any(partial[0] != 0.0)
        assert np.all(partial[1:] == 0.0)


class TestProgress:
    """Test scanline progress reporting."""

    def test_progress_percent(self):
        assert progress_percent(0, 5) == 0
        assert progress_percent(1, 5) == 25
        assert progress_percent(4, 5) == 100
        assert progress_percent(1, 3) == 50
        assert progress_percent(0, 1) == 100

    def test_callback_receives_each_change_once(self, sphere_scene):
        sphere_scene.image = ImageConfig(width=2, height=5)
        reported = []

        Renderer(sphere_scene, seed=1).render(callback=reported.append)

        assert reported == [0, 25, 50, 75, 100]

    def test_repeated_percentages_are_skipped(self, sphere_scene):
        """Test tall images only report a percentage when it changes."""
        sphere_scene.image = ImageConfig(width=1, height=250)
        reported = []

        Renderer(sphere_scene, seed=1).render(max_depth=1, callback=reported.append)

        assert reported == sorted(set(reported))
        assert reported[0] == 0
        assert reported[-1] == 100
        assert len(reported) == 101

    def test_single_row_reports_complete(self, sphere_scene):
        sphere_scene.image = ImageConfig(width=3, height=1)
        reported = []

        Renderer(sphere_scene, seed=1).render(callback=reported.append)

        assert reported == [100]

    def test_render_progressive_generator(self, sphere_scene):
        sphere_scene.image = ImageConfig(width=2, height=3)

        assert list(Renderer(sphere_scene, seed=1).render_progressive()) == [0, 50, 100]

    def test_progress_and_time_are_logged(self, sphere_scene, caplog):
        sphere_scene.image = ImageConfig(width=2, height=3)

        with caplog.at_level(logging.INFO, logger="whitted"):
            render(sphere_scene, seed=1)

        messages = [record.getMessage() for record in caplog.records]
        assert "Progress: 100%" in messages
        assert any(message.startswith("Render Time:") for message in messages)


class TestAntialiasing:
    """Test jittered supersampling."""

    @pytest.fixture
    def edge_scene(self):
        """A flat-shaded sphere edge so neighboring samples differ."""
        scene = Scene(
            camera=Camera(antialias_samples=6, background=Vector3(0.0, 0.0, 255.0)),
            image=ImageConfig(width=6, height=6),
        )
        scene.add_sphere(
            Vector3(0.3, 0.0, 3.0),
            0.5,
            Material(ambient=1.0, color=Vector3(255.0, 0.0, 0.0)),
        )
        return scene

    def test_pixel_is_mean_of_samples(self, edge_scene):
        frame = setup_camera(edge_scene.camera, 6, 6)

        for x, y in [(0, 0), (2, 3), (3, 2), (5, 5)]:
            pixel = render_pixel(edge_scene, frame, x, y, 6, 3, np.random.default_rng(5))

            samples = [
                trace_ray(edge_scene, frame.make_ray(inc_x, inc_y), 3)
                for inc_x, inc_y in frame.sample_offsets(x, y, 6, np.random.default_rng(5))
            ]
            expected = sum(samples, Vector3()) / len(samples)

            assert pixel.is_close(expected, tolerance=1e-9)

    def test_single_sample_is_unjittered(self, edge_scene):
        frame = setup_camera(edge_scene.camera, 6, 6)

        pixel = render_pixel(edge_scene, frame, 2, 3, 1, 3, np.random.default_rng(5))

        assert pixel == trace_ray(edge_scene, frame.make_ray(*frame.pixel_offsets(2, 3)), 3)


class TestDeterminism:
    """Test seeded reproducibility."""

    def test_same_seed_same_image(self, sphere_scene):
        a = Renderer(sphere_scene, seed=42).render()
        b = Renderer(sphere_scene, seed=42).render()

        np.testing.assert_array_equal(a, b)

    @pytest.mark.parametrize("workers", [2, 4])
    def test_workers_do_not_change_output(self, sphere_scene, workers):
        """Test that parallel scanlines reproduce the serial image exactly."""
        serial = Renderer(sphere_scene, seed=7).render()
        parallel = Renderer(sphere_scene, workers=workers, seed=7).render()

        np.testing.assert_array_equal(serial, parallel)

    def test_parallel_progress_is_monotonic(self, sphere_scene):
        sphere_scene.image = ImageConfig(width=2, height=5)
        reported = []

        Renderer(sphere_scene, workers=3, seed=7).render(callback=reported.append)

        assert reported == [0, 25, 50, 75, 100]


class TestRenderGuard:
    """Test that renders never interleave with each other or with edits."""

    def test_second_render_is_rejected(self, sphere_scene):
        with sphere_scene.rendering():
            with pytest.raises(RenderInProgressError):
                Renderer(sphere_scene).render()

    def test_edits_rejected_mid_render(self, sphere_scene):
        sphere_scene.image = ImageConfig(width=2, height=3)
        progress = Renderer(sphere_scene, seed=1).render_progressive()

        next(progress)
        assert sphere_scene.is_rendering
        with pytest.raises(RenderInProgressError):
            sphere_scene.add_light(Vector3(0.0, 1.0, 0.0))
        with pytest.raises(RenderInProgressError):
            sphere_scene.remove("ball")

        progress.close()
        assert not sphere_scene.is_rendering
        sphere_scene.add_light(Vector3(0.0, 1.0, 0.0))

    def test_scene_released_after_render(self, sphere_scene):
        render(sphere_scene, seed=1)

        assert not sphere_scene.is_rendering
        render(sphere_scene, seed=1)


class TestCancellation:
    """Test cooperative cancellation between scanlines."""

    @pytest.mark.parametrize("workers", [1, 2])
    def test_cancel_from_callback(self, sphere_scene, workers):
        renderer = Renderer(sphere_scene, workers=workers, seed=1)

        with pytest.raises(RenderCancelledError):
            renderer.render(callback=lambda percent: renderer.cancel())

        assert not sphere_scene.is_rendering

    def test_renderer_reusable_after_cancel(self, sphere_scene):
        renderer = Renderer(sphere_scene, seed=1)
        with pytest.raises(RenderCancelledError):
            renderer.render(callback=lambda percent: renderer.cancel())

        image = renderer.render()

        assert image.shape == (6, 8, 3)


class TestValidation:
    """Test rejection of invalid render settings."""

    def test_zero_samples(self, sphere_scene):
        sphere_scene.camera = Camera(antialias_samples=0)
        with pytest.raises(ValueError, match="antialias_samples"):
            render(sphere_scene)

    def test_zero_depth(self, sphere_scene):
        with pytest.raises(ValueError, match="max_depth"):
            render(sphere_scene, max_depth=0)

    def test_empty_image(self, sphere_scene):
        sphere_scene.image = ImageConfig(width=10, height=10, scale=0.05)
        with pytest.raises(ValueError, match="dimensions"):
            render(sphere_scene)

    def test_zero_workers(self, sphere_scene):
        with pytest.raises(ValueError, match="workers"):
            Renderer(sphere_scene, workers=0)

    def test_repr(self, sphere_scene):
        assert repr(Renderer(sphere_scene, workers=2, seed=9)) == (
            "Renderer(width=8, height=6, workers=2, seed=9)"
        )
