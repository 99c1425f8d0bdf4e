"""Unit tests for plane intersection.

Tests cover:
- Ray hitting the plane from either side
- Parallel rays and planes behind the ray
- Rays leaving the plane surface
"""

import pytest

from whitted.core.ray import Ray
from whitted.core.vector import Vector3
from whitted.geometry import NO_HIT, Plane

EPSILON = 1e-3


@pytest.fixture
def floor():
    """Plane at y = -1 facing up."""
    return Plane(Vector3(0.0, -1.0, 0.0), Vector3(0.0, 1.0, 0.0), id="floor")


class TestPlaneIntersection:
    """Tests for ray-plane intersection."""

    def test_hit_from_above(self, floor):
        ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, -1.0, 0.0))
        assert floor.intersect(ray, EPSILON) == pytest.approx(1.0)

    def test_oblique_hit(self, floor):
        """Test a 45 degree ray travels sqrt(2) to the plane."""
        ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, -1.0, 1.0))
        assert floor.intersect(ray, EPSILON) == pytest.approx(2.0**0.5)

    def test_hit_from_below(self, floor):
        """Test that planes are two-sided."""
        ray = Ray(Vector3(0.0, -3.0, 0.0), Vector3(0.0, 1.0, 0.0))
        assert floor.intersect(ray, EPSILON) == pytest.approx(2.0)

    def test_parallel_ray_misses(self, floor):
        ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0))
        assert floor.intersect(ray, EPSILON) == NO_HIT

    def test_plane_behind_ray_misses(self, floor):
        ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0))
        assert floor.intersect(ray, EPSILON) == NO_HIT

    def test_ray_leaving_surface_misses(self, floor):
        """Test a ray reflected off the plane does not hit it again."""
        ray = Ray(Vector3(0.0, -1.0, 0.0), Vector3(0.0, 1.0, 1.0))
        assert floor.intersect(ray, EPSILON) == NO_HIT


class TestPlaneNormal:
    """Tests for the plane normal."""

    def test_normal_is_constant(self, floor):
        assert floor.normal(Vector3(5.0, -1.0, -7.0)) == Vector3(0.0, 1.0, 0.0)

    def test_to_dict(self, floor):
        data = floor.to_dict()
        assert data["type"] == "plane"
        assert data["point"] == [0.0, -1.0, 0.0]
        assert data["normal"] == [0.0, 1.0, 0.0]
