"""Whitted-style recursive ray tracer.

This package renders scenes of spheres and infinite planes lit by point
lights, with:
- Lambertian direct lighting with hard shadows
- A single stochastic diffuse bounce per hit
- Mirror reflection and a flat ambient term
- Jittered supersampling and scanline-parallel rendering

Subpackages:
    core: Vectors, rays, the recursive integrator and the frame renderer
    geometry: Sphere and plane primitives and their intersection tests
    materials: Surface material weights and reflection/scatter rays
    scene: Scene data, lights, closest-hit queries and the default scene
    camera: Pinhole camera frame and primary ray generation
    preview: PNG export and image comparison
"""

__version__ = "0.1.0"
