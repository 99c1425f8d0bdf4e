"""Materials module for surface shading parameters.

Components:
    material: The Material weights (diffuse, specular, ambient), the mirror
        reflection formula and the stochastic diffuse bounce ray

Every surface uses the same material model; the integrator combines its
terms in the recursive shading evaluator.
"""

from .material import Material

__all__ = [
    "Material",
]
