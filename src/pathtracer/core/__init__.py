"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vec3: Immutable 3D vector, also used for RGB colors
    ray: Ray data structure, reflection/refraction and random sampling
    integrator: Radiance estimator with the depth cutoff and sky gradient
    tiles: Work partitioning, per-tile sampling and RGBA8 conversion
    progressive: Multi-threaded tile scheduler and frame buffer

All randomness flows through explicit ``numpy.random.Generator`` arguments;
nothing in the core keeps global random state.
"""

from .ray import (
    Ray,
    random_in_unit_disk,
    random_in_unit_sphere,
    reflect,
    refract,
    schlick,
)
from .vec3 import ONE, ZERO, Vec3

# Note: integrator, tiles and progressive are NOT imported here to avoid circular imports.
# Import directly from pathtracer.core.integrator or pathtracer.core.progressive when needed.
#
# For rendering, use:
#   from pathtracer.core.progressive import ProgressiveRenderer

__all__ = [
    "Vec3",
    "ZERO",
    "ONE",
    "Ray",
    "reflect",
    "refract",
    "schlick",
    "random_in_unit_sphere",
    "random_in_unit_disk",
]
