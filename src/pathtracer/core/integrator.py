"""Path tracing integrator for Monte Carlo light transport.

``color`` estimates the radiance arriving along one sampled ray. The path
bounces from surface to surface according to each material's ``scatter``,
multiplying the attenuations along the way, until it either escapes to the
sky or exceeds ``MAX_DEPTH``.

The estimator is written as a loop that carries the accumulated attenuation
(the path throughput) instead of recursing once per bounce. The result is
identical to the recursive form

    color(ray, depth) = black                                if depth > 50
                      = color(scattered, depth + 1) * atten  on hit
                      = sky(ray)                             on miss

There is no light sampling and no Russian roulette: the sky gradient is the
only light source, and variance drops only with the number of samples per
pixel taken by the caller.

Example:
    >>> import numpy as np
    >>> from pathtracer.scene.intersection import HittableList
    >>> ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0))
    >>> color(HittableList(), ray, np.random.default_rng(42))
    Vec3(x=0.5, y=0.7, z=1.0)
"""

from __future__ import annotations

import math

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import ONE, ZERO, Vec3
from pathtracer.geometry.hittable import Hittable
from pathtracer.materials.material import Material

# =============================================================================
# Rendering Constants
# =============================================================================

# Paths deeper than this return black
MAX_DEPTH = 50

# Lower ray bound; suppresses self-intersection at scattered ray origins
T_MIN = 0.001
T_MAX = math.inf

# Sky gradient endpoints
HORIZON_COLOR = ONE
ZENITH_COLOR = Vec3(0.5, 0.7, 1.0)

# Used when a hit record carries no material
_FALLBACK_MATERIAL = Material()


def background(direction: Vec3) -> Vec3:
    """Sky color for a ray that escapes the scene.

    Linear blend between white and sky blue, weighted by
    ``a = 0.5 * (normalized_direction.y + 1)``: straight down (a = 0) is
    white, straight up (a = 1) is sky blue.

    Args:
        direction: The escaping ray's direction (any non-zero length).

    Returns:
        The background radiance.
    """
    a = 0.5 * (direction.normalized().y + 1.0)
    return HORIZON_COLOR * (1.0 - a) + ZENITH_COLOR * a


def color(
    scene: Hittable,
    ray: Ray,
    rng: np.random.Generator,
    depth: int = 1,
) -> Vec3:
    """Estimate the radiance along a ray.

    Args:
        scene: The scene to trace against (usually a HittableList).
        ray: The ray to trace.
        rng: The calling worker's private random generator.
        depth: Bounce counter of ``ray``. Camera rays start at 1.

    Returns:
        The radiance estimate (RGB). Exactly black once the depth cutoff
        is exceeded; the scene is not queried in that case.
    """
    throughput = ONE
    while depth <= MAX_DEPTH:
        record = scene.hit(ray, T_MIN, T_MAX)
        if not record.t > 0.0:
            return throughput * background(ray.direction)

        material = record.material if record.material is not None else _FALLBACK_MATERIAL
        ray, attenuation = material.scatter(ray, record, rng)
        throughput = throughput * attenuation
        depth += 1

    return ZERO
