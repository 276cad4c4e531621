"""Ray data structure and vector utilities for Monte Carlo ray tracing.

This module provides the Ray dataclass together with the reflection,
refraction and random sampling helpers shared by the materials and the
camera.

Every sampling helper takes an explicit ``numpy.random.Generator``. There is
no module-level random state: each render worker owns its generator and
threads it through every call that needs entropy.

Example:
    >>> import numpy as np
    >>> ray = Ray(origin=Vec3(0.0, 0.0, 0.0), direction=Vec3(0.0, 0.0, -1.0))
    >>> ray.point_at(5.0)
    Vec3(x=0.0, y=0.0, z=-5.0)
    >>> rng = np.random.default_rng(42)
    >>> random_in_unit_sphere(rng).squared_length() <= 1.0
    True
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from pathtracer.core.vec3 import Vec3


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be
            normalized; intersection and scattering code handle any length.
    """

    origin: Vec3
    direction: Vec3

    def point_at(self, t: float) -> Vec3:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + t * direction.
        """
        return self.origin + self.direction * t


# =============================================================================
# Reflection / Refraction
# =============================================================================


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal: v - 2(v . n)n.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The mirror-reflected direction.
    """
    return incident - normal * (2.0 * incident.dot(normal))


def refract(incident: Vec3, normal: Vec3, ni_over_nt: float) -> Vec3 | None:
    """Refract an incident vector through a surface using Snell's law.

    Args:
        incident: The incoming direction vector (any length, normalized here).
        normal: The outward normal on the incident side (unit length).
        ni_over_nt: Ratio of refractive indices n_incident / n_transmitted.

    Returns:
        The refracted direction, or None when refraction is impossible
        (total internal reflection, discriminant <= 0).
    """
    uv = incident.normalized()
    dt = uv.dot(normal)
    discriminant = 1.0 - ni_over_nt * ni_over_nt * (1.0 - dt * dt)
    if discriminant > 0.0:
        return (uv - normal * dt) * ni_over_nt - normal * math.sqrt(discriminant)
    return None


def schlick(cosine: float, ref_idx: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    r0 = (1 - n) / (1 + n); R(cos) = r0^2 + (1 - r0^2)(1 - cos)^5.

    Args:
        cosine: Cosine of the angle between incident direction and normal.
        ref_idx: Refractive index of the material.

    Returns:
        The approximate reflection probability.
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0sq = r0 * r0
    return r0sq + (1.0 - r0sq) * (1.0 - cosine) ** 5


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
    """Generate a random point inside the unit sphere.

    Rejection sampling: components are drawn uniformly from [-1, 1] until
    the squared length is <= 1.

    Args:
        rng: The caller's private random generator.

    Returns:
        A random point with squared length <= 1.
    """
    while True:
        x, y, z = rng.random(3) * 2.0 - 1.0
        p = Vec3(float(x), float(y), float(z))
        if p.squared_length() <= 1.0:
            return p


def random_in_unit_disk(rng: np.random.Generator) -> Vec3:
    """Generate a random point inside the unit disk in the xy-plane.

    Used for thin-lens depth of field. Rejection sampling with a strict
    ``< 1`` acceptance test.

    Args:
        rng: The caller's private random generator.

    Returns:
        A random point (x, y, 0) with x^2 + y^2 < 1.
    """
    while True:
        x, y = (rng.random(2) - 0.5) * 2.0
        p = Vec3(float(x), float(y), 0.0)
        if p.squared_length() < 1.0:
            return p
