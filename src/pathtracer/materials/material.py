"""Base material interface.

A material decides, given a hit, what the next ray is and how much light it
carries. ``scatter`` returns ``(scattered_ray, attenuation)``; the integrator
multiplies the radiance arriving along the scattered ray by the attenuation.

The variant set is fixed: ``DiffuseMaterial``, ``MetalMaterial`` and
``GlassMaterial``. The base class itself behaves like a 50% grey diffuse
surface so a bare ``Material()`` is still a usable placeholder.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from pathtracer.core.ray import Ray, random_in_unit_sphere
from pathtracer.core.vec3 import Vec3

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord

DEFAULT_ATTENUATION = Vec3(0.5, 0.5, 0.5)


class Material:
    """Scattering policy attached to a surface."""

    __slots__ = ()

    def scatter(self, ray: Ray, hit: HitRecord, rng: np.random.Generator) -> tuple[Ray, Vec3]:
        """Scatter an incoming ray off a surface.

        Args:
            ray: The incoming ray.
            hit: The intersection record produced for ``ray``.
            rng: The calling worker's private random generator.

        Returns:
            A tuple of (scattered_ray, attenuation).
        """
        scattered = Ray(ray.point_at(hit.t), hit.normal + random_in_unit_sphere(rng))
        return scattered, DEFAULT_ATTENUATION

    def to_config(self) -> dict:
        """Serialize the material parameters to a JSON-compatible dict."""
        return {"type": "default"}


def validate_albedo(albedo: Iterable[float]) -> None:
    """Check that every albedo component lies in [0, 1].

    Raises:
        ValueError: If any component is outside [0, 1].
    """
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
