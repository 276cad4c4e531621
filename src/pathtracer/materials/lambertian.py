"""Lambertian (ideal diffuse) material implementation.

Diffuse scattering sends the ray toward ``normal + p`` where ``p`` is a
uniform random point inside the unit sphere. This approximates cosine
weighted reflection without building a tangent frame.

Example:
    >>> import numpy as np
    >>> from pathtracer.core.vec3 import Vec3
    >>> matte = DiffuseMaterial(albedo=Vec3(0.8, 0.3, 0.3))
    >>> # scattered, attenuation = matte.scatter(ray, hit, np.random.default_rng())
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from pathtracer.core.ray import Ray, random_in_unit_sphere
from pathtracer.core.vec3 import Vec3
from pathtracer.materials.material import Material, validate_albedo

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord


class DiffuseMaterial(Material):
    """Lambertian (ideal diffuse) material.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
    """

    __slots__ = ("albedo",)

    def __init__(self, albedo: Vec3 | tuple[float, float, float]) -> None:
        """Create a diffuse material.

        Raises:
            ValueError: If any albedo component is outside [0, 1].
        """
        validate_albedo(albedo)
        self.albedo = Vec3.from_sequence(albedo)

    def scatter(self, ray: Ray, hit: HitRecord, rng: np.random.Generator) -> tuple[Ray, Vec3]:
        """Scatter toward a random point in the unit sphere around the normal.

        The attenuation is the albedo. A sampled direction that cancels the
        normal exactly is not corrected; the resulting zero-length ray simply
        misses everything on the next bounce.
        """
        scattered = Ray(ray.point_at(hit.t), hit.normal + random_in_unit_sphere(rng))
        return scattered, self.albedo

    def to_config(self) -> dict:
        return {"type": "diffuse", "albedo": list(self.albedo)}

    def __repr__(self) -> str:
        return f"DiffuseMaterial(albedo={self.albedo!r})"
