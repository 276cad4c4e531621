"""Metal (specular reflective) material implementation.

Metals mirror-reflect the normalized incident direction about the surface
normal:

    R = I - 2(I . N)N

and perturb the result by ``fuzz`` times a random point in the unit sphere
to model roughness. A fuzzed direction that ends up below the surface is not
filtered out; it is typically absorbed by the geometry on the next bounce.

Example:
    >>> from pathtracer.core.vec3 import Vec3
    >>> chrome = MetalMaterial(albedo=Vec3(0.8, 0.8, 0.8), fuzz=0.1)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from pathtracer.core.ray import Ray, random_in_unit_sphere, reflect
from pathtracer.core.vec3 import Vec3
from pathtracer.materials.material import Material, validate_albedo

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord


class MetalMaterial(Material):
    """Metal (specular reflective) material.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: The surface roughness in [0, 1]. 0 = perfect mirror.
    """

    __slots__ = ("albedo", "fuzz")

    def __init__(self, albedo: Vec3 | tuple[float, float, float], fuzz: float = 0.0) -> None:
        """Create a metal material.

        Raises:
            ValueError: If any albedo component is outside [0, 1].
            ValueError: If fuzz is outside [0, 1].
        """
        validate_albedo(albedo)
        if fuzz < 0.0 or fuzz > 1.0:
            raise ValueError(
                f"Fuzz = {fuzz} is outside [0, 1]. "
                "Fuzz must be between 0 (perfect mirror) and 1 (maximum roughness)."
            )
        self.albedo = Vec3.from_sequence(albedo)
        self.fuzz = float(fuzz)

    def scatter(self, ray: Ray, hit: HitRecord, rng: np.random.Generator) -> tuple[Ray, Vec3]:
        reflected = reflect(ray.direction.normalized(), hit.normal)
        direction = reflected + random_in_unit_sphere(rng) * self.fuzz
        return Ray(ray.point_at(hit.t), direction), self.albedo

    def to_config(self) -> dict:
        return {"type": "metal", "albedo": list(self.albedo), "fuzz": self.fuzz}

    def __repr__(self) -> str:
        return f"MetalMaterial(albedo={self.albedo!r}, fuzz={self.fuzz!r})"
