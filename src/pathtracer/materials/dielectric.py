"""Dielectric (glass) material implementation.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when no refracted direction exists

Sphere normals always point outward, so the material works out which side
the ray is on from the sign of ``dot(direction, normal)``:

    - positive: the ray is leaving the glass. The outward normal used for
      refraction is ``-normal`` and the index ratio is ``n``.
    - otherwise: the ray is entering. The outward normal is ``normal`` and
      the index ratio is ``1 / n``.

One uniform draw is compared against the Schlick reflectance: above it the
ray refracts (when Snell's law allows), otherwise it mirror-reflects.

Example:
    >>> from pathtracer.core.vec3 import Vec3
    >>> glass = GlassMaterial(albedo=Vec3(0.9, 0.9, 0.9), refractive_index=1.5)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from pathtracer.core.ray import Ray, reflect, refract, schlick
from pathtracer.core.vec3 import Vec3
from pathtracer.materials.material import Material, validate_albedo

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord


class GlassMaterial(Material):
    """Dielectric (glass/water) material.

    Attributes:
        albedo: Color tint applied to both reflected and refracted light.
        refractive_index: Index of refraction (> 0). Common values:
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
    """

    __slots__ = ("albedo", "refractive_index")

    def __init__(
        self,
        albedo: Vec3 | tuple[float, float, float],
        refractive_index: float = 1.5,
    ) -> None:
        """Create a glass material.

        Raises:
            ValueError: If any albedo component is outside [0, 1].
            ValueError: If refractive_index is not positive.
        """
        validate_albedo(albedo)
        if refractive_index <= 0.0:
            raise ValueError(
                f"Index of refraction = {refractive_index} is not positive."
            )
        self.albedo = Vec3.from_sequence(albedo)
        self.refractive_index = float(refractive_index)

    def scatter(self, ray: Ray, hit: HitRecord, rng: np.random.Generator) -> tuple[Ray, Vec3]:
        direction = ray.direction
        ref_idx = self.refractive_index
        d_dot_n = direction.dot(hit.normal)

        if d_dot_n > 0.0:
            outward_normal = -hit.normal
            ni_over_nt = ref_idx
            cosine = ref_idx * d_dot_n / direction.length()
        else:
            outward_normal = hit.normal
            ni_over_nt = 1.0 / ref_idx
            cosine = -d_dot_n / direction.length()

        origin = ray.point_at(hit.t)
        if rng.random() > schlick(cosine, ref_idx):
            refracted = refract(direction, outward_normal, ni_over_nt)
            if refracted is not None:
                return Ray(origin, refracted), self.albedo

        reflected = reflect(direction.normalized(), hit.normal)
        return Ray(origin, reflected), self.albedo

    def to_config(self) -> dict:
        return {
            "type": "glass",
            "albedo": list(self.albedo),
            "refractive_index": self.refractive_index,
        }

    def __repr__(self) -> str:
        return f"GlassMaterial(albedo={self.albedo!r}, refractive_index={self.refractive_index!r})"
