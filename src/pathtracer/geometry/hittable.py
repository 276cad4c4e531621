"""Intersection contract shared by every geometric object.

A ``Hittable`` is anything a ray can intersect. ``hit`` returns a
``HitRecord``; a miss is reported with the ``MISS`` sentinel (``t == -1``)
rather than ``None`` so callers can test ``record.t > 0`` uniformly.

The variant set is fixed: ``Sphere`` and the ``HittableList`` collection
(see ``pathtracer.scene.intersection``). New shapes subclass ``Hittable``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import ZERO, Vec3

if TYPE_CHECKING:
    from pathtracer.materials.material import Material


@dataclass(frozen=True, slots=True)
class HitRecord:
    """Record of a ray-object intersection.

    Attributes:
        t: Ray parameter of the intersection. -1 for a miss; any consumer
            must treat t <= 0 as "no hit".
        normal: Unit surface normal at the hit point, pointing away from the
            sphere center (not flipped toward the incoming ray).
        material: The material of the object that was hit, borrowed from
            the object. None for a miss.
    """

    t: float
    normal: Vec3
    material: Material | None = None

    @property
    def is_hit(self) -> bool:
        return self.t > 0.0


MISS = HitRecord(t=-1.0, normal=ZERO, material=None)


class Hittable:
    """Base class for objects that can be intersected by a ray.

    The default implementation is an object with no geometry: it never
    reports a hit.
    """

    __slots__ = ()

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord:
        """Intersect ``ray`` with this object within ``[t_min, t_max]``.

        Args:
            ray: The ray to test.
            t_min: Minimum accepted ray parameter (inclusive).
            t_max: Maximum accepted ray parameter (inclusive).

        Returns:
            The nearest HitRecord, or MISS.
        """
        return MISS
