"""Scene collection and nearest-hit ray queries.

``HittableList`` is the scene: an ordered collection of hittables that is
itself hittable, so lists can be nested. ``hit`` is a linear scan that keeps
the record with the smallest positive ``t``. There is no spatial index; the
scenes rendered here hold tens of spheres.

Example:
    >>> from pathtracer.core.vec3 import Vec3
    >>> from pathtracer.geometry import Sphere
    >>> from pathtracer.materials import DiffuseMaterial
    >>> world = HittableList()
    >>> world.add(Sphere(Vec3(0.0, 0.0, -1.0), 0.5, DiffuseMaterial(Vec3(0.5, 0.5, 0.5))))
    >>> len(world)
    1
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import MISS, HitRecord, Hittable


class HittableList(Hittable):
    """An ordered collection of hittable objects.

    The list exclusively owns its objects. Insertion order only matters for
    ties: equal ``t`` values keep the object scanned first.
    """

    __slots__ = ("_objects",)

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self._objects: list[Hittable] = list(objects)

    def add(self, obj: Hittable) -> None:
        """Append an object to the scene."""
        self._objects.append(obj)

    def clear(self) -> None:
        self._objects.clear()

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self._objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord:
        """Return the nearest hit among all objects, or MISS.

        Args:
            ray: The ray to test.
            t_min: Minimum accepted ray parameter.
            t_max: Maximum accepted ray parameter.

        Returns:
            The record with the smallest positive t, or MISS if no object
            reports t > 0.
        """
        closest = MISS
        for obj in self._objects:
            record = obj.hit(ray, t_min, t_max)
            if record.t > 0.0 and (closest.t < 0.0 or record.t < closest.t):
                closest = record
        return closest
