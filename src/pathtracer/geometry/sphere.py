"""Sphere primitive with ray-sphere intersection.

The intersection solves the quadratic

    a*t^2 + b*t + c = 0

with
    a = dot(direction, direction)
    b = 2 * dot(origin - center, direction)
    c = dot(origin - center, origin - center) - radius^2

The smaller root is tried first; if it falls outside ``[t_min, t_max]`` the
larger root is tried. The returned normal always points away from the
center, also when the ray starts inside the sphere. Materials that care
about the side (glass) check the sign of ``dot(direction, normal)``
themselves.

Example:
    >>> from pathtracer.materials import DiffuseMaterial
    >>> sphere = Sphere(Vec3(0.0, 0.0, -1.0), 0.5, DiffuseMaterial(Vec3(0.5, 0.5, 0.5)))
    >>> ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
    >>> sphere.hit(ray, 0.0, float("inf")).t
    0.5
"""

from __future__ import annotations

import math

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Vec3
from pathtracer.geometry.hittable import MISS, HitRecord, Hittable
from pathtracer.materials.material import Material


class Sphere(Hittable):
    """A sphere defined by center point, radius and the material it owns.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (>= 0). A zero radius is a
            degenerate but legal sphere; a ray aimed exactly at its center
            gets a non-finite normal.
        material: The material used to scatter rays hitting this sphere.
    """

    __slots__ = ("center", "radius", "material")

    def __init__(self, center: Vec3, radius: float, material: Material) -> None:
        """Create a sphere.

        Raises:
            ValueError: If radius is negative.
        """
        if radius < 0.0:
            raise ValueError(f"Sphere radius = {radius} is negative.")
        self.center = center
        self.radius = float(radius)
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord:
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        b = 2.0 * oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = b * b - 4.0 * a * c
        # A zero-length direction (degenerate scatter) cannot hit anything.
        if discriminant < 0.0 or a == 0.0:
            return MISS

        sqrt_d = math.sqrt(discriminant)
        t = (-b - sqrt_d) / (2.0 * a)
        if t < t_min or t > t_max:
            t = (-b + sqrt_d) / (2.0 * a)
        if t < t_min or t > t_max:
            return MISS

        normal = (ray.point_at(t) - self.center).normalized()
        return HitRecord(t=t, normal=normal, material=self.material)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center!r}, radius={self.radius!r}, material={self.material!r})"
