"""Geometry module for shape primitives.

Components:
    hittable: The ``Hittable`` intersection contract and ``HitRecord``
    sphere: Sphere primitive with ray-sphere intersection

Ray-object intersection follows the pattern:
    record = shape.hit(ray, t_min, t_max)
    if record.t > 0: ...
"""

from .hittable import MISS, HitRecord, Hittable
from .sphere import Sphere

__all__ = [
    "Hittable",
    "HitRecord",
    "MISS",
    "Sphere",
]
