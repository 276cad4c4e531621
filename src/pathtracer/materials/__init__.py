"""Materials module for surface scattering models.

Components:
    material: Base ``Material`` interface (50% grey diffuse fallback)
    lambertian: Ideal diffuse reflection
    metal: Mirror reflection with optional fuzz
    dielectric: Glass with refraction and Schlick Fresnel reflectance

Each material provides ``scatter(ray, hit, rng) -> (scattered_ray,
attenuation)``. Materials are immutable and shared read-only across render
workers; all randomness comes from the generator passed in by the caller.
"""

from .dielectric import GlassMaterial
from .lambertian import DiffuseMaterial
from .material import DEFAULT_ATTENUATION, Material, validate_albedo
from .metal import MetalMaterial

__all__ = [
    "Material",
    "DEFAULT_ATTENUATION",
    "validate_albedo",
    "DiffuseMaterial",
    "MetalMaterial",
    "GlassMaterial",
]
