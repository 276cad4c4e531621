"""Tests for the metal material.

Tests cover:
- Parameter validation
- Perfect mirror reflection with zero fuzz
- Fuzz perturbation bounds
- No filtering of rays scattered below the surface
"""

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Vec3
from pathtracer.geometry import HitRecord
from pathtracer.materials import MetalMaterial

UP = Vec3(0.0, 1.0, 0.0)


class TestMetalValidation:
    """Tests for parameter validation."""

    @pytest.mark.parametrize("fuzz", [-0.1, 1.5])
    def test_rejects_fuzz_outside_unit_range(self, fuzz):
        with pytest.raises(ValueError, match="Fuzz"):
            MetalMaterial(Vec3(0.5, 0.5, 0.5), fuzz=fuzz)

    def test_rejects_bad_albedo(self):
        with pytest.raises(ValueError, match="Albedo"):
            MetalMaterial((0.5, 2.0, 0.5))


class TestMetalScatter:
    """Tests for specular scattering."""

    def test_perfect_mirror(self, rng):
        ray = Ray(Vec3(-1.0, 1.0, 0.0), Vec3(1.0, -1.0, 0.0))
        hit = HitRecord(t=1.0, normal=UP)
        scattered, attenuation = MetalMaterial(Vec3(0.9, 0.8, 0.7)).scatter(ray, hit, rng)

        assert scattered.origin == Vec3(0.0, 0.0, 0.0)
        expected = Vec3(1.0, 1.0, 0.0).normalized()
        assert scattered.direction.x == pytest.approx(expected.x)
        assert scattered.direction.y == pytest.approx(expected.y)
        assert scattered.direction.z == pytest.approx(0.0)
        assert attenuation == Vec3(0.9, 0.8, 0.7)

    def test_reflection_uses_unit_incident(self, rng):
        """The mirror direction has unit length whatever the ray length."""
        ray = Ray(Vec3(0.0, 5.0, 0.0), Vec3(0.0, -5.0, 0.0))
        hit = HitRecord(t=1.0, normal=UP)
        scattered, _ = MetalMaterial(Vec3(0.5, 0.5, 0.5)).scatter(ray, hit, rng)
        assert scattered.direction.length() == pytest.approx(1.0)

    def test_fuzz_perturbation_bounded(self, rng):
        ray = Ray(Vec3(0.0, 1.0, 0.0), Vec3(0.0, -1.0, 0.0))
        hit = HitRecord(t=1.0, normal=UP)
        material = MetalMaterial(Vec3(0.5, 0.5, 0.5), fuzz=0.3)
        for _ in range(200):
            scattered, _ = material.scatter(ray, hit, rng)
            assert (scattered.direction - UP).length() <= 0.3 + 1e-12

    def test_below_surface_rays_are_kept(self, rng):
        """A grazing ray with full fuzz may scatter below the surface; it is returned as is."""
        ray = Ray(Vec3(-1.0, 0.01, 0.0), Vec3(1.0, -0.01, 0.0))
        hit = HitRecord(t=1.0, normal=UP)
        material = MetalMaterial(Vec3(0.5, 0.5, 0.5), fuzz=1.0)
        below = 0
        for _ in range(200):
            scattered, attenuation = material.scatter(ray, hit, rng)
            assert attenuation == Vec3(0.5, 0.5, 0.5)
            below += scattered.direction.dot(UP) < 0.0
        assert below > 0

    def test_to_config(self):
        config = MetalMaterial(Vec3(0.5, 0.5, 0.5), fuzz=0.25).to_config()
        assert config == {"type": "metal", "albedo": [0.5, 0.5, 0.5], "fuzz": 0.25}
