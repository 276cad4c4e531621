"""Tests for the glass material.

Tests cover:
- Parameter validation
- Entering and exiting refraction
- Total internal reflection falls back to mirror reflection
- Fresnel reflection probability
"""

import math

import numpy as np
import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Vec3
from pathtracer.geometry import HitRecord
from pathtracer.materials import GlassMaterial

UP = Vec3(0.0, 1.0, 0.0)


class TestGlassValidation:
    """Tests for parameter validation."""

    @pytest.mark.parametrize("ior", [0.0, -1.5])
    def test_rejects_non_positive_index(self, ior):
        with pytest.raises(ValueError, match="refraction"):
            GlassMaterial(Vec3(1.0, 1.0, 1.0), refractive_index=ior)

    def test_to_config(self):
        config = GlassMaterial(Vec3(0.9, 0.9, 0.9), refractive_index=1.33).to_config()
        assert config == {"type": "glass", "albedo": [0.9, 0.9, 0.9], "refractive_index": 1.33}


class TestGlassScatter:
    """Tests for refraction and reflection."""

    def test_entering_bends_toward_normal(self, glass):
        theta_i = math.radians(45.0)
        direction = Vec3(math.sin(theta_i), -math.cos(theta_i), 0.0)
        ray = Ray(-direction, direction)
        hit = HitRecord(t=1.0, normal=UP)
        refracted = 0
        rng = np.random.default_rng(3)
        for _ in range(200):
            scattered, attenuation = glass.scatter(ray, hit, rng)
            assert attenuation == Vec3(1.0, 1.0, 1.0)
            if scattered.direction.y < 0.0:
                refracted += 1
                sin_t = scattered.direction.x / scattered.direction.length()
                assert sin_t == pytest.approx(math.sin(theta_i) / 1.5)
        # Schlick reflectance at 45 degrees is about 5%
        assert refracted > 150

    def test_exiting_uses_inverted_normal(self, glass, rng):
        """A ray leaving the glass at normal incidence keeps going outward."""
        ray = Ray(Vec3(0.0, -1.0, 0.0), Vec3(0.0, 1.0, 0.0))
        hit = HitRecord(t=1.0, normal=UP)
        outward = 0
        for _ in range(100):
            scattered, _ = glass.scatter(ray, hit, rng)
            outward += scattered.direction.y > 0.0
        assert outward > 80

    def test_total_internal_reflection(self, glass, rng):
        """Grazing exit from glass always mirror-reflects about the surface normal."""
        ray = Ray(Vec3(-0.9, -0.1, 0.0), Vec3(0.9, 0.1, 0.0))
        hit = HitRecord(t=1.0, normal=UP)
        for _ in range(50):
            scattered, _ = glass.scatter(ray, hit, rng)
            expected = Vec3(0.9, -0.1, 0.0).normalized()
            assert scattered.direction.x == pytest.approx(expected.x)
            assert scattered.direction.y == pytest.approx(expected.y)

    def test_scatter_origin_is_hit_point(self, glass, rng):
        ray = Ray(Vec3(0.0, 2.0, 0.0), Vec3(0.0, -1.0, 0.0))
        scattered, _ = glass.scatter(ray, HitRecord(t=2.0, normal=UP), rng)
        assert scattered.origin == Vec3(0.0, 0.0, 0.0)
