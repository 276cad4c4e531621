"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules: a seeded random
generator, a few standard materials and small scenes that render quickly.
"""

import numpy as np
import pytest

from pathtracer.camera import CameraConfig, setup_camera
from pathtracer.config import RenderConfig
from pathtracer.core.vec3 import Vec3
from pathtracer.geometry import Sphere
from pathtracer.materials import DiffuseMaterial, GlassMaterial, MetalMaterial
from pathtracer.scene.intersection import HittableList

SEED = 42


@pytest.fixture
def rng():
    """A freshly seeded generator, so every test sees the same draws."""
    return np.random.default_rng(SEED)


@pytest.fixture
def grey():
    return DiffuseMaterial(Vec3(0.5, 0.5, 0.5))


@pytest.fixture
def mirror():
    return MetalMaterial(Vec3(0.8, 0.8, 0.8), fuzz=0.0)


@pytest.fixture
def glass():
    return GlassMaterial(Vec3(1.0, 1.0, 1.0), refractive_index=1.5)


@pytest.fixture
def small_world(grey, mirror, glass):
    """Three spheres on a ground sphere, like a tiny version of the demo scene."""
    return HittableList(
        [
            Sphere(Vec3(-1.0, 0.5, 0.0), 0.5, grey),
            Sphere(Vec3(0.0, 0.5, 0.0), 0.5, mirror),
            Sphere(Vec3(1.0, 0.5, 0.0), 0.5, glass),
            Sphere(Vec3(0.0, -500.0, 0.0), 500.0, grey),
        ]
    )


@pytest.fixture
def tiny_config():
    """A render small enough to trace in well under a second."""
    return RenderConfig(
        width=8,
        height=6,
        rays_per_pixel=2,
        n_work_chunks=5,
        n_max_threads=2,
        seed=SEED,
    )


@pytest.fixture
def tiny_camera(tiny_config):
    return setup_camera(CameraConfig(aspect_ratio=tiny_config.aspect_ratio))
