"""Random spheres demo scene.

This module provides a factory function to create the demo scene rendered by
``examples/render_spheres.py``:

- A huge diffuse ground sphere (radius 500, centered at y = -500)
- Three large spheres (radius 0.5) side by side along the x axis:
  diffuse green-grey at x = -1, fuzzy metal at x = 0, glass at x = 1
- A 16x16 grid of small spheres (radius 0.1) resting on the ground, each
  jittered inside its grid cell and randomly given a diffuse or metal
  material with a random albedo

Small spheres are kept only if they lie within radius 5 of the origin and
more than 0.5 away from the center line of each large sphere, so they never
poke through the large ones.

Example:
    >>> import numpy as np
    >>> from pathtracer.camera import setup_camera
    >>> from pathtracer.scene.random_spheres import create_random_spheres_scene
    >>>
    >>> world, camera_config = create_random_spheres_scene(np.random.default_rng(7))
    >>> camera = setup_camera(camera_config)
    >>> # Now render using the world and camera
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from pathtracer.camera.thin_lens import CameraConfig
from pathtracer.core.vec3 import Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.dielectric import GlassMaterial
from pathtracer.materials.lambertian import DiffuseMaterial
from pathtracer.materials.material import Material
from pathtracer.materials.metal import MetalMaterial
from pathtracer.scene.intersection import HittableList

logger = logging.getLogger(__name__)

# =============================================================================
# Scene Constants
# =============================================================================

LARGE_RADIUS = 0.5
SMALL_RADIUS = 0.1
GROUND_RADIUS = 500.0

# Centers of the three large spheres, left to right
LARGE_CENTERS = (Vec3(-1.0, 0.5, 0.0), Vec3(0.0, 0.5, 0.0), Vec3(1.0, 0.5, 0.0))

# Small spheres must lie within this squared radius of the origin
_MAX_SQUARED_DISTANCE = 25.0

# and farther than this squared distance from each large sphere's base
_MIN_SQUARED_CLEARANCE = 0.25


@dataclass
class RandomSpheresParams:
    """Parameters for configuring the random spheres scene.

    All parameters have defaults matching the classic demo image.

    Attributes:
        grid_min: First grid coordinate (inclusive) along x and z.
        grid_max: Last grid coordinate (exclusive) along x and z.
        grid_spacing: World distance between neighbouring grid cells.
        jitter: Fraction of a cell a small sphere may be offset by.
        metal_probability: Chance that a small sphere is metal rather than
            diffuse.
        diffuse_albedo: Albedo of the left large sphere.
        metal_albedo: Albedo of the middle large sphere.
        metal_fuzz: Fuzz of the middle large sphere.
        glass_albedo: Albedo of the right large sphere.
        glass_refractive_index: Refractive index of the right large sphere.
        ground_albedo: Albedo of the ground sphere.

    Example:
        >>> params = RandomSpheresParams()
        >>> params.grid_max - params.grid_min
        16
        >>> sparse = RandomSpheresParams(metal_probability=0.0)  # all diffuse
    """

    grid_min: int = -11
    grid_max: int = 5
    grid_spacing: float = 0.5
    jitter: float = 0.8
    metal_probability: float = 0.5
    diffuse_albedo: tuple[float, float, float] = (0.5, 0.7, 0.5)
    metal_albedo: tuple[float, float, float] = (0.8, 0.8, 0.8)
    metal_fuzz: float = 0.1
    glass_albedo: tuple[float, float, float] = (0.9, 0.9, 0.9)
    glass_refractive_index: float = 1.5
    ground_albedo: tuple[float, float, float] = (0.3, 0.35, 0.4)

    def __post_init__(self) -> None:
        if self.grid_max < self.grid_min:
            raise ValueError(
                f"grid_max = {self.grid_max} must not be less than grid_min = {self.grid_min}."
            )
        if self.grid_spacing <= 0.0:
            raise ValueError(f"grid_spacing = {self.grid_spacing} must be positive.")
        if not 0.0 <= self.jitter <= 1.0:
            raise ValueError(f"jitter = {self.jitter} is outside [0, 1].")
        if not 0.0 <= self.metal_probability <= 1.0:
            raise ValueError(f"metal_probability = {self.metal_probability} is outside [0, 1].")


def _is_clear(center: Vec3) -> bool:
    if center.squared_length() >= _MAX_SQUARED_DISTANCE:
        return False
    for large in LARGE_CENTERS:
        base = Vec3(large.x, 0.0, large.z)
        if (center - base).squared_length() <= _MIN_SQUARED_CLEARANCE:
            return False
    return True


def _random_small_material(rng: np.random.Generator, metal_probability: float) -> Material:
    # Draw order: selector, albedo r/g/b, then fuzz for metal
    if rng.random() > 1.0 - metal_probability:
        albedo = tuple(rng.random(3).tolist())
        return MetalMaterial(albedo, fuzz=float(rng.random()))
    return DiffuseMaterial(tuple(rng.random(3).tolist()))


def create_random_spheres_scene(
    rng: np.random.Generator,
    params: RandomSpheresParams | None = None,
) -> tuple[HittableList, CameraConfig]:
    """Create the random spheres demo scene.

    Args:
        rng: Random generator used for sphere placement and materials.
        params: Optional scene parameters. Defaults reproduce the demo.

    Returns:
        A tuple of (world, camera_config). The camera looks from (6, 1.2, 3)
        at the middle large sphere with a 25 degree vertical field of view;
        set its ``aspect_ratio`` to match the output image. The framing is
        wider than a 25 degree horizontal view (see ``CameraConfig``).
    """
    if params is None:
        params = RandomSpheresParams()

    world = HittableList()
    large_materials = (
        DiffuseMaterial(params.diffuse_albedo),
        MetalMaterial(params.metal_albedo, fuzz=params.metal_fuzz),
        GlassMaterial(params.glass_albedo, refractive_index=params.glass_refractive_index),
    )
    for center, material in zip(LARGE_CENTERS, large_materials):
        world.add(Sphere(center, LARGE_RADIUS, material))
    world.add(
        Sphere(Vec3(0.0, -GROUND_RADIUS, 0.0), GROUND_RADIUS, DiffuseMaterial(params.ground_albedo))
    )

    # =========================================================================
    # Small spheres
    # =========================================================================
    for x in range(params.grid_min, params.grid_max):
        for z in range(params.grid_min, params.grid_max):
            jitter_x, jitter_z = rng.random(2).tolist()
            center = Vec3(
                params.grid_spacing * (x + params.jitter * jitter_x),
                SMALL_RADIUS,
                params.grid_spacing * (z + params.jitter * jitter_z),
            )
            if _is_clear(center):
                material = _random_small_material(rng, params.metal_probability)
                world.add(Sphere(center, SMALL_RADIUS, material))

    logger.debug("Random spheres scene built with %d spheres", len(world))
    return world, CameraConfig()
