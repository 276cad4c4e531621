"""Scene serialization for sphere scenes.

Scenes are ``HittableList`` objects holding ``Sphere`` primitives. This module
converts them to and from a ``SceneConfig``, a JSON-compatible description in
which materials are listed once and referenced from spheres by index:

    {
        "materials": [
            {"type": "diffuse", "albedo": [0.3, 0.35, 0.4]},
            {"type": "glass", "albedo": [0.9, 0.9, 0.9], "refractive_index": 1.5}
        ],
        "spheres": [
            {"center": [0, -500, 0], "radius": 500, "material_id": 0},
            {"center": [1, 0.5, 0], "radius": 0.5, "material_id": 1}
        ]
    }

Materials shared by several spheres are written once. Loading the config
again shares one material instance between those spheres.

Example:
    >>> from pathtracer.scene.manager import SceneConfig, scene_from_config
    >>> config = SceneConfig.from_dict(data)
    >>> world = scene_from_config(config)
    >>> len(world)
    2
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any

from pathtracer.core.vec3 import Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.dielectric import GlassMaterial
from pathtracer.materials.lambertian import DiffuseMaterial
from pathtracer.materials.material import Material
from pathtracer.materials.metal import MetalMaterial
from pathtracer.scene.intersection import HittableList

logger = logging.getLogger(__name__)


class MaterialType(IntEnum):
    """Enumeration of supported material types.

    The lowercase member name is the ``"type"`` value used in configs.
    """

    DIFFUSE = 0
    METAL = 1
    GLASS = 2
    DEFAULT = 3

    @classmethod
    def from_name(cls, name: str) -> MaterialType:
        """Look up a material type by its config name.

        Raises:
            ValueError: If the name is not a known material type.
        """
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown material type: {name}") from None


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        materials: List of material configurations.
        spheres: List of sphere configurations. ``material_id`` indexes
            ``materials``.
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"materials": list(self.materials), "spheres": list(self.spheres)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneConfig:
        return cls(
            materials=list(data.get("materials", [])),
            spheres=list(data.get("spheres", [])),
        )


# =============================================================================
# Materials
# =============================================================================


def material_from_config(config: dict[str, Any]) -> Material:
    """Create a material from its configuration dict.

    Args:
        config: Dict with a ``"type"`` key ("diffuse", "metal", "glass" or
            "default") and the material's parameters. Missing parameters
            take the material defaults. "default" is the base grey
            ``Material`` and takes no parameters.

    Returns:
        The material instance.

    Raises:
        ValueError: If the type is unknown or a parameter is invalid.
    """
    material_type = MaterialType.from_name(str(config.get("type", "")))
    if material_type == MaterialType.DEFAULT:
        return Material()

    albedo = _as_albedo(config.get("albedo", (0.5, 0.5, 0.5)))

    if material_type == MaterialType.DIFFUSE:
        return DiffuseMaterial(albedo)
    if material_type == MaterialType.METAL:
        return MetalMaterial(albedo, fuzz=float(config.get("fuzz", 0.0)))
    return GlassMaterial(albedo, refractive_index=float(config.get("refractive_index", 1.5)))


def _as_albedo(value: Any) -> tuple[float, float, float]:
    components = tuple(float(v) for v in value)
    if len(components) != 3:
        raise ValueError(f"Albedo must have exactly 3 components, got {len(components)}.")
    return components  # type: ignore[return-value]


# =============================================================================
# Scenes
# =============================================================================


def scene_from_config(config: SceneConfig) -> HittableList:
    """Build a scene from a configuration.

    Args:
        config: The scene configuration to load.

    Returns:
        A HittableList with one Sphere per sphere entry, in order.

    Raises:
        ValueError: If the configuration contains invalid data.
    """
    materials = [material_from_config(mat_config) for mat_config in config.materials]

    world = HittableList()
    for i, sphere_config in enumerate(config.spheres):
        material_id = int(sphere_config.get("material_id", 0))
        if not 0 <= material_id < len(materials):
            raise ValueError(f"Sphere {i} references invalid material_id: {material_id}")
        center = Vec3.from_sequence(sphere_config.get("center", (0.0, 0.0, 0.0)))
        radius = float(sphere_config.get("radius", 1.0))
        world.add(Sphere(center, radius, materials[material_id]))

    logger.debug(
        "Loaded scene with %d materials and %d spheres", len(materials), len(world)
    )
    return world


def scene_to_config(world: HittableList) -> SceneConfig:
    """Export a sphere scene to a configuration object.

    Args:
        world: A scene holding only Sphere objects.

    Returns:
        A SceneConfig containing all materials and spheres.

    Raises:
        TypeError: If the scene holds something other than a Sphere.
    """
    config = SceneConfig()
    material_ids: dict[int, int] = {}

    for obj in world:
        if not isinstance(obj, Sphere):
            raise TypeError(f"Cannot serialize {type(obj).__name__}; only spheres are supported")

        key = id(obj.material)
        if key not in material_ids:
            material_ids[key] = len(config.materials)
            config.materials.append(obj.material.to_config())

        config.spheres.append(
            {
                "center": list(obj.center),
                "radius": obj.radius,
                "material_id": material_ids[key],
            }
        )

    return config


def load_scene(filepath: str | Path) -> HittableList:
    """Load a scene from a JSON file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or describes an invalid scene.
    """
    with open(filepath, encoding="utf-8") as handle:
        data = json.load(handle)
    return scene_from_config(SceneConfig.from_dict(data))


def save_scene(filepath: str | Path, world: HittableList) -> None:
    """Write a sphere scene to a JSON file."""
    with open(filepath, "w", encoding="utf-8") as handle:
        json.dump(scene_to_config(world).to_dict(), handle, indent=2)
