"""Scene module for scene containers and scene construction.

Components:
    intersection: ``HittableList``, the scene container with nearest-hit queries
    manager: JSON-compatible scene serialization (``SceneConfig``)
    random_spheres: The random spheres demo scene

Scenes are plain Python objects built once on the main thread and then
shared read-only by every render worker.
"""

from .intersection import HittableList
from .manager import (
    MaterialType,
    SceneConfig,
    load_scene,
    material_from_config,
    save_scene,
    scene_from_config,
    scene_to_config,
)
from .random_spheres import (
    LARGE_CENTERS,
    RandomSpheresParams,
    create_random_spheres_scene,
)

__all__ = [
    # Intersection module
    "HittableList",
    # Manager module
    "MaterialType",
    "SceneConfig",
    "material_from_config",
    "scene_from_config",
    "scene_to_config",
    "load_scene",
    "save_scene",
    # Random spheres module
    "RandomSpheresParams",
    "create_random_spheres_scene",
    "LARGE_CENTERS",
]
