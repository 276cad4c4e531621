"""Tests for scene serialization.

Tests cover:
- MaterialType lookup by config name
- Material creation from config dicts
- Scene export with shared materials written once
- Scene loading, including invalid references
- JSON file round-trips
"""

import pytest

from pathtracer.core.vec3 import Vec3
from pathtracer.geometry import Sphere
from pathtracer.materials import DiffuseMaterial, GlassMaterial, Material, MetalMaterial
from pathtracer.scene.intersection import HittableList
from pathtracer.scene.manager import (
    MaterialType,
    SceneConfig,
    load_scene,
    material_from_config,
    save_scene,
    scene_from_config,
    scene_to_config,
)


class TestMaterialType:
    """Tests for the material type enum."""

    def test_from_name_is_case_insensitive(self):
        assert MaterialType.from_name("diffuse") is MaterialType.DIFFUSE
        assert MaterialType.from_name("Metal") is MaterialType.METAL
        assert MaterialType.from_name("GLASS") is MaterialType.GLASS
        assert MaterialType.from_name("default") is MaterialType.DEFAULT

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError, match="Unknown material type: plastic"):
            MaterialType.from_name("plastic")


class TestMaterialFromConfig:
    """Tests for building materials from dicts."""

    def test_diffuse(self):
        material = material_from_config({"type": "diffuse", "albedo": [0.1, 0.2, 0.3]})
        assert isinstance(material, DiffuseMaterial)
        assert material.albedo == Vec3(0.1, 0.2, 0.3)

    def test_metal_with_default_fuzz(self):
        material = material_from_config({"type": "metal", "albedo": [0.8, 0.8, 0.8]})
        assert isinstance(material, MetalMaterial)
        assert material.fuzz == 0.0

    def test_glass(self):
        material = material_from_config({"type": "glass", "refractive_index": 1.33})
        assert isinstance(material, GlassMaterial)
        assert material.refractive_index == 1.33
        assert material.albedo == Vec3(0.5, 0.5, 0.5)

    def test_default_is_the_base_material(self):
        material = material_from_config({"type": "default"})
        assert type(material) is Material
        assert material.to_config() == {"type": "default"}

    def test_invalid_parameters_raise(self):
        with pytest.raises(ValueError, match="Fuzz"):
            material_from_config({"type": "metal", "albedo": [0.5, 0.5, 0.5], "fuzz": 3.0})
        with pytest.raises(ValueError, match="3 components"):
            material_from_config({"type": "diffuse", "albedo": [0.5, 0.5]})

    def test_missing_type_raises(self):
        with pytest.raises(ValueError, match="Unknown material type"):
            material_from_config({"albedo": [0.5, 0.5, 0.5]})


class TestSceneToConfig:
    """Tests for exporting scenes."""

    def test_shared_material_written_once(self, grey, mirror):
        world = HittableList(
            [
                Sphere(Vec3(0.0, 0.0, -1.0), 0.5, grey),
                Sphere(Vec3(1.0, 0.0, -1.0), 0.5, mirror),
                Sphere(Vec3(0.0, -100.0, -1.0), 99.5, grey),
            ]
        )
        config = scene_to_config(world)

        assert len(config.materials) == 2
        assert [s["material_id"] for s in config.spheres] == [0, 1, 0]
        assert config.spheres[2] == {
            "center": [0.0, -100.0, -1.0],
            "radius": 99.5,
            "material_id": 0,
        }

    def test_non_sphere_objects_rejected(self, grey):
        world = HittableList([HittableList([Sphere(Vec3(0.0, 0.0, 0.0), 1.0, grey)])])
        with pytest.raises(TypeError, match="only spheres"):
            scene_to_config(world)


class TestSceneFromConfig:
    """Tests for loading scenes."""

    def test_loads_spheres_in_order(self):
        config = SceneConfig(
            materials=[
                {"type": "diffuse", "albedo": [0.3, 0.35, 0.4]},
                {"type": "glass", "albedo": [0.9, 0.9, 0.9], "refractive_index": 1.5},
            ],
            spheres=[
                {"center": [0, -500, 0], "radius": 500, "material_id": 0},
                {"center": [1, 0.5, 0], "radius": 0.5, "material_id": 1},
            ],
        )
        world = scene_from_config(config)
        spheres = list(world)

        assert len(spheres) == 2
        assert spheres[0].center == Vec3(0.0, -500.0, 0.0)
        assert spheres[0].radius == 500.0
        assert isinstance(spheres[1].material, GlassMaterial)

    def test_spheres_share_material_instances(self):
        config = SceneConfig(
            materials=[{"type": "diffuse", "albedo": [0.5, 0.5, 0.5]}],
            spheres=[
                {"center": [0, 0, 0], "radius": 1, "material_id": 0},
                {"center": [3, 0, 0], "radius": 1, "material_id": 0},
            ],
        )
        first, second = scene_from_config(config)
        assert first.material is second.material

    def test_invalid_material_reference_raises(self):
        config = SceneConfig(
            materials=[{"type": "diffuse", "albedo": [0.5, 0.5, 0.5]}],
            spheres=[{"center": [0, 0, 0], "radius": 1, "material_id": 4}],
        )
        with pytest.raises(ValueError, match="invalid material_id: 4"):
            scene_from_config(config)

    def test_negative_radius_raises(self):
        config = SceneConfig(
            materials=[{"type": "diffuse"}],
            spheres=[{"center": [0, 0, 0], "radius": -1, "material_id": 0}],
        )
        with pytest.raises(ValueError, match="negative"):
            scene_from_config(config)

    def test_base_material_loads_back(self):
        config = scene_to_config(HittableList([Sphere(Vec3(0.0, 0.0, 0.0), 1.0, Material())]))
        assert config.materials == [{"type": "default"}]

        (sphere,) = scene_from_config(config)
        assert type(sphere.material) is Material


class TestSceneFiles:
    """Tests for JSON scene files."""

    def test_save_then_load(self, tmp_path, small_world):
        path = tmp_path / "scene.json"
        save_scene(path, small_world)
        loaded = load_scene(path)

        assert len(loaded) == len(small_world)
        assert scene_to_config(loaded) == scene_to_config(small_world)

    def test_base_material_survives_file_round_trip(self, tmp_path, grey):
        path = tmp_path / "fallback.json"
        fallback = Material()
        world = HittableList(
            [
                Sphere(Vec3(0.0, 0.0, -1.0), 0.5, fallback),
                Sphere(Vec3(1.0, 0.0, -1.0), 0.5, grey),
                Sphere(Vec3(-1.0, 0.0, -1.0), 0.5, fallback),
            ]
        )
        save_scene(path, world)
        first, second, third = load_scene(path)

        assert type(first.material) is Material
        assert first.material is third.material
        assert isinstance(second.material, DiffuseMaterial)

    def test_config_dict_round_trip(self, small_world):
        config = scene_to_config(small_world)
        assert SceneConfig.from_dict(config.to_dict()) == config
