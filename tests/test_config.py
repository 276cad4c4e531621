"""Tests for render configuration.

Tests cover:
- Defaults and validation
- Dict conversion
- Loading and saving JSON config files
"""

import json
import os

import pytest

from pathtracer.camera import CameraConfig
from pathtracer.config import RenderConfig, load_config, save_config


class TestRenderConfig:
    """Tests for RenderConfig."""

    def test_defaults(self):
        config = RenderConfig()
        assert (config.width, config.height) == (800, 600)
        assert config.rays_per_pixel == 100
        assert config.n_work_chunks == 64
        assert config.n_max_threads == (os.cpu_count() or 4)
        assert config.seed is None
        assert config.output == "out_image.png"

    def test_derived_values(self):
        config = RenderConfig(width=320, height=240)
        assert config.pixel_count == 76800
        assert config.aspect_ratio == pytest.approx(4.0 / 3.0)

    @pytest.mark.parametrize(
        "field_name", ["width", "height", "rays_per_pixel", "n_work_chunks", "n_max_threads"]
    )
    def test_rejects_non_positive_counts(self, field_name):
        with pytest.raises(ValueError, match=field_name):
            RenderConfig(**{field_name: 0})

    def test_rejects_non_integer_counts(self):
        with pytest.raises(ValueError, match="positive integer"):
            RenderConfig(width=10.5)  # type: ignore[arg-type]
        with pytest.raises(ValueError, match="positive integer"):
            RenderConfig(height=True)  # type: ignore[arg-type]

    def test_rejects_negative_seed(self):
        with pytest.raises(ValueError, match="seed"):
            RenderConfig(seed=-1)

    def test_dict_round_trip(self):
        config = RenderConfig(width=64, height=32, seed=3, n_max_threads=2)
        assert RenderConfig.from_dict(config.to_dict()) == config

    def test_from_dict_ignores_unknown_keys(self):
        config = RenderConfig.from_dict({"width": 10, "gamma": 2.2})
        assert config.width == 10


class TestConfigFiles:
    """Tests for JSON config files."""

    def test_load_partial_file(self, tmp_path):
        path = tmp_path / "render.json"
        path.write_text(
            json.dumps(
                {
                    "render": {"width": 400, "height": 200, "rays_per_pixel": 8},
                    "camera": {"vfov": 40.0, "aperture": 0.0},
                }
            )
        )
        render_config, camera_config = load_config(path)
        assert render_config.width == 400
        assert render_config.n_work_chunks == 64
        assert camera_config.vfov == 40.0
        assert camera_config.aperture == 0.0
        assert camera_config.aspect_ratio == pytest.approx(2.0)

    def test_load_empty_object_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("{}")
        render_config, camera_config = load_config(path)
        assert render_config.width == 800
        assert camera_config.aspect_ratio == pytest.approx(800 / 600)

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "saved.json"
        render_config = RenderConfig(width=50, height=25, seed=9, n_max_threads=1)
        camera_config = CameraConfig(vfov=33.0, aspect_ratio=2.0)
        save_config(path, render_config, camera_config)

        loaded_render, loaded_camera = load_config(path)
        assert loaded_render == render_config
        assert loaded_camera == camera_config

    def test_invalid_values_raise(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"render": {"width": -5}}))
        with pytest.raises(ValueError, match="width"):
            load_config(path)

    def test_non_object_root_raises(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ValueError, match="object"):
            load_config(path)

    def test_malformed_json_raises_value_error(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            load_config(path)

    def test_missing_file_raises_os_error(self, tmp_path):
        with pytest.raises(OSError):
            load_config(tmp_path / "nope.json")
