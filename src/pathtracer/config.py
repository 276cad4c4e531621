"""Render configuration.

``RenderConfig`` gathers the settings of one render: image size, samples per
pixel, how the image is split into work chunks, the thread-pool cap, the
random seed and the output path. Camera settings live in
``pathtracer.camera.CameraConfig``.

Both configurations round-trip through JSON-compatible dicts so a render
can be described in a file:

    {
        "render": {"width": 400, "height": 300, "rays_per_pixel": 50},
        "camera": {"vfov": 30.0, "aperture": 0.05}
    }

Example:
    >>> config = RenderConfig(width=320, height=240, rays_per_pixel=16)
    >>> config.aspect_ratio
    1.3333333333333333
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from pathtracer.camera.thin_lens import CameraConfig

DEFAULT_OUTPUT = "out_image.png"


def _default_thread_count() -> int:
    return os.cpu_count() or 4


@dataclass
class RenderConfig:
    """Configuration for a single render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        rays_per_pixel: Number of camera rays averaged per pixel.
        n_work_chunks: Number of contiguous pixel ranges the image is split
            into. Each chunk is sampled by one worker task.
        n_max_threads: Maximum number of chunks rendered concurrently.
        seed: Root seed for the per-chunk random generators. None draws fresh
            OS entropy, so every render differs.
        output: Output PNG path.
    """

    width: int = 800
    height: int = 600
    rays_per_pixel: int = 100
    n_work_chunks: int = 64
    n_max_threads: int = field(default_factory=_default_thread_count)
    seed: int | None = None
    output: str = DEFAULT_OUTPUT

    def __post_init__(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: If any count or dimension is not positive.
        """
        for name in ("width", "height", "rays_per_pixel", "n_work_chunks", "n_max_threads"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"{name} = {value!r} must be a positive integer.")
        if self.seed is not None and (not isinstance(self.seed, int) or self.seed < 0):
            raise ValueError(f"seed = {self.seed!r} must be a non-negative integer or None.")

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration as a JSON-compatible dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderConfig:
        """Build a configuration from a dict, ignoring unknown keys.

        Raises:
            ValueError: If a value is invalid.
        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


def load_config(filepath: str | Path) -> tuple[RenderConfig, CameraConfig]:
    """Load render and camera settings from a JSON file.

    Missing sections fall back to defaults. The camera aspect ratio is
    always derived from the render width and height.

    Args:
        filepath: Path to a JSON file with optional "render" and "camera"
            objects.

    Returns:
        A tuple of (RenderConfig, CameraConfig).

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or holds invalid values.
    """
    with open(filepath, encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration root must be an object, got {type(data).__name__}")

    render_config = RenderConfig.from_dict(data.get("render", {}))
    camera_data = dict(data.get("camera", {}))
    camera_data["aspect_ratio"] = render_config.aspect_ratio
    return render_config, CameraConfig.from_dict(camera_data)


def save_config(
    filepath: str | Path,
    render_config: RenderConfig,
    camera_config: CameraConfig,
) -> None:
    """Write render and camera settings to a JSON file."""
    payload = {"render": render_config.to_dict(), "camera": camera_config.to_dict()}
    with open(filepath, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)
