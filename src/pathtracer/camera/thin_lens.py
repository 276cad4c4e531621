"""Thin-lens camera model with depth of field.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The virtual image plane sits at the focus distance
``focus_multiplier * |lookat - lookfrom|``. Each ray starts at a random
point on a lens disk of radius ``aperture / 2`` and passes through the
image-plane point for (s, t), so objects on the focus plane stay sharp and
everything else blurs in proportion to the aperture. An aperture of 0
degenerates to a pinhole camera.

Example:
    >>> import numpy as np
    >>> config = CameraConfig(
    ...     lookfrom=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> camera = setup_camera(config)
    >>> ray = camera.get_ray(0.5, 0.5, np.random.default_rng(42))
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any

import numpy as np

from pathtracer.core.ray import Ray, random_in_unit_disk
from pathtracer.core.vec3 import Vec3

# =============================================================================
# Camera Configuration
# =============================================================================


@dataclass
class CameraConfig:
    """Configuration for a thin-lens (perspective) camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter. 0 gives a pinhole camera with no blur.
        focus_multiplier: Focus distance as a multiple of |lookat - lookfrom|.
            1.0 keeps the lookat point in focus.

    Note:
        ``vfov`` spans the image height. A horizontal field of view ``hfov``
        converts with ``vfov = 2 * atan(tan(hfov / 2) / aspect_ratio)``; at
        4:3 the default 25 degrees vertical is about 33 degrees across, so
        a 25 degree horizontal framing needs ``vfov`` of roughly 18.9.
    """

    lookfrom: tuple[float, float, float] = (6.0, 1.2, 3.0)
    lookat: tuple[float, float, float] = (0.0, 0.5, 0.0)
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    vfov: float = 25.0
    aspect_ratio: float = 4.0 / 3.0
    aperture: float = 0.1
    focus_multiplier: float = 0.9

    def __post_init__(self) -> None:
        self.lookfrom = _as_triple(self.lookfrom, "lookfrom")
        self.lookat = _as_triple(self.lookat, "lookat")
        self.vup = _as_triple(self.vup, "vup")
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"Field of view = {self.vfov} must be in (0, 180) degrees.")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio = {self.aspect_ratio} must be positive.")
        if self.aperture < 0.0:
            raise ValueError(f"Aperture = {self.aperture} is negative.")
        if self.focus_multiplier <= 0.0:
            raise ValueError(f"Focus multiplier = {self.focus_multiplier} must be positive.")

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration as a JSON-compatible dict."""
        data = asdict(self)
        for key in ("lookfrom", "lookat", "vup"):
            data[key] = list(data[key])
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CameraConfig:
        """Build a configuration from a dict, ignoring unknown keys.

        Raises:
            ValueError: If a value is invalid.
        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


def _as_triple(value: Any, name: str) -> tuple[float, float, float]:
    values = tuple(float(v) for v in value)
    if len(values) != 3:
        raise ValueError(f"{name} must have exactly 3 components, got {len(values)}.")
    return values  # type: ignore[return-value]


# =============================================================================
# Camera
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """Immutable camera basis derived from a CameraConfig.

    Shared read-only by all render workers.

    Attributes:
        origin: Center of the lens.
        horizontal: Full width of the image plane, along u.
        vertical: Full height of the image plane, along v.
        lower_left: Lower-left corner of the image plane.
        lens_radius: Half the aperture.
        u: Unit vector pointing right.
        v: Unit vector pointing up.
        w: Unit vector pointing backward (away from the view direction).
    """

    origin: Vec3
    horizontal: Vec3
    vertical: Vec3
    lower_left: Vec3
    lens_radius: float
    u: Vec3
    v: Vec3
    w: Vec3

    @classmethod
    def from_config(cls, config: CameraConfig) -> Camera:
        """Compute the camera basis and image plane from a configuration."""
        origin = Vec3.from_sequence(config.lookfrom)
        lookat = Vec3.from_sequence(config.lookat)
        vup = Vec3.from_sequence(config.vup)

        theta = math.radians(config.vfov)
        half_height = math.tan(theta / 2.0)
        half_width = config.aspect_ratio * half_height

        w = (origin - lookat).normalized()
        u = vup.cross(w).normalized()
        v = w.cross(u).normalized()

        focus_dist = config.focus_multiplier * (lookat - origin).length()

        return cls(
            origin=origin,
            horizontal=u * (2.0 * half_width * focus_dist),
            vertical=v * (2.0 * half_height * focus_dist),
            lower_left=(
                origin
                - u * (half_width * focus_dist)
                - v * (half_height * focus_dist)
                - w * focus_dist
            ),
            lens_radius=0.5 * config.aperture,
            u=u,
            v=v,
            w=w,
        )

    def get_ray(self, s: float, t: float, rng: np.random.Generator) -> Ray:
        """Generate a ray through normalized image coordinates (s, t).

        Args:
            s: Horizontal coordinate in [0, 1] (left to right).
            t: Vertical coordinate in [0, 1] (bottom to top).
            rng: The calling worker's private random generator, used to pick
                the point on the lens.

        Returns:
            A ray leaving a random lens point toward the image-plane point.
        """
        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y
        target = self.lower_left + self.horizontal * s + self.vertical * t
        return Ray(self.origin + offset, target - self.origin - offset)


def setup_camera(config: CameraConfig) -> Camera:
    """Build the immutable camera used for rendering.

    Args:
        config: Camera configuration with position, orientation, FOV and lens.

    Returns:
        The derived Camera.
    """
    return Camera.from_config(config)
