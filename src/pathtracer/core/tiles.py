"""Work partitioning and per-tile pixel sampling.

The image is split into contiguous ranges of row-major linear pixel indices
(``i = row * width + col``). Each ``WorkChunk`` is sampled independently by
``render_chunk``, which only reads the shared scene and camera and returns
its pixels instead of writing to the frame buffer.

Color conversion per pixel:
    1. average ``rays_per_pixel`` radiance samples
    2. gamma 2 (square root)
    3. clamp to [0, 1], scale by 255.99 and truncate
    4. alpha is always 255

Example:
    >>> chunks = partition(4, 3, 5)
    >>> [(c.start, c.stop) for c in chunks]
    [(0, 2), (2, 4), (4, 7), (7, 9), (9, 12)]
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from pathtracer.camera.thin_lens import Camera
from pathtracer.core.integrator import color
from pathtracer.geometry.hittable import Hittable

# Bytes per pixel in the RGBA8 frame buffer
CHANNELS = 4


@dataclass(frozen=True)
class WorkChunk:
    """A half-open range ``[start, stop)`` of linear pixel indices.

    Attributes:
        index: Position of the chunk in launch order.
        start: First pixel index (inclusive).
        stop: Last pixel index (exclusive).
    """

    index: int
    start: int
    stop: int

    def __len__(self) -> int:
        return self.stop - self.start


@dataclass(frozen=True)
class Tile:
    """Pixels produced for one WorkChunk.

    Attributes:
        start: First pixel index (inclusive).
        stop: Last pixel index (exclusive).
        pixels: RGBA8 array of shape (stop - start, 4).
    """

    start: int
    stop: int
    pixels: npt.NDArray[np.uint8]


def partition(width: int, height: int, n_work_chunks: int) -> list[WorkChunk]:
    """Split ``[0, width * height)`` into contiguous chunks.

    Chunk boundaries are ``k * total // n_work_chunks`` so sizes differ by at
    most one pixel. Empty chunks, which only appear when there are more
    chunks than pixels, are dropped.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        n_work_chunks: Requested number of chunks (>= 1).

    Returns:
        Chunks in increasing index order that cover every pixel exactly once.

    Raises:
        ValueError: If a dimension or the chunk count is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions ({width}x{height}) must be positive")
    if n_work_chunks < 1:
        raise ValueError(f"n_work_chunks = {n_work_chunks} must be at least 1")

    total = width * height
    bounds = [k * total // n_work_chunks for k in range(n_work_chunks + 1)]
    chunks = []
    for start, stop in zip(bounds[:-1], bounds[1:]):
        if stop > start:
            chunks.append(WorkChunk(index=len(chunks), start=start, stop=stop))
    return chunks


# =============================================================================
# Color Conversion
# =============================================================================


def to_rgba8(colors: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert averaged linear colors to gamma-corrected RGBA8.

    Args:
        colors: Array of shape (N, 3) of linear radiance values.

    Returns:
        Array of shape (N, 4), dtype uint8. NaN and negative inputs map to 0,
        values >= 1 map to 255, alpha is 255.
    """
    colors = np.asarray(colors, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        corrected = np.sqrt(colors)
    corrected = np.nan_to_num(corrected, nan=0.0, posinf=1.0, neginf=0.0)
    corrected = np.clip(corrected, 0.0, 1.0)

    rgba = np.full((colors.shape[0], CHANNELS), 255, dtype=np.uint8)
    rgba[:, :3] = (corrected * 255.99).astype(np.uint8)
    return rgba


def to_u8(value: float) -> int:
    """Scalar version of the per-channel conversion used by ``to_rgba8``."""
    corrected = math.sqrt(value) if value >= 0.0 else math.nan
    if math.isnan(corrected):
        return 0
    corrected = min(max(corrected, 0.0), 1.0)
    return int(corrected * 255.99)


# =============================================================================
# Tile Sampling
# =============================================================================


def render_chunk(
    chunk: WorkChunk,
    scene: Hittable,
    camera: Camera,
    width: int,
    height: int,
    rays_per_pixel: int,
    rng: np.random.Generator,
) -> Tile:
    """Sample every pixel of a chunk.

    Each sample jitters the pixel position by a uniform offset in [0, 1) for
    antialiasing, asks the camera for a ray and traces it from depth 1.

    Args:
        chunk: The pixel range to render.
        scene: The shared, read-only scene.
        camera: The shared, read-only camera.
        width: Image width in pixels.
        height: Image height in pixels.
        rays_per_pixel: Number of samples per pixel.
        rng: Random generator private to this chunk.

    Returns:
        The chunk's pixels as a Tile.
    """
    accumulated = np.zeros((len(chunk), 3), dtype=np.float64)
    for offset, index in enumerate(range(chunk.start, chunk.stop)):
        row, col = divmod(index, width)
        r = g = b = 0.0
        for _ in range(rays_per_pixel):
            jitter_s, jitter_t = rng.random(2).tolist()
            s = (col + jitter_s) / width
            t = 1.0 - (row + jitter_t) / height
            sample = color(scene, camera.get_ray(s, t, rng), rng, 1)
            r += sample.x
            g += sample.y
            b += sample.z
        accumulated[offset] = (r, g, b)

    accumulated /= rays_per_pixel
    return Tile(start=chunk.start, stop=chunk.stop, pixels=to_rgba8(accumulated))
