"""Image export utilities for rendered images.

This module writes the renderer's RGBA8 frame buffer to disk. Pixels are
already gamma corrected and quantized by the tile scheduler, so export is a
straight copy into a PNG.

Supported formats:
    - PNG (8-bit RGBA via Pillow)

Example:
    >>> from pathtracer.core.progressive import ProgressiveRenderer
    >>> from pathtracer.preview.export import png_flusher, save_png
    >>>
    >>> renderer = ProgressiveRenderer(config)
    >>> frame = renderer.render(world, camera, flush=png_flusher("progress.png"))
    >>> save_png("output.png", frame.width, frame.height, frame.tobytes())
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from pathtracer.core.tiles import CHANNELS

if TYPE_CHECKING:
    from pathtracer.core.progressive import FlushCallback, FrameBuffer

logger = logging.getLogger(__name__)


def save_png(
    filepath: str | Path,
    width: int,
    height: int,
    pixels: bytes | bytearray | memoryview,
) -> None:
    """Save an RGBA8 pixel buffer as a PNG file.

    Args:
        filepath: Output file path (should end in .png).
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Row-major RGBA8 bytes, top row first, of length
            ``width * height * 4``.

    Raises:
        ValueError: If the dimensions are not positive or the buffer has the
            wrong length.
        OSError: If the file cannot be opened or written.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions ({width}x{height}) must be positive")
    expected = width * height * CHANNELS
    if len(pixels) != expected:
        raise ValueError(
            f"Pixel buffer has {len(pixels)} bytes, expected {expected} for {width}x{height} RGBA"
        )

    pil_image = PILImage.frombytes("RGBA", (width, height), bytes(pixels))
    pil_image.save(filepath, format="PNG")
    logger.debug("Wrote %dx%d PNG to %s", width, height, filepath)


def save_png_from_array(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save a (H, W, 4) uint8 array as a PNG file.

    Raises:
        ValueError: If the array is not (H, W, 4) uint8.
        OSError: If the file cannot be opened or written.
    """
    if image.ndim != 3 or image.shape[2] != CHANNELS or image.dtype != np.uint8:
        raise ValueError(
            f"Expected a (H, W, {CHANNELS}) uint8 array, got {image.shape} {image.dtype}"
        )
    height, width = image.shape[:2]
    save_png(filepath, width, height, np.ascontiguousarray(image).tobytes())


def png_flusher(filepath: str | Path) -> FlushCallback:
    """Create a flush callback that rewrites ``filepath`` with the frame buffer.

    Pass the result as ``flush`` to ``ProgressiveRenderer.render`` to watch
    the image fill in tile by tile.
    """

    def flush(frame_buffer: FrameBuffer) -> None:
        save_png(filepath, frame_buffer.width, frame_buffer.height, frame_buffer.tobytes())

    return flush


def load_png(filepath: str | Path) -> npt.NDArray[np.uint8]:
    """Read a PNG back as a (H, W, 4) uint8 array."""
    with PILImage.open(filepath) as pil_image:
        return np.asarray(pil_image.convert("RGBA"), dtype=np.uint8)


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
