"""Progressive tile renderer coordinating worker threads.

This module drives a render:
- Splits the image into work chunks (see ``pathtracer.core.tiles``)
- Samples chunks on a bounded pool of worker threads
- Writes finished tiles into the shared RGBA8 frame buffer
- Flushes the whole frame buffer after every tile and once at the end

Scheduling:
    Chunks are submitted in index order. At most ``n_max_threads`` chunks
    are in flight; when the cap is reached the coordinator blocks on the
    oldest launched chunk (FIFO reclaim) before submitting the next one.
    Tiles may therefore finish out of order, but they are collected in
    launch order. Only the coordinator thread touches the frame buffer;
    workers return their pixels instead, so no locking is needed.

Randomness:
    Each chunk gets its own ``numpy.random.Generator`` spawned from one
    ``SeedSequence``. Generators are never shared between threads. With a
    fixed seed the final image is reproducible regardless of how the
    threads interleave, because a chunk's stream depends only on its index.

Errors:
    An exception raised by a worker or by the flush callback propagates out
    of ``render`` when that chunk is collected. There is no retry; whatever
    was last flushed is all that survives.

Example:
    >>> from pathtracer.camera import CameraConfig, setup_camera
    >>> from pathtracer.config import RenderConfig
    >>> from pathtracer.preview.export import png_flusher
    >>> from pathtracer.scene.random_spheres import create_random_spheres_scene
    >>>
    >>> config = RenderConfig(width=200, height=150, rays_per_pixel=8, seed=7)
    >>> scene, camera_config = create_random_spheres_scene(...)
    >>> renderer = ProgressiveRenderer(config)
    >>> renderer.render(scene, setup_camera(camera_config), flush=png_flusher("out.png"))
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

import numpy as np
import numpy.typing as npt

from pathtracer.camera.thin_lens import Camera
from pathtracer.config import RenderConfig
from pathtracer.core.tiles import CHANNELS, Tile, WorkChunk, partition, render_chunk
from pathtracer.geometry.hittable import Hittable

logger = logging.getLogger(__name__)

# Callback receives (completed_chunks, total_chunks)
ProgressCallback = Callable[[int, int], None]


class FrameBuffer:
    """RGBA8 pixel buffer of ``width * height * 4`` bytes, row-major, top row first.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions ({width}x{height}) must be positive")
        self.width = width
        self.height = height
        self._data = np.zeros(width * height * CHANNELS, dtype=np.uint8)

    def __len__(self) -> int:
        return self._data.size

    def write_tile(self, tile: Tile) -> None:
        """Copy a tile's pixels into its range of the buffer.

        Raises:
            ValueError: If the tile lies outside the image or its pixel
                array does not match its range.
        """
        if tile.start < 0 or tile.stop > self.width * self.height or tile.start > tile.stop:
            raise ValueError(f"Tile range [{tile.start}, {tile.stop}) is outside the image")
        expected = (tile.stop - tile.start, CHANNELS)
        if tile.pixels.shape != expected:
            raise ValueError(f"Tile pixels have shape {tile.pixels.shape}, expected {expected}")
        self._data[tile.start * CHANNELS : tile.stop * CHANNELS] = tile.pixels.reshape(-1)

    def clear(self) -> None:
        self._data.fill(0)

    def tobytes(self) -> bytes:
        """Return a copy of the buffer as raw RGBA8 bytes."""
        return self._data.tobytes()

    def as_array(self) -> npt.NDArray[np.uint8]:
        """Return a (height, width, 4) view of the buffer."""
        return self._data.reshape(self.height, self.width, CHANNELS)

    def __repr__(self) -> str:
        return f"FrameBuffer(width={self.width}, height={self.height})"


# Flush callback receives the frame buffer after each tile and once at the end
FlushCallback = Callable[[FrameBuffer], None]


class ProgressiveRenderer:
    """Tile-based multi-threaded renderer with progressive flushes.

    The renderer owns the frame buffer; the scene and camera are passed to
    ``render`` and must not be mutated while it runs.

    Attributes:
        config: The render configuration.
        frame_buffer: The RGBA8 output buffer.
    """

    def __init__(self, config: RenderConfig) -> None:
        self.config = config
        self.frame_buffer = FrameBuffer(config.width, config.height)
        self._chunks = partition(config.width, config.height, config.n_work_chunks)
        self._completed = 0

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def chunks(self) -> list[WorkChunk]:
        """The work chunks, in launch order."""
        return list(self._chunks)

    @property
    def completed_chunks(self) -> int:
        """Number of tiles written by the current or last render."""
        return self._completed

    def reset(self) -> None:
        """Clear the frame buffer and the completion counter."""
        self.frame_buffer.clear()
        self._completed = 0

    def _spawn_generators(self) -> list[np.random.Generator]:
        seed_sequence = np.random.SeedSequence(self.config.seed)
        return [np.random.default_rng(child) for child in seed_sequence.spawn(len(self._chunks))]

    def render(
        self,
        scene: Hittable,
        camera: Camera,
        flush: FlushCallback | None = None,
        callback: ProgressCallback | None = None,
    ) -> FrameBuffer:
        """Render the full image.

        Args:
            scene: The scene, shared read-only by all workers.
            camera: The camera, shared read-only by all workers.
            flush: Optional sink invoked with the frame buffer after every
                completed tile and once more after the last one.
            callback: Optional progress callback receiving
                (completed_chunks, total_chunks).

        Returns:
            The filled frame buffer.

        Raises:
            Exception: Whatever a worker or the flush sink raised.
        """
        self.reset()
        config = self.config
        total = len(self._chunks)
        generators = self._spawn_generators()
        logger.info(
            "Rendering %dx%d at %d rays/pixel: %d chunks on up to %d threads",
            config.width,
            config.height,
            config.rays_per_pixel,
            total,
            config.n_max_threads,
        )

        def collect(future: Future[Tile]) -> None:
            tile = future.result()
            self.frame_buffer.write_tile(tile)
            self._completed += 1
            logger.debug(
                "Tile [%d, %d) done (%d/%d)", tile.start, tile.stop, self._completed, total
            )
            if flush is not None:
                flush(self.frame_buffer)
            if callback is not None:
                callback(self._completed, total)

        in_flight: deque[Future[Tile]] = deque()
        with ThreadPoolExecutor(
            max_workers=config.n_max_threads, thread_name_prefix="pathtracer-worker"
        ) as executor:
            try:
                for chunk, rng in zip(self._chunks, generators):
                    if len(in_flight) >= config.n_max_threads:
                        collect(in_flight.popleft())
                    in_flight.append(
                        executor.submit(
                            render_chunk,
                            chunk,
                            scene,
                            camera,
                            config.width,
                            config.height,
                            config.rays_per_pixel,
                            rng,
                        )
                    )
                while in_flight:
                    collect(in_flight.popleft())
            except BaseException:
                for pending in in_flight:
                    pending.cancel()
                raise

        if flush is not None:
            flush(self.frame_buffer)
        logger.info("Render complete: %d/%d chunks", self._completed, total)
        return self.frame_buffer

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Return a copy of the image as a (height, width, 4) uint8 array."""
        return self.frame_buffer.as_array().copy()

    def __repr__(self) -> str:
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"chunks={len(self._chunks)}, completed={self._completed})"
        )


def render_image(
    config: RenderConfig,
    scene: Hittable,
    camera: Camera,
    flush: FlushCallback | None = None,
    callback: ProgressCallback | None = None,
) -> FrameBuffer:
    """Render an image in one call.

    Convenience wrapper creating a ProgressiveRenderer for ``config``.
    """
    return ProgressiveRenderer(config).render(scene, camera, flush=flush, callback=callback)
