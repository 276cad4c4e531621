"""Preview module for image output.

Components:
    export: PNG export of the RGBA8 frame buffer

Features:
    - Progressive PNG output: ``png_flusher`` rewrites the file after every
      finished tile, so a viewer that reloads it shows the render filling in
    - PNG readback and RMSE comparison for tests and convergence checks

Example:
    >>> from pathtracer.preview import png_flusher
    >>> renderer.render(world, camera, flush=png_flusher("out_image.png"))
"""

from pathtracer.preview.export import (
    compute_rmse,
    load_png,
    png_flusher,
    save_png,
    save_png_from_array,
)

__all__ = [
    "save_png",
    "save_png_from_array",
    "png_flusher",
    "load_png",
    "compute_rmse",
]
