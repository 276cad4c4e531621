#!/usr/bin/env python3
"""Render the random spheres scene.

This script demonstrates end-to-end rendering of the random spheres demo
scene: three large spheres (diffuse, metal, glass) on a ground sphere,
surrounded by a grid of small random spheres, seen through a thin-lens
camera with a shallow depth of field.

The output PNG is rewritten after every finished tile, so it can be watched
while the render runs.

Usage:
    python examples/render_spheres.py [options]

Options:
    --width WIDTH           Image width in pixels (default: 800)
    --height HEIGHT         Image height in pixels (default: 600)
    --samples SAMPLES       Number of rays per pixel (default: 100)
    --chunks CHUNKS         Number of work chunks (default: 64)
    --threads THREADS       Maximum concurrent chunks (default: CPU count)
    --seed SEED             Random seed for a reproducible image
    --output OUTPUT         Output file path (default: out_image.png)
    --config CONFIG         JSON file with "render" and "camera" sections
    --scene SCENE           JSON scene file to render instead of the demo
    --save-scene PATH       Write the scene that was rendered to a JSON file
    --verbose               Enable debug logging
    --quiet                 Suppress progress output

Command-line options override values read from --config.

Example:
    python examples/render_spheres.py --width 400 --height 300 --samples 32 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import numpy as np

from pathtracer.camera import CameraConfig, setup_camera
from pathtracer.config import RenderConfig, load_config
from pathtracer.core.progressive import ProgressiveRenderer
from pathtracer.preview.export import png_flusher
from pathtracer.scene.manager import load_scene, save_scene
from pathtracer.scene.random_spheres import create_random_spheres_scene

# RenderConfig fields that can be overridden from the command line
_OVERRIDES = {
    "width": "width",
    "height": "height",
    "samples": "rays_per_pixel",
    "chunks": "n_work_chunks",
    "threads": "n_max_threads",
    "seed": "seed",
    "output": "output",
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the random spheres scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, help="Image width in pixels (default: 800)")
    parser.add_argument("--height", type=int, help="Image height in pixels (default: 600)")
    parser.add_argument(
        "--samples",
        type=int,
        help="Number of rays per pixel (default: 100)",
    )
    parser.add_argument(
        "--chunks",
        type=int,
        help="Number of work chunks the image is split into (default: 64)",
    )
    parser.add_argument(
        "--threads",
        type=int,
        help="Maximum number of chunks rendered at once (default: CPU count)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed; the same seed reproduces the same image",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Output file path (default: out_image.png)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help='JSON file with optional "render" and "camera" sections',
    )
    parser.add_argument(
        "--scene",
        type=Path,
        help="JSON scene file to render instead of the random spheres scene",
    )
    parser.add_argument(
        "--save-scene",
        type=Path,
        help="Write the rendered scene to this JSON file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def build_configs(args: argparse.Namespace) -> tuple[RenderConfig, CameraConfig]:
    """Merge the optional config file with command-line overrides.

    Raises:
        OSError: If the config file cannot be read.
        ValueError: If a setting is invalid.
    """
    if args.config is not None:
        render_config, camera_config = load_config(args.config)
        render_data = render_config.to_dict()
        camera_data = camera_config.to_dict()
    else:
        render_data = RenderConfig().to_dict()
        camera_data = CameraConfig().to_dict()

    for option, field_name in _OVERRIDES.items():
        value = getattr(args, option)
        if value is not None:
            render_data[field_name] = value

    render_config = RenderConfig.from_dict(render_data)
    camera_data["aspect_ratio"] = render_config.aspect_ratio
    return render_config, CameraConfig.from_dict(camera_data)


def render_spheres(
    render_config: RenderConfig,
    camera_config: CameraConfig,
    scene_path: Path | None = None,
    save_scene_path: Path | None = None,
    quiet: bool = False,
) -> Path:
    """Render the scene and save it to ``render_config.output``.

    Args:
        render_config: Image size, sampling and threading settings.
        camera_config: Camera settings. The defaults frame the demo scene.
        scene_path: Optional JSON scene to load instead of the demo scene.
        save_scene_path: Optional path to write the rendered scene to.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    if not quiet:
        print(f"Creating scene ({render_config.width}x{render_config.height})...")

    if scene_path is not None:
        world = load_scene(scene_path)
    else:
        scene_rng = np.random.default_rng(render_config.seed)
        world, _ = create_random_spheres_scene(scene_rng)
    if save_scene_path is not None:
        save_scene(save_scene_path, world)

    camera = setup_camera(camera_config)
    renderer = ProgressiveRenderer(render_config)
    output_file = Path(render_config.output)

    if not quiet:
        print(f"Scene has {len(world)} spheres")
        print(
            f"Rendering {render_config.rays_per_pixel} rays per pixel in "
            f"{len(renderer.chunks)} chunks on up to {render_config.n_max_threads} threads..."
        )

    start_time = time.time()

    def progress_callback(current: int, total: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / total) * 100 if total > 0 else 0
            print(
                f"\r  Progress: {current}/{total} chunks "
                f"({progress_pct:.1f}%) - {elapsed:.1f}s elapsed",
                end="",
                flush=True,
            )

    renderer.render(
        world,
        camera,
        flush=png_flusher(output_file),
        callback=progress_callback,
    )

    total_time = time.time() - start_time
    if not quiet:
        print()  # Newline after progress
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s: %(message)s")

    try:
        render_config, camera_config = build_configs(args)
        render_spheres(
            render_config,
            camera_config,
            scene_path=args.scene,
            save_scene_path=args.save_scene,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
