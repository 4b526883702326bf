#!/usr/bin/env python3
"""Render one of the demo scenes.

This script demonstrates end-to-end rendering: it builds a demo world, places
a camera, traces every pixel with the selected renderer and saves both the
HDR result (PFM) and a tone mapped PNG.

Usage:
    python -m examples.render_demo [options]

Options:
    --scene NAME        Demo scene (spheres, csg, shapes, cornell; default: csg)
    --renderer KIND     onoff, flat, pointlight or pathtracer (default: pathtracer)
    --width WIDTH       Image width in pixels (default: 640)
    --height HEIGHT     Image height in pixels (default: 480)
    --samples SAMPLES   Rays per pixel, rounded down to a square (default: 0)
    --orthogonal        Use an orthogonal camera instead of a perspective one
    --angle-deg ANGLE   Rotation of the camera around the z axis (default: 0)
    --workers N         Number of worker processes (default: 1)
    --config FILE       JSON file with RenderConfig fields (flags override it)
    --quiet             Suppress progress output

Example:
    python -m examples.render_demo --scene cornell --width 160 --height 160 \
        --samples 16 --workers 4 --png-output cornell.png
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
import time
from pathlib import Path

logger = logging.getLogger("render_demo")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render one of the demo scenes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        type=str,
        default="csg",
        help="Demo scene to render (default: csg)",
    )
    parser.add_argument(
        "--renderer",
        type=str,
        default=None,
        choices=["onoff", "flat", "pointlight", "pathtracer"],
        help="Renderer (default: pathtracer)",
    )
    parser.add_argument("--width", type=int, default=None, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Image height in pixels")
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Rays per pixel, rounded down to a perfect square",
    )
    parser.add_argument("--num-of-rays", type=int, default=None, help="Path tracer rays per hit")
    parser.add_argument("--max-depth", type=int, default=None, help="Path tracer maximum depth")
    parser.add_argument("--seed", type=int, default=None, help="Master random seed")
    parser.add_argument("--workers", type=int, default=None, help="Number of worker processes")
    parser.add_argument(
        "--orthogonal",
        action="store_true",
        help="Use an orthogonal camera",
    )
    parser.add_argument(
        "--angle-deg",
        type=float,
        default=0.0,
        help="Camera rotation around the z axis in degrees (default: 0)",
    )
    parser.add_argument("--pfm-output", type=str, default=None, help="HDR output path")
    parser.add_argument("--png-output", type=str, default=None, help="PNG output path")
    parser.add_argument("--config", type=str, default=None, help="JSON configuration file")
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def build_config(args: argparse.Namespace):
    """Merge the optional JSON configuration with command-line overrides."""
    from src.pathtracer.core.config import RenderConfig

    data = {}
    if args.config is not None:
        with open(args.config, encoding="utf-8") as f:
            data = json.load(f)

    overrides = {
        "renderer": args.renderer,
        "width": args.width,
        "height": args.height,
        "samples_per_pixel": args.samples,
        "num_of_rays": args.num_of_rays,
        "max_depth": args.max_depth,
        "seed": args.seed,
        "workers": args.workers,
        "pfm_output": args.pfm_output,
        "png_output": args.png_output,
    }
    data.update({key: value for key, value in overrides.items() if value is not None})

    config = RenderConfig.from_dict(data)
    config.validate()
    return config


def render_demo(args: argparse.Namespace) -> Path:
    """Render the selected scene and save PFM and PNG outputs.

    Returns:
        Path to the saved PNG file.
    """
    from src.pathtracer.camera.orthogonal import OrthogonalCamera
    from src.pathtracer.camera.pinhole import PerspectiveCamera
    from src.pathtracer.core.hdr_image import HdrImage
    from src.pathtracer.core.image_tracer import ImageTracer
    from src.pathtracer.core.transform import rotation_z
    from src.pathtracer.preview.export import save_png
    from src.pathtracer.scene.demo import create_demo_scene

    config = build_config(args)
    scene = create_demo_scene(args.scene)
    logger.info("Scene %r: %s", scene.name, scene.description)

    transformation = rotation_z(math.radians(args.angle_deg)) * scene.camera_transform
    if args.orthogonal:
        camera = OrthogonalCamera(config.aspect_ratio, transformation)
    else:
        camera = PerspectiveCamera(1.0, config.aspect_ratio, transformation)

    image = HdrImage(config.width, config.height)
    tracer = ImageTracer(
        image,
        camera,
        samples_per_side=config.samples_per_side,
        seed=config.seed,
    )
    renderer = config.create_renderer(scene.world)

    start_time = time.time()

    def progress_callback(current: int, total: int) -> None:
        if not args.quiet:
            elapsed = time.time() - start_time
            print(
                f"\r  Progress: {current}/{total} rows "
                f"({100.0 * current / total:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    tracer.fire_all_rays(renderer, callback=progress_callback, workers=config.workers)

    if not args.quiet:
        print()  # Newline after progress

    with open(config.pfm_output, "wb") as stream:
        image.write_pfm(stream)
    logger.info("HDR image saved to %s", config.pfm_output)

    output_file = Path(config.png_output)
    save_png(
        image,
        str(output_file),
        tone_map="luminosity",
        gamma=config.gamma,
        factor=config.factor,
        luminosity=config.luminosity,
    )
    logger.info("PNG image saved to %s", output_file.absolute())
    logger.info("Total time: %.2fs", time.time() - start_time)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        render_demo(args)
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
