#!/usr/bin/env python3
"""Render a scene to a PNG file.

Renders the default billiard-ball scene, or a scene loaded from a JSON file
written by ``whitted.scene.save_scene``, and saves the result as a PNG.

Usage:
    python examples/render_scene.py [options]

Options:
    --width WIDTH       Base image width in pixels (default: scene setting)
    --height HEIGHT     Base image height in pixels (default: scene setting)
    --scale SCALE       Multiplier applied to width and height
    --samples SAMPLES   Antialiasing samples per pixel
    --depth DEPTH       Maximum recursion depth
    --workers WORKERS   Threads rendering scanlines (default: 1)
    --seed SEED         Seed for reproducible renders
    --scene SCENE       JSON scene file (default: built-in billiard scene)
    --output OUTPUT     Output file path (default: render.png)
    --reference PNG     Reference image to compare the render against
    --max-rmse RMSE     Fail if the RMSE against the reference exceeds this
    --quiet             Only log warnings and errors

Example:
    python examples/render_scene.py --scale 0.5 --samples 4 --seed 1
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from whitted.core.renderer import Renderer
from whitted.logging_config import setup_logging
from whitted.preview.export import compute_rmse, image_to_uint8, load_png, save_png
from whitted.scene import Scene, create_default_scene, load_scene


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a scene with the Whitted ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, help="Base image width in pixels")
    parser.add_argument("--height", type=int, help="Base image height in pixels")
    parser.add_argument("--scale", type=float, help="Multiplier applied to width and height")
    parser.add_argument("--samples", type=int, help="Antialiasing samples per pixel")
    parser.add_argument("--depth", type=int, help="Maximum recursion depth")
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Threads rendering scanlines (default: 1)",
    )
    parser.add_argument("--seed", type=int, help="Seed for reproducible renders")
    parser.add_argument("--scene", type=str, help="JSON scene file")
    parser.add_argument(
        "--output",
        type=str,
        default="render.png",
        help="Output file path (default: render.png)",
    )
    parser.add_argument("--reference", type=str, help="Reference PNG to compare against")
    parser.add_argument(
        "--max-rmse",
        type=float,
        help="Fail if the RMSE against --reference exceeds this value",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )
    return parser.parse_args(argv)


def apply_overrides(scene: Scene, args: argparse.Namespace) -> Scene:
    """Apply command-line overrides to the scene's camera and image settings."""
    image_changes = {
        key: value
        for key, value in (("width", args.width), ("height", args.height), ("scale", args.scale))
        if value is not None
    }
    if image_changes:
        scene.image = replace(scene.image, **image_changes)

    camera_changes = {
        key: value
        for key, value in (("antialias_samples", args.samples), ("max_depth", args.depth))
        if value is not None
    }
    if camera_changes:
        scene.camera = replace(scene.camera, **camera_changes)
    return scene


def compare_to_reference(image, reference: str | Path) -> float:
    """RMSE between a render, as it would be saved, and a reference PNG."""
    return compute_rmse(image_to_uint8(image), load_png(reference))


def render_scene(args: argparse.Namespace) -> tuple[Path, float | None]:
    """Build the scene, render it and save it to ``args.output``.

    Returns:
        Path to the saved image file, and the RMSE against ``args.reference``
        (None when no reference was given).
    """
    scene = load_scene(args.scene) if args.scene else create_default_scene()
    apply_overrides(scene, args)

    renderer = Renderer(scene, workers=args.workers, seed=args.seed)
    image = renderer.render()
    output_file = save_png(image, args.output)

    rmse = None
    if args.reference:
        rmse = compare_to_reference(image, args.reference)
    return output_file, rmse


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging("WARNING" if args.quiet else "INFO")

    try:
        output_file, rmse = render_scene(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"Saved to: {output_file.absolute()}")
        if rmse is not None:
            print(f"RMSE vs reference: {rmse:.4f}")

    if rmse is not None and args.max_rmse is not None and rmse > args.max_rmse:
        print(f"Error: RMSE {rmse:.4f} exceeds {args.max_rmse}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
