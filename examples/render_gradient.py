#!/usr/bin/env python3
"""Render a shaded gradient and save it as a PNG.

This script drives a Scene with a coloring function built from Vector3 math:
each pixel is mapped to a direction on the unit hemisphere, and the color is
the direction's components remapped from [-1, 1] to [0, 1], the usual way of
visualizing surface normals.

Usage:
    python -m examples.render_gradient [options]

Options:
    --width WIDTH       Image width in pixels (default: 256)
    --height HEIGHT     Image height in pixels (default: 256)
    --output OUTPUT     Output file path (default: gradient.png)
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python -m examples.render_gradient --width 128 --height 64 --output out.png
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a normal-shaded gradient.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=256,
        help="Image width in pixels (default: 256)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=256,
        help="Image height in pixels (default: 256)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="gradient.png",
        help="Output file path (default: gradient.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def make_normal_shader(width: int, height: int):
    """Build a coloring function that shades pixels by hemisphere direction.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A function mapping (x, y) to a Color.
    """
    from src.python.core.color import Color
    from src.python.core.vector import Vector3, ZeroLengthVectorError

    half = Vector3(0.5, 0.5, 0.5)
    # Pixels outside the unit disk get the background color
    background = Color(0, 0, 0, 255)

    def shade(x: int, y: int) -> Color:
        # Pixel center mapped to [-1, 1], y up
        u = (x + 0.5) / width * 2.0 - 1.0
        v = 1.0 - (y + 0.5) / height * 2.0
        planar = Vector3(u, v, 0.0)
        r2 = planar.length_squared()
        if r2 >= 1.0:
            return background
        direction = planar + Vector3.unit_z() * ((1.0 - r2) ** 0.5)
        try:
            normal = direction.normalize()
        except ZeroLengthVectorError:
            return background
        return Color.from_vector(normal * 0.5 + half)

    return shade


def render_gradient(
    width: int = 256,
    height: int = 256,
    output_path: str = "gradient.png",
    quiet: bool = False,
) -> Path:
    """Render the gradient and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.python.scene.pixels import Scene

    if not quiet:
        print(f"Creating scene ({width}x{height})...")

    start_time = time.time()
    scene = Scene(width, height)
    scene.for_each_pixel(make_normal_shader(width, height))

    output_file = scene.persist(output_path)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    ti.init(arch=ti.cpu)

    try:
        render_gradient(
            width=args.width,
            height=args.height,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
