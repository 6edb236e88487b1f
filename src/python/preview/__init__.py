"""Preview module for image output.

Components:
    export: PNG encoding and decoding via Pillow

Example:
    >>> from src.python.preview import load_png, save_png_from_array
    >>> save_png_from_array(image, "output.png")
    >>> decoded = load_png("output.png")
"""

from src.python.preview.export import (
    PNG_FORMAT,
    load_png,
    save_png_from_array,
)

__all__ = [
    "PNG_FORMAT",
    "save_png_from_array",
    "load_png",
]
