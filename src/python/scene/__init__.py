"""Scene module for pixel buffers.

Components:
    pixels: Scene, a width x height RGBA buffer stored in a Taichi field

A renderer fills the buffer by passing a coloring function to
Scene.for_each_pixel() and writes it out with Scene.persist().
"""

from .pixels import ColorFunction, InvalidDimensionsError, Scene

__all__ = [
    "Scene",
    "ColorFunction",
    "InvalidDimensionsError",
]
