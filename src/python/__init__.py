"""Python implementation of the raytracer's numeric foundation.

This package provides the building blocks every later renderer stage relies on:
- Immutable double precision 3D vector algebra
- 8-bit RGBA colors
- A fixed-size pixel buffer driven by a per-pixel coloring function
- Lossless PNG persistence

Subpackages:
    core: Vector algebra and color values
    scene: Pixel buffer traversal and persistence
    preview: PNG codec and image comparison utilities
"""

__version__ = "0.1.0"
