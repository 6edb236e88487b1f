"""Fixed-size RGBA pixel buffer with per-pixel traversal and PNG persistence.

A Scene owns a width x height buffer of 8-bit RGBA colors stored in a Taichi
ndarray. A renderer drives it by passing a coloring function to
for_each_pixel(), which is called once for every (x, y) coordinate, and then
writes the result to disk with persist().

Coordinates follow image convention: (0, 0) is the top-left pixel and y grows
downward.

Taichi must be initialized before a Scene is constructed.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.python.core.color import Color
    >>> from src.python.scene.pixels import Scene
    >>>
    >>> scene = Scene(4, 4)
    >>> scene.for_each_pixel(lambda x, y: Color(x * 60, y * 60, 0))
    >>> scene.persist("gradient.png")
"""

import logging
from collections.abc import Callable
from pathlib import Path

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.python.core.color import TRANSPARENT, Color, ColorLike
from src.python.preview.export import PathLike, load_png, save_png_from_array

logger = logging.getLogger(__name__)

# Coloring function: receives (x, y) and returns the pixel color
ColorFunction = Callable[[int, int], ColorLike]

# Channels per pixel (RGBA)
NUM_CHANNELS = 4


class InvalidDimensionsError(ValueError):
    """Raised when a Scene is constructed with non-positive dimensions."""


@ti.kernel
def _fill_pixels(
    pixels: ti.types.ndarray(dtype=ti.types.vector(NUM_CHANNELS, ti.u8), ndim=2),
    red: ti.i32,
    green: ti.i32,
    blue: ti.i32,
    alpha: ti.i32,
):
    """Set every pixel of the buffer to a single color."""
    for i, j in ti.ndrange(pixels.shape[0], pixels.shape[1]):
        pixels[i, j] = ti.Vector(
            [
                ti.cast(red, ti.u8),
                ti.cast(green, ti.u8),
                ti.cast(blue, ti.u8),
                ti.cast(alpha, ti.u8),
            ]
        )


def _check_dimension(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidDimensionsError(f"Scene {name} must be an int, got {value!r}")
    if value <= 0:
        raise InvalidDimensionsError(f"Scene {name} must be positive, got {value}")
    return int(value)


class Scene:
    """A width x height grid of RGBA pixels.

    The buffer is a Taichi u8 vector ndarray of shape (width, height), the same
    (W, H) layout as the render target. The ndarray is freed with the Scene.
    Dimensions never change after construction and every pixel starts out
    TRANSPARENT.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate the pixel buffer.

        Args:
            width: Image width in pixels, must be > 0.
            height: Image height in pixels, must be > 0.

        Raises:
            InvalidDimensionsError: If either dimension is not a positive int.
        """
        self._width = _check_dimension("width", width)
        self._height = _check_dimension("height", height)
        self._pixels = ti.ndarray(
            dtype=ti.types.vector(NUM_CHANNELS, ti.u8), shape=(self._width, self._height)
        )
        self.clear(TRANSPARENT)
        logger.debug("Allocated %dx%d scene", self._width, self._height)

    @classmethod
    def load(cls, filepath: PathLike) -> "Scene":
        """Decode a PNG file into a new Scene.

        Args:
            filepath: Path of a PNG written by persist() or any other encoder.

        Returns:
            A Scene with the image's dimensions and pixels.

        Raises:
            OSError: If the file cannot be read or decoded.
        """
        image = load_png(filepath)
        height, width = image.shape[:2]
        scene = cls(width, height)
        scene._pixels.from_numpy(np.ascontiguousarray(np.transpose(image, (1, 0, 2))))
        return scene

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def pixel_count(self) -> int:
        """Number of coordinates in the buffer (width * height)."""
        return self._width * self._height

    def clear(self, color: ColorLike = TRANSPARENT) -> None:
        """Reset every pixel to a single color."""
        color = Color.coerce(color)
        _fill_pixels(self._pixels, color.red, color.green, color.blue, color.alpha)

    def for_each_pixel(self, color_fn: ColorFunction) -> None:
        """Color every pixel with the result of color_fn(x, y).

        Each coordinate in [0, width) x [0, height) is visited exactly once.
        The colors are collected first and written to the buffer in a single
        transfer, so if color_fn raises or returns an invalid color the buffer
        is left unchanged and the error propagates.

        Args:
            color_fn: Callable mapping integer (x, y) to a Color or an
                (r, g, b[, a]) sequence of ints. It should be pure.

        Raises:
            TypeError: If color_fn returns something that is not a color.
            ValueError: If a returned color has invalid channels.
        """
        staging = np.empty((self._width, self._height, NUM_CHANNELS), dtype=np.uint8)
        for x in range(self._width):
            for y in range(self._height):
                staging[x, y] = Color.coerce(color_fn(x, y)).as_tuple()
        self._pixels.from_numpy(staging)

    def get_pixel(self, x: int, y: int) -> Color:
        """Get the color stored at (x, y).

        Raises:
            IndexError: If the coordinate is outside the buffer.
        """
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self._width}x{self._height} scene"
            )
        value = self._pixels[x, y]
        return Color(int(value[0]), int(value[1]), int(value[2]), int(value[3]))

    def to_numpy(self) -> npt.NDArray[np.uint8]:
        """Get the buffer as an image array.

        Returns:
            Array of shape (height, width, 4) with dtype uint8, rows in image
            order (row 0 is y = 0).
        """
        # Transpose from (width, height, 4) to (height, width, 4) for standard image format
        return np.ascontiguousarray(np.transpose(self._pixels.to_numpy(), (1, 0, 2)))

    def persist(self, filepath: PathLike) -> Path:
        """Encode the buffer as an RGBA PNG.

        Existing files are overwritten. The Scene remains usable afterwards and
        may be persisted again.

        Args:
            filepath: Output file path.

        Returns:
            The path that was written.

        Raises:
            OSError: If the destination cannot be created or written, for
                example PermissionError or FileNotFoundError.
        """
        path = save_png_from_array(self.to_numpy(), filepath)
        logger.debug("Persisted %dx%d scene to %s", self._width, self._height, path)
        return path

    def __repr__(self) -> str:
        """Return a string representation of the scene."""
        return f"Scene(width={self._width}, height={self._height})"
