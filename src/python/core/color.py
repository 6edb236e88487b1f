"""8-bit RGBA color values stored in a Scene pixel buffer.

Colors are produced by caller-supplied coloring functions and consumed by the
Scene buffer and the PNG codec. A renderer working in linear [0, 1] vector
space converts its result with Color.from_vector.

Example:
    >>> from src.python.core.color import Color
    >>> from src.python.core.vector import Vector3
    >>> Color.from_vector(Vector3(1.0, 0.5, 0.0))
    Color(red=255, green=127, blue=0, alpha=255)
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from src.python.core.vector import Vector3

# Channel value range for 8-bit color
CHANNEL_MIN = 0
CHANNEL_MAX = 255


def _check_channel(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Color channel {name} must be an int, got {value!r}")
    if value < CHANNEL_MIN or value > CHANNEL_MAX:
        raise ValueError(
            f"Color channel {name} = {value} is outside [{CHANNEL_MIN}, {CHANNEL_MAX}]"
        )


def _to_channel(name: str, value: float) -> int:
    if math.isnan(value):
        raise ValueError(f"Color channel {name} is NaN")
    clamped = min(max(value, 0.0), 1.0)
    return int(clamped * CHANNEL_MAX)


@dataclass(frozen=True)
class Color:
    """A color with four 8-bit channels.

    Attributes:
        red: Red channel (0-255).
        green: Green channel (0-255).
        blue: Blue channel (0-255).
        alpha: Alpha channel (0-255), 255 is fully opaque.
    """

    red: int
    green: int
    blue: int
    alpha: int = CHANNEL_MAX

    def __post_init__(self) -> None:
        _check_channel("red", self.red)
        _check_channel("green", self.green)
        _check_channel("blue", self.blue)
        _check_channel("alpha", self.alpha)

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return the channels as an (r, g, b, a) tuple."""
        return (self.red, self.green, self.blue, self.alpha)

    @classmethod
    def from_vector(cls, rgb: Vector3, alpha: float = 1.0) -> Color:
        """Convert a linear [0, 1] RGB vector to an 8-bit color.

        Components are clamped to [0, 1], scaled by 255 and truncated, the same
        conversion the PNG export path applies to float images.

        Args:
            rgb: Vector whose x, y, z hold red, green, blue.
            alpha: Opacity in [0, 1] (default 1.0).

        Returns:
            The corresponding Color.

        Raises:
            ValueError: If a component is NaN.
        """
        return cls(
            _to_channel("red", rgb.x),
            _to_channel("green", rgb.y),
            _to_channel("blue", rgb.z),
            _to_channel("alpha", alpha),
        )

    @classmethod
    def coerce(cls, value: ColorLike) -> Color:
        """Accept a Color or an (r, g, b[, a]) sequence of ints.

        Raises:
            TypeError: If value is neither a Color nor a sequence.
            ValueError: If the sequence has the wrong length or bad channels.
        """
        if isinstance(value, Color):
            return value
        if not isinstance(value, Sequence) or isinstance(value, str):
            raise TypeError(f"Expected a Color or channel sequence, got {type(value).__name__}")
        if len(value) not in (3, 4):
            raise ValueError(f"Expected 3 or 4 color channels, got {len(value)}")
        return cls(*value)


ColorLike = Union[Color, Sequence[int]]

TRANSPARENT = Color(0, 0, 0, 0)
BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
