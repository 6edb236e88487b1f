"""PNG codec for pixel buffers.

This module is the image codec collaborator used by Scene persistence. It
encodes 8-bit RGBA (or RGB) arrays to PNG and decodes PNG files back to RGBA
arrays, both through Pillow.

Supported formats:
    - PNG (8-bit per channel, lossless)

Example:
    >>> import numpy as np
    >>> from src.python.preview.export import load_png, save_png_from_array
    >>>
    >>> image = np.zeros((4, 4, 4), dtype=np.uint8)
    >>> save_png_from_array(image, "output.png")
    >>> load_png("output.png").shape
    (4, 4, 4)
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Union

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

# Pillow format name used for encoding and decoding
PNG_FORMAT = "PNG"

# Supported channel counts (RGB, RGBA)
_CHANNELS = (3, 4)

# Permissions for newly created images (temporary files start as 0o600)
NEW_FILE_MODE = 0o644


def save_png_from_array(
    image: npt.NDArray[np.uint8],
    filepath: PathLike,
) -> Path:
    """Save an 8-bit NumPy array as a PNG file.

    The image is encoded into a temporary file next to the destination, which
    then replaces the destination. If anything fails, the temporary file is
    removed and an existing destination keeps its previous contents.

    Args:
        image: Array of shape (H, W, 4) or (H, W, 3) with dtype uint8.
        filepath: Output file path.

    Returns:
        The path that was written.

    Raises:
        ValueError: If the array has an unsupported shape or dtype.
        OSError: If the destination cannot be created or written.
    """
    if image.dtype != np.uint8:
        raise ValueError(f"Image dtype must be uint8, got {image.dtype}")
    if image.ndim != 3 or image.shape[2] not in _CHANNELS:
        raise ValueError(f"Image shape must be (H, W, 3) or (H, W, 4), got {image.shape}")

    path = Path(filepath)
    pil_image = PILImage.fromarray(np.ascontiguousarray(image))

    # mkstemp failures (missing or unwritable directory) propagate before anything exists
    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            pil_image.save(handle, format=PNG_FORMAT)
        if path.is_file():
            shutil.copymode(path, temp_path)
        else:
            os.chmod(temp_path, NEW_FILE_MODE)
        os.replace(temp_path, path)
    except BaseException:
        _remove_partial(temp_path)
        raise

    logger.debug("Wrote %dx%d PNG to %s", image.shape[1], image.shape[0], path)
    return path


def load_png(filepath: PathLike) -> npt.NDArray[np.uint8]:
    """Decode a PNG file into an RGBA array.

    Args:
        filepath: Path of the PNG to read.

    Returns:
        Array of shape (H, W, 4) with dtype uint8. Images without an alpha
        channel are converted to fully opaque RGBA.

    Raises:
        OSError: If the file cannot be opened or decoded.
    """
    path = Path(filepath)
    with PILImage.open(path, formats=[PNG_FORMAT]) as pil_image:
        rgba = pil_image.convert("RGBA")
        image = np.asarray(rgba, dtype=np.uint8).copy()

    logger.debug("Read %dx%d PNG from %s", image.shape[1], image.shape[0], path)
    return image


def _remove_partial(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        return
    except OSError as e:
        logger.warning("Could not remove partially written file %s: %s", path, e)
        return
    logger.warning("Removed partially written file %s", path)
