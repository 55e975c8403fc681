import logging

import numpy as np
from PIL import Image

from image2ascii.errors import InvalidDownsampleRate

logger = logging.getLogger(__name__)

# Pillow's bilinear filter is a triangle kernel widened by the reduction factor,
# so downscaling averages the whole source area under each cell.
RESAMPLE_FILTER = Image.BILINEAR


def grid_size(width: int, height: int, downsample_rate: int) -> tuple[int, int]:
    """Return ``(columns, rows)`` of the character grid for a source image size.

    Rows are halved again because terminal characters are about twice as tall as wide.
    """
    if downsample_rate <= 0:
        raise InvalidDownsampleRate(downsample_rate)
    cols = max(1, width // downsample_rate)
    rows = max(1, (height // downsample_rate) // 2)
    return cols, rows


def quantization_step(levels: int) -> int:
    """Width of one bucket when ``levels`` buckets cover the 8-bit range."""
    return max(1, 256 // levels)


def quantize(values, levels: int):
    """Round 8-bit values down to the nearest bucket boundary.

    Works on scalars and arrays alike. Applying it twice with the same ``levels``
    returns the same result as applying it once.
    """
    step = quantization_step(levels)
    if isinstance(values, np.ndarray):
        arr = values.astype(np.int32)
        return (arr - arr % step).astype(values.dtype)
    value = int(values)
    return value - value % step


def sample_colours(image: Image.Image, cols: int, rows: int) -> np.ndarray:
    """Area-resample an RGB image to one colour per cell.

    Returns array of shape (rows, cols, 3) as uint8.
    """
    small = image.convert("RGB").resize((cols, rows), RESAMPLE_FILTER)
    return np.asarray(small, dtype=np.uint8).reshape(rows, cols, 3)


def sample_luminance(image: Image.Image, cols: int, rows: int, levels: int) -> np.ndarray:
    """Quantized luminance per cell, shape (rows, cols) as uint8."""
    small = image.convert("L").resize((cols, rows), RESAMPLE_FILTER)
    values = np.asarray(small, dtype=np.uint8).reshape(rows, cols)
    logger.debug("sampled luminance for %dx%d cells, %d levels", cols, rows, levels)
    return quantize(values, levels)
