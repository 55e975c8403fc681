import logging

import numpy as np
from PIL import Image

from image2ascii.parallel import map_bands
from image2ascii.sampling import quantize

logger = logging.getLogger(__name__)

_PI = np.float32(np.pi)


def sobel_gradients(gray: np.ndarray, workers: int | None = None) -> tuple[np.ndarray, np.ndarray]:
    """Horizontal and vertical 3x3 Sobel gradients of a 2D array.

    Pixels outside the image repeat the nearest edge pixel. Rows are processed in
    bands; each band reads its own one-row halo from the padded input, so the
    result is the same for any number of workers.

    Returns:
        sx: int32 array, positive where intensity increases to the right
        sy: int32 array, positive where intensity increases downwards
    """
    arr = np.asarray(gray, dtype=np.int32)
    padded = np.pad(arr, 1, mode="edge")

    def band(start: int, stop: int) -> tuple[np.ndarray, np.ndarray]:
        p = padded[start : stop + 2]
        left, right = p[:, :-2], p[:, 2:]
        above, below = p[:-2], p[2:]
        sx = (right[:-2] + 2 * right[1:-1] + right[2:]) - (left[:-2] + 2 * left[1:-1] + left[2:])
        sy = (below[:, :-2] + 2 * below[:, 1:-1] + below[:, 2:]) - (above[:, :-2] + 2 * above[:, 1:-1] + above[:, 2:])
        return sx, sy

    parts = map_bands(band, arr.shape[0], workers)
    sx = np.concatenate([p[0] for p in parts], axis=0)
    sy = np.concatenate([p[1] for p in parts], axis=0)
    return sx, sy


def gradient_polar(sx: np.ndarray, sy: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Gradient magnitude and angle (radians in [-pi, pi]) as float32 arrays."""
    fx = sx.astype(np.float32)
    fy = sy.astype(np.float32)
    return np.sqrt(fx * fx + fy * fy), np.arctan2(fy, fx)


def angle_to_value(angle):
    """Map an angle in [-pi, pi] onto the 8-bit range, truncating."""
    normalized = (np.asarray(angle, dtype=np.float32) / _PI) * np.float32(0.5) + np.float32(0.5)
    return (normalized * np.float32(255.0)).astype(np.int32)


def edge_map(
    image: Image.Image,
    sobel_threshold: float,
    downsample_rate: int,
    levels: int,
    cols: int,
    rows: int,
    workers: int | None = None,
) -> np.ndarray:
    """Quantized edge orientation per cell, shape (rows, cols) as uint8.

    Each cell covers ``downsample_rate`` source columns and twice as many source
    rows. The pixel with the strongest gradient in that window decides the cell:
    below ``sobel_threshold`` the cell is 0 (no edge), otherwise its gradient
    angle is scaled to 0-255 and rounded down to one of ``levels`` buckets.
    """
    gray = np.asarray(image.convert("L"), dtype=np.int32)
    height, width = gray.shape
    magnitude, angle = gradient_polar(*sobel_gradients(gray, workers))

    win_w = downsample_rate
    win_h = downsample_rate * 2
    x_end = min(cols * win_w, width)

    def pool(start: int, stop: int) -> np.ndarray:
        n = stop - start
        y0 = start * win_h
        y1 = min(stop * win_h, height)

        # Windows reaching past the image are padded with a magnitude no pixel can have
        mag = np.full((n * win_h, cols * win_w), -1.0, dtype=np.float32)
        ang = np.zeros((n * win_h, cols * win_w), dtype=np.float32)
        mag[: y1 - y0, :x_end] = magnitude[y0:y1, :x_end]
        ang[: y1 - y0, :x_end] = angle[y0:y1, :x_end]

        # (n, cols, win_h * win_w), each window flattened in raster order
        mag = mag.reshape(n, win_h, cols, win_w).transpose(0, 2, 1, 3).reshape(n, cols, -1)
        ang = ang.reshape(n, win_h, cols, win_w).transpose(0, 2, 1, 3).reshape(n, cols, -1)

        best = mag.argmax(axis=2)[..., None]
        peak = np.take_along_axis(mag, best, axis=2)[..., 0]
        peak_angle = np.take_along_axis(ang, best, axis=2)[..., 0]

        values = quantize(angle_to_value(peak_angle), levels)
        return np.where(peak >= sobel_threshold, values, 0).astype(np.uint8)

    result = np.concatenate(map_bands(pool, rows, workers), axis=0)
    logger.debug("edge map %dx%d, %d non-zero cells", cols, rows, int(np.count_nonzero(result)))
    return result
