import numpy as np

from image2ascii.parallel import map_bands
from image2ascii.sampling import quantization_step


def edge_indices(edge_values: np.ndarray, levels: int) -> tuple[np.ndarray, np.ndarray]:
    """Edge palette index per cell, and whether the cell should use it."""
    step = quantization_step(levels)
    values = np.asarray(edge_values, dtype=np.int32)
    idx = np.minimum(values // step, levels - 1)
    # Values in bucket 0 still count as an edge once they pass half a step
    use_edge = (idx != 0) | (values > step / 2)
    return idx, use_edge


def gray_indices(gray_values: np.ndarray, levels: int) -> np.ndarray:
    step = quantization_step(levels)
    return np.minimum(np.asarray(gray_values, dtype=np.int32) // step, levels - 1)


def select_char(edge_value: int, gray_value: int, edge_palette, gray_palette) -> str:
    """Pick the character for a single cell."""
    idx, use_edge = edge_indices(np.array([edge_value]), len(edge_palette))
    if use_edge[0]:
        return edge_palette[idx[0]]
    return gray_palette[gray_indices(np.array([gray_value]), len(gray_palette))[0]]


def compose(
    edge_values: np.ndarray,
    gray_values: np.ndarray,
    edge_palette,
    gray_palette,
    workers: int | None = None,
) -> list[str]:
    """Map per-cell edge and luminance values to one string of characters per row."""
    edge_chars = np.array(list(edge_palette))
    gray_chars = np.array(list(gray_palette))

    def band(start: int, stop: int) -> list[str]:
        e_idx, use_edge = edge_indices(edge_values[start:stop], len(edge_chars))
        g_idx = gray_indices(gray_values[start:stop], len(gray_chars))
        chars = np.where(use_edge, edge_chars[e_idx], gray_chars[g_idx])
        return ["".join(row) for row in chars]

    lines = []
    for part in map_bands(band, edge_values.shape[0], workers):
        lines.extend(part)
    return lines
