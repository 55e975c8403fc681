from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from PIL import Image

from image2ascii.composer import compose
from image2ascii.config import RenderParams
from image2ascii.edges import edge_map
from image2ascii.sampling import grid_size, sample_colours, sample_luminance

logger = logging.getLogger(__name__)


class Cell(NamedTuple):
    char: str
    colour: tuple[int, int, int]


@dataclass
class CellGrid:
    chars: list[str]  # one string per row
    colours: np.ndarray  # (rows, cols, 3) uint8

    @property
    def width(self) -> int:
        return len(self.chars[0]) if self.chars else 0

    @property
    def height(self) -> int:
        return len(self.chars)

    def cell(self, row: int, col: int) -> Cell:
        r, g, b = (int(v) for v in self.colours[row, col])
        return Cell(self.chars[row][col], (r, g, b))

    def rows(self) -> Iterator[list[Cell]]:
        """Yield each row of cells, top to bottom."""
        for row in range(self.height):
            yield [self.cell(row, col) for col in range(self.width)]

    def to_dict(self) -> dict:
        """Serializable form: rows of ``{char, r, g, b}`` plus the grid size."""
        lines = [
            [{"char": cell.char, "r": cell.colour[0], "g": cell.colour[1], "b": cell.colour[2]} for cell in row]
            for row in self.rows()
        ]
        return {"lines": lines, "width": self.width, "height": self.height}


class EdgeEngine:
    """Rendering engine that draws strong edges with orientation characters and
    fills everything else with luminance characters."""

    def __init__(self, params: RenderParams | None = None):
        self.params = (params or RenderParams()).validate()

    def grid_size(self, image: Image.Image) -> tuple[int, int]:
        return grid_size(image.width, image.height, self.params.downsample_rate)

    def render(self, image: Image.Image) -> CellGrid:
        p = self.params
        image = image.convert("RGB")
        cols, rows = self.grid_size(image)
        logger.debug("rendering %dx%d image as %dx%d cells", image.width, image.height, cols, rows)

        colours = sample_colours(image, cols, rows)
        gray = sample_luminance(image, cols, rows, len(p.gray_palette))
        edges = edge_map(
            image,
            p.edge_sobel_threshold,
            p.downsample_rate,
            len(p.edge_palette),
            cols,
            rows,
            workers=p.workers,
        )
        chars = compose(edges, gray, p.edge_palette, p.gray_palette, workers=p.workers)
        return CellGrid(chars=chars, colours=colours)


def image_to_ascii_art(
    image: Image.Image,
    downsample_rate: int,
    edge_sobel_threshold: float,
    edge_palette: Sequence[str],
    gray_palette: Sequence[str],
    workers: int | None = None,
) -> CellGrid:
    """Convert an image to a grid of coloured characters.

    Raises:
        InvalidDownsampleRate: ``downsample_rate`` is not positive.
        EmptyPalette: either palette has no symbols.
    """
    params = RenderParams(
        downsample_rate=downsample_rate,
        edge_sobel_threshold=edge_sobel_threshold,
        edge_palette=tuple(edge_palette),
        gray_palette=tuple(gray_palette),
        workers=workers,
    )
    return EdgeEngine(params).render(image)
