import json
from pathlib import Path

from PIL import Image

from image2ascii.engine import CellGrid, EdgeEngine


def format_plain(grid: CellGrid) -> str:
    return "\n".join(grid.chars)


def format_colour(grid: CellGrid) -> str:
    """Wrap each character in an ANSI truecolor foreground escape sequence."""
    out = []
    for r, line in enumerate(grid.chars):
        parts = []
        for c, char in enumerate(line):
            fr, fg, fb = (int(v) for v in grid.colours[r, c])
            parts.append(f"\033[38;2;{fr};{fg};{fb}m{char}")
        parts.append("\033[0m")
        out.append("".join(parts))
    return "\n".join(out)


def to_json(grid: CellGrid, indent: int | None = None) -> str:
    return json.dumps(grid.to_dict(), ensure_ascii=False, indent=indent)


def image_to_ascii(
    image: Image.Image | str | Path,
    engine: EdgeEngine,
    colour: bool = False,
) -> str:
    if isinstance(image, Image.Image):
        grid = engine.render(image)
    else:
        with Image.open(image) as opened:
            grid = engine.render(opened)
    if colour:
        return format_colour(grid)
    return format_plain(grid)
