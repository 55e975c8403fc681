import argparse
import logging
import sys
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from image2ascii.charsets import EDGE_PALETTES, GRAY_PALETTES
from image2ascii.config import RenderParams
from image2ascii.converter import format_colour, format_plain, to_json
from image2ascii.engine import EdgeEngine
from image2ascii.errors import ConversionError
from image2ascii.logging_conf import setup_logging
from image2ascii.terminal import fit_downsample_rate, get_terminal_size

logger = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an image as edge-aware coloured ASCII art")
    parser.add_argument("image", help="Path to input image")
    size = parser.add_mutually_exclusive_group()
    size.add_argument(
        "-d",
        "--downsample-rate",
        type=int,
        default=None,
        help="Source pixels per output column; higher values mean smaller output (default: 8)",
    )
    size.add_argument(
        "--fit", action="store_true", default=False, help="Pick the downsample rate that fits the terminal width"
    )
    parser.add_argument(
        "-t",
        "--edge-sobel-threshold",
        type=_non_negative_int,
        default=None,
        help="Minimum Sobel gradient magnitude drawn as an edge (default: 50)",
    )
    parser.add_argument(
        "--edge-palette", choices=sorted(EDGE_PALETTES), default=None, help="Named palette for edge characters"
    )
    parser.add_argument(
        "--gray-palette", choices=sorted(GRAY_PALETTES), default=None, help="Named palette for luminance characters"
    )
    parser.add_argument("--edge-chars", default=None, help="Edge characters, first one meaning 'no edge'")
    parser.add_argument("--gray-chars", default=None, help="Luminance characters, from dark to light")
    parser.add_argument("-w", "--workers", type=int, default=None, help="Worker threads (default: CPU count)")
    parser.add_argument("--config", default=None, help="JSON file with render parameters")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("-c", "--colour", action="store_true", default=False, help="Enable truecolor ANSI output")
    output.add_argument("--json", action="store_true", default=False, help="Print the cell grid as JSON")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    return parser


def _params_from_args(args: argparse.Namespace) -> RenderParams:
    params = RenderParams.load(args.config) if args.config else RenderParams()
    edge = args.edge_chars if args.edge_chars is not None else EDGE_PALETTES.get(args.edge_palette)
    gray = args.gray_chars if args.gray_chars is not None else GRAY_PALETTES.get(args.gray_palette)
    return params.replace(
        downsample_rate=args.downsample_rate,
        edge_sobel_threshold=args.edge_sobel_threshold,
        edge_palette=tuple(edge) if edge is not None else None,
        gray_palette=tuple(gray) if gray is not None else None,
        workers=args.workers,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    try:
        params = _params_from_args(args)
    except (OSError, ValueError) as e:
        print(f"Invalid config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        with Image.open(image_path) as image:
            image.load()
    except (UnidentifiedImageError, OSError) as e:
        print(f"Cannot decode image {image_path}: {e}", file=sys.stderr)
        sys.exit(1)

    if args.fit:
        columns = get_terminal_size()[0]
        params = params.replace(downsample_rate=fit_downsample_rate(image.width, columns))
        logger.info("fitting %d columns with downsample rate %d", columns, params.downsample_rate)

    try:
        grid = EdgeEngine(params).render(image)
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(to_json(grid))
    elif args.colour:
        print(format_colour(grid))
    else:
        print(format_plain(grid))


if __name__ == "__main__":
    main()
