import math
import os
import sys


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return (80, 24)
    size = os.get_terminal_size()
    return (size.columns, size.lines)


def fit_downsample_rate(image_width: int, columns: int) -> int:
    """Smallest downsample rate whose grid is no wider than ``columns``."""
    return max(1, math.ceil(image_width / max(1, columns)))
