from image2ascii.errors import EmptyPalette, InvalidPalette

# Edge palettes are indexed by quantized gradient angle; index 0 means "no edge".
EDGE_ASCII = " -/|\\"

EDGE_LINES = " ─╱│╲"

# Gray palettes run from the darkest luminance bucket to the brightest.
GRAY_ASCII = "@?OPoc:. "

# Block elements: full block down to blank (U+2588, U+2593, U+2592, U+2591)
GRAY_BLOCKS = "█▓▒░ "

# ASCII characters useful for texture, densest first
GRAY_TEXTURE = "@#=+*Xx\\/-';!:,. "

EDGE_PALETTES = {
    "ascii": EDGE_ASCII,
    "lines": EDGE_LINES,
}

GRAY_PALETTES = {
    "ascii": GRAY_ASCII,
    "blocks": GRAY_BLOCKS,
    "texture": GRAY_TEXTURE,
}


def as_palette(symbols, name: str) -> tuple[str, ...]:
    """Normalise a string or sequence of single characters into a palette tuple."""
    try:
        palette = tuple(symbols)
    except TypeError:
        raise InvalidPalette(f"{name} palette must be a string or a list of characters, got {symbols!r}") from None
    if not palette:
        raise EmptyPalette(name)
    for symbol in palette:
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise InvalidPalette(f"{name} palette symbols must be single characters, got {symbol!r}")
    return palette
