class ConversionError(ValueError):
    """Invalid input to the image-to-character conversion."""


class InvalidDownsampleRate(ConversionError):
    def __init__(self, rate):
        super().__init__(f"downsample_rate must be a positive integer, got {rate!r}")
        self.rate = rate


class EmptyPalette(ConversionError):
    def __init__(self, name: str):
        super().__init__(f"{name} palette cannot be empty")
        self.name = name


class InvalidPalette(ConversionError):
    """A palette is not a sequence of single characters."""


class InvalidParameter(ConversionError):
    """A numeric render parameter has the wrong type or is out of range."""
