import numpy as np
import pytest
from PIL import Image


def gray_image(array) -> Image.Image:
    """Build an "L" image from a 2D array of 0-255 values."""
    return Image.fromarray(np.asarray(array, dtype=np.uint8))


@pytest.fixture
def mid_gray_image():
    return Image.new("RGB", (16, 16), (128, 128, 128))


@pytest.fixture
def vertical_edge_image():
    """16x16, black in columns 0-7 and white from column 8."""
    img = Image.new("RGB", (16, 16), (0, 0, 0))
    pixels = img.load()
    for y in range(16):
        for x in range(8, 16):
            pixels[x, y] = (255, 255, 255)
    return img


@pytest.fixture
def noise_image():
    rng = np.random.default_rng(7)
    arr = rng.integers(0, 256, size=(48, 64, 3), dtype=np.uint8)
    return Image.fromarray(arr)

class _TrackedImage:
    def __init__(self, image, closed):
        self.image = image
        self.closed = closed

    def __enter__(self):
        return self.image.__enter__()

    def __exit__(self, *exc_info):
        self.closed.append(self.image)
        return self.image.__exit__(*exc_info)


@pytest.fixture
def closed_images(monkeypatch):
    """Patch ``Image.open`` so the test can see which opened images were closed."""
    closed = []
    real_open = Image.open
    monkeypatch.setattr(Image, "open", lambda path: _TrackedImage(real_open(path), closed))
    return closed
