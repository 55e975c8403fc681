import numpy as np
import pytest
from PIL import Image

from image2ascii.charsets import EDGE_ASCII, GRAY_ASCII
from image2ascii.config import RenderParams
from image2ascii.engine import Cell, CellGrid, EdgeEngine, image_to_ascii_art
from image2ascii.errors import EmptyPalette, InvalidDownsampleRate, InvalidPalette


def test_uniform_gray_scenario(mid_gray_image):
    grid = image_to_ascii_art(mid_gray_image, 8, 100000, EDGE_ASCII, GRAY_ASCII)
    assert (grid.width, grid.height) == (2, 1)
    assert grid.chars[0][0] == grid.chars[0][1]
    assert grid.chars[0][0] in GRAY_ASCII
    # 128 rounds down to 112 with 9 levels, which is index 4
    assert grid.chars == ["oo"]
    assert grid.cell(0, 0).colour == (128, 128, 128)
    assert grid.cell(0, 1).colour == (128, 128, 128)


def test_vertical_boundary_scenario(vertical_edge_image):
    grid = image_to_ascii_art(vertical_edge_image, 8, 1, EDGE_ASCII, GRAY_ASCII)
    assert (grid.width, grid.height) == (2, 1)
    assert grid.chars == ["//"]


def test_low_contrast_image_uses_only_gray_characters():
    rng = np.random.default_rng(1)
    arr = rng.integers(100, 104, size=(64, 80, 3), dtype=np.uint8)
    grid = image_to_ascii_art(Image.fromarray(arr), 4, 50, "#ABCD", "0123456789")
    assert (grid.width, grid.height) == (20, 8)
    assert all(char in "0123456789" for line in grid.chars for char in line)


def test_grid_dimensions_follow_downsample_rate():
    img = Image.new("RGB", (100, 70), (0, 0, 0))
    for rate in (1, 3, 7, 10, 64, 200):
        grid = image_to_ascii_art(img, rate, 50, EDGE_ASCII, GRAY_ASCII)
        assert grid.width == max(1, 100 // rate)
        assert grid.height == max(1, (70 // rate) // 2)
        assert grid.colours.shape == (grid.height, grid.width, 3)


def test_zero_downsample_rate_is_rejected(mid_gray_image):
    with pytest.raises(InvalidDownsampleRate):
        image_to_ascii_art(mid_gray_image, 0, 50, EDGE_ASCII, GRAY_ASCII)


def test_empty_gray_palette_is_rejected(mid_gray_image):
    with pytest.raises(EmptyPalette) as exc:
        image_to_ascii_art(mid_gray_image, 8, 50, EDGE_ASCII, "")
    assert exc.value.name == "gray"


def test_empty_edge_palette_is_rejected(mid_gray_image):
    with pytest.raises(EmptyPalette) as exc:
        image_to_ascii_art(mid_gray_image, 8, 50, "", GRAY_ASCII)
    assert exc.value.name == "edge"


def test_fractional_downsample_rate_is_rejected(mid_gray_image):
    with pytest.raises(InvalidDownsampleRate) as exc:
        image_to_ascii_art(mid_gray_image, 2.5, 50, EDGE_ASCII, GRAY_ASCII)
    assert exc.value.rate == 2.5


def test_rate_is_checked_before_palettes(mid_gray_image):
    with pytest.raises(InvalidDownsampleRate):
        image_to_ascii_art(mid_gray_image, 0, 50, "", "")


def test_multi_character_symbol_is_rejected(mid_gray_image):
    with pytest.raises(InvalidPalette):
        image_to_ascii_art(mid_gray_image, 8, 50, [" ", "--"], GRAY_ASCII)


def test_errors_are_value_errors():
    assert issubclass(InvalidDownsampleRate, ValueError)
    assert issubclass(EmptyPalette, ValueError)


def test_invalid_params_fail_before_rendering():
    with pytest.raises(InvalidDownsampleRate):
        EdgeEngine(RenderParams(downsample_rate=-2))


def test_result_same_for_any_worker_count(noise_image):
    expected = image_to_ascii_art(noise_image, 3, 150, EDGE_ASCII, GRAY_ASCII, workers=1)
    for workers in (2, 3, 7):
        grid = image_to_ascii_art(noise_image, 3, 150, EDGE_ASCII, GRAY_ASCII, workers=workers)
        assert grid.chars == expected.chars
        np.testing.assert_array_equal(grid.colours, expected.colours)


def test_accepts_other_image_modes(mid_gray_image):
    expected = image_to_ascii_art(mid_gray_image, 8, 50, EDGE_ASCII, GRAY_ASCII)
    for mode in ("L", "RGBA"):
        grid = image_to_ascii_art(mid_gray_image.convert(mode), 8, 50, EDGE_ASCII, GRAY_ASCII)
        assert grid.chars == expected.chars


def test_engine_uses_default_params(vertical_edge_image):
    engine = EdgeEngine()
    assert engine.params.downsample_rate == 8
    assert engine.params.edge_palette == tuple(EDGE_ASCII)
    assert engine.render(vertical_edge_image).chars == ["//"]


def test_cell_grid_accessors():
    colours = np.array([[[1, 2, 3], [4, 5, 6]]], dtype=np.uint8)
    grid = CellGrid(chars=["ab"], colours=colours)
    assert (grid.width, grid.height) == (2, 1)
    assert grid.cell(0, 1) == Cell("b", (4, 5, 6))
    assert list(grid.rows()) == [[Cell("a", (1, 2, 3)), Cell("b", (4, 5, 6))]]
    assert grid.to_dict() == {
        "lines": [[{"char": "a", "r": 1, "g": 2, "b": 3}, {"char": "b", "r": 4, "g": 5, "b": 6}]],
        "width": 2,
        "height": 1,
    }
