import io

import matplotlib.image as mpimg
import numpy as np
import pytest

from reachmap.config import HeatmapConfig
from reachmap.render import available_fonts, hour_label, render_heatmap


@pytest.mark.parametrize(
    "hour,label",
    [(0, "12:00 AM"), (3, "3:00 AM"), (9, "9:00 AM"), (12, "12:00 PM"), (15, "3:00 PM"), (21, "9:00 PM")],
)
def test_hour_label(hour, label):
    assert hour_label(hour) == label


def _blank_matrix():
    return [[None] * 7 for _ in range(24)]


def _decode(png):
    return mpimg.imread(io.BytesIO(png), format="png")


def _cell_center(config, row, column):
    """Pixel (y, x) at the middle of grid cell (row, column)."""
    cell_w = (config.width - config.border_width) / 8
    cell_h = (config.height - config.border_width) / 25
    offset = config.border_width / 2
    return int(offset + row * cell_h + cell_h / 2), int(offset + column * cell_w + cell_w / 2)


@pytest.mark.parametrize("width,height", [(100, 100), (333, 777), (1234, 567), (1000, 600)])
def test_png_has_exact_requested_size(width, height):
    png = render_heatmap(_blank_matrix(), HeatmapConfig(width=width, height=height))
    assert png.startswith(b"\x89PNG")
    assert _decode(png).shape[:2] == (height, width)


def test_bucket_is_drawn_at_hour_row_and_shifted_day_column():
    config = HeatmapConfig(width=800, height=1000)
    matrix = _blank_matrix()
    matrix[5][2] = "ff0000"
    matrix[23][6] = "#0000ff"
    img = _decode(render_heatmap(matrix, config))

    assert np.allclose(img[_cell_center(config, 5, 3)], [1, 0, 0, 1], atol=0.02)
    assert np.allclose(img[_cell_center(config, 23, 7)], [0, 0, 1, 1], atol=0.02)
    # the cell one column left is the day before, not the painted bucket
    assert img[_cell_center(config, 5, 2)][3] == 0


def test_empty_buckets_stay_transparent():
    config = HeatmapConfig(width=800, height=1000)
    matrix = _blank_matrix()
    matrix[0][0] = "57bb8a"
    img = _decode(render_heatmap(matrix, config))

    for row, column in [(1, 1), (12, 4), (23, 7), (5, 0)]:
        assert img[_cell_center(config, row, column)][3] == 0


def test_render_accepts_colors_with_or_without_hash():
    matrix = _blank_matrix()
    matrix[0][0] = "57bb8a"
    matrix[23][6] = "#007789"
    png = render_heatmap(matrix, HeatmapConfig(width=320, height=500, border_width=0))
    assert png.startswith(b"\x89PNG")


def test_available_fonts_is_sorted_and_unique():
    fonts = available_fonts()
    assert fonts
    assert fonts == sorted(set(fonts))
