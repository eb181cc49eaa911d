import logging
import math

import pytest

from kondipress.errors import EmptyInputError, InvalidImageError
from kondipress.layout import Layout, compute_layout

logger = logging.getLogger(__name__)


SIZE_SETS = [
    [(100, 50)],
    [(100, 50), (80, 100)],
    [(100, 30), (100, 70)],
    [(640, 480), (480, 640), (1920, 1080)],
    [(7, 3), (11, 13), (17, 19)],
    [(1, 1000), (1000, 1)],
]


def test_two_images():
    layout = compute_layout([(100, 50), (80, 100)])
    assert layout.target_height == 100
    assert layout.scaled_widths == (200.0, 80.0)
    assert layout.offsets == (0.0, 200.0)
    assert layout.total_width == 280.0
    assert layout.size == (280, 100)
    assert layout.boxes == ((0, 0, 200, 100), (200, 0, 280, 100))


def test_single_image_is_unscaled():
    layout = compute_layout([(100, 50)])
    assert layout.size == (100, 50)
    assert layout.scaled_widths == (100.0,)
    assert layout.offsets == (0.0,)
    assert len(layout) == 1


@pytest.mark.parametrize("sizes", SIZE_SETS)
def test_target_height_is_max_height(sizes):
    layout = compute_layout(sizes)
    assert layout.target_height == max(height for _, height in sizes)
    assert layout.height == layout.target_height


@pytest.mark.parametrize("sizes", SIZE_SETS)
def test_aspect_ratio_preserved(sizes):
    layout = compute_layout(sizes)
    for (width, height), scaled in zip(sizes, layout.scaled_widths):
        assert scaled / layout.target_height == pytest.approx(width / height)


@pytest.mark.parametrize("sizes", SIZE_SETS)
def test_offsets_are_running_sum(sizes):
    layout = compute_layout(sizes)
    assert layout.offsets[0] == 0
    for i in range(1, len(sizes)):
        assert layout.offsets[i] == layout.offsets[i - 1] + layout.scaled_widths[i - 1]


@pytest.mark.parametrize("sizes", SIZE_SETS)
def test_canvas_width_within_rounding(sizes):
    layout = compute_layout(sizes)
    assert abs(layout.width - layout.total_width) <= len(sizes)
    assert layout.width == math.ceil(layout.total_width - 1e-6)


@pytest.mark.parametrize("sizes", SIZE_SETS)
def test_boxes_tile_canvas(sizes):
    layout = compute_layout(sizes)
    boxes = layout.boxes
    assert len(boxes) == len(sizes)
    assert boxes[0][0] == 0
    assert boxes[-1][2] == layout.width
    for box, scaled in zip(boxes, layout.scaled_widths):
        left, top, right, bottom = box
        assert (top, bottom) == (0, layout.height)
        assert right > left
        assert abs((right - left) - scaled) < 1
    for previous, current in zip(boxes, boxes[1:]):
        assert previous[2] == current[0]


def test_fractional_widths():
    layout = compute_layout([(100, 30), (100, 70)])
    assert layout.scaled_widths[0] == pytest.approx(233.3333333)
    assert layout.size == (334, 70)
    assert layout.boxes == ((0, 0, 234, 70), (234, 0, 334, 70))


def test_sub_pixel_box_is_one_pixel():
    layout = compute_layout([(0.2, 10)])
    assert layout.boxes == ((0, 0, 1, 10),)


def test_idempotent():
    sizes = [(640, 480), (480, 640), (1920, 1080)]
    assert compute_layout(sizes) == compute_layout(sizes)


def test_reordering_moves_placement_only():
    sizes = [(640, 480), (480, 640), (1920, 1080)]
    layout = compute_layout(sizes)
    reordered = compute_layout(sizes[::-1])
    assert reordered.target_height == layout.target_height
    assert reordered.total_width == pytest.approx(layout.total_width)
    assert reordered.scaled_widths == layout.scaled_widths[::-1]
    assert reordered.offsets != layout.offsets


def test_accepts_generator():
    layout = compute_layout(size for size in [(10, 10), (20, 10)])
    assert isinstance(layout, Layout)
    assert layout.size == (30, 10)


def test_empty():
    with pytest.raises(EmptyInputError):
        compute_layout([])


@pytest.mark.parametrize(
    "size",
    [
        (100, 0),
        (0, 100),
        (-10, 100),
        (100, -1),
        (float("nan"), 100),
        (100, float("inf")),
        (None, 100),
        (True, 100),
    ],
)
def test_invalid_size(size):
    with pytest.raises(InvalidImageError) as excinfo:
        compute_layout([(100, 50), size])
    assert "Image 1" in str(excinfo.value)


def test_invalid_size_is_value_error():
    with pytest.raises(ValueError):
        compute_layout([(100, 0)])
