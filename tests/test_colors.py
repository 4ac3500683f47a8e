import random

import pytest

from gantt_chart.chart_models import Resource
from gantt_chart.colors import (
    GOLDEN_RATIO_CONJUGATE,
    color_to_hex,
    generated_colors,
    hsv_to_rgb,
    parse_color,
    resource_colors,
)


def test_hsv_to_rgb_scales_channels_by_256():
    # Red sector: R = v, G = B = v * (1 - s).
    assert hsv_to_rgb(0.0, 0.5, 0.5) == (128 << 16) | (64 << 8) | 64
    assert hsv_to_rgb(0.0, 0.0, 1.0) == 0xFFFFFF


def test_generated_colors_rotate_hue_by_golden_ratio():
    rng = random.Random(7)
    start = random.Random(7).random()

    colors = generated_colors(3, rng)

    assert colors == [
        hsv_to_rgb(start, 0.5, 0.5),
        hsv_to_rgb((start + GOLDEN_RATIO_CONJUGATE) % 1.0, 0.5, 0.5),
        hsv_to_rgb((start + 2 * GOLDEN_RATIO_CONJUGATE) % 1.0, 0.5, 0.5),
    ]
    assert len(set(colors)) == 3


def test_generated_colors_are_reproducible_with_the_same_seed():
    assert generated_colors(5, random.Random(42)) == generated_colors(5, random.Random(42))


def test_explicit_colors_are_used_verbatim():
    resources = [Resource("A", color=0x123456), Resource("B", color=0xABCDEF)]

    assert resource_colors(resources) == (0x123456, 0xABCDEF)


def test_mixed_colors_keep_explicit_and_fill_the_rest():
    resources = [Resource("A", color=0x123456), Resource("B")]

    colors = resource_colors(resources, random.Random(1))

    assert colors[0] == 0x123456
    assert colors[1] == generated_colors(2, random.Random(1))[1]


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#ff8800", 0xFF8800),
        ("FF8800", 0xFF8800),
        ("#80ff8800", 0xFF8800),
        (0xFF00FF00, 0x00FF00),
    ],
)
def test_parse_color_accepts_hex_and_argb(value, expected):
    assert parse_color(value) == expected


@pytest.mark.parametrize("value", ["#fff", "#gggggg", True, -1])
def test_parse_color_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_color(value)


def test_color_to_hex_is_zero_padded():
    assert color_to_hex(0x00FF00) == "#00ff00"
