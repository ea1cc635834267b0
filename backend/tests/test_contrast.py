"""
Colour parsing and WCAG contrast maths.
"""
import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from a11y_api.checker.contrast import (  # noqa: E402
    calculate_contrast_ratio,
    contrast_ratio,
    is_low_contrast,
    parse_color,
    relative_luminance,
)


@pytest.mark.parametrize("value, expected", [
    ("#000000", (0, 0, 0)),
    ("#FFFFFF", (255, 255, 255)),
    ("#fff", (255, 255, 255)),
    ("#abc", (170, 187, 204)),
    ("  #336699 ", (51, 102, 153)),
    ("rgb(0, 128, 255)", (0, 128, 255)),
    ("RGB(10,20,30)", (10, 20, 30)),
    ("rgba(0, 0, 0, 0.5)", (0, 0, 0)),
    ("rgba(255,255,255,50%)", (255, 255, 255)),
])
def test_parse_color(value, expected):
    assert parse_color(value) == expected


@pytest.mark.parametrize("value", [
    "", "#ggg", "#abcd", "#1234567", "blue", "rgb(300, 0, 0)", "rgb(1, 2)", "hsl(0, 0%, 0%)",
])
def test_parse_color_rejects_unparseable(value):
    assert parse_color(value) is None


def test_relative_luminance_bounds():
    assert relative_luminance(0, 0, 0) == 0.0
    assert relative_luminance(255, 255, 255) == pytest.approx(1.0)


def test_relative_luminance_uses_linear_segment_for_dark_channels():
    # 10/255 = 0.0392 sits below the 0.03928 threshold
    assert relative_luminance(10, 10, 10) == pytest.approx((10 / 255.0) / 12.92)


def test_black_on_white_is_21():
    assert contrast_ratio((0, 0, 0), (255, 255, 255)) == pytest.approx(21.0)


def test_ratio_is_symmetric_and_at_least_one():
    a = calculate_contrast_ratio("#777777", "#888888")
    b = calculate_contrast_ratio("#888888", "#777777")
    assert a == pytest.approx(b)
    assert a >= 1.0
    assert calculate_contrast_ratio("#123456", "#123456") == pytest.approx(1.0)


def test_calculate_contrast_ratio_returns_none_on_parse_failure():
    assert calculate_contrast_ratio("#000", "not-a-color") is None


class TestIsLowContrast:
    def test_grey_on_grey_is_low(self):
        assert is_low_contrast("#777777", "#888888")

    def test_light_grey_on_white_is_low(self):
        assert is_low_contrast("#f0f0f0", "#ffffff")

    def test_black_on_white_passes(self):
        assert not is_low_contrast("#000000", "#ffffff")

    def test_mixed_notations(self):
        assert not is_low_contrast("rgb(0, 0, 0)", "#fff")

    def test_threshold_is_exclusive(self):
        # #767676 on white is the classic 4.54:1 pass
        assert not is_low_contrast("#767676", "#ffffff")
        assert is_low_contrast("#777777", "#ffffff")

    def test_unparseable_pair_is_not_flagged(self):
        assert not is_low_contrast("rgb(300, 0, 0)", "#ffffff")
