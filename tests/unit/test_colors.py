"""
Unit tests for color and style mapping.
"""

import pytest

from rose_chart.core.colors import (
    COLOR_DEFAULT_STROKE,
    COLOR_SELECTED_STROKE,
    OPACITY_DIMMED,
    OPACITY_HOVER,
    OPACITY_NORMAL,
    ColorScheme,
    RGBColor,
    base_color,
    intensity,
    style_for,
)
from rose_chart.core.errors import UnknownVariant


class TestRGBColor:
    """Test the RGBColor value type."""

    def test_from_hex(self):
        assert RGBColor.from_hex("#667eea") == (0x66, 0x7E, 0xEA)
        assert RGBColor.from_hex("abc") == (0xAA, 0xBB, 0xCC)

    def test_to_hex_and_css(self):
        color = RGBColor(255, 107, 107)
        assert color.to_hex() == "#ff6b6b"
        assert color.css() == "rgb(255, 107, 107)"

    def test_channels_clamped(self):
        assert RGBColor.of(-5, 300, 127.6) == (0, 255, 128)


class TestColorScheme:
    """Test scheme lookup."""

    @pytest.mark.parametrize("name,scheme", [
        ("a", ColorScheme.BLUES),
        ("B", ColorScheme.PURPLES),
        ("greens", ColorScheme.GREENS),
        ("Oranges", ColorScheme.ORANGES),
        (ColorScheme.GREENS, ColorScheme.GREENS),
    ])
    def test_parse(self, name, scheme):
        assert ColorScheme.parse(name) is scheme

    def test_unknown_scheme(self):
        with pytest.raises(UnknownVariant, match="color scheme"):
            ColorScheme.parse("reds")

    def test_letters(self):
        assert [s.letter for s in ColorScheme] == ["A", "B", "C", "D"]

    def test_highlights(self):
        assert ColorScheme.BLUES.highlight.to_hex() == "#2196f3"
        assert ColorScheme.PURPLES.highlight.to_hex() == "#9c27b0"
        assert ColorScheme.GREENS.highlight.to_hex() == "#4caf50"
        assert ColorScheme.ORANGES.highlight.to_hex() == "#ff5722"


class TestIntensity:
    """Test count to intensity mapping."""

    def test_zero_count(self):
        assert intensity(0, 49) == 50

    def test_max_count_clamped(self):
        """Test the maximum count is clamped to 220."""
        assert intensity(49, 49) == 220

    def test_midpoint(self):
        assert intensity(24, 48) == 140

    def test_non_positive_max_treated_as_one(self):
        assert intensity(0, 0) == 50
        assert intensity(1, 0) == 220

    def test_monotonic(self):
        values = [intensity(c, 49) for c in range(50)]
        assert values == sorted(values)
        assert all(30 <= v <= 220 for v in values)


class TestBaseColor:
    """Test scheme color formulas at full intensity."""

    @pytest.mark.parametrize("scheme,expected", [
        (ColorScheme.BLUES, (35, 35, 255)),
        (ColorScheme.PURPLES, (35, 123, 255)),
        (ColorScheme.GREENS, (101, 255, 101)),
        (ColorScheme.ORANGES, (255, 123, 79)),
    ])
    def test_full_intensity(self, scheme, expected):
        assert base_color(scheme, 220) == expected

    def test_low_intensity_is_pale(self):
        assert base_color(ColorScheme.BLUES, 50) == (205, 205, 255)


class TestStyleFor:
    """Test wedge style resolution from count and interaction state."""

    def test_normal(self):
        style = style_for(49, 49, ColorScheme.BLUES)

        assert style.fill == (35, 35, 255)
        assert style.stroke.to_hex() == COLOR_DEFAULT_STROKE
        assert style.stroke_width == 1
        assert style.opacity == OPACITY_NORMAL

    def test_selected(self):
        style = style_for(10, 49, ColorScheme.PURPLES, selected=True, any_selected=True)

        assert style.fill == ColorScheme.PURPLES.highlight
        assert style.stroke.to_hex() == COLOR_SELECTED_STROKE
        assert style.stroke_width == 2
        assert style.opacity == OPACITY_NORMAL

    def test_selected_wins_over_hover(self):
        style = style_for(10, 49, ColorScheme.BLUES, selected=True, hovered=True,
                          any_selected=True)
        assert style.fill == ColorScheme.BLUES.highlight

    def test_hovered_is_darker(self):
        """Test hovering boosts intensity by 40 and shows at full opacity."""
        normal = style_for(0, 49, ColorScheme.BLUES)
        hovered = style_for(0, 49, ColorScheme.BLUES, hovered=True)

        assert hovered.fill == base_color(ColorScheme.BLUES, 90)
        assert hovered.fill.red < normal.fill.red
        assert hovered.opacity == OPACITY_HOVER

    def test_hover_past_full_intensity_is_clamped(self):
        style = style_for(49, 49, ColorScheme.BLUES, hovered=True)
        assert style.fill == (0, 0, 255)

    def test_others_dimmed_while_selected(self):
        style = style_for(20, 49, ColorScheme.GREENS, any_selected=True)
        assert style.opacity == OPACITY_DIMMED

    def test_hover_not_dimmed_while_selected(self):
        style = style_for(20, 49, ColorScheme.GREENS, hovered=True, any_selected=True)
        assert style.opacity == OPACITY_HOVER
