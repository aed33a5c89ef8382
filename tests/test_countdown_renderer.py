# /tests/test_countdown_renderer.py
"""
Unit tests for the countdown frame renderer and its drawing surface
"""

from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from src.components.countdown_calculator import EXPIRED, CountdownResult
from src.components.countdown_renderer import (
    RenderOptions,
    format_unit_value,
    render_countdown_png,
    render_frame,
)
from src.components.countdown_surface import create_surface

BG_RGB = (0x1a, 0x1a, 0x2e)
ACCENT_RGB = (0x0f, 0x34, 0x60)
EXPIRED_RGB = (0xe9, 0x45, 0x60)

# Left edges of the four boxes on the default 800px wide surface
BOX_LEFT_EDGES = [70, 240, 410, 580]

ACTIVE = CountdownResult(expired=False, days=1, hours=1, minutes=1, seconds=1)


def _render(countdown, options=None):
    options = options or RenderOptions()
    surface = create_surface(options.width, options.height)
    render_frame(countdown, options, surface)
    return surface.pixels()


class TestFormatUnitValue:
    """Test cases for value padding"""

    @pytest.mark.parametrize("value, expected", [(0, '00'), (5, '05'), (42, '42'), (123, '123'), (4567, '4567')])
    def test_pads_to_two_digits_without_truncating(self, value, expected):
        assert format_unit_value(value) == expected


class TestRenderFrame:
    """Test cases for render_frame"""

    def test_rendering_is_deterministic(self):
        """Same countdown and options on fresh surfaces give identical pixels"""
        first = _render(ACTIVE)
        second = _render(ACTIVE)

        assert np.array_equal(first, second)

    def test_background_fills_surface(self):
        pixels = _render(ACTIVE)

        assert tuple(pixels[5, 5]) == BG_RGB
        assert tuple(pixels[395, 795]) == BG_RGB

    def test_active_countdown_draws_four_accent_boxes(self):
        pixels = _render(ACTIVE)

        for left in BOX_LEFT_EDGES:
            assert tuple(pixels[142, left + 2]) == ACCENT_RGB
            assert tuple(pixels[257, left + 147]) == ACCENT_RGB
        # gutters between boxes stay background
        assert tuple(pixels[150, 230]) == BG_RGB
        assert tuple(pixels[150, 68]) == BG_RGB

    def test_boxes_stay_centered_on_wider_surface(self):
        options = RenderOptions(width=1000)
        pixels = _render(ACTIVE, options)

        assert tuple(pixels[142, 172]) == ACCENT_RGB
        assert tuple(pixels[142, 168]) == BG_RGB

    def test_expired_countdown_draws_banner_and_no_boxes(self):
        pixels = _render(EXPIRED)

        for left in BOX_LEFT_EDGES:
            assert tuple(pixels[142, left + 2]) == BG_RGB
        assert np.all(pixels == EXPIRED_RGB, axis=-1).any()

    def test_active_countdown_has_no_expired_banner(self):
        pixels = _render(ACTIVE)

        assert not np.all(pixels == EXPIRED_RGB, axis=-1).any()

    def test_custom_colors_are_used(self):
        options = RenderOptions(bg_color='#ffffff', accent_color='red')
        pixels = _render(ACTIVE, options)

        assert tuple(pixels[5, 5]) == (255, 255, 255)
        assert tuple(pixels[142, 72]) == (255, 0, 0)

    def test_repainting_a_reused_surface_replaces_previous_frame(self):
        options = RenderOptions()
        surface = create_surface(options.width, options.height)
        render_frame(ACTIVE, options, surface)
        render_frame(EXPIRED, options, surface)

        assert np.array_equal(surface.pixels(), _render(EXPIRED))

    def test_small_surface_clips_without_error(self):
        options = RenderOptions(width=120, height=60)

        pixels = _render(ACTIVE, options)

        assert pixels.shape == (60, 120, 3)

    def test_invalid_color_propagates_drawing_error(self):
        options = RenderOptions(bg_color='not-a-color')

        with pytest.raises(ValueError):
            _render(ACTIVE, options)


class TestRenderCountdownPng:
    """Test cases for the single-frame PNG path"""

    def test_returns_decodable_png_of_requested_size(self):
        buffer = render_countdown_png(ACTIVE, RenderOptions(width=640, height=320))

        image = Image.open(BytesIO(buffer.getvalue()))
        assert image.format == 'PNG'
        assert image.size == (640, 320)

    def test_png_pixels_match_direct_render(self):
        buffer = render_countdown_png(ACTIVE, RenderOptions())

        image = Image.open(buffer).convert('RGB')
        assert np.array_equal(np.array(image), _render(ACTIVE))
