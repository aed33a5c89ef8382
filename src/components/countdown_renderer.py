"""Countdown Frame Renderer Component.

Draws one countdown frame onto a drawing surface: background, title, then
either an EXPIRED banner or four labeled boxes (days, hours, minutes, seconds).

Box sizes are fixed; only their placement follows the surface size, so very
small surfaces clip the layout.
"""

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

from src.components.countdown_calculator import CountdownResult
from src.components.countdown_surface import DrawingSurface, create_surface

logger = logging.getLogger(__name__)

# Defaults for caller-supplied options
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 400
DEFAULT_BG_COLOR = '#1a1a2e'
DEFAULT_TEXT_COLOR = '#eee'
DEFAULT_ACCENT_COLOR = '#0f3460'
DEFAULT_TITLE = 'Countdown'

EXPIRED_TEXT = 'EXPIRED'
COLOR_EXPIRED = '#e94560'

# Font sizes (px)
TITLE_FONT_SIZE = 48
EXPIRED_FONT_SIZE = 64
VALUE_FONT_SIZE = 56
LABEL_FONT_SIZE = 18

# Layout (px)
TITLE_BASELINE_Y = 80
EXPIRED_BASELINE_OFFSET = 20
BOX_WIDTH = 150
BOX_HEIGHT = 120
BOX_SPACING = 20
BOX_TOP_Y = 140
VALUE_BASELINE_OFFSET = 70
LABEL_BASELINE_OFFSET = 105
BOX_COUNT = 4


@dataclass(frozen=True)
class RenderOptions:
    """Style of a rendered countdown; every field has a default."""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    bg_color: str = DEFAULT_BG_COLOR
    text_color: str = DEFAULT_TEXT_COLOR
    accent_color: str = DEFAULT_ACCENT_COLOR
    title: str = DEFAULT_TITLE


def format_unit_value(value: int) -> str:
    """Left-pad to two digits; larger values keep all their digits."""
    return str(value).zfill(2)


def render_frame(countdown: CountdownResult, options: RenderOptions, surface: DrawingSurface) -> None:
    """Draw a full countdown frame onto surface, replacing whatever it held.

    Args:
        countdown: Result to display
        options: Colors, title and dimensions used for layout
        surface: Surface to draw on; mutated in place
    """
    width, height = options.width, options.height
    center_x = width / 2

    surface.fill_rect(0, 0, width, height, options.bg_color)
    surface.draw_centered_text(options.title, center_x, TITLE_BASELINE_Y, TITLE_FONT_SIZE, options.text_color)

    if countdown.expired:
        surface.draw_centered_text(EXPIRED_TEXT, center_x, height / 2 + EXPIRED_BASELINE_OFFSET,
                                   EXPIRED_FONT_SIZE, COLOR_EXPIRED)
        return

    group_width = BOX_COUNT * BOX_WIDTH + (BOX_COUNT - 1) * BOX_SPACING
    start_x = (width - group_width) / 2

    for idx, (value, label) in enumerate(countdown.units()):
        box_x = start_x + idx * (BOX_WIDTH + BOX_SPACING)
        box_center_x = box_x + BOX_WIDTH / 2

        surface.fill_rect(box_x, BOX_TOP_Y, BOX_WIDTH, BOX_HEIGHT, options.accent_color)
        surface.draw_centered_text(format_unit_value(value), box_center_x, BOX_TOP_Y + VALUE_BASELINE_OFFSET,
                                   VALUE_FONT_SIZE, options.text_color)
        surface.draw_centered_text(label, box_center_x, BOX_TOP_Y + LABEL_BASELINE_OFFSET,
                                   LABEL_FONT_SIZE, options.text_color)


def render_countdown_png(countdown: CountdownResult, options: RenderOptions, font_path: Optional[str] = None) -> BytesIO:
    """Render a single countdown frame and encode it as PNG.

    Returns:
        BytesIO: Buffer containing the PNG, positioned at the start
    """
    surface = create_surface(options.width, options.height, font_path)
    render_frame(countdown, options, surface)

    img_buffer = BytesIO(surface.encode_png())
    logger.debug(f"Rendered countdown PNG {options.width}x{options.height}: {img_buffer.getbuffer().nbytes} bytes")
    return img_buffer
