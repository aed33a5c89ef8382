"""Drawing surface used by the countdown renderer.

A thin wrapper over a Pillow RGB image exposing the handful of primitives the
countdown layout needs: fill a rectangle, draw bold text centered on a point,
and hand the pixels to an encoder.
"""

import logging
import os
from functools import lru_cache
from io import BytesIO
from typing import Optional

import numpy as np
from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

_home_dir = os.path.expanduser("~")
BOLD_FONT_PATHS = [
    f"{_home_dir}/.fonts/Roboto-Bold.ttf",
    "/usr/share/fonts/truetype/msttcorefonts/Arial_Bold.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
    "/Library/Fonts/Arial Bold.ttf",
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
    "arialbd.ttf",
    "DejaVuSans-Bold.ttf",
]


@lru_cache(maxsize=32)
def load_bold_font(size: int, font_path: Optional[str] = None):
    """Load a bold font at the given pixel size.

    Args:
        size: Font size in pixels
        font_path: Preferred TrueType file, tried before the system fonts
    """
    candidates = [font_path] if font_path else []
    candidates.extend(BOLD_FONT_PATHS)

    for candidate in candidates:
        try:
            font = ImageFont.truetype(candidate, size)
            logger.debug(f"Loaded font: {candidate} ({size}px)")
            return font
        except (OSError, IOError):
            continue

    logger.warning(f"No bold TrueType font found, using Pillow default font at {size}px")
    return ImageFont.load_default(size=size)


class DrawingSurface:
    """A width x height RGB pixel buffer with fill and text primitives."""

    def __init__(self, width: int, height: int, font_path: Optional[str] = None):
        self.width = width
        self.height = height
        self.font_path = font_path
        self.image = Image.new('RGB', (width, height))
        self._draw = ImageDraw.Draw(self.image)

    def fill_rect(self, x, y, width, height, color) -> None:
        x0, y0 = int(x), int(y)
        self._draw.rectangle((x0, y0, x0 + int(width) - 1, y0 + int(height) - 1), fill=color)

    def draw_centered_text(self, text: str, x, baseline_y, size: int, color) -> None:
        """Draw text centered horizontally on x with its baseline at baseline_y."""
        font = load_bold_font(size, self.font_path)
        self._draw.text((x, baseline_y), text, fill=color, font=font, anchor='ms')

    def pixels(self) -> np.ndarray:
        """Copy of the raw RGB buffer, shaped (height, width, 3)."""
        return np.array(self.image, dtype=np.uint8)

    def encode_png(self) -> bytes:
        buf = BytesIO()
        self.image.save(buf, format='PNG')
        return buf.getvalue()


def create_surface(width: int, height: int, font_path: Optional[str] = None) -> DrawingSurface:
    return DrawingSurface(width, height, font_path)
