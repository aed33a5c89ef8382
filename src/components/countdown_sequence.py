"""Countdown Sequence Generator Component.

Builds a short animated countdown: frame i shows the countdown as it will read
i seconds after the first frame. Frames are drawn onto one surface owned by the
sequence, then encoded into a looping GIF with Pillow.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from io import BytesIO
from typing import Iterable, Iterator, Optional

import numpy as np
from PIL import Image

from src.components import countdown_renderer
from src.components.countdown_calculator import CountdownResult, compute_countdown, utc_now
from src.components.countdown_renderer import RenderOptions
from src.components.countdown_surface import create_surface

logger = logging.getLogger(__name__)

DEFAULT_FRAME_COUNT = 5
DEFAULT_DELAY_MS = 1000
LOOP_FOREVER = 0


@dataclass(frozen=True)
class AnimationSpec(RenderOptions):
    frame_count: int = DEFAULT_FRAME_COUNT
    delay_ms: int = DEFAULT_DELAY_MS
    loop: int = LOOP_FOREVER


@dataclass(frozen=True, eq=False)
class SequenceFrame:
    countdown: CountdownResult
    pixels: np.ndarray


def generate_sequence(target: datetime, spec: AnimationSpec, now: Optional[datetime] = None,
                      font_path: Optional[str] = None) -> Iterator[SequenceFrame]:
    """Yield up to spec.frame_count frames, one second apart.

    The target is pulled back one second per frame against a fixed reference
    instant, so consecutive frames count down. Generation stops right after the
    first expired frame.

    Args:
        target: Aware datetime the countdown runs to
        spec: Animation and style settings
        now: Reference instant for frame 0 (defaults to the current time)
        font_path: Preferred TrueType font file

    Yields:
        SequenceFrame: Countdown shown and a copy of the rendered pixels
    """
    reference_now = now if now is not None else utc_now()
    surface = create_surface(spec.width, spec.height, font_path)

    for i in range(spec.frame_count):
        countdown = compute_countdown(target - timedelta(seconds=i), reference_now)
        countdown_renderer.render_frame(countdown, spec, surface)
        yield SequenceFrame(countdown=countdown, pixels=surface.pixels())

        if countdown.expired:
            logger.debug(f"Countdown expired at frame {i}, ending sequence")
            break


def encode_gif(frames: Iterable[SequenceFrame], spec: AnimationSpec) -> BytesIO:
    """Encode frames as an animated GIF with a global delay and loop count.

    Pillow folds a frame identical to the one before it into that frame and adds
    up their delays, so a surface too small to show any changing digit encodes
    fewer frames than were generated while the total running time stays the same.

    Raises:
        ValueError: If frames is empty
    """
    images = [Image.fromarray(frame.pixels) for frame in frames]
    if not images:
        raise ValueError("Cannot encode a GIF without frames")

    img_buffer = BytesIO()
    images[0].save(
        img_buffer,
        format='GIF',
        save_all=True,
        append_images=images[1:],
        duration=spec.delay_ms,
        loop=spec.loop
    )
    img_buffer.seek(0)
    logger.info(f"Generated countdown GIF: {len(images)} frames, {img_buffer.getbuffer().nbytes} bytes")
    return img_buffer


def generate_countdown_gif(target: datetime, spec: AnimationSpec, now: Optional[datetime] = None,
                           font_path: Optional[str] = None) -> BytesIO:
    """Generate and encode the countdown animation for target."""
    return encode_gif(generate_sequence(target, spec, now=now, font_path=font_path), spec)
