"""Countdown Handler for the countdown web routes.

Resolves query parameters into render settings and turns a date string into a
PNG, an animated GIF, or the context for the live HTML page.
"""

import logging
import re
from io import BytesIO
from typing import Any, Dict, Mapping, Optional

import pytz

from src.components import countdown_calculator, countdown_renderer, countdown_sequence
from src.components.countdown_renderer import RenderOptions
from src.components.countdown_sequence import AnimationSpec

logger = logging.getLogger(__name__)

EXAMPLE_DATE = '2025-12-31T23:59:59'

_LEADING_INT_PATTERN = re.compile(r'^\s*([+-]?\d+)')


class MissingParameterError(ValueError):
    """A required query parameter was not supplied."""

    def __init__(self, param: str, example_path: str):
        self.param = param
        self.example_path = example_path
        super().__init__(f'Missing "{param}" parameter. Example: {example_path}?{param}={EXAMPLE_DATE}')


class RenderFailure(Exception):
    """Drawing, sequencing, encoding or date parsing failed for a request."""

    def __init__(self, kind: str, cause: Exception):
        self.kind = kind
        self.cause = cause
        super().__init__(f"Error generating {kind}: {cause}")


def _int_param(args: Mapping[str, str], name: str, default: int) -> int:
    """Leading integer of the parameter; missing, unparseable or zero gives default.

    Raises:
        ValueError: If the digits exceed the interpreter's integer conversion limit
    """
    match = _LEADING_INT_PATTERN.match(args.get(name) or '')
    if not match:
        return default
    try:
        return int(match.group(1)) or default
    except ValueError as conv_err:
        raise ValueError(f"Invalid {name} parameter: {conv_err}") from conv_err


def _str_param(args: Mapping[str, str], name: str, default: str) -> str:
    return args.get(name) or default


def require_date(args: Mapping[str, str], example_path: str) -> str:
    date_str = args.get('date')
    if not date_str:
        raise MissingParameterError('date', example_path)
    return date_str


def resolve_render_options(args: Mapping[str, str], kind: str = 'countdown') -> RenderOptions:
    """Resolve style options from query args.

    Raises:
        RenderFailure: If a numeric parameter cannot be converted
    """
    try:
        return _render_options(args)
    except ValueError as exc:
        raise RenderFailure(kind, exc) from exc


def _render_options(args: Mapping[str, str]) -> RenderOptions:
    return RenderOptions(
        width=_int_param(args, 'width', countdown_renderer.DEFAULT_WIDTH),
        height=_int_param(args, 'height', countdown_renderer.DEFAULT_HEIGHT),
        bg_color=_str_param(args, 'bgColor', countdown_renderer.DEFAULT_BG_COLOR),
        text_color=_str_param(args, 'textColor', countdown_renderer.DEFAULT_TEXT_COLOR),
        accent_color=_str_param(args, 'accentColor', countdown_renderer.DEFAULT_ACCENT_COLOR),
        title=_str_param(args, 'title', countdown_renderer.DEFAULT_TITLE),
    )


def resolve_animation_spec(args: Mapping[str, str], kind: str = 'GIF') -> AnimationSpec:
    options = resolve_render_options(args, kind)
    try:
        return AnimationSpec(
            width=options.width,
            height=options.height,
            bg_color=options.bg_color,
            text_color=options.text_color,
            accent_color=options.accent_color,
            title=options.title,
            frame_count=_int_param(args, 'frames', countdown_sequence.DEFAULT_FRAME_COUNT),
            delay_ms=_int_param(args, 'delay', countdown_sequence.DEFAULT_DELAY_MS),
        )
    except ValueError as exc:
        raise RenderFailure(kind, exc) from exc


def generate_countdown_image(date_str: str, options: RenderOptions, default_tz=pytz.utc,
                             font_path: Optional[str] = None) -> BytesIO:
    """Render the countdown to date_str as a single PNG.

    Args:
        date_str: Target date (e.g., 2025-12-31T23:59:59)
        options: Resolved style options
        default_tz: Timezone for dates without an offset
        font_path: Preferred TrueType font file

    Returns:
        BytesIO buffer with the PNG image

    Raises:
        RenderFailure: If the date cannot be parsed or rendering fails
    """
    logger.info(f"Generating countdown image for date: {date_str}")

    try:
        target = countdown_calculator.parse_target_date(date_str, default_tz)
        countdown = countdown_calculator.compute_countdown(target, countdown_calculator.utc_now())
        return countdown_renderer.render_countdown_png(countdown, options, font_path)
    except Exception as exc:
        raise RenderFailure('countdown', exc) from exc


def generate_countdown_animation(date_str: str, spec: AnimationSpec, default_tz=pytz.utc,
                                 font_path: Optional[str] = None) -> BytesIO:
    """Render the countdown to date_str as an animated GIF.

    Raises:
        RenderFailure: If the date cannot be parsed, or drawing or encoding fails
    """
    logger.info(f"Generating countdown GIF for date: {date_str} ({spec.frame_count} frames, {spec.delay_ms}ms)")

    try:
        target = countdown_calculator.parse_target_date(date_str, default_tz)
        return countdown_sequence.generate_countdown_gif(
            target, spec, now=countdown_calculator.utc_now(), font_path=font_path
        )
    except Exception as exc:
        raise RenderFailure('GIF', exc) from exc


def build_live_page_context(date_str: str, options: RenderOptions) -> Dict[str, Any]:
    """Template context for the self-updating countdown page.

    The date is handed to the browser as-is; the page parses it and recomputes
    the countdown every second.
    """
    return {
        'date': date_str,
        'title': options.title,
        'bg_color': options.bg_color,
        'text_color': options.text_color,
        'accent_color': options.accent_color,
        'expired_color': countdown_renderer.COLOR_EXPIRED,
    }
