"""Countdown routes: PNG image, animated GIF and live HTML page."""

import logging

from flask import Blueprint, render_template, request, send_file

from src.components.web import countdown_handler
from src.components.web.countdown_handler import MissingParameterError, RenderFailure
from src.utils.logging_utils import log_web_activity
from web.config import DEFAULT_TIMEZONE, FONT_PATH

logger = logging.getLogger(__name__)
countdown_bp = Blueprint('countdown', __name__)

NO_CACHE_HEADERS = {
    'Cache-Control': 'no-cache, no-store, must-revalidate',
    'Pragma': 'no-cache',
    'Expires': '0',
}

TEXT_PLAIN = {'Content-Type': 'text/plain; charset=utf-8'}


def _send_uncached(img_buffer, mimetype):
    response = send_file(img_buffer, mimetype=mimetype, as_attachment=False)
    response.headers.update(NO_CACHE_HEADERS)
    return response


@countdown_bp.errorhandler(MissingParameterError)
def handle_missing_parameter(err):
    logger.info(f"Rejected {request.path}: {err}")
    return str(err), 400, TEXT_PLAIN


@countdown_bp.errorhandler(RenderFailure)
def handle_render_failure(err):
    logger.error(f"{err} (path={request.path}, query={request.query_string.decode('utf-8', errors='replace')})",
                 exc_info=err.cause)
    return str(err), 500, TEXT_PLAIN


@countdown_bp.route('/countdown', methods=['GET'])
@log_web_activity
def countdown_image():
    """Render the countdown as a single PNG image."""
    date_str = countdown_handler.require_date(request.args, '/countdown')
    options = countdown_handler.resolve_render_options(request.args)

    img_buffer = countdown_handler.generate_countdown_image(date_str, options, DEFAULT_TIMEZONE, FONT_PATH)
    return _send_uncached(img_buffer, 'image/png')


@countdown_bp.route('/gif', methods=['GET'])
@log_web_activity
def countdown_gif():
    """Render the countdown as an animated GIF counting down one second per frame."""
    date_str = countdown_handler.require_date(request.args, '/gif')
    spec = countdown_handler.resolve_animation_spec(request.args)

    img_buffer = countdown_handler.generate_countdown_animation(date_str, spec, DEFAULT_TIMEZONE, FONT_PATH)
    return _send_uncached(img_buffer, 'image/gif')


@countdown_bp.route('/live', methods=['GET'])
@log_web_activity
def countdown_live():
    """Serve a page that recomputes the countdown in the browser every second."""
    date_str = countdown_handler.require_date(request.args, '/live')
    options = countdown_handler.resolve_render_options(request.args, 'live page')

    context = countdown_handler.build_live_page_context(date_str, options)
    return render_template('live_countdown.html', **context), 200, {'Content-Type': 'text/html; charset=utf-8'}
