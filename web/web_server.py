#!/usr/bin/python3

# Standard library imports
import atexit
import logging
import os
import signal
import sys
from datetime import datetime

_CURRENT_DIR = os.path.dirname(__file__)
_PROJECT_ROOT = os.path.abspath(os.path.join(_CURRENT_DIR, '..'))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

# Third-party imports
from flask import Flask, abort

# Local imports
from src.utils.logging_utils import is_scanner_request, setup_logging
from web.config import CONFIG, USE_DEBUG_MODE, WAITRESS_THREADS, WEB_SERVER_PORT
from web.routes import register_all_blueprints

logger = logging.getLogger(__name__)

EXAMPLE_DATE = '2025-12-31T23:59:59'

app = Flask(__name__, template_folder='templates')
register_all_blueprints(app)


@app.before_request
def block_scanners():
    """Answer known scanner probes with 404 before any route runs."""
    if is_scanner_request():
        abort(404)


@app.errorhandler(404)
def not_found(_err):
    return 'Not Found', 404, {'Content-Type': 'text/plain; charset=utf-8'}


def _shutdown_handler():
    """Log shutdown marker before exit"""
    logger.warning("=" * 100)
    logger.warning(f"WEB SERVER STOPPED - {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    logger.warning("=" * 100)


def _handle_sigterm(signum, frame):
    sys.exit(0)


def _print_example_urls(port):
    base_url = f"http://localhost:{port}"
    print(f"Countdown Server running at {base_url}/")
    print(f"Live countdown: {base_url}/live?date={EXAMPLE_DATE}")
    print(f"Image countdown: {base_url}/countdown?date={EXAMPLE_DATE}")
    print(f"GIF countdown: {base_url}/gif?date={EXAMPLE_DATE}")


def main():
    """Entry point for launching the web server."""
    setup_logging(
        app_name='countdown_server',
        log_level=getattr(logging, CONFIG.log_level, logging.INFO),
        log_dir=CONFIG.log_dir,
        info_modules=['__main__', 'web.web_server'],
    )
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    logging.getLogger('waitress').setLevel(logging.WARNING)

    logger.warning("=" * 100)
    logger.warning(f"WEB SERVER STARTED - {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    logger.warning("=" * 100)

    # Register shutdown handlers for graceful logging
    atexit.register(_shutdown_handler)
    signal.signal(signal.SIGTERM, _handle_sigterm)

    host = '0.0.0.0'
    port = WEB_SERVER_PORT
    _print_example_urls(port)

    if USE_DEBUG_MODE:
        print("Using Flask dev server with auto-reload (debug mode)")
        try:
            app.run(debug=True, host=host, port=port, threaded=True, use_reloader=True)
        except OSError as exc:
            _handle_port_error(exc, port)
    else:
        from waitress import serve
        print("Using Waitress WSGI server for production deployment")
        try:
            serve(app, host=host, port=port, threads=WAITRESS_THREADS, channel_timeout=120)
        except OSError as exc:
            _handle_port_error(exc, port)


def _handle_port_error(exc, port):
    """Explain common bind failures, then re-raise."""
    if port < 1024 and exc.errno == 13:
        print(f"\n{'=' * 70}")
        print(f"ERROR: Port {port} is LOCKED/UNAVAILABLE")
        print(f"{'=' * 70}")
        print(f"Port {port} requires elevated privileges (sudo/root).")
        print("\nTo fix this:")
        print("  1. Use a port above 1024: PORT=3000")
        print("  2. Grant capability: sudo setcap 'cap_net_bind_service=+ep' $(which python3)")
        print(f"{'=' * 70}\n")
    elif exc.errno in (48, 98):
        print(f"\n{'=' * 70}")
        print(f"ERROR: Port {port} is LOCKED/IN USE")
        print(f"{'=' * 70}")
        print(f"Port {port} is already being used by another process.")
        print("\nTo fix this:")
        print(f"  1. Find the process: sudo lsof -i :{port}")
        print("  2. Stop the process using the port")
        print("  3. Or pick a different port: PORT=3001")
        print(f"{'=' * 70}\n")
    logger.error(f"Could not bind web server to port {port}: {exc}")
    raise exc


if __name__ == "__main__":
    main()
