import csv
import logging
import os
import re
import time
from datetime import datetime
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytz
from flask import request

from my_config import get_config

config = get_config()

# Setup logger for this module
logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Custom formatter to add colors to console output"""

    def format(self, record):
        log_message = super().format(record)

        # Only colorize WARNING and above, leave INFO as default
        if record.levelname == 'WARNING':
            return f"\033[33m{log_message}\033[0m"  # Yellow
        elif record.levelname == 'ERROR':
            return f"\033[31m{log_message}\033[0m"  # Red
        elif record.levelname == 'CRITICAL':
            return f"\033[35m{log_message}\033[0m"  # Magenta
        else:
            return log_message


def setup_logging(
        app_name: str,
        log_level=logging.INFO,
        log_dir: str = 'logs',
        info_modules: list[str] = None,
        console: bool = True
):
    """
    Configure standardized logging with rotation.

    Sets up:
    - Rotating file handler (10MB max per file, 5 backups)
    - Console handler with colored WARNING/ERROR output (optional)
    - Local timezone formatting

    Args:
        app_name: Name used for the log file (e.g., 'countdown_server')
        log_level: Logging level for root logger (default: logging.INFO)
        log_dir: Directory for log files (default: 'logs')
        info_modules: List of module names to set to INFO level (useful when root is WARNING)
        console: Also log to stderr

    Returns:
        logging.Logger: Root logger instance (configured)
    """
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, f'{app_name}.log')

    # 10MB max, 5 backups = ~50MB total
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(log_level)
    file_formatter = logging.Formatter('%(asctime)s - %(filename)s:%(lineno)d - %(levelname)s - %(message)s')
    file_formatter.converter = time.localtime
    file_handler.setFormatter(file_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers (force=True equivalent)
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(ColoredFormatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root_logger.addHandler(console_handler)

    if info_modules:
        for module_name in info_modules:
            logging.getLogger(module_name).setLevel(logging.INFO)

    return logging.getLogger()


# Directory for the web activity CSV log
LOG_FILE_DIR = Path(config.log_dir)


def _append_csv_with_header(file_path: Path, headers: list[str], row: list[str]) -> bool:
    """
    Append a row to a CSV file, writing headers first if the file is new/empty.

    Returns:
        bool: True if write succeeded, False otherwise
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        is_new = not file_path.exists() or file_path.stat().st_size == 0

        with open(file_path, 'a', newline='') as f:
            writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL)
            if is_new:
                writer.writerow(headers)
            writer.writerow(row)

        return True

    except PermissionError as e:
        logger.error(f"Permission denied writing to {file_path}: {e}")
        return False

    except OSError as e:
        logger.error(f"OS error writing CSV log {file_path.name}: {e}")
        return False


# Patterns for known security scanners probing the server
SCANNER_PATTERNS = [
    r'/administrator/components/com_.*\.xml',
    r'/wp-content/plugins/.*/timthumb\.php',
    r'/.git/',
    r'/wp-login',
    r'/wp-admin',
    r'\.php$'
]

COMPILED_SCANNER_PATTERNS = [re.compile(pattern, re.IGNORECASE) for pattern in SCANNER_PATTERNS]


def is_scanner_request():
    """
    Determine if a request is from a known scanner based on its path.
    Returns True if it matches scanner patterns, False otherwise.
    """
    return any(pattern.search(request.path) for pattern in COMPILED_SCANNER_PATTERNS)


def log_web_activity(func):
    """
    Decorator for logging web activity to a CSV file.
    Filters out known scanner requests to prevent log pollution.

    Never breaks the request because logging failed.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        if is_scanner_request():
            return func(*args, **kwargs)

        timestamp_utc = datetime.now(pytz.utc).strftime('%m/%d/%Y %I:%M:%S %p %Z')
        log_file_name = "web_server_activity_log.csv"
        success = _append_csv_with_header(
            LOG_FILE_DIR / log_file_name,
            headers=["remote_addr", "method", "path", "query", "timestamp_utc"],
            row=[
                request.remote_addr,
                request.method,
                request.path,
                request.query_string.decode('utf-8', errors='replace'),
                timestamp_utc
            ]
        )
        if not success:
            logger.warning(f"Failed to log web activity for {log_file_name}, but continuing...")

        return func(*args, **kwargs)

    return wrapper
