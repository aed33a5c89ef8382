"""Web server configuration and shared resources."""

import pytz

from my_config import get_config

CONFIG = get_config()

# Server configuration constants
USE_DEBUG_MODE = CONFIG.web_server_debug_mode_on
WEB_SERVER_PORT = CONFIG.web_server_port
WAITRESS_THREADS = CONFIG.waitress_threads
FONT_PATH = CONFIG.font_path

# Timezone for target dates given without a UTC offset
DEFAULT_TIMEZONE = pytz.timezone(CONFIG.default_timezone)
