import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Non-sensitive settings (port, log dir, fonts) may live in a .env at the project root
ROOT_DIR = Path(__file__).parent

env_file = ROOT_DIR / '.env'
if env_file.exists():
    load_dotenv(env_file)


def get_config():
    return Config(
        web_server_port=int(os.environ.get("PORT", "3000")),
        web_server_debug_mode_on=str(os.environ.get("WEB_SERVER_DEBUG_MODE_ON", "False")).lower() == "true",
        waitress_threads=int(os.environ.get("WAITRESS_THREADS", "8")),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        log_dir=os.environ.get("LOG_DIR", "logs"),
        default_timezone=os.environ.get("COUNTDOWN_DEFAULT_TIMEZONE", "UTC"),
        font_path=os.environ.get("COUNTDOWN_FONT_PATH") or None,
    )


@dataclass
class Config:
    """Configuration settings for the countdown server."""
    web_server_port: int = 3000
    web_server_debug_mode_on: bool = False
    waitress_threads: int = 8
    log_level: str = "INFO"
    log_dir: str = "logs"
    # Timezone applied to target dates that carry no UTC offset
    default_timezone: str = "UTC"
    font_path: Optional[str] = None
