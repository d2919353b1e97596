import os
import logging
from typing import Optional
from dotenv import load_dotenv
import pytz

from calendly_cli.exceptions import ConfigurationError

load_dotenv()

TOKEN_HINT = "Copy .env.example to .env and add your token."


def _timezone_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if not value:
        return None
    try:
        pytz.timezone(value)
    except pytz.UnknownTimeZoneError:
        raise ConfigurationError(f"{name} is not a known timezone, got {value!r}")
    return value


def _float_env(name: str) -> Optional[float]:
    value = os.getenv(name)
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number of seconds, got {value!r}")


class Config:
    """Configuration management"""

    def __init__(self):
        # API
        self.CALENDLY_ACCESS_TOKEN = os.getenv("CALENDLY_ACCESS_TOKEN")
        self.CALENDLY_API_BASE = os.getenv("CALENDLY_API_BASE", "https://api.calendly.com").rstrip("/")
        # No timeout unless one is configured
        self.CALENDLY_TIMEOUT = _float_env("CALENDLY_TIMEOUT")

        # Display
        self.CALENDLY_TIMEZONE = _timezone_env("CALENDLY_TIMEZONE")

        # Logging
        self.CALENDLY_LOG_LEVEL = os.getenv("CALENDLY_LOG_LEVEL", "WARNING").upper()

    @property
    def log_level(self) -> int:
        return getattr(logging, self.CALENDLY_LOG_LEVEL, logging.WARNING)

    def validate_config(self) -> bool:
        """Validate required configuration"""
        if not self.CALENDLY_ACCESS_TOKEN:
            raise ConfigurationError(f"Error: CALENDLY_ACCESS_TOKEN not set. {TOKEN_HINT}")
        return True
