"""
Configuration Management

This module handles all application configuration using environment variables.
Values are read from the process environment and from a local .env file.
"""

import os
from functools import lru_cache
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _read_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    """

    def __init__(self):
        # Telegram Bot Configuration
        self.telegram_bot_token: str = os.getenv('TELEGRAM_BOT_TOKEN', '')

        # Application Settings
        self.debug: bool = _read_bool('DEBUG', 'false')
        self.log_level: str = os.getenv('LOG_LEVEL', 'INFO')
        self.environment: str = os.getenv('ENVIRONMENT', 'development')

        # Update processing: the game manager serializes access, so updates may run concurrently
        self.concurrent_updates: bool = _read_bool('CONCURRENT_UPDATES', 'true')

        try:
            # Clean the interval value - remove any comments or extra characters
            interval_str = os.getenv('POLL_INTERVAL', '0.0').split('#')[0].strip()
            self.poll_interval: float = float(interval_str)
        except ValueError as e:
            raise ValueError(f"Invalid POLL_INTERVAL value: '{os.getenv('POLL_INTERVAL')}'. Must be a number without comments.") from e

    def require_token(self) -> str:
        """
        Return the bot token or fail loudly when it is missing.

        Returns:
            str: Telegram bot token
        """
        if not self.telegram_bot_token:
            raise ValueError("TELEGRAM_BOT_TOKEN is not set. Add it to your environment or .env file.")
        return self.telegram_bot_token


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings with caching.

    Uses LRU cache to avoid reloading settings on every call.
    Cache is cleared when the process restarts.

    Returns:
        Settings: Application configuration settings
    """
    return Settings()


def is_development() -> bool:
    """
    Check if running in development environment.

    Returns:
        bool: True if in development, False otherwise
    """
    settings = get_settings()
    return settings.environment.lower() in ["development", "dev", "local"]
