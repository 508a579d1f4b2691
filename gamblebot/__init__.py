"""
Gamble Bot Package

This package contains the Telegram gamble bot including:
- Game logic and the per-chat game manager
- Command handlers and message rendering
- Configuration and logging utilities
"""

__version__ = "1.0.0"

from .utils.config import get_settings

__all__ = ["get_settings"]
