"""
Logging Configuration

Standard logging for the bot: one stdout handler for everything, with the
chatty HTTP and Telegram library loggers held at WARNING. Audit lines about
chat commands and game state changes go to two dedicated loggers,
"user_actions" and "game_events", at DEBUG.
"""

import logging
import sys

from .config import Settings, get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
QUIET_LOGGERS = ("httpx", "telegram")

user_action_logger = logging.getLogger("user_actions")
game_event_logger = logging.getLogger("game_events")


def resolve_level(settings: Settings) -> int:
    """DEBUG=true wins over LOG_LEVEL; unknown level names fall back to INFO."""
    if settings.debug:
        return logging.DEBUG
    level = logging.getLevelName(settings.log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=resolve_level(settings),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"Logging ready - environment={settings.environment}")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _fields(**kwargs) -> str:
    return " ".join(f"{key}={value}" for key, value in kwargs.items())


def log_user_action(user_id: int, action: str, **kwargs) -> None:
    """Audit line for a command a user sent, e.g. ``create_command chat_id=-42 args=['500']``."""
    user_action_logger.debug(f"{action} - user_id={user_id} {_fields(**kwargs)}".rstrip())


def log_game_event(room_id, event_type: str, **kwargs) -> None:
    """Audit line for a state change of the game in ``room_id``."""
    game_event_logger.debug(f"{event_type} - room_id={room_id} {_fields(**kwargs)}".rstrip())
