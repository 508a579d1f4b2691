"""
Gamble Command Handlers

This module handles the gamble chat commands (/create, /join, /play,
/roll, /info, /help). Every command is routed to the shared game manager,
which also polls the chat's game right after, and both outcomes are sent
back to the chat.
"""

from typing import Dict, List, Optional, Tuple

from telegram import Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from ..game.errors import GameError, InternalConsistencyError, TiedRolls
from ..game.game_manager import GambleGameManager
from ..utils.logging_config import get_logger, log_user_action
from .messages import render_error, render_response

# Setup logger and manager
logger = get_logger(__name__)
gamble_manager = GambleGameManager()

GAMBLE_COMMANDS = ["create", "join", "play", "roll", "info", "help"]


def parse_command(text: str) -> Tuple[str, Optional[str], List[str]]:
    """
    Split a command message into its name, addressed bot and arguments.

    "/create@GambleBot 500" -> ("create", "GambleBot", ["500"])
    "/roll" -> ("roll", None, [])
    """
    parts = text.strip().split()
    if not parts:
        return "", None, []
    name, _, target = parts[0].lstrip("/").partition("@")
    return name, target or None, parts[1:]


def is_addressed_to_bot(target: Optional[str], bot_username: Optional[str]) -> bool:
    """A command without @suffix is for every bot; otherwise the suffix must name this one."""
    if target is None:
        return True
    return bool(bot_username) and target.lower() == bot_username.lower()


def remember_player_name(context: ContextTypes.DEFAULT_TYPE, user) -> Dict[int, str]:
    """Store the user's display name in chat data and return all known names."""
    names = context.chat_data.setdefault("player_names", {})
    names[user.id] = user.full_name or user.username or str(user.id)
    return names


def render_outcome(outcome, chat_id: int, user_id: int, names: Dict[int, str]) -> Optional[str]:
    """Render a command or poll outcome, logging errors by severity."""
    if not isinstance(outcome, GameError):
        return render_response(outcome, user_id, names)

    if isinstance(outcome, InternalConsistencyError):
        logger.error(f"Game consistency error - chat_id={chat_id}, user_id={user_id}, error={outcome}")
    elif isinstance(outcome, TiedRolls):
        logger.info(f"Reroll required - chat_id={chat_id}, rerolling={outcome.rerolling}")
    else:
        logger.debug(f"Command rejected - chat_id={chat_id}, user_id={user_id}, error={type(outcome).__name__}")

    return render_error(outcome, user_id, names)


async def gamble_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle any gamble command sent in a chat.

    Args:
        update: Telegram update object
        context: Bot context
    """
    if not update.message or not update.message.text:
        return

    user = update.effective_user
    chat_id = update.effective_chat.id
    command, target, args = parse_command(update.message.text)
    if not is_addressed_to_bot(target, context.bot.username):
        logger.debug(f"Ignoring command for another bot - chat_id={chat_id}, target={target}")
        return

    log_user_action(user.id, f"{command}_command", chat_id=chat_id, args=args)

    names = remember_player_name(context, user)
    outcomes = gamble_manager.handle(chat_id, user.id, command, args)

    for outcome in outcomes:
        text = render_outcome(outcome, chat_id, user.id, names)
        if not text:
            continue
        try:
            await context.bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=ParseMode.HTML
            )
        except TelegramError as e:
            logger.error(f"Failed to send gamble message - chat_id={chat_id}, user_id={user.id}, error={str(e)}")
