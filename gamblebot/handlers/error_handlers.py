"""
Error Handlers

This module handles unexpected exceptions raised while processing updates.
Game rule errors never reach it; they are answered by the gamble handlers.
"""

import html
import traceback

from telegram import Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from ..utils.logging_config import get_logger
from ..utils.config import is_development

# Logger setup
logger = get_logger(__name__)


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle errors that occur during bot operation.

    Logs the error with user and chat context, then apologizes in the chat.
    In development the apology includes the error message.

    Args:
        update: Telegram update object (may be None)
        context: Bot context containing error information
    """
    error = context.error
    error_message = str(error) if error else "Unknown error"

    user_id = None
    chat_id = None

    if isinstance(update, Update):
        if update.effective_user:
            user_id = update.effective_user.id
        if update.effective_chat:
            chat_id = update.effective_chat.id

    update_type = type(update).__name__ if update else None
    tb = "".join(traceback.format_exception(type(error), error, error.__traceback__)) if error else None
    logger.error(
        f"Bot error occurred - error_message={error_message}, user_id={user_id}, "
        f"chat_id={chat_id}, update_type={update_type}, traceback={tb}"
    )

    if not chat_id:
        return

    if is_development():
        error_text = (
            "🐛 <b>Development Error</b>\n\n"
            f"An error occurred: <code>{html.escape(error_message)}</code>"
        )
    else:
        error_text = (
            "⚠️ <b>Something went wrong</b>\n\n"
            "I could not process that command. Please try again in a few moments."
        )

    try:
        await context.bot.send_message(
            chat_id=chat_id,
            text=error_text,
            parse_mode=ParseMode.HTML
        )
    except TelegramError as send_error:
        # If we can't even send an error message, log it
        logger.error(
            f"Failed to send error message to user - original_error={error_message}, "
            f"send_error={str(send_error)}, chat_id={chat_id}"
        )
