"""
Gamble Bot Main Application

This is the main entry point for the gamble Telegram bot.
It sets up handlers and the command menu, then polls for updates.
"""

import asyncio
import sys
from typing import Optional

from telegram import Update, BotCommand
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import Application, CommandHandler, MessageHandler, Defaults, filters

from .handlers.gamble_handlers import GAMBLE_COMMANDS, gamble_command
from .handlers.error_handlers import error_handler
from .utils.config import get_settings
from .utils.logging_config import setup_logging, get_logger

# Setup logging first
setup_logging()
logger = get_logger(__name__)

COMMAND_DESCRIPTIONS = {
    "create": "Create a game for some gold",
    "join": "Join the game in this chat",
    "play": "Start the game",
    "roll": "Roll your dice",
    "info": "Show the current game",
    "help": "List all commands",
}


class GambleBot:
    """
    Main gamble bot application class.

    This handles the lifecycle of the bot:
    - Application construction
    - Handler and command menu registration
    - Polling startup and shutdown
    """

    def __init__(self):
        """Initialize the bot application."""
        self.settings = get_settings()
        self.application: Optional[Application] = None

    def build_application(self) -> Application:
        """
        Build the Telegram application.

        Updates are processed concurrently when enabled; the game manager
        serializes every command with its own lock.
        """
        defaults = Defaults(parse_mode=ParseMode.HTML)
        self.application = (
            Application.builder()
            .token(self.settings.require_token())
            .defaults(defaults)
            .concurrent_updates(self.settings.concurrent_updates)
            .build()
        )
        return self.application

    async def setup_bot_commands(self) -> None:
        """
        Set up the bot command menu that appears when users type '/'.
        """
        if not self.application:
            raise RuntimeError("Application not initialized")

        commands = [BotCommand(name, COMMAND_DESCRIPTIONS[name]) for name in GAMBLE_COMMANDS]

        try:
            await self.application.bot.set_my_commands(commands)
            bot_info = await self.application.bot.get_me()
            logger.info(f"Bot username: @{bot_info.username}")
            logger.info(f"Bot commands menu configured with {len(commands)} commands")
        except TelegramError as e:
            # The menu is cosmetic, commands still work without it
            logger.error(f"Failed to set bot commands: {e}")

    def setup_handlers(self) -> None:
        """
        Register all bot command handlers.

        Known commands get a CommandHandler each; any other command falls
        through to the same handler so the game manager can reject it.
        """
        if not self.application:
            raise RuntimeError("Application not initialized")

        logger.info("Setting up gamble bot handlers...")

        for name in GAMBLE_COMMANDS:
            self.application.add_handler(CommandHandler(name, gamble_command))

        self.application.add_handler(MessageHandler(filters.COMMAND, gamble_command))

        self.application.add_error_handler(error_handler)

        logger.info("All handlers registered successfully")


async def main() -> None:
    """
    Main entry point for the gamble bot.

    Builds the application and polls until interrupted.
    """
    bot = GambleBot()

    try:
        logger.info("Starting Gamble Bot")

        bot.build_application()
        bot.setup_handlers()

        async with bot.application:
            await bot.setup_bot_commands()
            await bot.application.start()
            await bot.application.updater.start_polling(
                poll_interval=bot.settings.poll_interval,
                allowed_updates=Update.ALL_TYPES,
                drop_pending_updates=True
            )

            # Keep running until interrupted
            try:
                await asyncio.Event().wait()
            except (KeyboardInterrupt, SystemExit):
                logger.info("Received shutdown signal")
            finally:
                await bot.application.updater.stop()
                await bot.application.stop()

        logger.info("Bot shutdown complete")

    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)


def run() -> None:
    """Console entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nBot stopped by user")


if __name__ == "__main__":
    run()
