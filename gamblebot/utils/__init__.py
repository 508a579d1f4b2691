"""
Utilities Package

Configuration loading and logging helpers shared by the bot.
"""
