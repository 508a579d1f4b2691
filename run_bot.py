#!/usr/bin/env python3
"""
Bot Runner Script

Simple script to run the gamble bot during development.

Usage:
    python run_bot.py
"""

import asyncio
import sys
import os

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from gamblebot.main import main

if __name__ == "__main__":
    print("🎲 Starting Gamble Bot...")
    print("🔑 You need to set TELEGRAM_BOT_TOKEN in your environment or .env file")
    print("")

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n👋 Bot stopped by user")
