"""
Bot Handlers Package

This package contains all bot handlers:
- Gamble command handler routing chat commands to the game manager
- Message rendering for game outcomes and errors
- Error handler for exception management
"""
