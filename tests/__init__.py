"""
Tests Package

This package contains all test files for the gamble bot:
- Game engine and game manager tests
- Message rendering tests
- Handler tests with dummy Telegram objects

Run tests with: pytest tests/
"""
