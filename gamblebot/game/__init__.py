"""
Gamble Game Package

This package contains the gamble game logic:
- Game contract and lifecycle states
- Classic extremal-roll game
- Game manager routing commands to one game per room
- Error taxonomy shared with the chat handlers
"""
