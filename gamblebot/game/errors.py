"""
Gamble Game Errors

This module defines every failure a gamble game can report.
The chat layer maps each class to a message, so the set is closed:

- ValidationError: the caller broke a game rule, nothing was changed
- TiedRolls: players tied on an extreme roll and must reroll
- InternalConsistencyError: the game reached an impossible state
"""

from typing import List, Optional


class GameError(Exception):
    """Base class for all gamble game errors."""
    pass


# ============ Validation errors ============

class ValidationError(GameError):
    """A command was rejected before touching any game state."""
    pass


class StakeTooLow(ValidationError):
    """The stake is below the minimum amount of gold."""
    def __init__(self, minimum: int):
        self.minimum = minimum
        super().__init__(f"Stake must be at least {minimum}")


class NotEnoughPlayers(ValidationError):
    """Not enough players joined to start the game."""
    def __init__(self, minimum: int):
        self.minimum = minimum
        super().__init__(f"Need at least {minimum} players to start")


class GameAlreadyExists(ValidationError):
    """The room already hosts an unfinished game."""
    pass


class GameAlreadyOngoing(ValidationError):
    """Players can only join before the game starts."""
    pass


class PlayerAlreadyJoined(ValidationError):
    """The player is already part of the game."""
    def __init__(self, player_id):
        self.player_id = player_id
        super().__init__(f"Player {player_id} already joined")


class AlreadyStarted(ValidationError):
    """The game was already started."""
    pass


class CannotRoll(ValidationError):
    """The player is not expected to roll right now."""
    def __init__(self, player_id):
        self.player_id = player_id
        super().__init__(f"Player {player_id} cannot roll now")


class UnknownCommand(ValidationError):
    """The command name is not part of the vocabulary."""
    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Unknown command: {command}")


# ============ Missing game errors (one per action) ============

class MissingGame(ValidationError):
    """An action targeted a room without a game."""
    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"No game in room {room_id}")


class JoinOnMissingGame(MissingGame):
    pass


class PlayOnMissingGame(MissingGame):
    pass


class RollOnMissingGame(MissingGame):
    pass


class InfoOnMissingGame(MissingGame):
    pass


# ============ Game flow signals ============

class TiedRolls(GameError):
    """
    Players matched the highest and/or lowest roll of a sub-round.

    A tie on one side only is raised as TiedHighRoll or TiedLowRoll; this
    base class itself is raised when both sides tie in the same sub-round.

    This is not a failure: the game already moved on and the players in
    ``rerolling`` are now the ones expected to roll.

    Attributes:
        high_tie: Players who matched the highest roll, or None
        low_tie: Players who matched the lowest roll, or None
        rerolling: Players who must roll next
    """

    def __init__(
        self,
        high_tie: Optional[List] = None,
        low_tie: Optional[List] = None,
        rerolling: Optional[List] = None,
    ):
        self.high_tie = high_tie
        self.low_tie = low_tie
        self.rerolling = rerolling or []
        parts = []
        if high_tie:
            parts.append(f"highest roll matched by {high_tie}")
        if low_tie:
            parts.append(f"lowest roll matched by {low_tie}")
        super().__init__("; ".join(parts) or "tied rolls")


class TiedHighRoll(TiedRolls):
    """Only the highest roll was matched; the winner is still open."""
    pass


class TiedLowRoll(TiedRolls):
    """Only the lowest roll was matched; the loser is still open."""
    pass


# ============ Internal errors ============

class InternalConsistencyError(GameError):
    """The game reached a state that correct code never produces."""
    pass


class NoWinnersFound(InternalConsistencyError):
    """The game is done but has no winner and loser to report."""
    def __init__(self, room_id=None):
        self.room_id = room_id
        super().__init__(f"Game in room {room_id} is done without a winner and loser")
