"""
Gamble Game Contract

This module defines the lifecycle shared by every gamble game variant
and the abstract base class the registry talks to.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class GameStatus(Enum):
    """Lifecycle of a single gamble round."""
    INITIATED = "initiated"
    ONGOING = "ongoing"
    DONE = "done"


class GameKind(Enum):
    """Closed set of gamble game variants."""
    CLASSIC = "classic"


class GambleGame(ABC):
    """
    Abstract base class for gamble games.

    A game lives in exactly one room. Players join while it is initiated,
    roll while it is ongoing, and the registry polls ``advance`` after every
    action until the game reports a winner and a loser.
    """

    kind: GameKind

    @abstractmethod
    def join(self, player_id: int) -> None:
        """Add a player to the game."""
        pass

    @abstractmethod
    def start(self) -> None:
        """Close the lobby and let players roll."""
        pass

    @abstractmethod
    def roll(self, player_id: int) -> int:
        """Roll for a player and return the value."""
        pass

    @abstractmethod
    def advance(self) -> GameStatus:
        """Re-evaluate the game once everyone expected to roll has rolled."""
        pass

    @abstractmethod
    def describe(self) -> Dict[str, Any]:
        """Snapshot of the game for display."""
        pass

    @abstractmethod
    def resolution(self) -> Optional[Tuple[int, int, int]]:
        """Winner, loser and amount owed, once the game is done."""
        pass
