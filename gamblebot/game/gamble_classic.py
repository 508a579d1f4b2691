"""
Classic Gamble Game

Everyone rolls between 0 and the stake. The highest roll wins, the lowest
roll loses and the loser owes the winner the difference between the two
rolls. Players who tie on the highest or lowest roll reroll among
themselves until a single winner and a single loser remain.
"""

from typing import Any, Dict, List, Optional, Set, Tuple

from .dice import default_random_source, roll_die
from .errors import (
    AlreadyStarted,
    CannotRoll,
    GameAlreadyOngoing,
    NotEnoughPlayers,
    PlayerAlreadyJoined,
    StakeTooLow,
    TiedHighRoll,
    TiedLowRoll,
    TiedRolls,
)
from .gamble_game import GambleGame, GameKind, GameStatus
from ..utils.logging_config import get_logger

# Logger setup
logger = get_logger(__name__)

MIN_STAKE = 100
MIN_PLAYERS = 2


class GambleClassic(GambleGame):
    """
    Extremal-roll gamble game for a single room.

    ``participants`` holds the players who still have to roll in the
    current sub-round; a player leaves it as soon as they roll. When it is
    empty the sub-round can be resolved by ``advance``.
    """

    kind = GameKind.CLASSIC

    def __init__(self, creator_id: int, stake: int, random_source=None):
        """
        Create a game in the initiated state with its creator already joined.

        Args:
            creator_id: Player creating the game
            stake: Gold at risk, also the highest possible roll
            random_source: Object with ``randint(low, high)``, OS entropy by default

        Raises:
            StakeTooLow: If the stake is below MIN_STAKE
        """
        if stake < MIN_STAKE:
            raise StakeTooLow(MIN_STAKE)

        self.status = GameStatus.INITIATED
        self.stake = stake
        self.creator_id = creator_id
        self.roster: List[int] = [creator_id]
        self.participants: Set[int] = {creator_id}
        self.rolls_this_subround: Dict[int, List[int]] = {}
        self.final_winner: Optional[int] = None
        self.final_loser: Optional[int] = None
        self.winning_roll: Optional[int] = None
        self.losing_roll: Optional[int] = None
        self.random_source = random_source or default_random_source()

    def join(self, player_id: int) -> None:
        if self.status != GameStatus.INITIATED:
            raise GameAlreadyOngoing("Let the current game end first")

        if player_id in self.participants:
            raise PlayerAlreadyJoined(player_id)

        self.participants.add(player_id)
        self.roster.append(player_id)

    def start(self) -> None:
        if self.status != GameStatus.INITIATED:
            raise AlreadyStarted("Game already started")

        if len(self.participants) < MIN_PLAYERS:
            raise NotEnoughPlayers(MIN_PLAYERS)

        self.status = GameStatus.ONGOING
        logger.debug(f"Gamble started - stake={self.stake}, players={self.roster}")

    def roll(self, player_id: int) -> int:
        if self.status != GameStatus.ONGOING or player_id not in self.participants:
            raise CannotRoll(player_id)

        # Leaving participants marks the player as rolled for this sub-round
        self.participants.discard(player_id)

        value = roll_die(self.random_source, self.stake)
        self.rolls_this_subround.setdefault(value, []).append(player_id)
        return value

    def advance(self) -> GameStatus:
        """
        Resolve the sub-round once every expected player has rolled.

        The winning and losing rolls are latched on the first sub-round only,
        so rerolls decide who wins or loses but never the amount owed.
        Each side is resolved once; a tie on a side that is already resolved
        is ignored.

        Returns:
            GameStatus: Current status, DONE once winner and loser are known

        Raises:
            TiedHighRoll: Players tied on the highest roll only and must reroll
            TiedLowRoll: Players tied on the lowest roll only and must reroll
            TiedRolls: Both sides tied in the same sub-round
        """
        if self.status != GameStatus.ONGOING or self.participants:
            return self.status

        highest = max(self.rolls_this_subround)
        lowest = min(self.rolls_this_subround)

        if self.winning_roll is None:
            self.winning_roll = highest
        if self.losing_roll is None:
            self.losing_roll = lowest

        winners = self.rolls_this_subround[highest]
        losers = self.rolls_this_subround[lowest]
        self.rolls_this_subround = {}

        high_tie = None
        low_tie = None

        if self.final_winner is None:
            if len(winners) > 1:
                self.participants = set(winners)
                high_tie = list(winners)
            else:
                self.final_winner = winners[0]

        # A losing tie replaces a winning tie's reroll group, so when both
        # sides tie with different players the winners are not asked to reroll.
        if self.final_loser is None:
            if len(losers) > 1:
                self.participants = set(losers)
                low_tie = list(losers)
            else:
                self.final_loser = losers[0]

        if high_tie or low_tie:
            logger.debug(f"Tied rolls - high_tie={high_tie}, low_tie={low_tie}")
            if high_tie and low_tie:
                tie_class = TiedRolls
            elif high_tie:
                tie_class = TiedHighRoll
            else:
                tie_class = TiedLowRoll
            raise tie_class(high_tie=high_tie, low_tie=low_tie, rerolling=self._pending())

        if self.final_winner is not None and self.final_loser is not None:
            self.status = GameStatus.DONE

        return self.status

    def describe(self) -> Dict[str, Any]:
        resolved = self.resolution()
        return {
            "kind": self.kind.value,
            "status": self.status,
            "stake": self.stake,
            "creator_id": self.creator_id,
            "players": list(self.roster),
            "pending": self._pending(),
            "winner": self.final_winner,
            "loser": self.final_loser,
            "margin": resolved[2] if resolved else None,
        }

    def resolution(self) -> Optional[Tuple[int, int, int]]:
        if self.status != GameStatus.DONE:
            return None
        if self.final_winner is None or self.final_loser is None:
            return None
        return self.final_winner, self.final_loser, self.winning_roll - self.losing_roll

    def _pending(self) -> List[int]:
        """Players still expected to roll, in join order."""
        return [player_id for player_id in self.roster if player_id in self.participants]
