"""
Gamble Game Manager

This module owns every running gamble game, one per room.
It routes chat commands to the right game, polls games after each
command and forgets games as soon as they are done so the room can
start a new one.
"""

import threading
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .errors import (
    GameAlreadyExists,
    GameError,
    InfoOnMissingGame,
    JoinOnMissingGame,
    NoWinnersFound,
    PlayOnMissingGame,
    RollOnMissingGame,
    UnknownCommand,
)
from .gamble_classic import GambleClassic
from .gamble_game import GambleGame, GameKind, GameStatus
from ..utils.logging_config import get_logger, log_game_event

# Logger setup
logger = get_logger(__name__)

HELP_TEXT = (
    "Gamble Game!\n"
    "Great way to lose gold in your favorite game.\n"
    "/create <gold> - create a game in this chat\n"
    "/join - join the game\n"
    "/play - start the game\n"
    "/roll - roll\n"
    "/info - show the current game\n"
    "/help - list all commands"
)

GAME_CLASSES = {
    GameKind.CLASSIC: GambleClassic,
}


class ResponseType(Enum):
    """Outcomes a command or a poll can produce."""
    EMPTY = "empty"
    SHOW_JOIN_INFO = "show_join_info"
    STARTED = "started"
    PLAYER_ROLLED = "player_rolled"
    DONE = "done"
    SHOW_GENERAL_INFO = "show_general_info"
    MESSAGE = "message"


class GameResponse:
    """
    Successful outcome of a manager operation.

    ``payload`` depends on the type: the rolled value, the
    (winner, loser, margin) triple, the game snapshot or a message.
    """

    def __init__(self, response_type: ResponseType, payload: Any = None):
        self.type = response_type
        self.payload = payload

    @classmethod
    def empty(cls) -> "GameResponse":
        return cls(ResponseType.EMPTY)

    @property
    def is_empty(self) -> bool:
        return self.type == ResponseType.EMPTY

    def __eq__(self, other) -> bool:
        if not isinstance(other, GameResponse):
            return NotImplemented
        return self.type == other.type and self.payload == other.payload

    def __repr__(self) -> str:
        return f"GameResponse({self.type.name}, {self.payload!r})"


Outcome = Union[GameResponse, GameError]


def parse_stake(args: Sequence[str]) -> int:
    """
    Read the stake from command arguments; anything unusable counts as 0.

    Only plain ASCII digits with an optional leading "+" are accepted, so
    "1_000" and non-ASCII digits are rejected even though int() takes them.
    """
    if not args:
        return 0
    digits = args[0][1:] if args[0].startswith("+") else args[0]
    if not (digits.isascii() and digits.isdigit()):
        return 0
    return int(digits)


class GambleGameManager:
    """
    Registry of running gamble games keyed by room.

    Every public method runs under one lock covering the whole registry,
    and ``handle`` keeps it for a command and the poll that follows it.
    """

    def __init__(self, random_source=None):
        """
        Initialize an empty registry.

        Args:
            random_source: Die shared by all games, OS entropy when omitted
        """
        self.games: Dict[Any, GambleGame] = {}
        self.random_source = random_source
        self._lock = threading.RLock()

    def create_game(
        self,
        room_id,
        creator_id: int,
        stake: int,
        kind: GameKind = GameKind.CLASSIC,
    ) -> GameResponse:
        with self._lock:
            if room_id in self.games:
                raise GameAlreadyExists(f"Room {room_id} already has a game")

            game = GAME_CLASSES[kind](creator_id, stake, random_source=self.random_source)
            self.games[room_id] = game

        log_game_event(room_id, "created", creator_id=creator_id, stake=stake, kind=kind.value)
        return GameResponse(ResponseType.SHOW_JOIN_INFO)

    def join_game(self, room_id, player_id: int) -> GameResponse:
        with self._lock:
            game = self.games.get(room_id)
            if game is None:
                raise JoinOnMissingGame(room_id)
            game.join(player_id)

        log_game_event(room_id, "joined", player_id=player_id)
        return GameResponse.empty()

    def start_game(self, room_id) -> GameResponse:
        with self._lock:
            game = self.games.get(room_id)
            if game is None:
                raise PlayOnMissingGame(room_id)
            game.start()

        log_game_event(room_id, "started")
        return GameResponse(ResponseType.STARTED)

    def submit_roll(self, room_id, player_id: int) -> GameResponse:
        with self._lock:
            game = self.games.get(room_id)
            if game is None:
                raise RollOnMissingGame(room_id)
            value = game.roll(player_id)

        log_game_event(room_id, "rolled", player_id=player_id, value=value)
        return GameResponse(ResponseType.PLAYER_ROLLED, value)

    def query_info(self, room_id) -> GameResponse:
        with self._lock:
            game = self.games.get(room_id)
            if game is None:
                raise InfoOnMissingGame(room_id)
            return GameResponse(ResponseType.SHOW_GENERAL_INFO, game.describe())

    def advance(self, room_id) -> GameResponse:
        """
        Poll the room's game and reclaim it once it is done.

        A room without a game is not an error; the poll simply yields an
        empty response.

        Returns:
            GameResponse: EMPTY, or DONE with (winner, loser, margin)

        Raises:
            TiedRolls: Propagated from the game, which is left in place
            NoWinnersFound: The game is done but cannot name a winner and loser
        """
        with self._lock:
            game = self.games.get(room_id)
            if game is None:
                return GameResponse.empty()

            if game.advance() != GameStatus.DONE:
                return GameResponse.empty()

            resolved = game.resolution()
            if resolved is None:
                logger.error(f"Game done without winner and loser - room_id={room_id}")
                raise NoWinnersFound(room_id)

            # Free the room so players can start the next game right away
            del self.games[room_id]

        winner, loser, margin = resolved
        log_game_event(room_id, "done", winner=winner, loser=loser, margin=margin)
        return GameResponse(ResponseType.DONE, resolved)

    def dispatch(self, room_id, user_id: int, command: str, args: Sequence[str] = ()) -> GameResponse:
        """
        Run a chat command against the room's game.

        Args:
            room_id: Room the command was sent in
            user_id: Player who sent it
            command: Command name without prefix (create, join, play, roll, info, help)
            args: Remaining words of the message

        Raises:
            GameError: Any rule violation or routing failure
        """
        if command == "create":
            return self.create_game(room_id, user_id, parse_stake(args))
        elif command == "join":
            return self.join_game(room_id, user_id)
        elif command == "play":
            return self.start_game(room_id)
        elif command == "roll":
            return self.submit_roll(room_id, user_id)
        elif command == "info":
            return self.query_info(room_id)
        elif command == "help":
            return GameResponse(ResponseType.MESSAGE, HELP_TEXT)
        else:
            raise UnknownCommand(command)

    def handle(self, room_id, user_id: int, command: str, args: Sequence[str] = ()) -> Tuple[Outcome, Outcome]:
        """
        Dispatch a command and poll the room, as one atomic step.

        Returns:
            Tuple: (command outcome, poll outcome), each a GameResponse or the GameError raised
        """
        with self._lock:
            try:
                command_outcome: Outcome = self.dispatch(room_id, user_id, command, args)
            except GameError as e:
                command_outcome = e

            try:
                poll_outcome: Outcome = self.advance(room_id)
            except GameError as e:
                poll_outcome = e

        return command_outcome, poll_outcome

    def get_game(self, room_id) -> Optional[GambleGame]:
        with self._lock:
            return self.games.get(room_id)

    def active_rooms(self) -> List:
        with self._lock:
            return list(self.games)
