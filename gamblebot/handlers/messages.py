"""
Gamble Messages

This module turns game manager outcomes and errors into chat messages.
All text is Telegram HTML; the game package never formats anything itself.
"""

import html
from typing import Dict, Iterable, Optional

from ..game.errors import (
    AlreadyStarted,
    CannotRoll,
    GameAlreadyExists,
    GameAlreadyOngoing,
    GameError,
    InfoOnMissingGame,
    JoinOnMissingGame,
    NoWinnersFound,
    NotEnoughPlayers,
    PlayOnMissingGame,
    PlayerAlreadyJoined,
    RollOnMissingGame,
    StakeTooLow,
    TiedRolls,
    UnknownCommand,
)
from ..game.gamble_game import GameStatus
from ..game.game_manager import GameResponse, ResponseType

Names = Optional[Dict[int, str]]


def format_amount(amount: int) -> str:
    """Group digits by thousands with spaces, e.g. 1234567 -> '1 234 567'."""
    return f"{amount:,}".replace(",", " ")


def mention(user_id: int, names: Names = None) -> str:
    """HTML mention for a user, using their display name when known."""
    name = (names or {}).get(user_id) or f"Player {user_id}"
    return f'<a href="tg://user?id={user_id}">{html.escape(name)}</a>'


def _mention_lines(player_ids: Iterable[int], names: Names, suffix: str) -> str:
    return "\n".join(f"- {mention(player_id, names)}{suffix}" for player_id in player_ids)


def build_matched_roll_message(roll_type: str, player_ids: Iterable[int], names: Names = None) -> str:
    return "\n".join(
        f"{mention(player_id, names)}, you matched the {roll_type} roll. Please reroll. (/roll)"
        for player_id in player_ids
    )


def render_info(snapshot: Dict, names: Names = None) -> str:
    """Describe a game snapshot from GambleGame.describe()."""
    status = snapshot["status"]

    if status == GameStatus.INITIATED:
        joined = _mention_lines(snapshot["players"], names, "") or "- No players have joined yet"
        return (
            "💰 <u>Ongoing Game!</u>\n"
            f"For <b>{format_amount(snapshot['stake'])}</b> gold!\n\n"
            f"<i>Players who have already joined</i>\n{joined}\n\n"
            "<i>Next steps</i>\n"
            "- /join to join\n"
            "- /play to start the game"
        )

    if status == GameStatus.ONGOING:
        pending = _mention_lines(snapshot["pending"], names, " still needs to roll! (/roll)")
        return f"🎲 Game is ongoing!\n{pending}"

    return (
        f"{mention(snapshot['loser'], names)} owes {mention(snapshot['winner'], names)} "
        f"<b>{format_amount(snapshot['margin'])}</b> gold!"
    )


def render_response(response: GameResponse, user_id: int, names: Names = None) -> Optional[str]:
    """
    Render a successful outcome.

    Returns:
        Optional[str]: Message text, or None when nothing should be sent
    """
    player = mention(user_id, names)

    if response.type == ResponseType.EMPTY:
        return None
    elif response.type == ResponseType.SHOW_JOIN_INFO:
        return "Type /join to join the game!"
    elif response.type == ResponseType.STARTED:
        return "Game started 🚀! Type /roll!"
    elif response.type == ResponseType.PLAYER_ROLLED:
        return f"{player} rolled a {format_amount(response.payload)}!"
    elif response.type == ResponseType.DONE:
        winner, loser, margin = response.payload
        return (
            "<u>A winner has emerged!</u>\n"
            f"🪙 {mention(loser, names)} owes {mention(winner, names)} "
            f"<b>{format_amount(margin)}</b> gold."
        )
    elif response.type == ResponseType.SHOW_GENERAL_INFO:
        return render_info(response.payload, names)
    else:
        return html.escape(str(response.payload))


def render_error(error: GameError, user_id: int, names: Names = None) -> str:
    """Render a game error addressed to the player who caused it."""
    player = mention(user_id, names)

    if isinstance(error, TiedRolls):
        parts = []
        if error.high_tie:
            parts.append(build_matched_roll_message("highest", error.high_tie, names))
        if error.low_tie:
            parts.append(build_matched_roll_message("lowest", error.low_tie, names))
        return "\n".join(parts)
    elif isinstance(error, RollOnMissingGame):
        return f"{player}, what are you rolling for? Create a game first. (/create)"
    elif isinstance(error, InfoOnMissingGame):
        return f"{player}, you gotta create a game first before requesting info. (/create)"
    elif isinstance(error, PlayOnMissingGame):
        return f"{player}, you gotta create a game first before playing. (/create)"
    elif isinstance(error, JoinOnMissingGame):
        return f"{player}, you gotta create a game first before joining one. (/create)"
    elif isinstance(error, NoWinnersFound):
        return "🤔 The game is done but no winners were found.. this should never happen."
    elif isinstance(error, AlreadyStarted):
        return f"🤦 {player}, there is already an ongoing game. (/info)"
    elif isinstance(error, NotEnoughPlayers):
        return f"🙃 {player}, there needs to be at least {error.minimum} players."
    elif isinstance(error, StakeTooLow):
        return f"🤏 {player}, what are you broke? Gamble at least {format_amount(error.minimum)} gold."
    elif isinstance(error, GameAlreadyOngoing):
        return f"😩 {player}, let the game end first and then join the next one."
    elif isinstance(error, PlayerAlreadyJoined):
        return f"🤪 {player}, you're already part of the game."
    elif isinstance(error, CannotRoll):
        return f"😒 {player}, it's not the right time to roll."
    elif isinstance(error, GameAlreadyExists):
        return f"{player}, a game already exists in this chat.. try finishing it first? (/info)"
    elif isinstance(error, UnknownCommand):
        return f"{player}, is this your first time? (/help)"
    else:
        return f"{player}, something went wrong: {html.escape(str(error))}"
