import pytest

from gamblebot.game.errors import (
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
from gamblebot.game.gamble_classic import GambleClassic, MIN_STAKE
from gamblebot.game.gamble_game import GameStatus

# ========= Helpers ==========

def _ongoing_game(die, players, stake=1000):
    """Create a game with the given players (first one creates it) and start it."""
    game = GambleClassic(players[0], stake, random_source=die)
    for player_id in players[1:]:
        game.join(player_id)
    game.start()
    return game


def _roll_all(game, die, rolls):
    """Roll for each (player, value) pair in order."""
    for player_id, value in rolls:
        die.push(value)
        assert game.roll(player_id) == value

# ========= Creation ============

@pytest.mark.parametrize("stake", [MIN_STAKE, 1000, 123456])
def test_new_game_keeps_stake_and_is_initiated(stake, die):
    game = GambleClassic(1, stake, random_source=die)

    assert game.stake == stake
    assert game.status == GameStatus.INITIATED
    assert game.participants == {1}
    assert game.resolution() is None


@pytest.mark.parametrize("stake", [0, 1, MIN_STAKE - 1])
def test_stake_below_minimum_is_rejected(stake):
    with pytest.raises(StakeTooLow) as exc_info:
        GambleClassic(1, stake)

    assert exc_info.value.minimum == 100

# ========= Lobby ============

def test_duplicate_join_fails_regardless_of_other_joins(die):
    game = GambleClassic(1, 500, random_source=die)
    game.join(2)
    for player_id in range(3, 10):
        game.join(player_id)

    with pytest.raises(PlayerAlreadyJoined):
        game.join(2)
    with pytest.raises(PlayerAlreadyJoined):
        game.join(1)

    assert game.roster == [1, 2, 3, 4, 5, 6, 7, 8, 9]


def test_start_needs_two_players(die):
    game = GambleClassic(1, 500, random_source=die)

    with pytest.raises(NotEnoughPlayers) as exc_info:
        game.start()
    assert exc_info.value.minimum == 2
    assert game.status == GameStatus.INITIATED

    game.join(2)
    game.start()
    assert game.status == GameStatus.ONGOING

    with pytest.raises(AlreadyStarted):
        game.start()


def test_join_after_start_fails(die):
    game = _ongoing_game(die, [1, 2])

    with pytest.raises(GameAlreadyOngoing):
        game.join(3)
    assert game.participants == {1, 2}

# ========= Rolling ============

def test_roll_before_start_fails(die):
    game = GambleClassic(1, 500, random_source=die)
    game.join(2)

    with pytest.raises(CannotRoll):
        game.roll(1)
    assert die.calls == []


def test_roll_uses_zero_to_stake_range(die):
    game = _ongoing_game(die, [1, 2], stake=750)
    die.push(321)

    assert game.roll(1) == 321
    assert die.calls == [(0, 750)]
    assert game.participants == {2}
    assert game.rolls_this_subround == {321: [1]}


def test_player_rolls_at_most_once_per_subround(die):
    game = _ongoing_game(die, [1, 2])
    _roll_all(game, die, [(1, 10)])

    with pytest.raises(CannotRoll):
        game.roll(1)
    with pytest.raises(CannotRoll):
        game.roll(99)
    assert game.rolls_this_subround == {10: [1]}

# ========= Advancing ============

def test_advance_is_noop_before_start(die):
    game = GambleClassic(1, 500, random_source=die)
    assert game.advance() == GameStatus.INITIATED


def test_advance_is_idempotent_while_players_still_roll(die):
    game = _ongoing_game(die, [1, 2, 3])
    _roll_all(game, die, [(1, 10), (2, 20)])

    for _ in range(3):
        assert game.advance() == GameStatus.ONGOING

    assert game.participants == {3}
    assert game.rolls_this_subround == {10: [1], 20: [2]}
    assert game.winning_roll is None


def test_highest_roll_wins_and_lowest_roll_loses(die):
    game = _ongoing_game(die, [1, 2], stake=1000)
    _roll_all(game, die, [(1, 1000), (2, 0)])

    assert game.advance() == GameStatus.DONE
    assert game.resolution() == (1, 2, 1000)
    # Done is terminal
    assert game.advance() == GameStatus.DONE
    with pytest.raises(CannotRoll):
        game.roll(1)


def test_tied_high_roll_requests_reroll_among_tied_players(die):
    game = _ongoing_game(die, [1, 2, 3, 4])
    _roll_all(game, die, [(1, 900), (2, 900), (3, 900), (4, 10)])

    with pytest.raises(TiedHighRoll) as exc_info:
        game.advance()

    assert exc_info.value.high_tie == [1, 2, 3]
    assert exc_info.value.low_tie is None
    assert exc_info.value.rerolling == [1, 2, 3]
    assert game.participants == {1, 2, 3}
    assert game.final_winner is None
    assert game.final_loser == 4
    assert game.status == GameStatus.ONGOING

    # Reroll decides the winner, the amount stays latched from the first sub-round
    _roll_all(game, die, [(1, 50), (2, 40), (3, 30)])
    assert game.advance() == GameStatus.DONE
    assert game.resolution() == (1, 4, 890)


def test_tied_low_roll_keeps_resolved_winner(die):
    game = _ongoing_game(die, [1, 2, 3])
    _roll_all(game, die, [(1, 800), (2, 100), (3, 100)])

    with pytest.raises(TiedLowRoll) as exc_info:
        game.advance()

    assert exc_info.value.high_tie is None
    assert exc_info.value.low_tie == [2, 3]
    assert game.final_winner == 1

    # Player 2 rolls highest in the reroll but the winner is already decided
    _roll_all(game, die, [(2, 600), (3, 50)])
    assert game.advance() == GameStatus.DONE
    assert game.resolution() == (1, 3, 700)


def test_all_players_tied_replay_the_whole_subround(die):
    game = _ongoing_game(die, [1, 2, 3])
    _roll_all(game, die, [(1, 500), (2, 500), (3, 500)])

    with pytest.raises(TiedRolls) as exc_info:
        game.advance()

    assert type(exc_info.value) is TiedRolls
    assert exc_info.value.high_tie == [1, 2, 3]
    assert exc_info.value.low_tie == [1, 2, 3]
    assert game.participants == {1, 2, 3}
    assert game.winning_roll == game.losing_roll == 500

    _roll_all(game, die, [(1, 700), (2, 300), (3, 100)])
    assert game.advance() == GameStatus.DONE
    assert game.resolution() == (1, 3, 0)


def test_losing_tie_takes_precedence_over_winning_tie(die):
    game = _ongoing_game(die, [1, 2, 3, 4])
    _roll_all(game, die, [(1, 900), (2, 900), (3, 10), (4, 10)])

    with pytest.raises(TiedRolls) as exc_info:
        game.advance()

    assert type(exc_info.value) is TiedRolls
    assert exc_info.value.high_tie == [1, 2]
    assert exc_info.value.low_tie == [3, 4]
    assert exc_info.value.rerolling == [3, 4]
    assert game.participants == {3, 4}

    with pytest.raises(CannotRoll):
        game.roll(1)


def test_winning_and_losing_rolls_latch_on_first_subround(die):
    game = _ongoing_game(die, [1, 2, 3], stake=200)
    _roll_all(game, die, [(1, 150), (2, 150), (3, 20)])

    with pytest.raises(TiedRolls):
        game.advance()
    assert (game.winning_roll, game.losing_roll) == (150, 20)

    _roll_all(game, die, [(1, 200), (2, 0)])
    game.advance()
    assert (game.winning_roll, game.losing_roll) == (150, 20)
    assert game.resolution() == (1, 3, 130)

# ========= Describing ============

def test_describe_snapshots_each_status(die):
    game = GambleClassic(1, 1000, random_source=die)
    game.join(2)

    info = game.describe()
    assert info["status"] == GameStatus.INITIATED
    assert info["stake"] == 1000
    assert info["players"] == [1, 2]
    assert info["pending"] == [1, 2]
    assert info["winner"] is None

    game.start()
    _roll_all(game, die, [(2, 300)])
    info = game.describe()
    assert info["status"] == GameStatus.ONGOING
    assert info["pending"] == [1]

    _roll_all(game, die, [(1, 400)])
    game.advance()
    info = game.describe()
    assert info["status"] == GameStatus.DONE
    assert (info["winner"], info["loser"], info["margin"]) == (1, 2, 100)
