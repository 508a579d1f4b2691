"""
Dice

Random sources used to roll for gamble games.
Anything with a ``randint(low, high)`` method returning a uniform integer
in the inclusive range can be used as a die.
"""

import random


def default_random_source() -> random.Random:
    """Return a generator seeded from OS entropy."""
    return random.SystemRandom()


def roll_die(source, stake: int) -> int:
    """Roll a value between 0 and the stake, both included."""
    return source.randint(0, stake)
