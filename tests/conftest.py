"""
Pytest fixtures for gamble bot tests.
"""

import pytest


class ScriptedDie:
    """Random source returning predetermined rolls, recording every call."""

    def __init__(self, values=()):
        self.values = list(values)
        self.calls = []

    def push(self, *values):
        self.values.extend(values)

    def randint(self, low, high):
        self.calls.append((low, high))
        return self.values.pop(0)


@pytest.fixture
def die() -> ScriptedDie:
    """Empty scripted die; push rolls before rolling."""
    return ScriptedDie()
