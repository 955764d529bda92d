import os
import sys
import pytest

# Ensure combat modules can be imported
sys.path.append(os.getcwd())


class ScriptedRandom:
    """Random source that replays fixed values (cycling) and counts calls."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def __call__(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def scripted_rng():
    """Factory for deterministic random sources."""
    return ScriptedRandom


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from combat_engine.core.events import EventBus
    return EventBus()


@pytest.fixture
def hero():
    from combat_framework.battle.actor import create_character
    return create_character("Hero", 100, 30, 10, mp=50, speed=15)


@pytest.fixture
def slime():
    from combat_framework.battle.actor import create_character
    return create_character("Slime", 50, 15, 5, speed=10)


@pytest.fixture
def slimes():
    """Three identical slimes, distinct by identity."""
    from combat_framework.battle.actor import create_character
    return [
        create_character(f"Slime{i}", 50, 10, 5, speed=8)
        for i in range(1, 4)
    ]
