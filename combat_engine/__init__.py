"""
Combat Engine

Infrastructure for the turn-based combat core: data components,
a typed event bus, injectable random sources and a validated
static-data catalog.

Quick Start:
    from combat_engine.core import EventBus, RNG

    bus = EventBus()
    rng = RNG(seed=42)
    roll = rng()  # float in [0.0, 1.0)
"""

__version__ = "0.1.0"
__author__ = "Developer"

from combat_engine.core import (
    Component,
    EventBus,
    Event,
    EventHandler,
    RandomSource,
    RNG,
    default_source,
)
from combat_engine.resources import Database

__all__ = [
    # Data
    "Component",
    # Events
    "EventBus",
    "Event",
    "EventHandler",
    # Randomness
    "RandomSource",
    "RNG",
    "default_source",
    # Resources
    "Database",
]
