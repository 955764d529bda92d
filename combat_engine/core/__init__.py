"""
Core engine module.

Exports:
- Component, register_component: Component base and registration
- EventBus, Event, EventHandler: Event system
- RandomSource, RNG, chance, choice_index, default_source: Random sources
"""

from combat_engine.core.component import (
    Component,
    get_all_component_types,
    get_component_type,
    register_component,
)
from combat_engine.core.events import EventBus, Event, EventHandler
from combat_engine.core.rng import (
    RandomSource,
    RNG,
    chance,
    choice_index,
    default_source,
)

__all__ = [
    # Data
    "Component",
    "register_component",
    "get_component_type",
    "get_all_component_types",
    # Events
    "EventBus",
    "Event",
    "EventHandler",
    # Randomness
    "RandomSource",
    "RNG",
    "chance",
    "choice_index",
    "default_source",
]
