"""
Combat Components - Data-only component definitions.

All components are Pydantic models containing only data.
Battle rules live in combat_framework.battle, not in components.
"""

from combat_framework.components.transform import Position
from combat_framework.components.character import (
    CombatStats,
    Health,
    Mana,
)

__all__ = [
    # Transform
    "Position",
    # Character
    "CombatStats",
    "Health",
    "Mana",
]
