"""
Transform components - on-screen position.
"""

from __future__ import annotations

from combat_engine.core.component import Component, register_component


@register_component
class Position(Component):
    """
    2D position of a combatant.

    Only consumed by animation/UI layers; battle rules ignore it.
    """
    x: float = 0.0
    y: float = 0.0

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y
