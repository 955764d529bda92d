"""
Character components - health, mana, combat stats.
"""

from __future__ import annotations

from pydantic import Field

from combat_engine.core.component import Component, register_component


@register_component
class Health(Component):
    """
    Health points tracking.

    Attributes:
        current: Current HP, clamped to [0, max_hp]
        max_hp: Maximum HP
    """
    current: int = 100
    max_hp: int = Field(default=100, ge=0)

    def model_post_init(self, __context):
        """Clamp current into [0, max_hp]."""
        self.current = max(0, min(self.current, self.max_hp))

    @property
    def is_dead(self) -> bool:
        return self.current <= 0

    @property
    def percent(self) -> float:
        """Get health as percentage (0-1)."""
        if self.max_hp <= 0:
            return 0.0
        return self.current / self.max_hp

    @property
    def is_full(self) -> bool:
        """Check if at full health."""
        return self.current >= self.max_hp

    def take_damage(self, amount: int) -> int:
        """
        Take damage.

        Args:
            amount: Damage to take

        Returns:
            Actual damage dealt
        """
        actual = max(0, min(amount, self.current))
        self.current -= actual
        return actual

    def heal(self, amount: int) -> int:
        """
        Heal health. Works on a 0 HP character too; there is no
        separate revive state.

        Args:
            amount: Amount to heal

        Returns:
            Actual amount healed
        """
        old = self.current
        self.current = max(0, min(self.current + amount, self.max_hp))
        return self.current - old


@register_component
class Mana(Component):
    """
    Mana/MP points tracking.

    Attributes:
        current: Current MP, clamped to [0, max_mp]
        max_mp: Maximum MP
    """
    current: int = 0
    max_mp: int = Field(default=0, ge=0)

    def model_post_init(self, __context):
        """Clamp current into [0, max_mp]."""
        self.current = max(0, min(self.current, self.max_mp))

    @property
    def percent(self) -> float:
        """Get mana as percentage (0-1)."""
        if self.max_mp <= 0:
            return 0.0
        return self.current / self.max_mp

    def spend(self, amount: int) -> int:
        """
        Spend mana, never going below zero.

        Returns:
            Actual amount spent
        """
        actual = max(0, min(amount, self.current))
        self.current -= actual
        return actual

    def restore(self, amount: int) -> int:
        """
        Restore mana.

        Returns:
            Actual amount restored
        """
        old = self.current
        self.current = max(0, min(self.current + amount, self.max_mp))
        return self.current - old


@register_component
class CombatStats(Component):
    """
    Flat combat stats.

    Attributes:
        attack: Attack power fed to the damage formula
        defense: Subtracted from incoming damage
        speed: Turn gauge growth per unit of time
    """
    attack: int = 10
    defense: int = 0
    speed: float = 10.0
