"""
Battle actors - participants in combat.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional

from combat_framework.components import CombatStats, Health, Mana, Position

if TYPE_CHECKING:
    from combat_framework.battle.skills import Skill


@dataclass(eq=False)
class Character:
    """
    A participant in battle, hero or enemy alike.

    Wraps components for convenient battle access. Characters compare
    by identity: two slimes with the same stats are still two targets.
    """
    name: str

    # Stats reference
    health: Health
    mana: Mana
    stats: CombatStats

    # Owned skills, shared by reference with other characters
    skills: list[Skill] = field(default_factory=list)

    # Display only
    position: Position = field(default_factory=Position)

    @property
    def is_alive(self) -> bool:
        """Check if actor is alive."""
        return not self.health.is_dead

    @property
    def hp(self) -> int:
        """Get current HP."""
        return self.health.current

    @property
    def max_hp(self) -> int:
        """Get max HP."""
        return self.health.max_hp

    @property
    def mp(self) -> int:
        """Get current MP."""
        return self.mana.current

    @property
    def max_mp(self) -> int:
        """Get max MP."""
        return self.mana.max_mp

    @property
    def attack(self) -> int:
        return self.stats.attack

    @property
    def defense(self) -> int:
        return self.stats.defense

    @property
    def speed(self) -> float:
        """Turn gauge growth per unit of time."""
        return self.stats.speed

    @property
    def hp_percent(self) -> float:
        """Get HP as percentage."""
        return self.health.percent

    def take_damage(self, amount: int) -> int:
        """
        Take damage. HP never drops below 0.

        Returns:
            Actual damage dealt
        """
        return self.health.take_damage(amount)

    def heal(self, amount: int) -> int:
        """Heal HP, capped at max HP. Returns the amount restored."""
        return self.health.heal(amount)

    def spend_mp(self, amount: int) -> int:
        """Spend MP, never going below 0. Returns the amount spent."""
        return self.mana.spend(amount)

    def restore_mp(self, amount: int) -> int:
        """Restore MP."""
        return self.mana.restore(amount)

    def __repr__(self) -> str:
        return f"Character({self.name!r}, hp={self.hp}/{self.max_hp}, mp={self.mp}/{self.max_mp})"


def create_character(
    name: str,
    hp: int,
    attack: int,
    defense: int,
    *,
    max_hp: Optional[int] = None,
    mp: int = 0,
    max_mp: Optional[int] = None,
    speed: float = 10,
    skills: Iterable[Skill] = (),
    position: tuple[float, float] = (0.0, 0.0),
) -> Character:
    """
    Create a Character from flat stats.

    max_hp defaults to hp and max_mp defaults to mp.
    """
    health = Health(current=hp, max_hp=hp if max_hp is None else max_hp)
    mana = Mana(current=mp, max_mp=mp if max_mp is None else max_mp)
    stats = CombatStats(attack=attack, defense=defense, speed=speed)

    return Character(
        name=name,
        health=health,
        mana=mana,
        stats=stats,
        skills=list(skills),
        position=Position(x=position[0], y=position[1]),
    )
