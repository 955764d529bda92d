"""
Skills - MP-costed actions made of an ordered list of effects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

from combat_framework.battle.damage import DamageCalculator

if TYPE_CHECKING:
    from combat_framework.battle.actor import Character


class TargetType(Enum):
    """Skill targeting types."""
    SELF = "self"
    SINGLE_ALLY = "single-ally"
    SINGLE_ENEMY = "single-enemy"
    ALL_ALLIES = "all-allies"
    ALL_ENEMIES = "all-enemies"

    @property
    def is_single(self) -> bool:
        return self in (TargetType.SINGLE_ALLY, TargetType.SINGLE_ENEMY)

    @property
    def is_group(self) -> bool:
        return self in (TargetType.ALL_ALLIES, TargetType.ALL_ENEMIES)

    @property
    def targets_enemies(self) -> bool:
        return self in (TargetType.SINGLE_ENEMY, TargetType.ALL_ENEMIES)


class EffectType(Enum):
    """Effect types. Buff and debuff are carried but not resolved yet."""
    DAMAGE = "damage"
    HEAL = "heal"
    BUFF = "buff"
    DEBUFF = "debuff"


@dataclass(frozen=True)
class Effect:
    """
    A single skill effect.

    Attributes:
        type: What the effect does
        value: Percentage of attack for damage, flat amount for heal
        duration: Turns, reserved for buff/debuff resolution
    """
    type: EffectType
    value: int
    duration: Optional[int] = None


@dataclass(frozen=True)
class EffectResult:
    """Result of applying one effect to one target."""
    target: str
    type: EffectType
    value: int
    message: str
    is_critical: bool = False
    # The affected character itself; names need not be unique
    character: Optional[Character] = field(default=None, compare=False, repr=False)


@dataclass
class SkillResult:
    """Result of using a skill."""
    success: bool
    message: str
    effects: list[EffectResult] = field(default_factory=list)


@dataclass(frozen=True)
class Skill:
    """
    Static skill definition.

    Immutable and shared by reference between the characters owning it.
    """
    id: str
    name: str
    mp_cost: int = 0
    target_type: TargetType = TargetType.SINGLE_ENEMY
    effects: tuple[Effect, ...] = ()
    description: str = ""

    # Catalog metadata, unused by resolution
    category: Optional[str] = None
    rarity: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Skill:
        """Build a skill from catalog data (camelCase keys)."""
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            mp_cost=data.get("mpCost", 0),
            target_type=TargetType(data["targetType"]),
            effects=tuple(
                Effect(
                    type=EffectType(e["type"]),
                    value=e["value"],
                    duration=e.get("duration"),
                )
                for e in data.get("effects", ())
            ),
            category=data.get("category"),
            rarity=data.get("rarity"),
        )

    def has_effect(self, effect_type: EffectType) -> bool:
        return any(e.type == effect_type for e in self.effects)

    def can_use(self, user: Character) -> bool:
        """Check MP and that the user is still standing."""
        return user.mp >= self.mp_cost and user.is_alive

    def use(
        self,
        user: Character,
        targets: Sequence[Character],
        calculator: Optional[DamageCalculator] = None,
    ) -> SkillResult:
        """
        Use the skill.

        Effects are applied in declaration order, each one to every
        target in list order. Damage skips dead targets; healing does not.

        Args:
            user: The caster
            targets: Resolved targets
            calculator: Damage calculator (a non-critical one by default)

        Returns:
            SkillResult; success only reports that the skill was cast
        """
        if not self.can_use(user):
            return SkillResult(
                success=False,
                message=f"{user.name} insufficient MP",
            )

        calculator = calculator or DamageCalculator()
        user.spend_mp(self.mp_cost)

        results: list[EffectResult] = []

        for effect in self.effects:
            for target in targets:
                if effect.type == EffectType.HEAL:
                    healed = target.heal(effect.value)
                    results.append(EffectResult(
                        target=target.name,
                        type=EffectType.HEAL,
                        value=healed,
                        message=f"{target.name} recovers {healed} HP!",
                        character=target,
                    ))
                    continue

                if not target.is_alive:
                    continue

                if effect.type == EffectType.DAMAGE:
                    hit = calculator.calculate(user.attack, target.defense, effect.value)
                    target.take_damage(hit.damage)
                    crit_text = " [CRITICAL!]" if hit.is_critical else ""
                    results.append(EffectResult(
                        target=target.name,
                        type=EffectType.DAMAGE,
                        value=hit.damage,
                        message=f"{target.name} takes {hit.damage} damage!{crit_text}",
                        is_critical=hit.is_critical,
                        character=target,
                    ))
                else:
                    results.append(EffectResult(
                        target=target.name,
                        type=effect.type,
                        value=effect.value,
                        message=f"{effect.type.value} applied to {target.name}!",
                        character=target,
                    ))

        return SkillResult(
            success=True,
            message=f"{user.name} uses {self.name}!",
            effects=results,
        )


def create_basic_attack() -> Skill:
    """Plain weapon attack: 100% of attack, no MP."""
    return Skill(
        id="basic-attack",
        name="Attack",
        description="Basic attack",
        mp_cost=0,
        target_type=TargetType.SINGLE_ENEMY,
        effects=(Effect(EffectType.DAMAGE, 100),),
    )


def create_strong_attack() -> Skill:
    """Empowered attack: 150% of attack for 5 MP."""
    return Skill(
        id="strong-attack",
        name="Strong Attack",
        description="Empowered attack",
        mp_cost=5,
        target_type=TargetType.SINGLE_ENEMY,
        effects=(Effect(EffectType.DAMAGE, 150),),
    )
