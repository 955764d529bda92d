"""
Enemy AI - picks one action for a non-player combatant.

Priority policy:
1. Low HP and a usable self-heal -> heal self
2. Usable single-target attack skills -> coin flip, random skill
3. Otherwise -> basic attack
Offensive choices always go for the weakest living candidate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from combat_engine.core.rng import RandomSource, choice_index, default_source
from combat_framework.battle.actor import Character
from combat_framework.battle.skills import EffectType, Skill, TargetType

logger = logging.getLogger(__name__)


class AIActionType(Enum):
    """Kinds of decisions."""
    ATTACK = "attack"
    SKILL = "skill"
    PASS = "pass"


@dataclass(frozen=True)
class AIAction:
    """A decided action. Target is None only for PASS."""
    type: AIActionType
    target: Optional[Character] = None
    skill: Optional[Skill] = None


class EnemyAI:
    """
    Rule-based enemy decision maker.

    Args:
        rng: Source for the skill coin flip and skill pick
        low_hp_ratio: HP fraction below which self-heal is preferred
        skill_chance: Probability of trying an attack skill
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        low_hp_ratio: float = 0.3,
        skill_chance: float = 0.5,
    ):
        self._rng = rng or default_source()
        self.low_hp_ratio = low_hp_ratio
        self.skill_chance = skill_chance

    def decide_action(self, actor: Character, candidates: Sequence[Character]) -> AIAction:
        """
        Decide what the actor does this turn.

        Args:
            actor: The acting enemy
            candidates: Possible targets (usually the heroes)

        Returns:
            The chosen action; PASS when nobody can be targeted
        """
        heal_skill = self._find_self_heal(actor)
        if heal_skill and actor.hp < actor.max_hp * self.low_hp_ratio:
            logger.debug(f"{actor.name} heals with {heal_skill.name}")
            return AIAction(AIActionType.SKILL, target=actor, skill=heal_skill)

        attack_skills = [
            skill for skill in actor.skills
            if skill.target_type == TargetType.SINGLE_ENEMY and skill.can_use(actor)
        ]

        if attack_skills and self._rng() < self.skill_chance:
            skill = attack_skills[choice_index(self._rng, len(attack_skills))]
            target = self.select_target(candidates)
            if target is None:
                return self._pass(actor)
            return AIAction(AIActionType.SKILL, target=target, skill=skill)

        target = self.select_target(candidates)
        if target is None:
            return self._pass(actor)
        return AIAction(AIActionType.ATTACK, target=target)

    def select_target(self, candidates: Sequence[Character]) -> Optional[Character]:
        """
        Pick the living candidate with the lowest HP.

        Ties go to the first one in candidate order.
        """
        alive = [c for c in candidates if c.is_alive]
        if not alive:
            return None
        return min(alive, key=lambda c: c.hp)

    def _find_self_heal(self, actor: Character) -> Optional[Skill]:
        for skill in actor.skills:
            if (
                skill.target_type == TargetType.SELF
                and skill.has_effect(EffectType.HEAL)
                and skill.can_use(actor)
            ):
                return skill
        return None

    def _pass(self, actor: Character) -> AIAction:
        logger.debug(f"{actor.name} has no living target, passing")
        return AIAction(AIActionType.PASS)
