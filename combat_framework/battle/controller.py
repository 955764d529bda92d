"""
Battle controller - turn-based combat orchestrator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from combat_engine.core.events import Event, EventBus
from combat_engine.core.rng import RandomSource, default_source
from combat_framework.battle.actor import Character
from combat_framework.battle.ai import AIActionType, EnemyAI
from combat_framework.battle.config import BattleConfig
from combat_framework.battle.damage import DamageCalculator
from combat_framework.battle.scheduler import TurnScheduler
from combat_framework.battle.skills import EffectType, Skill, SkillResult
from combat_framework.battle.targeting import auto_targets, requires_targeting

logger = logging.getLogger(__name__)


class BattleEventType(Enum):
    """Battle events broadcast to UI/animation layers."""
    TURN_START = "turn-start"
    ATTACK = "attack"
    SKILL = "skill"
    DAMAGE = "damage"
    HEAL = "heal"
    TURN_END = "turn-end"
    BATTLE_END = "battle-end"


@dataclass
class BattleEvent(Event):
    """
    A battle event.

    Attributes:
        actor: Who acted, if anyone
        target: Who was affected, if a single character
        message: Human readable log line (may be empty)
    """
    actor: Optional[Character] = None
    target: Optional[Character] = None
    message: str = ""


BattleListener = Callable[[BattleEvent], None]


class BattleController:
    """
    Drives a battle between two rosters.

    The host calls update(dt) every tick. A hero becoming ready is
    returned to the host, which answers later with execute_attack,
    handle_skill_use or execute_targeted_skill. Enemy turns are decided
    and resolved inside update().
    """

    def __init__(
        self,
        heroes: Sequence[Character],
        enemies: Sequence[Character],
        config: Optional[BattleConfig] = None,
        rng: Optional[RandomSource] = None,
        events: Optional[EventBus] = None,
    ):
        if not heroes or not enemies:
            raise ValueError("Both rosters need at least one character")

        self.config = config or BattleConfig()
        self.events = events or EventBus()

        self._heroes: list[Character] = list(heroes)
        self._enemies: list[Character] = list(enemies)

        rng = rng or default_source()
        self._calculator = DamageCalculator(rng)
        self._ai = EnemyAI(
            rng,
            low_hp_ratio=self.config.ai_low_hp_ratio,
            skill_chance=self.config.ai_skill_chance,
        )

        self._scheduler = TurnScheduler()
        for character in self._heroes + self._enemies:
            self._scheduler.add(character)

        self._battle_end_emitted = False

    # Subscriptions

    def on(self, callback: BattleListener, priority: int = 0) -> None:
        """
        Listen to every battle event, in registration order.

        Battle events are broadcasts: consuming one does not hide it from
        later listeners.
        """
        for event_type in BattleEventType:
            self.events.subscribe(event_type, callback, priority=priority, weak=False)

    def off(self, callback: BattleListener) -> None:
        """Stop listening."""
        for event_type in BattleEventType:
            self.events.unsubscribe(event_type, callback)

    # Turn flow

    def update(self, delta_time: float) -> Optional[Character]:
        """
        Advance the battle clock.

        Args:
            delta_time: Time since the last update

        Returns:
            A hero whose turn it is, or None (nobody ready, enemy turn
            already resolved, or battle over)
        """
        if self.is_battle_over():
            return None

        self._scheduler.advance(delta_time)
        actor = self._scheduler.next_ready()
        if actor is None:
            return None

        self._emit(BattleEventType.TURN_START, actor=actor, message=f"{actor.name}'s turn!")

        if self._is_hero(actor):
            return actor

        self._execute_enemy_turn(actor)
        return None

    def execute_attack(
        self,
        attacker: Character,
        target: Character,
        critical_rate: Optional[float] = None,
    ) -> None:
        """
        Resolve a basic attack and end the attacker's turn.

        Args:
            attacker: Who attacks
            target: Who gets hit
            critical_rate: Overrides the side's configured rate
        """
        if critical_rate is None:
            if self._is_hero(attacker):
                critical_rate = self.config.hero_critical_rate
            else:
                critical_rate = self.config.enemy_critical_rate

        hit = self._calculator.calculate(
            attacker.attack,
            target.defense,
            critical_rate=critical_rate,
        )
        target.take_damage(hit.damage)

        crit_text = " [CRITICAL!]" if hit.is_critical else ""
        self._emit(
            BattleEventType.ATTACK,
            actor=attacker,
            target=target,
            message=f"{attacker.name} attacks! {hit.damage} damage!{crit_text}",
            damage=hit.damage,
            is_critical=hit.is_critical,
        )
        self._emit(
            BattleEventType.DAMAGE,
            target=target,
            damage=hit.damage,
            is_critical=hit.is_critical,
        )

        self._finish_turn(attacker)

    def execute_skill(
        self,
        skill: Skill,
        caster: Character,
        targets: Sequence[Character],
    ) -> SkillResult:
        """
        Resolve a skill on already chosen targets.

        A failed cast (not enough MP, dead caster) only emits a skill
        event with the reason; the caster keeps the turn.
        """
        result = skill.use(caster, targets, self._calculator)

        if not result.success:
            self._emit(
                BattleEventType.SKILL,
                actor=caster,
                message=result.message,
                skill=skill,
                success=False,
            )
            return result

        self._emit(
            BattleEventType.SKILL,
            actor=caster,
            target=targets[0] if len(targets) == 1 else None,
            message=result.message,
            skill=skill,
            targets=list(targets),
            success=True,
        )

        for effect in result.effects:
            target = effect.character
            if target is None:
                target = self._find_by_name(effect.target)
            if effect.type == EffectType.DAMAGE:
                self._emit(
                    BattleEventType.DAMAGE,
                    target=target,
                    message=effect.message,
                    damage=effect.value,
                    is_critical=effect.is_critical,
                )
            else:
                self._emit(
                    BattleEventType.HEAL,
                    target=target,
                    message=effect.message,
                    amount=effect.value,
                    effect=effect.type,
                )

        self._finish_turn(caster)
        return result

    def handle_skill_use(self, caster: Character, skill: Skill) -> bool:
        """
        Use a skill, prompting only when there is a real choice.

        Returns:
            True if the host must run target selection and then call
            execute_targeted_skill; False if the skill was already
            resolved on automatic targets.
        """
        allies, opponents = self._sides_for(caster)

        if requires_targeting(skill, caster, allies, opponents):
            return True

        self.execute_skill(skill, caster, auto_targets(skill, caster, allies, opponents))
        return False

    def execute_targeted_skill(
        self,
        caster: Character,
        skill: Skill,
        targets: Sequence[Character],
    ) -> SkillResult:
        """Resolve a skill after manual targeting."""
        return self.execute_skill(skill, caster, targets)

    # Outcome

    def is_battle_over(self) -> bool:
        return not self._any_alive(self._heroes) or not self._any_alive(self._enemies)

    def is_victory(self) -> bool:
        return self._any_alive(self._heroes) and not self._any_alive(self._enemies)

    def is_defeat(self) -> bool:
        return not self._any_alive(self._heroes)

    @property
    def heroes(self) -> list[Character]:
        return list(self._heroes)

    @property
    def enemies(self) -> list[Character]:
        return list(self._enemies)

    @property
    def scheduler(self) -> TurnScheduler:
        return self._scheduler

    # Internals

    def _execute_enemy_turn(self, enemy: Character) -> None:
        """Let the AI pick an action and resolve it."""
        action = self._ai.decide_action(enemy, self._heroes)

        if action.type == AIActionType.SKILL:
            result = self.execute_skill(action.skill, enemy, [action.target])
            if result.success:
                return
            logger.warning(f"{enemy.name} failed to cast {action.skill.name}, passing")
        elif action.type == AIActionType.ATTACK:
            self.execute_attack(enemy, action.target)
            return

        self._finish_turn(enemy)

    def _finish_turn(self, actor: Character) -> None:
        self._scheduler.consume(actor)
        self._emit(BattleEventType.TURN_END, actor=actor)

        if (
            self.config.emit_battle_end
            and not self._battle_end_emitted
            and self.is_battle_over()
        ):
            self._battle_end_emitted = True
            victory = self.is_victory()
            message = "Victory!" if victory else "Defeat..."
            logger.info(f"Battle over: {message}")
            self._emit(BattleEventType.BATTLE_END, message=message, victory=victory)

    def _emit(
        self,
        event_type: BattleEventType,
        actor: Optional[Character] = None,
        target: Optional[Character] = None,
        message: str = "",
        **data: Any,
    ) -> None:
        if message:
            logger.debug(f"[battle] {message}")
        self.events.publish_event(BattleEvent(
            type=event_type,
            data=data,
            actor=actor,
            target=target,
            message=message,
        ), stoppable=False)

    def _is_hero(self, character: Character) -> bool:
        return any(character is h for h in self._heroes)

    def _sides_for(self, caster: Character) -> tuple[list[Character], list[Character]]:
        """(allies, opponents) from the caster's point of view."""
        if any(caster is e for e in self._enemies):
            return self._enemies, self._heroes
        return self._heroes, self._enemies

    def _find_by_name(self, name: str) -> Optional[Character]:
        for character in self._heroes + self._enemies:
            if character.name == name:
                return character
        return None

    @staticmethod
    def _any_alive(characters: Sequence[Character]) -> bool:
        return any(c.is_alive for c in characters)
