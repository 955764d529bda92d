"""
Target selection for skills.

TargetingStateMachine drives the "pick a target" protocol:

    IDLE --start_targeting--> SELECTING --select_target--> CONFIRMED
      ^                           |                            |
      +-------cancel_targeting----+------complete_targeting----+

The module-level helpers decide whether a skill needs a choice at all:
group and self skills never do, single-target skills only when more
than one valid target is standing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Sequence

from combat_framework.battle.actor import Character
from combat_framework.battle.skills import Skill, TargetType

logger = logging.getLogger(__name__)


class TargetingState(Enum):
    """State of the targeting session."""
    IDLE = auto()
    SELECTING = auto()
    CONFIRMED = auto()


@dataclass
class TargetingResult:
    """Result of a selection attempt."""
    success: bool
    message: str
    targets: list[Character] = field(default_factory=list)


def valid_targets_for(
    skill: Skill,
    caster: Character,
    allies: Sequence[Character],
    enemies: Sequence[Character],
) -> list[Character]:
    """
    Get the living characters a skill may be aimed at.

    Args:
        skill: The skill being used
        caster: Who uses it
        allies: The caster's side
        enemies: The opposing side
    """
    target_type = skill.target_type

    if target_type == TargetType.SELF:
        return [caster] if caster.is_alive else []

    if target_type.targets_enemies:
        return [e for e in enemies if e.is_alive]

    return [a for a in allies if a.is_alive]


def requires_targeting(
    skill: Skill,
    caster: Character,
    allies: Sequence[Character],
    enemies: Sequence[Character],
) -> bool:
    """Check if the player has a real choice to make."""
    if not skill.target_type.is_single:
        return False
    return len(valid_targets_for(skill, caster, allies, enemies)) > 1


def auto_targets(
    skill: Skill,
    caster: Character,
    allies: Sequence[Character],
    enemies: Sequence[Character],
) -> list[Character]:
    """
    Resolve targets without asking.

    Self skills hit the caster, group skills every valid target and
    single-target skills the only (first) valid one, if any.
    """
    if skill.target_type == TargetType.SELF:
        return [caster]

    valid = valid_targets_for(skill, caster, allies, enemies)
    if skill.target_type.is_single:
        return valid[:1]
    return valid


class TargetingStateMachine:
    """
    Holds one targeting session at a time.

    Misuse (selecting while idle, picking an invalid target) is reported
    through TargetingResult and never changes state.
    """

    def __init__(self):
        self._state = TargetingState.IDLE
        self._skill: Optional[Skill] = None
        self._caster: Optional[Character] = None
        self._allies: list[Character] = []
        self._enemies: list[Character] = []
        self._valid_targets: list[Character] = []
        self._selected_targets: list[Character] = []

    def start_targeting(
        self,
        skill: Skill,
        allies: Sequence[Character],
        enemies: Sequence[Character],
        caster: Character,
    ) -> None:
        """
        Begin a targeting session.

        Args:
            skill: Skill to aim
            allies: Caster's side
            enemies: Opposing side
            caster: Skill user
        """
        self._skill = skill
        self._allies = list(allies)
        self._enemies = list(enemies)
        self._caster = caster
        self._selected_targets = []
        self._valid_targets = valid_targets_for(skill, caster, self._allies, self._enemies)
        self._state = TargetingState.SELECTING

        logger.debug(
            f"Targeting {skill.name} ({skill.target_type.value}): "
            f"{[t.name for t in self._valid_targets]}"
        )

    def select_target(self, candidate: Character) -> TargetingResult:
        """
        Try to pick a target.

        Group skills commit every valid target whichever one was picked;
        self skills always commit the caster.
        """
        if self._state != TargetingState.SELECTING:
            return TargetingResult(False, "Not in targeting mode.")

        if not self._is_valid_target(candidate):
            return TargetingResult(False, "Invalid target.")

        target_type = self._skill.target_type
        if target_type == TargetType.SELF:
            self._selected_targets = [self._caster]
        elif target_type.is_group:
            self._selected_targets = valid_targets_for(
                self._skill, self._caster, self._allies, self._enemies
            )
        else:
            self._selected_targets = [candidate]

        self._state = TargetingState.CONFIRMED
        return TargetingResult(True, "Target selected.", list(self._selected_targets))

    def cancel_targeting(self) -> None:
        """Abort the session."""
        self._end_session()

    def complete_targeting(self) -> list[Character]:
        """
        Finish the session.

        Returns:
            The committed selection (empty unless a target was confirmed)
        """
        selected = list(self._selected_targets) if self._state == TargetingState.CONFIRMED else []
        self._end_session()
        return selected

    def reset(self) -> None:
        """Clear every session field."""
        self._end_session()
        self._caster = None
        self._allies = []
        self._enemies = []

    @property
    def state(self) -> TargetingState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state != TargetingState.IDLE

    @property
    def valid_targets(self) -> list[Character]:
        return list(self._valid_targets)

    @property
    def selected_targets(self) -> list[Character]:
        return list(self._selected_targets)

    @property
    def caster(self) -> Optional[Character]:
        return self._caster

    @property
    def current_skill(self) -> Optional[Skill]:
        return self._skill

    def _is_valid_target(self, candidate: Character) -> bool:
        if not candidate.is_alive:
            return False
        return any(candidate is t for t in self._valid_targets)

    def _end_session(self) -> None:
        self._state = TargetingState.IDLE
        self._skill = None
        self._selected_targets = []
        self._valid_targets = []
