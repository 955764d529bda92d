"""
Battle module - turn-based combat core.

Provides:
- Battle actors (heroes, enemies)
- Damage formula
- Speed-based turn scheduling with time-skip
- Skills and effect resolution
- Enemy AI
- Target selection
- Battle orchestration and event stream
"""

from combat_framework.battle.actor import Character, create_character
from combat_framework.battle.damage import (
    DamageCalculator,
    DamageResult,
    calculate_damage,
)
from combat_framework.battle.scheduler import (
    READY_THRESHOLD,
    TurnEntry,
    TurnScheduler,
)
from combat_framework.battle.skills import (
    Effect,
    EffectResult,
    EffectType,
    Skill,
    SkillResult,
    TargetType,
    create_basic_attack,
    create_strong_attack,
)
from combat_framework.battle.registry import SKILL_SCHEMA, SkillRegistry
from combat_framework.battle.ai import AIAction, AIActionType, EnemyAI
from combat_framework.battle.targeting import (
    TargetingResult,
    TargetingState,
    TargetingStateMachine,
    auto_targets,
    requires_targeting,
    valid_targets_for,
)
from combat_framework.battle.config import BattleConfig
from combat_framework.battle.controller import (
    BattleController,
    BattleEvent,
    BattleEventType,
)

__all__ = [
    # Actor
    "Character",
    "create_character",
    # Damage
    "DamageCalculator",
    "DamageResult",
    "calculate_damage",
    # Scheduling
    "READY_THRESHOLD",
    "TurnEntry",
    "TurnScheduler",
    # Skills
    "Effect",
    "EffectResult",
    "EffectType",
    "Skill",
    "SkillResult",
    "TargetType",
    "create_basic_attack",
    "create_strong_attack",
    "SKILL_SCHEMA",
    "SkillRegistry",
    # AI
    "AIAction",
    "AIActionType",
    "EnemyAI",
    # Targeting
    "TargetingResult",
    "TargetingState",
    "TargetingStateMachine",
    "auto_targets",
    "requires_targeting",
    "valid_targets_for",
    # Controller
    "BattleConfig",
    "BattleController",
    "BattleEvent",
    "BattleEventType",
]
