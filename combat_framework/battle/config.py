"""
Battle configuration.
"""

from __future__ import annotations


class BattleConfig:
    """Tunable numbers for a battle."""

    def __init__(
        self,
        hero_critical_rate: float = 0.2,
        enemy_critical_rate: float = 0.15,
        ai_low_hp_ratio: float = 0.3,
        ai_skill_chance: float = 0.5,
        emit_battle_end: bool = True,
    ):
        self.hero_critical_rate = hero_critical_rate
        self.enemy_critical_rate = enemy_critical_rate
        self.ai_low_hp_ratio = ai_low_hp_ratio
        self.ai_skill_chance = ai_skill_chance
        self.emit_battle_end = emit_battle_end
