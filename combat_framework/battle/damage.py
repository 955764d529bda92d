"""
Damage formula.

    base   = floor(attack * skill_power / 100) - defense
    crit   = floor(base * 150 / 100)
    damage = max(1, base)

Every hit deals at least 1 damage, whatever the stats.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from combat_engine.core.rng import RandomSource, chance, default_source

DEFAULT_SKILL_POWER = 100
CRITICAL_MULTIPLIER_PERCENT = 150
MIN_DAMAGE = 1


@dataclass(frozen=True)
class DamageResult:
    """Outcome of a single damage roll."""
    damage: int
    is_critical: bool = False


class DamageCalculator:
    """
    Computes hit damage.

    The only impure part is the critical roll, which is drawn from the
    injected random source.
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        self._rng = rng or default_source()

    def calculate(
        self,
        attack: float,
        defense: float,
        skill_power: float = DEFAULT_SKILL_POWER,
        critical_rate: Optional[float] = None,
        forced_critical: Optional[bool] = None,
    ) -> DamageResult:
        """
        Calculate damage for one hit.

        Args:
            attack: Attacker's attack power
            defense: Defender's defense
            skill_power: Percentage of attack used (100 = 100%)
            critical_rate: Chance of a critical hit (None or 0 = never)
            forced_critical: Overrides the roll when not None

        Returns:
            DamageResult with the final damage and critical flag
        """
        if forced_critical is not None:
            is_critical = forced_critical
        else:
            is_critical = chance(self._rng, critical_rate)

        base = math.floor(attack * skill_power / 100) - defense

        if is_critical:
            base = math.floor(base * CRITICAL_MULTIPLIER_PERCENT / 100)

        return DamageResult(damage=max(MIN_DAMAGE, math.floor(base)), is_critical=is_critical)


def calculate_damage(
    attack: float,
    defense: float,
    skill_power: float = DEFAULT_SKILL_POWER,
    critical_rate: Optional[float] = None,
    forced_critical: Optional[bool] = None,
    rng: Optional[RandomSource] = None,
) -> DamageResult:
    """Stateless form of DamageCalculator.calculate."""
    return DamageCalculator(rng).calculate(
        attack,
        defense,
        skill_power=skill_power,
        critical_rate=critical_rate,
        forced_critical=forced_critical,
    )
