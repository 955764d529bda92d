"""
Turn scheduler - speed-proportional readiness gauges.

Each combatant owns a turn gauge that grows by ``speed * dt``. A living
combatant whose gauge reached READY_THRESHOLD may act. When no one would
become ready during a tick, the scheduler skips time forward to the exact
instant the fastest pending combatant becomes ready, so a single
``advance`` call always makes progress regardless of the host's tick size.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from combat_framework.battle.actor import Character

logger = logging.getLogger(__name__)

READY_THRESHOLD = 100.0


@dataclass
class TurnEntry:
    """A scheduled combatant and its accumulated gauge."""
    character: Character
    turn_gauge: float = 0.0

    @property
    def is_ready(self) -> bool:
        return self.character.is_alive and self.turn_gauge >= READY_THRESHOLD


class TurnScheduler:
    """Manages turn order for battle."""

    def __init__(self):
        self._entries: list[TurnEntry] = []

    def add(self, character: Character) -> None:
        """Schedule a character with an empty gauge."""
        self._entries.append(TurnEntry(character))

    def advance(self, delta_time: float) -> None:
        """
        Grow the gauges of every living combatant.

        Args:
            delta_time: Elapsed time since the last call
        """
        alive = [e for e in self._entries if e.character.is_alive]
        if not alive:
            return

        if any(e.turn_gauge + e.character.speed * delta_time >= READY_THRESHOLD for e in alive):
            for entry in alive:
                entry.turn_gauge += entry.character.speed * delta_time
            return

        # Nobody becomes ready this tick: jump to the next readiness instant.
        # Zero or negative speeds can never get there and do not bound the jump.
        pending = [
            e for e in alive
            if e.turn_gauge < READY_THRESHOLD and e.character.speed > 0
        ]
        if not pending:
            logger.debug("No living combatant can gain gauge, skipping advance")
            return

        waits = [(READY_THRESHOLD - e.turn_gauge) / e.character.speed for e in pending]
        jump_time = min(waits)

        for entry in alive:
            entry.turn_gauge += entry.character.speed * jump_time

        # Land exactly on the threshold despite float rounding
        for entry, wait in zip(pending, waits):
            if wait == jump_time:
                entry.turn_gauge = READY_THRESHOLD

    def next_ready(self) -> Optional[Character]:
        """
        Get the combatant that acts next.

        Returns:
            The living character with the highest gauge at or above the
            threshold; on equal gauges the one added first. None if no
            one is ready.
        """
        ready = [e for e in self._entries if e.is_ready]
        if not ready:
            return None

        # max() keeps the first of equal maxima, i.e. insertion order
        return max(ready, key=lambda e: e.turn_gauge).character

    def consume(self, character: Character) -> None:
        """
        Spend one turn. Surplus gauge is kept, so the value may stay
        above zero (or go below it).
        """
        entry = self._find(character)
        if entry is None:
            logger.warning(f"Cannot consume turn: {character.name} is not scheduled")
            return
        entry.turn_gauge -= READY_THRESHOLD

    def reset(self) -> None:
        """Set every gauge back to zero."""
        for entry in self._entries:
            entry.turn_gauge = 0.0

    def gauge_of(self, character: Character) -> Optional[float]:
        entry = self._find(character)
        return entry.turn_gauge if entry else None

    @property
    def entries(self) -> list[TurnEntry]:
        """Snapshot copies of the schedule."""
        return [TurnEntry(e.character, e.turn_gauge) for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def _find(self, character: Character) -> Optional[TurnEntry]:
        for entry in self._entries:
            if entry.character is character:
                return entry
        return None
