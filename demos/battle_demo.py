"""
Battle Demo: headless turn-based combat

Demonstrates:
- Skill catalog loading from parsed data
- Speed-based turn scheduling
- Enemy AI turns
- Smart auto-targeting and manual target selection
- The battle event stream

The "player" is scripted: heroes heal when hurt, otherwise use their
first affordable skill, otherwise attack the weakest enemy.

Usage:
    python demos/battle_demo.py [seed]
"""

import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from combat_engine.core import RNG
from combat_framework.battle import (
    BattleController,
    BattleEvent,
    Character,
    SkillRegistry,
    TargetType,
    TargetingStateMachine,
    create_character,
)

SKILL_DATA = [
    {
        "id": "fireball",
        "name": "Fireball",
        "description": "Single enemy fire damage",
        "mpCost": 10,
        "targetType": "single-enemy",
        "effects": [{"type": "damage", "value": 150}],
        "category": "magic",
        "rarity": "common",
    },
    {
        "id": "meteor",
        "name": "Meteor",
        "description": "Damage to all enemies",
        "mpCost": 20,
        "targetType": "all-enemies",
        "effects": [{"type": "damage", "value": 120}],
        "category": "magic",
        "rarity": "rare",
    },
    {
        "id": "heal",
        "name": "Heal",
        "description": "Restore one ally",
        "mpCost": 8,
        "targetType": "single-ally",
        "effects": [{"type": "heal", "value": 40}],
        "category": "healing",
        "rarity": "common",
    },
    {
        "id": "regenerate",
        "name": "Regenerate",
        "description": "Restore self",
        "mpCost": 5,
        "targetType": "self",
        "effects": [{"type": "heal", "value": 25}],
        "category": "healing",
        "rarity": "uncommon",
    },
    {
        "id": "bite",
        "name": "Bite",
        "description": "Single enemy damage",
        "mpCost": 3,
        "targetType": "single-enemy",
        "effects": [{"type": "damage", "value": 130}],
        "category": "physical",
        "rarity": "common",
    },
]

TICK = 1 / 60
MAX_TICKS = 100_000

logger = logging.getLogger("BattleDemo")


def build_parties(registry: SkillRegistry) -> tuple[list[Character], list[Character]]:
    heroes = [
        create_character(
            "Hero", 120, 35, 12, mp=60, speed=18,
            skills=registry.skills_for(["fireball", "meteor"]),
        ),
        create_character(
            "Cleric", 90, 20, 10, mp=80, speed=14,
            skills=registry.skills_for(["heal"]),
        ),
    ]
    enemies = [
        create_character(
            "Slime A", 80, 20, 8, mp=20, speed=12,
            skills=registry.skills_for(["bite", "regenerate"]),
        ),
        create_character(
            "Slime B", 80, 20, 8, mp=20, speed=11,
            skills=registry.skills_for(["bite", "regenerate"]),
        ),
    ]
    return heroes, enemies


def play_hero_turn(
    controller: BattleController,
    targeting: TargetingStateMachine,
    hero: Character,
) -> None:
    """Scripted stand-in for a human player."""
    living_enemies = [e for e in controller.enemies if e.is_alive]
    weakest = min(living_enemies, key=lambda e: e.hp)

    for skill in hero.skills:
        if not skill.can_use(hero):
            continue
        if skill.target_type == TargetType.SINGLE_ALLY:
            hurt = [h for h in controller.heroes if h.is_alive and h.hp_percent < 0.5]
            if not hurt:
                continue
            preferred = hurt[0]
        else:
            preferred = weakest

        if controller.handle_skill_use(hero, skill):
            # More than one sane target: go through selection
            targeting.start_targeting(skill, controller.heroes, controller.enemies, hero)
            result = targeting.select_target(preferred)
            if not result.success:
                targeting.cancel_targeting()
                continue
            controller.execute_targeted_skill(hero, skill, targeting.complete_targeting())
        return

    controller.execute_attack(hero, weakest)


def log_event(event: BattleEvent) -> None:
    if event.message:
        logger.info(event.message)


def main() -> int:
    """Run the battle demo."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    seed = int(sys.argv[1]) if len(sys.argv) > 1 else 7

    registry = SkillRegistry()
    registry.load(SKILL_DATA)

    heroes, enemies = build_parties(registry)
    controller = BattleController(heroes, enemies, rng=RNG(seed=seed))
    controller.on(log_event)
    targeting = TargetingStateMachine()

    for _ in range(MAX_TICKS):
        if controller.is_battle_over():
            break
        hero = controller.update(TICK)
        if hero is not None:
            play_hero_turn(controller, targeting, hero)

    for character in controller.heroes + controller.enemies:
        logger.info(f"{character.name}: HP {character.hp}/{character.max_hp}, MP {character.mp}/{character.max_mp}")

    return 0 if controller.is_victory() else 1


if __name__ == "__main__":
    sys.exit(main())
