"""
Skill registry - id -> Skill catalog.

The registry does not read files. A loader hands it parsed mappings in
the catalog format; every entry is validated against SKILL_SCHEMA and
invalid entries are logged and skipped.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from combat_engine.resources.database import Database
from combat_framework.battle.skills import EffectType, Skill, TargetType

logger = logging.getLogger(__name__)

SKILL_CATEGORY = "skills"

SKILL_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["id", "name", "mpCost", "targetType", "effects"],
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "name": {"type": "string"},
        "description": {"type": "string"},
        "mpCost": {"type": "integer", "minimum": 0},
        "targetType": {"enum": [t.value for t in TargetType]},
        "effects": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["type", "value"],
                "properties": {
                    "type": {"enum": [t.value for t in EffectType]},
                    "value": {"type": "integer"},
                    "duration": {"type": "integer", "minimum": 0},
                },
            },
        },
        "category": {
            "enum": ["physical", "magic", "poison", "healing", "buff", "debuff"],
        },
        "rarity": {
            "enum": ["common", "uncommon", "rare", "epic", "legendary"],
        },
    },
}


class SkillRegistry:
    """
    Central skill catalog.

    Usage:
        registry = SkillRegistry()
        registry.load(parsed_json["skills"].values())
        fireball = registry.get_skill("fireball")
    """

    def __init__(self, database: Optional[Database] = None):
        self._database = database or Database()
        self._database.register_schema(SKILL_CATEGORY, SKILL_SCHEMA)
        self._skills: dict[str, Skill] = {}

    def load(self, entries: Iterable[Mapping[str, Any]]) -> int:
        """
        Validate entries and build Skill objects from them.

        Returns:
            Number of skills now registered from this batch
        """
        loaded = self._database.load_entries(SKILL_CATEGORY, entries)
        for data in self._database.entries(SKILL_CATEGORY):
            self._skills[data["id"]] = Skill.from_dict(data)
        return loaded

    def register(self, skill: Skill) -> None:
        """Register an already-built skill."""
        self._skills[skill.id] = skill

    def get_skill(self, skill_id: str) -> Optional[Skill]:
        return self._skills.get(skill_id)

    def has_skill(self, skill_id: str) -> bool:
        return skill_id in self._skills

    def all_skills(self) -> list[Skill]:
        return list(self._skills.values())

    def skills_by_category(self, category: str) -> list[Skill]:
        return [s for s in self._skills.values() if s.category == category]

    def skills_by_rarity(self, rarity: str) -> list[Skill]:
        return [s for s in self._skills.values() if s.rarity == rarity]

    def skills_for(self, skill_ids: Iterable[str]) -> list[Skill]:
        """Resolve a list of ids, dropping unknown ones."""
        skills = []
        for skill_id in skill_ids:
            skill = self._skills.get(skill_id)
            if skill is None:
                logger.warning(f"Unknown skill id: {skill_id}")
                continue
            skills.append(skill)
        return skills

    def __len__(self) -> int:
        return len(self._skills)

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._skills
