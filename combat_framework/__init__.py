"""
Combat Framework module.

Provides the turn-based battle core built on top of the engine:
- Components (data-only, Pydantic models)
- Battle (actors, damage, turn scheduling, skills, enemy AI,
  targeting, battle controller)
"""
