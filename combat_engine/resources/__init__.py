"""
Static data resources.
"""

from combat_engine.resources.database import Database

__all__ = ["Database"]
