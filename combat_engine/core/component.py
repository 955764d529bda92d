"""
Component base class for data-only components.

Components are pure data containers. Combat logic lives in the
battle modules that operate on them. This separation makes:
- Validation automatic
- Snapshots trivial
- Testing easier

Usage:
    class Health(Component):
        current: int
        max_hp: int

    class Position(Component):
        x: float = 0.0
        y: float = 0.0
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all components.

    Components are data-only containers using Pydantic for:
    - Automatic validation
    - Snapshot copies
    - Type hints
    - Default values

    Small clamping helpers are allowed; rules that involve more than
    one component belong in the battle modules.
    """

    model_config = ConfigDict(
        # Allow arbitrary types (for references)
        arbitrary_types_allowed=True,
        # Validate on assignment
        validate_assignment=True,
        # Unknown fields are a data error
        extra='forbid',
    )

    # Class variable: component type name (used in debug output)
    _type_name: ClassVar[str] = ""

    @classmethod
    def get_type_name(cls) -> str:
        """Get the component type name."""
        return cls._type_name or cls.__name__

    def clone(self) -> Component:
        """Create a deep copy of this component."""
        return self.model_copy(deep=True)


# Registry of component types, looked up by type name
_component_registry: dict[str, type[Component]] = {}


def register_component(cls: type[Component]) -> type[Component]:
    """
    Decorator to register a component type.

    Usage:
        @register_component
        class Mana(Component):
            current: int
            max_mp: int
    """
    type_name = cls.get_type_name()
    _component_registry[type_name] = cls
    return cls


def get_component_type(type_name: str) -> type[Component] | None:
    """Get component class by type name."""
    return _component_registry.get(type_name)


def get_all_component_types() -> dict[str, type[Component]]:
    """Get all registered component types."""
    return _component_registry.copy()
