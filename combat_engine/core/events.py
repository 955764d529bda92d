"""
Typed event bus for decoupled communication.

Uses Enums for event types to prevent magic strings. Handlers for the
same priority are called in registration order, which is the delivery
guarantee the battle controller relies on.

Usage:
    # Define events
    class BattleEventType(Enum):
        DAMAGE = "damage"
        HEAL = "heal"

    # Subscribe
    event_bus.subscribe(BattleEventType.DAMAGE, on_damage)

    # Publish
    event_bus.publish(BattleEventType.DAMAGE, damage=10, target=slime)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Dictionary of event-specific data
        consumed: Whether the event has been handled
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Mark event as consumed (stops propagation)."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        """Get event data by key."""
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Get event data by key (dict-style)."""
        return self.data[key]


# Type alias for event handlers
EventHandler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for publish/subscribe messaging.

    Features:
    - Typed events (Enum-based)
    - Priority ordering, registration order within a priority
    - Weak references (auto-cleanup when handlers are deleted)
    - One-shot handlers
    - Event consumption (stops propagation, except for broadcasts)
    - Handler errors are logged, never propagated to the publisher
    """

    def __init__(self):
        # Map of event type -> list of (priority, handler, one_shot)
        self._handlers: dict[Enum, list[tuple[int, Any, bool]]] = {}
        # Queue for events published during handling, with their stoppable flag
        self._event_queue: list[tuple[Event, bool]] = []
        self._is_publishing = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first (default 0)
            one_shot: If True, handler is removed after first call
            weak: If True, use weak reference (handler auto-removed if deleted)
        """
        if event_type not in self._handlers:
            self._handlers[event_type] = []

        # Create weak reference if requested
        if weak:
            if hasattr(handler, '__self__'):
                # Method - use WeakMethod
                handler_ref = WeakMethod(handler)
            else:
                # Function - use regular ref
                handler_ref = ref(handler)
        else:
            handler_ref = handler

        # Insert sorted by priority (highest first), after equal priorities
        handlers = self._handlers[event_type]
        entry = (priority, handler_ref, one_shot)

        insert_idx = len(handlers)
        for i, (p, _, _) in enumerate(handlers):
            if priority > p:
                insert_idx = i
                break

        handlers.insert(insert_idx, entry)

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """
        Unsubscribe from an event type.

        Args:
            event_type: The event type
            handler: The handler to remove
        """
        if event_type not in self._handlers:
            return

        handlers = self._handlers[event_type]
        self._handlers[event_type] = [
            (p, h, o) for p, h, o in handlers
            if self._get_handler(h) != handler
        ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Args:
            event_type: The event type
            **data: Event data as keyword arguments

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)
        self.publish_event(event)
        return event

    def publish_event(self, event: Event, stoppable: bool = True) -> None:
        """
        Publish a pre-created event.

        Args:
            event: The event to publish
            stoppable: If False, every handler is called even after one
                       consumes the event (broadcast)
        """
        if self._is_publishing:
            self._event_queue.append((event, stoppable))
        else:
            self._dispatch(event, stoppable)

    def handler_count(self, event_type: Enum) -> int:
        """Number of handlers registered for an event type."""
        return len(self._handlers.get(event_type, []))

    def clear(self, event_type: Enum | None = None) -> None:
        """
        Clear handlers.

        Args:
            event_type: If specified, only clear handlers for this type.
                       If None, clear all handlers.
        """
        if event_type is None:
            self._handlers.clear()
        elif event_type in self._handlers:
            del self._handlers[event_type]

    def _dispatch(self, event: Event, stoppable: bool = True) -> None:
        """Dispatch event to handlers."""
        if event.type not in self._handlers:
            self._drain_queue()
            return

        self._is_publishing = True
        # Iterate over a snapshot so handlers may unsubscribe safely
        handlers = list(self._handlers[event.type])
        to_remove = []

        try:
            for entry in handlers:
                priority, handler_ref, one_shot = entry
                handler = self._get_handler(handler_ref)

                if handler is None:
                    # Weak reference was garbage collected
                    to_remove.append(entry)
                    continue

                try:
                    handler(event)
                except Exception:
                    logger.exception("Error in event handler for %s", event.type)

                if one_shot:
                    to_remove.append(entry)

                if stoppable and event.consumed:
                    break
        finally:
            self._is_publishing = False

        if to_remove:
            live = self._handlers.get(event.type, [])
            self._handlers[event.type] = [e for e in live if e not in to_remove]

        self._drain_queue()

    def _drain_queue(self) -> None:
        """Deliver events that were published while dispatching."""
        while self._event_queue and not self._is_publishing:
            queued, stoppable = self._event_queue.pop(0)
            self._dispatch(queued, stoppable)

    def _get_handler(self, handler_ref: Any) -> EventHandler | None:
        """Resolve handler from reference."""
        if isinstance(handler_ref, (ref, WeakMethod)):
            return handler_ref()

        # Strong reference
        return handler_ref
