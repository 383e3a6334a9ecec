"""
Typed event bus for decoupled communication.

Event types are Enum members, so subscribers never match on strings.

Usage:
    bus = EventBus()
    bus.subscribe(AudioEvent.SFX_PLAYED, on_sfx_played)
    bus.publish(AudioEvent.SFX_PLAYED, kind=SfxType.BUTTON_TAP, file="click1.mp3")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref


class AudioEvent(Enum):
    """Events published by the audio controller."""
    BGM_STARTED = auto()
    BGM_CHANGED = auto()
    BGM_PAUSED = auto()
    BGM_RESUMED = auto()
    SFX_PLAYED = auto()


class PlayerEvent(Enum):
    """Events published by a single player handle."""
    STATE_CHANGED = auto()
    COMPLETED = auto()


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
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


class EventBus:
    """
    Publish/subscribe dispatcher.

    Features:
    - Priority ordering (higher first)
    - Optional weak references, dropped once the handler is collected
    - Event consumption stops propagation
    - Events published from inside a handler are queued, not nested
    """

    def __init__(self):
        # event type -> list of (priority, handler or weak ref)
        self._handlers: dict[Enum, list[tuple[int, Any]]] = {}
        self._event_queue: list[Event] = []
        self._is_publishing = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first (default 0)
            weak: If True, hold a weak reference to the handler
        """
        if weak:
            handler_ref = WeakMethod(handler) if hasattr(handler, "__self__") else ref(handler)
        else:
            handler_ref = handler

        handlers = self._handlers.setdefault(event_type, [])
        insert_idx = len(handlers)
        for i, (p, _) in enumerate(handlers):
            if priority > p:
                insert_idx = i
                break
        handlers.insert(insert_idx, (priority, handler_ref))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove every registration of ``handler`` for ``event_type``."""
        if event_type not in self._handlers:
            return
        self._handlers[event_type] = [
            (p, h) for p, h in self._handlers[event_type]
            if self._get_handler(h) != handler
        ]

    def subscriber_count(self, event_type: Enum) -> int:
        """Number of live handlers for ``event_type``."""
        return sum(
            1 for _, h in self._handlers.get(event_type, [])
            if self._get_handler(h) is not None
        )

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)
        if self._is_publishing:
            self._event_queue.append(event)
        else:
            self._dispatch(event)
        return event

    def clear(self, event_type: Enum | None = None) -> None:
        """Clear handlers for one event type, or all of them."""
        if event_type is None:
            self._handlers.clear()
        else:
            self._handlers.pop(event_type, None)

    def _dispatch(self, event: Event) -> None:
        handlers = self._handlers.get(event.type)
        if not handlers:
            return

        self._is_publishing = True
        dead = []
        try:
            for _, handler_ref in list(handlers):
                handler = self._get_handler(handler_ref)
                if handler is None:
                    dead.append(handler_ref)
                    continue

                try:
                    handler(event)
                except Exception:
                    # One broken listener must not starve the others
                    logging.exception(f"Error in event handler for {event.type}")

                if event.consumed:
                    break
        finally:
            if dead:
                self._handlers[event.type] = [
                    entry for entry in self._handlers.get(event.type, [])
                    if entry[1] not in dead
                ]
            self._is_publishing = False

        while self._event_queue:
            self._dispatch(self._event_queue.pop(0))

    def _get_handler(self, handler_ref: Any) -> EventHandler | None:
        if isinstance(handler_ref, (ref, WeakMethod)):
            return handler_ref()
        return handler_ref
