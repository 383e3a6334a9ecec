"""
Core module.

Exports:
- EventBus, Event, AudioEvent, PlayerEvent: Event system
- ValueNotifier: Observable single value
- AppLifecycleState, LifecycleObserver: Application lifecycle
"""

from soundstage.core.events import EventBus, Event, AudioEvent, PlayerEvent
from soundstage.core.observable import ValueNotifier
from soundstage.core.lifecycle import AppLifecycleState, LifecycleObserver

__all__ = [
    # Events
    "EventBus",
    "Event",
    "AudioEvent",
    "PlayerEvent",
    # Observables
    "ValueNotifier",
    # Lifecycle
    "AppLifecycleState",
    "LifecycleObserver",
]
