"""
Application lifecycle state.

Mirrors the four foreground/background states a host application goes
through and derives them from pygame window events.
"""

from __future__ import annotations

from enum import Enum

import pygame

from soundstage.core.observable import ValueNotifier


class AppLifecycleState(Enum):
    """Where the application currently sits in its lifecycle."""
    RESUMED = "resumed"      # Visible and has input focus
    INACTIVE = "inactive"    # Visible but lost focus
    PAUSED = "paused"        # Minimized or hidden
    DETACHED = "detached"    # Shutting down


class LifecycleObserver:
    """
    Feeds pygame window events into a lifecycle ValueNotifier.

    Usage:
        observer = LifecycleObserver()
        audio.attach_lifecycle(observer.notifier)

        for event in pygame.event.get():
            observer.process_event(event)
    """

    def __init__(self, notifier: ValueNotifier[AppLifecycleState] | None = None):
        self.notifier = notifier or ValueNotifier(AppLifecycleState.RESUMED)
        self._event_map: dict[int, AppLifecycleState] = {
            pygame.WINDOWFOCUSGAINED: AppLifecycleState.RESUMED,
            pygame.WINDOWRESTORED: AppLifecycleState.RESUMED,
            pygame.WINDOWSHOWN: AppLifecycleState.RESUMED,
            pygame.WINDOWFOCUSLOST: AppLifecycleState.INACTIVE,
            pygame.WINDOWMINIMIZED: AppLifecycleState.PAUSED,
            pygame.WINDOWHIDDEN: AppLifecycleState.PAUSED,
            pygame.QUIT: AppLifecycleState.DETACHED,
        }

    @property
    def state(self) -> AppLifecycleState:
        return self.notifier.value

    def process_event(self, event: pygame.event.Event) -> bool:
        """
        Update the lifecycle state from a pygame event.

        Returns:
            True if the event was a lifecycle event
        """
        state = self._event_map.get(event.type)
        if state is None:
            return False
        self.notifier.value = state
        return True
