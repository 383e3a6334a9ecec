"""
Observable single values.

A ValueNotifier holds one value and calls its listeners whenever the value
changes. Settings flags and the application lifecycle state are exposed this
way so that the audio controller can subscribe without owning them.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Listener = Callable[[], None]


class ValueNotifier(Generic[T]):
    """
    Holds a value and notifies listeners when it changes.

    Listeners take no arguments; they read ``.value`` themselves. Setting the
    value to something equal to the current one does not notify.

    Usage:
        muted = ValueNotifier(False)
        muted.add_listener(on_muted_changed)
        muted.value = True   # on_muted_changed() runs
    """

    def __init__(self, value: T):
        self._value = value
        self._listeners: list[Listener] = []

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        if new_value == self._value:
            return
        self._value = new_value
        self.notify_listeners()

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Remove one registration of ``listener``; unknown listeners are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def notify_listeners(self) -> None:
        # Iterate a copy: listeners may detach themselves while being notified
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logging.exception(f"Error in listener for {self!r}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"
