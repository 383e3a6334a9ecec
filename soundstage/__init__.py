"""
soundstage

Background music and sound effects for pygame games, driven by the player's
audio settings and the application lifecycle.

Quick Start:
    from soundstage import AudioController, SettingsController, LifecycleObserver, SfxType

    settings = SettingsController()
    lifecycle = LifecycleObserver()

    audio = AudioController(polyphony=2)
    audio.attach_settings(settings)
    audio.attach_lifecycle(lifecycle.notifier)
    asyncio.run(audio.initialize())

    audio.play_sfx(SfxType.BUTTON_TAP)
"""

__version__ = "0.1.0"

from soundstage.audio import (
    AudioController,
    AudioConfig,
    SfxType,
    BackgroundTrack,
    PlayerState,
    AudioError,
    AssetLoadError,
    PlayerError,
)
from soundstage.core import (
    AppLifecycleState,
    LifecycleObserver,
    ValueNotifier,
    EventBus,
    AudioEvent,
)
from soundstage.settings import SettingsController

__all__ = [
    # Audio
    "AudioController",
    "AudioConfig",
    "SfxType",
    "BackgroundTrack",
    "PlayerState",
    # Errors
    "AudioError",
    "AssetLoadError",
    "PlayerError",
    # Core
    "AppLifecycleState",
    "LifecycleObserver",
    "ValueNotifier",
    "EventBus",
    "AudioEvent",
    # Settings
    "SettingsController",
]
