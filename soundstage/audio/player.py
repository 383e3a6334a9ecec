"""
Player handles over pygame.mixer.

A player handle wraps one output of the mixer and tracks its own state:
- MusicPlayer streams from pygame.mixer.music (background music)
- ChannelPlayer plays cached Sounds on one reserved pygame.mixer.Channel

pygame gives no callback when a sound ends, so handles are polled with
update() once per frame. A handle that stops on its own while playing moves
to COMPLETED and publishes PlayerEvent.COMPLETED on its event bus.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import TYPE_CHECKING

import pygame

from soundstage.audio.errors import AssetLoadError, PlayerError
from soundstage.core.events import EventBus, PlayerEvent

if TYPE_CHECKING:
    from soundstage.audio.cache import AudioCache
    from soundstage.audio.config import MixerSettings


class PlayerState(Enum):
    """Observable state of a player handle."""
    STOPPED = auto()
    PLAYING = auto()
    PAUSED = auto()
    COMPLETED = auto()


def init_mixer(settings: MixerSettings, reserved: int = 0) -> None:
    """
    Initialize pygame.mixer if it is not running yet.

    Args:
        settings: Mixer parameters
        reserved: Channels kept away from pygame's automatic allocation
    """
    if not pygame.mixer.get_init():
        _open_mixer(settings)
    if reserved:
        if pygame.mixer.get_num_channels() < reserved:
            pygame.mixer.set_num_channels(reserved)
        pygame.mixer.set_reserved(reserved)


def _open_mixer(settings: MixerSettings) -> None:
    try:
        pygame.mixer.init(
            frequency=settings.frequency,
            size=settings.size,
            channels=settings.channels,
            buffer=settings.buffer,
        )
        pygame.mixer.set_num_channels(settings.num_channels)
        logging.info("Audio mixer initialized.")
    except pygame.error as e:
        raise PlayerError("mixer", f"failed to initialize: {e}") from e


def quit_mixer() -> None:
    pygame.mixer.quit()


class AudioPlayer(ABC):
    """
    Base player handle.

    Subclasses implement the engine calls; this class owns the state machine
    and event publishing.
    """

    def __init__(self, player_id: str):
        self.player_id = player_id
        self.events = EventBus()
        self._state = PlayerState.STOPPED
        self._source: str | None = None
        self._disposed = False

    @property
    def state(self) -> PlayerState:
        return self._state

    @property
    def source(self) -> str | None:
        """Path of the last asset handed to play()."""
        return self._source

    def play(self, path: str, volume: float = 1.0) -> None:
        """
        Start playing ``path`` from the beginning, replacing the current sound.

        Raises:
            PlayerError: If the engine refuses the asset
        """
        self._check_alive()
        volume = max(0.0, min(1.0, volume))
        try:
            self._start(path, volume)
        except (pygame.error, AssetLoadError) as e:
            self._set_state(PlayerState.STOPPED)
            raise PlayerError(self.player_id, f"cannot play '{path}': {e}") from e
        self._source = path
        self._set_state(PlayerState.PLAYING)

    def pause(self) -> None:
        if self._state is not PlayerState.PLAYING:
            return
        self._pause()
        self._set_state(PlayerState.PAUSED)

    def resume(self) -> None:
        """
        Continue a paused sound.

        Raises:
            PlayerError: If the handle is not paused or the engine lost the stream
        """
        self._check_alive()
        if self._state is not PlayerState.PAUSED:
            raise PlayerError(self.player_id, f"cannot resume from {self._state.name}")
        try:
            self._resume()
        except pygame.error as e:
            raise PlayerError(self.player_id, f"resume failed: {e}") from e
        self._set_state(PlayerState.PLAYING)

    def stop(self) -> None:
        if self._disposed:
            return
        self._stop()
        self._set_state(PlayerState.STOPPED)

    def dispose(self) -> None:
        """Stop and release the handle. It cannot be used afterwards."""
        self.stop()
        self._release()
        self.events.clear()
        self._disposed = True

    def update(self) -> None:
        """Poll the engine and report natural completion."""
        if self._disposed or self._state is not PlayerState.PLAYING:
            return
        if not self._is_busy():
            self._set_state(PlayerState.COMPLETED)
            self.events.publish(PlayerEvent.COMPLETED, player_id=self.player_id, source=self._source)

    def _set_state(self, state: PlayerState) -> None:
        if state is self._state:
            return
        previous, self._state = self._state, state
        self.events.publish(
            PlayerEvent.STATE_CHANGED,
            player_id=self.player_id,
            previous=previous,
            state=state,
        )

    def _check_alive(self) -> None:
        if self._disposed:
            raise PlayerError(self.player_id, "player has been disposed")

    # Engine hooks

    @abstractmethod
    def _start(self, path: str, volume: float) -> None: ...

    @abstractmethod
    def _pause(self) -> None: ...

    @abstractmethod
    def _resume(self) -> None: ...

    @abstractmethod
    def _stop(self) -> None: ...

    @abstractmethod
    def _is_busy(self) -> bool: ...

    def _release(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.player_id!r}, {self._state.name})"


class MusicPlayer(AudioPlayer):
    """
    Streams one track through pygame.mixer.music.

    pygame has a single music stream, so only one MusicPlayer should be
    active at a time.
    """

    def _start(self, path: str, volume: float) -> None:
        if not pygame.mixer.get_init():
            raise pygame.error("mixer not initialized")
        pygame.mixer.music.load(path)
        pygame.mixer.music.set_volume(volume)
        pygame.mixer.music.play()
        logging.info(f"Playing BGM: {path}")

    def _pause(self) -> None:
        pygame.mixer.music.pause()

    def _resume(self) -> None:
        if not pygame.mixer.get_init():
            raise pygame.error("mixer not initialized")
        pygame.mixer.music.unpause()
        # A re-initialized mixer drops the loaded stream without raising
        if not pygame.mixer.music.get_busy():
            raise pygame.error("music stream was lost while paused")

    def _stop(self) -> None:
        if pygame.mixer.get_init():
            pygame.mixer.music.stop()

    def _is_busy(self) -> bool:
        return bool(pygame.mixer.get_init() and pygame.mixer.music.get_busy())

    def _release(self) -> None:
        if pygame.mixer.get_init():
            pygame.mixer.music.unload()


class ChannelPlayer(AudioPlayer):
    """
    Plays cached Sounds on a fixed mixer channel.

    Starting a new sound interrupts whatever the channel was playing.
    """

    def __init__(self, player_id: str, channel_index: int, cache: AudioCache):
        super().__init__(player_id)
        self.channel_index = channel_index
        self._cache = cache
        self._channel: pygame.mixer.Channel | None = None

    @property
    def channel(self) -> pygame.mixer.Channel:
        # Channels can only be created once the mixer is running
        if self._channel is None:
            self._channel = pygame.mixer.Channel(self.channel_index)
        return self._channel

    def _start(self, path: str, volume: float) -> None:
        sound = self._cache.get(path)
        channel = self.channel
        channel.play(sound)
        channel.set_volume(volume)

    def _pause(self) -> None:
        self.channel.pause()

    def _resume(self) -> None:
        self.channel.unpause()

    def _stop(self) -> None:
        if self._channel is not None:
            self._channel.stop()

    def _is_busy(self) -> bool:
        return self._channel is not None and bool(self._channel.get_busy())

    def _release(self) -> None:
        self._channel = None
