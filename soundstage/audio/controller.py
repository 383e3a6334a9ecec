"""
Audio Controller - plays background music and sound effects.

A facade over the player handles that follows the user's audio settings
(muted, music on, sounds on) and the application lifecycle:
- Background music loops through a playlist shuffled once at startup
- Sound effects rotate through a fixed pool of players (polyphony)
- Muting, backgrounding or quitting the app silences everything
"""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import TYPE_CHECKING, Callable, Optional, Protocol

from soundstage.audio.cache import AudioCache
from soundstage.audio.config import AudioConfig
from soundstage.audio.errors import PlayerError
from soundstage.audio.player import AudioPlayer, ChannelPlayer, MusicPlayer, PlayerState, init_mixer
from soundstage.audio.sounds import SfxType, all_sfx_filenames, sound_type_to_filenames, sound_type_to_volume
from soundstage.audio.tracks import BackgroundTrack
from soundstage.core.events import AudioEvent, Event, EventBus, PlayerEvent
from soundstage.core.lifecycle import AppLifecycleState

if TYPE_CHECKING:
    from soundstage.core.observable import ValueNotifier


class AudioSettings(Protocol):
    """What the controller needs from a settings object."""
    muted: ValueNotifier[bool]
    music_on: ValueNotifier[bool]
    sounds_on: ValueNotifier[bool]


# (player_id, channel_index) -> player. channel_index is None for background music.
PlayerFactory = Callable[[str, Optional[int]], AudioPlayer]


class AudioController:
    """
    Plays background music and sound effects.

    Usage:
        audio = AudioController(polyphony=4)
        audio.attach_settings(settings)
        audio.attach_lifecycle(lifecycle_observer.notifier)
        await audio.initialize()

        audio.play_sfx(SfxType.BUTTON_TAP)

        # Once per frame, so finished tracks advance the playlist
        audio.update()
    """

    def __init__(
        self,
        polyphony: int | None = None,
        *,
        config: AudioConfig | None = None,
        cache: AudioCache | None = None,
        event_bus: EventBus | None = None,
        player_factory: PlayerFactory | None = None,
        rng: random.Random | None = None,
    ):
        """
        Args:
            polyphony: Number of sound effects that can play at once. With 1,
                a new effect always cuts off the previous one. Background
                music does not count towards this limit. Defaults to
                ``config.polyphony``.
            config: Asset paths, mixer settings and the track catalog
            cache: Sound cache shared with the effect players
            event_bus: Receives AudioEvent notifications when given
            player_factory: Builds player handles (defaults to pygame players)
            rng: Random source for the playlist shuffle and effect variants
        """
        self.config = config or AudioConfig()
        polyphony = self.config.polyphony if polyphony is None else polyphony
        if polyphony < 1:
            raise ValueError(f"polyphony must be at least 1, got {polyphony}")

        self.cache = cache or AudioCache()
        self.event_bus = event_bus
        self.logger = logging.getLogger(__name__)
        self._random = rng or random.Random()

        create = player_factory or self._create_player
        self._background_player = create("backgroundPlayer", None)
        self._sfx_players: list[AudioPlayer] = [
            create(f"sfxPlayer#{i}", i) for i in range(polyphony)
        ]
        self._current_sfx_player = 0

        tracks = list(self.config.tracks)
        self._random.shuffle(tracks)
        self._playlist: deque[BackgroundTrack] = deque(tracks)

        self._settings: AudioSettings | None = None
        self._lifecycle: ValueNotifier[AppLifecycleState] | None = None

        self._background_player.events.subscribe(
            PlayerEvent.COMPLETED, self._change_background_track, weak=False
        )

        # Background player state -> how to get music going again
        self._resume_actions: dict[PlayerState, Callable[[], None]] = {
            PlayerState.PAUSED: self._resume_paused,
            PlayerState.STOPPED: self._resume_stopped,
            PlayerState.PLAYING: self._resume_playing,
            PlayerState.COMPLETED: self._resume_completed,
        }
        self._lifecycle_actions: dict[AppLifecycleState, Callable[[], None]] = {
            AppLifecycleState.PAUSED: self._stop_all_sound,
            AppLifecycleState.DETACHED: self._stop_all_sound,
            AppLifecycleState.RESUMED: self._resume_if_audible,
            AppLifecycleState.INACTIVE: lambda: None,
        }

    def _create_player(self, player_id: str, channel_index: int | None) -> AudioPlayer:
        if channel_index is None:
            return MusicPlayer(player_id)
        return ChannelPlayer(player_id, channel_index, self.cache)

    # Introspection

    @property
    def background_player(self) -> AudioPlayer:
        return self._background_player

    @property
    def sfx_players(self) -> tuple[AudioPlayer, ...]:
        return tuple(self._sfx_players)

    @property
    def polyphony(self) -> int:
        return len(self._sfx_players)

    @property
    def current_sfx_index(self) -> int:
        """Index of the pool player the next effect will use."""
        return self._current_sfx_player

    @property
    def playlist(self) -> tuple[BackgroundTrack, ...]:
        """Background tracks in play order; the first one is current."""
        return tuple(self._playlist)

    @property
    def current_track(self) -> BackgroundTrack:
        return self._playlist[0]

    @property
    def settings(self) -> AudioSettings | None:
        return self._settings

    # Wiring

    def attach_lifecycle(self, notifier: ValueNotifier[AppLifecycleState]) -> None:
        """
        Follow application lifecycle changes: stop playback when the app
        goes into the background and resume when it comes back.
        """
        if self._lifecycle is not None:
            self._lifecycle.remove_listener(self._handle_app_lifecycle)

        notifier.add_listener(self._handle_app_lifecycle)
        self._lifecycle = notifier

    def attach_settings(self, settings: AudioSettings) -> None:
        """
        Follow changes to ``settings.muted``, ``settings.music_on`` and
        ``settings.sounds_on``.

        Attaching the settings object that is already attached does nothing.
        """
        if self._settings is settings:
            return

        self._detach_settings()
        self._settings = settings

        settings.muted.add_listener(self._muted_handler)
        settings.music_on.add_listener(self._music_on_handler)
        settings.sounds_on.add_listener(self._sounds_on_handler)

        if not settings.muted.value and settings.music_on.value:
            self._start_background_sound()

    def _detach_settings(self) -> None:
        old_settings = self._settings
        if old_settings is None:
            return
        old_settings.muted.remove_listener(self._muted_handler)
        old_settings.music_on.remove_listener(self._music_on_handler)
        old_settings.sounds_on.remove_listener(self._sounds_on_handler)
        self._settings = None

    def dispose(self) -> None:
        """
        Unsubscribe from settings and lifecycle, stop all sound and release
        every player. The controller must not be used (or disposed) again.
        """
        if self._lifecycle is not None:
            self._lifecycle.remove_listener(self._handle_app_lifecycle)
            self._lifecycle = None
        self._detach_settings()
        self._stop_all_sound()

        self._background_player.events.unsubscribe(
            PlayerEvent.COMPLETED, self._change_background_track
        )
        self._background_player.dispose()
        for player in self._sfx_players:
            player.dispose()

    async def initialize(self) -> None:
        """
        Start the mixer and preload every sound effect.

        Raises:
            PlayerError: If the mixer cannot be started
            AssetLoadError: If any sound effect fails to load
        """
        init_mixer(self.config.mixer, reserved=len(self._sfx_players))
        # Settings attached before the mixer was open could not start the music
        if self._background_player.state is PlayerState.STOPPED:
            self._resume_if_audible()

        self.logger.info("Preloading sound effects")
        await self.cache.load_all(
            self.config.sfx_asset(filename) for filename in all_sfx_filenames()
        )

    def update(self) -> None:
        """Poll every player; a finished background track advances the playlist."""
        self._background_player.update()
        for player in self._sfx_players:
            player.update()

    # Sound effects

    def play_sfx(self, sfx_type: SfxType) -> bool:
        """
        Play one sound effect of kind ``sfx_type``.

        Ignored while muted, while sounds are off, or before settings are
        attached.

        Returns:
            True if the effect was handed to a player
        """
        settings = self._settings
        if settings is None or settings.muted.value:
            self.logger.info(f"Ignoring playing sound ({sfx_type}) because audio is muted.")
            return False
        if not settings.sounds_on.value:
            self.logger.info(f"Ignoring playing sound ({sfx_type}) because sounds are turned off.")
            return False

        self.logger.info(f"Playing sound: {sfx_type}")
        filename = self._random.choice(sound_type_to_filenames(sfx_type))
        self.logger.info(f"- Chosen filename: {filename}")

        player = self._sfx_players[self._current_sfx_player]
        self._current_sfx_player = (self._current_sfx_player + 1) % len(self._sfx_players)
        try:
            player.play(self.config.sfx_asset(filename), volume=sound_type_to_volume(sfx_type))
        except PlayerError as e:
            self.logger.error(f"Failed to play sound {sfx_type}: {e}")
            return False

        self._publish(AudioEvent.SFX_PLAYED, kind=sfx_type, file=filename, player_id=player.player_id)
        return True

    # Background music

    def _start_background_sound(self) -> None:
        self.logger.info("Starting background sound")
        self._play_first_track()

    def _play_first_track(self) -> bool:
        track = self._playlist[0]
        self.logger.info(f"Playing {track} now.")
        try:
            self._background_player.play(self.config.bgm_asset(track))
        except PlayerError as e:
            self.logger.error(f"Failed to start {track}: {e}")
            return False
        self._publish(AudioEvent.BGM_STARTED, track=track)
        return True

    def _change_background_track(self, event: Event) -> None:
        self.logger.info("Last background track finished playing.")
        # Move the finished track to the end of the playlist
        self._playlist.rotate(-1)
        if self._play_first_track():
            self._publish(AudioEvent.BGM_CHANGED, track=self._playlist[0])

    def _resume_background_sound(self) -> None:
        self.logger.info("Resuming background sound")
        self._resume_actions[self._background_player.state]()

    def _resume_paused(self) -> None:
        try:
            self._background_player.resume()
        except PlayerError as e:
            self.logger.error(f"Resuming background sound failed, restarting track: {e}")
            self._play_first_track()
            return
        self._publish(AudioEvent.BGM_RESUMED, track=self._playlist[0])

    def _resume_stopped(self) -> None:
        self.logger.info(
            "Background sound is stopped, probably because it has not started "
            "yet (for example, the game was launched with sound off)."
        )
        self._play_first_track()

    def _resume_playing(self) -> None:
        self.logger.warning("Background sound is already playing. Nothing to do.")

    def _resume_completed(self) -> None:
        self.logger.warning(
            "Background sound is 'completed' outside of a track change. It should "
            "be either paused or looping through the playlist; restarting the track."
        )
        self._play_first_track()

    def _stop_background_sound(self) -> None:
        self.logger.info("Stopping background sound")
        self._pause_background_player()

    def _pause_background_player(self) -> None:
        # A track that ended since the last poll must rotate before pausing
        self._background_player.update()
        if self._background_player.state is PlayerState.PLAYING:
            self._background_player.pause()
            self._publish(AudioEvent.BGM_PAUSED, track=self._playlist[0])

    def _stop_all_sound(self) -> None:
        self._pause_background_player()
        for player in self._sfx_players:
            player.stop()

    # Listeners

    def _resume_if_audible(self) -> None:
        settings = self._settings
        if settings is not None and not settings.muted.value and settings.music_on.value:
            self._resume_background_sound()

    def _handle_app_lifecycle(self) -> None:
        self._lifecycle_actions[self._lifecycle.value]()

    def _muted_handler(self) -> None:
        if self._settings.muted.value:
            self._stop_all_sound()
        elif self._settings.music_on.value:
            self._resume_background_sound()

    def _music_on_handler(self) -> None:
        if self._settings.music_on.value:
            if not self._settings.muted.value:
                self._resume_background_sound()
        else:
            self._stop_background_sound()

    def _sounds_on_handler(self) -> None:
        if self._settings.sounds_on.value:
            return
        for player in self._sfx_players:
            if player.state is PlayerState.PLAYING:
                player.stop()

    def _publish(self, event_type: AudioEvent, **data) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, **data)
