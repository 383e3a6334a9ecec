import random

import pygame
import pytest
from unittest.mock import patch

from soundstage.audio.config import AudioConfig
from soundstage.audio.player import AudioPlayer
from soundstage.audio.tracks import BackgroundTrack


@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame.mixer so no test opens an audio device.
    """
    with patch('pygame.mixer') as mixer:
        mixer.get_num_channels.return_value = 8
        mixer.music.get_busy.return_value = True
        yield mixer


class FakePlayer(AudioPlayer):
    """Player handle that records engine calls instead of making sound."""

    def __init__(self, player_id: str):
        super().__init__(player_id)
        self.calls: list[tuple] = []
        self.busy = False
        self.fail_resume = False
        self.fail_play = False

    def _start(self, path: str, volume: float) -> None:
        if self.fail_play:
            raise pygame.error(f"cannot open {path}")
        self.calls.append(("play", path, volume))
        self.busy = True

    def _pause(self) -> None:
        self.calls.append(("pause",))

    def _resume(self) -> None:
        if self.fail_resume:
            raise pygame.error("Unexpected error")
        self.calls.append(("resume",))

    def _stop(self) -> None:
        self.calls.append(("stop",))
        self.busy = False

    def _is_busy(self) -> bool:
        return self.busy

    def _release(self) -> None:
        self.calls.append(("release",))

    def finish(self) -> None:
        """Simulate the sound reaching its end."""
        self.busy = False
        self.update()

    @property
    def played(self) -> list[str]:
        return [call[1] for call in self.calls if call[0] == "play"]


class NoShuffleRandom(random.Random):
    """Keeps catalog order so playlist tests can name the tracks."""

    def shuffle(self, x) -> None:
        pass


@pytest.fixture
def tracks():
    return (
        BackgroundTrack(filename="A.ogg", name="a"),
        BackgroundTrack(filename="B.ogg", name="b"),
        BackgroundTrack(filename="C.ogg", name="c"),
    )


@pytest.fixture
def audio_config(tracks):
    return AudioConfig(sfx_path="sfx/", bgm_path="bgm/", tracks=tracks)


@pytest.fixture
def players():
    """Every FakePlayer created by the controller fixture, by player id."""
    return {}


@pytest.fixture
def make_controller(audio_config, players):
    from soundstage.audio.controller import AudioController

    def factory(player_id, channel_index):
        player = FakePlayer(player_id)
        players[player_id] = player
        return player

    def make(polyphony=2, **kwargs):
        kwargs.setdefault("config", audio_config)
        kwargs.setdefault("rng", NoShuffleRandom(0))
        return AudioController(polyphony, player_factory=factory, **kwargs)

    return make


@pytest.fixture
def settings():
    from soundstage.settings import SettingsController
    return SettingsController()


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from soundstage.core.events import EventBus
    return EventBus()
