import pygame
import pytest
from unittest.mock import MagicMock

from soundstage.audio.cache import AudioCache
from soundstage.audio.config import MixerSettings
from soundstage.audio.errors import PlayerError
from soundstage.audio.player import ChannelPlayer, MusicPlayer, PlayerState, init_mixer, quit_mixer
from soundstage.core.events import PlayerEvent

pytestmark = pytest.mark.usefixtures("mock_pygame")


def test_music_player_play(mock_pygame):
    player = MusicPlayer("bgm")
    player.play("bgm/Water_2.wav", volume=0.5)

    mock_pygame.music.load.assert_called_once_with("bgm/Water_2.wav")
    mock_pygame.music.set_volume.assert_called_once_with(0.5)
    mock_pygame.music.play.assert_called_once()
    assert player.state is PlayerState.PLAYING
    assert player.source == "bgm/Water_2.wav"


def test_music_player_play_without_mixer(mock_pygame):
    mock_pygame.get_init.return_value = None
    player = MusicPlayer("bgm")

    with pytest.raises(PlayerError):
        player.play("bgm/Water_2.wav")
    assert player.state is PlayerState.STOPPED


def test_music_player_load_error_becomes_player_error(mock_pygame):
    mock_pygame.music.load.side_effect = pygame.error("No file")
    player = MusicPlayer("bgm")

    with pytest.raises(PlayerError) as exc_info:
        player.play("bgm/missing.ogg")
    assert exc_info.value.player_id == "bgm"


def test_volume_is_clamped(mock_pygame):
    player = MusicPlayer("bgm")
    player.play("bgm/a.ogg", volume=3.0)
    mock_pygame.music.set_volume.assert_called_once_with(1.0)


def test_pause_and_resume(mock_pygame):
    player = MusicPlayer("bgm")
    player.play("bgm/a.ogg")

    player.pause()
    assert player.state is PlayerState.PAUSED
    mock_pygame.music.pause.assert_called_once()

    player.resume()
    assert player.state is PlayerState.PLAYING
    mock_pygame.music.unpause.assert_called_once()


def test_pause_when_stopped_is_noop(mock_pygame):
    player = MusicPlayer("bgm")
    player.pause()
    assert player.state is PlayerState.STOPPED
    mock_pygame.music.pause.assert_not_called()


def test_resume_fails_when_stream_lost(mock_pygame):
    player = MusicPlayer("bgm")
    player.play("bgm/a.ogg")
    player.pause()
    mock_pygame.music.get_busy.return_value = False

    with pytest.raises(PlayerError):
        player.resume()
    assert player.state is PlayerState.PAUSED


def test_resume_requires_paused_state():
    player = MusicPlayer("bgm")
    with pytest.raises(PlayerError):
        player.resume()


def test_update_reports_completion(mock_pygame):
    player = MusicPlayer("bgm")
    completed = []
    player.events.subscribe(PlayerEvent.COMPLETED, completed.append, weak=False)
    player.play("bgm/a.ogg")

    player.update()
    assert completed == []

    mock_pygame.music.get_busy.return_value = False
    player.update()

    assert player.state is PlayerState.COMPLETED
    assert len(completed) == 1
    assert completed[0]["player_id"] == "bgm"
    assert completed[0]["source"] == "bgm/a.ogg"

    # Completion fires once
    player.update()
    assert len(completed) == 1


def test_paused_player_is_not_completed(mock_pygame):
    player = MusicPlayer("bgm")
    player.play("bgm/a.ogg")
    player.pause()
    mock_pygame.music.get_busy.return_value = False

    player.update()
    assert player.state is PlayerState.PAUSED


def test_state_changes_are_published():
    player = MusicPlayer("bgm")
    changes = []
    player.events.subscribe(PlayerEvent.STATE_CHANGED, changes.append, weak=False)

    player.play("bgm/a.ogg")
    player.pause()
    player.stop()

    assert [(e["previous"], e["state"]) for e in changes] == [
        (PlayerState.STOPPED, PlayerState.PLAYING),
        (PlayerState.PLAYING, PlayerState.PAUSED),
        (PlayerState.PAUSED, PlayerState.STOPPED),
    ]


def test_disposed_player_rejects_play(mock_pygame):
    player = MusicPlayer("bgm")
    player.dispose()

    mock_pygame.music.unload.assert_called_once()
    with pytest.raises(PlayerError):
        player.play("bgm/a.ogg")


def test_channel_player_plays_cached_sound(mock_pygame):
    cache = AudioCache()
    sound = MagicMock()
    cache._sounds["sfx/k1.mp3"] = sound
    channel = mock_pygame.Channel.return_value

    player = ChannelPlayer("sfxPlayer#1", 1, cache)
    player.play("sfx/k1.mp3", volume=0.2)

    mock_pygame.Channel.assert_called_once_with(1)
    channel.play.assert_called_once_with(sound)
    channel.set_volume.assert_called_once_with(0.2)
    assert player.state is PlayerState.PLAYING


def test_channel_player_missing_sound():
    player = ChannelPlayer("sfxPlayer#0", 0, AudioCache())
    with pytest.raises(PlayerError):
        player.play("sfx/does-not-exist.mp3")
    assert player.state is PlayerState.STOPPED


def test_channel_player_completion(mock_pygame):
    cache = AudioCache()
    cache._sounds["sfx/k1.mp3"] = MagicMock()
    channel = mock_pygame.Channel.return_value
    channel.get_busy.return_value = True

    player = ChannelPlayer("sfxPlayer#0", 0, cache)
    player.play("sfx/k1.mp3")
    channel.get_busy.return_value = False
    player.update()

    assert player.state is PlayerState.COMPLETED


def test_channel_player_stop_before_play_is_safe(mock_pygame):
    player = ChannelPlayer("sfxPlayer#0", 0, AudioCache())
    player.stop()
    mock_pygame.Channel.assert_not_called()
    assert player.state is PlayerState.STOPPED


def test_init_mixer_opens_once(mock_pygame):
    mock_pygame.get_init.return_value = None
    init_mixer(MixerSettings(frequency=22050, buffer=1024))

    mock_pygame.init.assert_called_once_with(frequency=22050, size=-16, channels=2, buffer=1024)
    mock_pygame.set_num_channels.assert_called_once_with(8)


def test_init_mixer_skips_when_running(mock_pygame):
    mock_pygame.get_init.return_value = (44100, -16, 2)
    init_mixer(MixerSettings(), reserved=2)

    mock_pygame.init.assert_not_called()
    mock_pygame.set_reserved.assert_called_once_with(2)


def test_init_mixer_failure(mock_pygame):
    mock_pygame.get_init.return_value = None
    mock_pygame.init.side_effect = pygame.error("No audio device")

    with pytest.raises(PlayerError):
        init_mixer(MixerSettings())


def test_quit_mixer(mock_pygame):
    quit_mixer()
    mock_pygame.quit.assert_called_once()
