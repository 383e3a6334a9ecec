"""
Audio playback.

Background music playlist, pooled sound effects and the pygame player
handles underneath them.
"""

from soundstage.audio.errors import AudioError, AssetLoadError, AudioConfigError, PlayerError
from soundstage.audio.config import AudioConfig, MixerSettings, load_config, save_config
from soundstage.audio.tracks import BackgroundTrack, BACKGROUND_TRACKS
from soundstage.audio.sounds import SfxType, sound_type_to_filenames, sound_type_to_volume
from soundstage.audio.cache import AudioCache
from soundstage.audio.player import (
    AudioPlayer,
    ChannelPlayer,
    MusicPlayer,
    PlayerState,
    init_mixer,
    quit_mixer,
)
from soundstage.audio.controller import AudioController

__all__ = [
    "AudioController",
    "AudioConfig",
    "MixerSettings",
    "load_config",
    "save_config",
    "BackgroundTrack",
    "BACKGROUND_TRACKS",
    "SfxType",
    "sound_type_to_filenames",
    "sound_type_to_volume",
    "AudioCache",
    "AudioPlayer",
    "ChannelPlayer",
    "MusicPlayer",
    "PlayerState",
    "init_mixer",
    "quit_mixer",
    "AudioError",
    "AssetLoadError",
    "AudioConfigError",
    "PlayerError",
]
