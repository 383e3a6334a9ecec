"""
Audio configuration.

Expected JSON format:
{
    "sfx_path": "assets/audio/sfx/",
    "bgm_path": "assets/audio/background_sound/",
    "polyphony": 2,
    "mixer": {"frequency": 44100, "buffer": 512},
    "tracks": [
        {"filename": "Water_2.wav", "name": "flowOfWater"},
        {"filename": "Theme.ogg", "name": "theme", "artist": "Someone"}
    ]
}

Every key is optional; missing keys fall back to the defaults below.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from soundstage.audio.errors import AudioConfigError
from soundstage.audio.tracks import BACKGROUND_TRACKS, BackgroundTrack


class MixerSettings(BaseModel):
    """Arguments for pygame.mixer.init()."""
    frequency: int = 44100
    size: int = -16
    channels: int = Field(default=2, ge=1, le=2)
    buffer: int = Field(default=512, gt=0)
    # Channels reserved for sound effects; must cover the polyphony
    num_channels: int = Field(default=8, ge=1)


class AudioConfig(BaseModel):
    """Complete audio configuration."""
    sfx_path: str = "assets/audio/sfx/"
    bgm_path: str = "assets/audio/background_sound/"
    polyphony: int = Field(default=2, ge=1)
    mixer: MixerSettings = Field(default_factory=MixerSettings)
    tracks: tuple[BackgroundTrack, ...] = Field(default=BACKGROUND_TRACKS, min_length=1)

    @field_validator("tracks")
    @classmethod
    def _check_unique_tracks(cls, tracks: tuple[BackgroundTrack, ...]) -> tuple[BackgroundTrack, ...]:
        seen: set[str] = set()
        for track in tracks:
            if track.filename in seen:
                raise ValueError(f"duplicate track: {track.filename}")
            seen.add(track.filename)
        return tracks

    def sfx_asset(self, filename: str) -> str:
        return self.sfx_path + filename

    def bgm_asset(self, track: BackgroundTrack) -> str:
        return self.bgm_path + track.filename


def load_config(path: str | Path) -> AudioConfig:
    """
    Load audio configuration from a JSON file.

    A missing file yields the default configuration.

    Raises:
        AudioConfigError: If the file exists but is not a valid configuration
    """
    config_file = Path(path)
    if not config_file.exists():
        logging.info(f"No audio config at {config_file}, using defaults.")
        return AudioConfig()

    try:
        return AudioConfig.model_validate_json(config_file.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise AudioConfigError(f"Invalid audio config {config_file}: {e}") from e


def save_config(config: AudioConfig, path: str | Path) -> None:
    """Write ``config`` to ``path`` as indented JSON."""
    Path(path).write_text(config.model_dump_json(indent=2), encoding="utf-8")
