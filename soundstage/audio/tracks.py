"""
Background track catalog.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class BackgroundTrack(BaseModel):
    """
    One background music track.

    Tracks are identified by filename; two records with the same filename
    are the same track.

    Attributes:
        filename: File name relative to the background music folder
        name: Human readable title
        artist: Optional artist credit
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    name: str
    artist: Optional[str] = None

    @field_validator("filename")
    @classmethod
    def _check_filename(cls, value: str) -> str:
        if not value:
            raise ValueError("filename must not be empty")
        if not value.isascii() or any(ch.isspace() for ch in value):
            raise ValueError(f"filename must be whitespace-free ASCII: {value!r}")
        return value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BackgroundTrack):
            return NotImplemented
        return self.filename == other.filename

    def __hash__(self) -> int:
        return hash(self.filename)

    def __str__(self) -> str:
        return f"BackgroundTrack<{self.filename}>"


# Filenames with whitespace break some mixer backends, so none are used here.
BACKGROUND_TRACKS: tuple[BackgroundTrack, ...] = (
    BackgroundTrack(filename="Water_2.wav", name="flowOfWater"),
    BackgroundTrack(filename="Rain_Loop.ogg", name="gentleRain"),
    BackgroundTrack(filename="Forest_Birds.ogg", name="morningForest"),
)
