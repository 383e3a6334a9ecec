"""
Sound effect catalog.

Each SfxType maps to one or more candidate files (one is picked at random
per play so repeated effects do not sound mechanical) and a fixed volume.
Filenames must not contain whitespace.
"""

from __future__ import annotations

from enum import Enum, auto


class SfxType(Enum):
    """Kinds of sound effects the game can trigger."""
    HUHSH = auto()
    WSSH = auto()
    BUTTON_TAP = auto()
    CONGRATS = auto()
    ERASE = auto()
    SWISH_SWISH = auto()


SFX_FILENAMES: dict[SfxType, tuple[str, ...]] = {
    SfxType.HUHSH: ("hash1.mp3", "hash2.mp3", "hash3.mp3"),
    SfxType.WSSH: ("wssh1.mp3", "wssh2.mp3", "dsht1.mp3", "ws1.mp3", "spsh1.mp3"),
    SfxType.BUTTON_TAP: ("k1.mp3", "k2.mp3", "p1.mp3", "p2.mp3"),
    SfxType.CONGRATS: ("yay1.mp3", "wehee1.mp3", "oo1.mp3"),
    SfxType.ERASE: ("fwfwfwfwfw1.mp3", "fwfwfwfw1.mp3"),
    SfxType.SWISH_SWISH: ("swishswish1.mp3",),
}

SFX_VOLUMES: dict[SfxType, float] = {
    SfxType.HUHSH: 0.4,
    SfxType.WSSH: 0.2,
}


def sound_type_to_filenames(sfx_type: SfxType) -> tuple[str, ...]:
    """Candidate filenames for a sound effect kind."""
    return SFX_FILENAMES[sfx_type]


def sound_type_to_volume(sfx_type: SfxType) -> float:
    """Playback volume (0.0 to 1.0) for a sound effect kind."""
    return SFX_VOLUMES.get(sfx_type, 1.0)


def all_sfx_filenames() -> list[str]:
    """Every distinct filename referenced by the catalog, in catalog order."""
    seen: dict[str, None] = {}
    for sfx_type in SfxType:
        for filename in sound_type_to_filenames(sfx_type):
            seen.setdefault(filename, None)
    return list(seen)
