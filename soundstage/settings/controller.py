"""
Audio settings held as observable flags.
"""

from __future__ import annotations

from soundstage.core.observable import ValueNotifier


class SettingsController:
    """
    The player's audio preferences.

    Each flag is a ValueNotifier so the audio controller can react to changes
    as they happen. Values live only in memory.

    Attributes:
        muted: Silences all audio, regardless of the other two flags
        music_on: Background music enabled
        sounds_on: Sound effects enabled
    """

    def __init__(self, muted: bool = False, music_on: bool = True, sounds_on: bool = True):
        self.muted = ValueNotifier(muted)
        self.music_on = ValueNotifier(music_on)
        self.sounds_on = ValueNotifier(sounds_on)

    def set_muted(self, value: bool) -> None:
        self.muted.value = value

    def toggle_muted(self) -> None:
        self.muted.value = not self.muted.value

    def toggle_music_on(self) -> None:
        self.music_on.value = not self.music_on.value

    def toggle_sounds_on(self) -> None:
        self.sounds_on.value = not self.sounds_on.value

    def snapshot(self) -> dict[str, bool]:
        """Current values of all flags."""
        return {
            "muted": self.muted.value,
            "music_on": self.music_on.value,
            "sounds_on": self.sounds_on.value,
        }
