"""
Audio exception hierarchy.
"""


class AudioError(Exception):
    """Base class for all audio errors."""


class PlayerError(AudioError):
    """A player handle could not carry out a playback command."""

    def __init__(self, player_id: str, message: str):
        super().__init__(f"{player_id}: {message}")
        self.player_id = player_id


class AssetLoadError(AudioError):
    """A sound asset could not be loaded."""

    def __init__(self, path: str, reason: str = ""):
        message = f"Failed to load sound '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path


class AudioConfigError(AudioError):
    """The audio configuration file is malformed."""
