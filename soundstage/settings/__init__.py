"""
Player-facing audio settings.
"""

from soundstage.settings.controller import SettingsController

__all__ = [
    "SettingsController",
]
