"""
Sound asset cache.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable

import pygame

from soundstage.audio.errors import AssetLoadError


class AudioCache:
    """
    Loads pygame Sounds once and hands out the cached instances.

    Usage:
        cache = AudioCache()
        await cache.load_all(["assets/audio/sfx/k1.mp3", ...])
        sound = cache.get("assets/audio/sfx/k1.mp3")
    """

    def __init__(self):
        self._sounds: dict[str, pygame.mixer.Sound] = {}
        self.logger = logging.getLogger(__name__)

    def __contains__(self, path: str) -> bool:
        return path in self._sounds

    def __len__(self) -> int:
        return len(self._sounds)

    def load(self, path: str) -> pygame.mixer.Sound:
        """
        Load a sound, or return it from the cache.

        Raises:
            AssetLoadError: If the file is missing or pygame cannot decode it
        """
        sound = self._sounds.get(path)
        if sound is not None:
            return sound

        if not Path(path).exists():
            raise AssetLoadError(path, "file not found")
        try:
            sound = pygame.mixer.Sound(path)
        except pygame.error as e:
            raise AssetLoadError(path, str(e)) from e

        self._sounds[path] = sound
        return sound

    def get(self, path: str) -> pygame.mixer.Sound:
        """Cached sound for ``path``, loading it synchronously on a miss."""
        if path not in self._sounds:
            self.logger.debug(f"Cache miss for {path}, loading on demand")
        return self.load(path)

    async def load_all(self, paths: Iterable[str]) -> None:
        """
        Load every path in worker threads.

        Completes once all sounds are cached. The first failure is raised
        as AssetLoadError after the remaining loads have settled.
        """
        pending = [p for p in dict.fromkeys(paths) if p not in self._sounds]
        if not pending:
            return

        self.logger.info(f"Preloading {len(pending)} sounds")
        results = await asyncio.gather(
            *(asyncio.to_thread(self.load, path) for path in pending),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

    def clear(self) -> None:
        self._sounds.clear()
