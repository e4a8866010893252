from __future__ import annotations

import threading
import time

import pygame  # type: ignore[import-not-found]

from pishti.services.content import SoundCatalog

from .asset_manager import AssetManager


class SoundService:
    """Fire-and-forget sound effects for the engine and the table scene.

    Each effect is rate limited on its own. If the mixer cannot start, every
    call is a no-op.
    """

    def __init__(self, assets: AssetManager, catalog: SoundCatalog) -> None:
        self._assets = assets
        self._catalog = catalog
        self._sounds: dict[str, pygame.mixer.Sound] = {}
        self._last_played: dict[str, float] = {}
        self._lock = threading.Lock()  # notify() runs on whichever thread drives the engine
        self.enabled = False
        try:
            pygame.mixer.init()
        except pygame.error:
            return
        self.enabled = True
        for name, path_str in catalog.effects.items():
            if name == "background":
                continue
            path = assets.resolve(path_str)
            if not path.exists():
                continue
            try:
                self._sounds[name] = pygame.mixer.Sound(path.as_posix())
            except pygame.error:
                continue

    def notify(self, effect: str) -> None:
        if not self.enabled:
            return
        now = time.monotonic()
        with self._lock:
            last = self._last_played.get(effect)
            if last is not None and (now - last) * 1000.0 < self._catalog.rate_limit_ms:
                return
            self._last_played[effect] = now
            snd = self._sounds.get(effect)
        if snd is not None:
            snd.play()

    def play_background(self) -> None:
        if not self.enabled or pygame.mixer.music.get_busy():
            return
        path_str = self._catalog.effects.get("background")
        if path_str is None:
            return
        path = self._assets.resolve(path_str)
        if not path.exists():
            return
        try:
            pygame.mixer.music.load(path.as_posix())
        except pygame.error:
            return
        pygame.mixer.music.set_volume(self._catalog.background_volume)
        pygame.mixer.music.play(loops=-1)

    def shutdown(self) -> None:
        if self.enabled:
            pygame.mixer.quit()
            self.enabled = False
