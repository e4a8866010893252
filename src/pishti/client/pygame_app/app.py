from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

import pygame  # type: ignore[import-not-found]

from pishti.engine import GameEngine, RuleSet
from pishti.paths import Paths
from pishti.services.content import ContentService
from pishti.services.telemetry import TelemetryService

from .asset_manager import AssetManager
from .audio import SoundService


@dataclass
class SceneTransition:
    next_scene: "Scene"


class Scene(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def update(self, dt: float) -> SceneTransition | None: ...
    def render(self, screen: pygame.Surface) -> None: ...


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    assets: AssetManager
    content: ContentService
    telemetry: TelemetryService
    seed: int | None = None

    # Loaded at boot
    rules: Optional[RuleSet] = None
    sound: Optional[SoundService] = None
    engine: Optional[GameEngine] = None


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        while self.running:
            dt = self.ctx.clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                self.scene.handle_event(event)

            tr = self.scene.update(dt)
            if tr is not None:
                self.scene = tr.next_scene

            self.scene.render(self.ctx.screen)
            pygame.display.flip()

        if self.ctx.sound is not None:
            self.ctx.sound.shutdown()
        return 0
