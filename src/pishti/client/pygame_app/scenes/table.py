from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]

from pishti.engine import GameEngine, GameView, Level

from ..app import GameContext, SceneTransition
from ..asset_manager import CARD_SIZE
from ..ui import Button, draw_text, draw_text_centered

CPU_DELAY = 1.0
CAPTURE_PAUSE = 0.5
END_OF_HAND_PAUSE = 0.5

SLOT_W, SLOT_H = 91, 116
SLOT_GAP = 5

LEVEL_LABELS: tuple[tuple[Level, str], ...] = (
    ("beginner", "Beginner"),
    ("intermediate", "Intermediate"),
    ("advanced", "Advanced"),
)


@dataclass
class _Timer:
    remaining: float
    action: Callable[[], None]


class TableScene:
    """Drives the engine: turns clicks into commands and paces the computer.

    The engine only reacts to discrete commands; every pause (the computer
    thinking, a captured pile staying on screen) is a timer owned here.
    """

    def __init__(self, ctx: GameContext) -> None:
        assert ctx.engine is not None
        self.ctx = ctx
        self.engine: GameEngine = ctx.engine
        self._timers: list[_Timer] = []
        self._info = "Welcome to Pishti! Select a level and start the game."
        self._game_over_announced = False

        self.level_buttons: list[tuple[Level, Button]] = []
        x = 8
        for level, label in LEVEL_LABELS:
            w = 112 if level == "intermediate" else 100
            btn = Button(rect=pygame.Rect(x, 8, w, 32), text=label, on_click=lambda lv=level: self._on_level(lv))
            self.level_buttons.append((level, btn))
            x += w + 4
        self.btn_start = Button(rect=pygame.Rect(8, 46, 100, 32), text="Start", on_click=self._on_start)
        self.btn_undo = Button(rect=pygame.Rect(112, 46, 80, 32), text="Undo", on_click=self._on_undo)

    @property
    def busy(self) -> bool:
        return bool(self._timers)

    def _after(self, delay: float, action: Callable[[], None]) -> None:
        self._timers.append(_Timer(remaining=delay, action=action))

    def _tick_timers(self, dt: float) -> None:
        due: list[_Timer] = []
        for t in self._timers:
            t.remaining -= dt
            if t.remaining <= 0:
                due.append(t)
        for t in sorted(due, key=lambda t: t.remaining):
            self._timers.remove(t)
            t.action()

    def _on_level(self, level: Level) -> None:
        res = self.engine.set_level(level)
        self._forward(res.events)
        if not res.ok and res.error:
            self._info = res.error

    def _on_start(self) -> None:
        state = self.engine.state
        if state == "not_started":
            self._attempt_start()
            return
        # Start doubles as "New Game": drop the current game and go back to level selection.
        self._timers.clear()
        self.engine.reset_game()
        self._forward(self.engine.event_log)
        self._game_over_announced = False
        self.btn_start.text = "Start"
        self._info = "Select a level and press Start."

    def _attempt_start(self) -> None:
        if self.engine.level is None:
            self._info = "Please select a level first!"
            return
        self._notify("game_start")
        if not self.engine.start_game():
            return
        self._forward(self.engine.event_log)
        self.btn_start.text = "New Game"
        self._info = ""
        self.ctx.telemetry.log("game_start", {"level": self.engine.level, "seed": self.engine.seed})

    def _on_undo(self) -> None:
        if self.busy:
            return
        if self.engine.undo():
            self._forward(self.engine.event_log[-1:])
            self._notify("undo")
            self._info = ""

    def _on_card(self, slot: int) -> None:
        if self.busy or self.engine.state != "player_turn":
            return
        res = self.engine.player_plays(slot)
        self._forward(res.events)
        if not res.ok:
            return
        self._info = ""
        if self.engine.state == "pile_captured":
            self._after(CAPTURE_PAUSE, self._finalize)
        self._after(CPU_DELAY, self._cpu_turn)

    def _cpu_turn(self) -> None:
        res = self.engine.computer_plays()
        self._forward(res.events)
        if not res.ok:
            return
        if self.engine.state == "pile_captured":
            # finalize_capture deals the next hand itself when both hands are empty
            self._after(CAPTURE_PAUSE, self._finalize)
        elif self.engine.is_hand_finished():
            self._after(END_OF_HAND_PAUSE, self._end_of_hand)

    def _finalize(self) -> None:
        self._forward(self.engine.finalize_capture().events)

    def _end_of_hand(self) -> None:
        self._forward(self.engine.check_end_of_hand().events)

    def _forward(self, events: list[dict[str, object]]) -> None:
        if events:
            self.ctx.telemetry.log_engine_events(events)

    def _notify(self, effect: str) -> None:
        if self.ctx.sound is not None:
            self.ctx.sound.notify(effect)

    def handle_event(self, event: pygame.event.Event) -> None:
        for _, btn in self.level_buttons:
            if btn.handle_event(event):
                return
        if self.btn_start.handle_event(event):
            return
        if self.btn_undo.handle_event(event):
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            slot = self._hit_test_player_hand(event.pos)
            if slot is not None:
                self._on_card(slot)

    def update(self, dt: float) -> SceneTransition | None:
        self._tick_timers(dt)
        view = self.engine.view()
        if view.state == "game_over" and not self._game_over_announced:
            self._announce_game_over(view)
        return None

    def _announce_game_over(self, view: GameView) -> None:
        score = f"Final Score: You {view.player_points} - {view.cpu_points} CPU"
        if view.winner == 0:
            self._info, effect = f"You Win! {score}", "player_wins"
        elif view.winner == 1:
            self._info, effect = f"CPU Wins! {score}", "cpu_wins"
        else:
            self._info, effect = f"It's a Tie! {score}", "tie"
        self._notify(effect)
        self._game_over_announced = True
        self.ctx.telemetry.log(
            "game_over",
            {
                "level": view.level,
                "player_points": view.player_points,
                "cpu_points": view.cpu_points,
                "player_collected": view.player_collected,
                "cpu_collected": view.cpu_collected,
            },
        )

    def _hand_rect(self, slot: int, y: int) -> pygame.Rect:
        total = 4 * SLOT_W + 3 * SLOT_GAP
        x0 = (self.ctx.screen.get_width() - total) // 2
        return pygame.Rect(x0 + slot * (SLOT_W + SLOT_GAP), y, SLOT_W, SLOT_H)

    def _player_y(self) -> int:
        return self.ctx.screen.get_height() - SLOT_H - 24

    def _hit_test_player_hand(self, pos: tuple[int, int]) -> int | None:
        for slot in range(4):
            if self._hand_rect(slot, self._player_y()).collidepoint(pos):
                return slot
        return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((18, 70, 40))
        view = self.engine.view()
        fonts = self.ctx.assets.fonts

        # top bar
        bar = pygame.Surface((screen.get_width(), 86), pygame.SRCALPHA)
        bar.fill((0, 0, 0, 40))
        screen.blit(bar, (0, 0))
        choosing = view.state == "not_started"
        for level, btn in self.level_buttons:
            btn.enabled = choosing
            btn.selected = view.level == level
            btn.draw(screen, fonts.small)
        self.btn_start.draw(screen, fonts.ui)
        self.btn_undo.enabled = view.can_undo and not self.busy
        self.btn_undo.draw(screen, fonts.ui)

        right = screen.get_width() - 150
        draw_text(screen, fonts.ui, f"Your Score: {view.player_points}", (right, 48))
        draw_text(screen, fonts.ui, f"CPU Score: {view.cpu_points}", (right, 66))

        assets = self.ctx.assets
        # computer hand, face down
        for slot, held in enumerate(view.cpu_slots):
            rect = self._hand_rect(slot, 100)
            self._draw_slot_frame(screen, rect)
            if held:
                self._blit_centered(screen, assets.card_back(), rect)

        # table pile: second card peeks out from under the top one
        w, h = screen.get_size()
        top_pos = (w // 2 - CARD_SIZE[0] // 2 - 3, 250)
        if view.table_second is not None:
            under = assets.card_back() if view.second_face_down else assets.card_image(view.table_second)
            screen.blit(under, (top_pos[0] + 5, top_pos[1] + 5))
        if view.table_top is not None:
            screen.blit(assets.card_image(view.table_top), top_pos)
        if view.table_size > 0:
            draw_text_centered(screen, fonts.small, f"{view.table_size} on table", (w // 2, top_pos[1] + CARD_SIZE[1] + 20))

        # player hand
        py = self._player_y()
        for slot, card in enumerate(view.player_hand):
            rect = self._hand_rect(slot, py)
            self._draw_slot_frame(screen, rect)
            if card is not None:
                self._blit_centered(screen, assets.card_image(card), rect)

        info = view.message or self._info
        if view.state == "not_started" and not info:
            info = "Select a level and press Start."
        if info:
            draw_text_centered(screen, fonts.ui, info, (w // 2, py - 24), color=(250, 240, 200))

    def _draw_slot_frame(self, screen: pygame.Surface, rect: pygame.Rect) -> None:
        pygame.draw.rect(screen, (12, 50, 28), rect, border_radius=8)
        pygame.draw.rect(screen, (200, 180, 90), rect, width=2, border_radius=8)

    def _blit_centered(self, screen: pygame.Surface, img: pygame.Surface, rect: pygame.Rect) -> None:
        screen.blit(img, img.get_rect(center=rect.center).topleft)
