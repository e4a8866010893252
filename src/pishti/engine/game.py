from __future__ import annotations

import random
import threading
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from .ai import AIView, choose_slot
from .scoring import pile_points, score_capture
from .state import CasinoState
from .types import (
    CPU,
    DECK_SIZE,
    HAND_SIZE,
    LEVELS,
    PLAYER,
    Card,
    GameState,
    Level,
    RuleSet,
    build_deck,
    occupied,
)
from .undo import UndoManager

Event = dict[str, object]

_CAPTURE_SOUNDS = {"pisti": "pisti", "jack_pisti": "pisti_jack", "sweep": "capture"}
_UNDO_STATES: tuple[GameState, ...] = ("player_turn", "cpu_turn", "pile_captured")


class SoundSink(Protocol):
    def notify(self, effect: str) -> None: ...


class SilentSound:
    def notify(self, effect: str) -> None:
        return None


@dataclass
class StepResult:
    ok: bool
    events: list[Event] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class GameView:
    """Read-only picture of the table for the display layer."""

    state: GameState
    level: Level | None
    player_points: int
    cpu_points: int
    player_collected: int
    cpu_collected: int
    player_hand: tuple[Card | None, ...]
    cpu_slots: tuple[bool, ...]
    table_size: int
    table_top: Card | None
    table_second: Card | None
    second_face_down: bool
    can_undo: bool
    message: str
    winner: int | None
    last_cpu_slot: int


@dataclass(frozen=True)
class Census:
    deck: int
    player_hand: int
    cpu_hand: int
    table: int
    player_collected: int
    cpu_collected: int

    @property
    def total(self) -> int:
        return self.deck + self.player_hand + self.cpu_hand + self.table + self.player_collected + self.cpu_collected


class GameEngine:
    """Pishti rules engine: one human against the computer.

    Every command takes the engine lock for its whole duration, so a UI thread
    and delayed callbacks may call in concurrently. Commands never block and
    never call back into the engine. The sound sink is notified while the
    lock is held and must not re-enter.
    """

    def __init__(
        self,
        seed: int | None = None,
        *,
        rng: random.Random | None = None,
        sound: SoundSink | None = None,
        rules: RuleSet | None = None,
    ) -> None:
        self.seed = seed
        self._lock = threading.Lock()
        self._sound: SoundSink = sound or SilentSound()
        self._undo = UndoManager()
        self._s = CasinoState(rules=rules or RuleSet(), rng=rng or random.Random(seed))
        self.event_log: list[Event] = []

    @property
    def data(self) -> CasinoState:
        """Live state. Read it; change it only through the commands."""
        return self._s

    @property
    def state(self) -> GameState:
        return self._s.state

    @property
    def level(self) -> Level | None:
        return self._s.level

    @property
    def can_undo(self) -> bool:
        s = self._s
        return self._undo.can_undo and s.level != "advanced" and s.state in _UNDO_STATES

    def is_hand_finished(self) -> bool:
        return occupied(self._s.player_hand) == 0 and occupied(self._s.cpu_hand) == 0

    def census(self) -> Census:
        with self._lock:
            s = self._s
            return Census(
                deck=DECK_SIZE - s.cursor,
                player_hand=occupied(s.player_hand),
                cpu_hand=occupied(s.cpu_hand),
                table=0 if s.state == "pile_captured" else len(s.table),
                player_collected=s.player_collected,
                cpu_collected=s.cpu_collected,
            )

    def view(self) -> GameView:
        with self._lock:
            s = self._s
            winner: int | None = None
            if s.state == "game_over":
                if s.player_points > s.cpu_points:
                    winner = PLAYER
                elif s.cpu_points > s.player_points:
                    winner = CPU
            return GameView(
                state=s.state,
                level=s.level,
                player_points=s.player_points,
                cpu_points=s.cpu_points,
                player_collected=s.player_collected,
                cpu_collected=s.cpu_collected,
                player_hand=tuple(s.player_hand),
                cpu_slots=tuple(c is not None for c in s.cpu_hand),
                table_size=len(s.table),
                table_top=s.table[-1] if s.table else None,
                table_second=s.table[-2] if len(s.table) > 1 else None,
                second_face_down=s.initial_pile,
                can_undo=self.can_undo,
                message=s.message,
                winner=winner,
                last_cpu_slot=s.last_cpu_slot,
            )

    def set_level(self, level: str) -> StepResult:
        with self._lock:
            s = self._s
            if level not in LEVELS:
                self._log({"type": "LEVEL_REJECTED", "level": level})
                return StepResult(ok=False, error=f"Unknown level: {level}")
            if s.state not in ("not_started", "game_over"):
                return StepResult(ok=False, error="Level is fixed while a game is running.")
            s.level = level  # type: ignore[assignment]
            return StepResult(ok=True, events=[self._log({"type": "LEVEL_SET", "level": level})])

    def start_game(self, *, deck: Sequence[Card] | None = None) -> bool:
        """Shuffle, deal the table and both hands, and hand the turn to the player.

        `deck` replaces the shuffle with a fixed order (a permutation of the
        full deck). A running or finished game is discarded first; the chosen
        level is kept.
        """
        with self._lock:
            if self._s.level is None:
                self._log({"type": "START_REJECTED", "reason": "no_level"})
                return False
            if deck is not None and sorted(deck, key=_deck_pos) != list(build_deck()):
                raise ValueError(f"Deck must hold each of the {DECK_SIZE} cards exactly once.")

            self._clear(keep_level=True)
            s = self._s
            if deck is None:
                s.rng.shuffle(s.deck)
            else:
                s.deck[:] = deck

            s.table[:] = s.deck[:HAND_SIZE]
            s.hidden_cards = tuple(s.deck[:3])
            s.cursor = HAND_SIZE
            s.initial_pile = True
            s.state = "player_turn"
            self._deal()
            self._log({"type": "GAME_STARTED", "level": s.level, "seed": self.seed})
            return True

    def reset_game(self) -> None:
        with self._lock:
            self._clear(keep_level=False)
            self._log({"type": "GAME_RESET"})

    def player_plays(self, slot: int) -> StepResult:
        with self._lock:
            s = self._s
            if s.state != "player_turn":
                return StepResult(ok=False, error="Not your turn.")
            if slot < 0 or slot >= HAND_SIZE:
                return StepResult(ok=False, error="Invalid hand slot.")
            card = s.player_hand[slot]
            if card is None:
                return StepResult(ok=False, error="That slot is empty.")
            if occupied(s.cpu_hand) > occupied(s.player_hand):
                return StepResult(ok=False, error="The computer has not played yet.")

            if s.level != "advanced":
                self._undo.record(s)
            s.message = ""
            s.player_hand[slot] = None
            before = len(self.event_log)
            self._play(card, PLAYER)
            s.initial_pile = False
            return StepResult(ok=True, events=self.event_log[before:])

    def computer_plays(self) -> StepResult:
        with self._lock:
            s = self._s
            owes = occupied(s.cpu_hand) > occupied(s.player_hand)
            if not (s.state == "cpu_turn" or (s.state == "player_turn" and owes)):
                return StepResult(ok=False, error="Not the computer's turn.")
            if occupied(s.cpu_hand) == 0:
                return StepResult(ok=False, error="The computer has no cards.")

            slot = choose_slot(s.level, self._ai_view(), s.rng)  # type: ignore[arg-type]
            if slot is None or s.cpu_hand[slot] is None:
                slot = next(i for i, c in enumerate(s.cpu_hand) if c is not None)
            card = s.cpu_hand[slot]
            assert card is not None
            s.cpu_hand[slot] = None
            s.last_cpu_slot = slot
            before = len(self.event_log)
            self._play(card, CPU)
            return StepResult(ok=True, events=self.event_log[before:])

    def finalize_capture(self) -> StepResult:
        """Clear a captured pile after the display pause; the scorer's side plays on."""
        with self._lock:
            s = self._s
            if s.state != "pile_captured":
                return StepResult(ok=False, error="No captured pile to clear.")
            before = len(self.event_log)
            s.table.clear()
            s.state = "player_turn"
            self._log({"type": "PILE_CLEARED", "scorer": s.last_scorer})
            if self.is_hand_finished():
                self._end_of_hand()
            return StepResult(ok=True, events=self.event_log[before:])

    def check_end_of_hand(self) -> StepResult:
        with self._lock:
            s = self._s
            if s.state in ("not_started", "pile_captured", "game_over"):
                return StepResult(ok=False, error=f"Nothing to check in state {s.state}.")
            if not self.is_hand_finished():
                return StepResult(ok=False, error="Hand still in progress.")
            before = len(self.event_log)
            self._end_of_hand()
            return StepResult(ok=True, events=self.event_log[before:])

    def undo(self) -> bool:
        with self._lock:
            s = self._s
            if s.level == "advanced" or s.state not in _UNDO_STATES:
                return False
            if not self._undo.restore(s):
                return False
            self._log({"type": "UNDO"})
            return True

    def _log(self, event: Event) -> Event:
        self.event_log.append(event)
        return event

    def _clear(self, keep_level: bool) -> None:
        level = self._s.level if keep_level else None
        self._s = CasinoState(rules=self._s.rules, rng=self._s.rng, level=level)
        self._undo.clear()
        # one game per log
        self.event_log = []

    def _ai_view(self) -> AIView:
        s = self._s
        return AIView(
            hand=tuple(s.cpu_hand),
            top_card=s.table[-1] if s.table else None,
            safe_discard=s.safe_discard,
            hand_memory=tuple(s.hand_memory),
            game_memory=tuple(s.game_memory),
            rules=s.rules,
        )

    def _remember(self, card: Card) -> None:
        s = self._s
        if s.level in ("intermediate", "advanced"):
            s.hand_memory.append(card)
        if s.level == "advanced":
            s.game_memory.append(card)

    def _deal(self) -> None:
        s = self._s
        if s.cursor + 2 * HAND_SIZE > DECK_SIZE:
            # end-of-game detection should have fired before we got here
            return
        if not s.initial_pile:
            self._sound.notify("deal")
            s.safe_discard = None
            s.hand_memory.clear()
        for i in range(HAND_SIZE):
            s.player_hand[i] = s.deck[s.cursor]
            s.cursor += 1
        for i in range(HAND_SIZE):
            s.cpu_hand[i] = s.deck[s.cursor]
            s.cursor += 1
        self._log({"type": "HAND_DEALT", "cursor": s.cursor})

    def _play(self, card: Card, who: int) -> None:
        s = self._s
        self._remember(card)
        self._sound.notify("card_play")
        s.table.append(card)
        self._log({"type": "CARD_PLAYED", "player": who, "card_id": card.identifier})

        capture = score_capture(s.table, s.rules)
        if capture is None:
            s.state = "cpu_turn" if who == PLAYER else "player_turn"
            return

        top, below = s.table[-1], s.table[-2]
        if who == PLAYER and top.is_jack:
            s.safe_discard = below
        if s.hidden_cards is not None:
            if who == PLAYER:
                a, b, c = (h.face for h in s.hidden_cards)
                s.message = f"You captured the hidden cards: {a}, {b}, and {c}!"
            s.hidden_cards = None

        self._sound.notify(_CAPTURE_SOUNDS[capture.kind])
        if who == PLAYER:
            s.player_points += capture.points
            s.player_collected += capture.collected
        else:
            s.cpu_points += capture.points
            s.cpu_collected += capture.collected
        s.last_scorer = who
        s.state = "pile_captured"
        self._log(
            {
                "type": "PILE_CAPTURED",
                "player": who,
                "kind": capture.kind,
                "points": capture.points,
                "cards": capture.collected,
            }
        )

    def _end_of_hand(self) -> None:
        s = self._s
        if s.cursor >= DECK_SIZE:
            self._end_game()
            return
        self._deal()
        s.state = "player_turn"

    def _end_game(self) -> None:
        s = self._s
        if s.table:
            # leftover pile goes to the last side that captured, the computer if nobody did
            points = pile_points(s.table, s.rules)
            if s.last_scorer == PLAYER:
                s.player_points += points
                s.player_collected += len(s.table)
            else:
                s.cpu_points += points
                s.cpu_collected += len(s.table)
            self._log({"type": "FINAL_PILE", "player": s.last_scorer, "points": points, "cards": len(s.table)})
            s.table.clear()

        if s.player_collected > s.cpu_collected:
            s.player_points += s.rules.majority_bonus
        elif s.cpu_collected > s.player_collected:
            s.cpu_points += s.rules.majority_bonus
        s.state = "game_over"
        self._undo.clear()
        self._log({"type": "GAME_ENDED", "player_points": s.player_points, "cpu_points": s.cpu_points})


def _deck_pos(card: Card) -> int:
    return int(card.identifier)
