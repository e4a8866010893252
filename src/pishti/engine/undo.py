from __future__ import annotations

from dataclasses import dataclass

from .state import CasinoState
from .types import Card, GameState


@dataclass(frozen=True)
class UndoSnapshot:
    state: GameState
    cursor: int
    player_points: int
    cpu_points: int
    last_scorer: int | None
    player_collected: int
    cpu_collected: int
    table: tuple[Card, ...]
    player_hand: tuple[Card | None, ...]
    cpu_hand: tuple[Card | None, ...]
    hidden_cards: tuple[Card, ...] | None
    safe_discard: Card | None
    initial_pile: bool
    hand_memory: tuple[Card, ...]
    message: str


class UndoManager:
    """Holds at most one snapshot, taken right before a human move."""

    def __init__(self) -> None:
        self._snapshot: UndoSnapshot | None = None
        self.can_undo = False

    def record(self, s: CasinoState) -> None:
        self._snapshot = UndoSnapshot(
            state=s.state,
            cursor=s.cursor,
            player_points=s.player_points,
            cpu_points=s.cpu_points,
            last_scorer=s.last_scorer,
            player_collected=s.player_collected,
            cpu_collected=s.cpu_collected,
            table=tuple(s.table),
            player_hand=tuple(s.player_hand),
            cpu_hand=tuple(s.cpu_hand),
            hidden_cards=s.hidden_cards,
            safe_discard=s.safe_discard,
            initial_pile=s.initial_pile,
            hand_memory=tuple(s.hand_memory),
            message=s.message,
        )
        self.can_undo = True

    def restore(self, s: CasinoState) -> bool:
        snap = self._snapshot
        if snap is None or not self.can_undo:
            return False
        s.state = snap.state
        s.cursor = snap.cursor
        s.player_points = snap.player_points
        s.cpu_points = snap.cpu_points
        s.last_scorer = snap.last_scorer
        s.player_collected = snap.player_collected
        s.cpu_collected = snap.cpu_collected
        s.table[:] = snap.table
        s.player_hand[:] = snap.player_hand
        s.cpu_hand[:] = snap.cpu_hand
        s.hidden_cards = snap.hidden_cards
        s.safe_discard = snap.safe_discard
        s.initial_pile = snap.initial_pile
        s.hand_memory[:] = snap.hand_memory
        s.message = snap.message
        # one undo per move
        self.can_undo = False
        return True

    def clear(self) -> None:
        self._snapshot = None
        self.can_undo = False
