from __future__ import annotations

from collections.abc import Sequence

from .game import GameEngine
from .types import Card


def _card_id(c: Card | None) -> str | None:
    if c is None:
        return None
    return c.identifier


def _ids(cards: Sequence[Card | None]) -> list[str | None]:
    return [_card_id(c) for c in cards]


def snapshot(engine: GameEngine) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current engine state."""
    s = engine.data
    return {
        "seed": engine.seed,
        "state": s.state,
        "level": s.level,
        "cursor": s.cursor,
        "deck": _ids(s.deck),
        "player_hand": _ids(s.player_hand),
        "cpu_hand": _ids(s.cpu_hand),
        "table": _ids(s.table),
        "points": [s.player_points, s.cpu_points],
        "collected": [s.player_collected, s.cpu_collected],
        "last_scorer": s.last_scorer,
        "hand_memory": _ids(s.hand_memory),
        "game_memory": _ids(s.game_memory),
        "hidden_cards": None if s.hidden_cards is None else _ids(s.hidden_cards),
        "safe_discard": _card_id(s.safe_discard),
        "initial_pile": s.initial_pile,
        "message": s.message,
        "can_undo": engine.can_undo,
    }
