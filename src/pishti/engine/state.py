from __future__ import annotations

import random
from dataclasses import dataclass, field

from .types import HAND_SIZE, Card, GameState, Level, RuleSet, build_deck


def _empty_hand() -> list[Card | None]:
    return [None] * HAND_SIZE


@dataclass
class CasinoState:
    """All mutable game data. Owned by a single GameEngine."""

    rules: RuleSet
    rng: random.Random
    deck: list[Card] = field(default_factory=lambda: list(build_deck()))
    cursor: int = 0  # next undealt deck position
    player_hand: list[Card | None] = field(default_factory=_empty_hand)
    cpu_hand: list[Card | None] = field(default_factory=_empty_hand)
    table: list[Card] = field(default_factory=list)
    player_points: int = 0
    cpu_points: int = 0
    player_collected: int = 0
    cpu_collected: int = 0
    last_scorer: int | None = None
    hand_memory: list[Card] = field(default_factory=list)
    game_memory: list[Card] = field(default_factory=list)
    hidden_cards: tuple[Card, ...] | None = None
    safe_discard: Card | None = None
    initial_pile: bool = False
    message: str = ""
    state: GameState = "not_started"
    level: Level | None = None
    last_cpu_slot: int = -1
