from __future__ import annotations

import random
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .scoring import card_value
from .types import Card, Level, RuleSet


@dataclass(frozen=True)
class AIView:
    """Everything the computer is allowed to know when picking a card.

    hand_memory holds cards played since the last deal; game_memory holds
    every card played this game. Which of them is filled depends on the level.
    """

    hand: tuple[Card | None, ...]
    top_card: Card | None = None
    safe_discard: Card | None = None
    hand_memory: tuple[Card, ...] = ()
    game_memory: tuple[Card, ...] = ()
    rules: RuleSet = field(default_factory=RuleSet)


Strategy = Callable[[AIView], "int | None"]


def find_face(hand: Sequence[Card | None], face: str) -> int | None:
    for i, c in enumerate(hand):
        if c is not None and c.face == face:
            return i
    return None


def find_jack(hand: Sequence[Card | None]) -> int | None:
    return find_face(hand, "Jack")


def try_capture(view: AIView) -> int | None:
    if view.top_card is None:
        return None
    idx = find_face(view.hand, view.top_card.face)
    if idx is not None:
        return idx
    return find_jack(view.hand)


def try_safe_discard(view: AIView) -> int | None:
    if view.safe_discard is None:
        return None
    return find_face(view.hand, view.safe_discard.face)


def fallback(hand: Sequence[Card | None], rng: random.Random) -> int | None:
    """Random non-Jack if there is one, otherwise the first held card."""
    candidates = [i for i, c in enumerate(hand) if c is not None and not c.is_jack]
    if candidates:
        return candidates[rng.randrange(len(candidates))]
    for i, c in enumerate(hand):
        if c is not None:
            return i
    return None


def _beginner(view: AIView) -> int | None:
    return try_capture(view)


def _most_common_face(view: AIView) -> str | None:
    counts: Counter[str] = Counter()
    for c in view.hand:
        if c is not None and not c.is_jack:
            counts[c.face] += 1
    for c in view.hand_memory:
        if not c.is_jack:
            counts[c.face] += 1

    best_face: str | None = None
    best_count = 1  # a face seen only once tells us nothing
    for c in view.hand:
        if c is None:
            continue
        if counts[c.face] > best_count:
            best_count = counts[c.face]
            best_face = c.face
    return best_face


def _intermediate(view: AIView) -> int | None:
    idx = try_capture(view)
    if idx is not None:
        return idx
    idx = try_safe_discard(view)
    if idx is not None:
        return idx
    face = _most_common_face(view)
    if face is None:
        return None
    return find_face(view.hand, face)


def _match_number(view: AIView, slot: int) -> int:
    card = view.hand[slot]
    assert card is not None
    seen = sum(1 for m in view.game_memory if m.face == card.face)
    twins = sum(1 for j, c in enumerate(view.hand) if j != slot and c is not None and c.face == card.face)
    return seen + twins


def _advanced(view: AIView) -> int | None:
    idx = try_capture(view)
    if idx is not None:
        return idx
    idx = try_safe_discard(view)
    if idx is not None:
        return idx

    # Faces already seen many times are unlikely to hand the opponent a pisti.
    best_slot: int | None = None
    best_match = 0
    for i, c in enumerate(view.hand):
        if c is None or c.is_jack:
            continue
        m = _match_number(view, i)
        if m > best_match:
            best_match = m
            best_slot = i
    if best_slot is not None:
        return best_slot

    cheapest: int | None = None
    cheapest_value = 0
    for i, c in enumerate(view.hand):
        if c is None or c.is_jack:
            continue
        v = card_value(c, view.rules)
        if cheapest is None or v < cheapest_value:
            cheapest = i
            cheapest_value = v
    return cheapest


TIERS: dict[Level, Strategy] = {
    "beginner": _beginner,
    "intermediate": _intermediate,
    "advanced": _advanced,
}


def choose_slot(level: Level, view: AIView, rng: random.Random) -> int | None:
    """Pick the hand slot the computer plays.

    The tier strategy runs first; when it has no opinion the shared fallback
    decides. Returns None only for an empty hand. `rng` is only consumed by
    the fallback.
    """
    strategy = TIERS.get(level)
    idx = strategy(view) if strategy is not None else None
    if idx is not None:
        return idx
    return fallback(view.hand, rng)
