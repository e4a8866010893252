from __future__ import annotations

from pishti.engine.types import Card, build_deck


def card_of(face: str, suit: str) -> Card:
    for c in build_deck():
        if c.face == face and c.suit == suit:
            return c
    raise ValueError(f"No such card: {face} of {suit}")


def stacked_deck(*leading: Card) -> list[Card]:
    """A full deck starting with `leading`, the rest in unshuffled order.

    Dealing order is 4 table cards, 4 player cards, 4 computer cards, then
    8 per following hand (player first).
    """
    if len(set(leading)) != len(leading):
        raise ValueError("Duplicate cards in stacked deck.")
    rest = [c for c in build_deck() if c not in leading]
    return list(leading) + rest
