from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

Face = Literal[
    "Ace",
    "Deuce",
    "Three",
    "Four",
    "Five",
    "Six",
    "Seven",
    "Eight",
    "Nine",
    "Ten",
    "Jack",
    "Queen",
    "King",
]
Suit = Literal["Hearts", "Diamonds", "Clubs", "Spades"]

Level = Literal["beginner", "intermediate", "advanced"]
GameState = Literal["not_started", "player_turn", "cpu_turn", "pile_captured", "game_over"]

FACES: tuple[Face, ...] = (
    "Ace",
    "Deuce",
    "Three",
    "Four",
    "Five",
    "Six",
    "Seven",
    "Eight",
    "Nine",
    "Ten",
    "Jack",
    "Queen",
    "King",
)
SUITS: tuple[Suit, ...] = ("Hearts", "Diamonds", "Clubs", "Spades")
LEVELS: tuple[Level, ...] = ("beginner", "intermediate", "advanced")

DECK_SIZE = 52
HAND_SIZE = 4

PLAYER = 0
CPU = 1

JACK: Face = "Jack"


@dataclass(frozen=True)
class Card:
    face: Face
    suit: Suit
    identifier: str  # resolves to assets/cards/<identifier>.png

    @property
    def is_jack(self) -> bool:
        return self.face == JACK

    def __str__(self) -> str:
        return f"{self.face} of {self.suit}"


def build_deck() -> tuple[Card, ...]:
    """The 52 distinct cards in their unshuffled order.

    Position i holds face i % 13 of suit i // 13, identified as str(i + 1).
    """
    return tuple(
        Card(face=FACES[i % 13], suit=SUITS[i // 13], identifier=str(i + 1)) for i in range(DECK_SIZE)
    )


def occupied(hand: Sequence[Card | None]) -> int:
    return sum(1 for c in hand if c is not None)


@dataclass(frozen=True)
class PointRule:
    face: Face
    suit: Suit | None  # None matches every suit
    points: int

    def matches(self, card: Card) -> bool:
        return card.face == self.face and (self.suit is None or card.suit == self.suit)


def _default_point_rules() -> tuple[PointRule, ...]:
    return (
        PointRule(face="Jack", suit=None, points=1),
        PointRule(face="Ace", suit=None, points=1),
        PointRule(face="Deuce", suit="Clubs", points=2),
        PointRule(face="Ten", suit="Diamonds", points=3),
    )


@dataclass(frozen=True)
class RuleSet:
    """Immutable scoring constants used by the engine.

    Defaults mirror data/rules.json so the engine runs without loading content.
    """

    pisti_points: int = 10
    jack_pisti_points: int = 20
    majority_bonus: int = 3
    point_rules: tuple[PointRule, ...] = field(default_factory=_default_point_rules)
