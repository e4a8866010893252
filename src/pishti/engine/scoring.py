from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from .types import Card, RuleSet

CaptureKind = Literal["pisti", "jack_pisti", "sweep"]


@dataclass(frozen=True)
class Capture:
    kind: CaptureKind
    points: int
    collected: int


def card_value(card: Card | None, rules: RuleSet) -> int:
    if card is None:
        return 0
    for rule in rules.point_rules:
        if rule.matches(card):
            return rule.points
    return 0


def pile_points(pile: Sequence[Card], rules: RuleSet) -> int:
    return sum(card_value(c, rules) for c in pile)


def is_capture(pile: Sequence[Card]) -> bool:
    """True when the top card takes the pile: same face as the card beneath, or a Jack."""
    if len(pile) < 2:
        return False
    top, below = pile[-1], pile[-2]
    return top.face == below.face or top.is_jack


def score_capture(pile: Sequence[Card], rules: RuleSet) -> Capture | None:
    """Classify and score the pile after its top card was played.

    A two-card pile of matching faces is a pisti (a Jack on a Jack pays the
    jack pisti bonus) and collects exactly those two cards. Anything else that
    captures is a sweep valued over the whole pile.
    """
    if not is_capture(pile):
        return None
    top, below = pile[-1], pile[-2]
    if len(pile) == 2 and top.face == below.face:
        if top.is_jack:
            return Capture(kind="jack_pisti", points=rules.jack_pisti_points, collected=2)
        return Capture(kind="pisti", points=rules.pisti_points, collected=2)
    return Capture(kind="sweep", points=pile_points(pile, rules), collected=len(pile))
