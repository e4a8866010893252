from __future__ import annotations

from cards import card_of
from pishti.engine.scoring import card_value, is_capture, pile_points, score_capture
from pishti.engine.types import PointRule, RuleSet, build_deck


def test_point_table() -> None:
    rules = RuleSet()
    assert card_value(card_of("Jack", "Hearts"), rules) == 1
    assert card_value(card_of("Ace", "Spades"), rules) == 1
    assert card_value(card_of("Deuce", "Clubs"), rules) == 2
    assert card_value(card_of("Deuce", "Hearts"), rules) == 0
    assert card_value(card_of("Ten", "Diamonds"), rules) == 3
    assert card_value(card_of("Ten", "Clubs"), rules) == 0
    assert card_value(card_of("King", "Clubs"), rules) == 0
    assert card_value(None, rules) == 0


def test_whole_deck_is_worth_thirteen() -> None:
    # 4 Jacks + 4 Aces + Deuce of Clubs + Ten of Diamonds
    assert pile_points(build_deck(), RuleSet()) == 4 + 4 + 2 + 3


def test_sweep_with_every_scoring_card() -> None:
    pile = [
        card_of("Ace", "Hearts"),
        card_of("Deuce", "Clubs"),
        card_of("Ten", "Diamonds"),
        card_of("Jack", "Spades"),
    ]
    cap = score_capture(pile, RuleSet())
    assert cap is not None
    assert cap.kind == "sweep"
    assert cap.points == 1 + 1 + 2 + 3
    assert cap.collected == 4


def test_two_card_match_is_pisti() -> None:
    cap = score_capture([card_of("Seven", "Hearts"), card_of("Seven", "Clubs")], RuleSet())
    assert cap is not None
    assert cap.kind == "pisti"
    assert cap.points == 10
    assert cap.collected == 2


def test_jack_on_jack_is_jack_pisti() -> None:
    cap = score_capture([card_of("Jack", "Hearts"), card_of("Jack", "Clubs")], RuleSet())
    assert cap is not None
    assert cap.kind == "jack_pisti"
    assert cap.points == 20
    assert cap.collected == 2


def test_jack_on_other_single_card_is_a_sweep() -> None:
    cap = score_capture([card_of("Ace", "Hearts"), card_of("Jack", "Clubs")], RuleSet())
    assert cap is not None
    assert cap.kind == "sweep"
    assert cap.points == 2
    assert cap.collected == 2


def test_match_on_bigger_pile_scores_whole_pile() -> None:
    pile = [card_of("Ace", "Hearts"), card_of("Nine", "Spades"), card_of("Nine", "Hearts")]
    cap = score_capture(pile, RuleSet())
    assert cap is not None
    assert cap.kind == "sweep"
    assert cap.points == 1
    assert cap.collected == 3


def test_no_capture() -> None:
    assert not is_capture([card_of("Ace", "Hearts")])
    assert not is_capture([card_of("Ace", "Hearts"), card_of("King", "Hearts")])
    assert score_capture([card_of("Ace", "Hearts"), card_of("King", "Hearts")], RuleSet()) is None
    assert score_capture([], RuleSet()) is None


def test_custom_rules() -> None:
    rules = RuleSet(
        pisti_points=5,
        point_rules=(PointRule(face="Queen", suit=None, points=4),),
    )
    assert card_value(card_of("Queen", "Spades"), rules) == 4
    assert card_value(card_of("Ace", "Spades"), rules) == 0
    cap = score_capture([card_of("Four", "Hearts"), card_of("Four", "Clubs")], rules)
    assert cap is not None and cap.points == 5
