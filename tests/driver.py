from __future__ import annotations

from collections.abc import Callable

from pishti.engine import GameEngine
from pishti.engine.types import occupied


def first_slot(engine: GameEngine) -> int:
    return next(i for i, c in enumerate(engine.data.player_hand) if c is not None)


def step(engine: GameEngine, pick: Callable[[GameEngine], int] = first_slot) -> None:
    """Issue the one command the table scene would issue next."""
    s = engine.data
    if engine.state == "pile_captured":
        assert engine.finalize_capture().ok
    elif engine.state == "cpu_turn" or occupied(s.cpu_hand) > occupied(s.player_hand):
        assert engine.computer_plays().ok
    elif engine.is_hand_finished():
        assert engine.check_end_of_hand().ok
    else:
        assert engine.player_plays(pick(engine)).ok


def play_out(
    engine: GameEngine,
    pick: Callable[[GameEngine], int] = first_slot,
    on_step: Callable[[GameEngine], None] | None = None,
) -> None:
    for _ in range(1000):
        if engine.state == "game_over":
            return
        step(engine, pick)
        if on_step is not None:
            on_step(engine)
    raise AssertionError("game did not finish")
