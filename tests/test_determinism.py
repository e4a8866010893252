from __future__ import annotations

import json

from driver import play_out
from pishti.engine import GameEngine
from pishti.engine.serialize import snapshot


def _run(seed: int, level: str) -> tuple[dict[str, object], list[dict[str, object]]]:
    engine = GameEngine(seed=seed)
    engine.set_level(level)
    engine.start_game()
    play_out(engine)
    return snapshot(engine), engine.event_log


def test_same_seed_same_game() -> None:
    for level in ("beginner", "intermediate", "advanced"):
        a_snap, a_log = _run(1234, level)
        b_snap, b_log = _run(1234, level)
        assert a_snap == b_snap
        assert a_log == b_log


def test_snapshot_is_json_serializable() -> None:
    snap, _ = _run(7, "intermediate")
    assert json.loads(json.dumps(snap)) == snap
    assert snap["state"] == "game_over"
