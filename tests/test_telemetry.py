from __future__ import annotations

import json
from pathlib import Path

from pishti.engine import GameEngine
from pishti.services.telemetry import TelemetryService


def test_engine_events_are_written_as_jsonl(tmp_path: Path) -> None:
    engine = GameEngine(seed=11)
    engine.set_level("beginner")
    engine.start_game()
    engine.player_plays(0)

    tel = TelemetryService(tmp_path / "userdata" / "telemetry.jsonl")
    tel.log_engine_events(engine.event_log)
    lines = (tmp_path / "userdata" / "telemetry.jsonl").read_text(encoding="utf-8").splitlines()
    recs = [json.loads(line) for line in lines]
    assert [r["type"] for r in recs] == [e["type"] for e in engine.event_log]
    # the log starts with the game; earlier level changes are not part of it
    assert recs[0]["type"] == "HAND_DEALT"
    assert recs[0]["payload"] == {"cursor": 12}


def test_disabled_telemetry_writes_nothing(tmp_path: Path) -> None:
    path = tmp_path / "telemetry.jsonl"
    TelemetryService(path, enabled=False).log("game_start", {"level": "advanced"})
    assert not path.exists()
