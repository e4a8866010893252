from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Mapping


@dataclass
class TelemetryService:
    """Append-only JSONL log of driver and engine events."""

    path: Path
    enabled: bool = True

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        if not self.enabled:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")

    def log_engine_events(self, events: Iterable[Mapping[str, object]]) -> None:
        for ev in events:
            payload = {k: v for k, v in ev.items() if k != "type"}
            self.log(str(ev.get("type", "ENGINE")), payload)
