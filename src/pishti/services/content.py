from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from pishti.engine.types import PointRule, RuleSet


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.path))
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


def _parse_point_rule(raw: Mapping[str, object]) -> PointRule:
    face = raw.get("face")
    suit = raw.get("suit")
    if not isinstance(face, str):
        raise ContentError("point rule missing face")
    if suit is not None and not isinstance(suit, str):
        raise ContentError("point rule suit must be a string")
    # schema restricts face/suit values
    return PointRule(face=face, suit=suit, points=_require_int(raw, "points"))  # type: ignore[arg-type]


@dataclass(frozen=True)
class SoundCatalog:
    effects: dict[str, str]
    rate_limit_ms: int
    background_volume: float = 0.15


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def _load_validated(self, name: str) -> dict[str, object]:
        path = self._data_dir / f"{name}.json"
        schema = _load_json(self._schema_dir / f"{name}.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError(f"{name}.json must be an object")
        return raw

    def load_rules(self) -> RuleSet:
        raw = self._load_validated("rules")
        rules_raw = raw.get("point_rules")
        if not isinstance(rules_raw, list):
            raise ContentError("rules.json.point_rules must be a list")
        point_rules = tuple(_parse_point_rule(r) for r in rules_raw if isinstance(r, dict))
        return RuleSet(
            pisti_points=_require_int(raw, "pisti_points"),
            jack_pisti_points=_require_int(raw, "jack_pisti_points"),
            majority_bonus=_require_int(raw, "majority_bonus"),
            point_rules=point_rules,
        )

    def load_sounds(self) -> SoundCatalog:
        raw = self._load_validated("sounds")
        effects_raw = raw.get("effects")
        if not isinstance(effects_raw, dict):
            raise ContentError("sounds.json.effects must be an object")
        effects = {k: v for k, v in effects_raw.items() if isinstance(k, str) and isinstance(v, str)}
        volume = raw.get("background_volume", 0.15)
        if not isinstance(volume, (int, float)):
            raise ContentError("background_volume must be a number")
        return SoundCatalog(
            effects=effects,
            rate_limit_ms=_require_int(raw, "rate_limit_ms"),
            background_volume=float(volume),
        )

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_rules()
        _ = self.load_sounds()
