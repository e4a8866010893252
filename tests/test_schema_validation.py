from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from pishti.engine import RuleSet
from pishti.paths import get_paths
from pishti.services.content import ContentError, ContentService


def test_schema_validation_passes_for_repo_content() -> None:
    paths = get_paths()
    svc = ContentService(paths.data_dir, paths.schema_dir)
    svc.validate_all()


def test_shipped_rules_match_defaults() -> None:
    paths = get_paths()
    svc = ContentService(paths.data_dir, paths.schema_dir)
    assert svc.load_rules() == RuleSet()


def test_sound_catalog_names_every_effect() -> None:
    paths = get_paths()
    catalog = ContentService(paths.data_dir, paths.schema_dir).load_sounds()
    for name in ("card_play", "capture", "pisti", "pisti_jack", "deal", "undo", "player_wins", "cpu_wins", "tie"):
        assert name in catalog.effects
    assert catalog.rate_limit_ms == 10


def _copy_data(tmp_path: Path) -> Path:
    paths = get_paths()
    data = tmp_path / "data"
    shutil.copytree(paths.data_dir, data)
    return data


def test_invalid_rules_are_rejected(tmp_path: Path) -> None:
    data = _copy_data(tmp_path)
    rules_path = data / "rules.json"
    raw = json.loads(rules_path.read_text(encoding="utf-8"))
    raw["pisti_points"] = "ten"
    rules_path.write_text(json.dumps(raw), encoding="utf-8")
    with pytest.raises(ContentError):
        ContentService(data, data / "schemas").load_rules()


def test_missing_file_is_a_content_error(tmp_path: Path) -> None:
    data = _copy_data(tmp_path)
    (data / "sounds.json").unlink()
    with pytest.raises(ContentError):
        ContentService(data, data / "schemas").validate_all()
