"""Tests for flattening joined match_players payloads."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from repositories.match_results import (
    EPOCH,
    load_rows_from_json,
    normalize_joined_payload,
)


def _payload(**overrides):
    payload = {
        "player_id": "p1",
        "match_id": 7,
        "is_winner": True,
        "score": 88.5,
        "profiles": {"id": "p1", "display_name": "Treble Top", "first_name": "Tess"},
        "matches": {"game_type": "501", "played_at": "2025-12-18T23:30:00+00:00"},
    }
    payload.update(overrides)
    return payload


def test_object_relations_are_flattened() -> None:
    row = normalize_joined_payload(_payload())

    assert row is not None
    assert row.player_id == "p1"
    assert row.match_id == 7
    assert row.is_winner is True
    assert row.score == pytest.approx(88.5)
    assert row.game_type == "501"
    assert row.display_name == "Treble Top (Tess)"
    assert row.played_at == datetime(2025, 12, 18, 23, 30, 0)


def test_single_element_list_relations_are_flattened() -> None:
    payload = _payload(
        profiles=[{"display_name": "Treble Top", "first_name": None}],
        matches=[{"game_type": "Cricket", "played_at": "2025-12-18T18:00:00"}],
    )
    row = normalize_joined_payload(payload)

    assert row is not None
    assert row.display_name == "Treble Top"
    assert row.game_type == "Cricket"
    assert row.played_at == datetime(2025, 12, 18, 18, 0, 0)


def test_missing_relations_fall_back_to_defaults() -> None:
    row = normalize_joined_payload(_payload(profiles=[], matches=None, is_winner=None, score=None))

    assert row is not None
    assert row.display_name == "Unknown player"
    assert row.game_type is None
    assert row.played_at == EPOCH
    assert row.is_winner is False
    assert row.score is None


def test_timezone_offsets_are_normalized_to_utc() -> None:
    row = normalize_joined_payload(
        _payload(matches={"game_type": "301", "played_at": "2025-12-18T18:00:00-05:00"})
    )
    assert row is not None
    assert row.played_at == datetime(2025, 12, 18, 23, 0, 0)


def test_payload_without_player_id_is_rejected() -> None:
    assert normalize_joined_payload(_payload(player_id=None)) is None
    assert normalize_joined_payload(_payload(player_id="")) is None


def test_load_rows_from_json_skips_invalid_payloads(tmp_path: Path) -> None:
    rows_path = tmp_path / "rows.json"
    rows_path.write_text(json.dumps([_payload(), _payload(player_id=None), "junk"]))

    rows = load_rows_from_json(rows_path)
    assert [row.player_id for row in rows] == ["p1"]


def test_load_rows_from_json_requires_array(tmp_path: Path) -> None:
    rows_path = tmp_path / "rows.json"
    rows_path.write_text(json.dumps({"player_id": "p1"}))

    with pytest.raises(ValueError, match="expected a JSON array"):
        load_rows_from_json(rows_path)
