"""Unit tests for head-to-head records."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from domain.common import MatchResultRow
from domain.stats import compute_head_to_head, group_rows_by_match

_START = datetime(2026, 2, 5, 18, 0, 0)


def _match(match_id: int, winner: str, *players: str) -> list[MatchResultRow]:
    return [
        MatchResultRow(
            player_id=player_id,
            match_id=match_id,
            played_at=_START + timedelta(days=match_id),
            is_winner=player_id == winner,
            display_name=f"Player {player_id.upper()}",
            game_type="501",
        )
        for player_id in players
    ]


def test_one_on_one_record_against_each_opponent() -> None:
    rows = (
        _match(1, "a", "a", "b")
        + _match(2, "b", "a", "b")
        + _match(3, "a", "a", "b")
        + _match(4, "c", "a", "c")
    )
    records = {record.player_id: record for record in compute_head_to_head(rows, "a")}

    assert set(records) == {"b", "c"}
    assert records["b"].wins == 2
    assert records["b"].losses == 1
    assert records["b"].streak == "W1"
    assert records["b"].last5 == "2-1"
    assert records["b"].display_name == "Player B"
    assert records["c"].wins == 0
    assert records["c"].losses == 1
    assert records["c"].win_pct == 0.0


def test_multi_player_match_counts_every_opponent() -> None:
    rows = _match(1, "a", "a", "b", "c")
    records = {record.player_id: record for record in compute_head_to_head(rows, "a")}

    assert set(records) == {"b", "c"}
    assert records["b"].wins == 1
    assert records["c"].wins == 1


def test_loss_in_multi_player_match_is_a_loss_against_everyone() -> None:
    rows = _match(1, "c", "a", "b", "c")
    records = {record.player_id: record for record in compute_head_to_head(rows, "a")}
    assert records["b"].losses == 1
    assert records["c"].losses == 1


def test_matches_without_selected_player_are_ignored() -> None:
    rows = _match(1, "b", "b", "c") + _match(2, "a", "a", "b")
    (record,) = compute_head_to_head(rows, "a")
    assert record.player_id == "b"
    assert record.games == 1


def test_solo_match_produces_no_entries() -> None:
    assert compute_head_to_head(_match(1, "a", "a"), "a") == []


def test_one_on_one_games_are_symmetric() -> None:
    rows = (
        _match(1, "a", "a", "b")
        + _match(2, "b", "a", "b")
        + _match(3, "b", "b", "c")
        + _match(4, "a", "a", "c")
    )
    a_vs_b = next(record for record in compute_head_to_head(rows, "a") if record.player_id == "b")
    b_vs_a = next(record for record in compute_head_to_head(rows, "b") if record.player_id == "a")
    assert a_vs_b.games == b_vs_a.games == 2
    assert a_vs_b.wins == b_vs_a.losses


def test_precomputed_grouping_matches_internal_grouping() -> None:
    rows = _match(1, "a", "a", "b") + _match(2, "b", "a", "b", "c")
    grouped = group_rows_by_match(rows)
    assert compute_head_to_head(rows, "a", grouped) == compute_head_to_head(rows, "a")


def test_sorted_like_overall_leaderboard() -> None:
    rows = _match(1, "a", "a", "b") + _match(2, "c", "a", "c") + _match(3, "a", "a", "c")
    records = compute_head_to_head(rows, "a")
    assert [record.player_id for record in records] == ["b", "c"]
    assert records[1].win_pct == pytest.approx(50.0)


def test_empty_input_returns_empty_list() -> None:
    assert compute_head_to_head([], "a") == []


def test_repeated_calls_return_identical_output() -> None:
    rows = (
        _match(1, "a", "a", "b")
        + _match(2, "b", "a", "b", "c")
        + _match(3, "c", "a", "c")
    )
    assert compute_head_to_head(rows, "a") == compute_head_to_head(rows, "a")
