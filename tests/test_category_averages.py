"""Unit tests for 3-dart average and MPR leaderboards."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from domain.common import MatchResultRow
from domain.protocol import game_type_in
from domain.stats import compute_category_averages

_START = datetime(2025, 12, 18, 18, 0, 0)
THREE_DART = game_type_in(("501", "301"))
MPR = game_type_in(("Cricket",))


def _row(
    player_id: str,
    match_id: int,
    *,
    game_type: str | None,
    score: float | None,
    won: bool = False,
) -> MatchResultRow:
    return MatchResultRow(
        player_id=player_id,
        match_id=match_id,
        played_at=_START + timedelta(hours=match_id),
        is_winner=won,
        display_name=player_id,
        game_type=game_type,
        score=score,
    )


def test_three_dart_and_mpr_use_separate_game_types() -> None:
    rows = [
        _row("p", 1, game_type="501", score=90.0),
        _row("p", 2, game_type="501", score=110.0),
        _row("p", 3, game_type="Cricket", score=3.0),
    ]

    (three_dart,) = compute_category_averages(rows, THREE_DART)
    (mpr,) = compute_category_averages(rows, MPR)

    assert three_dart.avg == pytest.approx(100.0)
    assert three_dart.games == 2
    assert mpr.avg == pytest.approx(3.0)
    assert mpr.games == 1


def test_rows_without_score_do_not_count_toward_average() -> None:
    rows = [
        _row("p", 1, game_type="301", score=60.0),
        _row("p", 2, game_type="301", score=None),
    ]
    (record,) = compute_category_averages(rows, THREE_DART)
    assert record.avg == pytest.approx(60.0)
    assert record.games == 1


def test_players_without_qualifying_games_are_omitted() -> None:
    rows = [
        _row("a", 1, game_type="501", score=70.0),
        _row("b", 1, game_type="Cricket", score=2.5),
        _row("c", 2, game_type="Other", score=250.0),
        _row("d", 3, game_type="501", score=None),
    ]
    records = compute_category_averages(rows, THREE_DART)
    assert [record.player_id for record in records] == ["a"]


def test_other_and_unknown_game_types_are_excluded_from_three_dart() -> None:
    rows = [
        _row("a", 1, game_type="Other", score=500.0),
        _row("a", 2, game_type=None, score=500.0),
    ]
    assert compute_category_averages(rows, THREE_DART) == []


def test_sorted_by_average_then_games() -> None:
    rows = [
        _row("a", 1, game_type="501", score=50.0),
        _row("b", 2, game_type="501", score=80.0),
        _row("c", 3, game_type="501", score=50.0),
        _row("c", 4, game_type="301", score=50.0),
    ]
    records = compute_category_averages(rows, THREE_DART)
    assert [record.player_id for record in records] == ["b", "c", "a"]


def test_non_numeric_scores_are_ignored() -> None:
    rows = [
        _row("a", 1, game_type="Cricket", score=float("nan")),
        _row("a", 2, game_type="Cricket", score=4.0),
    ]
    (record,) = compute_category_averages(rows, MPR)
    assert record.avg == pytest.approx(4.0)
    assert record.games == 1


def test_empty_input_returns_empty_list() -> None:
    assert compute_category_averages([], THREE_DART) == []
    assert compute_category_averages([], MPR) == []


def test_decimal_scores_count_toward_average() -> None:
    rows = [
        _row("p", 1, game_type="501", score=Decimal("90")),  # type: ignore[arg-type]
        _row("p", 2, game_type="301", score=Decimal("100.5")),  # type: ignore[arg-type]
    ]

    (record,) = compute_category_averages(rows, THREE_DART)
    assert record.games == 2
    assert record.avg == pytest.approx(95.25)


def test_repeated_calls_return_identical_output() -> None:
    rows = [
        _row("p", 1, game_type="501", score=90.0),
        _row("q", 2, game_type="501", score=70.0),
        _row("p", 3, game_type="Cricket", score=2.5),
    ]
    assert compute_category_averages(rows, THREE_DART) == compute_category_averages(rows, THREE_DART)
    assert compute_category_averages(rows, MPR) == compute_category_averages(rows, MPR)
