"""Unit tests for streak and rolling-window arithmetic."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from domain.common import Outcome
from domain.stats.outcomes import (
    chronological,
    current_streak,
    rolling_record,
    tally_outcomes,
    win_percentage,
)

_START = datetime(2025, 12, 1, 19, 0, 0)


def _history(pattern: str) -> list[Outcome]:
    return [
        Outcome(played_at=_START + timedelta(days=index), is_win=token == "W")
        for index, token in enumerate(pattern)
    ]


def test_empty_history_has_no_streak_or_windows() -> None:
    tally = tally_outcomes([])
    assert tally.games == 0
    assert tally.win_pct == 0.0
    assert tally.streak == ""
    assert tally.last5 == ""
    assert tally.last10 == ""


def test_streak_counts_run_ending_at_latest_game() -> None:
    assert current_streak(_history("WLW")) == "W1"
    assert current_streak(_history("WWWLLL")) == "L3"
    assert current_streak(_history("LWWWW")) == "W4"


def test_rolling_record_uses_last_entries_only() -> None:
    history = _history("WWWLLL")
    assert rolling_record(history, 5) == "2-3"
    assert rolling_record(history, 10) == "3-3"


def test_rolling_record_rejects_non_positive_window() -> None:
    with pytest.raises(ValueError, match="window must be greater than 0"):
        rolling_record(_history("W"), 0)


def test_tally_sorts_out_of_order_input() -> None:
    ordered = _history("WLW")
    tally = tally_outcomes([ordered[2], ordered[0], ordered[1]])
    assert tally.wins == 2
    assert tally.losses == 1
    assert tally.streak == "W1"
    assert tally.win_pct == pytest.approx(200.0 / 3.0)


def test_chronological_keeps_input_order_for_identical_timestamps() -> None:
    first = Outcome(played_at=_START, is_win=True)
    second = Outcome(played_at=_START, is_win=False)
    assert chronological([first, second]) == [first, second]
    assert current_streak(chronological([first, second])) == "L1"


def test_win_percentage_defines_zero_over_zero() -> None:
    assert win_percentage(0, 0) == 0.0
    assert win_percentage(3, 4) == pytest.approx(75.0)
