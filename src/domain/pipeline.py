"""Leaderboard and profile pipelines: fetch rows once, run every aggregation over them."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from domain.common import (
    CategoryRecord,
    Leaderboard,
    MatchResultRow,
    PlayerSummary,
    WinLossRecord,
)
from domain.config import StatsConfig
from domain.stats import (
    compute_category_averages,
    compute_game_type_breakdown,
    compute_head_to_head,
    compute_overall_records,
    compute_player_summary,
)

FetchRowsFn = Callable[[Session, str | None], list[MatchResultRow]]


@dataclass(frozen=True)
class PlayerReport:
    """Everything the player profile view shows."""

    summary: PlayerSummary
    breakdown: tuple[CategoryRecord, ...]
    head_to_head: tuple[WinLossRecord, ...]


def build_leaderboard(
    rows: Sequence[MatchResultRow],
    stats: StatsConfig | None = None,
) -> Leaderboard:
    """Overall, 3-dart and MPR tables over one row set."""
    stats = stats or StatsConfig()
    return Leaderboard(
        overall=tuple(compute_overall_records(rows)),
        three_dart=tuple(compute_category_averages(rows, stats.three_dart_predicate())),
        mpr=tuple(compute_category_averages(rows, stats.mpr_predicate())),
    )


def build_player_report(
    rows: Sequence[MatchResultRow],
    player_id: str,
    stats: StatsConfig | None = None,
) -> PlayerReport:
    """Profile totals, per-game-type breakdown and head-to-head for ``player_id``.

    ``rows`` must contain every participant of the player's matches, not
    only the player's own rows, or head-to-head comes back empty.
    """
    stats = stats or StatsConfig()
    return PlayerReport(
        summary=compute_player_summary(
            rows,
            player_id,
            three_dart=stats.three_dart_predicate(),
            mpr=stats.mpr_predicate(),
        ),
        breakdown=tuple(compute_game_type_breakdown(rows, player_id)),
        head_to_head=tuple(compute_head_to_head(rows, player_id)),
    )


def load_leaderboard(
    *,
    session_factory,
    fetch_rows: FetchRowsFn,
    stats: StatsConfig | None = None,
) -> Leaderboard:
    """Fetch every row in one session, then aggregate.

    Fetch errors propagate so callers can tell "could not load" apart from
    an empty league.
    """
    with session_factory() as session:
        rows = fetch_rows(session, None)
    return build_leaderboard(rows, stats)


__all__ = [
    "PlayerReport",
    "build_leaderboard",
    "build_player_report",
    "load_leaderboard",
]
