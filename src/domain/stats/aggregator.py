"""Leaderboard aggregation over flat per-player match result rows.

Every function here is a pure transform of the rows it is given: nothing
is cached between calls and inputs are never mutated. Rows without a
``player_id`` are skipped.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from numbers import Number

from domain.common import (
    AverageRecord,
    CategoryRecord,
    MatchResultRow,
    Outcome,
    WinLossRecord,
)
from domain.protocol import GAME_TYPE_ORDER, CategoryPredicate, resolve_game_type
from domain.stats.outcomes import tally_outcomes


@dataclass
class _PlayerHistory:
    display_name: str
    outcomes: list[Outcome] = field(default_factory=list)


@dataclass
class _ScoreTotals:
    display_name: str
    total: float = 0.0
    games: int = 0


def _valid_rows(rows: Iterable[MatchResultRow]) -> Iterable[MatchResultRow]:
    for row in rows:
        if not row.player_id:
            continue
        yield row


def _has_numeric_score(row: MatchResultRow) -> bool:
    score = row.score
    if isinstance(score, (bool, complex)) or not isinstance(score, Number):
        return False
    # NaN never equals itself.
    return score == score


def _to_win_loss_record(player_id: str, history: _PlayerHistory) -> WinLossRecord:
    tally = tally_outcomes(history.outcomes)
    return WinLossRecord(
        player_id=player_id,
        display_name=history.display_name,
        wins=tally.wins,
        losses=tally.losses,
        games=tally.games,
        win_pct=tally.win_pct,
        streak=tally.streak,
        last5=tally.last5,
        last10=tally.last10,
    )


def _sorted_win_loss(records: Iterable[WinLossRecord]) -> list[WinLossRecord]:
    return sorted(
        records,
        key=lambda record: (record.win_pct, record.wins, record.games),
        reverse=True,
    )


def compute_overall_records(rows: Iterable[MatchResultRow]) -> list[WinLossRecord]:
    """Win/loss, streak and last-5/last-10 records per player across every game type."""
    histories: dict[str, _PlayerHistory] = {}
    for row in _valid_rows(rows):
        history = histories.get(row.player_id)
        if history is None:
            history = _PlayerHistory(display_name=row.display_name)
            histories[row.player_id] = history
        history.outcomes.append(Outcome(played_at=row.played_at, is_win=row.is_winner))

    return _sorted_win_loss(
        _to_win_loss_record(player_id, history) for player_id, history in histories.items()
    )


def compute_category_averages(
    rows: Iterable[MatchResultRow],
    predicate: CategoryPredicate,
) -> list[AverageRecord]:
    """Average ``score`` per player over rows matching ``predicate``.

    Rows without a numeric score do not count toward the average. Players
    with no qualifying rows are left out rather than reported as zero.
    """
    totals: dict[str, _ScoreTotals] = {}
    for row in _valid_rows(rows):
        if not predicate(row) or not _has_numeric_score(row):
            continue
        entry = totals.get(row.player_id)
        if entry is None:
            entry = _ScoreTotals(display_name=row.display_name)
            totals[row.player_id] = entry
        entry.total += float(row.score)  # type: ignore[arg-type]
        entry.games += 1

    records = [
        AverageRecord(
            player_id=player_id,
            display_name=entry.display_name,
            avg=entry.total / entry.games,
            games=entry.games,
        )
        for player_id, entry in totals.items()
        if entry.games > 0
    ]
    return sorted(records, key=lambda record: (record.avg, record.games), reverse=True)


def compute_game_type_breakdown(
    rows: Iterable[MatchResultRow],
    player_id: str,
) -> list[CategoryRecord]:
    """One record per game type for ``player_id``, zero-filled where nothing was played.

    Returns an empty list when the input holds no rows at all.
    """
    outcomes_by_type: dict[str, list[Outcome]] = {
        game_type.value: [] for game_type in GAME_TYPE_ORDER
    }
    saw_rows = False
    for row in _valid_rows(rows):
        saw_rows = True
        if row.player_id != player_id:
            continue
        category = resolve_game_type(row.game_type).value
        outcomes_by_type[category].append(Outcome(played_at=row.played_at, is_win=row.is_winner))

    if not saw_rows:
        return []

    records: list[CategoryRecord] = []
    for game_type in GAME_TYPE_ORDER:
        tally = tally_outcomes(outcomes_by_type[game_type.value])
        records.append(
            CategoryRecord(
                game_type=game_type.value,
                wins=tally.wins,
                losses=tally.losses,
                games=tally.games,
                win_pct=tally.win_pct,
                streak=tally.streak,
                last5=tally.last5,
                last10=tally.last10,
            )
        )
    return records


def group_rows_by_match(rows: Iterable[MatchResultRow]) -> dict[int, list[MatchResultRow]]:
    """Group participant rows by ``match_id``, preserving input order within a match."""
    grouped: dict[int, list[MatchResultRow]] = {}
    for row in _valid_rows(rows):
        grouped.setdefault(row.match_id, []).append(row)
    return grouped


def compute_head_to_head(
    rows: Iterable[MatchResultRow],
    player_id: str,
    matches: Mapping[int, Sequence[MatchResultRow]] | None = None,
) -> list[WinLossRecord]:
    """Record of ``player_id`` against every opponent it has shared a match with.

    Each non-selected participant of a match is an opponent, so a
    three-player match yields two head-to-head entries.
    """
    grouped = matches if matches is not None else group_rows_by_match(rows)

    histories: dict[str, _PlayerHistory] = {}
    for participants in grouped.values():
        selected = next((row for row in participants if row.player_id == player_id), None)
        if selected is None:
            continue

        seen: set[str] = set()
        for opponent in participants:
            if not opponent.player_id or opponent.player_id == player_id:
                continue
            if opponent.player_id in seen:
                continue
            seen.add(opponent.player_id)

            history = histories.get(opponent.player_id)
            if history is None:
                history = _PlayerHistory(display_name=opponent.display_name)
                histories[opponent.player_id] = history
            history.outcomes.append(
                Outcome(played_at=selected.played_at, is_win=selected.is_winner)
            )

    return _sorted_win_loss(
        _to_win_loss_record(opponent_id, history) for opponent_id, history in histories.items()
    )


__all__ = [
    "compute_category_averages",
    "compute_game_type_breakdown",
    "compute_head_to_head",
    "compute_overall_records",
    "group_rows_by_match",
]
