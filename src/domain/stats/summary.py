"""Single-player profile totals."""

from __future__ import annotations

from collections.abc import Iterable

from domain.common import MatchResultRow, Outcome, PlayerSummary
from domain.protocol import CategoryPredicate, GameType, game_type_in
from domain.stats.aggregator import compute_category_averages
from domain.stats.outcomes import tally_outcomes

THREE_DART_GAME_TYPES: tuple[str, ...] = (GameType.X501.value, GameType.X301.value)
MPR_GAME_TYPES: tuple[str, ...] = (GameType.CRICKET.value,)


def compute_player_summary(
    rows: Iterable[MatchResultRow],
    player_id: str,
    *,
    three_dart: CategoryPredicate | None = None,
    mpr: CategoryPredicate | None = None,
) -> PlayerSummary:
    """Overall record plus 3-dart and MPR averages for one player.

    Averages are reported as ``0.0`` when the player has no qualifying games;
    the matching ``*_games`` count tells the caller whether it is meaningful.
    """
    player_rows = [row for row in rows if row.player_id and row.player_id == player_id]
    tally = tally_outcomes(
        Outcome(played_at=row.played_at, is_win=row.is_winner) for row in player_rows
    )

    three_dart_records = compute_category_averages(
        player_rows, three_dart or game_type_in(THREE_DART_GAME_TYPES)
    )
    mpr_records = compute_category_averages(player_rows, mpr or game_type_in(MPR_GAME_TYPES))
    three_dart_record = three_dart_records[0] if three_dart_records else None
    mpr_record = mpr_records[0] if mpr_records else None

    return PlayerSummary(
        player_id=player_id,
        games=tally.games,
        wins=tally.wins,
        losses=tally.losses,
        win_pct=tally.win_pct,
        streak=tally.streak,
        last5=tally.last5,
        last10=tally.last10,
        three_dart_avg=three_dart_record.avg if three_dart_record else 0.0,
        three_dart_games=three_dart_record.games if three_dart_record else 0,
        mpr_avg=mpr_record.avg if mpr_record else 0.0,
        mpr_games=mpr_record.games if mpr_record else 0,
    )


__all__ = ["MPR_GAME_TYPES", "THREE_DART_GAME_TYPES", "compute_player_summary"]
