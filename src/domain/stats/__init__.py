"""Player statistics aggregation."""

from domain.stats.aggregator import (
    compute_category_averages,
    compute_game_type_breakdown,
    compute_head_to_head,
    compute_overall_records,
    group_rows_by_match,
)
from domain.stats.outcomes import current_streak, rolling_record, tally_outcomes
from domain.stats.summary import compute_player_summary

__all__ = [
    "compute_category_averages",
    "compute_game_type_breakdown",
    "compute_head_to_head",
    "compute_overall_records",
    "compute_player_summary",
    "current_streak",
    "group_rows_by_match",
    "rolling_record",
    "tally_outcomes",
]
