"""Database repository helpers."""

from repositories.match_results import (
    fetch_match_result_rows,
    fetch_rows_for_player_matches,
    load_rows_from_json,
    normalize_joined_payload,
)
from repositories.matches import (
    MatchNotFoundError,
    MatchPage,
    MatchPermissionError,
    delete_match,
    fetch_recent_matches,
    list_matches_page,
    record_match,
    update_match,
)
from repositories.profiles import delete_profile, get_profile, list_profiles, save_profile
from repositories.schema import ensure_schema

__all__ = [
    "MatchNotFoundError",
    "MatchPage",
    "MatchPermissionError",
    "delete_match",
    "delete_profile",
    "ensure_schema",
    "fetch_match_result_rows",
    "fetch_recent_matches",
    "fetch_rows_for_player_matches",
    "get_profile",
    "list_matches_page",
    "list_profiles",
    "load_rows_from_json",
    "normalize_joined_payload",
    "record_match",
    "save_profile",
    "update_match",
]
