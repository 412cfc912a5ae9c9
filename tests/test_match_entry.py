"""Unit tests for match entry validation."""

from __future__ import annotations

import pytest

from domain.match_entry import MatchEntry, MatchEntryError, MatchRules, validate_match_entry


def _entry(
    game_type: str = "501",
    players: tuple[tuple[str, str], ...] = (("a", "65.5"), ("b", "58")),
    winner_id: str | None = "a",
) -> MatchEntry:
    return MatchEntry(game_type=game_type, players=players, winner_id=winner_id)


def test_valid_entry_returns_parsed_participants() -> None:
    participants = validate_match_entry(_entry())

    assert [participant.player_id for participant in participants] == ["a", "b"]
    assert participants[0].score == pytest.approx(65.5)
    assert participants[0].is_winner is True
    assert participants[1].is_winner is False


def test_requires_at_least_two_players() -> None:
    with pytest.raises(MatchEntryError, match="at least 2 players"):
        validate_match_entry(_entry(players=(("a", "60"),)))


def test_rejects_more_than_max_players() -> None:
    players = tuple((f"p{index}", "40") for index in range(11))
    with pytest.raises(MatchEntryError, match="at most 10 players"):
        validate_match_entry(_entry(players=players, winner_id="p0"))


def test_rejects_missing_and_duplicate_players() -> None:
    with pytest.raises(MatchEntryError, match="choose all players"):
        validate_match_entry(_entry(players=(("a", "60"), ("", "50"))))
    with pytest.raises(MatchEntryError, match="must be different"):
        validate_match_entry(_entry(players=(("a", "60"), ("a", "50"))))


def test_winner_must_be_selected_and_present() -> None:
    with pytest.raises(MatchEntryError, match="select the winner"):
        validate_match_entry(_entry(winner_id=None))
    with pytest.raises(MatchEntryError, match="Winner must be one of the selected players"):
        validate_match_entry(_entry(winner_id="z"))


@pytest.mark.parametrize(
    ("game_type", "stat"),
    [("501", "167.01"), ("301", "150.6"), ("Cricket", "9.5")],
)
def test_stats_over_cap_are_rejected(game_type: str, stat: str) -> None:
    with pytest.raises(MatchEntryError, match="cannot exceed"):
        validate_match_entry(_entry(game_type=game_type, players=(("a", stat), ("b", "1"))))


def test_stats_at_cap_are_accepted() -> None:
    participants = validate_match_entry(_entry(game_type="Cricket", players=(("a", "9"), ("b", "0"))))
    assert participants[0].score == pytest.approx(9.0)


def test_negative_stats_are_rejected() -> None:
    with pytest.raises(MatchEntryError, match="cannot be negative"):
        validate_match_entry(_entry(players=(("a", "-1"), ("b", "50"))))


def test_non_numeric_stats_are_rejected() -> None:
    with pytest.raises(MatchEntryError, match="valid numbers"):
        validate_match_entry(_entry(players=(("a", "lots"), ("b", "50"))))


def test_other_game_type_requires_whole_numbers_in_range() -> None:
    with pytest.raises(MatchEntryError, match="whole numbers"):
        validate_match_entry(_entry(game_type="Other", players=(("a", "250.5"), ("b", "10"))))
    with pytest.raises(MatchEntryError, match="between 1 and 9999"):
        validate_match_entry(_entry(game_type="Other", players=(("a", "0"), ("b", "10"))))

    participants = validate_match_entry(
        _entry(game_type="Other", players=(("a", "250"), ("b", "9999")))
    )
    assert [participant.score for participant in participants] == [250.0, 9999.0]


def test_other_game_type_accepts_whole_valued_decimal_and_exponent_forms() -> None:
    participants = validate_match_entry(
        _entry(game_type="Other", players=(("a", "250.0"), ("b", " 1e3 ")))
    )
    assert [participant.score for participant in participants] == [250.0, 1000.0]

    with pytest.raises(MatchEntryError, match="whole numbers"):
        validate_match_entry(_entry(game_type="Other", players=(("a", "nan"), ("b", "10"))))


def test_custom_rules_override_caps() -> None:
    rules = MatchRules(stat_caps={"501": 100.0})
    with pytest.raises(MatchEntryError, match="cannot exceed"):
        validate_match_entry(_entry(players=(("a", "101"), ("b", "50"))), rules)
