"""Player display-name formatting and profile list helpers."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

UNKNOWN_PLAYER = "Unknown player"

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ProfileListing:
    """Name fields of one profile, as shown on the player directory."""

    id: str
    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    include_first_name_in_display: bool | None = None


def format_player_name(
    display_name: str | None,
    first_name: str | None,
    include_first_name: bool | None = None,
) -> str:
    """``"Display (First)"`` when both are set; ``None`` for ``include_first_name`` means include."""
    show_first = True if include_first_name is None else include_first_name
    display = (display_name or "").strip()
    first = (first_name or "").strip()

    if display and first and show_first:
        return f"{display} ({first})"
    if display:
        return display
    if first:
        return first
    return UNKNOWN_PLAYER


def sortable_name(profile: ProfileListing) -> str:
    display = (profile.display_name or "").strip()
    full_name = _WHITESPACE.sub(
        " ", f"{profile.first_name or ''} {profile.last_name or ''}".strip()
    )
    return display or full_name or UNKNOWN_PLAYER


def sort_profiles(profiles: Iterable[ProfileListing]) -> list[ProfileListing]:
    return sorted(profiles, key=lambda profile: sortable_name(profile).casefold())


def search_profiles(profiles: Iterable[ProfileListing], term: str) -> list[ProfileListing]:
    """Sorted profiles whose display, first or last name contains ``term`` (case-insensitive)."""
    ordered = sort_profiles(profiles)
    needle = term.strip().lower()
    if not needle:
        return ordered

    return [
        profile
        for profile in ordered
        if needle
        in " ".join(
            (field or "").lower()
            for field in (profile.display_name, profile.first_name, profile.last_name)
        )
    ]


__all__ = [
    "ProfileListing",
    "UNKNOWN_PLAYER",
    "format_player_name",
    "search_profiles",
    "sort_profiles",
    "sortable_name",
]
