"""Persistence helpers for player profiles."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from domain.players import ProfileListing, search_profiles
from models import Profile

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "display_name",
    "first_name",
    "last_name",
    "sex",
    "include_first_name_in_display",
)


def get_profile(session: Session, profile_id: str) -> Profile | None:
    return session.get(Profile, profile_id)


def save_profile(
    session: Session,
    profile_id: str,
    *,
    display_name: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    sex: str | None = None,
    include_first_name_in_display: bool | None = None,
    clear: Iterable[str] = (),
) -> Profile:
    """Create a profile or update only the fields that were passed.

    ``None`` keeps the stored value and blank strings are stored as null.
    Fields named in ``clear`` are reset to null.
    """
    cleared = set(clear)
    unknown = cleared.difference(PROFILE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown profile field(s) to clear: {', '.join(sorted(unknown))}")

    profile = session.get(Profile, profile_id)
    if profile is None:
        profile = Profile(id=profile_id)
        session.add(profile)

    updates: dict[str, object] = {
        "display_name": display_name,
        "first_name": first_name,
        "last_name": last_name,
        "sex": sex,
        "include_first_name_in_display": include_first_name_in_display,
    }
    for name, value in updates.items():
        if name in cleared:
            setattr(profile, name, None)
        elif isinstance(value, str):
            setattr(profile, name, _blank_to_none(value))
        elif value is not None:
            setattr(profile, name, value)
    session.flush()
    return profile


def list_profiles(session: Session, search_term: str = "") -> list[ProfileListing]:
    """Profiles sorted by name, optionally filtered by a search term."""
    listings = [
        ProfileListing(
            id=profile.id,
            display_name=profile.display_name,
            first_name=profile.first_name,
            last_name=profile.last_name,
            include_first_name_in_display=profile.include_first_name_in_display,
        )
        for profile in session.scalars(select(Profile))
    ]
    return search_profiles(listings, search_term)


def delete_profile(session: Session, profile_id: str) -> bool:
    """Delete a profile's data row; returns ``False`` when it did not exist.

    Participant rows cascade with it and matches it created keep a null
    ``created_by``.
    """
    result = session.execute(delete(Profile).where(Profile.id == profile_id))
    deleted = bool(result.rowcount)
    if deleted:
        logger.info("deleted profile id=%s", profile_id)
    else:
        logger.warning("no profile to delete for id=%s", profile_id)
    return deleted


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


__all__ = ["PROFILE_FIELDS", "delete_profile", "get_profile", "list_profiles", "save_profile"]
