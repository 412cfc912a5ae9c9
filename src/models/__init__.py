"""ORM models."""

from models.base import Base
from models.match import Match, MatchPlayer
from models.profile import Profile

__all__ = ["Base", "Match", "MatchPlayer", "Profile"]
