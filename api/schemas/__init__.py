"""
Pydantic schemas for request/response validation.
"""
from .leaderboard import (
    UNRATED_LABEL,
    FilterBand,
    ProfileRecord,
    LeaderboardSnapshot,
    RatingTier,
    DisplayRow,
    LeaderboardResponse,
    RefreshResponse,
    DirectoryResponse,
)

__all__ = [
    # Domain schemas
    "UNRATED_LABEL",
    "FilterBand",
    "ProfileRecord",
    "LeaderboardSnapshot",
    "RatingTier",
    # API schemas
    "DisplayRow",
    "LeaderboardResponse",
    "RefreshResponse",
    "DirectoryResponse",
]
