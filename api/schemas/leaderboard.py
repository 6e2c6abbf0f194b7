"""
Pydantic schemas for profiles, leaderboard snapshots and display rows.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, List
from enum import Enum


UNRATED_LABEL = "unrated"


class FilterBand(str, Enum):
    """Rating bands selectable in the leaderboard filter."""
    ALL = "all"
    EXPERT = "expert"
    SPECIALIST = "specialist"
    PUPIL = "pupil"
    NEWBIE = "newbie"


class ProfileRecord(BaseModel):
    """Result of one successful profile lookup."""
    model_config = ConfigDict(frozen=True)

    identifier: str
    current_rating: int = 0
    max_rating: int = 0
    rank_label: str = UNRATED_LABEL
    rating_delta: int = 0  # new - old of the most recent rated contest
    event_count: int = 0  # number of rated contests
    last_seen: Optional[int] = None  # lastOnlineTimeSeconds, passed through
    title_photo: Optional[str] = None


class LeaderboardSnapshot(BaseModel):
    """Ranked result of one aggregation pass. Never mutated after creation."""
    model_config = ConfigDict(frozen=True)

    ordered_records: List[ProfileRecord] = Field(default_factory=list)
    count: int = 0
    average_rating: int = 0
    max_rating: int = 0
    generated_at: Optional[datetime] = None


class RatingTier(BaseModel):
    """Named rating band used for display styling."""
    model_config = ConfigDict(frozen=True)

    min_rating: int
    title: str
    css_class: str


class DisplayRow(BaseModel):
    """One visible leaderboard line."""
    position: int
    podium: int  # 1, 2, 3; everything below third place shares 3
    identifier: str
    profile_url: str
    current_rating: int
    max_rating: int
    tier_title: str
    tier_class: str
    event_count: int
    change_text: str
    change_class: str


class LeaderboardResponse(BaseModel):
    """Leaderboard payload returned by the JSON API."""
    band: FilterBand
    count: int
    average_rating: int
    max_rating: int
    generated_at: Optional[datetime] = None
    rows: List[DisplayRow]
    is_refreshing: bool = False
    error: Optional[str] = None
    directory_warning: Optional[str] = None


class RefreshResponse(BaseModel):
    """Result of a manual refresh trigger."""
    triggered: bool
    message: str
    count: Optional[int] = None


class DirectoryResponse(BaseModel):
    """Handles currently tracked by the leaderboard."""
    identifiers: List[str]
    using_fallback: bool = False
    warning: Optional[str] = None
