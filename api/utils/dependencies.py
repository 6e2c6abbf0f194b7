"""
FastAPI dependency functions.
"""
from fastapi import HTTPException, Query, Request, status
from typing import Optional

from schemas import FilterBand
from services.leaderboard_service import LeaderboardContext
from services.rating_service import RatingService
from tasks.refresh_scheduler import RefreshScheduler


def get_leaderboard_context(request: Request) -> LeaderboardContext:
    """
    Dependency returning the leaderboard context built at startup.

    Raises:
        HTTPException: If the application has not finished starting
    """
    context = getattr(request.app.state, "leaderboard", None)
    if context is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Leaderboard is not initialized",
        )
    return context


def get_filter_band(
    band: Optional[str] = Query(None, description="Rating band: all, expert, specialist, pupil or newbie"),
) -> FilterBand:
    """
    Dependency parsing the rating band filter.

    Raises:
        HTTPException: If the band is unknown
    """
    try:
        return RatingService.parse_band(band)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid band. Must be one of: {', '.join(b.value for b in FilterBand)}"
        )


def get_refresh_scheduler(request: Request) -> RefreshScheduler:
    """
    Dependency returning the refresh scheduler built at startup.

    Raises:
        HTTPException: If the application has not finished starting
    """
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Leaderboard is not initialized",
        )
    return scheduler
