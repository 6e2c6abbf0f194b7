"""
Leaderboard endpoints - HTML page, JSON snapshot and manual refresh.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse
from typing import List
import logging

from exceptions import AggregationError
from schemas import (
    FilterBand,
    LeaderboardResponse,
    RatingTier,
    RefreshResponse,
)
from services.leaderboard_service import LeaderboardContext
from services.rating_service import RatingService
from services.render_service import RenderService
from tasks.refresh_scheduler import RefreshScheduler
from utils.dependencies import get_filter_band, get_leaderboard_context, get_refresh_scheduler

router = APIRouter()
page_router = APIRouter()
logger = logging.getLogger(__name__)


@page_router.get("/", response_class=HTMLResponse)
async def leaderboard_page(
    band: FilterBand = Depends(get_filter_band),
    context: LeaderboardContext = Depends(get_leaderboard_context),
):
    """
    Render the leaderboard page.

    - **band**: Optional rating band filter (defaults to all)
    """
    return RenderService.render_page(
        context.snapshot,
        band=band,
        is_refreshing=context.is_refreshing,
        error=context.last_error,
        warning=context.directory_warning,
    )


@page_router.post("/refresh")
async def leaderboard_page_refresh(
    band: FilterBand = Depends(get_filter_band),
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
):
    """Refresh button target. Errors are shown on the page after the redirect."""
    try:
        await scheduler.trigger()
    except AggregationError as e:
        logger.error(f"Manual refresh from page failed: {e}")

    url = "/" if band == FilterBand.ALL else f"/?band={band.value}"
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(
    band: FilterBand = Depends(get_filter_band),
    context: LeaderboardContext = Depends(get_leaderboard_context),
):
    """
    Get the current leaderboard snapshot.

    - **band**: 'all', 'expert', 'specialist', 'pupil' or 'newbie'
    - Summary numbers always cover the whole snapshot, not just the filtered rows
    """
    snapshot = context.snapshot

    return LeaderboardResponse(
        band=band,
        count=snapshot.count,
        average_rating=snapshot.average_rating,
        max_rating=snapshot.max_rating,
        generated_at=snapshot.generated_at,
        rows=RenderService.render_rows(snapshot, band),
        is_refreshing=context.is_refreshing,
        error=context.last_error,
        directory_warning=context.directory_warning,
    )


@router.post("/refresh", response_model=RefreshResponse, status_code=status.HTTP_202_ACCEPTED)
async def trigger_refresh(
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
):
    """
    Manually trigger a leaderboard refresh.

    - Ignored if a refresh is already running
    - Waits for the pass to finish
    """
    try:
        snapshot = await scheduler.trigger()
    except AggregationError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to update leaderboard: {str(e)}"
        )

    if snapshot is None:
        return RefreshResponse(triggered=False, message="Refresh already in progress")

    return RefreshResponse(triggered=True, message="Leaderboard refreshed", count=snapshot.count)


@router.get("/tiers", response_model=List[RatingTier])
async def get_tiers():
    """List the rating tiers, highest first."""
    return RatingService.all_tiers()
