"""
Directory endpoints - the list of tracked handles.
"""
from fastapi import APIRouter, Depends
import logging

from schemas import DirectoryResponse
from services.leaderboard_service import LeaderboardContext
from utils.dependencies import get_leaderboard_context

router = APIRouter()
logger = logging.getLogger(__name__)


def _directory_response(context: LeaderboardContext) -> DirectoryResponse:
    return DirectoryResponse(
        identifiers=context.identifiers or [],
        using_fallback=context.using_fallback,
        warning=context.directory_warning,
    )


@router.get("", response_model=DirectoryResponse)
async def get_directory(
    context: LeaderboardContext = Depends(get_leaderboard_context),
):
    """Get the handles used by the next leaderboard refresh."""
    return _directory_response(context)


@router.post("/reload", response_model=DirectoryResponse)
async def reload_directory(
    context: LeaderboardContext = Depends(get_leaderboard_context),
):
    """
    Reload handles from the spreadsheet.

    - Falls back to the sample handles if the spreadsheet cannot be read
    - Does not refresh the leaderboard; the next refresh uses the new list
    """
    await context.load_directory()
    logger.info(f"Directory reloaded: {len(context.identifiers)} users (fallback={context.using_fallback})")
    return _directory_response(context)
