"""
FastAPI application entry point for the Codeforces Leaderboard.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config import settings
from services.codeforces_client import CodeforcesClient
from services.directory_service import GoogleSheetsDirectory
from services.leaderboard_service import LeaderboardAggregator, LeaderboardContext
from tasks.refresh_scheduler import RefreshScheduler

# Import routers
from routers import leaderboard, directory

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Codeforces Leaderboard",
    description="Codeforces ratings for the handles listed in a Google spreadsheet",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def build_context() -> LeaderboardContext:
    """Wire the directory, lookup client and aggregator from settings."""
    aggregator = LeaderboardAggregator(
        CodeforcesClient(),
        concurrency=settings.LOOKUP_CONCURRENCY,
        timeout=settings.LOOKUP_TIMEOUT_SECONDS,
    )
    return LeaderboardContext(GoogleSheetsDirectory(), aggregator)


@app.on_event("startup")
async def startup_event():
    """Load the directory and start the refresh loop."""
    logger.info("Starting Codeforces Leaderboard...")

    context = build_context()
    await context.load_directory()
    app.state.leaderboard = context

    # Manual refreshes go through the scheduler even when the periodic loop is off
    scheduler = RefreshScheduler(context)
    app.state.scheduler = scheduler
    if settings.ENABLE_SCHEDULER:
        scheduler.start()
    else:
        logger.info("Periodic refresh disabled")


@app.on_event("shutdown")
async def shutdown_event():
    """Stop the refresh loop and close HTTP clients."""
    logger.info("Shutting down Codeforces Leaderboard...")

    scheduler = getattr(app.state, "scheduler", None)
    if scheduler is not None:
        await scheduler.stop()

    context = getattr(app.state, "leaderboard", None)
    if context is not None:
        await context.close()


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    context = getattr(app.state, "leaderboard", None)
    scheduler = getattr(app.state, "scheduler", None)
    return {
        "status": "healthy" if context is not None else "starting",
        "scheduler": "running" if scheduler is not None and scheduler.is_running else "stopped",
        "users": len(context.identifiers or []) if context is not None else 0,
    }


# Include routers
app.include_router(leaderboard.page_router, tags=["Page"])
app.include_router(leaderboard.router, prefix="/api/leaderboard", tags=["Leaderboard"])
app.include_router(directory.router, prefix="/api/directory", tags=["Directory"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
