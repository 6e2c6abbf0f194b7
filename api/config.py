"""
Configuration settings for the Codeforces Leaderboard service.
Uses pydantic-settings for type-safe environment variable management.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Google Sheets (user directory)
    SPREADSHEET_ID: str = "YOUR_SPREADSHEET_ID"
    SHEET_RANGE: str = "Sheet1!A:B"  # Column A: handles, column B: optional notes
    GOOGLE_API_KEY: str = ""
    SHEETS_API_BASE: str = "https://sheets.googleapis.com/v4/spreadsheets"
    USERNAME_COLUMN: int = 0

    # Used when the spreadsheet cannot be read
    FALLBACK_HANDLES: List[str] = ["tourist", "Petr", "Egor", "rng_58", "ACRush"]

    # Codeforces API
    CODEFORCES_API_BASE: str = "https://codeforces.com/api"
    CODEFORCES_PROFILE_URL: str = "https://codeforces.com/profile"

    # Refresh
    UPDATE_INTERVAL_SECONDS: int = 300  # 5 minutes
    ENABLE_SCHEDULER: bool = True

    # Lookup fan-out (None = unbounded / no timeout)
    LOOKUP_CONCURRENCY: Optional[int] = None
    LOOKUP_TIMEOUT_SECONDS: Optional[float] = None
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"


# Global settings instance
settings = Settings()
