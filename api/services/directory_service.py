"""
Service for loading the tracked Codeforces handles from a Google spreadsheet.
"""
from typing import Any, List, Optional, Sequence
from urllib.parse import quote
import logging

import httpx

from config import settings
from exceptions import DirectorySourceError

logger = logging.getLogger(__name__)


class GoogleSheetsDirectory:
    """Reads handles from one column of a Google Sheets range."""

    def __init__(
        self,
        spreadsheet_id: str = None,
        sheet_range: str = None,
        api_key: str = None,
        base_url: str = None,
        column: int = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.spreadsheet_id = spreadsheet_id or settings.SPREADSHEET_ID
        self.sheet_range = sheet_range or settings.SHEET_RANGE
        self.api_key = api_key if api_key is not None else settings.GOOGLE_API_KEY
        self.base_url = (base_url or settings.SHEETS_API_BASE).rstrip("/")
        self.column = column if column is not None else settings.USERNAME_COLUMN
        self._client = client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)

    @property
    def values_url(self) -> str:
        return f"{self.base_url}/{self.spreadsheet_id}/values/{quote(self.sheet_range, safe='!:')}"

    async def load(self) -> List[str]:
        """
        Fetch the sheet range and extract handles.

        Returns:
            Handles in sheet order

        Raises:
            DirectorySourceError: If the sheet is unreachable, malformed or empty
        """
        params = {"key": self.api_key} if self.api_key else None

        try:
            response = await self._client.get(self.values_url, params=params)
        except httpx.HTTPError as e:
            raise DirectorySourceError(f"Spreadsheet unreachable: {e}") from e

        if response.status_code != 200:
            raise DirectorySourceError(
                f"Spreadsheet request failed with status {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise DirectorySourceError("Spreadsheet returned invalid JSON") from e

        if not isinstance(payload, dict):
            raise DirectorySourceError("Spreadsheet returned an unexpected payload")

        identifiers = self.parse_rows(payload.get("values", []), self.column)
        logger.info(f"Loaded {len(identifiers)} users from Google Sheets")
        return identifiers

    @staticmethod
    def parse_rows(rows: Sequence[Sequence[Any]], column: int = 0) -> List[str]:
        """
        Turn raw sheet rows into handles.

        The first row is a header. Cells are trimmed and blank or missing
        cells are dropped.

        Raises:
            DirectorySourceError: If no row yields a handle
        """
        if not isinstance(rows, (list, tuple)):
            raise DirectorySourceError("Spreadsheet returned malformed values")
        if not rows:
            raise DirectorySourceError("No data found in the spreadsheet")

        identifiers = []
        for row in rows[1:]:
            if not isinstance(row, (list, tuple)) or len(row) <= column:
                continue
            value = row[column]
            if value is None:
                continue
            value = str(value).strip()
            if value:
                identifiers.append(value)

        if not identifiers:
            raise DirectorySourceError("Spreadsheet has no usernames below the header row")

        return identifiers

    async def close(self):
        await self._client.aclose()
