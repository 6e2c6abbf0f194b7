"""
Client for the public Codeforces API (user.info and user.rating).
"""
from typing import Any, Dict, List, Optional
import asyncio
import logging

import httpx

from config import settings
from exceptions import ProfileLookupError
from schemas import ProfileRecord, UNRATED_LABEL

logger = logging.getLogger(__name__)


class CodeforcesClient:
    """Looks up one handle's profile and rating history."""

    STATUS_OK = "OK"

    def __init__(self, base_url: str = None, client: Optional[httpx.AsyncClient] = None):
        self.base_url = (base_url or settings.CODEFORCES_API_BASE).rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)

    async def fetch_profile(self, identifier: str) -> ProfileRecord:
        """
        Build a ProfileRecord for one handle.

        The profile read is required. The rating history read only enriches
        the record: if it fails the record keeps rating_delta=0 and
        event_count=0.

        Args:
            identifier: Codeforces handle

        Returns:
            ProfileRecord for the handle

        Raises:
            ProfileLookupError: If the profile read fails or the handle is unknown
        """
        user, history = await asyncio.gather(
            self._fetch_user(identifier),
            self._fetch_history(identifier),
            return_exceptions=True,
        )

        if isinstance(user, BaseException):
            if isinstance(user, ProfileLookupError):
                raise user
            raise ProfileLookupError(identifier, f"profile read failed: {user}") from user

        if isinstance(history, BaseException):
            logger.warning(f"Rating history for {identifier} unavailable: {history}")
            history = None

        return self.build_record(identifier, user, history)

    @staticmethod
    def build_record(
        identifier: str,
        user: Dict[str, Any],
        history: Optional[List[Dict[str, Any]]],
    ) -> ProfileRecord:
        """Combine a user.info object and an optional user.rating list."""
        rating_delta = 0
        event_count = 0
        if history:
            last_contest = history[-1]
            rating_delta = (last_contest.get("newRating") or 0) - (last_contest.get("oldRating") or 0)
            event_count = len(history)

        return ProfileRecord(
            identifier=user.get("handle") or identifier,
            current_rating=user.get("rating") or 0,
            max_rating=user.get("maxRating") or 0,
            rank_label=user.get("rank") or UNRATED_LABEL,
            rating_delta=rating_delta,
            event_count=event_count,
            last_seen=user.get("lastOnlineTimeSeconds"),
            title_photo=user.get("titlePhoto"),
        )

    async def _fetch_user(self, identifier: str) -> Dict[str, Any]:
        data = await self._get("user.info", {"handles": identifier}, identifier)
        result = data.get("result")
        if data.get("status") != self.STATUS_OK or not result:
            comment = data.get("comment") or "not found"
            raise ProfileLookupError(identifier, f"user {identifier} not found ({comment})")
        return result[0]

    async def _fetch_history(self, identifier: str) -> Optional[List[Dict[str, Any]]]:
        data = await self._get("user.rating", {"handle": identifier}, identifier)
        if data.get("status") != self.STATUS_OK:
            return None
        return data.get("result") or []

    async def _get(self, method: str, params: Dict[str, str], identifier: str) -> Dict[str, Any]:
        try:
            response = await self._client.get(f"{self.base_url}/{method}", params=params)
        except httpx.HTTPError as e:
            raise ProfileLookupError(identifier, f"{method} request failed: {e}") from e

        # Codeforces reports errors as a JSON body with status FAILED, usually with HTTP 400
        try:
            data = response.json()
        except ValueError as e:
            raise ProfileLookupError(
                identifier, f"{method} returned invalid JSON (HTTP {response.status_code})"
            ) from e

        if not isinstance(data, dict):
            raise ProfileLookupError(identifier, f"{method} returned an unexpected payload")
        return data

    async def close(self):
        await self._client.aclose()
