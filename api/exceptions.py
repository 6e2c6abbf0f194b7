"""
Domain exceptions for the leaderboard service.
"""


class LeaderboardError(Exception):
    """Base class for leaderboard errors."""


class DirectorySourceError(LeaderboardError):
    """The user directory could not be read, or held no usable rows."""


class ProfileLookupError(LeaderboardError, LookupError):
    """A single handle could not be looked up on the rating service."""

    def __init__(self, identifier: str, message: str):
        super().__init__(f"{identifier}: {message}")
        self.identifier = identifier


class AggregationError(LeaderboardError):
    """A leaderboard pass could not complete as a whole."""
