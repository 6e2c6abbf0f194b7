"""
Shared fixtures for the leaderboard test suite.
"""
import pytest

from tests.fakes import FakeDirectory, FakeLookupClient, lookup_failure


@pytest.fixture
def fake_directory():
    return FakeDirectory(["A", "B", "C"])


@pytest.fixture
def example_lookup_client():
    """A=1200, B=1800, C fails."""
    return FakeLookupClient({"A": 1200, "B": 1800, "C": lookup_failure("C")})
