"""
Shared fixtures for the Learnosity SDK test suite.
"""

from datetime import datetime, timezone

import pytest


SECRET = "74c5fd430cf1242a527f6223aebd42d30464be22"


@pytest.fixture
def secret():
    return SECRET


@pytest.fixture
def fixed_clock():
    """A clock frozen at 2020-01-02 03:04:59 UTC."""
    return lambda: datetime(2020, 1, 2, 3, 4, 59, tzinfo=timezone.utc)


@pytest.fixture
def security():
    """A complete security packet, deliberately not in signing order."""
    return {
        "user_id":      "u1",
        "timestamp":    "20140626-0528",
        "domain":       "localhost",
        "consumer_key": "yis0TYCu7U9V4o7M",
    }
