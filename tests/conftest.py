"""
Shared test fixtures for integration tests.

This file provides fixtures that span multiple components,
unlike component-specific fixtures in src/inplay_monitor/{component}/tests/conftest.py
"""
from datetime import datetime, timedelta, timezone

import pytest


class SteppingClock:
    """UTC clock advanced explicitly between ticks."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def tick(self, seconds=30):
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def kickoff():
    return datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def stepping_clock(kickoff):
    return SteppingClock(kickoff - timedelta(minutes=5))
