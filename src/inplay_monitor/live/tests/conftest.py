"""
Live layer test fixtures.

Clocks are injected and advanced by hand; nothing here sleeps.
"""
import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from inplay_monitor.live import LiveMatchClassifier, LiveObservation, MatchKey, TrackerStore


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start=None):
        self.now = start or datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def key():
    return MatchKey("1.100", "e100")


@pytest.fixture
def observe(key):
    """Factory: observe(minute, home, away, finished=False)."""

    def _observe(minute, home=0, away=0, finished=False, match_key=None):
        return LiveObservation(
            key=match_key or key,
            minute=minute,
            minute_text=f"{minute}'",
            home_goals=home,
            away_goals=away,
            finished=finished,
            home_team="Arsenal",
            away_team="Chelsea",
            home_odds=Decimal("4.2"),
            draw_odds=Decimal("1.9"),
            away_odds=Decimal("5.0"),
        )

    return _observe


@pytest.fixture
def hooks():
    """Mock side-effect callbacks."""
    return MagicMock(), MagicMock()


@pytest.fixture
def classifier(hooks, clock):
    on_sixty, on_finished = hooks
    return LiveMatchClassifier(
        store=TrackerStore(clock=clock),
        on_sixty_minutes=on_sixty,
        on_finished_scoreless=on_finished,
    )
