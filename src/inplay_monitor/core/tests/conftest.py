"""
Core layer test fixtures.

Core tests verify orchestration, so the report sink and the live-data
fetcher are mocks; scoring and classification run for real.
"""
import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from inplay_monitor.config import MonitorConfig
from inplay_monitor.core import MonitorService
from inplay_monitor.execution import BetSide, SimulatedBet
from inplay_monitor.snapshots import MarketSnapshot, MarketStatus, MatchSnapshot, RunnerSnapshot

NOW = datetime(2026, 10, 19, 16, 0, tzinfo=timezone.utc)


def make_match(
    market_id="1.100",
    event_id="e100",
    home="Arsenal",
    away="Chelsea",
    minute_text=None,
    in_play=True,
    status=MarketStatus.OPEN,
    start_time=NOW - timedelta(minutes=70),
    home_score=None,
    away_score=None,
    winner_id=None,
    correct_score_markets=(),
):
    """A match-odds market (home=11, away=22, draw=33) wrapped in a MatchSnapshot."""
    runners = (
        RunnerSnapshot(11, home, best_back=Decimal("4.2"), is_winner=winner_id == 11),
        RunnerSnapshot(22, away, best_back=Decimal("5.0"), is_winner=winner_id == 22),
        RunnerSnapshot(33, "The Draw", best_back=Decimal("1.9"), is_winner=winner_id == 33),
    )
    market = MarketSnapshot(
        market_id=market_id,
        event_id=event_id,
        status=status,
        in_play=in_play,
        start_time=start_time,
        runners=runners,
        market_type="MATCH_ODDS",
        event_name=f"{home} v {away}",
        home_score=home_score,
        away_score=away_score,
    )
    return MatchSnapshot(
        match_odds=market,
        home_team=home,
        away_team=away,
        league="Premier League",
        correct_score_markets=correct_score_markets,
        minute_text=minute_text,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def match_factory():
    return make_match


@pytest.fixture
def sink():
    """Recording report sink."""
    return MagicMock()


@pytest.fixture
def service(sink):
    return MonitorService.from_config(MonitorConfig(), sink=sink, clock=lambda: NOW)


@pytest.fixture
def make_bet():
    def _make_bet(**overrides):
        fields = {
            "id": "bet-1",
            "market_id": "1.100",
            "selection_id": 11,
            "side": BetSide.BACK,
            "odds": Decimal("3.0"),
            "stake": Decimal("10"),
            "strategy_name": "Late Goals",
        }
        fields.update(overrides)
        return SimulatedBet(**fields)

    return _make_bet


@pytest.fixture
def correct_score_market_factory():
    """Open correct-score market whose only priced runner is `favourite`."""

    def _market(favourite, event_id="e100"):
        return MarketSnapshot(
            market_id="1.101",
            event_id=event_id,
            status=MarketStatus.OPEN,
            in_play=True,
            runners=(
                RunnerSnapshot(1, favourite, best_back=Decimal("1.8")),
                RunnerSnapshot(2, "Any Other Home Win", best_back=Decimal("9")),
            ),
            market_type="CORRECT_SCORE",
        )

    return _market
