"""
Execution layer test fixtures.
"""
import pytest
from datetime import datetime, timezone
from decimal import Decimal

from inplay_monitor.execution import (
    BetSide,
    InPlayDurationTracker,
    SettlementCalculator,
    SimulatedBet,
)

T0 = datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def t0():
    return T0


@pytest.fixture
def make_bet():
    """Factory for simulated bets with sensible defaults."""

    def _make_bet(**overrides):
        fields = {
            "id": "bet-1",
            "market_id": "1.100",
            "selection_id": 11,
            "side": BetSide.BACK,
            "odds": Decimal("3.0"),
            "stake": Decimal("10"),
        }
        fields.update(overrides)
        return SimulatedBet(**fields)

    return _make_bet


@pytest.fixture
def duration_tracker():
    return InPlayDurationTracker(anchor_lag_seconds=180)


@pytest.fixture
def calculator():
    return SettlementCalculator()
