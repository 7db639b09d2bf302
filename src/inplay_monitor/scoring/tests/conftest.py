"""
Scoring layer test fixtures.

Factories build correct-score markets and goal-line outcomes directly as
snapshot objects, without going through market-book decoding.
"""
import pytest
from decimal import Decimal

from inplay_monitor.scoring import ScoreAggregator, ScoreBoundsEngine, CorrectScoreResolver
from inplay_monitor.snapshots import GoalLineOutcome, MarketSnapshot, MarketStatus, RunnerSnapshot


def make_correct_score_market(runners, closed=False, winner=None, market_id="1.300", **kwargs):
    """
    Build a correct-score market.

    Args:
        runners: List of (name, best_back) pairs; best_back may be None
        closed: Market status CLOSED instead of OPEN
        winner: Runner name flagged WINNER
    """
    snapshots = tuple(
        RunnerSnapshot(
            selection_id=index + 1,
            name=name,
            best_back=Decimal(str(price)) if price is not None else None,
            is_winner=name == winner,
        )
        for index, (name, price) in enumerate(runners)
    )
    return MarketSnapshot(
        market_id=market_id,
        event_id="e1",
        status=MarketStatus.CLOSED if closed else MarketStatus.OPEN,
        runners=snapshots,
        market_type="CORRECT_SCORE",
        **kwargs,
    )


def outcome(home_side, line, over, closed=True, event_id="e1"):
    return GoalLineOutcome(
        event_id=event_id,
        home_side=home_side,
        line=Decimal(str(line)),
        closed=closed,
        winner_is_over=over,
    )


@pytest.fixture
def correct_score_market():
    return make_correct_score_market


@pytest.fixture
def goal_line():
    return outcome


@pytest.fixture
def engine():
    return ScoreBoundsEngine()


@pytest.fixture
def resolver():
    return CorrectScoreResolver()


@pytest.fixture
def aggregator():
    return ScoreAggregator()
