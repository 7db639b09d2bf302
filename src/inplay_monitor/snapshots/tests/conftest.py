"""
Snapshot layer test fixtures.

Market books here follow the shape of decoded exchange listMarketBook /
listMarketCatalogue entries.
"""
import pytest
from decimal import Decimal

from inplay_monitor.snapshots import MarketSnapshot, MarketStatus, RunnerSnapshot


@pytest.fixture
def match_odds_book():
    """A closed match-odds market book with a winner and a structured score."""
    return {
        "marketId": "1.200",
        "status": "OPEN",
        "inplay": True,
        "marketStartTime": "2026-10-19T15:00:00.000Z",
        "marketDefinition": {
            "status": "CLOSED",
            "eventId": "31000",
            "marketType": "MATCH_ODDS",
            "runners": [
                {"selectionId": 11, "status": "WINNER"},
                {"selectionId": 22, "status": "LOSER"},
                {"selectionId": 58805, "status": "LOSER"},
            ],
            "score": {"home": {"goals": 2}, "away": "1"},
        },
        "runners": [
            {
                "selectionId": 11,
                "ex": {
                    "availableToBack": [{"price": 1.5, "size": 100}],
                    "availableToLay": [{"price": 1.52, "size": 50}],
                },
            },
            {"selectionId": 22, "ex": {"availableToBack": [{"price": 6.0}]}},
            {"selectionId": 58805, "ex": {}},
        ],
    }


@pytest.fixture
def match_odds_catalogue():
    return {
        "marketId": "1.200",
        "marketName": "Match Odds",
        "event": {"id": "31000", "name": "Arsenal v Chelsea"},
        "description": {"marketType": "MATCH_ODDS"},
        "runners": [
            {"selectionId": 11, "runnerName": "Arsenal"},
            {"selectionId": 22, "runnerName": "Chelsea"},
            {"selectionId": 58805, "runnerName": "The Draw"},
        ],
    }


def make_goal_line_market(
    market_type="",
    market_name="",
    closed=True,
    winner="Over",
    event_id="31000",
    event_name="Arsenal v Chelsea",
    market_id="1.500",
):
    """Two-runner over/under market; `winner` is "Over", "Under" or None."""
    runners = (
        RunnerSnapshot(1, "Over", is_winner=closed and winner == "Over"),
        RunnerSnapshot(2, "Under", is_winner=closed and winner == "Under"),
    )
    return MarketSnapshot(
        market_id=market_id,
        event_id=event_id,
        status=MarketStatus.CLOSED if closed else MarketStatus.OPEN,
        in_play=not closed,
        runners=runners,
        market_type=market_type,
        market_name=market_name,
        event_name=event_name,
    )


@pytest.fixture
def goal_line_market():
    return make_goal_line_market


@pytest.fixture
def priced_runner():
    return RunnerSnapshot(7, "1 - 0", best_back=Decimal("3.5"), best_lay=Decimal("3.6"))
