"""
Integration fixtures: raw exchange payload builders.
"""
from unittest.mock import MagicMock

import pytest

from inplay_monitor.config import MonitorConfig
from inplay_monitor.core import MonitorService
from inplay_monitor.snapshots import MarketSnapshot, MatchSnapshot

EVENT_ID = "32100"
MATCH_ODDS_ID = "1.900"
HOME, AWAY, DRAW = 47999, 48351, 58805


def market_book(
    market_id,
    status="OPEN",
    in_play=True,
    runners=(),
    winners=(),
    market_type="MATCH_ODDS",
    score=None,
    start_time="2026-10-19T15:00:00.000Z",
):
    """listMarketBook-shaped dict; `runners` is a list of (selection_id, back_price)."""
    definition = {
        "status": status,
        "eventId": EVENT_ID,
        "marketType": market_type,
        "inPlay": in_play,
        "marketTime": start_time,
        "runners": [
            {"selectionId": sid, "status": "WINNER" if sid in winners else "ACTIVE"}
            for sid, _ in runners
        ],
    }
    if score is not None:
        definition["score"] = score
    return {
        "marketId": market_id,
        "inplay": in_play,
        "marketDefinition": definition,
        "runners": [
            {
                "selectionId": sid,
                "ex": {"availableToBack": [{"price": price}] if price else []},
            }
            for sid, price in runners
        ],
    }


def catalogue(market_id, market_type, market_name, runner_names):
    return {
        "marketId": market_id,
        "marketName": market_name,
        "event": {"id": EVENT_ID, "name": "Arsenal v Chelsea"},
        "description": {"marketType": market_type},
        "runners": [{"selectionId": sid, "runnerName": name} for sid, name in runner_names],
    }


def build_match(match_odds_book, minute_text=None, goal_line_books=(), correct_score_books=()):
    """Decode raw books into the MatchSnapshot a tick hands to the service."""
    match_odds = MarketSnapshot.from_market_book(
        match_odds_book,
        catalogue(
            MATCH_ODDS_ID, "MATCH_ODDS", "Match Odds",
            [(HOME, "Arsenal"), (AWAY, "Chelsea"), (DRAW, "The Draw")],
        ),
    )
    goal_lines = tuple(
        MarketSnapshot.from_market_book(book, cat) for book, cat in goal_line_books
    )
    correct_scores = tuple(
        MarketSnapshot.from_market_book(book, cat) for book, cat in correct_score_books
    )
    return MatchSnapshot(
        match_odds=match_odds,
        home_team="Arsenal",
        away_team="Chelsea",
        league="Premier League",
        correct_score_markets=correct_scores,
        goal_line_markets=goal_lines,
        minute_text=minute_text,
    )


@pytest.fixture
def report_sink():
    return MagicMock()


@pytest.fixture
def monitor(report_sink, stepping_clock):
    return MonitorService.from_config(MonitorConfig(), sink=report_sink, clock=stepping_clock)


@pytest.fixture
def books():
    """Payload builders: (market_book, catalogue, build_match)."""
    return market_book, catalogue, build_match


@pytest.fixture
def selections():
    return {"home": HOME, "away": AWAY, "draw": DRAW, "match_odds": MATCH_ODDS_ID}
