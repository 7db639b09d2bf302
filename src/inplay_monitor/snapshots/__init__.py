"""
Snapshot Layer - Decoded exchange market data.

This module provides:
    - MarketStatus: Exchange market status enum
    - RunnerSnapshot: One runner with best back/lay price and winner flag
    - MarketSnapshot: One market on one tick (decodes market-book dicts)
    - MatchSnapshot: All markets of one event on one tick
    - GoalLineOutcome: Settled (or pending) result of an over/under goal line
    - goal_line_outcomes: Recognise team goal-line markets and build outcomes

The market-data client that fetches these is an external collaborator; this
layer only defines the shapes and decodes already-fetched payloads.
"""

from .models import (
    CORRECT_SCORE_MARKET_TYPES,
    MarketSnapshot,
    MarketStatus,
    MatchSnapshot,
    RunnerSnapshot,
    extract_score_value,
    parse_timestamp,
)
from .goal_lines import (
    GoalLineOutcome,
    goal_line_outcomes,
    is_goal_line_market,
    parse_goal_line,
    resolve_home_side,
    split_teams,
    to_goal_line_outcome,
)

__all__ = [
    "CORRECT_SCORE_MARKET_TYPES",
    "MarketSnapshot",
    "MarketStatus",
    "MatchSnapshot",
    "RunnerSnapshot",
    "extract_score_value",
    "parse_timestamp",
    "GoalLineOutcome",
    "goal_line_outcomes",
    "is_goal_line_market",
    "parse_goal_line",
    "resolve_home_side",
    "split_teams",
    "to_goal_line_outcome",
]
