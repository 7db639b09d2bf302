"""
Goal-line market recognition.

Turns an over/under goals market into a GoalLineOutcome: which side it is
about (home or away), where the line sits, and, once the market has settled,
whether "over" won. Team goal-line markets come in two shapes on the exchange:

    TEAM_A_OVER_UNDER_15     explicit side marker in the market type
    "Arsenal Over/Under 1.5 Goals"   side only recoverable from the team name

A market whose side or line cannot be recovered yields no outcome at all.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from .models import MarketSnapshot

logger = logging.getLogger(__name__)

HOME_TYPE_PREFIX = "TEAM_A_OVER_UNDER_"
AWAY_TYPE_PREFIX = "TEAM_B_OVER_UNDER_"

_LINE_SUFFIXES = {
    "_05": Decimal("0.5"),
    "_15": Decimal("1.5"),
    "_25": Decimal("2.5"),
    "_35": Decimal("3.5"),
    "_45": Decimal("4.5"),
}
_LINE_PATTERN = re.compile(r"(\d+(?:\.\d+)?)")


@dataclass(frozen=True)
class GoalLineOutcome:
    """
    Result of one over/under goal-line market for one side of an event.

    Attributes:
        event_id: Event the market belongs to
        home_side: True for the home team's goals, False for the away team's
        line: The threshold, e.g. Decimal("1.5")
        closed: Whether the market has closed (only closed outcomes carry information)
        winner_is_over: True if Over won, False if Under won, None if unknown
    """
    event_id: str
    home_side: bool
    line: Decimal
    closed: bool
    winner_is_over: Optional[bool] = None


def split_teams(event_name: str) -> Tuple[str, str]:
    """Split "Home v Away" (or "Home vs Away") into its two team names."""
    if not event_name or not event_name.strip():
        return "", ""
    delimiter = " v " if " v " in event_name else " vs "
    if delimiter in event_name:
        home, away = event_name.split(delimiter, 1)
        return home.strip(), away.strip()
    return event_name.strip(), ""


def is_goal_line_market(market_type: str, market_name: str) -> bool:
    market_type = (market_type or "").upper()
    if market_type.startswith(HOME_TYPE_PREFIX) or market_type.startswith(AWAY_TYPE_PREFIX):
        return True
    name = (market_name or "").lower()
    return "over/under" in name and "goal" in name


def parse_goal_line(market_type: str, market_name: str) -> Optional[Decimal]:
    """Line from the type suffix (_15 -> 1.5), else the first number in the name."""
    market_type = (market_type or "").upper()
    for suffix, line in _LINE_SUFFIXES.items():
        if market_type.endswith(suffix):
            return line
    match = _LINE_PATTERN.search(market_name or "")
    if not match:
        return None
    return Decimal(match.group(1))


def resolve_home_side(event_name: str, market_name: str, market_type: str) -> Optional[bool]:
    """
    Work out whether a goal-line market is about the home or away team.

    Returns:
        True for home, False for away, None when it cannot be told
    """
    market_type = (market_type or "").upper()
    if market_type.startswith(HOME_TYPE_PREFIX):
        return True
    if market_type.startswith(AWAY_TYPE_PREFIX):
        return False

    name = (market_name or "").lower()
    if "team a" in name:
        return True
    if "team b" in name:
        return False

    home, away = split_teams(event_name)
    if home and home.lower() in name:
        return True
    if away and away.lower() in name:
        return False
    return None


def winner_is_over(market: MarketSnapshot) -> Optional[bool]:
    """Read the settled side of an over/under market from its winner's name."""
    selection_id = market.winner_selection_id
    if selection_id is None:
        return None
    winner = market.runner(selection_id)
    name = winner.name.lower() if winner else ""
    if "over" in name:
        return True
    if "under" in name:
        return False
    return None


def to_goal_line_outcome(
    market: MarketSnapshot,
    event_name: Optional[str] = None,
) -> Optional[GoalLineOutcome]:
    """
    Build the GoalLineOutcome for a single goal-line market.

    Args:
        market: The over/under market snapshot
        event_name: "Home v Away", used for name-based side matching when the
            market does not carry the event name itself

    Returns:
        GoalLineOutcome, or None if the market is not a recognisable team goal line
    """
    if not is_goal_line_market(market.market_type, market.market_name):
        return None
    line = parse_goal_line(market.market_type, market.market_name)
    if line is None:
        return None
    home_side = resolve_home_side(
        event_name or market.event_name, market.market_name, market.market_type
    )
    if home_side is None:
        logger.debug(f"Cannot tell side of goal-line market {market.market_id} ({market.market_name})")
        return None
    return GoalLineOutcome(
        event_id=market.event_id,
        home_side=home_side,
        line=line,
        closed=market.is_closed,
        winner_is_over=winner_is_over(market) if market.is_closed else None,
    )


def goal_line_outcomes(
    markets: Iterable[MarketSnapshot],
    event_name: Optional[str] = None,
) -> List[GoalLineOutcome]:
    """Outcomes for every recognisable goal-line market, in input order."""
    outcomes = []
    for market in markets:
        outcome = to_goal_line_outcome(market, event_name)
        if outcome is not None:
            outcomes.append(outcome)
    return outcomes
