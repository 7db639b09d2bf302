"""
Live classification models.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import NamedTuple, Optional


class Highlight(str, Enum):
    """Per-match risk/opportunity tag shown on the monitoring surface."""
    NONE = ""
    ORANGE = "orange"  # goal within the first hour
    YELLOW = "yellow"  # still 0-0 at the hour mark
    GREEN = "green"    # goal arrived after a scoreless first hour
    RED = "red"        # finished 0-0


class MatchKey(NamedTuple):
    """Trackers are keyed by (market id, event id)."""
    market_id: str
    event_id: str

    def __str__(self) -> str:
        return f"{self.market_id}|{self.event_id}"


@dataclass
class MatchTrackerState:
    """
    Memory of one live match across ticks.

    Flags only ever go from False to True. `highlight` may move
    None -> Yellow -> Green, None -> Orange, and to Red on a scoreless finish.
    """

    first_goal_minute: Optional[int] = None
    zero_zero_at_60: bool = False
    sixty_minute_snapshot_taken: bool = False
    finished_zero_zero_snapshot_taken: bool = False
    highlight: Highlight = Highlight.NONE


@dataclass(frozen=True)
class LiveObservation:
    """
    What a single tick tells the classifier about one match.

    Odds and team names are carried for the side-effect reports only.
    """

    key: MatchKey
    minute: int
    minute_text: str = ""
    home_goals: Optional[int] = None
    away_goals: Optional[int] = None
    finished: bool = False
    home_team: str = ""
    away_team: str = ""
    start_time: Optional[datetime] = None
    home_odds: Optional[Decimal] = None
    draw_odds: Optional[Decimal] = None
    away_odds: Optional[Decimal] = None

    @property
    def score_known(self) -> bool:
        return self.home_goals is not None and self.away_goals is not None

    @property
    def total_goals(self) -> Optional[int]:
        if not self.score_known:
            return None
        return self.home_goals + self.away_goals


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying one observation."""

    key: MatchKey
    highlight: Highlight
    zero_zero_after_half_time: bool
    fired: tuple = ()
