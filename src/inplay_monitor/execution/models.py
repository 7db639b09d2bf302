"""
Pydantic models for simulated bet records.

These records are persisted by an external store between ticks, so they are
validated on the way in. All monetary fields (odds, stake, profit) use Decimal.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BetSide(str, Enum):
    BACK = "BACK"
    LAY = "LAY"


class BetStatus(str, Enum):
    OPEN = "OPEN"
    SETTLED = "SETTLED"


class InPlayTiming(BaseModel):
    """
    Accumulated in-play time.

    `live_started_at` is set exactly while the subject is considered in play;
    it marks when the current in-play stretch began.
    """

    accumulated_in_play_seconds: int = Field(default=0, ge=0)
    live_started_at: Optional[datetime] = None


class SimulatedBet(BaseModel):
    """A paper bet on one selection of a match-odds market."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    id: str
    market_id: str
    selection_id: int
    side: BetSide
    odds: Decimal = Field(gt=1)
    stake: Decimal = Field(gt=0)
    status: BetStatus = BetStatus.OPEN
    profit: Optional[Decimal] = None

    strategy_id: Optional[str] = None
    strategy_name: Optional[str] = None
    selection_name: Optional[str] = None
    home_team: Optional[str] = None
    away_team: Optional[str] = None
    created_at: Optional[datetime] = None
    settled_at: Optional[datetime] = None

    # Refreshed every tick
    market_status: Optional[str] = None
    market_start_time: Optional[datetime] = None
    in_play: bool = False
    timing: InPlayTiming = Field(default_factory=InPlayTiming)
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    inferred_score: Optional[str] = None
    match_clock: Optional[str] = None

    @field_validator("side", mode="before")
    @classmethod
    def _normalize_side(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def is_settled(self) -> bool:
        return self.status is BetStatus.SETTLED
