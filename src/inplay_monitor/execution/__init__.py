"""
Execution Layer - Simulated bet bookkeeping.

This module provides:
    - SimulatedBet: Pydantic record of a paper bet (persisted externally)
    - BetSide / BetStatus: Back|Lay, Open|Settled
    - InPlayTiming: Accumulated in-play seconds plus the current anchor
    - InPlayDurationTracker: Accumulates live time across suspend/resume
    - SettlementCalculator: Profit/loss and one-time settlement
    - InvalidBetError: Raised for a bet that cannot be priced
    - summarize / LedgerSummary: Balance and win/loss counts per strategy

No real money moves here; settlement only records what a bet would have paid.
"""

from .models import BetSide, BetStatus, InPlayTiming, SimulatedBet
from .duration import DEFAULT_ANCHOR_LAG_SECONDS, InPlayDurationTracker, seconds_between
from .settlement import InvalidBetError, SettlementCalculator
from .ledger import LedgerSummary, StrategyRecord, WinLoss, summarize

__all__ = [
    "BetSide",
    "BetStatus",
    "InPlayTiming",
    "SimulatedBet",
    "DEFAULT_ANCHOR_LAG_SECONDS",
    "InPlayDurationTracker",
    "seconds_between",
    "InvalidBetError",
    "SettlementCalculator",
    "LedgerSummary",
    "StrategyRecord",
    "WinLoss",
    "summarize",
]
