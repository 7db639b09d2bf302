"""
Ledger summary over simulated bets.

Balance is the starting balance plus every settled profit. Wins and losses are
counted per strategy, overall and per UTC day; a zero-profit bet is neither.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timezone
from decimal import Decimal
from typing import Dict, Iterable

from .models import SimulatedBet

UNKNOWN = "Unknown"


@dataclass
class WinLoss:
    wins: int = 0
    losses: int = 0


@dataclass
class StrategyRecord:
    """Results of one strategy."""

    profit: Decimal = Decimal("0")
    totals: WinLoss = field(default_factory=WinLoss)
    daily: Dict[str, WinLoss] = field(default_factory=dict)


@dataclass
class LedgerSummary:
    balance: Decimal
    open_bets: int
    settled_bets: int
    by_strategy: Dict[str, StrategyRecord]


def strategy_key(bet: SimulatedBet) -> str:
    return bet.strategy_name or bet.strategy_id or UNKNOWN


def day_key(bet: SimulatedBet) -> str:
    """UTC date of settlement, else of creation, else "Unknown"."""
    moment = bet.settled_at or bet.created_at
    if moment is None:
        return UNKNOWN
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date().isoformat()


def summarize(bets: Iterable[SimulatedBet], start_balance: Decimal) -> LedgerSummary:
    balance = start_balance
    open_bets = settled_bets = 0
    by_strategy: Dict[str, StrategyRecord] = {}

    for bet in bets:
        if not bet.is_settled:
            open_bets += 1
            continue
        settled_bets += 1
        if bet.profit is None:
            continue

        balance += bet.profit
        record = by_strategy.setdefault(strategy_key(bet), StrategyRecord())
        record.profit += bet.profit
        if bet.profit == 0:
            continue

        daily = record.daily.setdefault(day_key(bet), WinLoss())
        if bet.profit > 0:
            record.totals.wins += 1
            daily.wins += 1
        else:
            record.totals.losses += 1
            daily.losses += 1

    return LedgerSummary(
        balance=balance,
        open_bets=open_bets,
        settled_bets=settled_bets,
        by_strategy=by_strategy,
    )
