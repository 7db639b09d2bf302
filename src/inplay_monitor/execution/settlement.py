"""
Settlement of simulated bets.

Back bet:  wins (odds - 1) * stake if the selection won, loses the stake otherwise.
Lay bet:   wins the stake if the selection lost, loses (odds - 1) * stake otherwise.

A bet is settled once, on the first tick that sees its market closed with a
known winner. A later tick reporting a different winner does not touch it.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from inplay_monitor.snapshots.models import MarketSnapshot

from .models import BetSide, BetStatus, SimulatedBet

logger = logging.getLogger(__name__)


class InvalidBetError(Exception):
    """Raised when a bet cannot be priced (unknown side)."""
    pass


class SettlementCalculator:
    """
    Computes profit and settles bets.

    Usage:
        calculator = SettlementCalculator()
        profit = calculator.profit(bet, winner_selection_id)

        # Settle in place, at most once
        calculator.settle(bet, winner_selection_id)
    """

    def profit(self, bet: SimulatedBet, winner_selection_id: int) -> Decimal:
        """Profit (negative for a loss) if `winner_selection_id` won the market."""
        is_winner = bet.selection_id == winner_selection_id
        if bet.side is BetSide.BACK:
            return (bet.odds - 1) * bet.stake if is_winner else -bet.stake
        if bet.side is BetSide.LAY:
            return -(bet.odds - 1) * bet.stake if is_winner else bet.stake
        raise InvalidBetError(f"Unknown side {bet.side!r} for bet {bet.id}")

    def settle(
        self,
        bet: SimulatedBet,
        winner_selection_id: int,
        now: Optional[datetime] = None,
    ) -> Optional[Decimal]:
        """
        Settle an open bet.

        Returns:
            The profit, or None if the bet was already settled (no-op)
        """
        if bet.is_settled:
            logger.debug(f"Bet {bet.id} already settled, ignoring winner {winner_selection_id}")
            return None

        profit = self.profit(bet, winner_selection_id)
        bet.profit = profit
        bet.status = BetStatus.SETTLED
        bet.settled_at = now or datetime.now(timezone.utc)
        logger.info(
            f"Settled bet {bet.id} ({bet.side.value} {bet.selection_id} @ {bet.odds}): profit={profit}"
        )
        return profit

    def settle_from_market(
        self,
        bet: SimulatedBet,
        market: Optional[MarketSnapshot],
        now: Optional[datetime] = None,
    ) -> Optional[Decimal]:
        """Settle only if the market is closed and names exactly one winner."""
        if market is None or not market.is_closed:
            return None
        winner = market.winner_selection_id
        if winner is None:
            return None
        return self.settle(bet, winner, now)
