"""
Correct-score resolver.

Reads an exact (or likely) score out of a correct-score market:

1. A structured score on the market wins outright (Exact).
2. A closed market with exactly one WINNER runner: parse that runner's name
   ("2 - 1", "2:1"). Parseable -> Exact. Not parseable -> Unknown, with the
   raw name kept as the label. Digits are never made up.
3. Otherwise take the runner with the shortest price, min(back, lay), as the
   market's best guess and parse its name. Parseable -> Likely, labelled
   "2-1 (likely)". Equal prices keep the first runner in input order.

The price heuristic is a guess about the current score, not a fact. It is
only ever reported as Likely so consumers can ignore it.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional

from inplay_monitor.snapshots.models import MarketSnapshot, RunnerSnapshot

from .models import LIKELY_SUFFIX, Confidence, ResolvedScore
from .parsing import Parsed, find_score_in_name

logger = logging.getLogger(__name__)


class CorrectScoreResolver:
    """
    Extracts a score from correct-score markets.

    Usage:
        resolver = CorrectScoreResolver()
        score = resolver.resolve(market)
        best = resolver.resolve_event(event_markets)
    """

    def resolve(self, market: MarketSnapshot) -> ResolvedScore:
        """Resolve one correct-score market."""
        if market.has_structured_score:
            return ResolvedScore.exact(market.home_score, market.away_score)

        winners = market.winners()
        if market.is_closed and len(winners) == 1:
            return self._from_winner(winners[0])

        return self._likely_from_prices(market)

    def resolve_event(self, markets: Iterable[MarketSnapshot]) -> Optional[ResolvedScore]:
        """
        Resolve several correct-score markets of one event into one result.

        The strongest confidence wins; among equals the first market in input
        order wins.

        Returns:
            The best ResolvedScore, or None when no markets were given
        """
        best: Optional[ResolvedScore] = None
        for market in markets:
            resolved = self.resolve(market)
            if best is None or resolved.confidence.rank > best.confidence.rank:
                best = resolved
        return best

    def _from_winner(self, winner: RunnerSnapshot) -> ResolvedScore:
        parsed = find_score_in_name(winner.name)
        if isinstance(parsed, Parsed):
            home, away = parsed.value
            return ResolvedScore.exact(home, away)
        logger.debug(f"Winner runner name has no score pattern: {winner.name!r}")
        return ResolvedScore.unknown(winner.name)

    def _likely_from_prices(self, market: MarketSnapshot) -> ResolvedScore:
        best_runner: Optional[RunnerSnapshot] = None
        best_price: Optional[Decimal] = None
        for runner in market.runners:
            if not runner.name.strip():
                continue
            price = runner.best_price
            if price is None:
                continue
            # Strict comparison keeps the first runner on ties
            if best_price is None or price < best_price:
                best_price = price
                best_runner = runner

        if best_runner is None:
            return ResolvedScore.unknown()

        parsed = find_score_in_name(best_runner.name)
        if not isinstance(parsed, Parsed):
            return ResolvedScore.unknown(best_runner.name)

        home, away = parsed.value
        return ResolvedScore(
            home_goals=home,
            away_goals=away,
            label=f"{home}-{away}{LIKELY_SUFFIX}",
            confidence=Confidence.LIKELY,
        )
