"""
Score aggregator.

Combines every score signal for an event into one ResolvedScore. Sources, in
priority order:

    1. Structured score on the primary match-odds market
    2. Correct-score resolver, Exact
    3. Correct-score resolver, Likely
    4. Goal-line bounds (only when no correct-score signal exists)

Each side is filled by the highest-priority source that knows it and is never
overwritten by a lower one. The result's confidence is the weakest confidence
among the sources that actually contributed, so a Likely away score never
turns into an Exact one just because the home score was exact.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from inplay_monitor.snapshots.goal_lines import goal_line_outcomes
from inplay_monitor.snapshots.models import MarketSnapshot, MatchSnapshot

from .correct_score import CorrectScoreResolver
from .models import LIKELY_SUFFIX, Confidence, ResolvedScore
from .score_bounds import ScoreBounds, ScoreBoundsEngine

logger = logging.getLogger(__name__)


def direct_score(market: Optional[MarketSnapshot]) -> Optional[ResolvedScore]:
    """Structured score carried by the match-odds market, if any side is present."""
    if market is None or (market.home_score is None and market.away_score is None):
        return None
    if market.has_structured_score:
        return ResolvedScore.exact(market.home_score, market.away_score)
    return ResolvedScore(market.home_score, market.away_score, "", Confidence.EXACT)


class ScoreAggregator:
    """
    Picks the best available score for an event.

    Usage:
        aggregator = ScoreAggregator()
        score = aggregator.aggregate(direct, correct_score_result, bounds)

        # Or straight from a tick's MatchSnapshot
        score = aggregator.resolve_match(match)
    """

    def __init__(
        self,
        resolver: Optional[CorrectScoreResolver] = None,
        engine: Optional[ScoreBoundsEngine] = None,
    ) -> None:
        self._resolver = resolver or CorrectScoreResolver()
        self._engine = engine or ScoreBoundsEngine()

    def aggregate(
        self,
        direct: Optional[ResolvedScore] = None,
        correct_score: Optional[ResolvedScore] = None,
        bounds: Optional[ScoreBounds] = None,
    ) -> ResolvedScore:
        """
        Merge the available sources.

        Args:
            direct: Score read from the match-odds market itself
            correct_score: CorrectScoreResolver output for the event
            bounds: ScoreBoundsEngine output for the event

        Returns:
            ResolvedScore; Unknown with an empty label when nothing is known
        """
        sources: List[ResolvedScore] = []
        if direct is not None:
            sources.append(direct)

        has_correct_score_signal = False
        if correct_score is not None and correct_score.confidence in (
            Confidence.EXACT,
            Confidence.LIKELY,
        ):
            sources.append(correct_score)
            has_correct_score_signal = True

        bounds_score = None
        if bounds is not None and not bounds.is_unbounded and not has_correct_score_signal:
            bounds_score = bounds.to_resolved()
            sources.append(bounds_score)

        home = away = None
        contributed: List[Confidence] = []
        for source in sources:
            took = False
            if home is None and source.home_goals is not None:
                home = source.home_goals
                took = True
            if away is None and source.away_goals is not None:
                away = source.away_goals
                took = True
            if took:
                # A side pinned by bounds is a deduction even if the other side is open
                contributed.append(
                    Confidence.INFERRED if source is bounds_score else source.confidence
                )

        if home is None or away is None:
            if bounds_score is not None:
                label = bounds_score.label
            elif not contributed and correct_score is not None:
                # Keep an unparseable runner name visible rather than dropping it
                label = correct_score.label
            else:
                label = ""
            return ResolvedScore(home, away, label, Confidence.UNKNOWN)

        confidence = min(contributed, key=lambda c: c.rank)
        label = f"{home}-{away}"
        if confidence is Confidence.LIKELY:
            label += LIKELY_SUFFIX
        return ResolvedScore(home, away, label, confidence)

    def resolve_match(self, match: MatchSnapshot) -> ResolvedScore:
        """Run the resolver and the bounds engine for one match and merge."""
        correct_score = self._resolver.resolve_event(match.correct_score_markets)

        bounds = None
        if match.goal_line_markets:
            event_name = match.match_odds.event_name
            if not event_name and match.home_team and match.away_team:
                event_name = f"{match.home_team} v {match.away_team}"
            outcomes = goal_line_outcomes(match.goal_line_markets, event_name)
            bounds = self._engine.apply_all(outcomes)

        result = self.aggregate(direct_score(match.match_odds), correct_score, bounds)
        logger.debug(
            f"Score for event {match.event_id}: {result.label or '-'} ({result.confidence.value})"
        )
        return result
