"""
Monitor Service - Per-tick orchestrator.

Each tick the caller hands over freshly fetched snapshots and the stored
simulated bets. The service:
1. Resolves a best-available score per match (aggregator)
2. Fills the minute from the feed or estimates it from kickoff
3. Classifies each live match (highlight + one-shot reports)
4. Optionally enriches matches with supplementary live data and reclassifies
5. Refreshes every open bet: status, in-play timing, clock, score, settlement

One bad match or bet never aborts the tick: the failure is logged with its
traceback, counted, and the batch continues.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .enrichment import LiveDataEnricher

from inplay_monitor.config import MonitorConfig
from inplay_monitor.execution import (
    InPlayDurationTracker,
    LedgerSummary,
    SettlementCalculator,
    SimulatedBet,
    summarize,
)
from inplay_monitor.live import (
    ClassificationResult,
    Highlight,
    LiveMatchClassifier,
    LiveObservation,
    MatchKey,
    TrackerStore,
    bet_match_clock,
    minute_from_kickoff,
    normalize_minute_text,
    utc_now,
)
from inplay_monitor.live.match_clock import MINUTE_SOURCE_KICKOFF
from inplay_monitor.scoring import Confidence, ResolvedScore, ScoreAggregator
from inplay_monitor.scoring.parsing import is_finished_text, minute_or_zero
from inplay_monitor.snapshots import MatchSnapshot

from .reports import MatchReporter, ReportSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchReport:
    """What the monitoring surface shows for one match after a tick."""

    key: MatchKey
    home_team: str
    away_team: str
    league: str
    start_time: Optional[datetime]
    market_status: Optional[str]
    in_play: bool
    finished: bool
    minute_text: str
    minute_source: str
    score: ResolvedScore
    highlight: Highlight
    zero_zero_after_half_time: bool
    fired: tuple = ()

    @property
    def needs_score(self) -> bool:
        return not self.score.is_complete

    @property
    def minute_estimated(self) -> bool:
        return self.minute_source == MINUTE_SOURCE_KICKOFF


@dataclass
class TickStats:
    """Counters for one pass over the bets."""

    processed: int = 0
    settled: int = 0
    tracking_changes: int = 0
    missing: int = 0
    failures: int = 0


@dataclass
class TickResult:
    reports: List[MatchReport] = field(default_factory=list)
    stats: TickStats = field(default_factory=TickStats)
    match_failures: int = 0


def build_observation(
    match: MatchSnapshot,
    score: ResolvedScore,
    minute_text: str,
    finished: bool,
) -> LiveObservation:
    home_odds, draw_odds, away_odds = match.match_odds_prices()
    return LiveObservation(
        key=MatchKey(match.market_id, match.event_id),
        minute=minute_or_zero(minute_text),
        minute_text=minute_text,
        home_goals=score.home_goals,
        away_goals=score.away_goals,
        finished=finished,
        home_team=match.home_team,
        away_team=match.away_team,
        start_time=match.match_odds.start_time,
        home_odds=home_odds,
        draw_odds=draw_odds,
        away_odds=away_odds,
    )


class MonitorService:
    """
    Per-tick orchestrator for matches and bets.

    Usage:
        service = MonitorService.from_config(MonitorConfig.from_env())

        reports = service.evaluate_matches(matches, now)
        stats = service.evaluate_bets(bets, {m.market_id: m for m in matches}, now)

        # Or both, with supplementary live data
        result = await service.run_tick(matches, bets, enricher=enricher)
    """

    def __init__(
        self,
        classifier: Optional[LiveMatchClassifier] = None,
        aggregator: Optional[ScoreAggregator] = None,
        duration_tracker: Optional[InPlayDurationTracker] = None,
        settlement: Optional[SettlementCalculator] = None,
        clock: Optional[Callable[[], datetime]] = None,
        start_balance: Decimal = Decimal("1000"),
    ) -> None:
        self._classifier = classifier or LiveMatchClassifier()
        self._aggregator = aggregator or ScoreAggregator()
        self._duration = duration_tracker or InPlayDurationTracker()
        self._settlement = settlement or SettlementCalculator()
        self._clock = clock or utc_now
        self._start_balance = start_balance

    @classmethod
    def from_config(
        cls,
        config: MonitorConfig,
        sink: Optional[ReportSink] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "MonitorService":
        """Wire a service with a bounded tracker store and the given report sink."""
        clock = clock or utc_now
        reporter = MatchReporter(sink, clock=clock)
        store = TrackerStore(
            max_entries=config.tracker_max_entries,
            idle_ttl_seconds=config.tracker_idle_ttl_seconds,
            finished_ttl_seconds=config.tracker_finished_ttl_seconds,
            clock=clock,
            sweep_interval_seconds=config.tick_interval_seconds,
        )
        classifier = LiveMatchClassifier(
            store=store,
            on_sixty_minutes=reporter.sixty_minute_snapshot,
            on_finished_scoreless=reporter.finished_scoreless,
        )
        return cls(
            classifier=classifier,
            duration_tracker=InPlayDurationTracker(config.anchor_lag_seconds),
            clock=clock,
            start_balance=config.start_balance,
        )

    @property
    def classifier(self) -> LiveMatchClassifier:
        return self._classifier

    # =========================================================================
    # Matches
    # =========================================================================

    def evaluate_matches(
        self,
        matches: Iterable[MatchSnapshot],
        now: Optional[datetime] = None,
    ) -> List[MatchReport]:
        """Classify every match; failures are logged and skipped."""
        reports, _ = self._evaluate_matches(matches, now or self._clock())
        return reports

    def _evaluate_matches(
        self,
        matches: Iterable[MatchSnapshot],
        now: datetime,
    ) -> Tuple[List[MatchReport], int]:
        reports: List[MatchReport] = []
        failures = 0
        for match in matches:
            try:
                reports.append(self.evaluate_match(match, now))
            except Exception:
                failures += 1
                logger.exception(f"Failed to evaluate match {match.market_id}")
        return reports, failures

    def evaluate_match(self, match: MatchSnapshot, now: datetime) -> MatchReport:
        score = self._aggregator.resolve_match(match)

        minute_text = normalize_minute_text(match.minute_text)
        minute_source = match.minute_source
        if not minute_text and match.match_odds.in_play:
            minute_text = minute_from_kickoff(match.match_odds.start_time, now)
            minute_source = MINUTE_SOURCE_KICKOFF

        return self._classify(match, score, minute_text, minute_source)

    def reclassify(
        self,
        report: MatchReport,
        match: MatchSnapshot,
        score: ResolvedScore,
        minute_text: str,
        minute_source: str,
    ) -> MatchReport:
        """Apply better score/minute data to a match already seen this tick."""
        if score.confidence.rank < report.score.confidence.rank:
            score = report.score
        updated = self._classify(match, score, minute_text, minute_source)
        logger.debug(
            f"Reclassified {report.key}: {report.highlight.value or '-'} -> "
            f"{updated.highlight.value or '-'}"
        )
        return updated

    def _classify(
        self,
        match: MatchSnapshot,
        score: ResolvedScore,
        minute_text: str,
        minute_source: str,
    ) -> MatchReport:
        market = match.match_odds
        key = MatchKey(match.market_id, match.event_id)
        finished = market.is_closed or is_finished_text(minute_text)

        # A tracked match keeps being classified through suspensions and half-time
        result: Optional[ClassificationResult] = None
        if market.in_play or finished or key in self._classifier.store:
            observation = build_observation(match, score, minute_text, finished)
            result = self._classifier.classify(observation)

        return MatchReport(
            key=key,
            home_team=match.home_team,
            away_team=match.away_team,
            league=match.league,
            start_time=market.start_time,
            market_status=market.status.value if market.status else None,
            in_play=market.in_play,
            finished=finished,
            minute_text=minute_text,
            minute_source=minute_source,
            score=score,
            highlight=result.highlight if result else Highlight.NONE,
            zero_zero_after_half_time=result.zero_zero_after_half_time if result else False,
            fired=result.fired if result else (),
        )

    # =========================================================================
    # Bets
    # =========================================================================

    def evaluate_bets(
        self,
        bets: Iterable[SimulatedBet],
        matches_by_market: Mapping[str, MatchSnapshot],
        now: Optional[datetime] = None,
    ) -> TickStats:
        """
        Refresh and settle bets in place.

        A bet whose market has no snapshot this tick is left untouched: no
        signal is not the same as "not in play".
        """
        now = now or self._clock()
        stats = TickStats()
        for bet in bets:
            match = matches_by_market.get(bet.market_id)
            if match is None:
                stats.missing += 1
                continue
            try:
                self._evaluate_bet(bet, match, now, stats)
                stats.processed += 1
            except Exception:
                stats.failures += 1
                logger.exception(f"Failed to update bet {bet.id}")

        if stats.settled or stats.failures:
            logger.info(
                f"Bets: {stats.processed} processed, {stats.settled} settled, "
                f"{stats.tracking_changes} timing changes, {stats.failures} failed"
            )
        return stats

    def _evaluate_bet(
        self,
        bet: SimulatedBet,
        match: MatchSnapshot,
        now: datetime,
        stats: TickStats,
    ) -> None:
        market = match.match_odds
        was_in_play = bet.in_play

        if market.status is not None:
            bet.market_status = market.status.value
        if market.start_time is not None:
            bet.market_start_time = market.start_time
        bet.in_play = market.in_play

        self._refresh_score(bet, self._aggregator.resolve_match(match))

        timing = self._duration.update(
            bet.timing, was_in_play, bet.in_play, bet.market_start_time, now
        )
        if timing != bet.timing:
            stats.tracking_changes += 1
            bet.timing = timing

        elapsed = self._duration.elapsed_seconds(bet.timing, bet.in_play, now)
        bet.match_clock = bet_match_clock(market.is_closed, bet.in_play, elapsed)

        if bet.is_settled:
            return
        if self._settlement.settle_from_market(bet, market, now) is not None:
            stats.settled += 1

    @staticmethod
    def _refresh_score(bet: SimulatedBet, score: ResolvedScore) -> None:
        if score.confidence is Confidence.EXACT:
            bet.home_score = score.home_goals
            bet.away_score = score.away_goals
        else:
            if bet.home_score is None and score.home_goals is not None:
                bet.home_score = score.home_goals
            if bet.away_score is None and score.away_goals is not None:
                bet.away_score = score.away_goals
        if score.label:
            bet.inferred_score = score.label

    def summarize(self, bets: Iterable[SimulatedBet]) -> LedgerSummary:
        """Balance and per-strategy results, starting from the configured balance."""
        return summarize(bets, self._start_balance)

    # =========================================================================
    # Full tick
    # =========================================================================

    async def run_tick(
        self,
        matches: Sequence[MatchSnapshot],
        bets: Iterable[SimulatedBet] = (),
        enricher: Optional["LiveDataEnricher"] = None,
        now: Optional[datetime] = None,
    ) -> TickResult:
        """Evaluate matches, enrich them if an enricher is given, then bets."""
        now = now or self._clock()
        reports, match_failures = self._evaluate_matches(matches, now)

        if enricher is not None:
            by_key: Dict[MatchKey, MatchSnapshot] = {
                MatchKey(m.market_id, m.event_id): m for m in matches
            }
            reports = await enricher.enrich(self, reports, by_key)

        by_market = {match.market_id: match for match in matches}
        stats = self.evaluate_bets(bets, by_market, now)
        return TickResult(reports=reports, stats=stats, match_failures=match_failures)
