"""
Core Layer - Per-tick orchestration.

This module provides:
    - MonitorService: Scores, classifies and reports matches; refreshes and settles bets
    - MatchReport: One match's state after a tick
    - TickStats / TickResult: Counters for a tick
    - LiveDataEnricher: Bounded async fan-out to a secondary live-data source
    - LiveScore: Score/minute text from that source
    - MatchReporter / ReportSink / LoggingReportSink: Sixty-minute and
      finished-scoreless report lines

Data Flow:
    1. MatchSnapshot -> ScoreAggregator -> ResolvedScore
    2. ResolvedScore + minute -> LiveMatchClassifier -> MatchReport (+ reports)
    3. MatchReport (missing data) -> LiveDataEnricher -> reclassified MatchReport
    4. SimulatedBet + MatchSnapshot -> timing, clock, score, settlement
"""

from .reports import (
    FINISHED_SCORELESS_REPORT,
    SIXTY_MINUTE_REPORT,
    LoggingReportSink,
    MatchReporter,
    ReportSink,
    finished_scoreless_line,
    sixty_minute_line,
)
from .service import MatchReport, MonitorService, TickResult, TickStats, build_observation
from .enrichment import LiveDataEnricher, LiveFetcher, LiveScore

__all__ = [
    "FINISHED_SCORELESS_REPORT",
    "SIXTY_MINUTE_REPORT",
    "LoggingReportSink",
    "MatchReporter",
    "ReportSink",
    "finished_scoreless_line",
    "sixty_minute_line",
    "MatchReport",
    "MonitorService",
    "TickResult",
    "TickStats",
    "build_observation",
    "LiveDataEnricher",
    "LiveFetcher",
    "LiveScore",
]
