"""
Side-effect reports fired by the live classifier.

Two reports exist:

    sixty-minute snapshot  "2026-10-19 | Home vs Away | minute=61 | Home=4.2, Draw=1.9, Away=5.0"
    finished scoreless     "2026-10-19 | Home vs Away | score=0-0"

The day is the UTC date of kickoff (today if kickoff is unknown). Where the
lines end up is the sink's business; the default sink only logs them.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional, Protocol

from inplay_monitor.live.models import LiveObservation
from inplay_monitor.live.tracker_store import utc_now

logger = logging.getLogger(__name__)

SIXTY_MINUTE_REPORT = "live-odds-at-60"
FINISHED_SCORELESS_REPORT = "live-finished-0-0"


class ReportSink(Protocol):
    def write(self, report: str, day: date, line: str) -> None:
        ...


class LoggingReportSink:
    """Sink that writes report lines to the log."""

    def write(self, report: str, day: date, line: str) -> None:
        logger.info(f"[{report}-{day.isoformat()}] {line}")


def _odds(value: Optional[Decimal]) -> str:
    return "-" if value is None else str(value)


def report_day(observation: LiveObservation, now: datetime) -> date:
    if observation.start_time is not None:
        return observation.start_time.date()
    return now.date()


def sixty_minute_line(observation: LiveObservation, day: date) -> str:
    home, away = observation.home_team, observation.away_team
    return (
        f"{day.isoformat()} | {home} vs {away} | minute={observation.minute} | "
        f"{home}={_odds(observation.home_odds)}, Draw={_odds(observation.draw_odds)}, "
        f"{away}={_odds(observation.away_odds)}"
    )


def finished_scoreless_line(observation: LiveObservation, day: date) -> str:
    return f"{day.isoformat()} | {observation.home_team} vs {observation.away_team} | score=0-0"


class MatchReporter:
    """
    Formats classifier side effects and hands them to a sink.

    Usage:
        reporter = MatchReporter(LoggingReportSink())
        classifier = LiveMatchClassifier(
            on_sixty_minutes=reporter.sixty_minute_snapshot,
            on_finished_scoreless=reporter.finished_scoreless,
        )
    """

    def __init__(
        self,
        sink: Optional[ReportSink] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._sink = sink or LoggingReportSink()
        self._clock = clock or utc_now

    def sixty_minute_snapshot(self, observation: LiveObservation) -> None:
        day = report_day(observation, self._clock())
        self._sink.write(SIXTY_MINUTE_REPORT, day, sixty_minute_line(observation, day))

    def finished_scoreless(self, observation: LiveObservation) -> None:
        day = report_day(observation, self._clock())
        self._sink.write(FINISHED_SCORELESS_REPORT, day, finished_scoreless_line(observation, day))
