"""
Supplementary live data for matches the exchange leaves blank.

Some live matches come through with no score signal at all, or with only a
kickoff-estimated minute. For those the enricher asks a secondary source
(injected as an async fetcher) and reclassifies the match with what it gets.

Limits per tick:
    - at most `max_per_tick` events are fetched; missing scores go first,
      estimated minutes second
    - at most `max_concurrency` fetches run at once (asyncio.Semaphore)
    - each event id is fetched once per tick, even if several markets share it

A fetch that raises, times out or returns nothing is missing signal: the
match keeps the data it already had.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence

from inplay_monitor.config import MonitorConfig
from inplay_monitor.live import MatchKey
from inplay_monitor.live.match_clock import MINUTE_SOURCE_FALLBACK, normalize_minute_text
from inplay_monitor.scoring import Parsed, ResolvedScore, parse_score
from inplay_monitor.snapshots import MatchSnapshot

if TYPE_CHECKING:
    from .service import MatchReport, MonitorService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiveScore:
    """What a secondary live source says about one event."""

    score_text: str = ""
    minute_text: str = ""


LiveFetcher = Callable[[MatchSnapshot], Awaitable[Optional[LiveScore]]]


class LiveDataEnricher:
    """
    Bounded, per-tick fan-out to a secondary live-data source.

    Usage:
        async def fetch(match: MatchSnapshot) -> Optional[LiveScore]:
            ...

        enricher = LiveDataEnricher(fetch, max_concurrency=4, max_per_tick=10)
        reports = await enricher.enrich(service, reports, matches_by_key)
    """

    def __init__(
        self,
        fetcher: LiveFetcher,
        max_concurrency: int = 4,
        max_per_tick: int = 10,
        timeout_seconds: Optional[float] = 10.0,
    ) -> None:
        if max_concurrency <= 0:
            raise ValueError(f"max_concurrency must be positive, got {max_concurrency}")
        self._fetcher = fetcher
        self._max_concurrency = max_concurrency
        self._max_per_tick = max(0, max_per_tick)
        self._timeout = timeout_seconds

    @classmethod
    def from_config(cls, fetcher: LiveFetcher, config: MonitorConfig) -> "LiveDataEnricher":
        return cls(
            fetcher,
            max_concurrency=config.live_fetch_max_concurrency,
            max_per_tick=config.live_fetch_max_per_tick,
        )

    def select_candidates(self, reports: Sequence["MatchReport"]) -> List["MatchReport"]:
        """Live, unfinished matches needing data, one per event, capped."""
        missing_score: List["MatchReport"] = []
        estimated_minute: List["MatchReport"] = []
        for report in reports:
            if not report.in_play or report.finished:
                continue
            if report.needs_score:
                missing_score.append(report)
            elif report.minute_estimated:
                estimated_minute.append(report)

        selected: List["MatchReport"] = []
        seen_events = set()
        for report in missing_score + estimated_minute:
            if len(seen_events) >= self._max_per_tick:
                break
            event_id = report.key.event_id
            if event_id in seen_events:
                continue
            seen_events.add(event_id)
            selected.append(report)
        return selected

    async def fetch_all(self, matches: Sequence[MatchSnapshot]) -> Dict[str, Optional[LiveScore]]:
        """Fetch each distinct event once; failures map to None."""
        unique: Dict[str, MatchSnapshot] = {}
        for match in matches:
            unique.setdefault(match.event_id, match)
        if not unique:
            return {}

        sem = asyncio.Semaphore(self._max_concurrency)
        event_ids = list(unique)
        results = await asyncio.gather(
            *[self._fetch_one(unique[event_id], sem) for event_id in event_ids],
            return_exceptions=True,
        )

        fetched: Dict[str, Optional[LiveScore]] = {}
        errors = 0
        for event_id, result in zip(event_ids, results):
            if isinstance(result, BaseException):
                errors += 1
                logger.warning(f"Live data fetch failed for event {event_id}: {result!r}")
                fetched[event_id] = None
            else:
                fetched[event_id] = result
        if errors:
            logger.warning(f"{errors}/{len(event_ids)} live data fetches failed this tick")
        return fetched

    async def _fetch_one(self, match: MatchSnapshot, sem: asyncio.Semaphore) -> Optional[LiveScore]:
        async with sem:
            if self._timeout is None:
                return await self._fetcher(match)
            return await asyncio.wait_for(self._fetcher(match), timeout=self._timeout)

    async def enrich(
        self,
        service: "MonitorService",
        reports: Sequence["MatchReport"],
        matches_by_key: Mapping[MatchKey, MatchSnapshot],
    ) -> List["MatchReport"]:
        """
        Fetch live data for candidate matches and reclassify them.

        Returns:
            The reports in their original order, enriched where data arrived
        """
        candidates = [
            report for report in self.select_candidates(reports)
            if report.key in matches_by_key
        ]
        if not candidates:
            return list(reports)

        candidate_events = {report.key.event_id for report in candidates}
        fetched = await self.fetch_all([matches_by_key[report.key] for report in candidates])

        enriched: List["MatchReport"] = []
        updated = 0
        for report in reports:
            live = fetched.get(report.key.event_id) if report.key.event_id in candidate_events else None
            match = matches_by_key.get(report.key)
            if live is None or match is None:
                enriched.append(report)
                continue
            try:
                new_report = self._apply(service, report, match, live)
            except Exception:
                logger.exception(f"Failed to apply live data to match {report.key}")
                new_report = report
            if new_report is not report:
                updated += 1
            enriched.append(new_report)

        logger.debug(f"Live data: {len(fetched)} events fetched, {updated} matches updated")
        return enriched

    def _apply(
        self,
        service: "MonitorService",
        report: "MatchReport",
        match: MatchSnapshot,
        live: LiveScore,
    ) -> "MatchReport":
        score = report.score
        if report.needs_score:
            parsed = parse_score(live.score_text)
            if isinstance(parsed, Parsed):
                score = ResolvedScore.exact(*parsed.value)

        minute_text = report.minute_text
        minute_source = report.minute_source
        live_minute = normalize_minute_text(live.minute_text)
        if live_minute and (report.minute_estimated or not minute_text):
            minute_text = live_minute
            minute_source = MINUTE_SOURCE_FALLBACK

        if score is report.score and minute_text == report.minute_text:
            return report
        return service.reclassify(report, match, score, minute_text, minute_source)
