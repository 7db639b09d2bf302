"""
In-play duration tracker.

The exchange only says whether a market is in play right now. Elapsed live
time has to be accumulated across the suspensions, half-time and the final
whistle that toggle that flag:

    enter in play   -> set an anchor
    stay in play    -> leave the anchor alone
    leave in play   -> add (now - anchor) to the total, clear the anchor

Polling lag: a match is often first seen in play a few minutes after it kicked
off. On the first entry, if the market start time is known and more than
`anchor_lag_seconds` in the past, the anchor is the start time rather than the
moment of detection. Later re-entries (after half-time or a suspension) always
anchor to now, otherwise the break would be counted as play.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from .models import InPlayTiming

logger = logging.getLogger(__name__)

DEFAULT_ANCHOR_LAG_SECONDS = 180


def seconds_between(start: Optional[datetime], end: datetime) -> int:
    """Whole seconds from start to end, never negative; 0 without a start."""
    if start is None:
        return 0
    return max(0, int((end - start).total_seconds()))


class InPlayDurationTracker:
    """
    Accumulates in-play seconds across in-play toggles.

    Usage:
        tracker = InPlayDurationTracker()
        timing = tracker.update(timing, was_in_play, is_in_play, start_time, now)
        elapsed = tracker.elapsed_seconds(timing, is_in_play, now)
    """

    def __init__(self, anchor_lag_seconds: int = DEFAULT_ANCHOR_LAG_SECONDS) -> None:
        self._anchor_lag = timedelta(seconds=anchor_lag_seconds)

    def update(
        self,
        timing: InPlayTiming,
        was_in_play: bool,
        is_in_play: bool,
        start_time: Optional[datetime],
        now: datetime,
    ) -> InPlayTiming:
        """
        Advance the timing by one observation.

        Args:
            timing: Current accumulated total and anchor
            was_in_play: In-play flag seen on the previous tick
            is_in_play: In-play flag seen now
            start_time: Market start time from the exchange, if known
            now: Observation time

        Returns:
            New InPlayTiming (the input is not modified)
        """
        if is_in_play:
            if was_in_play and timing.live_started_at is not None:
                return timing
            anchor = self.resolve_anchor(timing, start_time, now)
            return InPlayTiming(
                accumulated_in_play_seconds=timing.accumulated_in_play_seconds,
                live_started_at=anchor,
            )

        if was_in_play or timing.live_started_at is not None:
            added = seconds_between(timing.live_started_at, now)
            logger.debug(f"Left play after {added}s (total {timing.accumulated_in_play_seconds + added}s)")
            return InPlayTiming(
                accumulated_in_play_seconds=timing.accumulated_in_play_seconds + added,
                live_started_at=None,
            )
        return timing

    def resolve_anchor(
        self,
        timing: InPlayTiming,
        start_time: Optional[datetime],
        now: datetime,
    ) -> datetime:
        if timing.accumulated_in_play_seconds > 0 or start_time is None:
            return now
        if start_time > now or now - start_time <= self._anchor_lag:
            return now
        return start_time

    def elapsed_seconds(self, timing: InPlayTiming, is_in_play: bool, now: datetime) -> int:
        """Accumulated seconds, plus the current stretch while in play."""
        total = max(0, timing.accumulated_in_play_seconds)
        if not is_in_play:
            return total
        return total + seconds_between(timing.live_started_at, now)
