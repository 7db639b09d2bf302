"""
Bounded store of per-match tracker state.

Trackers live in process memory and used to accumulate forever. The store
caps them three ways:

    - an LRU limit on the number of tracked matches
    - an idle TTL: a match not seen for `idle_ttl_seconds` is dropped
    - a finished TTL: once a match is marked finished, the shorter
      `finished_ttl_seconds` replaces the idle TTL, so a match that has
      ended is dropped soon after ticks stop reporting it

The TTL sweep walks every entry, so `hold()` runs it at most once per
`sweep_interval_seconds` (normally the tick interval); the LRU cap is
enforced on every `hold()` by popping from the old end. `evict_expired()`
always sweeps.

Concurrency: the map itself is guarded by one lock, and every entry carries
its own lock. `hold(key)` takes the entry lock for the duration of a tick, so
two ticks for the same match serialise while different matches proceed in
parallel. Entries currently held are never evicted.
"""
from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator, Optional

from .models import MatchKey, MatchTrackerState

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _Entry:
    state: MatchTrackerState
    last_seen: datetime
    finished: bool = False
    holders: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock)


class TrackerStore:
    """
    Thread-safe, bounded map of MatchKey -> MatchTrackerState.

    Usage:
        store = TrackerStore(max_entries=5000, clock=utc_now)

        with store.hold(key) as state:
            state.highlight = Highlight.YELLOW

        store.mark_finished(key)
    """

    def __init__(
        self,
        max_entries: int = 5000,
        idle_ttl_seconds: float = 6 * 3600,
        finished_ttl_seconds: float = 30 * 60,
        clock: Optional[Clock] = None,
        sweep_interval_seconds: float = 30,
    ) -> None:
        if max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self._max_entries = max_entries
        self._idle_ttl = timedelta(seconds=idle_ttl_seconds)
        self._finished_ttl = timedelta(seconds=finished_ttl_seconds)
        self._clock = clock or utc_now
        self._sweep_interval = timedelta(seconds=sweep_interval_seconds)
        self._last_sweep: Optional[datetime] = None

        self._entries: "OrderedDict[MatchKey, _Entry]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: MatchKey) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: MatchKey) -> Optional[MatchTrackerState]:
        """Current state for a key without creating or touching it."""
        with self._lock:
            entry = self._entries.get(key)
            return entry.state if entry else None

    @contextmanager
    def hold(self, key: MatchKey) -> Iterator[MatchTrackerState]:
        """
        Get-or-create the tracker for `key` and hold its lock.

        The state is mutated in place; changes are visible to the next tick.
        """
        now = self._clock()
        with self._lock:
            self._evict(now, incoming=key)
            entry = self._entries.get(key)
            if entry is None:
                entry = _Entry(state=MatchTrackerState(), last_seen=now)
                self._entries[key] = entry
                logger.debug(f"Tracking new match {key}")
            else:
                entry.last_seen = now
            self._entries.move_to_end(key)
            entry.holders += 1

        try:
            with entry.lock:
                yield entry.state
        finally:
            with self._lock:
                entry.holders -= 1

    def mark_finished(self, key: MatchKey) -> None:
        """Switch a match to the finished TTL."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                entry.finished = True

    def evict_expired(self) -> int:
        """Drop expired and over-capacity entries. Returns the number evicted."""
        with self._lock:
            return self._evict(self._clock(), sweep=True)

    def _sweep_due(self, now: datetime) -> bool:
        return self._last_sweep is None or now - self._last_sweep >= self._sweep_interval

    def _evict(
        self,
        now: datetime,
        incoming: Optional[MatchKey] = None,
        sweep: bool = False,
    ) -> int:
        # Caller holds self._lock
        evicted = 0
        if sweep or self._sweep_due(now):
            self._last_sweep = now
            for key in list(self._entries):
                entry = self._entries[key]
                if entry.holders:
                    continue
                ttl = self._finished_ttl if entry.finished else self._idle_ttl
                if now - entry.last_seen > ttl:
                    del self._entries[key]
                    evicted += 1

        # Oldest first; held entries and the incoming key are skipped
        reserve = 1 if incoming is not None and incoming not in self._entries else 0
        while len(self._entries) + reserve > self._max_entries:
            victim = next(
                (k for k, e in self._entries.items() if k != incoming and not e.holders),
                None,
            )
            if victim is None:
                break
            del self._entries[victim]
            evicted += 1

        if evicted:
            logger.debug(f"Evicted {evicted} match trackers ({len(self._entries)} remaining)")
        return evicted
