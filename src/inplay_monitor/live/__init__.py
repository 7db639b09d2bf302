"""
Live Layer - Per-match classification across ticks.

This module provides:
    - LiveMatchClassifier: Highlight state machine with one-shot side effects
    - LiveObservation: One tick's view of one match (minute, score, finished)
    - ClassificationResult: Highlight plus which side effects fired
    - MatchTrackerState: Per-match memory (first goal minute, flags, highlight)
    - Highlight: None / Orange / Yellow / Green / Red
    - MatchKey: (market id, event id)
    - TrackerStore: Bounded LRU/TTL store of tracker state with per-key locking
    - GuardedAction: Precondition + guard flag + effect + failure policy
    - minute_from_kickoff / bet_match_clock: Clock estimation helpers
"""

from .models import (
    ClassificationResult,
    Highlight,
    LiveObservation,
    MatchKey,
    MatchTrackerState,
)
from .guarded import GuardedAction
from .tracker_store import TrackerStore, utc_now
from .classifier import LiveMatchClassifier
from .match_clock import (
    MINUTE_SOURCE_FALLBACK,
    MINUTE_SOURCE_FEED,
    MINUTE_SOURCE_KICKOFF,
    bet_match_clock,
    minute_from_kickoff,
    normalize_minute_text,
)

__all__ = [
    "ClassificationResult",
    "Highlight",
    "LiveObservation",
    "MatchKey",
    "MatchTrackerState",
    "GuardedAction",
    "TrackerStore",
    "utc_now",
    "LiveMatchClassifier",
    "MINUTE_SOURCE_FALLBACK",
    "MINUTE_SOURCE_FEED",
    "MINUTE_SOURCE_KICKOFF",
    "bet_match_clock",
    "minute_from_kickoff",
    "normalize_minute_text",
]
