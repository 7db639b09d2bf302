"""
Live match classifier.

Tags each followed match with a highlight from minute and score alone:

    ORANGE  first goal came in the first hour. Once Orange, the hour-mark
            rules below no longer apply to that match.
    YELLOW  still 0-0 at minute 60 or later
    GREEN   was 0-0 at the hour mark, then a goal arrived
    RED     finished 0-0, whatever happened before

Two one-shot side effects hang off the same rules: a snapshot of the
match odds the first time a non-Orange match reaches minute 60, and a report
when a match finishes scoreless. Both go through GuardedAction, so replaying
the same tick any number of times fires each at most once.

A match counts as finished when its market is closed or the minute text is
FT/Finished.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .guarded import GuardedAction
from .models import (
    ClassificationResult,
    Highlight,
    LiveObservation,
    MatchTrackerState,
)
from .tracker_store import TrackerStore

logger = logging.getLogger(__name__)

EARLY_GOAL_MINUTE = 60
HOUR_MARK_MINUTE = 60
SECOND_HALF_MINUTE = 46

SideEffect = Callable[[LiveObservation], None]


def _sixty_minute_due(state: MatchTrackerState, observation: LiveObservation) -> bool:
    return state.highlight is not Highlight.ORANGE and observation.minute >= HOUR_MARK_MINUTE


def _finished_scoreless_due(state: MatchTrackerState, observation: LiveObservation) -> bool:
    return observation.finished and observation.total_goals == 0


class LiveMatchClassifier:
    """
    Per-match highlight state machine.

    Usage:
        classifier = LiveMatchClassifier(
            store=TrackerStore(),
            on_sixty_minutes=reporter.sixty_minute_snapshot,
            on_finished_scoreless=reporter.finished_scoreless,
        )
        result = classifier.classify(observation)
    """

    def __init__(
        self,
        store: Optional[TrackerStore] = None,
        on_sixty_minutes: Optional[SideEffect] = None,
        on_finished_scoreless: Optional[SideEffect] = None,
        retry_failed_side_effects: bool = False,
    ) -> None:
        """
        Initialize the classifier.

        Args:
            store: Tracker state per match (a default bounded store if omitted)
            on_sixty_minutes: Called once when a non-Orange match reaches minute 60
            on_finished_scoreless: Called once when a match finishes 0-0
            retry_failed_side_effects: Retry a failed side effect on the next
                tick instead of giving up (default: best-effort, no retry)
        """
        self._store = store or TrackerStore()
        self._sixty_minute_action = GuardedAction(
            name="sixty_minute_snapshot",
            guard="sixty_minute_snapshot_taken",
            precondition=_sixty_minute_due,
            effect=on_sixty_minutes,
            retry_on_failure=retry_failed_side_effects,
        )
        self._finished_scoreless_action = GuardedAction(
            name="finished_scoreless_snapshot",
            guard="finished_zero_zero_snapshot_taken",
            precondition=_finished_scoreless_due,
            effect=on_finished_scoreless,
            retry_on_failure=retry_failed_side_effects,
        )

    @property
    def store(self) -> TrackerStore:
        return self._store

    def classify(self, observation: LiveObservation) -> ClassificationResult:
        """Apply one tick's observation to the match's tracker."""
        with self._store.hold(observation.key) as state:
            fired = self._apply(state, observation)
            highlight = state.highlight

        if observation.finished:
            self._store.mark_finished(observation.key)

        zero_zero_after_half_time = (
            not observation.finished
            and observation.total_goals == 0
            and observation.minute >= SECOND_HALF_MINUTE
        )
        return ClassificationResult(
            key=observation.key,
            highlight=highlight,
            zero_zero_after_half_time=zero_zero_after_half_time,
            fired=tuple(fired),
        )

    def _apply(self, state: MatchTrackerState, observation: LiveObservation) -> List[str]:
        fired: List[str] = []
        total = observation.total_goals
        minute = observation.minute

        if state.first_goal_minute is None and total is not None and total > 0:
            state.first_goal_minute = max(1, minute)
        if state.first_goal_minute is not None and state.first_goal_minute <= EARLY_GOAL_MINUTE:
            if state.highlight is not Highlight.ORANGE:
                logger.info(f"Match {observation.key}: early goal at {state.first_goal_minute}'")
            state.highlight = Highlight.ORANGE

        if state.highlight is not Highlight.ORANGE:
            if self._sixty_minute_action.fire(state, observation):
                fired.append(self._sixty_minute_action.name)
            if minute >= HOUR_MARK_MINUTE and total == 0:
                state.zero_zero_at_60 = True
                state.highlight = Highlight.YELLOW
            if state.zero_zero_at_60 and total is not None and total > 0:
                if state.highlight is not Highlight.GREEN:
                    logger.info(f"Match {observation.key}: goal after a scoreless hour ({minute}')")
                state.highlight = Highlight.GREEN

        if observation.finished and total == 0:
            state.highlight = Highlight.RED
            if self._finished_scoreless_action.fire(state, observation):
                fired.append(self._finished_scoreless_action.name)

        return fired
