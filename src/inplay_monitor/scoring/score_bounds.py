"""
Score bounds deduction from settled over/under goal lines.

The exchange closes team goal-line markets as soon as they are decided, which
leaks information about the score long before any score feed does:

    Home Over 1.5 settled Over   -> home scored at least 2
    Home Over 2.5 settled Under  -> home scored at most 2
    together                     -> home scored exactly 2

Each side starts at [0, SCORE_CEILING]. The ceiling stands in for "unbounded";
no realistic football score reaches it, so a side still spanning the whole
range renders as "?".

Bounds only ever tighten. Upstream data can disagree with itself (a late
resettlement, a mislabelled runner); when a closed outcome would push
min above max the bound is clamped to the opposite limit, the result is
flagged inconsistent and a warning is logged. The tick carries on.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional

from inplay_monitor.snapshots.goal_lines import GoalLineOutcome

from .models import Confidence, ResolvedScore

logger = logging.getLogger(__name__)

SCORE_CEILING = 12


@dataclass(frozen=True)
class ScoreBounds:
    """Goal range per side for one event. Invariant: 0 <= min <= max <= ceiling."""

    home_min: int = 0
    home_max: int = SCORE_CEILING
    away_min: int = 0
    away_max: int = SCORE_CEILING
    inconsistent: bool = False

    def __post_init__(self):
        for low, high in ((self.home_min, self.home_max), (self.away_min, self.away_max)):
            if not (0 <= low <= high):
                raise ValueError(f"Invalid bounds: min={low} max={high}")

    @property
    def home_exact(self) -> Optional[int]:
        return self.home_min if self.home_min == self.home_max else None

    @property
    def away_exact(self) -> Optional[int]:
        return self.away_min if self.away_min == self.away_max else None

    @property
    def is_unbounded(self) -> bool:
        return self == ScoreBounds()

    @property
    def label(self) -> str:
        """Render as "<home>-<away>", e.g. "2-1", "≥1-0", "?-≤2"."""
        return f"{render_side(self.home_min, self.home_max)}-{render_side(self.away_min, self.away_max)}"

    def to_resolved(self) -> ResolvedScore:
        """
        Convert to a ResolvedScore.

        Inferred only when both sides have collapsed to a single value;
        otherwise the known side (if any) is kept and confidence is Unknown.
        """
        home, away = self.home_exact, self.away_exact
        confidence = (
            Confidence.INFERRED if home is not None and away is not None else Confidence.UNKNOWN
        )
        return ResolvedScore(home, away, self.label, confidence)


def render_side(low: int, high: int, ceiling: int = SCORE_CEILING) -> str:
    if low == high:
        return str(low)
    if low <= 0 and high >= ceiling:
        return "?"
    if low <= 0:
        return f"≤{high}"
    if high >= ceiling:
        return f"≥{low}"
    return f"{low}-{high}"


class ScoreBoundsEngine:
    """
    Narrows per-side goal ranges using closed goal-line outcomes.

    Usage:
        engine = ScoreBoundsEngine()
        bounds = engine.apply(ScoreBounds(), outcome)

        # Or per event, for a whole batch of outcomes
        by_event = engine.bounds_by_event(outcomes)
    """

    def apply(self, bounds: ScoreBounds, outcome: GoalLineOutcome) -> ScoreBounds:
        """
        Apply one outcome to the bounds.

        Open or undecided outcomes carry no information and leave the bounds
        unchanged.
        """
        if not outcome.closed or outcome.winner_is_over is None:
            return bounds

        floor = math.floor(outcome.line)
        if outcome.home_side:
            low, high = bounds.home_min, bounds.home_max
        else:
            low, high = bounds.away_min, bounds.away_max

        conflict = False
        if outcome.winner_is_over:
            # Lines past the ceiling saturate at it
            wanted = max(low, min(floor + 1, SCORE_CEILING))
            if wanted > high:
                conflict = True
                wanted = high
            low = wanted
        else:
            wanted = min(high, floor)
            if wanted < low:
                conflict = True
                wanted = low
            high = wanted

        if conflict:
            side = "home" if outcome.home_side else "away"
            verdict = "over" if outcome.winner_is_over else "under"
            logger.warning(
                f"Conflicting goal line for event {outcome.event_id}: "
                f"{side} {verdict} {outcome.line} contradicts bounds {bounds.label}, clamping"
            )

        if outcome.home_side:
            return replace(bounds, home_min=low, home_max=high,
                           inconsistent=bounds.inconsistent or conflict)
        return replace(bounds, away_min=low, away_max=high,
                       inconsistent=bounds.inconsistent or conflict)

    def apply_all(
        self,
        outcomes: Iterable[GoalLineOutcome],
        bounds: Optional[ScoreBounds] = None,
    ) -> ScoreBounds:
        result = bounds or ScoreBounds()
        for outcome in outcomes:
            result = self.apply(result, outcome)
        return result

    def bounds_by_event(self, outcomes: Iterable[GoalLineOutcome]) -> Dict[str, ScoreBounds]:
        """
        Group outcomes by event and fold each group into bounds.

        Events whose outcomes are all open still get an entry (unbounded);
        callers can check `is_unbounded`.
        """
        by_event: Dict[str, ScoreBounds] = {}
        for outcome in outcomes:
            current = by_event.get(outcome.event_id, ScoreBounds())
            by_event[outcome.event_id] = self.apply(current, outcome)
        return by_event
