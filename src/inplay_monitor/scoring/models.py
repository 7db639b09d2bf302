"""
Score result models shared by the resolver, the bounds engine and the aggregator.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

LIKELY_SUFFIX = " (likely)"


class Confidence(str, Enum):
    """How a score was obtained, strongest first."""
    EXACT = "exact"
    INFERRED = "inferred"
    LIKELY = "likely"
    UNKNOWN = "unknown"

    @property
    def rank(self) -> int:
        """Higher is stronger."""
        return _RANKS[self]


_RANKS = {
    Confidence.EXACT: 3,
    Confidence.INFERRED: 2,
    Confidence.LIKELY: 1,
    Confidence.UNKNOWN: 0,
}


@dataclass(frozen=True)
class ResolvedScore:
    """
    Best-available score for an event.

    Either goal count may be None when that side is not known. The label is
    always safe to display: "2-1", "2-1 (likely)", "1-≥2", or a raw runner
    name that could not be parsed.
    """
    home_goals: Optional[int] = None
    away_goals: Optional[int] = None
    label: str = ""
    confidence: Confidence = Confidence.UNKNOWN

    @classmethod
    def unknown(cls, label: str = "") -> "ResolvedScore":
        return cls(label=label)

    @classmethod
    def exact(cls, home_goals: int, away_goals: int) -> "ResolvedScore":
        return cls(home_goals, away_goals, f"{home_goals}-{away_goals}", Confidence.EXACT)

    @property
    def is_complete(self) -> bool:
        return self.home_goals is not None and self.away_goals is not None

    @property
    def total_goals(self) -> Optional[int]:
        if not self.is_complete:
            return None
        return self.home_goals + self.away_goals

    @property
    def score_text(self) -> Optional[str]:
        """Plain "H-A" when both sides are known, else None."""
        if not self.is_complete:
            return None
        return f"{self.home_goals}-{self.away_goals}"
