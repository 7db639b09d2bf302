"""
Scoring Layer - Score inference from indirect market signals.

This module provides:
    - ResolvedScore: Best-available score with a confidence tag
    - Confidence: Exact / Inferred / Likely / Unknown
    - ScoreBounds: Per-side [min, max] goal range for one event
    - ScoreBoundsEngine: Tightens bounds from settled over/under goal lines
    - CorrectScoreResolver: Exact or likely score from correct-score markets
    - ScoreAggregator: Merges all sources in a fixed priority order
    - Parsed / Unparseable: Tagged results of the minute and score parsers

Data Flow:
    1. Goal-line markets -> GoalLineOutcome -> ScoreBoundsEngine -> ScoreBounds
    2. Correct-score markets -> CorrectScoreResolver -> ResolvedScore
    3. Match-odds score + (2) + (1) -> ScoreAggregator -> ResolvedScore
"""

from .models import Confidence, ResolvedScore, LIKELY_SUFFIX
from .parsing import (
    Parsed,
    Unparseable,
    find_score_in_name,
    is_finished_text,
    minute_or_zero,
    parse_minute,
    parse_score,
)
from .score_bounds import SCORE_CEILING, ScoreBounds, ScoreBoundsEngine, render_side
from .correct_score import CorrectScoreResolver
from .aggregator import ScoreAggregator, direct_score

__all__ = [
    "Confidence",
    "ResolvedScore",
    "LIKELY_SUFFIX",
    "Parsed",
    "Unparseable",
    "find_score_in_name",
    "is_finished_text",
    "minute_or_zero",
    "parse_minute",
    "parse_score",
    "SCORE_CEILING",
    "ScoreBounds",
    "ScoreBoundsEngine",
    "render_side",
    "CorrectScoreResolver",
    "ScoreAggregator",
    "direct_score",
]
