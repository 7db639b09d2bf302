"""
Match clock helpers.

When no live feed supplies a minute, the monitor estimates it from kickoff,
assuming a 15 minute half-time break. Bets get a display clock derived from
their accumulated in-play time instead.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

FULL_TIME_MINUTES = 90
HALF_LENGTH_MINUTES = 45
HALF_TIME_BREAK_MINUTES = 15

MINUTE_SOURCE_FEED = "feed"
MINUTE_SOURCE_KICKOFF = "kickoff-estimate"
MINUTE_SOURCE_FALLBACK = "live-fallback"


def minute_from_kickoff(kickoff: Optional[datetime], now: datetime) -> str:
    """
    Estimate the minute text from kickoff time.

    Returns:
        "1'" before or at kickoff, "n'" in the first half, "HT" during the
        assumed break, "n'" (46-90) afterwards, "Live" if kickoff is unknown
    """
    if kickoff is None:
        return "Live"
    elapsed = max(0, int((now - kickoff).total_seconds()) // 60)
    if elapsed <= 0:
        return "1'"
    if elapsed <= HALF_LENGTH_MINUTES:
        return f"{elapsed}'"
    if elapsed <= HALF_LENGTH_MINUTES + HALF_TIME_BREAK_MINUTES:
        return "HT"
    second_half = min(FULL_TIME_MINUTES, elapsed - HALF_TIME_BREAK_MINUTES)
    return f"{max(HALF_LENGTH_MINUTES + 1, second_half)}'"


def normalize_minute_text(minute: Optional[str], status: Optional[str] = None) -> str:
    """
    Normalise feed minute text, falling back to a status code.

    "67" -> "67'", status "HT" -> "HT", status FT/AET/PEN -> "Finished".
    """
    minute_text = (minute or "").strip()
    if minute_text.upper() in ("HT", "FT", "FINISHED"):
        return minute_text
    if minute_text:
        return minute_text if minute_text.endswith("'") else f"{minute_text}'"
    status_text = (status or "").strip().upper()
    if status_text == "HT":
        return "HT"
    if status_text in ("FT", "AET", "PEN"):
        return "Finished"
    return ""


def bet_match_clock(closed: bool, in_play: bool, elapsed_seconds: int) -> str:
    """
    Display clock for a bet from its accumulated in-play time.

    Args:
        closed: Market has closed
        in_play: Market is currently in play
        elapsed_seconds: Accumulated plus current in-play seconds
    """
    if closed:
        return "Finished"
    if not in_play:
        if elapsed_seconds > 0:
            paused_at = min(FULL_TIME_MINUTES, max(1, elapsed_seconds // 60))
            return f"Interrupted {paused_at}'"
        return "Not started"
    if elapsed_seconds <= 0:
        return "Live"
    minutes = max(1, elapsed_seconds // 60)
    if minutes >= FULL_TIME_MINUTES:
        return f"{FULL_TIME_MINUTES}'"
    return f"{minutes}'"
