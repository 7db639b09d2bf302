"""
Parsers for minute and score text.

Every parser returns either Parsed(value) or Unparseable(text). Callers decide
what an unparseable value means for them instead of receiving magic values
such as -1 or an empty string.

Minute text seen in practice:
    "67'"      -> 67
    "45+2'"    -> 47
    "HT"       -> 45
    "FT"       -> 90
    "Finished" -> 90
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Generic, Optional, Tuple, TypeVar, Union

T = TypeVar("T")

HALF_TIME_MINUTE = 45
FULL_TIME_MINUTE = 90

_FINISHED_TEXTS = {"FT", "FINISHED"}
_SCORE_IN_NAME = re.compile(r"(\d+)\s*[-:]\s*(\d+)")
_SCORE_EXACT = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")
_MINUTE_NOISE = re.compile(r"[^0-9+']")


@dataclass(frozen=True)
class Parsed(Generic[T]):
    value: T


@dataclass(frozen=True)
class Unparseable:
    text: str


ParseResult = Union[Parsed[T], Unparseable]


def parse_minute(text: Optional[str]) -> ParseResult[int]:
    """Parse live minute text into a whole minute."""
    raw = text or ""
    normalized = raw.strip().upper()
    if not normalized:
        return Unparseable(raw)
    if normalized == "HT":
        return Parsed(HALF_TIME_MINUTE)
    if normalized in _FINISHED_TEXTS:
        return Parsed(FULL_TIME_MINUTE)

    cleaned = _MINUTE_NOISE.sub("", normalized.replace("’", "'")).rstrip("'")
    if not cleaned:
        return Unparseable(raw)
    parts = cleaned.split("+")
    if len(parts) > 2 or not all(part.isdigit() for part in parts):
        return Unparseable(raw)
    return Parsed(sum(int(part) for part in parts))


def minute_or_zero(text: Optional[str]) -> int:
    """Minute for classification purposes; unparseable or blank text counts as 0."""
    result = parse_minute(text)
    return result.value if isinstance(result, Parsed) else 0


def is_finished_text(text: Optional[str]) -> bool:
    return (text or "").strip().upper() in _FINISHED_TEXTS


def parse_score(text: Optional[str]) -> ParseResult[Tuple[int, int]]:
    """Parse a bare "H-A" score such as "2-1" or "0 - 0"."""
    match = _SCORE_EXACT.match(text or "")
    if not match:
        return Unparseable(text or "")
    return Parsed((int(match.group(1)), int(match.group(2))))


def find_score_in_name(name: Optional[str]) -> ParseResult[Tuple[int, int]]:
    """
    Find an "H-A" or "H:A" pattern anywhere in a runner name.

    "2 - 1" and "Draw 1-1" both parse; "Any Other Home Win" does not.
    """
    match = _SCORE_IN_NAME.search(name or "")
    if not match:
        return Unparseable(name or "")
    return Parsed((int(match.group(1)), int(match.group(2))))
