"""
Snapshot models for exchange market data.

These are the decoded, per-tick views of exchange markets that the rest of the
package consumes. Nothing here talks to the network: the market-data client
decodes its RPC responses and hands over either these objects directly or the
raw market-book dicts, which `MarketSnapshot.from_market_book` understands.

Missing data stays missing. An absent price, status or score decodes to None,
never to a zero or a default status.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from dateutil import parser as dateparser

CORRECT_SCORE_MARKET_TYPES = ("CORRECT_SCORE", "CORRECT_SCORE2", "ALT_CORRECT_SCORE")

_SCORE_HOME_KEYS = ("home", "homeScore", "homeGoals")
_SCORE_AWAY_KEYS = ("away", "awayScore", "awayGoals")
_SCORE_NESTED_KEYS = ("goals", "score", "value", "current", "fullTime")


class MarketStatus(str, Enum):
    """Exchange market status."""
    OPEN = "OPEN"
    SUSPENDED = "SUSPENDED"
    CLOSED = "CLOSED"
    INACTIVE = "INACTIVE"

    @classmethod
    def from_text(cls, value: Optional[str]) -> Optional["MarketStatus"]:
        """Decode a status string, returning None when it is blank or unknown."""
        if not value:
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an exchange timestamp into an aware UTC datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            parsed = dateparser.isoparse(text)
        except (ValueError, OverflowError):
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _first_price(levels: Any) -> Optional[Decimal]:
    if not isinstance(levels, list) or not levels:
        return None
    first = levels[0]
    if not isinstance(first, dict) or first.get("price") is None:
        return None
    try:
        return Decimal(str(first["price"]))
    except InvalidOperation:
        return None


def extract_score_value(node: Any, keys: Iterable[str]) -> Optional[int]:
    """
    Read a goal count from a loosely-shaped score node.

    Accepts ints, numeric strings, or nested objects carrying the value under
    one of goals/score/value/current/fullTime.
    """
    if not isinstance(node, dict):
        return None
    for key in keys:
        value = node.get(key)
        if value is None or isinstance(value, bool):
            continue
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                continue
        if isinstance(value, dict):
            nested = extract_score_value(value, _SCORE_NESTED_KEYS)
            if nested is not None:
                return nested
    return None


@dataclass(frozen=True)
class RunnerSnapshot:
    """
    One runner (selection) of a market at snapshot time.

    Attributes:
        selection_id: Exchange selection identifier
        name: Display name, e.g. "Over 1.5 Goals" or "2 - 1"
        best_back: Best available back price, if any
        best_lay: Best available lay price, if any
        is_winner: True once the exchange has flagged this runner WINNER
    """
    selection_id: int
    name: str = ""
    best_back: Optional[Decimal] = None
    best_lay: Optional[Decimal] = None
    is_winner: bool = False

    @property
    def best_price(self) -> Optional[Decimal]:
        """Shortest available price: min of back and lay, or whichever exists."""
        if self.best_back is None:
            return self.best_lay
        if self.best_lay is None:
            return self.best_back
        return min(self.best_back, self.best_lay)


@dataclass(frozen=True)
class MarketSnapshot:
    """A single market as observed on one polling tick."""
    market_id: str
    event_id: str = ""
    status: Optional[MarketStatus] = None
    in_play: bool = False
    start_time: Optional[datetime] = None
    runners: Tuple[RunnerSnapshot, ...] = ()
    market_type: str = ""
    market_name: str = ""
    event_name: str = ""
    home_score: Optional[int] = None
    away_score: Optional[int] = None

    @property
    def is_closed(self) -> bool:
        return self.status is MarketStatus.CLOSED

    @property
    def has_structured_score(self) -> bool:
        return self.home_score is not None and self.away_score is not None

    @property
    def is_correct_score(self) -> bool:
        return self.market_type.upper() in CORRECT_SCORE_MARKET_TYPES

    def winners(self) -> Tuple[RunnerSnapshot, ...]:
        return tuple(runner for runner in self.runners if runner.is_winner)

    @property
    def winner_selection_id(self) -> Optional[int]:
        """Selection id of the winner when exactly one runner is flagged."""
        winners = self.winners()
        if len(winners) != 1:
            return None
        return winners[0].selection_id

    def runner(self, selection_id: int) -> Optional[RunnerSnapshot]:
        for runner in self.runners:
            if runner.selection_id == selection_id:
                return runner
        return None

    @classmethod
    def from_market_book(
        cls,
        book: Dict[str, Any],
        catalogue: Optional[Dict[str, Any]] = None,
    ) -> "MarketSnapshot":
        """
        Build a snapshot from a decoded exchange market-book entry.

        Args:
            book: One element of a listMarketBook result
            catalogue: Optional matching listMarketCatalogue entry supplying
                names, event and market type

        Returns:
            MarketSnapshot with None for every field the book does not carry
        """
        catalogue = catalogue or {}
        definition = book.get("marketDefinition")
        if not isinstance(definition, dict):
            definition = {}

        status_text = definition.get("status") or book.get("status")
        status = MarketStatus.from_text(status_text)

        # Names can come from the book runners or the catalogue runners
        names: Dict[int, str] = {}
        for source in (catalogue.get("runners") or [], book.get("runners") or []):
            for runner in source:
                selection_id = runner.get("selectionId")
                name = runner.get("runnerName") or runner.get("name") or ""
                if selection_id is not None and name:
                    names[int(selection_id)] = name

        winner_source = definition.get("runners") or book.get("runners") or []
        winner_ids = {
            int(runner["selectionId"])
            for runner in winner_source
            if runner.get("selectionId") is not None
            and str(runner.get("status", "")).upper() == "WINNER"
        }

        runners = []
        for runner in book.get("runners") or []:
            if runner.get("selectionId") is None:
                continue
            selection_id = int(runner["selectionId"])
            exchange = runner.get("ex") or {}
            runners.append(
                RunnerSnapshot(
                    selection_id=selection_id,
                    name=names.get(selection_id, ""),
                    best_back=_first_price(exchange.get("availableToBack")),
                    best_lay=_first_price(exchange.get("availableToLay")),
                    is_winner=selection_id in winner_ids,
                )
            )

        score_node = definition.get("score")
        if not isinstance(score_node, dict):
            score_node = book.get("score")
        home_score = extract_score_value(score_node, _SCORE_HOME_KEYS)
        away_score = extract_score_value(score_node, _SCORE_AWAY_KEYS)

        event = catalogue.get("event") or {}
        description = catalogue.get("description") or {}
        start_time = parse_timestamp(
            catalogue.get("marketStartTime")
            or book.get("marketStartTime")
            or definition.get("marketTime")
        )

        return cls(
            market_id=str(book.get("marketId", "")),
            event_id=str(event.get("id") or definition.get("eventId") or ""),
            status=status,
            in_play=bool(book.get("inplay", definition.get("inPlay", False))),
            start_time=start_time,
            runners=tuple(runners),
            market_type=str(description.get("marketType") or definition.get("marketType") or ""),
            market_name=str(catalogue.get("marketName") or ""),
            event_name=str(event.get("name") or ""),
            home_score=home_score,
            away_score=away_score,
        )


@dataclass(frozen=True)
class MatchSnapshot:
    """
    Everything known about one football event on one tick.

    Attributes:
        match_odds: The primary match-odds market (home/draw/away)
        correct_score_markets: Correct-score markets of the same event
        goal_line_markets: Over/under goal-line markets of the same event
        minute_text: Live minute text from a feed ("67'", "HT", "FT"), if any
        minute_source: Where minute_text came from ("feed", "live-fallback")
    """
    match_odds: MarketSnapshot
    home_team: str = ""
    away_team: str = ""
    league: str = ""
    correct_score_markets: Tuple[MarketSnapshot, ...] = ()
    goal_line_markets: Tuple[MarketSnapshot, ...] = ()
    minute_text: Optional[str] = None
    minute_source: str = "feed"

    @property
    def market_id(self) -> str:
        return self.match_odds.market_id

    @property
    def event_id(self) -> str:
        return self.match_odds.event_id

    def match_odds_prices(self) -> Tuple[Optional[Decimal], Optional[Decimal], Optional[Decimal]]:
        """
        Best back prices for (home, draw, away).

        Runner order on the exchange is home, away, draw; the draw runner is
        recognised by name so a reordered book still maps correctly.
        """
        home = draw = away = None
        others = []
        for runner in self.match_odds.runners:
            if "draw" in runner.name.strip().lower():
                draw = runner.best_back
            else:
                others.append(runner)
        if others:
            home = others[0].best_back
        if len(others) > 1:
            away = others[1].best_back
        return home, draw, away
