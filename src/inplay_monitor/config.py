"""
Monitor configuration.

Environment Variables:
    LOG_LEVEL                       Logging level (DEBUG/INFO/WARNING/ERROR)
    TICK_INTERVAL_SECONDS           Tick interval; tracker TTL sweep period (default: 30)
    ANCHOR_LAG_SECONDS              Kickoff lag before anchoring to start time (default: 180)
    TRACKER_MAX_ENTRIES             Max live trackers kept in memory (default: 5000)
    TRACKER_IDLE_TTL_SECONDS        Evict trackers unseen for this long (default: 21600)
    TRACKER_FINISHED_TTL_SECONDS    Evict finished matches after this long (default: 1800)
    LIVE_FETCH_MAX_CONCURRENCY      Parallel live-data fetches per tick (default: 4)
    LIVE_FETCH_MAX_PER_TICK         Max live-data fetches per tick (default: 10)
    START_BALANCE                   Simulated starting balance (default: 1000)
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from decimal import Decimal

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the monitor process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


@dataclass
class MonitorConfig:
    """Complete monitor configuration."""

    log_level: str = "INFO"

    # Ticks are triggered externally; also the tracker TTL sweep interval
    tick_interval_seconds: float = 30

    # In-play duration tracking
    anchor_lag_seconds: int = 180

    # Live tracker cache (bounded, replaces an ever-growing map)
    tracker_max_entries: int = 5000
    tracker_idle_ttl_seconds: float = 6 * 3600
    tracker_finished_ttl_seconds: float = 30 * 60

    # Supplementary live-data fan-out
    live_fetch_max_concurrency: int = 4
    live_fetch_max_per_tick: int = 10

    # Ledger
    start_balance: Decimal = Decimal("1000")

    @classmethod
    def from_env(cls) -> "MonitorConfig":
        """Load configuration from environment variables."""
        return cls(
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            tick_interval_seconds=float(os.environ.get("TICK_INTERVAL_SECONDS", "30")),
            anchor_lag_seconds=int(os.environ.get("ANCHOR_LAG_SECONDS", "180")),
            tracker_max_entries=int(os.environ.get("TRACKER_MAX_ENTRIES", "5000")),
            tracker_idle_ttl_seconds=float(os.environ.get("TRACKER_IDLE_TTL_SECONDS", "21600")),
            tracker_finished_ttl_seconds=float(
                os.environ.get("TRACKER_FINISHED_TTL_SECONDS", "1800")
            ),
            live_fetch_max_concurrency=int(os.environ.get("LIVE_FETCH_MAX_CONCURRENCY", "4")),
            live_fetch_max_per_tick=int(os.environ.get("LIVE_FETCH_MAX_PER_TICK", "10")),
            start_balance=Decimal(os.environ.get("START_BALANCE", "1000")),
        )
