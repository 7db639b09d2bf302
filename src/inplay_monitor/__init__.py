"""
In-Play Monitor.

State-inference and bookkeeping layer for live football markets on a betting
exchange. Upstream collaborators supply decoded market snapshots once per tick;
this package reconstructs what the exchange does not publish directly (the
current score, elapsed live time, a per-match highlight) and settles simulated
bets once a market closes with a known winner.
"""

__version__ = "0.1.0"
