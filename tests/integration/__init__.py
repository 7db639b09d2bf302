"""
Integration tests for the in-play monitor.

These tests run whole ticks across the snapshot, scoring, live and
execution layers, starting from raw market-book dicts. No network or
database is involved.

Run with:
    pytest tests/integration/ -v -m integration

Skip with:
    pytest -m "not integration"
"""
