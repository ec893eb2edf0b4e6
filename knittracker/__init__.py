"""Knitting Tracker: row counters and pattern charts for craft projects."""

__version__ = "0.1.0"
