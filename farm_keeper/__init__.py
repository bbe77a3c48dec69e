"""Scheduled keeper for a leveraged yield-farm contract."""

__version__ = "0.1.0"
