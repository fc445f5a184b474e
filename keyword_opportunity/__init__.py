"""Keyword opportunity analysis -- cluster keyword research data into prioritised content targets."""

__version__ = "1.0.0"
