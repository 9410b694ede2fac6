"""Deterministic weekly training plan engine."""

__version__ = "0.1.0"
