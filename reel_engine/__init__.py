# reel_engine/__init__.py
"""Reel engine: reel state, spin-to-outcome animation and payline evaluation."""

__version__ = "0.3.0"
