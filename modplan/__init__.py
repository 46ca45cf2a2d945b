"""Manifest validation and module selection planning."""

__version__ = "0.1.0"
