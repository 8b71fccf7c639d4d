"""Rookery — chess rule enforcement and state persistence core."""

__version__ = "0.1.0"
