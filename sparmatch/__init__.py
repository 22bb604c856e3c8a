"""Sparmatch event discovery and matching backend."""

__version__ = "0.1.0"
