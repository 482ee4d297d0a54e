"""Pickup football league manager."""

__version__ = "0.1.0"
