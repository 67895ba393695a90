"""Expa analytics integration."""

__version__ = "0.1.0"
