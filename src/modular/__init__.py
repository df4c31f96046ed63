"""Modular - self-contained application modules discovered from configuration."""

__version__ = "0.1.0"
